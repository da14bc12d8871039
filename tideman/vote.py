'''Ballot specifications and ballot validators.

A ballot is a complete ranking of all candidates of the election, given as
a tuple of candidate indices (most preferred first). Ballots that rank only
some of the candidates or put several candidates on a shared rank are not
supported.

The tabulation machinery relies on every ballot being a permutation of the
candidate indices and checks this before touching any counts. If a ballot
is invalid, a subclass of :class:`VoteError` is raised (or
:class:`tideman.candidate.CandidateError` if the ballot was given by
candidate names and one of them is unknown).
'''

import abc
from typing import Any, Iterable, Optional, Sequence, Tuple
from numbers import Number

from tideman.candidate import CandidateRoster


BallotType = Tuple[int, ...]


class VoteError(Exception, metaclass=abc.ABCMeta):
    '''A ballot is invalid given the election rules.'''
    pass


class BallotLengthError(VoteError):
    '''A ballot does not rank exactly all the candidates.

    :param length: Number of ranks found on the ballot.
    :param expected: Number of candidates in the election.
    '''
    def __init__(self, length: int, expected: int):
        self.length = length
        self.expected = expected
        super().__init__(
            f'invalid ballot length: {length}, must be {expected}'
        )


class BallotValueError(VoteError):
    '''A ballot contains an invalid or repeated candidate.

    :param value: The offending ballot item.
    :param rank: Zero-based rank position at which it was found.
    :param reason: What is wrong with it.
    '''
    def __init__(self, value: Any, rank: int, reason: str):
        self.value = value
        self.rank = rank
        self.reason = reason
        super().__init__(
            f'invalid ballot item {value!r} at rank {rank + 1}: {reason}'
        )


class VoteMagnitudeError(VoteError):
    '''A ballot weight (number of identical votes) is invalid.

    :param value: The weight found to be invalid.
    :param min_value: Minimum value permissible in the context.
    '''
    def __init__(self, value: Any, min_value: Optional[Number] = 1):
        self.value = value
        self.min_value = min_value
        message = f'invalid vote count: {value!r}'
        if min_value is not None:
            message += f', must be an integer >={min_value}'
        super().__init__(message)


def check_vote_count(n_votes: Any) -> None:
    '''Check that the number of identical ballots is a positive integer.

    :raises VoteMagnitudeError: If it is not.
    '''
    if isinstance(n_votes, bool) or not isinstance(n_votes, int):
        raise VoteMagnitudeError(n_votes)
    if n_votes < 1:
        raise VoteMagnitudeError(n_votes)


class RankedBallotValidator:
    '''Validate a complete ranked ballot.

    The ballot must be a sequence of integer candidate indices containing
    every index from ``0`` to ``n_candidates - 1`` exactly once.

    :param n_candidates: Number of candidates in the election.
    '''
    def __init__(self, n_candidates: int):
        self.n_candidates = n_candidates

    def validate(self, ballot: Sequence[int]) -> None:
        '''Check if the ballot is a permutation of the candidate indices.

        :param ballot: Ballot to be checked.
        :raises BallotLengthError: If the ballot does not rank exactly
            as many candidates as there are in the election.
        :raises BallotValueError: If any item is not a valid candidate index
            or if any candidate is ranked more than once.
        '''
        if len(ballot) != self.n_candidates:
            raise BallotLengthError(len(ballot), self.n_candidates)
        seen = [False] * self.n_candidates
        for rank, item in enumerate(ballot):
            if isinstance(item, bool) or not isinstance(item, int):
                raise BallotValueError(item, rank, 'not a candidate index')
            if not 0 <= item < self.n_candidates:
                raise BallotValueError(item, rank, 'no such candidate')
            if seen[item]:
                raise BallotValueError(item, rank, 'candidate ranked twice')
            seen[item] = True

    def is_valid(self, ballot: Sequence[int]) -> bool:
        '''Return True if the ballot is valid, False otherwise.'''
        try:
            self.validate(ballot)
        except VoteError:
            return False
        return True


class NamedBallotParser:
    '''Turn ballots given by candidate names into validated index ballots.

    :param roster: Candidates of the election.
    '''
    def __init__(self, roster: CandidateRoster):
        self.roster = roster
        self.validator = RankedBallotValidator(len(roster))

    def parse(self, names: Iterable[str]) -> BallotType:
        '''Convert a ranking of candidate names to a ballot.

        :param names: Candidate names, most preferred first.
        :raises CandidateError: If any name is not a candidate.
        :raises VoteError: If the resulting ballot is not a complete ranking.
        '''
        ballot = tuple(self.roster.indices(names))
        self.validator.validate(ballot)
        return ballot

'''Pairwise preference counting.

The preference matrix is the basic aggregate of ranked ballots used by
Condorcet methods: for each ordered pair of candidates, it holds the number
of ballots ranking the first candidate above the second.
'''

import logging
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Union

import tideman.vote
from tideman.vote import BallotType


logger = logging.getLogger(__name__)


class PreferenceMatrix:
    '''Counts of pairwise preferences between candidates.

    ``matrix.count(i, j)`` is the number of ballots recorded so far that rank
    candidate ``i`` above candidate ``j``. The counts are only ever
    incremented; the diagonal stays zero.

    :param n_candidates: Number of candidates in the election.
    '''
    def __init__(self, n_candidates: int):
        self._counts = [[0] * n_candidates for i in range(n_candidates)]
        self._n_ballots = 0
        self.validator = tideman.vote.RankedBallotValidator(n_candidates)

    @property
    def n_candidates(self) -> int:
        return len(self._counts)

    @property
    def n_ballots(self) -> int:
        '''Total number of ballots recorded, counting weights.'''
        return self._n_ballots

    def count(self, preferred: int, opponent: int) -> int:
        return self._counts[preferred][opponent]

    def record(self, ballot: Sequence[int], n_votes: int = 1) -> None:
        '''Add a single ballot to the pairwise preference counts.

        Each candidate on the ballot is counted as preferred to every
        candidate ranked below it.

        :param ballot: A complete ranking of candidate indices, most
            preferred first.
        :param n_votes: Number of identical ballots to record.
        :raises VoteError: If the ballot is not a permutation of the
            candidate indices or the number of votes is not a positive
            integer. The counts are left untouched in that case.
        '''
        self._check(ballot, n_votes)
        self._add(ballot, n_votes)

    def record_all(self,
                   ballots: Union[
                       Iterable[Sequence[int]],
                       Mapping[BallotType, int],
                   ],
                   ) -> None:
        '''Record many ballots in iteration order.

        All ballots are checked before any of them is counted, so an invalid
        ballot anywhere in the batch leaves the counts untouched.

        :param ballots: Either an iterable of ballots or a mapping of
            ballots to the number of voters who cast them.
        :raises VoteError: If any ballot or number of votes is invalid.
        '''
        if hasattr(ballots, 'items'):
            batch = list(ballots.items())
        else:
            batch = [(ballot, 1) for ballot in ballots]
        for ballot, n_votes in batch:
            self._check(ballot, n_votes)
        for ballot, n_votes in batch:
            self._add(ballot, n_votes)
        logger.debug('preferences after %d ballots: %s',
                     self._n_ballots, self._counts)

    def _check(self, ballot: Sequence[int], n_votes: int) -> None:
        self.validator.validate(ballot)
        tideman.vote.check_vote_count(n_votes)

    def _add(self, ballot: Sequence[int], n_votes: int) -> None:
        for i, preferred in enumerate(ballot):
            row = self._counts[preferred]
            for opponent in ballot[i+1:]:
                row[opponent] += n_votes
        self._n_ballots += n_votes

    def merge(self, other: 'PreferenceMatrix') -> None:
        '''Add the counts of another matrix to this one elementwise.

        Use this to combine partial matrices accumulated from disjoint
        subsets of ballots.

        :raises ValueError: If the matrices are not of the same size.
        '''
        if other.n_candidates != self.n_candidates:
            raise ValueError(
                f'cannot merge preference matrices for {other.n_candidates}'
                f' and {self.n_candidates} candidates'
            )
        for row, other_row in zip(self._counts, other._counts):
            for j, count in enumerate(other_row):
                row[j] += count
        self._n_ballots += other._n_ballots

    def is_consistent(self) -> bool:
        '''Check that no pair was counted more often than there are ballots.

        Also checks that the diagonal is empty.
        '''
        for i, row in enumerate(self._counts):
            if row[i] != 0:
                return False
            for j in range(i + 1, self.n_candidates):
                if row[j] + self._counts[j][i] > self._n_ballots:
                    return False
        return True

    def rows(self) -> List[List[int]]:
        '''Return a copy of the counts as a list of rows.'''
        return [row[:] for row in self._counts]

    def to_dict(self) -> Dict[str, Any]:
        return {'n_ballots': self._n_ballots, 'counts': self.rows()}

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, PreferenceMatrix)
            and self._n_ballots == other._n_ballots
            and self._counts == other._counts
        )

    def __repr__(self) -> str:
        return (
            f'<PreferenceMatrix({self._counts},'
            f' n_ballots={self._n_ballots})>'
        )


def from_ballots(n_candidates: int,
                 ballots: Union[
                     Iterable[Sequence[int]],
                     Mapping[BallotType, int],
                 ],
                 ) -> PreferenceMatrix:
    '''Build a preference matrix from a batch of ballots.'''
    matrix = PreferenceMatrix(n_candidates)
    matrix.record_all(ballots)
    return matrix

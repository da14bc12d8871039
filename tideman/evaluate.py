'''Evaluate Tideman (ranked pairs) elections.

The whole tabulation for one election is owned by an :class:`Election`
object: ballots are recorded into its preference matrix, and once all of
them are in, :meth:`Election.tabulate` extracts the majority pairs, ranks
them by strength, locks them into the graph while skipping those that would
create a cycle, and resolves the winner from the final graph.

The :class:`Tideman` evaluator wraps this for a batch of ballots, creating
a fresh election for every evaluation.

The winner is the source of the locked graph. If no single source exists
(no candidates at all, or several candidates left unbeaten because some of
their pairs were tied), the result reports no winner - ``winner`` is
``None`` - rather than picking one.
'''

import logging
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, \
                   Sequence, Union

import tideman.pairs
import tideman.vote
from tideman.candidate import CandidateRoster, MAX_CANDIDATES
from tideman.lock import LockGraph, VotingSystemError
from tideman.pairs import Pair
from tideman.preference import PreferenceMatrix
from tideman.vote import BallotType


logger = logging.getLogger(__name__)


def resolve_winner(graph: LockGraph, strict: bool = True) -> Optional[int]:
    '''Find the winner as the candidate nobody is locked in over.

    :param graph: The final graph of locked pairs.
    :param strict: If True, only return a winner if it is the single such
        candidate. If False, return the first one in index order.
    :returns: The winning candidate index, or None if there is no winner.
    '''
    sources = graph.sources()
    if not sources:
        return None
    elif strict and len(sources) > 1:
        logger.info('no single winner, unbeaten candidates: %s', sources)
        return None
    else:
        return sources[0]


class ElectionResult:
    '''The outcome of a ranked pairs election with its intermediate state.

    :param candidates: Candidates of the election.
    :param matrix: The pairwise preference counts.
    :param ranked_pairs: Majority pairs in the order they were locked.
    :param locked: Pairs locked into the graph.
    :param rejected: Pairs skipped because they would create a cycle.
    :param graph: The final graph of locked pairs.
    :param winner: Index of the winning candidate, None if there is none.
    '''
    def __init__(self,
                 candidates: CandidateRoster,
                 matrix: PreferenceMatrix,
                 ranked_pairs: List[Pair],
                 locked: List[Pair],
                 rejected: List[Pair],
                 graph: LockGraph,
                 winner: Optional[int],
                 ):
        self.candidates = candidates
        self.matrix = matrix
        self.ranked_pairs = ranked_pairs
        self.locked = locked
        self.rejected = rejected
        self.graph = graph
        self.winner = winner

    @property
    def has_winner(self) -> bool:
        return self.winner is not None

    @property
    def winner_name(self) -> Optional[str]:
        if self.winner is None:
            return None
        return self.candidates.name(self.winner)

    def sources(self) -> List[int]:
        return self.graph.sources()

    def ranking(self) -> List[str]:
        '''Names of all candidates ranked by the locked graph.'''
        return [
            self.candidates.name(i)
            for i in self.graph.topological_ranking()
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'candidates': list(self.candidates.names),
            'preferences': self.matrix.to_dict(),
            'ranked_pairs': [list(pair) for pair in self.ranked_pairs],
            'locked': [list(pair) for pair in self.locked],
            'rejected': [list(pair) for pair in self.rejected],
            'winner': self.winner_name,
        }

    def __repr__(self) -> str:
        return f'<ElectionResult(winner={self.winner_name!r})>'


class Election:
    '''A single ranked pairs election run.

    Holds the candidate roster, the preference matrix and the lock graph
    of exactly one election. Ballots can be recorded until the election is
    tabulated; after that, the election is closed.

    :param candidates: Candidate names in index order, or a roster.
    :param strength: A pair strength scorer or its name from
        :mod:`tideman.component.strength`.
    :param strict: Whether to report no winner when more than one candidate
        remains unbeaten in the locked graph, instead of choosing the first.
    :param max_candidates: Maximum number of candidates allowed (ignored if
        a roster is given).
    :raises CandidateError: If the candidate names are invalid or too many.
    '''
    def __init__(self,
                 candidates: Union[CandidateRoster, Iterable[str]],
                 strength: Union[str, Callable] = 'margins',
                 strict: bool = True,
                 max_candidates: int = MAX_CANDIDATES,
                 ):
        if not isinstance(candidates, CandidateRoster):
            candidates = CandidateRoster(candidates, max_candidates)
        self.candidates = candidates
        self.strength = strength
        self.strict = strict
        self.matrix = PreferenceMatrix(len(candidates))
        self.graph = LockGraph(len(candidates))
        self.parser = tideman.vote.NamedBallotParser(candidates)
        self.result = None

    def record(self, ballot: Sequence[int], n_votes: int = 1) -> None:
        '''Record a ballot of candidate indices.

        :raises VoteError: If the ballot is not a complete ranking.
        :raises VotingSystemError: If the election was already tabulated.
        '''
        self._check_open()
        self.matrix.record(ballot, n_votes)

    def record_named(self, names: Iterable[str], n_votes: int = 1) -> None:
        '''Record a ballot given by candidate names, most preferred first.

        :raises CandidateError: If any name is not a candidate.
        :raises VoteError: If the ballot is not a complete ranking.
        :raises VotingSystemError: If the election was already tabulated.
        '''
        self._check_open()
        self.matrix.record(self.parser.parse(names), n_votes)

    def record_all(self,
                   ballots: Union[
                       Iterable[Sequence[int]],
                       Mapping[BallotType, int],
                   ],
                   ) -> None:
        '''Record a batch of ballots; nothing is counted if any is invalid.'''
        self._check_open()
        self.matrix.record_all(ballots)

    def tabulate(self) -> ElectionResult:
        '''Determine the winner from the ballots recorded so far.

        :raises VotingSystemError: If the election was already tabulated.
        '''
        self._check_open()
        pairs = tideman.pairs.extract_pairs(self.matrix)
        ranked = tideman.pairs.rank_pairs(pairs, self.matrix, self.strength)
        locked, rejected = self.graph.lock_all(ranked)
        winner = resolve_winner(self.graph, strict=self.strict)
        if winner is None:
            logger.info('no winner determinable')
        else:
            logger.info('%s wins', self.candidates.name(winner))
        self.result = ElectionResult(
            self.candidates, self.matrix, ranked, locked, rejected,
            self.graph, winner,
        )
        return self.result

    @property
    def is_closed(self) -> bool:
        return self.result is not None

    def _check_open(self) -> None:
        if self.is_closed:
            raise VotingSystemError('election already tabulated')


class Tideman:
    '''Tideman's ranked pairs evaluator.

    Ranks pairwise wins by their magnitude and sequentially locks pairs of
    who beats whom in descending order, discarding pairs that would
    contradict previously locked ones (i.e. create a cycle). Selects the
    candidate over whom no pair is locked.

    :param strength: A pair strength scorer or its name; ``margins`` (the
        default) measures the margin of victory, ``winning_votes`` the votes
        for the winner.
    :param strict: Whether to report no winner if several candidates remain
        unbeaten, instead of choosing the one with the lowest index.
    :param max_candidates: Maximum number of candidates allowed.
    '''
    def __init__(self,
                 strength: Union[str, Callable] = 'margins',
                 strict: bool = True,
                 max_candidates: int = MAX_CANDIDATES,
                 ):
        self.strength = strength
        self.strict = strict
        self.max_candidates = max_candidates

    def evaluate(self,
                 candidates: Union[CandidateRoster, Iterable[str]],
                 ballots: Union[
                     Iterable[Sequence[int]],
                     Mapping[BallotType, int],
                 ],
                 ) -> ElectionResult:
        '''Evaluate a ranked pairs election.

        :param candidates: Candidate names in index order, or a roster.
        :param ballots: Complete rankings of candidate indices, either as an
            iterable or as a mapping to the number of voters casting each.
        :raises CandidateError: If the candidates are invalid.
        :raises VoteError: If any ballot is invalid.
        '''
        election = Election(
            candidates,
            strength=self.strength,
            strict=self.strict,
            max_candidates=self.max_candidates,
        )
        election.record_all(ballots)
        return election.tabulate()


EVALUATORS = {
    'tideman_margins': Tideman(),
    'tideman_winvotes': Tideman('winning_votes'),
    'tideman_lenient': Tideman(strict=False),
}

'''The graph of locked pairwise wins.

Ranked pairs are locked into a directed graph over the candidates one by
one, strongest first. A pair is skipped if locking it would close a cycle,
so the graph stays acyclic after every insertion and its source (the
candidate nobody is locked in over) is the winner.

The cycle check is a depth-first search over the locked edges, which costs
up to ``O(N ** 2)`` per pair and ``O(N ** 4)`` for the whole election; this
is why the number of candidates is bounded.
'''

import logging
from typing import Any, Dict, Iterable, List, Tuple

from tideman.pairs import Pair


logger = logging.getLogger(__name__)


class VotingSystemError(Exception):
    '''A voting system with a valid setup ended up in an unresolvable state.'''
    pass


class LockGraph:
    '''A directed graph of locked pairs as a boolean adjacency matrix.

    ``graph.is_locked(i, j)`` is True if candidate ``i`` has been locked in
    over candidate ``j``. Edges are only ever added.

    :param n_candidates: Number of candidates in the election.
    '''
    def __init__(self, n_candidates: int):
        self._locked = [[False] * n_candidates for i in range(n_candidates)]

    @property
    def n_candidates(self) -> int:
        return len(self._locked)

    def is_locked(self, winner: int, loser: int) -> bool:
        return self._locked[winner][loser]

    def would_cycle(self, winner: int, loser: int) -> bool:
        '''Determine whether locking winner over loser would create a cycle.

        That is the case if the loser can already reach the winner through
        the locked edges (or if they are the same candidate).

        :raises IndexError: If either candidate index is out of range.
        '''
        n = self.n_candidates
        if not (0 <= winner < n and 0 <= loser < n):
            raise IndexError(
                f'candidate index out of range: {winner}, {loser}'
            )
        if winner == loser:
            return True
        visited = [False] * n
        visited[loser] = True
        stack = [loser]
        while stack:
            row = self._locked[stack.pop()]
            for nxt in range(n):
                if row[nxt] and not visited[nxt]:
                    if nxt == winner:
                        return True
                    visited[nxt] = True
                    stack.append(nxt)
        return False

    def lock(self, pair: Pair) -> bool:
        '''Lock the pair into the graph unless that would create a cycle.

        :returns: True if the pair was locked, False if it was skipped.
        '''
        winner, loser = pair
        if self.would_cycle(winner, loser):
            logger.info('skipping %d over %d, would create a cycle',
                        winner, loser)
            return False
        self._locked[winner][loser] = True
        logger.info('locking %d over %d', winner, loser)
        return True

    def lock_all(self,
                 ranked_pairs: Iterable[Pair],
                 ) -> Tuple[List[Pair], List[Pair]]:
        '''Lock pairs in the given order, skipping those closing a cycle.

        A skipped pair is not reconsidered later.

        :param ranked_pairs: Pairs in descending order of strength.
        :returns: A tuple of the locked and the skipped pairs, each in the
            order in which they were processed.
        '''
        locked = []
        rejected = []
        for pair in ranked_pairs:
            (locked if self.lock(pair) else rejected).append(pair)
        return locked, rejected

    def edges(self) -> List[Pair]:
        '''Return all locked pairs in index order.'''
        return [
            Pair(i, j)
            for i, row in enumerate(self._locked)
                for j, is_locked in enumerate(row)    # noqa: E131
                    if is_locked    # noqa: E131
        ]

    def in_degree(self, candidate: int) -> int:
        return sum(1 for row in self._locked if row[candidate])

    def sources(self) -> List[int]:
        '''Return candidates that nobody is locked in over, in index order.'''
        return [
            i for i in range(self.n_candidates) if self.in_degree(i) == 0
        ]

    def is_acyclic(self) -> bool:
        '''Check the whole graph for cycles by repeatedly removing sources.'''
        in_degrees = [self.in_degree(i) for i in range(self.n_candidates)]
        queue = [i for i, deg in enumerate(in_degrees) if deg == 0]
        n_removed = 0
        while queue:
            node = queue.pop()
            n_removed += 1
            for nxt, is_locked in enumerate(self._locked[node]):
                if is_locked:
                    in_degrees[nxt] -= 1
                    if in_degrees[nxt] == 0:
                        queue.append(nxt)
        return n_removed == self.n_candidates

    def topological_ranking(self) -> List[int]:
        '''Rank all candidates by the locked graph.

        The first candidate is the source of the graph; each next one is the
        source of what remains after removing the previous ones. Where
        several sources exist (which happens only if some pairs were tied),
        the lowest index goes first.

        :raises VotingSystemError: If the graph contains a cycle.
        '''
        in_degrees = [self.in_degree(i) for i in range(self.n_candidates)]
        remaining = list(range(self.n_candidates))
        ranking = []
        while remaining:
            try:
                best = next(i for i in remaining if in_degrees[i] == 0)
            except StopIteration:
                raise VotingSystemError(
                    f'locked graph has a cycle among {remaining}'
                )
            ranking.append(best)
            remaining.remove(best)
            for nxt, is_locked in enumerate(self._locked[best]):
                if is_locked:
                    in_degrees[nxt] -= 1
        return ranking

    def rows(self) -> List[List[bool]]:
        return [row[:] for row in self._locked]

    def to_dict(self) -> Dict[str, Any]:
        return {'edges': [list(edge) for edge in self.edges()]}

    def __repr__(self) -> str:
        return f'<LockGraph({self.edges()})>'

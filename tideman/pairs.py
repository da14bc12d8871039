'''Extraction and ranking of pairwise wins.

A pair is an ordered couple of candidate indices where a majority of
voters prefers the first (the winner) to the second (the loser). Tied
candidate couples produce no pair at all.
'''

import logging
from typing import Callable, List, NamedTuple, Union, Iterable

import tideman.component.strength
from tideman.preference import PreferenceMatrix


logger = logging.getLogger(__name__)


class Pair(NamedTuple):
    winner: int
    loser: int


def extract_pairs(matrix: PreferenceMatrix) -> List[Pair]:
    '''Select pairs of candidates where the first is preferred to the second.

    Couples of candidates are examined in index order (``i < j``); each
    produces a pair oriented by the majority preference, or nothing if it
    is tied.

    :param matrix: Pairwise preference counts.
    :returns: The majority pairs; at most ``N * (N - 1) / 2`` of them.
    '''
    pairs = []
    n = matrix.n_candidates
    for i in range(n):
        for j in range(i + 1, n):
            pref_i_j = matrix.count(i, j)
            pref_j_i = matrix.count(j, i)
            if pref_i_j > pref_j_i:
                pairs.append(Pair(i, j))
            elif pref_j_i > pref_i_j:
                pairs.append(Pair(j, i))
    return pairs


def rank_pairs(pairs: Iterable[Pair],
               matrix: PreferenceMatrix,
               strength: Union[str, Callable] = 'margins',
               ) -> List[Pair]:
    '''Sort pairs in decreasing order by strength of victory.

    The sort is stable: pairs of equal strength keep the order in which
    they were given, which is the only tiebreak applied.

    :param pairs: Majority pairs, as produced by :func:`extract_pairs`.
    :param matrix: Pairwise preference counts to derive the strengths from.
    :param strength: A strength scorer or its name from
        :mod:`tideman.component.strength`.
    '''
    scorer = tideman.component.strength.construct(strength)
    ranked = sorted(
        pairs,
        key=lambda pair: scorer(matrix, pair),
        reverse=True,
    )
    logger.debug('pairs ranked by %s: %s',
                 getattr(scorer, '__name__', scorer), ranked)
    return ranked

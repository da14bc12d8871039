'''Functions to measure the strength of a pairwise win.

The ranked pairs method locks pairs in descending order of strength. The
strength is always derived from the preference matrix at the time of
ranking, never stored on the pair itself.

Each scorer takes the preference matrix and a ``(winner, loser)`` pair and
returns a number; larger numbers mean stronger wins.
'''

from typing import Callable, Dict, Tuple

import tideman.component.core
from tideman.preference import PreferenceMatrix


STRENGTH_SCORERS: Dict[
    str, Callable[[PreferenceMatrix, Tuple[int, int]], int]
] = {}


strength_scorer_mark, get, construct = \
    tideman.component.core.register_functions(
        STRENGTH_SCORERS, 'pairwise win strength scorer'
    )


@strength_scorer_mark
def margins(matrix: PreferenceMatrix, pair: Tuple[int, int]) -> int:
    '''Margin of victory: votes for the win minus votes against it.

    This is the classic Tideman measure.
    '''
    winner, loser = pair
    return matrix.count(winner, loser) - matrix.count(loser, winner)


@strength_scorer_mark
def winning_votes(matrix: PreferenceMatrix, pair: Tuple[int, int]) -> int:
    '''Number of votes preferring the pair winner to the loser.

    For complete ballots this orders the pairs the same as
    :func:`margins`, since both sides of a pair always sum to the number
    of ballots.
    '''
    winner, loser = pair
    return matrix.count(winner, loser)

"""Tideman - ranked pairs election tabulation.

Tideman's ranked pairs method selects a single winner from complete
rankings of a small set of candidates. It always selects the Condorcet
winner when there is one.

The tabulation proceeds in stages, each in its own module:

-   The ``preference`` module counts, for every ordered pair of candidates,
    how many voters ranked the first above the second.
-   The ``pairs`` module extracts the majority pairs from these counts and
    sorts them by the strength of the win (measured by one of the scorers
    from the ``component.strength`` module).
-   The ``lock`` module locks the sorted pairs into a directed graph,
    skipping the pairs that would create a cycle.
-   The ``evaluate`` module drives the stages for one election and reads
    the winner off the final graph.

Ballots are validated by the ``vote`` module before they are counted;
candidates are held by the ``candidate`` module's roster.
"""

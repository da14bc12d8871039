import sys
import os
import random

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import tideman.evaluate
import tideman.vote
from tideman.candidate import CandidateError, CandidateCountError
from tideman.component import strength
from tideman.evaluate import Election, Tideman, VotingSystemError


NAMES = ['Alice', 'Bob', 'Charlie']

TENNESSEE_NAMES = ['Memphis', 'Nashville', 'Chattanooga', 'Knoxville']
TENNESSEE = {
    (0, 1, 2, 3): 42,
    (1, 2, 3, 0): 26,
    (2, 3, 1, 0): 15,
    (3, 2, 1, 0): 17,
}


def random_ballots(n_candidates, n_ballots, rng):
    ballots = []
    for i in range(n_ballots):
        ballot = list(range(n_candidates))
        rng.shuffle(ballot)
        ballots.append(tuple(ballot))
    return ballots


def condorcet_winner(matrix):
    n = matrix.n_candidates
    for cand in range(n):
        if all(
            matrix.count(cand, other) > matrix.count(other, cand)
            for other in range(n) if other != cand
        ):
            return cand
    return None


def test_scenario_a():
    result = Tideman().evaluate(NAMES, {(0, 1, 2): 3, (1, 2, 0): 2})
    assert result.winner == 0
    assert result.winner_name == 'Alice'
    assert result.has_winner
    assert result.ranked_pairs == [(1, 2), (0, 1), (0, 2)]
    assert result.locked == [(1, 2), (0, 1), (0, 2)]
    assert result.rejected == []
    assert result.ranking() == ['Alice', 'Bob', 'Charlie']


def test_scenario_a_repeated_ballots():
    ballots = [(0, 1, 2)] * 3 + [(1, 2, 0)] * 2
    weighted = Tideman().evaluate(NAMES, {(0, 1, 2): 3, (1, 2, 0): 2})
    repeated = Tideman().evaluate(NAMES, ballots)
    assert repeated.winner == weighted.winner == 0
    assert repeated.matrix == weighted.matrix
    assert repeated.locked == weighted.locked


def test_scenario_b_weakest_cycle_edge_rejected():
    result = Tideman().evaluate(
        NAMES, {(0, 1, 2): 4, (1, 2, 0): 3, (2, 0, 1): 2}
    )
    margins = {
        pair: strength.margins(result.matrix, pair)
        for pair in result.ranked_pairs
    }
    assert margins == {(1, 2): 5, (0, 1): 3, (2, 0): 1}
    assert result.locked == [(1, 2), (0, 1)]
    assert result.rejected == [min(margins, key=margins.get)]
    assert result.winner == 0


def test_scenario_b_equal_margins_by_insertion():
    result = Tideman().evaluate(NAMES, [(0, 1, 2), (1, 2, 0), (2, 0, 1)])
    assert result.ranked_pairs == [(0, 1), (2, 0), (1, 2)]
    assert result.locked == [(0, 1), (2, 0)]
    assert result.rejected == [(1, 2)]
    assert result.winner == 2
    assert result.ranking() == ['Charlie', 'Alice', 'Bob']


def test_scenario_c_only_pair_tied():
    result = Tideman().evaluate(['Alice', 'Bob'], [(0, 1), (1, 0)])
    assert result.ranked_pairs == []
    assert result.winner is None
    assert not result.has_winner
    assert result.winner_name is None
    assert result.sources() == [0, 1]


def test_scenario_c_lenient():
    result = Tideman(strict=False).evaluate(['Alice', 'Bob'], [(0, 1), (1, 0)])
    assert result.winner == 0


def test_scenario_c_tie_below_winner():
    result = Tideman().evaluate(NAMES, [(0, 1, 2), (0, 2, 1)])
    assert result.ranked_pairs == [(0, 1), (0, 2)]
    assert result.winner == 0
    assert result.ranking() == ['Alice', 'Bob', 'Charlie']


def test_scenario_c_tie_at_top():
    result = Tideman().evaluate(NAMES, [(0, 1, 2), (1, 0, 2)])
    assert result.sources() == [0, 1]
    assert result.winner is None
    lenient = Tideman(strict=False).evaluate(NAMES, [(0, 1, 2), (1, 0, 2)])
    assert lenient.winner == 0


@pytest.mark.parametrize('ballots', [[(0, )], [(0, )] * 5, []])
def test_single_candidate(ballots):
    result = Tideman().evaluate(['Solo'], ballots)
    assert result.winner == 0
    assert result.winner_name == 'Solo'
    assert result.matrix.rows() == [[0]]
    assert result.graph.edges() == []
    assert result.ranked_pairs == []


def test_no_candidates():
    result = Tideman().evaluate([], [])
    assert result.winner is None
    assert result.ranking() == []


def test_no_ballots():
    result = Tideman().evaluate(NAMES, [])
    assert result.winner is None
    assert Tideman(strict=False).evaluate(NAMES, []).winner == 0


@pytest.mark.parametrize('eval_key', list(tideman.evaluate.EVALUATORS.keys()))
def test_tennessee(eval_key):
    result = tideman.evaluate.EVALUATORS[eval_key].evaluate(
        TENNESSEE_NAMES, TENNESSEE
    )
    assert result.winner_name == 'Nashville'
    assert result.rejected == []
    assert result.ranking() == [
        'Nashville', 'Chattanooga', 'Knoxville', 'Memphis'
    ]


@pytest.mark.parametrize('seed', range(30))
def test_unique_winner_random(seed):
    rng = random.Random(seed)
    n_cands = rng.randint(1, 7)
    # an odd number of complete ballots leaves no couple of candidates tied
    n_ballots = rng.randrange(1, 40, 2)
    names = [f'cand{i}' for i in range(n_cands)]
    result = Tideman().evaluate(
        names, random_ballots(n_cands, n_ballots, rng)
    )
    assert len(result.ranked_pairs) == n_cands * (n_cands - 1) // 2
    assert len(result.sources()) == 1
    assert result.winner == result.sources()[0]
    assert result.graph.is_acyclic()
    cw = condorcet_winner(result.matrix)
    if cw is not None:
        assert result.winner == cw


def test_invalid_ballot():
    with pytest.raises(tideman.vote.BallotValueError):
        Tideman().evaluate(NAMES, [(0, 1, 2), (0, 0, 1)])
    with pytest.raises(tideman.vote.BallotLengthError):
        Tideman().evaluate(NAMES, {(0, 1): 2})


def test_invalid_batch_records_nothing():
    election = Election(NAMES)
    with pytest.raises(tideman.vote.BallotValueError):
        election.record_all([(2, 1, 0), (2, 1, 0), (0, 0, 1)])
    assert election.matrix.n_ballots == 0
    assert election.matrix.rows() == [[0] * 3] * 3
    result = election.tabulate()
    assert result.winner is None
    assert result.ranked_pairs == []


def test_too_many_candidates():
    names = [f'cand{i}' for i in range(10)]
    with pytest.raises(CandidateCountError):
        Tideman().evaluate(names, [])
    result = Tideman(max_candidates=10).evaluate(names, [tuple(range(10))])
    assert result.winner == 0


def test_election_named_ballots():
    election = Election(NAMES)
    election.record_named(['Bob', 'Alice', 'Charlie'], n_votes=2)
    election.record_named(['Alice', 'Charlie', 'Bob'])
    with pytest.raises(CandidateError):
        election.record_named(['Alice', 'Dave', 'Bob'])
    with pytest.raises(tideman.vote.BallotValueError):
        election.record_named(['Alice', 'Alice', 'Bob'])
    with pytest.raises(tideman.vote.BallotLengthError):
        election.record_named(['Alice', 'Bob'])
    assert election.matrix.n_ballots == 3
    result = election.tabulate()
    assert result.winner_name == 'Bob'


def test_election_closed_after_tabulation():
    election = Election(NAMES)
    election.record((0, 1, 2))
    election.tabulate()
    assert election.is_closed
    with pytest.raises(VotingSystemError):
        election.record((1, 2, 0))
    with pytest.raises(VotingSystemError):
        election.record_named(['Bob', 'Charlie', 'Alice'])
    with pytest.raises(VotingSystemError):
        election.tabulate()
    assert election.result.winner == 0


def test_elections_independent():
    first = Election(NAMES)
    second = Election(NAMES)
    first.record_all([(0, 1, 2)] * 3)
    second.record_all([(2, 1, 0)] * 3)
    assert first.tabulate().winner == 0
    assert second.tabulate().winner == 2
    assert Tideman().evaluate(NAMES, [(1, 0, 2)]).winner == 1


def test_result_to_dict():
    result = Tideman().evaluate(NAMES, {(0, 1, 2): 4, (1, 2, 0): 3, (2, 0, 1): 2})
    assert result.to_dict() == {
        'candidates': NAMES,
        'preferences': {
            'n_ballots': 9,
            'counts': [[0, 6, 4], [3, 0, 7], [5, 2, 0]],
        },
        'ranked_pairs': [[1, 2], [0, 1], [2, 0]],
        'locked': [[1, 2], [0, 1]],
        'rejected': [[2, 0]],
        'winner': 'Alice',
    }


def test_resolve_winner():
    election = Election(NAMES)
    assert tideman.evaluate.resolve_winner(election.graph) is None
    assert tideman.evaluate.resolve_winner(election.graph, strict=False) == 0
    election.graph.lock_all([(2, 0), (2, 1)])
    assert tideman.evaluate.resolve_winner(election.graph) == 2
    assert tideman.evaluate.resolve_winner(election.graph, strict=False) == 2


import sys
import os
from fractions import Fraction

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import tallylib.candidate
import tallylib.numeric
import tallylib.vote
from tallylib.evaluate.condorcet import CondorcetTally, SchulzeTally

VOTES = {
    'tennessee': [
        (['Memphis', 'Nashville', 'Chattanooga', 'Knoxville'], 42),
        (['Nashville', 'Chattanooga', 'Knoxville', 'Memphis'], 26),
        (['Chattanooga', 'Knoxville', 'Nashville', 'Memphis'], 15),
        (['Knoxville', 'Chattanooga', 'Nashville', 'Memphis'], 17),
    ],
    'wikipedia_schulze': [
        (list('ACBED'), 5),
        (list('ADECB'), 5),
        (list('BEDAC'), 8),
        (list('CABED'), 3),
        (list('CAEBD'), 7),
        (list('CBADE'), 2),
        (list('DCEBA'), 7),
        (list('EBADC'), 8),
    ],
    'schulze_example_4': [
        (list('abcd'), 12),
        (list('adbc'), 6),
        (list('bcda'), 9),
        (list('cdab'), 15),
        (list('dbac'), 21),
    ],
    'paradox': [
        (['Alice', 'Bob', 'Cir'], 1),
        (['Bob', 'Cir', 'Alice'], 1),
        (['Cir', 'Alice', 'Bob'], 1),
    ],
}

TENNESSEE_TOTALS = {
    ('Memphis', 'Nashville'): 42,
    ('Memphis', 'Chattanooga'): 42,
    ('Memphis', 'Knoxville'): 42,
    ('Nashville', 'Memphis'): 58,
    ('Nashville', 'Chattanooga'): 68,
    ('Nashville', 'Knoxville'): 68,
    ('Chattanooga', 'Memphis'): 58,
    ('Chattanooga', 'Nashville'): 32,
    ('Chattanooga', 'Knoxville'): 83,
    ('Knoxville', 'Memphis'): 58,
    ('Knoxville', 'Nashville'): 32,
    ('Knoxville', 'Chattanooga'): 17,
}

WIKIPEDIA_TOTALS = {
    ('A', 'B'): 20, ('A', 'C'): 26, ('A', 'D'): 30, ('A', 'E'): 22,
    ('B', 'A'): 25, ('B', 'C'): 16, ('B', 'D'): 33, ('B', 'E'): 18,
    ('C', 'A'): 19, ('C', 'B'): 29, ('C', 'D'): 17, ('C', 'E'): 24,
    ('D', 'A'): 15, ('D', 'B'): 12, ('D', 'C'): 28, ('D', 'E'): 14,
    ('E', 'A'): 23, ('E', 'B'): 27, ('E', 'C'): 21, ('E', 'D'): 31,
}

WIKIPEDIA_PATHS = {
    ('A', 'B'): 28, ('A', 'C'): 28, ('A', 'D'): 30, ('A', 'E'): 24,
    ('B', 'A'): 25, ('B', 'C'): 28, ('B', 'D'): 33, ('B', 'E'): 24,
    ('C', 'A'): 25, ('C', 'B'): 29, ('C', 'D'): 29, ('C', 'E'): 24,
    ('D', 'A'): 25, ('D', 'B'): 28, ('D', 'C'): 28, ('D', 'E'): 24,
    ('E', 'A'): 25, ('E', 'B'): 28, ('E', 'C'): 28, ('E', 'D'): 31,
}


def build_tally(tally_cls, votes_name, n_winners=1, **kwargs):
    tally = tally_cls(n_winners, **kwargs)
    for vote, weight in VOTES[votes_name]:
        tally.add_weighted(vote, weight)
    return tally


def ranks(tally):
    return {cand: rank for cand, rank in tally.ranked()}


def test_tennessee_totals():
    tally = build_tally(CondorcetTally, 'tennessee')
    assert dict(tally.totals()) == TENNESSEE_TOTALS
    assert len(tally.totals()) == 12


def test_tennessee_ranked():
    tally = build_tally(CondorcetTally, 'tennessee')
    assert tally.ranked() == [
        ('Nashville', 0),
        ('Chattanooga', 1),
        ('Knoxville', 2),
        ('Memphis', 3),
    ]
    assert tally.winners().all() == ['Nashville']
    assert tally.smith_set() == ['Nashville']


@pytest.mark.parametrize('variant', ['winning', 'margin', 'losing'])
def test_tennessee_schulze(variant):
    tally = build_tally(SchulzeTally, 'tennessee', variant=variant)
    assert tally.winners().all() == ['Nashville']


def test_tennessee_schulze_ratio():
    tally = build_tally(
        SchulzeTally, 'tennessee', variant='ratio', count_type='fraction'
    )
    assert tally.winners().all() == ['Nashville']


def test_schulze_ratio_unopposed_beats_huge_ratio():
    tiny = Fraction(1, 2 ** 70)
    tally = SchulzeTally(1, variant='ratio', count_type='fraction')
    tally.add_weighted(['X', 'Y'], 1)
    tally.add_weighted(['Y', 'Z'], 1)
    tally.add_weighted(['Z', 'Y'], tiny)
    tally.add_weighted(['Z', 'X'], 1)
    tally.add_weighted(['X', 'Z'], tiny)
    paths = dict(tally.strongest_paths())
    assert paths[('Y', 'X')] == 2 ** 70
    assert paths[('X', 'Y')] > paths[('Y', 'X')]
    assert ranks(tally) == {'X': 0, 'Z': 0, 'Y': 1}


@pytest.mark.parametrize('tally_cls', [CondorcetTally, SchulzeTally])
def test_nan_weight_rejected(tally_cls):
    tally = tally_cls(1, count_type='float')
    tally.add_weighted(['B', 'A'], 1.0)
    with pytest.raises(tallylib.vote.VoteValueError):
        tally.add_weighted(['A', 'B'], float('nan'))
    assert tally.totals() == [(('B', 'A'), 1.0)]
    assert tally.winners().all() == ['B']


def test_condorcet_winner_agrees():
    condorcet = build_tally(CondorcetTally, 'tennessee', n_winners=0)
    schulze = build_tally(SchulzeTally, 'tennessee', n_winners=0)
    assert condorcet.ranked() == schulze.ranked()


def test_wikipedia_totals():
    tally = build_tally(SchulzeTally, 'wikipedia_schulze')
    assert dict(tally.totals()) == WIKIPEDIA_TOTALS


def test_wikipedia_strongest_paths():
    tally = build_tally(SchulzeTally, 'wikipedia_schulze')
    paths = tally.strongest_paths()
    assert len(paths) == 20
    assert dict(paths) == WIKIPEDIA_PATHS


def test_wikipedia_ranked():
    tally = build_tally(SchulzeTally, 'wikipedia_schulze')
    assert tally.ranked() == [
        ('E', 0), ('A', 1), ('C', 2), ('B', 3), ('D', 4),
    ]
    assert tally.winners().all() == ['E']


def test_wikipedia_smith_set():
    # there is no Condorcet winner, everyone is in one cycle
    tally = build_tally(CondorcetTally, 'wikipedia_schulze')
    assert sorted(tally.smith_set()) == list('ABCDE')


def test_schulze_example_4():
    tally = build_tally(SchulzeTally, 'schulze_example_4', n_winners=2)
    assert ranks(tally) == {'d': 0, 'a': 1, 'b': 1, 'c': 2}
    winners = tally.winners()
    assert sorted(winners.all()) == ['a', 'b', 'd']
    assert winners.is_overflowing()
    assert sorted(winners.overflowing_candidates()) == ['a', 'b']


@pytest.mark.parametrize('tally_cls', [CondorcetTally, SchulzeTally])
def test_paradox(tally_cls):
    tally = build_tally(tally_cls, 'paradox')
    assert ranks(tally) == {'Alice': 0, 'Bob': 0, 'Cir': 0}
    winners = tally.winners()
    assert len(winners) == 3
    assert winners.is_overflowing()


def test_paradox_above_loser():
    tally = CondorcetTally(1)
    tally.add(['A', 'B', 'C', 'D'])
    tally.add(['B', 'C', 'A', 'D'])
    tally.add(['C', 'A', 'B', 'D'])
    assert tally.smith_set() == ['A', 'B', 'C']
    assert ranks(tally)['D'] == 1


@pytest.mark.parametrize('tally_cls', [CondorcetTally, SchulzeTally])
def test_two_winners(tally_cls):
    tally = tally_cls(2)
    for i in range(3):
        tally.add(['Alice', 'Bob', 'Cir'])
    assert tally.ranked() == [('Alice', 0), ('Bob', 1), ('Cir', 2)]
    assert tally.winners().all() == ['Alice', 'Bob']
    assert not tally.winners().is_overflowing()


def test_schulze_tied_pair():
    tally = SchulzeTally(1)
    tally.add(['A', 'B'])
    tally.add(['B', 'A'])
    assert ranks(tally) == {'A': 0, 'B': 0}
    assert dict(tally.strongest_paths()) == {('A', 'B'): 0, ('B', 'A'): 0}


def test_condorcet_tied_pair():
    tally = CondorcetTally(1)
    tally.add_weighted(['A', 'B'], 2)
    tally.add_weighted(['B', 'A'], 2)
    tally.add(['A', 'C'])
    tally.add(['B', 'C'])
    assert ranks(tally) == {'A': 0, 'B': 0, 'C': 1}


@pytest.mark.parametrize('tally_cls', [CondorcetTally, SchulzeTally])
def test_duplicate_rejected(tally_cls):
    tally = build_tally(tally_cls, 'tennessee')
    with pytest.raises(tallylib.vote.DuplicateCandidate):
        tally.add(['Memphis', 'Atlanta', 'Memphis'])
    assert dict(tally.totals()) == TENNESSEE_TOTALS
    assert 'Atlanta' not in tally.candidates()


def test_ranking_idempotent():
    tally = build_tally(SchulzeTally, 'wikipedia_schulze')
    first = tally.ranked()
    assert tally.ranked() == first
    assert tally.strongest_paths() == tally.strongest_paths()


def test_ratio_needs_fractions():
    with pytest.raises(tallylib.numeric.UnsupportedCountType):
        SchulzeTally(1, variant='ratio')


def test_unknown_variant():
    with pytest.raises(KeyError):
        SchulzeTally(1, variant='ranked_pairs')


def test_closed_unknown_candidate():
    tally = CondorcetTally.with_candidates(1, ['A', 'B', 'C'])
    tally.add(['A', 'B'])
    with pytest.raises(tallylib.candidate.UnknownCandidate):
        tally.add(['A', 'D'])
    assert tally.totals() == [(('A', 'B'), 1)]
    assert tally.candidates() == ['A', 'B', 'C']


def test_closed_ranked_omitted_at_bottom():
    tally = SchulzeTally.with_candidates(1, ['A', 'B', 'C'])
    tally.add_ranked([('B', 0)])
    assert dict(tally.totals()) == {('B', 'A'): 1, ('B', 'C'): 1}
    assert tally.winners().all() == ['B']


def test_open_ranked_omitted_not_compared():
    tally = CondorcetTally(1)
    tally.add(['A', 'B', 'C'])
    tally.add_ranked([('C', 0)])
    assert dict(tally.totals()) == {
        ('A', 'B'): 1, ('A', 'C'): 1, ('B', 'C'): 1,
    }


def test_ranked_ties():
    tally = SchulzeTally(1)
    tally.add_ranked_weighted([('A', 0), ('B', 0), ('C', 1)], 3)
    tally.add_ranked([('B', 0), ('A', 1)])
    assert dict(tally.totals()) == {
        ('A', 'C'): 3, ('B', 'C'): 3, ('B', 'A'): 1,
    }
    assert tally.ranked()[0] == ('B', 0)


@pytest.mark.parametrize('vote', [
    [('A', -1), ('B', 0)],
    [('A', 0), ('A', 1)],
    [('A', 0.5)],
])
def test_ranked_invalid(vote):
    tally = CondorcetTally(1)
    with pytest.raises(tallylib.vote.VoteError):
        tally.add_ranked(vote)
    assert tally.totals() == []
    assert tally.candidates() == []


def test_fractional_weights():
    tally = SchulzeTally(1, count_type='fraction')
    tally.add_weighted(['A', 'B'], Fraction(1, 2))
    tally.add_weighted(['B', 'A'], Fraction(1, 3))
    assert dict(tally.totals()) == {
        ('A', 'B'): Fraction(1, 2), ('B', 'A'): Fraction(1, 3),
    }
    assert tally.winners().all() == ['A']


def test_graph_view():
    tally = build_tally(CondorcetTally, 'tennessee')
    graph = tally.build_graph()
    assert graph.edge_count() == 6
    assert graph.edge_weight('Memphis', 'Nashville') == (58, 42)


import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
from tallylib.result import RankedCandidate, RankedWinners, rank_by_count, rank_groups


def test_rank_by_count():
    assert rank_by_count([('A', 3), ('B', 5), ('C', 3), ('D', 1)]) == [
        ('B', 0), ('A', 1), ('C', 1), ('D', 2)
    ]


def test_rank_by_count_empty():
    assert rank_by_count([]) == []


def test_rank_groups():
    ranked = rank_groups([['A'], [], ['B', 'C'], ['D']])
    assert ranked == [('A', 0), ('B', 1), ('C', 1), ('D', 2)]
    assert all(isinstance(item, RankedCandidate) for item in ranked)


RANKED = [('A', 0), ('B', 1), ('C', 2), ('D', 2), ('E', 3)]


@pytest.mark.parametrize(('n_winners', 'expected', 'overflowing'), [
    (1, ['A'], False),
    (2, ['A', 'B'], False),
    (3, ['A', 'B', 'C', 'D'], True),
    (4, ['A', 'B', 'C', 'D'], False),
    (5, ['A', 'B', 'C', 'D', 'E'], False),
    (10, ['A', 'B', 'C', 'D', 'E'], False),
    (0, ['A', 'B', 'C', 'D', 'E'], False),
])
def test_from_ranked(n_winners, expected, overflowing):
    winners = RankedWinners.from_ranked(RANKED, n_winners)
    assert winners.all() == expected
    assert winners.is_overflowing() == overflowing


def test_overflowing_candidates():
    winners = RankedWinners.from_ranked(RANKED, 3)
    assert winners.overflowing_candidates() == ['C', 'D']
    assert RankedWinners.from_ranked(RANKED, 2).overflowing_candidates() is None


def test_top_tie_not_overflowing():
    winners = RankedWinners.from_ranked([('A', 0), ('B', 0), ('C', 1)], 3)
    assert winners.all() == ['A', 'B', 'C']
    assert not winners.is_overflowing()


def test_all_tied_overflow():
    winners = RankedWinners.from_ranked([('A', 0), ('B', 0), ('C', 0)], 1)
    assert len(winners) == 3
    assert winners.is_overflowing()


def test_accessors():
    winners = RankedWinners.from_ranked(RANKED, 4)
    assert 'C' in winners
    assert winners.contains('A')
    assert not winners.contains('E')
    assert winners.rank_of('D') == 2
    assert winners.rank_of('E') is None
    assert winners.by_rank() == {0: ['A'], 1: ['B'], 2: ['C', 'D']}
    assert list(winners)[0] == RankedCandidate('A', 0)


def test_empty():
    winners = RankedWinners.from_ranked([], 1)
    assert winners.is_empty()
    assert not winners.is_overflowing()
    assert winners.all() == []


def test_equality():
    assert RankedWinners.from_ranked(RANKED, 2) \
        == RankedWinners([('A', 0), ('B', 1)], 2)
    assert RankedWinners.from_ranked(RANKED, 2) \
        != RankedWinners([('A', 0), ('B', 1)], 3)

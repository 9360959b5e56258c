
import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import tallylib.vote
from tallylib.evaluate.approval import ApprovalTally

MATRIX = 'The Matrix'
SCREAM = 'Scream'
TITANIC = 'Titanic'

# favourite movie poll
VOTES = [
    ([SCREAM, MATRIX], 3),
    ([TITANIC, MATRIX], 2),
    ([TITANIC, SCREAM, MATRIX], 1),
    ([MATRIX], 1),
    ([TITANIC, SCREAM], 1),
    ([TITANIC], 1),
    ([SCREAM], 1),
]


def build_tally(n_winners=1):
    tally = ApprovalTally(n_winners)
    for vote, weight in VOTES:
        if weight == 1:
            tally.add(vote)
        else:
            tally.add_weighted(vote, weight)
    return tally


def test_movies():
    tally = build_tally()
    assert tally.totals() == [(MATRIX, 7), (SCREAM, 6), (TITANIC, 5)]
    assert tally.ranked() == [(MATRIX, 0), (SCREAM, 1), (TITANIC, 2)]
    winners = tally.winners()
    assert winners.contains(MATRIX)
    assert not winners.contains(SCREAM)
    assert not winners.contains(TITANIC)


def test_set_ballot():
    tally = ApprovalTally(1)
    tally.add({'A', 'B'})
    tally.add(frozenset(['B']))
    assert tally.totals()[0] == ('B', 2)


def test_empty_ballot():
    tally = build_tally()
    tally.add([])
    assert tally.totals() == [(MATRIX, 7), (SCREAM, 6), (TITANIC, 5)]


def test_duplicate_rejected():
    tally = build_tally()
    with pytest.raises(tallylib.vote.DuplicateCandidate):
        tally.add([MATRIX, 'Alien', MATRIX])
    assert tally.totals() == [(MATRIX, 7), (SCREAM, 6), (TITANIC, 5)]
    assert 'Alien' not in tally.candidates()


def test_string_ballot_rejected():
    tally = ApprovalTally(1)
    with pytest.raises(tallylib.vote.VoteTypeError):
        tally.add('AB')


import sys
import os
import io
from fractions import Fraction
from decimal import Decimal

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import tallylib.io.text
import tallylib.vote
from tallylib.io.core import ParseError
from tallylib.io.text import ParsedVote
from tallylib.evaluate.condorcet import CondorcetTally, SchulzeTally
from tallylib.evaluate.sequential import IRVTally

TENNESSEE_TEXT = '''# Tennessee capital
Memphis > Nashville > Chattanooga > Knoxville * 42
Nashville > Chattanooga > Knoxville > Memphis * 26

Chattanooga > Knoxville > Nashville > Memphis * 15
Knoxville > Chattanooga > Nashville > Memphis * 17
'''


@pytest.mark.parametrize(('line', 'expected'), [
    ('A > B > C', ParsedVote('transitive', ['A', 'B', 'C'], 1)),
    ('  A>B  ', ParsedVote('transitive', ['A', 'B'], 1)),
    ('New York > Los Angeles * 3', ParsedVote(
        'transitive', ['New York', 'Los Angeles'], 3
    )),
    ('A', ParsedVote('transitive', ['A'], 1)),
    ('A = B > C * 2', ParsedVote(
        'ranked', [('A', 0), ('B', 0), ('C', 1)], 2
    )),
    ('A > B = C', ParsedVote('ranked', [('A', 0), ('B', 1), ('C', 1)], 1)),
])
def test_parse_line(line, expected):
    assert tallylib.io.text.parse_line(line) == expected


@pytest.mark.parametrize('line', ['', '   ', '# comment', '  # A > B'])
def test_parse_skipped(line):
    assert tallylib.io.text.parse_line(line) is None


@pytest.mark.parametrize('line', [
    'A > > B',
    'A > B *',
    'A > B * x',
    'A > B * 1.5',
    'A * 2 * 3',
    'A = > B',
])
def test_parse_invalid(line):
    with pytest.raises(ParseError):
        tallylib.io.text.parse_line(line)


def test_parse_fractional_weight():
    assert tallylib.io.text.parse_line('A > B * 3/2', 'fraction').weight \
        == Fraction(3, 2)
    assert tallylib.io.text.parse_line('A > B * 0.5', 'decimal').weight \
        == Decimal('0.5')


def test_loads():
    ballots = tallylib.io.text.loads(TENNESSEE_TEXT)
    assert len(ballots) == 4
    assert ballots[0] == ParsedVote(
        'transitive', ['Memphis', 'Nashville', 'Chattanooga', 'Knoxville'], 42
    )
    assert [ballot.weight for ballot in ballots] == [42, 26, 15, 17]


def test_load_file():
    ballots = tallylib.io.text.load(io.StringIO(TENNESSEE_TEXT))
    assert sum(ballot.weight for ballot in ballots) == 100


def test_error_line_number():
    with pytest.raises(ParseError) as excinfo:
        tallylib.io.text.loads('A > B\n# fine\nA > B * many\n')
    assert excinfo.value.line_number == 3
    assert str(excinfo.value).startswith('line 3: ')


def test_dumps():
    ballots = [
        ParsedVote('transitive', ['A', 'B'], 1),
        ParsedVote('transitive', ['C'], 5),
        ParsedVote('ranked', [('B', 1), ('A', 0), ('C', 1)], 2),
    ]
    assert tallylib.io.text.dumps(ballots) == (
        'A > B\n'
        'C * 5\n'
        'A > B = C * 2\n'
    )


def test_dump_reload():
    ballots = tallylib.io.text.loads(TENNESSEE_TEXT)
    out = io.StringIO()
    tallylib.io.text.dump(out, ballots)
    assert tallylib.io.text.loads(out.getvalue()) == ballots


def test_into_ranked():
    ballot = ParsedVote('transitive', ['A', 'B'], 3)
    assert ballot.into_ranked() == ParsedVote(
        'ranked', [('A', 0), ('B', 1)], 3
    )
    ranked = ParsedVote('ranked', [('A', 0), ('B', 0)], 1)
    assert ranked.into_ranked() is ranked


def test_feed_tennessee():
    tally = SchulzeTally(1)
    tallylib.io.text.feed(tally, tallylib.io.text.loads(TENNESSEE_TEXT))
    assert tally.winners().all() == ['Nashville']


def test_feed_ranked():
    tally = CondorcetTally(1)
    tallylib.io.text.feed(tally, tallylib.io.text.loads('A = B > C\nA > C'))
    assert dict(tally.totals()) == {('A', 'C'): 2, ('B', 'C'): 1}


def test_feed_ranked_unsupported():
    tally = IRVTally(1)
    with pytest.raises(tallylib.vote.VoteTypeError):
        tallylib.io.text.feed(tally, tallylib.io.text.loads('A = B > C'))


def test_feed_duplicate():
    tally = CondorcetTally(1)
    with pytest.raises(tallylib.vote.DuplicateCandidate):
        tallylib.io.text.feed(tally, tallylib.io.text.loads('A > B > A'))


def test_feed_nan_weight():
    ballots = tallylib.io.text.loads('B > A\nA > B * nan', count_type='float')
    tally = SchulzeTally(1, count_type='float')
    with pytest.raises(tallylib.vote.VoteValueError):
        tallylib.io.text.feed(tally, ballots)
    assert tally.totals() == [(('B', 'A'), 1.0)]


import sys
import os
import itertools
from fractions import Fraction

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import tallylib.component.strength as st
import tallylib.component.core
import tallylib.numeric

FRACTION = tallylib.numeric.FRACTION
COUNTS = [0, 1, 2, 5, 17, 100]


@pytest.mark.parametrize(('strength_name', 'support', 'opposition'), [
    (name, sup, opp)
    for name, (sup, opp) in itertools.product(
        st.STRENGTHS.keys(), itertools.product(COUNTS, COUNTS)
    )
])
def test_zero_unless_winning(strength_name, support, opposition):
    strength = st.get(strength_name)(
        Fraction(support), Fraction(opposition), FRACTION
    )
    if support > opposition:
        assert strength > 0 or strength_name == 'losing'
    else:
        assert strength == 0


@pytest.mark.parametrize(('strength_name', 'expected'), [
    ('winning', 30),
    ('margin', 20),
    ('ratio', 3),
    ('losing', 10),
])
def test_value(strength_name, expected):
    assert st.get(strength_name)(
        Fraction(30), Fraction(10), FRACTION
    ) == expected


def test_ratio_unopposed_saturates():
    assert st.ratio(Fraction(5), Fraction(0), FRACTION) == FRACTION.max_value
    assert st.ratio(Fraction(500), Fraction(0), FRACTION) \
        == st.ratio(Fraction(5), Fraction(0), FRACTION)


def test_ratio_unopposed_ceiling():
    ceiling = Fraction(2 ** 80)
    assert st.ratio(Fraction(5), Fraction(0), FRACTION, ceiling=ceiling) \
        == ceiling
    assert st.ratio(Fraction(30), Fraction(10), FRACTION, ceiling=ceiling) == 3
    assert st.ratio(Fraction(1), Fraction(1), FRACTION, ceiling=ceiling) == 0
    assert st.ratio.saturates
    assert not getattr(st.winning, 'saturates', False)


def test_ratio_needs_fractions():
    with pytest.raises(tallylib.numeric.UnsupportedCountType):
        tallylib.component.core.check_count_type(
            st.ratio, tallylib.numeric.INTEGER
        )
    tallylib.component.core.check_count_type(st.ratio, tallylib.numeric.FLOAT)


def test_integer_strengths():
    integer = tallylib.numeric.INTEGER
    assert st.winning(8, 3, integer) == 8
    assert st.margin(8, 3, integer) == 5
    assert st.margin(3, 8, integer) == 0


def test_get():
    for fx_name, fx in st.STRENGTHS.items():
        assert st.get(fx_name) == fx


def test_get_unknown():
    with pytest.raises(KeyError):
        st.get('copeland')

'''Functions to measure the strength of a pairwise link in Schulze's method.

A link strength function takes the support of the link (the count of votes
ranking its source over its target), its opposition (the count for the
reverse ranking) and the count type of the tally. It returns zero unless
the support is strictly larger than the opposition.

All supported link strength functions are assembled in the `STRENGTHS`
dictionary keyed by their name. `get()` retrieves from this dictionary by
string key; `construct()` also accepts callables and passes them through.
'''

from typing import Callable, Optional
from numbers import Number

import tallylib.component.core
from tallylib.numeric import CountType


STRENGTHS = {}


strength_mark, get, construct = tallylib.component.core.register_functions(
    STRENGTHS, 'link strength', Callable[[Number, Number, CountType], Number]
)


@strength_mark
def winning(support: Number,
            opposition: Number,
            count_type: CountType,
            ) -> Number:
    '''Winning votes link strength, the recommended one.

    The strength of a winning link is measured by its support.
    '''
    return support if support > opposition else count_type.zero


@strength_mark
def margin(support: Number,
           opposition: Number,
           count_type: CountType,
           ) -> Number:
    '''Margin link strength: the difference of support and opposition.'''
    return support - opposition if support > opposition else count_type.zero


@strength_mark
@tallylib.component.core.fractional_only
@tallylib.component.core.saturating
def ratio(support: Number,
          opposition: Number,
          count_type: CountType,
          ceiling: Optional[Number] = None,
          ) -> Number:
    '''Ratio link strength: the support divided by the opposition.

    Requires a fractional count type since the ratios are mostly not
    integral. A link with no opposition at all is infinitely strong; it gets
    the ceiling value, so two such links have equal strength regardless of
    their support.

    :param ceiling: Strength of an unopposed link. It must exceed every
        finite ratio of the counts being compared, or the unopposed links
        would lose to some finite ones. Defaults to the maximum value of the
        count type, which is only safe for the bounded count types.
    '''
    if support <= opposition:
        return count_type.zero
    elif opposition == count_type.zero:
        return count_type.max_value if ceiling is None else ceiling
    else:
        return count_type.divide(support, opposition)


@strength_mark
def losing(support: Number,
           opposition: Number,
           count_type: CountType,
           ) -> Number:
    '''Losing votes link strength: the opposition of a winning link.

    Not recommended; it is included for completeness.
    '''
    return opposition if support > opposition else count_type.zero

'''Quota functions used in transferable vote systems.

A quota function takes the total number of votes, the number of seats
to fill and the count type of the tally, and returns the number of votes
required to be elected.

All supported quota functions are assembled in the `QUOTAS` dictionary keyed
by their name. `get()` retrieves from this dictionary by string key;
`construct()` also accepts callables and passes them through.
'''

from typing import Callable
from numbers import Number

import tallylib.component.core
from tallylib.numeric import CountType


QUOTAS = {}


quota_mark, get, construct = tallylib.component.core.register_functions(
    QUOTAS, 'quota', Callable[[Number, int, CountType], Number]
)


@quota_mark
def droop(votes: Number, seats: int, count_type: CountType) -> Number:
    '''Droop quota, the most widely used one.

    It is the smallest integral quota guaranteeing the number of passing
    candidates will not be higher than the number of seats; in single-winner
    elections, it is commonly known as "fifty percent plus one".
    '''
    return (
        count_type.floor(count_type.divide(votes, seats + 1))
        + count_type.one
    )


@quota_mark
@tallylib.component.core.fractional_only
def hagenbach_bischoff(votes: Number,
                       seats: int,
                       count_type: CountType,
                       ) -> Number:
    '''Hagenbach-Bischoff quota, also known as the exact Droop quota.

    Mostly contains a fraction, so it requires a fractional count type.
    '''
    return count_type.divide(votes, seats + 1)


@quota_mark
def hare(votes: Number, seats: int, count_type: CountType) -> Number:
    '''Hare quota, the most basic one.

    For integer counts, the fraction is discarded.
    '''
    return count_type.divide(votes, seats)

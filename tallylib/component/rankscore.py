'''Functions to assign points to ranks in the Borda count and its variants.

A rank scorer takes the position of a candidate on a ballot (zero-based),
the total number of candidates in the tally, the number of candidates marked
on the ballot, and the count type of the tally, and returns the points the
candidate gets from the ballot. The variants differ in how they treat
ballots that do not mark all candidates.

All supported rank scorers are assembled in the `RANK_SCORERS` dictionary
keyed by their name. `get()` retrieves from this dictionary by string key;
`construct()` also accepts callables and passes them through.
'''

from typing import Callable
from numbers import Number

import tallylib.component.core
from tallylib.numeric import CountType


RANK_SCORERS = {}


rank_scorer_mark, get, construct = \
    tallylib.component.core.register_functions(
        RANK_SCORERS, 'rank scorer', Callable[
            [int, int, int, CountType], Number
        ]
    )


@rank_scorer_mark
def borda(position: int,
          n_candidates: int,
          n_marked: int,
          count_type: CountType,
          ) -> Number:
    '''Borda count starting at zero.

    The last of all candidates would get zero points, the first one gets one
    point less than the number of candidates.
    '''
    return count_type.convert(n_candidates - position - 1)


@rank_scorer_mark
def classic_borda(position: int,
                  n_candidates: int,
                  n_marked: int,
                  count_type: CountType,
                  ) -> Number:
    '''Borda count starting at one, as originally proposed.'''
    return count_type.convert(n_candidates - position)


@rank_scorer_mark
@tallylib.component.core.fractional_only
def dowdall(position: int,
            n_candidates: int,
            n_marked: int,
            count_type: CountType,
            ) -> Number:
    '''Dowdall (Nauru) system, a harmonic series scaled to the candidates.

    The first candidate gets as many points as there are candidates, the
    second one half of that, the third one third etc.
    '''
    return count_type.divide(
        count_type.convert(n_candidates),
        count_type.convert(position + 1)
    )


@rank_scorer_mark
def modified_borda(position: int,
                   n_candidates: int,
                   n_marked: int,
                   count_type: CountType,
                   ) -> Number:
    '''Modified Borda count starting at zero.

    Points only go as high as the number of candidates marked on the ballot,
    which encourages voters to rank many candidates.
    '''
    return count_type.convert(n_marked - position - 1)


@rank_scorer_mark
def modified_classic_borda(position: int,
                           n_candidates: int,
                           n_marked: int,
                           count_type: CountType,
                           ) -> Number:
    '''Modified Borda count starting at one.'''
    return count_type.convert(n_marked - position)

'''Various utility functions for other modules of Tallylib.

There should normally be no need to use these functions directly.
'''

import operator
from typing import Any, Iterable, List, Tuple
from numbers import Number


def sorted_votes(votes: Iterable[Tuple[Any, Number]],
                 descending: bool = True,
                 ) -> List[Tuple[Any, Number]]:
    '''Return vote items sorted by value, keeping the order of equal ones.'''
    return list(sorted(
        votes,
        key=operator.itemgetter(1),
        reverse=descending
    ))

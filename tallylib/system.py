"""Named tally setups for the ranked ballot tallies.

The setups are assembled in the ``TALLIES`` dictionary keyed by the names
used on the command line. `get()` retrieves from this dictionary by string
key.
"""

import functools
from typing import Callable, Union

import tallylib.evaluate.borda
import tallylib.evaluate.condorcet
import tallylib.evaluate.sequential
from tallylib.evaluate.core import Tally
from tallylib.numeric import CountType


class TallySystem:
    """A named tally setup. Wraps a tally factory.

    :param name: Human-readable name of the system.
    :param factory: Callable creating the tally, accepting the number of
        winners and a ``count_type`` keyword argument.
    """
    def __init__(self, name: str, factory: Callable[..., Tally]):
        self.name = name
        self.factory = factory

    def __repr__(self) -> str:
        return f'<TallySystem {self.name}>'

    def create(self,
               n_winners: int = 1,
               count_type: Union[str, type, CountType] = int,
               ) -> Tally:
        """Create an empty tally of this system."""
        return self.factory(n_winners, count_type=count_type)


TALLIES = {
    'condorcet': TallySystem(
        'Condorcet (Smith set ranking)',
        tallylib.evaluate.condorcet.CondorcetTally,
    ),
    'schulze': TallySystem(
        'Schulze (winning votes)',
        functools.partial(
            tallylib.evaluate.condorcet.SchulzeTally, variant='winning'
        ),
    ),
    'schulze_margin': TallySystem(
        'Schulze (margins)',
        functools.partial(
            tallylib.evaluate.condorcet.SchulzeTally, variant='margin'
        ),
    ),
    'schulze_ratio': TallySystem(
        'Schulze (ratio)',
        functools.partial(
            tallylib.evaluate.condorcet.SchulzeTally, variant='ratio'
        ),
    ),
    'irv': TallySystem(
        'Instant-runoff voting',
        tallylib.evaluate.sequential.IRVTally,
    ),
    'stv': TallySystem(
        'Single transferable vote (Droop quota)',
        functools.partial(
            tallylib.evaluate.sequential.STVTally, quota='droop'
        ),
    ),
    'borda': TallySystem(
        'Borda count',
        functools.partial(
            tallylib.evaluate.borda.BordaTally, variant='borda'
        ),
    ),
}


def get(name: str) -> TallySystem:
    """Return a tally system by its name."""
    try:
        return TALLIES[name]
    except KeyError:
        raise KeyError(f'unknown tally system: {name}')

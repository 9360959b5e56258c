'''Numeric types used to count votes.

Every tally counts votes in a single numeric type, selected at construction.
Integers are the default and are exact, but some methods (e.g. the ratio
variant of Schulze, or the Hagenbach-Bischoff quota) produce values that are
frequently non-integral; these require a count type that supports fractions
and refuse to work with integers rather than silently truncating.

The supported count types are assembled in the `COUNT_TYPES` dictionary keyed
by their name. `get()` retrieves from this dictionary by string key or by the
Python numeric type itself; `construct()` also passes :class:`CountType`
objects through.
'''

import sys
import decimal
import math
from decimal import Decimal
from fractions import Fraction
from typing import Any, Union
from numbers import Number


class UnsupportedCountType(Exception):
    '''A count type cannot provide what the tally setup requires.

    Raised when the tally is constructed, never deferred to produce silently
    wrong results.
    '''
    pass


class CountType:
    '''A numeric type used to count votes.

    :param name: Name of the count type in the registry.
    :param python_type: Type of the counted values.
    :param is_fractional: Whether the type can represent non-integral values.
    '''
    def __init__(self, name: str, python_type: type, is_fractional: bool):
        self.name = name
        self.python_type = python_type
        self.is_fractional = is_fractional

    def __repr__(self) -> str:
        return f'<CountType {self.name}>'

    @property
    def zero(self) -> Number:
        return self.python_type(0)

    @property
    def one(self) -> Number:
        return self.python_type(1)

    @property
    def max_value(self) -> Number:
        '''A large representable value, the default saturation ceiling.

        This is only an upper bound for the bounded types (float, decimal).
        Integers and fractions can exceed it, so callers that need a value
        above all values they produce must compute their own ceiling.
        '''
        raise NotImplementedError

    def is_finite(self, value: Number) -> bool:
        '''Whether the value is a finite number (not infinite or NaN).'''
        return True

    def convert(self, value: Any) -> Number:
        '''Convert a value to this count type exactly.

        :raises UnsupportedCountType: If the value cannot be represented
            without loss (e.g. a fractional weight for an integer count).
        '''
        if isinstance(value, bool) or not isinstance(value, Number):
            raise UnsupportedCountType(
                f'{value!r} is not a number usable as a {self.name} count'
            )
        if isinstance(value, self.python_type):
            return value
        try:
            return self.python_type(value)
        except (TypeError, ValueError) as err:
            raise UnsupportedCountType(
                f'{value!r} cannot be converted to a {self.name} count'
            ) from err

    def parse(self, text: str) -> Number:
        '''Parse a count value from its textual representation.

        :raises ValueError: If the text is not a valid number of this type.
        '''
        return self.python_type(text)

    def floor(self, value: Number) -> Number:
        return value

    def divide(self, numerator: Number, denominator: Number) -> Number:
        '''Divide in the count type (floor division for integer types).'''
        return numerator / denominator

    def require_fractional(self, purpose: str) -> None:
        '''Check that the count type supports fractional values.

        :param purpose: What needs the fractions, for the error message.
        :raises UnsupportedCountType: If the count type is integral.
        '''
        if not self.is_fractional:
            raise UnsupportedCountType(
                f'{purpose} cannot be used with the {self.name} count type,'
                ' use a fractional one (float, fraction, decimal)'
            )


class IntegerCount(CountType):
    def __init__(self):
        super().__init__('int', int, False)

    @property
    def max_value(self) -> int:
        return sys.maxsize

    def convert(self, value: Any) -> int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        if isinstance(value, Number) and not isinstance(value, bool):
            try:
                integral = int(value)
            except (TypeError, ValueError, OverflowError) as err:
                raise UnsupportedCountType(
                    f'{value!r} cannot be used as an integer count'
                ) from err
            if integral == value:
                return integral
        raise UnsupportedCountType(
            f'{value!r} is not integral, use a fractional count type'
        )

    def parse(self, text: str) -> int:
        return int(text, 10)

    def divide(self, numerator: int, denominator: int) -> int:
        return numerator // denominator


class FloatCount(CountType):
    def __init__(self):
        super().__init__('float', float, True)

    @property
    def max_value(self) -> float:
        return sys.float_info.max

    def is_finite(self, value: float) -> bool:
        return math.isfinite(value)

    def floor(self, value: float) -> float:
        return float(math.floor(value))


class FractionCount(CountType):
    def __init__(self):
        super().__init__('fraction', Fraction, True)

    @property
    def max_value(self) -> Fraction:
        return Fraction(2 ** 64 - 1)

    def floor(self, value: Fraction) -> Fraction:
        return Fraction(math.floor(value))


class DecimalCount(CountType):
    def __init__(self):
        super().__init__('decimal', Decimal, True)

    @property
    def max_value(self) -> Decimal:
        context = decimal.getcontext()
        return Decimal((0, (9, ) * context.prec, context.Emax - context.prec + 1))

    def is_finite(self, value: Decimal) -> bool:
        return value.is_finite()

    def convert(self, value: Any) -> Decimal:
        if isinstance(value, Fraction):
            return Decimal(value.numerator) / Decimal(value.denominator)
        return super().convert(value)

    def parse(self, text: str) -> Decimal:
        try:
            return Decimal(text)
        except decimal.InvalidOperation as err:
            raise ValueError(f'invalid decimal: {text!r}') from err

    def floor(self, value: Decimal) -> Decimal:
        return value.to_integral_value(rounding=decimal.ROUND_FLOOR)


INTEGER = IntegerCount()
FLOAT = FloatCount()
FRACTION = FractionCount()
DECIMAL = DecimalCount()

COUNT_TYPES = {
    count_type.name: count_type
    for count_type in (INTEGER, FLOAT, FRACTION, DECIMAL)
}
_BY_PYTHON_TYPE = {
    count_type.python_type: count_type for count_type in COUNT_TYPES.values()
}


def get(type_def: Union[str, type]) -> CountType:
    '''Return a count type by its name or Python type.

    :raises UnsupportedCountType: If no such count type is supported.
    '''
    try:
        if isinstance(type_def, type):
            return _BY_PYTHON_TYPE[type_def]
        else:
            return COUNT_TYPES[type_def]
    except (KeyError, TypeError):
        raise UnsupportedCountType(f'unknown count type: {type_def!r}')


def construct(type_def: Union[str, type, CountType]) -> CountType:
    '''Construct a count type; pass :class:`CountType` objects through.'''
    return type_def if isinstance(type_def, CountType) else get(type_def)

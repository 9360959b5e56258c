'''Common functionality for components.

Functions to build function registers and retrievers around them.
There should normally be no need to use these functions directly.
'''

from typing import Callable, Dict, Union

from tallylib.numeric import CountType


def marker(register: Dict[str, Callable],
           name: str,
           signature,
           ) -> Callable[[Callable], Callable]:
    '''A registration decorator factory.'''
    def mark_function(func):
        register[func.__name__] = func
        return func
    return mark_function


def getter(register: Dict[str, Callable],
           name: str,
           signature,
           ) -> Callable[[str], Callable]:
    '''A register retriever factory.'''
    def get(func_def: str) -> signature:
        try:
            return register[func_def]
        except KeyError:
            raise KeyError(f'unknown {name}: {func_def}')
    get.__doc__ = f'Return a {name} function by its name.'
    return get


def constructer(register: Dict[str, Callable],
                name: str,
                signature,
                ) -> Callable[[Union[str, Callable]], Callable]:
    '''A register implicit retriever/passthrough function factory.'''
    get = getter(register, name, signature)

    def construct(func_def: Union[str, signature]
                  ) -> signature:
        return func_def if hasattr(func_def, '__call__') else get(func_def)

    construct.__doc__ = (
        f'Construct a {name} function.\n\n'
        f'Get a {name} function by its name from the register. If a custom\n'
        'callable is given, pass it through unchanged.'
    )
    return construct


def register_functions(*args, **kwargs):
    '''Construct the marker, getter and constructer functions at one call.'''
    return (
        marker(*args, **kwargs),
        getter(*args, **kwargs),
        constructer(*args, **kwargs),
    )


def fractional_only(func: Callable) -> Callable:
    '''Mark a component function as requiring a fractional count type.'''
    func.requires_fractional = True
    return func


def saturating(func: Callable) -> Callable:
    '''Mark a component function as saturating at a caller-given ceiling.

    The function accepts a ``ceiling`` keyword argument, the value it
    returns for an unbounded result. The caller should pass a value above
    every bounded result the function can give for its data.
    '''
    func.saturates = True
    return func


def check_count_type(func: Callable, count_type: CountType) -> None:
    '''Check that a component function can work with the count type.

    :raises tallylib.numeric.UnsupportedCountType: If the function is marked
        as :func:`fractional_only` and the count type is integral.
    '''
    if getattr(func, 'requires_fractional', False):
        count_type.require_fractional(getattr(func, '__name__', repr(func)))

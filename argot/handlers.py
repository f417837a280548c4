"""
Argot handlers: coercion callables and their compiled form.

Overview
- flag(callable): mark a coercion callable as a flag handler, so the scanner never
  consumes a following token for it and feeds it the fixed value True instead.
- COUNT: built-in flag handler that counts occurrences (-vvv -> 3).
- Handler: tagged variant built once per specification entry by the compiler.
  • kind: Kind.SCALAR (last value wins) or Kind.REPEATABLE (values accumulate).
  • flag: takes no following token.
  • numeric: scalar int/float coercion, allowed to take a negative number
    ("-5", "-.5") as its value.
  • reduce(state, value, name): the reducer threaded by the scanner.

Calling convention
- Coercion callables are called as callable(value, name, previous), trimmed to the
  positional parameters they accept. Classes (int, float, str, bool, Path, ...)
  are called with the raw value only.
- When there is no previous value, `previous` is omitted if the callable gives it
  a default, and passed as None otherwise.

Quick example
    >>> from argot import parse, flag, COUNT
    >>> parse({"-v": COUNT, "--tag": [str]}, ["-vv", "--tag", "a", "--tag", "b"])
    {'_': [], '-v': 2, '--tag': ['a', 'b']}
"""
import builtins
import inspect
from enum import IntEnum
from inspect import Parameter

from .utils import *

# scalar coercions accepting a negative number as their value token
_NUMERIC = (int, float)


class Kind(IntEnum):
    SCALAR = 1
    REPEATABLE = 2


def _adapter(callable, /):
    """
    Build a (value, name, previous) trampoline for a coercion callable.

    Raises TypeError when the callable requires more than those three arguments.
    """
    if isinstance(callable, type):
        return lambda value, name, previous: callable(value)

    try:
        parameters = inspect.signature(callable).parameters.values()
    except (TypeError, ValueError):  # builtins without signature metadata
        return lambda value, name, previous: callable(value)

    positional = [
        parameter for parameter in parameters
        if parameter.kind in (Parameter.POSITIONAL_ONLY, Parameter.POSITIONAL_OR_KEYWORD)
    ]
    for parameter in parameters:
        if parameter.default is not Parameter.empty:
            continue
        if parameter.kind is Parameter.KEYWORD_ONLY or parameter in positional[3:]:
            raise TypeError("%s() must accept (value, name, previous) but requires %r" % (
                getattr(callable, "__name__", "handler"), parameter.name))

    if len(positional) < 3 and any(parameter.kind is Parameter.VAR_POSITIONAL for parameter in parameters):
        arity, optional = 3, True
    else:
        arity = min(len(positional), 3)
        optional = arity == 3 and positional[2].default is not Parameter.empty

    def invoke(value, name, previous):
        if previous is Unset:
            if arity == 3 and optional:
                return callable(value, name)
            previous = None
        return callable(*(value, name, previous)[:arity])

    return rename(invoke, getattr(callable, "__name__", "invoke"))


def is_flag(callable, /):
    """
    Return True when the callable is the boolean coercion or was marked by flag().
    """
    return callable is bool or getattr(callable, "__flag__", False) is True


def flag(callable, /):
    """
    Mark a coercion callable as a flag handler and return it.

    The callable keeps its own coercion logic; it is simply invoked with True
    instead of a following token. Callables that refuse new attributes
    (built-ins such as str or int) are wrapped first.

    Raises
    - TypeError: when the argument is not callable.
    """
    if not builtins.callable(callable):
        raise TypeError("flag() argument must be callable")
    try:
        callable.__flag__ = True
        return callable
    except (AttributeError, TypeError):
        pass

    adapted = _adapter(callable)

    def wrapper(value, name, previous=Unset, /):
        return adapted(value, name, previous)

    wrapper.__flag__ = True
    return rename(wrapper, getattr(callable, "__name__", "flag"))


def _count(value, name, previous=0, /):
    return (previous or 0) + 1


COUNT = flag(rename(_count, "COUNT"))
"""
Flag handler counting its occurrences; the raw value is ignored.
"""


class Handler:
    """
    Compiled form of a specification entry.

    Built once per entry at compile time so the scanner never re-inspects the
    user callables while reading tokens.

    Raises TypeError when the callable requires more than (value, name, previous).
    """
    __slots__ = ("kind", "coerce", "flag", "numeric", "_invoke")

    def __init__(self, kind, coerce, /):
        if not isinstance(kind, Kind):
            raise TypeError("Handler() first argument must be a kind")
        if not callable(coerce):
            raise TypeError("Handler() second argument must be callable")
        self.kind = kind
        self.coerce = coerce
        self.flag = is_flag(coerce)
        self.numeric = kind is Kind.SCALAR and coerce in _NUMERIC
        self._invoke = _adapter(coerce)

    def reduce(self, state, value, name, /):
        """
        Fold one raw value into the accumulated state for `name`.

        - SCALAR: the coerced value replaces the state (the callable still sees
          the previous state, which is how COUNT accumulates).
        - REPEATABLE: the coerced value is appended to the state list, created on
          first use; the callable sees the last appended value as previous.

        `state` is Unset when nothing was stored yet.
        """
        if self.kind is Kind.SCALAR:
            return self._invoke(value, name, state)
        state = coalesce(state, [])
        state.append(self._invoke(value, name, state[-1] if state else Unset))
        return state

    def __rich_repr__(self):
        yield "kind", self.kind.name.lower()
        yield "coerce", self.coerce
        yield "flag", self.flag
        yield "numeric", self.numeric

    def __repr__(self):
        return "handler(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())


__all__ = (
    "Kind",
    "Handler",
    "is_flag",
    "flag",
    "COUNT",
)

"""
Argot specification compiler.

build(spec) validates an option specification and turns it into a Table:
- aliases: key -> target key, for string-valued entries (chains are resolved
  lazily by Table.resolve, a missing target surfaces as an unknown option).
- handlers: canonical key -> Handler, for callables (Kind.SCALAR) and one-element
  lists/tuples of a callable (Kind.REPEATABLE).

Every specification fault is triggered here, before a single token is read.
Checks run per key in a fixed order: empty key, key without '-', lone '-',
then (for non-aliases) handler shape and short key length. Alias cycles are
checked once all keys are known.
"""
from collections.abc import Mapping

from .faults import *
from .handlers import Kind, Handler


class Table:
    """
    Lookup tables produced by build(); fresh for every parse.
    """
    __slots__ = ("aliases", "handlers")

    def __init__(self, aliases, handlers, /):
        self.aliases = aliases
        self.handlers = handlers

    def resolve(self, key, /):
        """
        Follow alias chains until a non-alias key is reached.
        """
        while key in self.aliases:
            key = self.aliases[key]
        return key

    def keys(self):
        return self.aliases.keys() | self.handlers.keys()

    def __rich_repr__(self):
        yield "aliases", self.aliases
        yield "handlers", self.handlers

    def __repr__(self):
        return "table(aliases=%r, handlers=%r)" % (self.aliases, self.handlers)


def _handler(value):
    """
    Return the Handler for a non-alias specification value, or None when its shape is invalid.
    A callable requiring more than (value, name, previous) raises TypeError.
    """
    if isinstance(value, list | tuple):
        if len(value) == 1 and callable(value[0]):
            return Handler(Kind.REPEATABLE, value[0])
        return None
    if callable(value):
        return Handler(Kind.SCALAR, value)
    return None


def _check_cycles(aliases, /, **options):
    for key in aliases:
        chain = [key]
        target = aliases[key]
        while target in aliases:
            if target in chain:
                trigger(AliasCycleError(
                    "alias %r never resolves to an option (%s)" % (key, " -> ".join(chain + [target])),
                    input=key,
                    chain=tuple(chain + [target]),
                    hint="point one of the aliases at a key bound to a handler",
                    docs=getdoc(FaultCode.ALIAS_CYCLE),
                ), **options)
            chain.append(target)
            target = aliases[target]


def build(spec, /, **options):
    """
    Validate `spec` and compile it into a Table.

    parameters
    - spec: Mapping[str, str | Callable | list[Callable] | tuple[Callable]]
    - options: runtime options forwarded to trigger() (shell, fancy, colorful, prog).

    raises
    - NoSpecError when spec is None; TypeError when it is not a mapping or holds
      a non-string key.
    - EmptyKeyError, NonOptKeyError, NoNameKeyError, InvalidTypeError,
      ShortOptTooLongError, AliasCycleError (see argot.faults).
    """
    if spec is None:
        trigger(NoSpecError(
            "argument specification is required",
            hint="pass a mapping of option keys to handlers (for example: {'--port': int})",
            docs=getdoc(FaultCode.NO_SPEC),
        ), **options)
    if not isinstance(spec, Mapping):
        raise TypeError("build() argument must be a mapping")

    aliases = {}
    handlers = {}

    for key, value in spec.items():
        if not isinstance(key, str):
            raise TypeError("build() argument keys must be strings")

        if not key:
            trigger(EmptyKeyError(
                "option key cannot be an empty string",
                input=key,
                hint="name the option (for example: '--name' or '-n')",
                docs=getdoc(FaultCode.EMPTY_KEY),
            ), **options)

        if key[0] != "-":
            trigger(NonOptKeyError(
                "option key must start with '-' but found %r" % key,
                input=key,
                hint="use %r or %r" % ("--" + key, "-" + key[0]),
                docs=getdoc(FaultCode.NONOPT_KEY),
            ), **options)

        if len(key) == 1:
            trigger(NoNameKeyError(
                "option key must have a name; a lone '-' is not allowed",
                input=key,
                hint="add a name after the dash (for example: '-n')",
                docs=getdoc(FaultCode.NONAME_KEY),
            ), **options)

        if isinstance(value, str):
            aliases[key] = value
            continue

        try:
            handler = _handler(value)
        except TypeError as error:
            fault = InvalidTypeError(
                "handler for %r has an unsupported signature: %s" % (key, error),
                input=key,
                value=value,
                hint="accept at most (value, name, previous) positionally",
                docs=getdoc(FaultCode.INVALID_TYPE),
            )
            fault.__cause__ = error
            trigger(fault, **options)

        if handler is None:
            trigger(InvalidTypeError(
                "handler for %r must be a callable, a one-element list of a callable, or an alias string" % key,
                input=key,
                value=value,
                hint="use a coercion such as str, int, [str] or another option key",
                docs=getdoc(FaultCode.INVALID_TYPE),
            ), **options)

        if key[1] != "-" and len(key) > 2:
            trigger(ShortOptTooLongError(
                "short option key %r must have only one character" % key,
                input=key,
                hint="use %r or the long form %r" % (key[:2], "-" + key),
                docs=getdoc(FaultCode.SHORTOPT_TOOLONG),
            ), **options)

        handlers[key] = handler

    _check_cycles(aliases, **options)

    return Table(aliases, handlers)


__all__ = (
    "Table",
    "build",
)

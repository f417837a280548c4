"""
Argot token scanner.

scan(table, tokens) performs a single left-to-right pass over the tokens and
returns a Result.

Token classes
- "--": every following token is a positional, verbatim.
- option token: longer than one character and starting with '-'.
  • "--name" / "--name=value" and two-character "-x" are single units; inline
    values are split on the first '=' of double-dash units only.
  • any other single-dash token is a cluster: "-abc" reads as "-a", "-b", "-c".
- anything else (including "-" itself) is a positional.

Per unit
- resolve aliases; unknown names become positionals in permissive mode, faults otherwise.
- a value-taking option must close its cluster.
- flags reduce with True; other options reduce with their inline value or with the
  next whole token. An option-shaped next token is never taken as a value, except
  a negative number for a numeric handler ("-n -5").

Positions in messages are 1-based token ordinals ("at third position").
"""
import difflib
import re
from collections import deque

from .faults import *
from .utils import *

# optional leading dash, digits, optional '.' followed by a digit, digits
_NUMBER = re.compile(r"-?\d*(\.(?=\d))?\d*")


class Result(dict):
    """
    Parse result: canonical option key -> value, plus "_" -> list of positionals.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.setdefault("_", [])

    @property
    def positionals(self):
        return self["_"]

    @property
    def options(self):
        return {key: value for key, value in self.items() if key != "_"}


def _ordinal(number):
    """
    Return a human-friendly ordinal label for a 1-based position.
    """
    try:
        return {
            1: "first",
            2: "second",
            3: "third",
            4: "fourth",
            5: "fifth",
            6: "sixth",
            7: "seventh",
            8: "eighth",
            9: "ninth",
            10: "tenth",
        }[number]
    except KeyError:
        pass

    if 10 < number % 100 < 20:
        return f"{number}th"

    return f'{number}%s' % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


def _is_option(token):
    return len(token) > 1 and token[0] == "-"


def _explode(token):
    """
    Split an option token into (raw, input, value) units; value is Unset when not inline.
    """
    if token[1] == "-":
        input, separator, value = token.partition("=")
        return [(token, input, value if separator else Unset)]
    if len(token) == 2:
        return [(token, token, Unset)]
    return [("-" + char, "-" + char, Unset) for char in token[1:]]


class Scanner:
    """
    One-shot scanner over a token stream.

    state
    - _tokens: deque of the tokens not read yet.
    - _index: 1-based ordinal of the last token read (used in messages).
    - _result: the Result being filled.
    """

    def __init__(self, table, /, *, permissive=False, stop_at_positional=False, **options):
        self.table = table
        self.permissive = bool(permissive)
        self.stop_at_positional = bool(stop_at_positional)
        self.options = options

    def trigger(self, fault, /):
        trigger(fault, **self.options)

    def _unknown(self, input):
        suggestions = difflib.get_close_matches(input, self.table.keys(), 5)
        try:
            hint = "did you mean %r? pass it after '--' to keep it as a positional" % suggestions[0]
        except IndexError:
            hint = "remove it or pass it after '--' to keep it as a positional"
        self.trigger(UnknownOptionError(
            "unknown or unexpected option %r at %s position" % (input, _ordinal(self._index)),
            input=input,
            index=self._index,
            suggestions=suggestions,
            hint=hint,
            docs=getdoc(FaultCode.UNKNOWN_OPTION),
        ))

    def _getvalue(self, handler, input, name):
        """
        take the value of a non-flag option from the next whole token.
        """
        if not self._tokens or (
                _is_option(self._tokens[0]) and not (handler.numeric and _NUMBER.fullmatch(self._tokens[0]))
        ):
            extended = "" if input == name else " (alias for %r)" % name
            if input[1] == "-":
                hint = "pass a value after it (for example: %s <value> or %s=<value>)" % (input, input)
            else:
                hint = "pass a value after it (for example: %s <value>)" % input
            self.trigger(MissingLongArgError(
                "option %r%s at %s position requires a value" % (input, extended, _ordinal(self._index)),
                input=input,
                name=name,
                index=self._index,
                hint=hint,
                docs=getdoc(FaultCode.MISSING_REQUIRED_LONGARG),
            ))
        self._index += 1
        return self._tokens.popleft()

    def _reduce(self, handler, input, name, value):
        try:
            return handler.reduce(self._result.get(name, Unset), value, name)
        except ValueError as error:
            fault = InvalidValueError(
                "invalid value %r for option %r at %s position: %s" % (value, input, _ordinal(self._index), error),
                input=input,
                name=name,
                value=value,
                index=self._index,
                hint="check the expected format of %r" % input,
                docs=getdoc(FaultCode.INVALID_VALUE),
            )
            fault.__cause__ = error
            self.trigger(fault)

    def _parse_option(self, token):
        units = _explode(token)
        for offset, (raw, input, value) in enumerate(units):
            name = self.table.resolve(input)
            try:
                handler = self.table.handlers[name]
            except KeyError:
                if self.permissive:
                    self._result["_"].append(raw)
                    continue
                self._unknown(input)

            if not handler.flag and offset + 1 < len(units):
                self.trigger(MissingShortArgError(
                    "option %r at %s position requires a value but was followed by another short option" % (
                        input, _ordinal(self._index)
                    ),
                    input=input,
                    name=name,
                    index=self._index,
                    hint="move %r to the end of the cluster or pass it on its own (for example: %s <value>)" % (
                        input, input
                    ),
                    docs=getdoc(FaultCode.MISSING_REQUIRED_SHORTARG),
                ))

            if handler.flag:
                value = True
            elif value is Unset:
                value = self._getvalue(handler, input, name)
            elif not value:
                self.trigger(EmptyValueWarning(
                    "empty inline value for option %r at %s position" % (input, _ordinal(self._index)),
                    input=input,
                    name=name,
                    index=self._index,
                    hint="add a value after '=' (for example: %s=<value>)" % input,
                    docs=getdoc(FaultCode.EMPTY_INLINE_VALUE),
                ))

            self._result[name] = self._reduce(handler, input, name, value)

    def scan(self, tokens, /):
        """
        read every token and return the Result.
        """
        self._tokens = deque(tokens)
        self._index = 0
        self._result = Result()

        positionals = self._result["_"]
        while self._tokens:
            if self.stop_at_positional and positionals:
                positionals.extend(self._tokens)
                break

            token = self._tokens.popleft()
            self._index += 1

            if token == "--":
                positionals.extend(self._tokens)
                break

            if _is_option(token):
                self._parse_option(token)
            else:
                positionals.append(token)

        return self._result


def scan(table, tokens, /, *, permissive=False, stop_at_positional=False, **options):
    """
    Scan `tokens` against a compiled Table and return a Result.

    parameters
    - table: Table from argot.compiler.build().
    - tokens: iterable of str, used verbatim.
    - permissive: unknown options become positionals instead of faults.
    - stop_at_positional: everything after the first positional is positional.
    - options: runtime options forwarded to trigger() (shell, fancy, colorful, prog).
    """
    return Scanner(table, permissive=permissive, stop_at_positional=stop_at_positional, **options).scan(tokens)


__all__ = (
    "Result",
    "Scanner",
    "scan",
)

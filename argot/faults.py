"""
Argot faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable string identifiers for every fault the parser
  can surface. Codes prefixed with ARG_CONFIG_ are specification faults (caller
  bugs, never influenced by input tokens); the others are input faults.
- ArgumentError / ArgumentWarning: base types that carry a message + options and
  know how to render themselves in a short, lowercased, actionable way.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

Integration
- The compiler and the scanner build faults at the point of detection and call
  trigger(fault, **options).
- In non-shell mode, errors are raised and warnings are emitted through the
  warnings module; in shell mode, both are rendered via rich on stderr and
  errors end the process with exit status 1.

Host configuration (optional attributes of __main__)
- __prog__: program name shown in rendered headers.
- __styles__: rich style overrides keyed by style slot (see _STYLES).
- __codes__: mapping FaultCode -> label, used by FaultCode.normalize().
- __docs__: mapping FaultCode -> short documentation string, used by getdoc().
"""
import inspect
import os.path
import sys
import warnings
from collections import defaultdict
from enum import StrEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

console = Console(stderr=True)

_STYLES = {
    # header parts
    "prog-name": "bold #E6E6F0",  # near-white program name
    "error-code": "bold #00E5FF",  # neon cyan fault code
    "error-title": "bold #FF4DA6",  # pinky title
    "warning-code": "bold #FFB400",  # amber fault code for warnings
    "warning-title": "bold #FFC2E0",  # softer pinky title for warnings

    # body
    "message": "#C8C8D0",  # soft light gray message
    "hint-arrow": "#9CE19C dim",  # green arrow
    "hint": "italic #9CE19C",  # green hint text
}


class FaultCode(StrEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - specification (ARG_CONFIG_*), raised while compiling, before any token is read
      • NO_SPEC, EMPTY_KEY, NONOPT_KEY, NONAME_KEY, INVALID_TYPE, SHORTOPT_TOOLONG,
        ALIAS_CYCLE
    - input (ARG_*), raised while scanning tokens
      • UNKNOWN_OPTION, MISSING_REQUIRED_SHORTARG, MISSING_REQUIRED_LONGARG,
        INVALID_VALUE
    - warnings
      • EMPTY_INLINE_VALUE
    """
    # --- specification errors ---
    NO_SPEC                   = "ARG_CONFIG_NO_SPEC"
    EMPTY_KEY                 = "ARG_CONFIG_EMPTY_KEY"
    NONOPT_KEY                = "ARG_CONFIG_NONOPT_KEY"
    NONAME_KEY                = "ARG_CONFIG_NONAME_KEY"
    INVALID_TYPE              = "ARG_CONFIG_VAD_TYPE"
    SHORTOPT_TOOLONG          = "ARG_CONFIG_SHORTOPT_TOOLONG"
    ALIAS_CYCLE               = "ARG_CONFIG_ALIAS_CYCLE"

    # --- input errors ---
    UNKNOWN_OPTION            = "ARG_UNKNOWN_OPTION"
    MISSING_REQUIRED_SHORTARG = "ARG_MISSING_REQUIRED_SHORTARG"
    MISSING_REQUIRED_LONGARG  = "ARG_MISSING_REQUIRED_LONGARG"
    INVALID_VALUE             = "ARG_INVALID_VALUE"

    # --- warnings ---
    EMPTY_INLINE_VALUE        = "ARG_EMPTY_INLINE_VALUE"

    def normalize(self):
        """
        return a host-normalized label for this code.

        the host application can provide a __codes__ mapping in __main__ to relabel
        codes; when no mapping is present, the code value itself is returned.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _prog(options):
    return options.get("prog") or getattr(__import__("__main__"), "__prog__", None) or os.path.basename(sys.argv[0])


class _Renderable:
    """
    shared rendering for errors and warnings.

    subclasses provide `code` and `title` as class attributes and a `__kind__`
    ("error" or "warning") used to pick style slots.
    """
    __kind__ = "error"

    def __init__(self, message, /, **options):
        if not isinstance(message, str):
            raise TypeError(f"{type(self).__name__}() message must be a string")
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def hint(self):
        return self.options.get("hint")

    def __rich__(self):
        styles = defaultdict(str, _STYLES | getattr(__import__("__main__"), "__styles__", {}))
        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), styles[style] if colorful else "")

        header = Text.assemble(
            "[ ",
            text(_prog(self.options), "prog-name"),
            " — ",
            text(self.code.normalize() if self.code else "", self.__kind__ + "-code"),
            " | ",
            text(self.title.title(), self.__kind__ + "-title"),
            " ]"
        )
        message = text(self.message, "message")
        renders = [message]
        if self.hint:
            renders.append(Text.assemble(text(" → ", "hint-arrow"), text(self.hint, "hint")))

        if fancy:
            return Panel(Group(*renders), title=header, title_align="left")
        return Group(header, *renders)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        fault = type(self)(self.message, **{**self.options, **overrides})
        fault.__cause__ = self.__cause__
        return fault


class ArgumentError(_Renderable, Exception):
    """
    base class of every parser error.

    attributes
    - message: human-readable, lowercased description.
    - code: FaultCode (machine-readable, stable).
    - options: read-only mapping of context (input, name, index, hint, ...).
    """
    code = None
    title = "argument error"

    def __trigger__(self):
        if not self.options.get("shell"):
            raise self from self.__cause__
        console.print(self)
        sys.exit(1)


class SpecificationError(ArgumentError): ...
class InputError(ArgumentError): ...


class NoSpecError(SpecificationError):
    code = FaultCode.NO_SPEC
    title = "missing specification"

class EmptyKeyError(SpecificationError):
    code = FaultCode.EMPTY_KEY
    title = "empty option key"

class NonOptKeyError(SpecificationError):
    code = FaultCode.NONOPT_KEY
    title = "key is not an option"

class NoNameKeyError(SpecificationError):
    code = FaultCode.NONAME_KEY
    title = "option key without name"

class InvalidTypeError(SpecificationError):
    code = FaultCode.INVALID_TYPE
    title = "invalid handler type"

class ShortOptTooLongError(SpecificationError):
    code = FaultCode.SHORTOPT_TOOLONG
    title = "short option too long"

class AliasCycleError(SpecificationError):
    code = FaultCode.ALIAS_CYCLE
    title = "alias cycle"


class UnknownOptionError(InputError):
    code = FaultCode.UNKNOWN_OPTION
    title = "unknown option"

class MissingShortArgError(InputError):
    code = FaultCode.MISSING_REQUIRED_SHORTARG
    title = "option value required"

class MissingLongArgError(InputError):
    code = FaultCode.MISSING_REQUIRED_LONGARG
    title = "option value required"

class InvalidValueError(InputError):
    code = FaultCode.INVALID_VALUE
    title = "invalid option value"


class ArgumentWarning(_Renderable, Warning):
    """
    base class of every parser warning; same shape as ArgumentError.
    """
    __kind__ = "warning"
    code = None
    title = "argument warning"

    def __trigger__(self):
        if not self.options.get("shell"):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)


class EmptyValueWarning(ArgumentWarning):
    code = FaultCode.EMPTY_INLINE_VALUE
    title = "empty inline value"


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via rich console; otherwise errors are raised
      and warnings are emitted.

    typical options
    - shell, fancy, colorful, prog, hint, and any context the reporter may want to
      keep (input, name, index, value).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys are
    FaultCode instances and values are short documentation strings. returns None
    when nothing is found.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "ArgumentError",
    "SpecificationError",
    "InputError",
    "NoSpecError",
    "EmptyKeyError",
    "NonOptKeyError",
    "NoNameKeyError",
    "InvalidTypeError",
    "ShortOptTooLongError",
    "AliasCycleError",
    "UnknownOptionError",
    "MissingShortArgError",
    "MissingLongArgError",
    "InvalidValueError",
    "ArgumentWarning",
    "EmptyValueWarning",
    "trigger",
    "getdoc",
)

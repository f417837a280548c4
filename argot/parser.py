"""
Argot entry point.

parse(spec, tokens) compiles the specification (argot.compiler.build) and scans
the tokens (argot.scanner.scan), returning the Result.

Quick start
    from argot import parse, COUNT

    result = parse({
        "--port": int,
        "--tag": [str],
        "--verbose": COUNT,
        "-p": "--port",
        "-v": "--verbose",
    }, "-vv -p 8080 --tag a --tag b serve")

    result["--port"]     # 8080
    result["--tag"]      # ['a', 'b']
    result["--verbose"]  # 2
    result["_"]          # ['serve']

Token sources
- tokens omitted: read from `source()`; the default source is argv(), the host
  process arguments without the program name. Pass another callable to inject
  a different collaborator (tests, embedded shells).
- str: split with shlex.split (shell-like quoting).
- Iterable[str]: used verbatim.
"""
import shlex
import sys
from collections.abc import Iterable

from .compiler import build
from .scanner import scan
from .utils import *


def argv():
    """
    Default token source: the host process arguments without the program name.
    """
    return sys.argv[1:]


def _tokenize(tokens, source):
    if tokens is Unset:
        if not callable(source):
            raise TypeError("parse() 'source' must be callable")
        tokens = source()
    if isinstance(tokens, str):
        return shlex.split(tokens)
    if not isinstance(tokens, Iterable):
        raise TypeError("parse() tokens must be a string or an iterable of strings")
    tokens = list(tokens)
    for token in tokens:
        if not isinstance(token, str):
            raise TypeError("parse() tokens must be a string or an iterable of strings")
    return tokens


def parse(
        spec,
        tokens=Unset,
        /,
        *,
        permissive=False,
        stop_at_positional=False,
        source=argv,
        shell=False,
        fancy=False,
        colorful=True,
        prog=Unset
):
    """
    Parse tokens against an option specification.

    Parameters
    - spec: Mapping[str, str | Callable | list[Callable] | tuple[Callable]]
      Option key -> alias target, coercion callable, or one-element list of a
      coercion callable (repeatable).
    - tokens: Unset | str | Iterable[str]
      See "Token sources" in the module docstring.
    - permissive: bool
      Unknown options become positionals instead of faults.
    - stop_at_positional: bool
      Every token after the first positional is a positional.
    - source: Callable[[], Iterable[str]]
      Token source used when tokens are omitted.
    - shell: bool
      Render faults on stderr (errors exit with status 1) instead of raising.
    - fancy: bool
      Render faults inside a panel (shell mode).
    - colorful: bool
      Colorize rendered faults (shell mode).
    - prog: Unset | str
      Program name shown in rendered faults.

    Returns
    - Result: dict of canonical option key -> value, plus "_" -> positionals.

    Raises
    - SpecificationError subclasses before any token is read.
    - InputError subclasses while scanning.
    - TypeError for a non-mapping spec, non-string keys or tokens, or a
      non-callable source.
    """
    options = {
        "shell": bool(shell),
        "fancy": bool(fancy),
        "colorful": bool(colorful),
    }
    if prog is not Unset:
        options["prog"] = prog

    table = build(spec, **options)
    return scan(
        table,
        _tokenize(tokens, source),
        permissive=permissive,
        stop_at_positional=stop_at_positional,
        **options
    )


__all__ = (
    "argv",
    "parse",
)

"""
Clipper faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every parse or registry
  issue. Codes are grouped by domain to keep copy consistent and make
  logs/searches predictable.
- CommandException / CommandWarning: base types that carry a message plus an
  immutable mapping of options (title, code, hint and per-fault context) and know
  how to render themselves through rich.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

Contract with the core
- The registry and the parser only ever raise (or warn); they never print. A
  caller that wants friendly output catches CommandException and hands it to
  trigger(fault, shell=True, ...).

Host overrides (read from __main__)
- __styles__: palette overrides for rendering.
- __codes__: mapping FaultCode → label used instead of the numeric id.
- __docs__: mapping FaultCode → short documentation string.
- __prog__: program name shown in fault headers.
"""
import copy
import inspect
import sys
import warnings
from abc import ABC
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, progname

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    grouping (by high-level domain)
    - tokens (1111x)
      • UNRECOGNIZED_OPTION, AMBIGUOUS_OPTION, MISSING_ARGUMENT,
        ARGUMENT_OVERFLOW, NO_ARGUMENT_ALLOWED
    - registry (1112x)
      • DUPLICATE_KEY, INVALID_OPTION_NAME
    - warnings (1211x)
      • EMPTY_INLINE_VALUE
    """
    # --- token errors (1111x) ---
    UNRECOGNIZED_OPTION         = 11112
    AMBIGUOUS_OPTION            = 11113
    MISSING_ARGUMENT            = 11114
    ARGUMENT_OVERFLOW           = 11115
    NO_ARGUMENT_ALLOWED         = 11116

    # --- registry errors (1112x) ---
    DUPLICATE_KEY               = 11121
    INVALID_OPTION_NAME         = 11122

    # --- warnings (12xxx) ---
    EMPTY_INLINE_VALUE          = 12111

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, palette, title_style, message_style):
    """
    build the rich renderable shared by exceptions and warnings.

    options honoured
    - colorful: styled output (default True).
    - fancy: wrap the fault inside a Panel (default False).
    - prog: program name for the header (defaults to __prog__ or argv[0]).
    """
    main = __import__("__main__")
    options = fault.options
    colorful = options.get("colorful", True)
    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    header = Text.assemble(
        "[ ",
        text(options.get("prog") or progname(), styler("prog-name")),
        " — ",
        text(options["code"].normalize() if "code" in options else "?", styler("code")),
        " | ",
        text(str(options.get("title", type(fault).__name__)).title(), styler(title_style)),
        " ]"
    )
    message = text(fault.message, styler(message_style))
    parts = [message]
    if hint := options.get("hint"):
        parts.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

    if options.get("fancy", False):
        return Panel(Group(*parts), title=header, title_align="left")
    return Group(header, *parts)


class CommandException(Exception):
    """
    base class of every clipper error.

    carries
    - message: one lowercased sentence describing what went wrong.
    - options: read-only mapping with title/code/hint plus per-fault context
      (token, candidates, key, ...). runtime flags (shell/fancy/colorful) are
      merged in later by trigger().
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message if isinstance(self.message, str) else type(self).__name__

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        }, "error-title", "error-message")

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        if self.options.get("deferred", False):
            return
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnrecognizedOptionError(CommandException):
    """a '-'-prefixed token matches no registered option."""

    @property
    def token(self):
        return self.options["token"]


class AmbiguousOptionError(CommandException):
    """a long-option prefix matches several long names and none exactly."""

    @property
    def token(self):
        return self.options["token"]

    @property
    def candidates(self):
        return self.options["candidates"]


class MissingArgumentError(CommandException):
    """an option requiring a value reached the end of its scope without one."""

    @property
    def key(self):
        return self.options["key"]


class ArgumentOverflowError(CommandException):
    @property
    def key(self):
        return self.options["key"]


class NoArgumentAllowedError(CommandException):
    @property
    def key(self):
        return self.options["key"]


class DuplicateKeyError(CommandException):
    @property
    def key(self):
        return self.options["key"]


class InvalidOptionNameError(CommandException, ValueError):
    @property
    def name(self):
        return self.options["name"]


class CommandWarning(ABC, Warning):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message if isinstance(self.message, str) else type(self).__name__

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "warning-title": "bold #FFC2E0",  # softer pinky title for warnings

            # body
            "warning-message": "#D6D6DE",  # slightly lighter gray body
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
        }, "warning-title", "warning-message")

    def __trigger__(self):
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class EmptyInlineValueWarning(CommandWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via copy.replace(fault, **options) before triggering.
    - in shell mode, rendering happens via the rich console; otherwise, exceptions
      are raised and warnings are emitted through the warnings module.

    typical options
    - shell, fancy, colorful, deferred, prog, and any other context the reporter
      may want to show.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings. when
    not found, returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "CommandException",
    "UnrecognizedOptionError",
    "AmbiguousOptionError",
    "MissingArgumentError",
    "ArgumentOverflowError",
    "NoArgumentAllowedError",
    "DuplicateKeyError",
    "InvalidOptionNameError",
    "CommandWarning",
    "EmptyInlineValueWarning",
    "FaultCode",
    "trigger",
    "getdoc",
)

"""
Clipper utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the option, parser and formatter layers.
- Public-but-internal leaning: stable enough for consumers, designed primarily
  to support the higher-level registry/parser/help layers.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/""/[].

- view("attr")
  • Read-only property factory exposing a private backing field (self._attr) as an
    immutable view (tuple, MappingProxyType or frozenset for containers).

- Token helpers
  • strip_hyphens(token): drop one "--" or one "-" prefix.
  • strip_quotes(token): drop one layer of enclosing double quotes.
  • uncamel(text): split camel-case words with spaces ("outputFile" → "output File").
  • is_number(token): whether a token reads as a finite floating-point literal.

- progname()
  • Program name for headers: __main__.__prog__, else the basename of sys.argv[0].

Usage guidance
- Prefer Unset for API defaults when None is a meaningful user value; materialize with coalesce().
- Use view() to expose internal state safely as read-only properties.
"""
import functools
import os.path
import re
import sys
from collections.abc import Sequence, Mapping, Set
from types import MappingProxyType
from typing import final


EQUAL = "="
SPACE = " "
TAB = "\t"
LF = "\n"
CR = "\r"


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset" for friendly diagnostics.
    - Non-subclassable: this type is sealed; do not subclass.
    - Singleton per process: UnsetType() always yields the same instance.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in isinstance checks (e.g., isinstance(x, str | Unset)).
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Returns the given object unless it is Unset, in which case `default` is
    returned. Falsey values like None, 0, "" or [] are preserved as-is.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


def view(name, /):
    """
    Define a read-only property over the backing attribute "_{name}".

    behavior
    - Sequence (non-str) → tuple
    - Mapping           → MappingProxyType
    - Set               → frozenset
    - other types       → returned as-is
    """
    if not isinstance(name, str):
        raise TypeError("view() argument must be a string")

    def getter(self):
        value = getattr(self, "_" + name)
        if isinstance(value, Sequence) and not isinstance(value, str):
            return tuple(value)
        if isinstance(value, Mapping):
            return MappingProxyType(value)
        if isinstance(value, Set):
            return frozenset(value)
        return value

    getter.__name__ = getter.__qualname__ = name
    return property(getter)


def strip_hyphens(token, /):
    """
    Remove a leading "--" or, failing that, a leading "-" from a token.

    Only one prefix is removed: "---x" becomes "-x".
    """
    if token.startswith("--"):
        return token[2:]
    if token.startswith("-"):
        return token[1:]
    return token


def strip_quotes(token, /):
    """
    Remove one layer of enclosing double quotes.

    The token is left untouched when the inner text holds another double quote,
    so '"a"b"' keeps its quotes.
    """
    if len(token) > 1 and token.startswith('"') and token.endswith('"') and '"' not in token[1:-1]:
        return token[1:-1]
    return token


def uncamel(text, /):
    """
    Insert spaces at camel-case boundaries.

    Examples
    - uncamel("outputFile")  -> "output File"
    - uncamel("HTTPServer")  -> "HTTP Server"
    - uncamel("dry-run")     -> "dry-run"
    """
    return " ".join(re.split(r"(?<=[^A-Z])(?=[A-Z])|(?<!^)(?=[A-Z][a-z])", text))


def is_number(token, /):
    """
    Whether a token reads as a finite floating-point literal ("-1", "-2.5", "3e8").

    Spelled-out specials such as "-inf" or "nan" are not numbers here; they stay
    available as option spellings.
    """
    try:
        float(token)
    except ValueError:
        return False
    digits = token.strip().lstrip("+-")
    return digits[:1].isdigit() or digits[:1] == "."


def progname():
    """
    Program name used in headers and usage lines.

    A __prog__ attribute in __main__ wins; otherwise the basename of sys.argv[0]
    (or "clipper" when running without one, e.g. embedded interpreters).
    """
    try:
        return getattr(__import__("__main__"), "__prog__")
    except AttributeError:
        return os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "clipper"


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Use Unset as a default when None is a valid, user-meaningful value but you still
need to distinguish “no input” from “explicitly passed None”.
"""


__all__ = (
    # Functions
    "coalesce",
    "view",
    "strip_hyphens",
    "strip_quotes",
    "uncamel",
    "is_number",
    "progname",

    # Types
    "UnsetType",

    # Constants
    "Unset",
    "EQUAL",
    "SPACE",
    "TAB",
    "LF",
    "CR",
)

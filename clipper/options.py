r"""
Clipper option descriptors and the option registry.

Overview
- Option: descriptor for one flag (short and/or long name, arity, separator,
  metavar, description) plus the ordered values collected for one match.
- Options: registry indexing Options by short and by long name, with long-name
  prefix matching for abbreviated spellings ("--fil" → "--file").

Arity (nargs)
- Unset:     the option takes no argument (a presence-only flag).
- int >= 0:  at most that many values.
- Ellipsis:  unlimited values ("..." is accepted and normalized to Ellipsis).
- optional=True marks the argument as not required; with nargs left Unset it
  implies nargs=1.

Templates and copies
- The Option stored in a registry is a template: it is never mutated while
  parsing. Each time a flag shows up in the input, the parser records a
  value-bearing copy (copy.copy(template)); only that copy collects values.
  Copies compare equal to their template (identity is the (short, long) pair),
  so lookups on a parse result accept either.

Name rules
- short names: word characters plus '?' and '@' (r"[\w?@]+").
- long names:  a word character followed by word characters, '-' or '.'
  (r"\w[\w.-]*").

Quick example:
    >>> options = Options()
    >>> options.add(Option("f", "file", nargs=1, descr="input file"))
    >>> options.add(Option("D", nargs=..., separator="="))
    >>> options.find("--file").metavar
    'FILE'
"""
import re

from rich.text import Text

from .faults import *
from .utils import *


def _validate_name(name, kind, /):
    """
    Internal: check a short or long option name and return it unchanged.

    Raises
    - TypeError: when the name is not a string.
    - InvalidOptionNameError: when the name does not follow the naming rules.
    """
    if not isinstance(name, str):
        raise TypeError(f"option {kind} name must be a string")
    pattern = r"[\w?@]+" if kind == "short" else r"\w[\w.-]*"
    if not re.fullmatch(pattern, name):
        raise InvalidOptionNameError(
            "invalid %s option name %r" % (kind, name),
            title="invalid option name",
            code=FaultCode.INVALID_OPTION_NAME,
            hint="%s names must match %s" % (kind, pattern),
            name=name,
        )
    return name


class Option:
    """
    Describes a single command-line option and accumulates the values of one match.

    Read-only descriptor fields
    - short, long: the names without hyphens (at least one is set, the other is None).
    - key: short if present, else long (used for ordering and messages).
    - nargs: Unset | int | Ellipsis.
    - optional: whether the argument may be omitted.
    - separator: single character splitting a token into several values, or None.
    - metavar: display label for the value (explicit or derived from the long name).
    - descr: description shown in help, or None.

    Per-match state
    - values: tuple of collected values (only ever non-empty on parser copies).
    """

    __slots__ = ("_short", "_long", "_nargs", "_optional", "_separator", "_metavar", "_descr", "_values")

    short = view("short")
    long = view("long")
    nargs = view("nargs")
    optional = view("optional")
    separator = view("separator")
    descr = view("descr")
    values = view("values")

    def __init__(
            self,
            short=Unset,
            long=Unset,
            /,
            nargs=Unset,
            *,
            optional=False,
            separator=Unset,
            metavar=Unset,
            descr=Unset,
    ):
        if short is Unset and long is Unset:
            raise TypeError("option must specify at least a short or a long name")

        self._short = None if short is Unset else _validate_name(short, "short")
        self._long = None if long is Unset else _validate_name(long, "long")

        if nargs == "...":
            nargs = Ellipsis
        if isinstance(nargs, bool) or not isinstance(nargs, int | Unset) and nargs is not Ellipsis:
            raise TypeError("option 'nargs' must be an integer or Ellipsis")
        if isinstance(nargs, int) and nargs < 0:
            raise ValueError("option 'nargs' cannot be negative")

        if not isinstance(optional, bool):
            raise TypeError("option 'optional' must be a boolean")
        if optional and nargs is Unset:
            nargs = 1

        if not isinstance(separator, str | Unset):
            raise TypeError("option 'separator' must be a string")
        elif isinstance(separator, str) and len(separator) != 1:
            raise ValueError("option 'separator' must be a single character")

        if not isinstance(metavar, str | Unset):
            raise TypeError("option 'metavar' must be a string")
        elif isinstance(metavar, str) and not (metavar := metavar.strip()):
            raise ValueError("option 'metavar' cannot be empty")

        if not isinstance(descr, str | Text | Unset):
            raise TypeError("option 'descr' must be a string")
        elif isinstance(descr, str) and not (descr := descr.strip()):
            raise ValueError("option 'descr' cannot be empty")

        self._nargs = nargs
        self._optional = optional
        self._separator = coalesce(separator)
        self._metavar = metavar
        self._descr = coalesce(descr)
        self._values = []

    @property
    def key(self):
        return self._short if self._short is not None else self._long

    @property
    def metavar(self):
        """
        Display label for the option value.

        An explicit metavar wins. Otherwise it is derived from the long name:
        camel-case words are split, runs of whitespace/hyphens become '_', and
        the result is upper-cased ("outputFile" → "OUTPUT_FILE", "dry-run" →
        "DRY_RUN"). Anything that is not a plain word yields None.
        """
        if self._metavar is not Unset:
            name = self._metavar
        elif self._long is not None:
            name = re.sub(r"[-\s]+", "_", uncamel(self._long))
        else:
            return None
        name = name.upper()
        return name if re.fullmatch(r"\w+", name) else None

    @property
    def takes_argument(self):
        return self._nargs is Ellipsis or isinstance(self._nargs, int) and self._nargs > 0

    @property
    def takes_many(self):
        return self._nargs is Ellipsis or isinstance(self._nargs, int) and self._nargs > 1

    def accepts_more_values(self):
        """
        Whether one more value can be added to this match.

        True when the option takes an argument at all (positive nargs, unlimited,
        or optional) and it is either unbounded or still below its nargs.
        """
        if not (self.takes_argument or self._optional):
            return False
        if self._nargs is Ellipsis or self._nargs is Unset or self._nargs <= 0:
            return True
        return len(self._values) < self._nargs

    def requires_more_values(self):
        """
        Whether this match still needs a value before the next option may start.
        """
        if self._optional:
            return False
        if self._nargs is Ellipsis:
            return not self._values
        return self.accepts_more_values()

    def add_value(self, value, /):
        if not self.accepts_more_values():
            raise ArgumentOverflowError(
                "option %r cannot take the extra value %r" % (self.key, value),
                title="too many values",
                code=FaultCode.ARGUMENT_OVERFLOW,
                hint="remove the extra value or pass it as a positional after '--'",
                key=self.key,
                value=value,
            )
        self._values.append(value)

    def process_value(self, value, /):
        """
        Feed one raw token to this match.

        With a separator the token is split into at most nargs parts (unbounded
        when nargs is Ellipsis) and each part is added in order; otherwise the
        token is added as a single value.
        """
        if self._nargs is Unset:
            raise NoArgumentAllowedError(
                "option %r does not take a value, but %r was given" % (self.key, value),
                title="option takes no value",
                code=FaultCode.NO_ARGUMENT_ALLOWED,
                hint="remove the value after %r" % self.key,
                key=self.key,
                value=value,
            )
        if self._separator is None:
            return self.add_value(value)
        if self._nargs is Ellipsis or self._nargs <= 0:
            parts = value.split(self._separator)
        else:
            parts = value.split(self._separator, self._nargs - 1)
        for part in parts:
            self.add_value(part)

    def value(self, index=0, /, default=None):
        try:
            return self._values[index]
        except IndexError:
            return default

    def __copy__(self):
        clone = object.__new__(type(self))
        for name in self.__slots__:
            setattr(clone, name, getattr(self, name))
        clone._values = list(self._values)
        return clone

    def __eq__(self, other, /):
        if not isinstance(other, Option):
            return NotImplemented
        return (self._short, self._long) == (other._short, other._long)

    def __hash__(self):
        return hash((self._short, self._long))

    def __repr__(self):
        return "option(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())

    def __rich_repr__(self):
        yield "short", self._short
        yield "long", self._long
        yield "nargs", self._nargs
        if self._optional:
            yield "optional", True
        if self._separator is not None:
            yield "separator", self._separator
        if self._values:
            yield "values", tuple(self._values)


class Options:
    """
    Registry of Options indexed by short name and by long name.

    Both indexes keep insertion order and point at the same Option object when
    an option has both names. The registry also keeps every option in insertion
    order for help rendering.

    Invariants
    - no two options share a short name, and no two share a long name
      (DuplicateKeyError at insertion).
    - the registry is read-only while parsers run over it; any number of parses
      may share one registry.
    """

    __slots__ = ("_shorts", "_longs", "_options")

    shorts = view("shorts")
    longs = view("longs")

    def __init__(self, *options):
        self._shorts = {}
        self._longs = {}
        self._options = []
        for option in options:
            self.add(option)

    @staticmethod
    def _duplicate(key, /):
        return DuplicateKeyError(
            "duplicate option key %r" % key,
            title="duplicate option",
            code=FaultCode.DUPLICATE_KEY,
            hint="each short and long name can only be registered once",
            key=key,
        )

    def add(self, option, /):
        """
        Register an option; returns the registry to allow chaining.
        """
        if not isinstance(option, Option):
            raise TypeError("add() argument must be an option")
        if option.short is not None and option.short in self._shorts:
            raise self._duplicate(option.short)
        if option.long is not None and option.long in self._longs:
            raise self._duplicate(option.long)
        if option.short is not None:
            self._shorts[option.short] = option
        if option.long is not None:
            self._longs[option.long] = option
        self._options.append(option)
        return self

    def add_option(self, short=Unset, long=Unset, /, nargs=Unset, **metadata):
        """
        Build an Option from the given fields and register it.
        """
        return self.add(Option(short, long, nargs, **metadata))

    def add_many(self, options, /):
        """
        Register every option of another registry.

        All incoming keys are checked first: on a clash DuplicateKeyError is
        raised and nothing is added.
        """
        incoming = list(options)
        shorts, longs = set(self._shorts), set(self._longs)
        for option in incoming:
            for name, names in ((option.short, shorts), (option.long, longs)):
                if name is None:
                    continue
                if name in names:
                    raise self._duplicate(name)
                names.add(name)
        for option in incoming:
            self.add(option)
        return self

    def find(self, name, /):
        """
        Look an option up by name; up to two leading hyphens are ignored.

        The short index is consulted first, then the long index. Returns None
        when nothing matches.
        """
        name = strip_hyphens(name)
        try:
            return self._shorts[name]
        except KeyError:
            return self._longs.get(name)

    def matching_long_names(self, partial, /):
        """
        Long names matching an (abbreviated) spelling.

        An exact long name short-circuits: the result is [name] even when other
        long names share it as a prefix. Otherwise every long name starting
        with the spelling is returned (none, one, or several → ambiguous).
        """
        partial = strip_hyphens(partial)
        if partial in self._longs:
            return [partial]
        return [name for name in self._longs if name.startswith(partial)]

    def has_short(self, name, /):
        return strip_hyphens(name) in self._shorts

    def has_long(self, name, /):
        return strip_hyphens(name) in self._longs

    def __contains__(self, name, /):
        return self.has_short(name) or self.has_long(name)

    def __iter__(self):
        return iter(tuple(self._options))

    def __len__(self):
        return len(self._options)

    def __repr__(self):
        return "options(shorts=%r, longs=%r)" % (list(self._shorts), list(self._longs))


__all__ = (
    "Option",
    "Options",
)

r"""
Clipper parser: classify and consume argv-like tokens against an Options registry.

What this module provides
- Parser: a small state machine that scans tokens left to right and builds a
  CommandLine (value-bearing option matches + leftover arguments).
- parse(options, prompt): convenience entry point accepting sys.argv (default),
  a shell-like string, or an iterable of strings.

Accepted spellings
- long options:      --file, --file=VALUE, --fil (unambiguous prefix)
- long, one hyphen:  -file, -file=VALUE, -Xmx512m (long prefix + inline value)
- short options:     -f, -f VALUE, -fVALUE, -f=VALUE
- property style:    -Dkey=value, -Dflag, -D key=value (separator-split)
- bursting:          -abc ≡ -a -b -c, -abfVALUE ≡ -a -b -f VALUE
- terminator:        -- (everything after it is a leftover argument)
- negative numbers:  -1, -2.5 are always values or leftovers, never options

Tie-break order for a single-hyphen token without '=':
exact short name > long-name prefix > long prefix with inline value >
property style > concatenated burst.

Faults
- UnrecognizedOptionError, AmbiguousOptionError and MissingArgumentError abort the
  parse immediately; no partial CommandLine is returned.

Threading
- a Parser instance carries per-parse state and must not be shared between
  concurrent parses; the Options registry it reads can be.
"""
import copy
import shlex
import sys
from collections.abc import Iterable

from .commandline import CommandLine
from .faults import *
from .options import Options
from .utils import *


class Parser:
    """
    Token-by-token parser bound to one Options registry.

    state (reset on every parse)
    - current: the pending value-bearing copy still able to take values, or None.
    - skipping: set once the '--' terminator was seen.
    - commandline: the CommandLine under construction.
    - token: the raw token being dispatched (used in fault messages).
    """

    def __init__(self, options, /):
        if not isinstance(options, Options):
            raise TypeError("Parser() argument must be an options registry")
        self._options = options
        self._reset()

    @property
    def options(self):
        return self._options

    def _reset(self):
        self._commandline = CommandLine()
        self._current = None
        self._skipping = False
        self._token = None

    def parse(self, tokens, /):
        """
        Parse a sequence of string tokens into a frozen CommandLine.

        Raises
        - TypeError: when a token is not a string.
        - UnrecognizedOptionError / AmbiguousOptionError / MissingArgumentError
          (and NoArgumentAllowedError / ArgumentOverflowError defensively).
        """
        self._reset()
        for token in tokens:
            if not isinstance(token, str):
                raise TypeError("parse() tokens must be strings")
            self._handle(token)
        self._check()
        return self._commandline._freeze()

    # ── token classification ───────────────────────────────────────────────

    def _long_prefix(self, token):
        """
        longest registered long name that is a proper prefix (length >= 2) of the
        token, hyphens excluded; None when there is none.
        """
        name = strip_hyphens(token)
        longs = self._options.longs
        for index in range(len(name) - 1, 1, -1):
            if name[:index] in longs:
                return name[:index]
        return None

    def _is_long(self, token):
        if not token.startswith("-") or len(token) == 1:
            return False
        name = token.partition(EQUAL)[0]
        if strip_hyphens(name) and self._options.matching_long_names(name):
            return True
        return not token.startswith("--") and self._long_prefix(token) is not None

    def _is_short(self, token):
        if not token.startswith("-") or len(token) == 1:
            return False
        name = token[1:].partition(EQUAL)[0]
        if self._options.has_short(name):
            return True
        return bool(name) and self._options.has_short(name[0])

    def _is_argument(self, token):
        return not (self._is_long(token) or self._is_short(token)) or is_number(token)

    def _is_property(self, name):
        """
        whether the first character of `name` is a property-style option, that is
        one taking two or more values ("-Dkey=value").
        """
        option = self._options.find(name[:1]) if name else None
        return option is not None and option.takes_many

    # ── dispatch ───────────────────────────────────────────────────────────

    def _handle(self, token):
        self._token = token
        if self._skipping:
            self._commandline._add_arg(token)
        elif token == "--":
            self._check()
            self._current = None
            self._skipping = True
        elif self._current is not None and self._current.accepts_more_values() and self._is_argument(token):
            self._current.process_value(strip_quotes(token))
        elif token.startswith("-") and is_number(token):
            self._commandline._add_arg(token)
        elif token.startswith("--"):
            self._handle_long(token)
        elif token.startswith("-") and token != "-":
            self._handle_short(token)
        else:
            self._handle_unknown(token)

        if self._current is not None and not self._current.accepts_more_values():
            self._current = None

    def _handle_unknown(self, token):
        if token.startswith("-") and len(token) > 1 and not is_number(token):
            raise UnrecognizedOptionError(
                "unrecognized option %r" % token,
                title="unrecognized option",
                code=FaultCode.UNRECOGNIZED_OPTION,
                hint="run with --help to see all available options",
                token=token,
            )
        self._commandline._add_arg(token)

    def _ambiguous(self, token, candidates):
        return AmbiguousOptionError(
            "ambiguous option %r could be: %s" % (token, ", ".join(map(repr, candidates))),
            title="ambiguous option",
            code=FaultCode.AMBIGUOUS_OPTION,
            hint="spell out more of the name, e.g. %s" % " or ".join("--" + name for name in candidates),
            token=token,
            candidates=tuple(candidates),
        )

    def _check(self):
        """
        validate the pending option before another one starts (and at the end).

        a pending option still requiring values raises MissingArgumentError,
        except a one-character property-style key holding exactly one value
        ("-Dflag" used as a boolean shorthand).
        """
        if (option := self._current) is None or not option.requires_more_values():
            return
        if len(option.key) == 1 and option.takes_many and len(option.values) == 1:
            return
        raise MissingArgumentError(
            "missing argument for option %r" % option.key,
            title="missing argument",
            code=FaultCode.MISSING_ARGUMENT,
            hint="pass a value after the option (for example: -%s <%s>)" % (
                option.key if option.short is not None else "-" + option.key,
                option.metavar or "ARG",
            ),
            key=option.key,
        )

    def _handle_option(self, option):
        """
        record a value-bearing copy of a registry template and make it pending
        when it accepts values.
        """
        self._check()
        match = copy.copy(option)
        self._commandline._add_option(match)
        self._current = match if match.accepts_more_values() else None

    def _feed_inline(self, value):
        if not value:
            trigger(EmptyInlineValueWarning(
                "empty inline value for option %r" % self._current.key,
                title="empty inline value",
                code=FaultCode.EMPTY_INLINE_VALUE,
                hint="add a value after '=' or drop the '='",
                token=self._token,
            ))
        self._current.process_value(value)
        self._current = None

    # ── long options ───────────────────────────────────────────────────────

    def _handle_long(self, token):
        if EQUAL in token:
            self._handle_long_with_equal(token)
        else:
            self._handle_long_without_equal(token)

    def _handle_long_without_equal(self, token):
        matches = self._options.matching_long_names(token)
        if not matches:
            return self._handle_unknown(self._token)
        if len(matches) > 1:
            raise self._ambiguous(token, matches)
        self._handle_option(self._options.longs[matches[0]])

    def _handle_long_with_equal(self, token):
        name, _, value = token.partition(EQUAL)
        matches = self._options.matching_long_names(name) if strip_hyphens(name) else []
        if not matches:
            return self._handle_unknown(self._token)
        if len(matches) > 1:
            raise self._ambiguous(name, matches)
        option = self._options.longs[matches[0]]
        if not option.accepts_more_values():
            return self._handle_unknown(self._token)
        self._handle_option(option)
        self._feed_inline(value)

    # ── short options ──────────────────────────────────────────────────────

    def _handle_short(self, token):
        name = strip_hyphens(token)
        shorts = self._options.shorts

        if len(name) == 1:
            if name in shorts:
                self._handle_option(shorts[name])
            else:
                self._handle_unknown(token)
            return

        key, equal, value = name.partition(EQUAL)
        if equal:
            if len(key) == 1:
                option = self._options.find(key)
                if option is not None and option.accepts_more_values():
                    self._handle_option(option)
                    self._feed_inline(value)
                else:
                    self._handle_unknown(token)
            elif self._is_property(key):
                self._handle_option(self._options.find(key[0]))
                self._current.process_value(key[1:])
                self._current.add_value(value)
                self._current = None
            else:
                self._handle_long_with_equal(token)
        elif name in shorts:
            self._handle_option(shorts[name])
        elif self._options.matching_long_names(name):
            self._handle_long_without_equal(token)
        elif (prefix := self._long_prefix(name)) is not None and self._options.longs[prefix].accepts_more_values():
            self._handle_option(self._options.longs[prefix])
            self._current.process_value(name[len(prefix):])
            self._current = None
        elif self._is_property(name):
            self._handle_option(self._options.find(name[0]))
            self._current.process_value(name[1:])
            self._current = None
        else:
            self._handle_burst(token)

    def _handle_burst(self, token):
        """
        split '-abc' into '-a -b -c'; the first option taking arguments swallows
        the rest of the token as its value ('-abfVALUE').
        """
        shorts = self._options.shorts
        for index in range(1, len(token)):
            if (char := token[index]) not in shorts:
                return self._handle_unknown(token)
            self._handle_option(shorts[char])
            if self._current is not None and index + 1 != len(token):
                self._current.process_value(token[index + 1:])
                break


def parse(options, prompt=Unset, /):
    """
    Parse a prompt against an Options registry with a fresh Parser.

    Parameters
    - options: Options registry.
    - prompt:
      • Unset: read tokens from sys.argv[1:].
      • str: shell-like string; split via shlex.split.
      • Iterable[str]: pre-tokenized sequence.

    Returns
    - CommandLine

    Raises
    - TypeError: when prompt is not Unset/str/Iterable[str].
    - any CommandException raised by Parser.parse.
    """
    if prompt is Unset:
        tokens = sys.argv[1:]
    elif isinstance(prompt, str):
        tokens = shlex.split(prompt)
    elif isinstance(prompt, Iterable):
        tokens = list(prompt)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("parse() prompt must be a string or an iterable of strings")
    else:
        raise TypeError("parse() prompt must be a string or an iterable of strings")
    return Parser(options).parse(tokens)


__all__ = (
    "Parser",
    "parse",
)

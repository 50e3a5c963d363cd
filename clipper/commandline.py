"""
Clipper parse results.

A CommandLine is what Parser.parse() hands back: the ordered value-bearing
option matches (a flag given twice shows up twice) and the ordered leftover
arguments (unrecognized plain tokens and everything after the '--'
terminator).

Lifecycle
- created empty by the parser, appended to while scanning, then frozen before
  being returned. After that, the private appenders raise AttributeError and
  the public accessors only ever hand out tuples or fresh containers.

Lookups
- by name ("f", "-f", "--file"; hyphens are optional) or by Option, matching
  the first recorded option whose short or long name is the given name.
- values are aggregated over every match of the same option, in order.
- properties() reads matches as key/value pairs, the shape produced by
  property-style options such as "-Dkey=value" (a dangling key maps to "true").
"""
from .options import Option
from .utils import *


class CommandLine:
    __slots__ = ("_options", "_args", "_frozen")

    options = view("options")
    args = view("args")

    def __init__(self, options=(), args=()):
        self._options = list(options)
        self._args = list(args)
        self._frozen = False

    def _add_option(self, option, /):
        if self._frozen:
            raise AttributeError("command line is frozen")
        self._options.append(option)

    def _add_arg(self, arg, /):
        if self._frozen:
            raise AttributeError("command line is frozen")
        self._args.append(arg)

    def _freeze(self):
        self._frozen = True
        return self

    def _resolve(self, option, /):
        if isinstance(option, Option):
            return option
        if not isinstance(option, str):
            raise TypeError("option lookups take a name or an option")
        name = strip_hyphens(option)
        for match in self._options:
            if name in (match.short, match.long):
                return match
        return None

    def has_option(self, option, /):
        """
        Whether the option (name or Option) was matched at least once.
        """
        return (option := self._resolve(option)) is not None and option in self._options

    def __contains__(self, option, /):
        return self.has_option(option)

    def get_option_values(self, option, /, default=None):
        """
        Every value collected for the option, across all of its matches.

        Returns `default` when the option was not matched or collected nothing.
        """
        if (option := self._resolve(option)) is None:
            return default
        values = [value for match in self._options if match == option for value in match.values]
        return values or default

    def get_option_value(self, option, /, default=None):
        """
        The first value collected for the option, or `default`.

        `default` may be a zero-argument callable; it is only called when needed.
        """
        if values := self.get_option_values(option):
            return values[0]
        return default() if callable(default) else default

    def get_option_properties(self, option, /):
        """
        Read the option values as consecutive key/value pairs.

        "-Dkey=value -Dflag" yields {"key": "value", "flag": "true"}.
        """
        properties = {}
        if (option := self._resolve(option)) is None:
            return properties
        for match in filter(lambda x: x == option, self._options):
            values = match.values
            for index in range(0, len(values), 2):
                properties[values[index]] = values[index + 1] if index + 1 < len(values) else "true"
        return properties

    def __iter__(self):
        return iter(tuple(self._options))

    def __len__(self):
        return len(self._options)

    def __eq__(self, other, /):
        if not isinstance(other, CommandLine):
            return NotImplemented
        return (
            [(match, match.values) for match in self._options] == [(match, match.values) for match in other._options]
            and self._args == other._args
        )

    __hash__ = None

    def __repr__(self):
        return "command-line(options=%r, args=%r)" % (self._options, self._args)

    def __rich_repr__(self):
        yield "options", tuple(self._options)
        yield "args", tuple(self._args)


__all__ = (
    "CommandLine",
)

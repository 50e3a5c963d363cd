"""
Clipper command layer: bind an options registry to a callback and run it.

What this module provides
- Command: a thin runner around a callback(commandline). It owns the options
  registry (its own options plus -h/--help), parses a prompt with parse(),
  prints help when asked, and surfaces faults through faults.trigger().
- command(...): create a Command, or a decorator producing one.
- invoke(obj, prompt): run anything exposing __invoke__ (plain callables are
  wrapped into a Command first).

Quick start
    from clipper import Option, Options, command, invoke

    @command(options=Options(Option("f", "file", 1, descr="input file")), shell=True)
    def cat(commandline):
        print(commandline.get_option_value("file", "-"))

    if __name__ == "__main__":
        invoke(cat, "--file README.md")

Runtime flags
- shell: print faults (and usage) to stderr and exit with status 1 instead of
  raising them.
- fancy: draw faults inside a panel.
- colorful: style faults and help output.
- width: help screen width (74 by default).
"""
import inspect
import warnings
from warnings import catch_warnings

from .faults import *
from .formatting import HelpFormatter
from .options import Options, Option
from .parser import parse
from .utils import *


class Command:
    """
    Command-line runner wrapping one callback.

    Read-only fields
    - callback: called with the parsed CommandLine once parsing succeeded.
    - name: command name shown in the usage line (the callback name by default).
    - descr: one-paragraph description printed above the options table.
    - options: the registry used for parsing (the default options merged with
      the command's own).
    - shell, fancy, colorful: runtime flags forwarded to faults.
    - formatter: the HelpFormatter used for help screens.
    """

    __slots__ = ("_callback", "_name", "_descr", "_options", "_shell", "_fancy", "_colorful", "_formatter")

    callback = view("callback")
    name = view("name")
    descr = view("descr")
    options = view("options")
    shell = view("shell")
    fancy = view("fancy")
    colorful = view("colorful")
    formatter = view("formatter")

    def __init__(
            self,
            callback,
            /,
            name=Unset,
            descr=Unset,
            options=Unset,
            *,
            shell=Unset,
            fancy=Unset,
            colorful=Unset,
            width=Unset,
    ):
        if not callable(callback):
            raise TypeError("command callback must be callable")

        name = coalesce(name, getattr(callback, "__name__", progname()))
        if not isinstance(name, str):
            raise TypeError("command 'name' must be a string")
        elif not (name := name.strip().replace("_", "-")):
            raise ValueError("command 'name' cannot be empty")

        descr = coalesce(descr, inspect.getdoc(callback) or Unset)
        if not isinstance(descr, str | Unset):
            raise TypeError("command 'descr' must be a string")

        options = coalesce(options, Options())
        if isinstance(options, Option):
            options = Options(options)
        elif not isinstance(options, Options):
            options = Options(*options)

        self._callback = callback
        self._name = name
        self._descr = coalesce(descr)
        self._shell = bool(coalesce(shell, False))
        self._fancy = bool(coalesce(fancy, False))
        self._colorful = bool(coalesce(colorful, True))
        self._formatter = HelpFormatter(width=coalesce(width, 74))
        self._options = self.default_options().add_many(options)

    @staticmethod
    def default_options():
        """
        Options every command understands: -h/--help.
        """
        return Options(Option("h", "help", descr="print usage"))

    @property
    def syntax(self):
        return "%s %s [OPTIONS]" % (progname(), self._name)

    def help(self, *, stderr=False):
        """
        Print the help screen (usage, description, options table).
        """
        self._formatter.print_help(
            self.syntax,
            self._options,
            header=self._descr,
            colorful=self._colorful,
            stderr=stderr,
        )

    def trigger(self, fault, /, **options):
        """
        Surface a fault with this command's runtime flags.

        In shell mode errors are preceded by the usage screen on stderr.
        """
        if self._shell and isinstance(fault, CommandException):
            self.help(stderr=True)
        trigger(fault, **options, prog=progname(), shell=self._shell, fancy=self._fancy, colorful=self._colorful)

    def __invoke__(self, prompt=Unset):
        """
        Parse a prompt and run the callback.

        Parameters
        - prompt:
          • Unset: read tokens from sys.argv[1:].
          • str: shell-like string; will be split via shlex.split.
          • Iterable[str]: pre-tokenized sequence.

        Behavior
        - -h/--help prints the help screen and skips the callback.
        - faults raised while parsing are handed to trigger(); warnings are
          re-emitted with the command's runtime flags.

        Raises
        - TypeError: when prompt is not Unset/str/Iterable[str].
        - CommandException: outside shell mode, the parse fault.
        """
        try:
            with catch_warnings(record=True) as caught:
                warnings.simplefilter("always")
                commandline = parse(self._options, prompt)
        except CommandException as fault:
            return self.trigger(fault)

        for warning in caught:
            if isinstance(warning.message, CommandWarning):
                self.trigger(warning.message)
            else:
                warnings.warn(warning.message, warning.category, stacklevel=2)

        if commandline.has_option("help"):
            return self.help()
        return self._callback(commandline)

    def __call__(self, prompt=Unset, /):
        return self.__invoke__(prompt)

    def __repr__(self):
        return "command(name=%r, options=%r)" % (self._name, self._options)

    def __rich_repr__(self):
        yield "name", self._name
        yield "descr", self._descr
        yield "options", tuple(self._options)
        yield "shell", self._shell
        yield "fancy", self._fancy
        yield "colorful", self._colorful


def command(source=Unset, /, *args, **kwargs):
    """
    Create a Command or return a decorator to build it later.

    - command(func, ...)     → Command bound to func.
    - @command(...) on func  → same, through a decorator.
    """
    def wrapper(source, /):
        if not callable(source):
            raise TypeError("@command() must be applied to a callable")
        return Command(source, *args, **kwargs)

    wrapper.__name__ = wrapper.__qualname__ = "command"
    return wrapper(source) if source is not Unset else wrapper


def invoke(object, prompt=Unset, /):
    """
    Convenience runner for commands or callables.

    If 'object' implements __invoke__ it is called with the prompt; a plain
    callable is wrapped with command() first. Anything else is a TypeError.
    """
    if hasattr(object, "__invoke__") and callable(object.__invoke__):
        return object.__invoke__(prompt)
    if callable(object):
        return invoke(command(object), prompt)
    target = "argument" if prompt is Unset else "first argument"
    raise TypeError(f"invoke() {target} must implement __invoke__ method") from None


__all__ = (
    "Command",
    "command",
    "invoke",
)

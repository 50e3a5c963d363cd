"""
Clipper help rendering: usage line, aligned options table, and word wrapping.

What this module provides
- HelpFormatter: a pure formatter over an Options registry. Every render_*
  method returns plain text; print_help() hands the same text to a rich
  console, optionally styling option names, metavars and the usage label.

Layout
- usage:   "Usage: app [-a] [-f <FILE>] [--verbose]" (options sorted by key,
           case-insensitively), wrapped with continuation lines aligned after
           the first space (under the application name).
- options: one row per option

               -f, --file <FILE>   input file to read
                   --verbose       say more

           every row is padded to the widest "-a, --aaa <ARG>" prefix plus the
           description padding; descriptions wrap onto a hanging indent at
           that same column.

Customization
- width, left_pad, desc_pad, prefix ("Usage: "), metavar placeholder ("ARG")
  and sortkey (None keeps registration order) are keyword options.
- print_help() honours a __styles__ mapping in __main__ (palette keys:
  usage-label, option-name, metavar).
"""
import re
from collections import defaultdict

from rich.console import Console
from rich.text import Text

from .utils import *


def _default_sortkey(option):
    return option.key.casefold()


class HelpFormatter:
    __slots__ = ("_width", "_left_pad", "_desc_pad", "_prefix", "_metavar", "_sortkey")

    width = view("width")
    left_pad = view("left_pad")
    desc_pad = view("desc_pad")
    prefix = view("prefix")
    metavar = view("metavar")
    sortkey = view("sortkey")

    def __init__(self, *, width=74, left_pad=1, desc_pad=3, prefix="Usage: ", metavar="ARG", sortkey=Unset):
        for name, value in (("width", width), ("left_pad", left_pad), ("desc_pad", desc_pad)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"formatter {name!r} must be an integer")
            if value < (1 if name == "width" else 0):
                raise ValueError(f"formatter {name!r} is out of range")
        if not isinstance(prefix, str):
            raise TypeError("formatter 'prefix' must be a string")
        if not isinstance(metavar, str) or not metavar:
            raise TypeError("formatter 'metavar' must be a non-empty string")
        if sortkey is not Unset and sortkey is not None and not callable(sortkey):
            raise TypeError("formatter 'sortkey' must be callable or None")

        self._width = width
        self._left_pad = left_pad
        self._desc_pad = desc_pad
        self._prefix = prefix
        self._metavar = metavar
        self._sortkey = coalesce(sortkey, _default_sortkey)

    def _sorted(self, options):
        options = list(options)
        if self._sortkey is not None:
            options.sort(key=self._sortkey)
        return options

    def _argument(self, option):
        return "<%s>" % (option.metavar or self._metavar)

    # ── wrapping ───────────────────────────────────────────────────────────

    def find_wrap_pos(self, text, width, start=0):
        """
        Position where `text` should wrap for a line of `width` starting at `start`.

        rules, in order
        - a newline or tab within [start, start + width] wraps right after it.
        - when the rest of the text fits, there is nothing to wrap: None.
        - otherwise wrap at the last space/CR/LF at or before start + width,
          provided it lies after `start`.
        - failing that, hard-wrap at start + width.
        """
        for char in (LF, TAB):
            pos = text.find(char, start)
            if pos != -1 and pos <= start + width:
                return pos + 1
        if start + width >= len(text):
            return None
        pos = start + width
        while pos >= start and text[pos] not in (SPACE, LF, CR):
            pos -= 1
        if pos > start:
            return pos
        return start + width

    def _wrap(self, text, width, tabstop):
        """
        wrap one line of text; continuation lines are indented to `tabstop`.
        """
        pos = self.find_wrap_pos(text, width, 0)
        if pos is None:
            return [text.rstrip()]
        lines = [text[:pos].rstrip()]
        if tabstop >= width:
            # an indent this deep leaves no room: fall back to a single space
            tabstop = 1
        padding = SPACE * tabstop
        while True:
            text = padding + text[pos:].strip()
            pos = self.find_wrap_pos(text, width, 0)
            if pos is None:
                lines.append(text.rstrip())
                return lines
            if len(text) > width and pos == tabstop - 1:
                pos = width
            lines.append(text[:pos].rstrip())

    def render_wrapped(self, text, width=Unset, tabstop=0):
        """
        Wrap a block of text line by line at `width` (formatter width by default).
        """
        width = coalesce(width, self._width)
        lines = []
        for line in str(text).splitlines():
            lines.extend(self._wrap(line, width, tabstop))
        return "\n".join(lines)

    # ── sections ───────────────────────────────────────────────────────────

    def render_usage(self, app, options, width=Unset):
        """
        Render "Usage: app [-a] [--long <ARG>] ..." with one bracketed item per option.
        """
        items = []
        for option in self._sorted(options):
            item = "-" + option.short if option.short is not None else "--" + option.long
            if option.takes_argument:
                item += SPACE + self._argument(option)
            items.append("[%s]" % item)
        usage = self._prefix + app + SPACE + SPACE.join(items)
        return self.render_wrapped(usage, width, usage.find(SPACE) + 1)

    def render_options_table(self, options, width=Unset, left_pad=Unset, desc_pad=Unset):
        """
        Render the aligned option/description table.
        """
        width = coalesce(width, self._width)
        lpad = SPACE * coalesce(left_pad, self._left_pad)
        dpad = SPACE * (desc_pad := coalesce(desc_pad, self._desc_pad))

        options = self._sorted(options)
        prefixes = []
        for option in options:
            if option.short is None:
                prefix = lpad + "   --" + option.long
            else:
                prefix = lpad + "-" + option.short
                if option.long is not None:
                    prefix += ", --" + option.long
            if option.takes_argument:
                prefix += SPACE + self._argument(option)
            prefixes.append(prefix)

        longest = max(map(len, prefixes), default=0)
        rows = []
        for option, prefix in zip(options, prefixes):
            row = prefix.ljust(longest) + dpad + (str(option.descr) if option.descr is not None else "")
            rows.extend(self._wrap(row, width, longest + desc_pad))
        return "\n".join(rows)

    def render_help(self, syntax, options, *, header=Unset, footer=Unset, auto=False, width=Unset, left_pad=Unset, desc_pad=Unset):
        """
        Render a complete help screen.

        sections
        - usage: generated from the options when `auto` is true (`syntax` is then
          the application name), otherwise "Usage: " + syntax.
        - header (optional), the options table, footer (optional).
        """
        if not isinstance(syntax, str) or not syntax.strip():
            raise ValueError("render_help() syntax must be a non-empty string")

        if auto:
            sections = [self.render_usage(syntax, options, width)]
        else:
            sections = [self.render_wrapped(
                self._prefix + syntax, width, len(self._prefix) + syntax.find(SPACE) + 1
            )]
        if header:
            sections.append(self.render_wrapped(header, width))
        sections.append(self.render_options_table(options, width, left_pad, desc_pad))
        if footer:
            sections.append(self.render_wrapped(footer, width))
        return "\n".join(sections)

    def print_help(self, syntax, options, *, console=Unset, colorful=True, stderr=False, **sections):
        """
        Render help and print it through a rich console.

        parameters
        - console: rich Console to print to (a new one by default).
        - colorful: style the usage label, option names and metavars.
        - stderr: print to standard error when no console is given.
        - **sections: forwarded to render_help (header, footer, auto, width, ...).
        """
        console = coalesce(console, Console(stderr=stderr))
        styles = defaultdict(str, {
            "usage-label": "bold #00E6FF",  # CYAN → signature info color
            "option-name": "bold #22C55E",  # GREEN for option names
            "metavar": "bold #FFD600",  # AMBER for parameters
        } | getattr(__import__("__main__"), "__styles__", {}))

        text = Text(self.render_help(syntax, options, **sections))
        if colorful:
            for pattern, style in (
                    (r"\A" + re.escape(self._prefix.rstrip()), styles["usage-label"]),
                    (r"(?<![\w<-])--?[\w?@][\w.-]*", styles["option-name"]),
                    (r"<[^<>\s]+>", styles["metavar"]),
            ):
                if style:
                    text.highlight_regex(pattern, style)
        console.print(text, soft_wrap=True, highlight=False)


__all__ = (
    "HelpFormatter",
)

"""
Formatting module behavioral tests (wrapping, usage line, options table, help screen).

Conventions
- Test method names follow CamelCase per project convention.
- Expected layouts are spelled out with ljust() so column arithmetic stays visible.
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase

from rich.console import Console

from clipper import HelpFormatter, Option, Options
from clipper.utils import Unset


class TestWrapping(TestCase):
    """Behavioral tests for find_wrap_pos and render_wrapped."""

    def setUp(self):
        self.formatter = HelpFormatter()

    def testNoWrapNeeded(self):
        self.assertIsNone(self.formatter.find_wrap_pos("short", 10))

    def testWrapAtLastSpace(self):
        self.assertEqual(self.formatter.find_wrap_pos("hello world", 5), 5)
        self.assertEqual(self.formatter.find_wrap_pos("hello world foo", 13), 11)

    def testWrapAfterNewline(self):
        self.assertEqual(self.formatter.find_wrap_pos("ab\ncd", 10), 3)

    def testWrapAfterTab(self):
        self.assertEqual(self.formatter.find_wrap_pos("ab\tcd efgh", 4), 3)

    def testHardWrapWithoutWhitespace(self):
        self.assertEqual(self.formatter.find_wrap_pos("abcdefgh", 3), 3)

    def testWrapFromStart(self):
        self.assertEqual(self.formatter.find_wrap_pos("aaaa bbbb cccc", 6, 5), 9)

    def testRenderWrappedWordBoundaries(self):
        self.assertEqual(self.formatter.render_wrapped("hello world foo", 11), "hello world\nfoo")

    def testRenderWrappedHangingIndent(self):
        self.assertEqual(self.formatter.render_wrapped("hello world foo", 11, 4), "hello world\n    foo")

    def testRenderWrappedKeepsLineBreaks(self):
        self.assertEqual(self.formatter.render_wrapped("one\ntwo", 20), "one\ntwo")

    def testRenderWrappedHardWrapsInsideIndent(self):
        text = "aa " + "b" * 20
        self.assertEqual(
            self.formatter.render_wrapped(text, 10, 4),
            "aa\n    bbbbbb\n    bbbbbb\n    bbbbbb\n    bb",
        )

    def testRenderWrappedDeepIndentFallsBackToOneSpace(self):
        self.assertEqual(self.formatter.render_wrapped("hello world", 6, 8), "hello\n world")

    def testRenderWrappedTrimsTrailingSpaces(self):
        self.assertEqual(self.formatter.render_wrapped("abc   ", 10), "abc")


class TestSections(TestCase):
    """Behavioral tests for the usage line, options table and help screen."""

    def setUp(self):
        self.options = Options(
            Option("f", "file", 1, descr="input file"),
            Option(Unset, "verbose", descr="say more"),
            Option("a", descr="all"),
        )
        self.formatter = HelpFormatter()

    def testFormatterValidatesSettings(self):
        with self.assertRaises(TypeError):
            HelpFormatter(width="74")
        with self.assertRaises(ValueError):
            HelpFormatter(width=0)
        with self.assertRaises(ValueError):
            HelpFormatter(left_pad=-1)
        with self.assertRaises(TypeError):
            HelpFormatter(sortkey=1)

    def testUsageSortedCaseInsensitively(self):
        self.assertEqual(
            self.formatter.render_usage("app", self.options),
            "Usage: app [-a] [-f <FILE>] [--verbose]",
        )

    def testUsageKeepsRegistrationOrderWithoutSortKey(self):
        formatter = HelpFormatter(sortkey=None)
        self.assertEqual(
            formatter.render_usage("app", self.options),
            "Usage: app [-f <FILE>] [--verbose] [-a]",
        )

    def testUsageFallsBackToPlaceholderMetavar(self):
        options = Options(Option("n", nargs=1))
        self.assertEqual(self.formatter.render_usage("app", options), "Usage: app [-n <ARG>]")

    def testUsageWrapsUnderApplicationName(self):
        options = Options(*(Option(char, descr="flag %s" % char) for char in "abcdefgh"))
        self.assertEqual(
            self.formatter.render_usage("app", options, width=30),
            "Usage: app [-a] [-b] [-c] [-d]\n"
            "       [-e] [-f] [-g] [-h]",
        )

    def testOptionsTableAlignment(self):
        self.assertEqual(
            self.formatter.render_options_table(self.options),
            "\n".join((
                " -a".ljust(21) + "all",
                " -f, --file <FILE>".ljust(21) + "input file",
                "    --verbose".ljust(21) + "say more",
            )),
        )

    def testOptionsTablePaddings(self):
        options = Options(Option("a", descr="all"), Option("b", "bee", descr="buzz"))
        self.assertEqual(
            self.formatter.render_options_table(options, left_pad=2, desc_pad=1),
            "  -a        all\n  -b, --bee buzz",
        )

    def testOptionsTableWrapsDescriptions(self):
        options = Options(Option("a", descr="one two three four"))
        self.assertEqual(
            self.formatter.render_options_table(options, width=16),
            " -a   one two\n      three four",
        )

    def testOptionsTableWithoutDescription(self):
        options = Options(Option("a"))
        self.assertEqual(self.formatter.render_options_table(options), " -a")

    def testRenderHelpSections(self):
        self.assertEqual(
            self.formatter.render_help("app [OPTIONS]", self.options, header="Does things.", footer="Bye."),
            "\n".join((
                "Usage: app [OPTIONS]",
                "Does things.",
                self.formatter.render_options_table(self.options),
                "Bye.",
            )),
        )

    def testRenderHelpAutoUsage(self):
        self.assertEqual(
            self.formatter.render_help("app", self.options, auto=True).splitlines()[0],
            "Usage: app [-a] [-f <FILE>] [--verbose]",
        )

    def testRenderHelpRejectsEmptySyntax(self):
        with self.assertRaises(ValueError):
            self.formatter.render_help("  ", self.options)

    def testCustomPrefix(self):
        formatter = HelpFormatter(prefix="usage: ")
        self.assertEqual(formatter.render_usage("app", Options(Option("a"))), "usage: app [-a]")

    def testPrintHelpWritesRenderedText(self):
        buffer = io.StringIO()
        console = Console(file=buffer, width=200, color_system=None)
        self.formatter.print_help("app [OPTIONS]", self.options, console=console, header="Does things.")
        self.assertEqual(
            buffer.getvalue(),
            self.formatter.render_help("app [OPTIONS]", self.options, header="Does things.") + "\n",
        )


if __name__ == "__main__":
    unittest.main()

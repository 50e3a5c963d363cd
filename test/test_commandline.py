"""
CommandLine behavioral tests (lookups, aggregation, properties, freezing).

Conventions
- Test method names follow CamelCase per project convention.
- Results are produced through the public parser; private appenders are only
  poked to check the frozen state.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from clipper import CommandLine, Option, Options, Parser


class TestCommandLine(TestCase):
    """Behavioral tests for parse results."""

    def setUp(self):
        self.options = Options(
            Option("f", "file", 1),
            Option("v", "verbose"),
            Option("D", nargs=..., separator="="),
            Option("q", "quiet"),
        )
        self.parser = Parser(self.options)

    def testHasOptionByAnySpelling(self):
        commandline = self.parser.parse(["-f", "a"])
        self.assertTrue(commandline.has_option("f"))
        self.assertTrue(commandline.has_option("--file"))
        self.assertTrue(commandline.has_option("-f"))
        self.assertIn("file", commandline)
        self.assertNotIn("verbose", commandline)

    def testHasOptionByTemplate(self):
        commandline = self.parser.parse(["--verbose"])
        self.assertTrue(commandline.has_option(self.options.find("v")))
        self.assertFalse(commandline.has_option(self.options.find("q")))

    def testLookupRejectsOtherTypes(self):
        with self.assertRaises(TypeError):
            self.parser.parse([]).has_option(1)

    def testValuesAggregateOverMatches(self):
        commandline = self.parser.parse(["-f", "a", "--file=b"])
        self.assertEqual(commandline.get_option_values("file"), ["a", "b"])
        self.assertEqual(commandline.get_option_value("f"), "a")

    def testValuesDefaultWhenMissing(self):
        commandline = self.parser.parse(["-v"])
        self.assertIsNone(commandline.get_option_values("file"))
        self.assertEqual(commandline.get_option_values("file", []), [])
        self.assertEqual(commandline.get_option_values("v", ["none"]), ["none"])

    def testValueDefaultMayBeCallable(self):
        commandline = self.parser.parse([])
        self.assertEqual(commandline.get_option_value("file", lambda: "fallback"), "fallback")
        self.assertEqual(commandline.get_option_value("file", "plain"), "plain")

    def testPropertiesFromPropertyStyleOption(self):
        commandline = self.parser.parse(["-Dkey=value", "-Dflag", "-D", "other=x"])
        self.assertEqual(
            commandline.get_option_properties("D"),
            {"key": "value", "flag": "true", "other": "x"},
        )

    def testPropertiesOfUnmatchedOptionAreEmpty(self):
        self.assertEqual(self.parser.parse([]).get_option_properties("D"), {})

    def testOptionsAndArgsAreTuples(self):
        commandline = self.parser.parse(["-v", "x", "--", "-q"])
        self.assertIsInstance(commandline.options, tuple)
        self.assertEqual(commandline.args, ("x", "-q"))
        self.assertEqual(len(commandline), 1)

    def testFrozenAfterParse(self):
        commandline = self.parser.parse(["-v"])
        with self.assertRaises(AttributeError):
            commandline._add_arg("x")
        with self.assertRaises(AttributeError):
            commandline._add_option(Option("z"))

    def testEqualityComparesValuesAndArgs(self):
        self.assertEqual(self.parser.parse(["-f", "a", "x"]), self.parser.parse(["--file=a", "x"]))
        self.assertNotEqual(self.parser.parse(["-f", "a"]), self.parser.parse(["-f", "b"]))
        self.assertNotEqual(self.parser.parse(["x"]), self.parser.parse(["y"]))

    def testUnhashable(self):
        with self.assertRaises(TypeError):
            hash(CommandLine())


if __name__ == "__main__":
    unittest.main()

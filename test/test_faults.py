"""
Faults module behavioral tests (codes, host overrides, trigger, rendering).

Conventions
- Test method names follow CamelCase per project convention.
- Host overrides are patched onto __main__ and removed afterwards.
"""

from __future__ import annotations

import copy
import io
import unittest
import warnings
from contextlib import redirect_stderr
from unittest import TestCase, mock

from rich.console import Console

from clipper.faults import (
    CommandException,
    UnrecognizedOptionError,
    InvalidOptionNameError,
    EmptyInlineValueWarning,
    FaultCode,
    trigger,
    getdoc,
)


def _fault():
    return UnrecognizedOptionError(
        "unrecognized option '--nope'",
        title="unrecognized option",
        code=FaultCode.UNRECOGNIZED_OPTION,
        hint="run with --help to see all available options",
        token="--nope",
    )


class TestFaultCodes(TestCase):
    """Behavioral tests for FaultCode and getdoc."""

    def testCodesAreStable(self):
        self.assertEqual(FaultCode.UNRECOGNIZED_OPTION, 11112)
        self.assertEqual(FaultCode.MISSING_ARGUMENT, 11114)
        self.assertEqual(FaultCode.DUPLICATE_KEY, 11121)
        self.assertEqual(FaultCode.EMPTY_INLINE_VALUE, 12111)

    def testNormalizeDefaultsToNumber(self):
        self.assertEqual(FaultCode.AMBIGUOUS_OPTION.normalize(), "11113")

    def testNormalizeHonoursHostCodes(self):
        codes = {FaultCode.AMBIGUOUS_OPTION: "E-AMBIGUOUS"}
        with mock.patch.object(__import__("__main__"), "__codes__", codes, create=True):
            self.assertEqual(FaultCode.AMBIGUOUS_OPTION.normalize(), "E-AMBIGUOUS")

    def testGetdocWithoutHostDocs(self):
        self.assertIsNone(getdoc(FaultCode.DUPLICATE_KEY))

    def testGetdocHonoursHostDocs(self):
        docs = {FaultCode.DUPLICATE_KEY: "two options share a name"}
        with mock.patch.object(__import__("__main__"), "__docs__", docs, create=True):
            self.assertEqual(getdoc(FaultCode.DUPLICATE_KEY), "two options share a name")

    def testGetdocRequiresFaultCode(self):
        with self.assertRaises(TypeError):
            getdoc(11112)


class TestFaults(TestCase):
    """Behavioral tests for fault objects, trigger and rendering."""

    def testFaultCarriesMessageAndContext(self):
        fault = _fault()
        self.assertEqual(str(fault), "unrecognized option '--nope'")
        self.assertEqual(fault.token, "--nope")
        with self.assertRaises(TypeError):
            fault.options["token"] = "x"

    def testFaultWithoutMessageUsesTypeName(self):
        self.assertEqual(str(CommandException()), "CommandException")

    def testInvalidOptionNameIsValueError(self):
        self.assertTrue(issubclass(InvalidOptionNameError, ValueError))

    def testReplaceMergesOptions(self):
        fault = copy.replace(_fault(), shell=True)
        self.assertIsInstance(fault, UnrecognizedOptionError)
        self.assertTrue(fault.options["shell"])
        self.assertEqual(fault.token, "--nope")

    def testTriggerRaisesOutsideShell(self):
        with self.assertRaises(UnrecognizedOptionError) as context:
            trigger(_fault())
        self.assertEqual(context.exception.token, "--nope")

    def testTriggerPrintsAndExitsInShell(self):
        buffer = io.StringIO()
        with redirect_stderr(buffer), self.assertRaises(SystemExit) as context:
            trigger(_fault(), shell=True, colorful=False, prog="tool")
        self.assertEqual(context.exception.code, 1)
        self.assertIn("unrecognized option '--nope'", buffer.getvalue())

    def testTriggerDeferredDoesNotExit(self):
        buffer = io.StringIO()
        with redirect_stderr(buffer):
            trigger(_fault(), shell=True, deferred=True, colorful=False, prog="tool")
        self.assertIn("Unrecognized Option", buffer.getvalue())

    def testTriggerWarnsOutsideShell(self):
        with self.assertWarns(EmptyInlineValueWarning):
            trigger(EmptyInlineValueWarning("empty inline value", token="--file="))

    def testTriggerPrintsWarningInShell(self):
        buffer = io.StringIO()
        with redirect_stderr(buffer), warnings.catch_warnings():
            warnings.simplefilter("error")
            trigger(EmptyInlineValueWarning("empty inline value", token="--file="), shell=True, colorful=False)
        self.assertIn("empty inline value", buffer.getvalue())

    def testTriggerRejectsPlainObjects(self):
        with self.assertRaises(TypeError):
            trigger(object())

    def testRenderHeader(self):
        buffer = io.StringIO()
        Console(file=buffer, width=120, color_system=None).print(copy.replace(_fault(), prog="tool", colorful=False))
        output = buffer.getvalue()
        self.assertIn("[ tool — 11112 | Unrecognized Option ]", output)
        self.assertIn("run with --help to see all available options", output)

    def testRenderFancyPanel(self):
        buffer = io.StringIO()
        Console(file=buffer, width=120, color_system=None).print(
            copy.replace(_fault(), prog="tool", fancy=True, colorful=False)
        )
        output = buffer.getvalue()
        self.assertIn("Unrecognized Option", output)
        self.assertIn("unrecognized option '--nope'", output)


if __name__ == "__main__":
    unittest.main()

"""
Lookup engine tests (claiming names, matching and consuming tokens).

Conventions
- Test method names follow CamelCase per project convention.
- Each test builds a fresh Parser and drives a Lookup bound to it.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argsmith import Parser, DuplicateDefinitionError, MissingValueError, UnrecognizedTokenError
from argsmith.lookup import Lookup, Match


def lookup(*tokens):
    parser = Parser(["prog", *tokens])
    return parser, Lookup(parser)


class TestLookup(TestCase):

    def testIndicator(self):
        parser, engine = lookup("--test")
        self.assertEqual(engine.indicator("t", "test"), Match(True, None))
        self.assertEqual(engine.indicator("x", None), Match(False, None))
        self.assertTrue(parser.finalize())

    def testValue(self):
        parser, engine = lookup("-d", "7")
        self.assertEqual(engine.value("d", "dhoom"), Match(True, "7"))
        self.assertTrue(parser.finalize())

    def testValueMissing(self):
        _, engine = lookup("-d", "--next")
        with self.assertRaises(MissingValueError):
            engine.value("d", None)

    def testList(self):
        parser, engine = lookup("--my-list", "9", "8", "--done")
        self.assertEqual(engine.list(None, "my-list"), Match(True, ("9", "8")))
        with self.assertRaises(UnrecognizedTokenError) as cm:
            parser.finalize()
        self.assertEqual(cm.exception.options["token"], "--done")

    def testFirstMatchWins(self):
        parser, engine = lookup("-d", "1", "--dhoom", "2")
        self.assertEqual(engine.value("d", "dhoom"), Match(True, "1"))
        with self.assertRaises(UnrecognizedTokenError) as cm:
            parser.finalize()
        self.assertEqual(cm.exception.options["token"], "--dhoom")

    def testValuesAreNeverMatchedAsNames(self):
        _, engine = lookup("-x", "d")
        self.assertEqual(engine.indicator("d", None), Match(False, None))

    def testClaimsBeforeMatching(self):
        parser, engine = lookup()
        engine.indicator("t", "test")
        self.assertIn("t", parser.flags)
        self.assertIn("test", parser.keys)
        with self.assertRaises(DuplicateDefinitionError) as cm:
            engine.value(None, "test")
        self.assertEqual(cm.exception.options["key"], "test")

    def testHelpModeFindsNothing(self):
        parser, engine = lookup("--help", "-d", "7")
        self.assertEqual(engine.value("d", None), Match(False, None))
        self.assertEqual(engine.list(None, "items"), Match(False, None))
        self.assertEqual(parser.flags, frozenset({"h", "d"}))
        self.assertEqual(parser.keys, frozenset({"help", "items"}))


if __name__ == "__main__":
    unittest.main()

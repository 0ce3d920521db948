"""
Token grammar and token stream tests.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argsmith.tokens import *


class TestGrammar(TestCase):

    def testIsValue(self):
        self.assertTrue(isvalue("7"))
        self.assertTrue(isvalue("a-b"))
        self.assertTrue(isvalue(""))
        self.assertFalse(isvalue("-t"))
        self.assertFalse(isvalue("--test"))
        self.assertFalse(isvalue("-5"))

    def testNames(self):
        self.assertEqual(flagstr("t"), "-t")
        self.assertEqual(keystr("test"), "--test")

    def testLabel(self):
        self.assertEqual(label("t", "test"), "--test (-t)")
        self.assertEqual(label(None, "test"), "--test")
        self.assertEqual(label("t"), "-t")
        with self.assertRaises(ValueError):
            label()


class TestTokenStream(TestCase):

    def setUp(self):
        self.stream = TokenStream(["prog", "-l", "1", "2", "-t", "x"])

    def testAccessors(self):
        self.assertEqual(len(self.stream), 6)
        self.assertEqual(self.stream.program, "prog")
        self.assertEqual(self.stream[1], "-l")
        self.assertEqual(self.stream.tokens, ("prog", "-l", "1", "2", "-t", "x"))
        self.assertIsNone(TokenStream([]).program)

    def testRequiresStrings(self):
        with self.assertRaises(TypeError):
            TokenStream(["prog", None])

    def testRunStopsAtDashToken(self):
        self.assertEqual(self.stream.run(2), [2, 3])
        self.assertEqual(self.stream.run(1), [])
        self.assertEqual(self.stream.run(5), [5])
        self.assertEqual(self.stream.run(6), [])

    def testRunStopsAtConsumedToken(self):
        self.stream.consume(3)
        self.assertEqual(self.stream.run(2), [2])

    def testConsumptionIsMonotonic(self):
        self.stream.consume(1)
        self.stream.consume(1)
        self.assertTrue(self.stream.consumed(1))
        self.assertEqual([index for index, _ in self.stream.pending()], [2, 3, 4, 5])

    def testProgramIsNeverConsumed(self):
        with self.assertRaises(IndexError):
            self.stream.consume(0)
        self.assertNotIn(0, [index for index, _ in self.stream.pending()])

    def testRequested(self):
        self.assertTrue(self.stream.requested("-t"))
        self.assertFalse(self.stream.requested("prog"))
        self.assertFalse(self.stream.requested("--help", "-h"))

    def testRepresentation(self):
        stream = TokenStream(["prog", "-t"])
        stream.consume(1)
        self.assertEqual(repr(stream), "token-stream('prog', '-t'*)")


if __name__ == "__main__":
    unittest.main()

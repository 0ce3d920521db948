"""
Session registries tests (uniqueness and the help manual).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase

from rich.console import Console

from argsmith.registries import *


class TestUniqueness(TestCase):

    def testClaims(self):
        uniqueness = Uniqueness(("h",), ("help",))
        self.assertTrue(uniqueness.claim_flag("t"))
        self.assertFalse(uniqueness.claim_flag("t"))
        self.assertFalse(uniqueness.claim_flag("h"))
        self.assertTrue(uniqueness.claim_key("t"))
        self.assertFalse(uniqueness.claim_key("help"))
        self.assertEqual(uniqueness.flags, frozenset({"h", "t"}))
        self.assertEqual(uniqueness.keys, frozenset({"help", "t"}))

    def testSnapshotsAreFrozen(self):
        uniqueness = Uniqueness()
        with self.assertRaises(AttributeError):
            uniqueness.flags.add("x")


class TestAnnotations(TestCase):

    def testHeading(self):
        self.assertEqual(heading("t", "test"), "--test or -t")
        self.assertEqual(heading(None, "test"), "--test")
        self.assertEqual(heading("t", None), "-t")
        with self.assertRaises(ValueError):
            heading(None, None)

    def testAnnotate(self):
        self.assertEqual(
            annotate(Entry("d", "dhoom", "Dhoom level", "4", "1, 2, 4", True)),
            "Dhoom level [REQUIRED] (Options: 1, 2, 4) (Default: 4)"
        )
        self.assertEqual(annotate(Entry(None, "x", None, None, None, False)), "")
        self.assertEqual(annotate(Entry(None, "x", None, "[]", None, False)), "(Default: [])")


class TestManual(TestCase):

    def setUp(self):
        self.manual = Manual()
        self.manual.register(Entry("t", "test", "This is a test", None, None, False))
        self.manual.register(Entry(None, "my-list", "Numbers", "[1, 2]", None, False))

    def testRegister(self):
        self.assertEqual(len(self.manual), 2)
        self.assertEqual([entry.key for entry in self.manual], ["test", "my-list"])
        with self.assertRaises(TypeError):
            self.manual.register(("t", "test", None, None, None, False))
        with self.assertRaises(ValueError):
            self.manual.register(Entry(None, None, "nameless", None, None, False))

    def testRowsStartWithHelp(self):
        self.assertEqual(list(self.manual.rows()), [
            ("--help or -h", "Display this message"),
            ("--test or -t", "This is a test"),
            ("--my-list", "Numbers (Default: [1, 2])"),
        ])

    def testRenderAlignsDescriptions(self):
        console = Console(file=io.StringIO(), width=120, color_system=None)
        console.print(self.manual.render(colorful=False))
        lines = [line.rstrip() for line in console.file.getvalue().splitlines()]

        self.assertIn("   [Help]", lines)
        rows = [line for line in lines if line.startswith("-")]
        self.assertEqual(len(rows), 3)
        columns = {
            rows[0].index("Display this message"),
            rows[1].index("This is a test"),
            rows[2].index("Numbers"),
        }
        self.assertEqual(columns, {len("--help or -h:") + 1})


if __name__ == "__main__":
    unittest.main()

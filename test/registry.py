"""
Registry module behavioral tests.

Scope
- Validate whole-table registration rules: empty table, name/letter shapes,
  uniqueness, kind-specific rules, defaults against choices, positional ordering.
- Validate the derived indices and lookups (names, letters, positionals, resolve).
- Validate immutability after construction.

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from argtable import Argument, Kind, Ordinality, Registry, flag, option, positional


def _declarations():
    return (
        flag("version", "v", "Display version information"),
        option("colour", "c", "Colour", ("red", "green", "blue")),
        option("number", "n", "Number of things"),
        positional("source", "File to read"),
        positional("target", "File to write", ordinality=Ordinality.OPTIONAL),
    )


class TestRegistration(TestCase):
    """Registration-time validation."""

    def testEmptyRejected(self):
        with self.assertRaises(ValueError):
            Registry()
        with self.assertRaises(ValueError):
            Registry([])

    def testNonArgumentRejected(self):
        with self.assertRaises(TypeError):
            Registry(flag("version", "v"), "--colour")

    def testNameTooShortRejected(self):
        with self.assertRaises(ValueError):
            Registry(flag("v"))

    def testNameWithDashRejected(self):
        with self.assertRaises(ValueError):
            Registry(flag("--version"))

    def testLetterTooLongRejected(self):
        with self.assertRaises(ValueError):
            Registry(flag("version", "vv"))

    def testDashLetterRejected(self):
        with self.assertRaises(ValueError):
            Registry(flag("version", "-"))

    def testDuplicateNameRejected(self):
        with self.assertRaises(ValueError):
            Registry(flag("version", "v"), option("version", "x"))

    def testDuplicateLetterRejected(self):
        with self.assertRaises(ValueError):
            Registry(flag("version", "v"), flag("verbose", "v"))

    def testMissingLettersDoNotCollide(self):
        registry = Registry(flag("version"), flag("verbose"))
        self.assertEqual(dict(registry.letters), {})

    def testDefaultOutsideChoicesRejected(self):
        with self.assertRaises(ValueError):
            Registry(option("colour", "c", "Colour", ("red", "green"), default="mauve"))

    def testDefaultInsideChoicesAccepted(self):
        registry = Registry(option("colour", "c", "Colour", ("red", "green"), default="green"))
        self.assertEqual(registry.defaults(), {"colour": "green"})

    def testDefaultWithoutChoicesAccepted(self):
        registry = Registry(option("count", "n", default="5"))
        self.assertEqual(registry.defaults(), {"count": "5"})

    def testFlagWithChoicesRejected(self):
        with self.assertRaises(ValueError):
            Registry(Argument("verbose", kind=Kind.FLAG, choices=("yes", "no")))

    def testFlagWithDefaultRejected(self):
        with self.assertRaises(ValueError):
            Registry(Argument("verbose", kind=Kind.FLAG, default=""))

    def testPositionalWithLetterRejected(self):
        with self.assertRaises(ValueError):
            Registry(Argument("source", "s", kind=Kind.POSITIONAL))

    def testRequiredPositionalAfterOptionalRejected(self):
        with self.assertRaises(ValueError):
            Registry(
                positional("source", ordinality=Ordinality.OPTIONAL),
                positional("target"),
            )

    def testOptionalPositionalsMayFollowEachOther(self):
        registry = Registry(
            positional("source"),
            positional("target", ordinality=Ordinality.OPTIONAL),
            positional("backup", ordinality=Ordinality.OPTIONAL),
        )
        self.assertEqual(registry.positionals, ("source", "target", "backup"))

    def testRequiredPositionalAfterDefaultedRejected(self):
        with self.assertRaises(ValueError):
            Registry(
                positional("source", default="in.txt"),
                positional("target"),
            )

    def testDefaultedPositionalMayFollowOptional(self):
        registry = Registry(
            positional("source", ordinality=Ordinality.OPTIONAL),
            positional("target", default="out.txt", ordinality=Ordinality.REQUIRED),
        )
        self.assertEqual(registry.positionals, ("source", "target"))

    def testNamedArgumentsDoNotAffectPositionalOrdering(self):
        Registry(
            positional("source", ordinality=Ordinality.OPTIONAL),
            option("number", "n", ordinality=Ordinality.REQUIRED),
        )


class TestIndices(TestCase):
    """Derived indices and lookups."""

    def setUp(self):
        self.registry = Registry(*_declarations())

    def testIterableFormIsEquivalent(self):
        other = Registry(list(_declarations()))
        self.assertEqual([a.name for a in other], [a.name for a in self.registry])

    def testDeclarationOrderPreserved(self):
        self.assertEqual(list(self.registry.names), ["version", "colour", "number", "source", "target"])
        self.assertEqual([a.name for a in self.registry], ["version", "colour", "number", "source", "target"])

    def testLetters(self):
        self.assertEqual(dict(self.registry.letters), {"v": "version", "c": "colour", "n": "number"})

    def testPositionals(self):
        self.assertEqual(self.registry.positionals, ("source", "target"))

    def testContainerProtocol(self):
        self.assertEqual(len(self.registry), 5)
        self.assertIn("colour", self.registry)
        self.assertNotIn("c", self.registry)
        self.assertEqual(self.registry["colour"].letter, "c")

    def testResolveLetterAndName(self):
        self.assertIs(self.registry.resolve("v"), self.registry["version"])
        self.assertIs(self.registry.resolve("version"), self.registry["version"])

    def testResolveIgnoresPositionals(self):
        self.assertIsNone(self.registry.resolve("source"))

    def testResolveUnknown(self):
        self.assertIsNone(self.registry.resolve("x"))

    def testDefaultsAreFresh(self):
        registry = Registry(option("count", "n", default="5"))
        first = registry.defaults()
        first["count"] = "6"
        self.assertEqual(registry.defaults(), {"count": "5"})


class TestImmutability(TestCase):

    def setUp(self):
        self.registry = Registry(*_declarations())

    def testAttributesCannotBeSet(self):
        with self.assertRaises(AttributeError):
            self.registry.extra = 1
        with self.assertRaises(AttributeError):
            self.registry.names = {}

    def testIndicesAreReadOnly(self):
        with self.assertRaises(TypeError):
            self.registry.names["other"] = flag("other")  # NOQA: read-only view
        with self.assertRaises(TypeError):
            self.registry.letters["o"] = "other"  # NOQA: read-only view


if __name__ == "__main__":
    unittest.main()

"""
Tests for the internal helpers.

This module verifies:
- Unset sentinel semantics: singleton identity, falsiness, representation,
  copy/deepcopy/pickle identity, thread safety and finality.
- coalesce(): only Unset is replaced; None and "" survive.
- mirror(): container fields are exposed as read-only views.
- ordinal(): word forms for small numbers, suffix rules for the rest.
"""
import copy
import pickle
import unittest
from threading import Thread, Lock
from types import MappingProxyType
from unittest import TestCase

import argtable
from argtable.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `Unset` singleton.
    """

    def setUp(self) -> None:
        self.unset: UnsetType = UnsetType()

    def testSingleton(self) -> None:
        self.assertIs(self.unset, UnsetType())
        self.assertIs(self.unset, Unset)

    def testFalsely(self) -> None:
        self.assertFalse(bool(self.unset))

    def testRepr(self) -> None:
        self.assertEqual(repr(self.unset), "Unset")

    def testNotEqualToNoneOrEmpty(self) -> None:
        self.assertNotEqual(self.unset, None)
        self.assertNotEqual(self.unset, "")

    def testCopyDeepcopyPreserveSingleton(self) -> None:
        self.assertIs(copy.copy(self.unset), self.unset)
        self.assertIs(copy.deepcopy(self.unset), self.unset)

    def testPickleRoundTrip(self) -> None:
        self.assertIs(pickle.loads(pickle.dumps(self.unset)), self.unset)

    def testThreadSafetySingleton(self) -> None:
        results: list[UnsetType] = []
        lock: Lock = Lock()

        def worker():
            instance = UnsetType()
            with lock:
                results.append(instance)

        threads: list[Thread] = [Thread(target=worker) for _ in range(16)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(len(results), 16)
        for instance in results:
            self.assertIs(instance, self.unset)

    def testFinalClass(self) -> None:
        with self.assertRaises(TypeError):
            type("UnsetType", (UnsetType,), {})

    def testUnionInAnnotations(self) -> None:
        self.assertIsInstance("text", str | Unset)
        self.assertIsInstance(Unset, str | Unset)
        self.assertNotIsInstance(3, str | Unset)


class CoalesceTest(TestCase):

    def testUnsetReplaced(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))

    def testFalseyValuesPreserved(self) -> None:
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce("", "fallback"), "")
        self.assertEqual(coalesce(0, 1), 0)


class MirrorTest(TestCase):

    def testContainersAreFrozen(self) -> None:
        class Holder:
            items = mirror("items")
            table = mirror("table")
            label = mirror("label")

            def __init__(self):
                self._items = [1, 2]
                self._table = {"a": 1}
                self._label = "x"

        holder = Holder()
        self.assertEqual(holder.items, (1, 2))
        self.assertIsInstance(holder.table, MappingProxyType)
        self.assertEqual(holder.label, "x")
        with self.assertRaises(TypeError):
            holder.table["b"] = 2  # NOQA: read-only view
        with self.assertRaises(AttributeError):
            holder.items = ()

    def testNameMustBeString(self) -> None:
        with self.assertRaises(TypeError):
            mirror(1)


class RenameTest(TestCase):

    def testFunctionForm(self) -> None:
        def f(): ...
        rename(f, "work")
        self.assertEqual((f.__name__, f.__qualname__), ("work", "work"))

    def testDecoratorForm(self) -> None:
        @rename("work")
        def f(): ...
        self.assertEqual(f.__name__, "work")

    def testWrongArity(self) -> None:
        with self.assertRaises(TypeError):
            rename()


class OrdinalTest(TestCase):

    def testWords(self) -> None:
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(3), "third")
        self.assertEqual(ordinal(10), "tenth")

    def testSuffixes(self) -> None:
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(12), "12th")
        self.assertEqual(ordinal(21), "21st")
        self.assertEqual(ordinal(22), "22nd")
        self.assertEqual(ordinal(23), "23rd")
        self.assertEqual(ordinal(112), "112th")
        self.assertEqual(ordinal(101), "101st")


class VersionTest(TestCase):

    def testVersionStringMatchesInfo(self) -> None:
        self.assertEqual(argtable.__version__, "%d.%d.%d" % argtable.version_info[:3])
        self.assertEqual(argtable.version_info.releaselevel, "final")


if __name__ == '__main__':
    unittest.main()

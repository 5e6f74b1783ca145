"""
Tests for the internal helpers.

This module verifies:
- The Unset sentinel: singleton identity, falsy semantics, copying, finality.
- coalesce() only replaces Unset.
- rename() as a decorator.
- mirror() hands out copies of containers.
- progname() strips both separator styles.
"""
import copy
import pickle
import unittest
from unittest import TestCase

from argclip.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `UnsetType` singleton.
    """

    def testSingletonIdentity(self):
        self.assertIs(UnsetType(), Unset)
        self.assertIs(UnsetType(), UnsetType())

    def testFalsyButDistinct(self):
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)
        self.assertNotEqual(Unset, 0)

    def testRepr(self):
        self.assertEqual(repr(Unset), "Unset")

    def testCopyPreservesIdentity(self):
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testUnionWithTypes(self):
        self.assertIsInstance("text", str | Unset)
        self.assertIsInstance(Unset, str | Unset)
        self.assertNotIsInstance(3, str | Unset)

    def testCannotBeSubclassed(self):
        with self.assertRaises(TypeError):
            class Derived(UnsetType):  # NOQA: F-841
                pass


class HelpersTest(TestCase):

    def testCoalesceReplacesOnlyUnset(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 5), 0)
        self.assertEqual(coalesce("", "fallback"), "")

    def testRename(self):
        @rename("decorated")
        def original():
            pass

        self.assertEqual(original.__name__, "decorated")
        self.assertEqual(original.__qualname__, "decorated")

    def testRenameRejectsBadArguments(self):
        with self.assertRaises(TypeError):
            rename(1)
        with self.assertRaises(TypeError):
            rename("name")(1)

    def testMirrorCopiesContainers(self):
        class Holder:
            items = mirror("items")

            def __init__(self):
                self._items = [1, 2]

        holder = Holder()
        items = holder.items
        items.append(3)
        self.assertEqual(holder.items, [1, 2])

        with self.assertRaises(AttributeError):
            holder.items = []

    def testMirrorKeepsTypesIntact(self):
        class Holder:
            type = mirror("type")

            def __init__(self):
                self._type = list[int]

        self.assertEqual(Holder().type, list[int])

    def testProgname(self):
        self.assertEqual(progname("/usr/local/bin/tool"), "tool")
        self.assertEqual(progname("C:\\tools\\app.exe"), "app.exe")
        self.assertEqual(progname("mixed/dir\\prog"), "prog")
        self.assertEqual(progname("prog"), "prog")
        self.assertEqual(progname(""), "")

    def testPrognameRejectsNonString(self):
        with self.assertRaises(TypeError):
            progname(None)


if __name__ == "__main__":
    unittest.main()

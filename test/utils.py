"""
Tests for the internal utilities (Unset, coalesce, rename).

Conventions
- Test method names follow CamelCase per project convention.
"""
import copy
import unittest
from unittest import TestCase

from argot.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `UnsetType` singleton.
    """

    def testSingleton(self) -> None:
        """
        The constructor returns the same object reference on every call.
        """
        self.assertIs(UnsetType(), Unset)
        self.assertIs(UnsetType(), UnsetType())

    def testFalsyButNotNone(self) -> None:
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)
        self.assertNotEqual(Unset, 0)

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testCopyKeepsIdentity(self) -> None:
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)

    def testFinal(self) -> None:
        """
        The type is sealed against subclassing.
        """
        with self.assertRaises(TypeError):
            type("Child", (UnsetType,), {})


class CoalesceTest(TestCase):

    def testUnsetIsReplaced(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))

    def testFalseyValuesArePreserved(self) -> None:
        for value in (None, 0, "", []):
            self.assertEqual(coalesce(value, "fallback"), value)


class RenameTest(TestCase):

    def testFunctionForm(self) -> None:
        def work():
            pass

        self.assertIs(rename(work, "job"), work)
        self.assertEqual(work.__name__, "job")
        self.assertEqual(work.__qualname__, "job")

    def testDecoratorForm(self) -> None:
        @rename("job")
        def work():
            pass

        self.assertEqual(work.__name__, "job")

    def testRejectsBadArguments(self) -> None:
        with self.assertRaises(TypeError):
            rename(42, "job")
        with self.assertRaises(TypeError):
            rename(lambda: None, 42)
        with self.assertRaises(TypeError):
            rename(42)
        with self.assertRaises(TypeError):
            rename()

    def testRejectsBuiltins(self) -> None:
        with self.assertRaises(TypeError):
            rename(len, "size")


if __name__ == "__main__":
    unittest.main()

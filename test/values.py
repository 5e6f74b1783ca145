"""
Value conversion tests (type resolution and text conversion).

Conventions
- Test method names follow CamelCase per project convention.
"""
import decimal
import pathlib
import unittest
from unittest import TestCase

from argclip.values import ValueKind, Resolution, Conversion, resolve, convert


class TestResolve(TestCase):
    """Behavioral tests for resolve()."""

    def testBuiltinScalars(self):
        self.assertEqual(resolve(bool), Resolution(ValueKind.SWITCH, bool, False))
        self.assertEqual(resolve(int), Resolution(ValueKind.INTEGER, int, False))
        self.assertEqual(resolve(float), Resolution(ValueKind.FLOAT, float, False))
        self.assertEqual(resolve(str), Resolution(ValueKind.STRING, str, False))

    def testListOfItems(self):
        self.assertEqual(resolve(list[int]), Resolution(ValueKind.INTEGER, int, True))
        self.assertEqual(resolve(list[str]), Resolution(ValueKind.STRING, str, True))

    def testBareListMeansStrings(self):
        self.assertEqual(resolve(list), Resolution(ValueKind.STRING, str, True))

    def testCallableIsCustom(self):
        self.assertEqual(resolve(pathlib.Path), Resolution(ValueKind.CUSTOM, pathlib.Path, False))
        self.assertEqual(resolve(list[pathlib.Path]).kind, ValueKind.CUSTOM)

    def testListOfSwitchesRejected(self):
        with self.assertRaises(TypeError):
            resolve(list[bool])

    def testNestedGenericRejected(self):
        with self.assertRaises(TypeError):
            resolve(list[list[int]])
        with self.assertRaises(TypeError):
            resolve(dict[str, int])

    def testNonCallableRejected(self):
        with self.assertRaises(TypeError):
            resolve(3)


class TestConvert(TestCase):
    """Behavioral tests for convert()."""

    def testSwitchAlwaysSucceeds(self):
        self.assertEqual(convert("anything", ValueKind.SWITCH), Conversion(True, True))

    def testStringPassthrough(self):
        self.assertEqual(convert("hello", ValueKind.STRING), Conversion("hello", True))

    def testInteger(self):
        self.assertEqual(convert("42", ValueKind.INTEGER), Conversion(42, True))
        self.assertEqual(convert("4x", ValueKind.INTEGER), Conversion(None, False))

    def testFloat(self):
        self.assertEqual(convert("1.5", ValueKind.FLOAT), Conversion(1.5, True))
        self.assertFalse(convert("one", ValueKind.FLOAT).success)

    def testCustom(self):
        self.assertEqual(convert("a/b", ValueKind.CUSTOM, pathlib.Path), Conversion(pathlib.Path("a/b"), True))

    def testCustomFailureIsReported(self):
        def even(raw):
            if int(raw) % 2:
                raise ValueError("odd")
            return int(raw)

        self.assertEqual(convert("4", ValueKind.CUSTOM, even), Conversion(4, True))
        self.assertEqual(convert("3", ValueKind.CUSTOM, even), Conversion(None, False))

    def testCustomArithmeticFailureIsReported(self):
        self.assertEqual(convert("2.5", ValueKind.CUSTOM, decimal.Decimal), Conversion(decimal.Decimal("2.5"), True))
        self.assertEqual(convert("abc", ValueKind.CUSTOM, decimal.Decimal), Conversion(None, False))

    def testCustomRequiresItemType(self):
        with self.assertRaises(TypeError):
            convert("x", ValueKind.CUSTOM)

    def testNonStringInputFails(self):
        self.assertFalse(convert(12, ValueKind.INTEGER).success)


if __name__ == "__main__":
    unittest.main()

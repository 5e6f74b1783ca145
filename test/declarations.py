"""
Declarations behavioral tests (Option, Argument, switch).

Scope
- Validate construction, normalization and rejection of bad metadata.
- Validate optionality rules (default present means optional; switches are
  always optional).
- Validate immutability, copying and fallback values.

Conventions
- Test method names follow CamelCase per project convention.
- Never pass explicit None for descr; omit it instead.
"""
import copy
import unittest
from unittest import TestCase

from argclip import Declaration, Option, Argument, switch
from argclip.values import ValueKind


class TestOption(TestCase):
    """Behavioral tests for Option declarations."""

    def testNameDefaultsToLongKey(self):
        o = Option("n", "count")
        self.assertEqual(o.name, "count")
        self.assertEqual(o.key, "n")
        self.assertEqual(o.longkey, "count")

    def testExplicitName(self):
        o = Option("n", "count", "N", "how many", type=int)
        self.assertEqual(o.name, "N")
        self.assertEqual(o.descr, "how many")
        self.assertIs(o.type, int)
        self.assertIs(o.kind, ValueKind.INTEGER)

    def testDescrDefaultsToNone(self):
        self.assertIsNone(Option("n", "count").descr)

    def testDescrExplicitNoneRejected(self):
        with self.assertRaises(TypeError):
            Option("n", "count", "N", None)

    def testDescrEmptyRejected(self):
        with self.assertRaises(ValueError):
            Option("n", "count", "N", "   ")

    def testKeyMustBeOneCharacter(self):
        with self.assertRaises(ValueError):
            Option("nn", "count")
        with self.assertRaises(ValueError):
            Option("", "count")
        with self.assertRaises(ValueError):
            Option("-", "count")
        with self.assertRaises(TypeError):
            Option(1, "count")

    def testLongKeyShape(self):
        with self.assertRaises(ValueError):
            Option("n", "")
        with self.assertRaises(ValueError):
            Option("n", "--count")
        with self.assertRaises(ValueError):
            Option("n", "co unt")
        with self.assertRaises(ValueError):
            Option("n", "count=1")

    def testRequiredWithoutDefault(self):
        o = Option("n", "count", type=int)
        self.assertFalse(o.optional)
        self.assertIsNone(o.fallback())

    def testOptionalWithDefault(self):
        o = Option("n", "count", type=int, default=3)
        self.assertTrue(o.optional)
        self.assertEqual(o.default, 3)
        self.assertEqual(o.fallback(), 3)

    def testNoneDefaultStillOptional(self):
        o = Option("o", "output", default=None)
        self.assertTrue(o.optional)
        self.assertIsNone(o.fallback())

    def testMultiValued(self):
        o = Option("t", "tag", type=list[str], default=("a", "b"))
        self.assertTrue(o.multiple)
        self.assertEqual(o.default, ["a", "b"])

    def testMultiValuedDefaultIsCopied(self):
        tags = ["a"]
        o = Option("t", "tag", type=list[str], default=tags)
        tags.append("b")
        o.default.append("c")
        self.assertEqual(o.default, ["a"])

    def testMultiValuedStringDefaultRejected(self):
        with self.assertRaises(TypeError):
            Option("t", "tag", type=list[str], default="ab")

    def testRequiredMultiValuedFallsBackToEmptyList(self):
        self.assertEqual(Option("t", "tag", type=list[int]).fallback(), [])

    def testUnsupportedTypeRejected(self):
        with self.assertRaises(TypeError):
            Option("t", "tag", type=list[bool])
        with self.assertRaises(TypeError):
            Option("t", "tag", type="int")

    def testLabel(self):
        self.assertEqual(Option("n", "count").label, "-n(count)")

    def testImmutable(self):
        o = Option("n", "count")
        with self.assertRaises(AttributeError):
            o.key = "m"

    def testRepr(self):
        self.assertTrue(repr(Option("n", "count")).startswith("option(key='n', longkey='count'"))

    def testCopyKeepsMetadata(self):
        o = Option("n", "count", "N", "how many", type=int, default=2)
        clone = copy.copy(o)
        self.assertIsNot(clone, o)
        self.assertIs(type(clone), Option)
        self.assertEqual(repr(clone), repr(o))

    def testConvert(self):
        o = Option("n", "count", type=int)
        self.assertEqual(o.convert("7"), (7, True))
        self.assertFalse(o.convert("seven").success)


class TestSwitch(TestCase):
    """Behavioral tests for boolean options."""

    def testSwitchIsAlwaysOptional(self):
        s = switch("v", "verbose", "print more")
        self.assertTrue(s.switch)
        self.assertTrue(s.optional)
        self.assertIs(s.default, False)
        self.assertIs(s.fallback(), False)

    def testBoolOptionIsSwitch(self):
        s = Option("v", "verbose", type=bool)
        self.assertTrue(s.switch)
        self.assertTrue(s.optional)

    def testSwitchDefaultTrue(self):
        self.assertIs(switch("c", "color", default=True).default, True)
        self.assertIs(switch("c", "color", default=True).fallback(), False)


class TestArgument(TestCase):
    """Behavioral tests for positional Argument declarations."""

    def testRequiredByDefault(self):
        a = Argument("input", "file to read")
        self.assertEqual(a.name, "input")
        self.assertEqual(a.label, "input")
        self.assertFalse(a.optional)
        self.assertIs(a.type, str)

    def testOptionalWithDefault(self):
        a = Argument("count", type=int, default=0)
        self.assertTrue(a.optional)
        self.assertEqual(a.fallback(), 0)

    def testVariadic(self):
        a = Argument("numbers", type=list[int])
        self.assertTrue(a.multiple)
        self.assertEqual(a.type, list[int])
        self.assertEqual(a.fallback(), [])

    def testSwitchArgumentRejected(self):
        with self.assertRaises(TypeError):
            Argument("flag", type=bool)

    def testNameValidation(self):
        with self.assertRaises(ValueError):
            Argument("")
        with self.assertRaises(ValueError):
            Argument("two words")
        with self.assertRaises(ValueError):
            Argument("-dash")
        with self.assertRaises(TypeError):
            Argument(3)

    def testDeclarationIsAbstract(self):
        with self.assertRaises(TypeError):
            Declaration()


if __name__ == "__main__":
    unittest.main()

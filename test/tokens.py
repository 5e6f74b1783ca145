"""
Tokenizer tests.
"""
import unittest
from unittest import TestCase

from argclip.tokens import TokenKind, Token, classify, tokenize


class TestClassify(TestCase):

    def testLongKey(self):
        self.assertEqual(classify("--count"), Token(TokenKind.LONGKEY, "--count", "count"))

    def testShortKey(self):
        token = classify("-n")
        self.assertEqual(token.kind, TokenKind.KEY)
        self.assertEqual(token.keys, "n")
        self.assertTrue(token.keyed)
        self.assertFalse(token.bundle)

    def testBundle(self):
        token = classify("-abc")
        self.assertEqual(token.kind, TokenKind.KEY)
        self.assertEqual(token.keys, "abc")
        self.assertTrue(token.bundle)

    def testValue(self):
        token = classify("file.txt")
        self.assertEqual(token.kind, TokenKind.VALUE)
        self.assertFalse(token.keyed)

    def testNegativeNumberIsKeyShaped(self):
        self.assertEqual(classify("-5").kind, TokenKind.KEY)

    def testLoneHyphen(self):
        token = classify("-")
        self.assertEqual(token.kind, TokenKind.KEY)
        self.assertEqual(token.keys, "")
        self.assertFalse(token.bundle)

    def testRejectsNonString(self):
        with self.assertRaises(TypeError):
            classify(1)

    def testTokenizeKeepsOrder(self):
        self.assertEqual(
            [token.kind for token in tokenize(["-a", "x", "--b"])],
            [TokenKind.KEY, TokenKind.VALUE, TokenKind.LONGKEY],
        )


if __name__ == "__main__":
    unittest.main()

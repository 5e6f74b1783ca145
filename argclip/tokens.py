"""
Argclip tokenizer: classify raw argument strings by their leading characters.

- "--name"  → LONGKEY, keys "name"
- "-k"      → KEY, keys "k" (one option, may take the following value tokens)
- "-abc"    → KEY, keys "abc" (switch bundle: every char must be a boolean option)
- anything else → VALUE

A lone "-" is a KEY token without keys; the parser ignores it.
"""
from enum import Enum
from typing import NamedTuple


class TokenKind(Enum):
    VALUE = "value"
    KEY = "key"
    LONGKEY = "longkey"


class Token(NamedTuple):
    kind: TokenKind
    raw: str
    keys: str

    @property
    def keyed(self):
        """True for key-shaped tokens (they end a greedy value run)."""
        return self.kind is not TokenKind.VALUE

    @property
    def bundle(self):
        """True for short tokens that carry more than one key."""
        return self.kind is TokenKind.KEY and len(self.keys) > 1


def classify(raw, /):
    """
    Classify one raw argument string.
    """
    if not isinstance(raw, str):
        raise TypeError("classify() argument must be a string")
    if raw.startswith("--"):
        return Token(TokenKind.LONGKEY, raw, raw[2:])
    if raw.startswith("-"):
        return Token(TokenKind.KEY, raw, raw[1:])
    return Token(TokenKind.VALUE, raw, "")


def tokenize(arguments, /):
    """
    Classify every raw argument string, preserving order.
    """
    return [classify(raw) for raw in arguments]


__all__ = (
    "TokenKind",
    "Token",
    "classify",
    "tokenize",
)

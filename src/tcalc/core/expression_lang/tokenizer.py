"""
Tokenizer for tcalc expressions.

Scans an expression string left to right and hands out one token per
pull. Bad input never raises here: unknown characters and numbers too
large for a signed 64-bit integer become ILLEGAL tokens, which the
parser then reports.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from enum import StrEnum, auto

# Largest value a NUMBER token may carry (signed 64-bit maximum)
MAX_NUMBER = 2**63 - 1
_MAX_NUMBER_DIGITS = len(str(MAX_NUMBER))

_DIGITS_RE = re.compile(r"[0-9]+")
_ALPHA_RE = re.compile(r"[A-Za-z]+")


class TokenKind(StrEnum):
    """Token types for the expression language."""

    NUMBER = auto()
    IDENT = auto()
    PLUS = auto()
    MINUS = auto()
    COLON = auto()
    SLASH = auto()
    EOF = auto()
    ILLEGAL = auto()


_SINGLE_CHAR: dict[str, TokenKind] = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    ":": TokenKind.COLON,
    "/": TokenKind.SLASH,
}

_DISPLAY_NAMES: dict[TokenKind, str] = {
    TokenKind.PLUS: "Plus",
    TokenKind.MINUS: "Minus",
    TokenKind.COLON: "Colon",
    TokenKind.SLASH: "Slash",
    TokenKind.EOF: "EndOfInput",
    TokenKind.ILLEGAL: "Illegal",
}


class Token:
    """A single token from the expression tokenizer."""

    __slots__ = ("kind", "value", "pos")

    def __init__(self, kind: TokenKind, value: int | str, pos: int) -> None:
        self.kind = kind
        self.value = value
        self.pos = pos

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.value!r}, pos={self.pos})"

    def __str__(self) -> str:
        if self.kind == TokenKind.NUMBER:
            return f"Number({self.value})"
        if self.kind == TokenKind.IDENT:
            return f"Ident({self.value})"
        return _DISPLAY_NAMES[self.kind]


class Tokenizer:
    """Pull-based tokenizer over a single expression string.

    ``next_token()`` advances the cursor; once the input is exhausted it
    returns EOF on every further call. Iterating a tokenizer starts a fresh
    scan from the beginning of the source and never terminates on its own,
    so consumers stop at the first EOF.
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self.pos = 0

    def __iter__(self) -> Iterator[Token]:
        scan = Tokenizer(self.source)
        while True:
            yield scan.next_token()

    def next_token(self) -> Token:
        source = self.source
        n = len(source)

        while self.pos < n and source[self.pos] == " ":
            self.pos += 1

        start = self.pos
        if start >= n:
            return Token(TokenKind.EOF, "", n)

        c = source[start]

        if c in _SINGLE_CHAR:
            self.pos += 1
            return Token(_SINGLE_CHAR[c], c, start)

        m = _DIGITS_RE.match(source, start)
        if m:
            self.pos = m.end()
            digits = m.group(0)
            significant = digits.lstrip("0") or "0"
            # Length check first: int() refuses very long digit strings
            if len(significant) > _MAX_NUMBER_DIGITS or int(significant) > MAX_NUMBER:
                return Token(TokenKind.ILLEGAL, digits, start)
            return Token(TokenKind.NUMBER, int(significant), start)

        m = _ALPHA_RE.match(source, start)
        if m:
            self.pos = m.end()
            return Token(TokenKind.IDENT, m.group(0), start)

        self.pos += 1
        return Token(TokenKind.ILLEGAL, c, start)


def tokenize(source: str) -> list[Token]:
    """Tokenize an expression string into a list ending with one EOF token."""
    tokens: list[Token] = []
    for tok in Tokenizer(source):
        tokens.append(tok)
        if tok.kind == TokenKind.EOF:
            break
    return tokens

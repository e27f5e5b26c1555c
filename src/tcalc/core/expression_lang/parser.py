"""
Recursive descent parser for tcalc expressions.

Grammar:
    expr        → primary (("+" | "-") primary)*
    primary     → datetime | time | duration | keyword
    datetime    → NUMBER "/" NUMBER "/" NUMBER (NUMBER ":" NUMBER)?
    time        → NUMBER ":" NUMBER | NUMBER ("am" | "pm")
    duration    → NUMBER IDENT
    keyword     → IDENT

A leading NUMBER is ambiguous: the token after it decides whether the
primary is a date, a time of day or a duration. "+" and "-" share one
precedence level and fold to the left.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from enum import StrEnum

from tcalc.core.expression_lang.tokenizer import Token, Tokenizer, TokenKind
from tcalc.core.ir.expressions import (
    UNIT_ALIASES,
    BinaryExpr,
    BinaryOp,
    DateLiteral,
    DateTimeLiteral,
    DurationLiteral,
    Expr,
    Keyword,
    KeywordRef,
    TimeLiteral,
)

logger = logging.getLogger(__name__)

HOURS_IN_HALF_DAY = 12
MAX_YEAR_LITERAL = 2**32 - 1

_KEYWORDS: dict[str, Keyword] = {k.value: k for k in Keyword}


class ParseErrorKind(StrEnum):
    """Categories of parse failure."""

    UNEXPECTED_TOKEN = "UnexpectedToken"
    UNKNOWN_KEYWORD = "UnknownKeyword"
    UNEXPECTED_IDENT = "UnexpectedIdent"
    UNEXPECTED_EOF = "UnexpectedEndOfInput"
    EXPECTED_IDENT = "ExpectedIdent"
    EXPECTED_NUMBER = "ExpectedNumber"
    EXPECTED_SLASH = "ExpectedSlash"
    EXPECTED_COLON = "ExpectedColon"
    EXPECTED_UNIT = "ExpectedUnit"
    INVALID_YEAR = "InvalidYear"
    INVALID_TIME = "InvalidTime"


_FIXED_MESSAGES: dict[ParseErrorKind, str] = {
    ParseErrorKind.UNEXPECTED_EOF: "unexpected end of input",
    ParseErrorKind.EXPECTED_IDENT: "expected identifier",
    ParseErrorKind.EXPECTED_NUMBER: "expected number",
    ParseErrorKind.EXPECTED_SLASH: "expected slash",
    ParseErrorKind.EXPECTED_COLON: "expected colon",
    ParseErrorKind.EXPECTED_UNIT: "expected unit",
}


class ExpressionParseError(Exception):
    """Error during expression parsing."""

    def __init__(self, kind: ParseErrorKind, message: str, pos: int = 0) -> None:
        super().__init__(message)
        self.kind = kind
        self.pos = pos

    @classmethod
    def fixed(cls, kind: ParseErrorKind, pos: int = 0) -> ExpressionParseError:
        """Build an error whose message carries no detail."""
        return cls(kind, _FIXED_MESSAGES[kind], pos)

    @classmethod
    def unexpected(cls, tok: Token) -> ExpressionParseError:
        """Build the error for a token that cannot appear where it did."""
        if tok.kind == TokenKind.EOF:
            return cls.fixed(ParseErrorKind.UNEXPECTED_EOF, tok.pos)
        if tok.kind == TokenKind.IDENT:
            return cls(
                ParseErrorKind.UNEXPECTED_IDENT,
                f"unexpected identifier '{tok.value}'",
                tok.pos,
            )
        return cls(ParseErrorKind.UNEXPECTED_TOKEN, f"unexpected token '{tok}'", tok.pos)


class _Parser:
    """Recursive descent parser with one token of lookahead."""

    def __init__(self, tokens: Iterable[Token]) -> None:
        self._tokens: Iterator[Token] = iter(tokens)
        self._last_pos = 0
        self.current = self._pull()

    def _pull(self) -> Token:
        tok = next(self._tokens, None)
        if tok is None:
            # Finite token lists may omit the trailing EOF
            return Token(TokenKind.EOF, "", self._last_pos)
        self._last_pos = tok.pos
        return tok

    def advance(self) -> Token:
        tok = self.current
        if tok.kind != TokenKind.EOF:
            self.current = self._pull()
        return tok

    def expect(self, kind: TokenKind, missing: ParseErrorKind) -> Token:
        tok = self.current
        if tok.kind == kind:
            return self.advance()
        if tok.kind == TokenKind.EOF:
            raise ExpressionParseError.fixed(missing, tok.pos)
        raise ExpressionParseError.unexpected(tok)

    def expect_number(self) -> int:
        tok = self.advance()
        if tok.kind != TokenKind.NUMBER:
            raise ExpressionParseError.fixed(ParseErrorKind.EXPECTED_NUMBER, tok.pos)
        return int(tok.value)

    # -- Grammar rules --

    def parse_expr(self) -> Expr:
        """primary (('+' | '-') primary)*"""
        left = self.parse_primary()
        while self.current.kind in (TokenKind.PLUS, TokenKind.MINUS):
            op = BinaryOp.ADD if self.current.kind == TokenKind.PLUS else BinaryOp.SUB
            self.advance()
            right = self.parse_primary()
            left = BinaryExpr(op=op, left=left, right=right)
        return left

    def parse_primary(self) -> Expr:
        tok = self.current
        if tok.kind == TokenKind.NUMBER:
            return self._parse_number()
        if tok.kind == TokenKind.IDENT:
            return self._parse_keyword()
        raise ExpressionParseError.unexpected(tok)

    def _parse_keyword(self) -> KeywordRef:
        tok = self.advance()
        if tok.kind != TokenKind.IDENT:
            raise ExpressionParseError.fixed(ParseErrorKind.EXPECTED_IDENT, tok.pos)
        keyword = _KEYWORDS.get(str(tok.value))
        if keyword is None:
            raise ExpressionParseError(
                ParseErrorKind.UNKNOWN_KEYWORD, f"unknown keyword '{tok.value}'", tok.pos
            )
        return KeywordRef(keyword=keyword)

    def _parse_number(self) -> Expr:
        """Decide between date, time and duration from the token after NUMBER."""
        first = self.expect_number()
        tok = self.current

        if tok.kind == TokenKind.SLASH:
            return self._parse_date(first)
        if tok.kind == TokenKind.COLON:
            return self._parse_time(first)
        if tok.kind == TokenKind.IDENT:
            if tok.value == "am":
                self.advance()
                return _twelve_hour(first, "am", tok.pos)
            if tok.value == "pm":
                self.advance()
                return _twelve_hour(first, "pm", tok.pos)
            return self._parse_duration(first)
        raise ExpressionParseError.unexpected(tok)

    def _parse_date(self, year: int) -> DateLiteral | DateTimeLiteral:
        """'/' NUMBER '/' NUMBER (NUMBER ':' NUMBER)?"""
        if year > MAX_YEAR_LITERAL:
            raise ExpressionParseError(
                ParseErrorKind.INVALID_YEAR, f"invalid year '{year}'", self.current.pos
            )
        self.expect(TokenKind.SLASH, ParseErrorKind.EXPECTED_SLASH)
        month = self.expect_number()
        self.expect(TokenKind.SLASH, ParseErrorKind.EXPECTED_SLASH)
        day = self.expect_number()

        if self.current.kind != TokenKind.NUMBER:
            return DateLiteral(year=year, month=month, day=day)

        hour = self.expect_number()
        self.expect(TokenKind.COLON, ParseErrorKind.EXPECTED_COLON)
        minute = self.expect_number()
        return DateTimeLiteral(year=year, month=month, day=day, hour=hour, minute=minute)

    def _parse_time(self, hour: int) -> TimeLiteral:
        """':' NUMBER"""
        self.expect(TokenKind.COLON, ParseErrorKind.EXPECTED_COLON)
        minute = self.expect_number()
        return TimeLiteral(hour=hour, minute=minute)

    def _parse_duration(self, value: int) -> DurationLiteral:
        """IDENT naming a known unit."""
        tok = self.advance()
        if tok.kind != TokenKind.IDENT:
            raise ExpressionParseError.fixed(ParseErrorKind.EXPECTED_UNIT, tok.pos)
        unit = UNIT_ALIASES.get(str(tok.value))
        if unit is None:
            raise ExpressionParseError(
                ParseErrorKind.UNKNOWN_KEYWORD, f"unknown keyword '{tok.value}'", tok.pos
            )
        return DurationLiteral(value=value, unit=unit)


def _twelve_hour(hour: int, suffix: str, pos: int) -> TimeLiteral:
    """Convert an hour-only 12-hour clock reading to a 24-hour TimeLiteral."""
    if 1 <= hour <= 11:
        return TimeLiteral(hour=hour + HOURS_IN_HALF_DAY if suffix == "pm" else hour, minute=0)
    if hour == HOURS_IN_HALF_DAY:
        return TimeLiteral(hour=HOURS_IN_HALF_DAY if suffix == "pm" else 0, minute=0)
    raise ExpressionParseError(ParseErrorKind.INVALID_TIME, f"invalid time '{hour} {suffix}'", pos)


def parse(tokens: Iterable[Token]) -> Expr:
    """Parse a token stream into an AST.

    The stream may be a ``Tokenizer`` (endless, EOF repeats) or a finite
    list of tokens. Every token up to EOF must belong to the expression.

    Raises:
        ExpressionParseError: If the tokens do not form an expression.
    """
    parser = _Parser(tokens)
    expr = parser.parse_expr()

    # Ensure all tokens consumed
    if parser.current.kind != TokenKind.EOF:
        raise ExpressionParseError.unexpected(parser.current)

    return expr


def parse_expr(source: str) -> Expr:
    """Parse an expression string into an AST.

    Args:
        source: Expression string (e.g., "2025/09/27 + 2d")

    Returns:
        Parsed expression AST.

    Raises:
        ExpressionParseError: If the expression is invalid.
    """
    expr = parse(Tokenizer(source))
    logger.debug("Parsed %r as %s", source, expr)
    return expr

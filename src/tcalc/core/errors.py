"""
Error types raised at the tcalc boundary.

Inner errors from the expression language (ExpressionParseError,
ExpressionEvalError) are wrapped here with a stage-labelled message so
callers can tell bad grammar from well-formed but invalid arithmetic
without inspecting the text.
"""

from __future__ import annotations

from dataclasses import dataclass


class TcalcError(Exception):
    """Base exception for all tcalc errors."""

    stage = "process"

    def __init__(
        self,
        cause: Exception,
        context: ErrorContext | None = None,
    ) -> None:
        self.cause = cause
        self.context = context
        self.message = f"failed to {self.stage} expression: {cause}"
        super().__init__(self.message)

    def describe(self) -> str:
        """Message followed by the source excerpt, when a position is known."""
        if self.context:
            return f"{self.message}\n{self.context.format()}"
        return self.message


class ParseError(TcalcError):
    """
    Raised when an expression cannot be parsed.

    Examples:
    - Unknown keyword or unit ("today + 2 weeks")
    - Missing parts ("2025/09", "14:")
    - Illegal characters or oversized numbers
    - Hours outside 1-12 before am/pm ("0am", "13pm")
    """

    stage = "parse"


class EvaluationError(TcalcError):
    """
    Raised when a parsed expression cannot be evaluated.

    Examples:
    - Impossible dates ("2025/02/30") or months ("2025/13/01")
    - Times outside the 24-hour clock ("25:00")
    - Operations with no meaning ("2025/09/27 + 2025/09/28")
    - Results beyond the representable calendar
    """

    stage = "evaluate"


@dataclass
class ErrorContext:
    """
    Source location of a parse error.

    Attributes:
        source: The full expression text
        column: Column number (1-indexed)
    """

    source: str
    column: int

    def format(self) -> str:
        """
        Format the expression with a caret under the offending column.

        Returns:
            Two lines, e.g.::

                  2025/09/27 @ 2d
                             ^
        """
        return f"  {self.source}\n  {' ' * (self.column - 1)}^"

"""
Expression types for tcalc IR.

This module defines the typed expression AST produced by the parser and
consumed by the evaluator and type checker.

Supports:
- Date literals: 2025/09/27
- Time literals: 14:30, 2am, 12pm
- Date-time literals: 2025/09/27 14:30
- Keywords: today, tomorrow, yesterday, now
- Duration literals: 2d, 30 minutes, 1 year
- Arithmetic: +, - (left-associative, no precedence levels)
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Operators and names
# ---------------------------------------------------------------------------


class BinaryOp(StrEnum):
    """Binary operators for expressions."""

    ADD = "+"
    SUB = "-"


class Keyword(StrEnum):
    """Relative-time keywords, resolved against the clock at evaluation."""

    TODAY = "today"
    NOW = "now"
    TOMORROW = "tomorrow"
    YESTERDAY = "yesterday"


class DurationUnit(StrEnum):
    """Units a duration literal can be expressed in."""

    YEARS = "years"
    MONTHS = "months"
    DAYS = "days"
    HOURS = "hours"
    MINUTES = "minutes"
    SECONDS = "seconds"


# Case-sensitive spellings accepted after a number. Months has no
# single-letter form because "m" means minutes.
UNIT_ALIASES: dict[str, DurationUnit] = {
    "years": DurationUnit.YEARS,
    "year": DurationUnit.YEARS,
    "y": DurationUnit.YEARS,
    "months": DurationUnit.MONTHS,
    "month": DurationUnit.MONTHS,
    "days": DurationUnit.DAYS,
    "day": DurationUnit.DAYS,
    "d": DurationUnit.DAYS,
    "hours": DurationUnit.HOURS,
    "hour": DurationUnit.HOURS,
    "h": DurationUnit.HOURS,
    "minutes": DurationUnit.MINUTES,
    "minute": DurationUnit.MINUTES,
    "m": DurationUnit.MINUTES,
    "seconds": DurationUnit.SECONDS,
    "second": DurationUnit.SECONDS,
    "s": DurationUnit.SECONDS,
}


# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


class DateLiteral(BaseModel):
    """A calendar date: 2025/09/27. Not validated until evaluation."""

    year: int = Field(description="Year as written")
    month: int = Field(description="Month as written (1-12 when valid)")
    day: int = Field(description="Day of month as written")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.year}/{self.month:02d}/{self.day:02d}"


class TimeLiteral(BaseModel):
    """A time of day on the 24-hour clock: 14:30, or 2pm after conversion."""

    hour: int
    minute: int

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


class DateTimeLiteral(BaseModel):
    """A date followed by a time of day: 2025/09/27 14:30 (always UTC)."""

    year: int
    month: int
    day: int
    hour: int
    minute: int

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return (
            f"{self.year}/{self.month:02d}/{self.day:02d} "
            f"{self.hour:02d}:{self.minute:02d}"
        )


class KeywordRef(BaseModel):
    """Reference to a relative-time keyword."""

    keyword: Keyword

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.keyword.value


class DurationLiteral(BaseModel):
    """
    A duration literal: 2d, 30 minutes, 1 year.

    Years and months are approximations (365 and 30 days).
    """

    value: int = Field(description="Signed magnitude")
    unit: DurationUnit = Field(description="Canonical unit")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.value} {self.unit.value}"


class BinaryExpr(BaseModel):
    """Binary operation: left op right."""

    op: BinaryOp
    left: Expr
    right: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        first, steps = flatten_chain(self)
        text = str(first)
        for op, right in steps:
            text = f"({text} {op.value} {right})"
        return text


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Expr = DateLiteral | TimeLiteral | DateTimeLiteral | KeywordRef | DurationLiteral | BinaryExpr

# Rebuild models for recursive forward references
BinaryExpr.model_rebuild()


def flatten_chain(expr: BinaryExpr) -> tuple[Expr, list[tuple[BinaryOp, Expr]]]:
    """
    Split a left-deep chain into its first operand and the (op, right)
    steps that follow it, in source order.

    ``a - b + c`` parses as ``((a - b) + c)`` and flattens to
    ``(a, [(-, b), (+, c)])``. Walking the chain with a loop keeps long
    expressions off the call stack.
    """
    steps: list[tuple[BinaryOp, Expr]] = []
    node: Expr = expr
    while isinstance(node, BinaryExpr):
        steps.append((node.op, node.right))
        node = node.left
    steps.reverse()
    return node, steps

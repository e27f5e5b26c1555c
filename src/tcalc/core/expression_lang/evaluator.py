"""
Expression evaluator for tcalc.

Reduces an expression AST to a typed value. Evaluation is pure apart from
reading the clock once for each keyword node; literals are validated here,
not in the parser.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, date, datetime, time, timedelta
from enum import StrEnum
from typing import Any

from tcalc.core.clock import Clock, SystemClock
from tcalc.core.ir.expressions import (
    BinaryExpr,
    BinaryOp,
    DateLiteral,
    DateTimeLiteral,
    DurationLiteral,
    DurationUnit,
    Expr,
    Keyword,
    KeywordRef,
    TimeLiteral,
    flatten_chain,
)
from tcalc.core.ir.values import (
    DateTimeValue,
    DateValue,
    DurationValue,
    TimeValue,
    Value,
    ValueKind,
)

logger = logging.getLogger(__name__)

DAYS_PER_MONTH_APPROX = 30
DAYS_PER_YEAR_APPROX = 365

_ONE_DAY = timedelta(days=1)
_MICROSECOND = timedelta(microseconds=1)
_MICROSECONDS_PER_DAY = _ONE_DAY // _MICROSECOND


class EvalErrorKind(StrEnum):
    """Categories of evaluation failure."""

    INVALID_DATE = "InvalidDate"
    INVALID_MONTH = "InvalidMonth"
    INVALID_TIME = "InvalidTime"
    INVALID_OP = "InvalidOp"
    OUT_OF_RANGE = "OutOfRange"


class ExpressionEvalError(Exception):
    """Error during expression evaluation.

    ``details`` holds the offending components, e.g. ``{"month": 13}`` for
    an invalid month or ``{"op": "+", "left": "Date", "right": "Date"}``
    for a rejected operation.
    """

    def __init__(self, kind: EvalErrorKind, message: str, **details: Any) -> None:
        super().__init__(message)
        self.kind = kind
        self.details = details


def evaluate(expr: Expr, clock: Clock | None = None) -> Value:
    """Evaluate an expression AST to a value.

    Args:
        expr: Parsed expression AST.
        clock: Source of the current instant for keywords. Defaults to the
            system clock.

    Returns:
        The computed value.

    Raises:
        ExpressionEvalError: If a literal is invalid, an operation is not
            defined for its operand kinds, or a result leaves the
            representable range.
    """
    value = _interpret(expr, clock or SystemClock())
    logger.debug("Evaluated %s to %r", expr, value)
    return value


def _interpret(expr: Expr, clock: Clock) -> Value:
    """Dispatch evaluation to the appropriate handler."""
    if isinstance(expr, DateLiteral):
        return DateValue(value=_make_date(expr.year, expr.month, expr.day))

    if isinstance(expr, TimeLiteral):
        return TimeValue(value=_make_time(expr.hour, expr.minute))

    if isinstance(expr, DateTimeLiteral):
        return _interpret_datetime(expr)

    if isinstance(expr, DurationLiteral):
        return DurationValue(value=_interpret_duration(expr))

    if isinstance(expr, KeywordRef):
        return _interpret_keyword(expr, clock)

    if isinstance(expr, BinaryExpr):
        return _interpret_binary(expr, clock)

    raise TypeError(f"Unknown expression type: {type(expr).__name__}")


# ---------------------------------------------------------------------------
# Literals
# ---------------------------------------------------------------------------


def _make_date(year: int, month: int, day: int) -> date:
    if not 1 <= month <= 12:
        raise ExpressionEvalError(
            EvalErrorKind.INVALID_MONTH, f"invalid month '{month}'", month=month
        )
    try:
        return date(year, month, day)
    except (ValueError, OverflowError):
        raise ExpressionEvalError(
            EvalErrorKind.INVALID_DATE,
            f"invalid date '{year}-{month}-{day}'",
            year=year,
            month=month,
            day=day,
        ) from None


def _make_time(hour: int, minute: int, second: int = 0) -> time:
    try:
        return time(hour, minute, second)
    except (ValueError, OverflowError):
        raise ExpressionEvalError(
            EvalErrorKind.INVALID_TIME,
            f"invalid time '{hour}:{minute}:{second}'",
            hour=hour,
            minute=minute,
            second=second,
        ) from None


def _interpret_datetime(expr: DateTimeLiteral) -> DateTimeValue:
    """Combine a validated date and time; literal date-times are always UTC."""
    day = _make_date(expr.year, expr.month, expr.day)
    clock_time = _make_time(expr.hour, expr.minute)
    return DateTimeValue(value=datetime.combine(day, clock_time, tzinfo=UTC))


def _interpret_duration(expr: DurationLiteral) -> timedelta:
    """Convert a duration literal to a timedelta."""
    unit_map: dict[DurationUnit, Callable[[int], timedelta]] = {
        # Years and months are approximate
        DurationUnit.YEARS: lambda v: timedelta(days=v * DAYS_PER_YEAR_APPROX),
        DurationUnit.MONTHS: lambda v: timedelta(days=v * DAYS_PER_MONTH_APPROX),
        DurationUnit.DAYS: lambda v: timedelta(days=v),
        DurationUnit.HOURS: lambda v: timedelta(hours=v),
        DurationUnit.MINUTES: lambda v: timedelta(minutes=v),
        DurationUnit.SECONDS: lambda v: timedelta(seconds=v),
    }
    try:
        return unit_map[expr.unit](expr.value)
    except OverflowError:
        raise _out_of_range() from None


def _interpret_keyword(expr: KeywordRef, clock: Clock) -> Value:
    """Resolve a relative-time keyword against the clock."""
    now = clock.now().astimezone(UTC)
    logger.debug("Clock read for %s: %s", expr.keyword.value, now.isoformat())

    if expr.keyword == Keyword.NOW:
        return DateTimeValue(value=now)

    today = now.date()
    try:
        if expr.keyword == Keyword.TOMORROW:
            return DateValue(value=today + _ONE_DAY)
        if expr.keyword == Keyword.YESTERDAY:
            return DateValue(value=today - _ONE_DAY)
    except OverflowError:
        raise _out_of_range() from None
    return DateValue(value=today)


# ---------------------------------------------------------------------------
# Binary operations
# ---------------------------------------------------------------------------


def _whole_days(delta: timedelta) -> int:
    """Whole days in a span, truncated toward zero (-36h is -1 day)."""
    micros = delta // _MICROSECOND
    days = abs(micros) // _MICROSECONDS_PER_DAY
    return -days if micros < 0 else days


def _shift_date(day: date, delta: timedelta) -> DateValue:
    return DateValue(value=day + timedelta(days=_whole_days(delta)))


def _shift_time(clock_time: time, delta: timedelta) -> TimeValue:
    """Move a time of day by a span, wrapping around midnight."""
    since_midnight = timedelta(
        hours=clock_time.hour,
        minutes=clock_time.minute,
        seconds=clock_time.second,
        microseconds=clock_time.microsecond,
    )
    micros = (since_midnight + delta) // _MICROSECOND % _MICROSECONDS_PER_DAY
    wrapped = datetime.min + timedelta(microseconds=micros)
    return TimeValue(value=wrapped.time())


# Keys mirror tcalc.core.ir.values.OPERATION_RESULTS
_OPERATIONS: dict[tuple[BinaryOp, ValueKind, ValueKind], Callable[[Any, Any], Value]] = {
    (BinaryOp.ADD, ValueKind.DATE, ValueKind.DURATION): lambda a, b: _shift_date(a, b),
    (BinaryOp.SUB, ValueKind.DATE, ValueKind.DURATION): lambda a, b: _shift_date(a, -b),
    (BinaryOp.ADD, ValueKind.DATETIME, ValueKind.DURATION): lambda a, b: DateTimeValue(value=a + b),
    (BinaryOp.SUB, ValueKind.DATETIME, ValueKind.DURATION): lambda a, b: DateTimeValue(value=a - b),
    (BinaryOp.ADD, ValueKind.TIME, ValueKind.DURATION): lambda a, b: _shift_time(a, b),
    (BinaryOp.SUB, ValueKind.TIME, ValueKind.DURATION): lambda a, b: _shift_time(a, -b),
    (BinaryOp.ADD, ValueKind.DURATION, ValueKind.DURATION): lambda a, b: DurationValue(value=a + b),
    (BinaryOp.SUB, ValueKind.DURATION, ValueKind.DURATION): lambda a, b: DurationValue(value=a - b),
    (BinaryOp.SUB, ValueKind.DATE, ValueKind.DATE): lambda a, b: DurationValue(value=a - b),
}


def _interpret_binary(expr: BinaryExpr, clock: Clock) -> Value:
    """Fold a +/- chain left to right, evaluating each operand as it is reached."""
    first, steps = flatten_chain(expr)
    result = _interpret(first, clock)
    for op, right_expr in steps:
        right = _interpret(right_expr, clock)
        result = _apply(op, result, right)
    return result


def _apply(op: BinaryOp, left: Value, right: Value) -> Value:
    """Apply the operator registered for the operand kinds."""
    operation = _OPERATIONS.get((op, left.kind, right.kind))
    if operation is None:
        raise ExpressionEvalError(
            EvalErrorKind.INVALID_OP,
            f"invalid operation '{op.value}' for '{left.kind}' and '{right.kind}'",
            op=op.value,
            left=left.kind.value,
            right=right.kind.value,
        )

    try:
        return operation(left.value, right.value)
    except OverflowError:
        raise _out_of_range() from None


def _out_of_range() -> ExpressionEvalError:
    return ExpressionEvalError(EvalErrorKind.OUT_OF_RANGE, "result out of range")

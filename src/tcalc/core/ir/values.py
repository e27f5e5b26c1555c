"""
Value types produced by evaluating a tcalc expression.

Every value is an immutable model wrapping one standard-library temporal
object. The operator table below is shared by the evaluator and the
static type checker so both agree on which operand pairs are legal.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tcalc.core.ir.expressions import BinaryOp


class ValueKind(StrEnum):
    """Kinds of value an expression can evaluate to."""

    DATE = "Date"
    DATETIME = "DateTime"
    DURATION = "Duration"
    TIME = "Time"


class DateValue(BaseModel):
    """A calendar date with no time of day."""

    value: date

    model_config = ConfigDict(frozen=True)

    @property
    def kind(self) -> ValueKind:
        return ValueKind.DATE


class DateTimeValue(BaseModel):
    """An instant: date, time of day and a fixed UTC offset."""

    value: datetime = Field(description="Timezone-aware datetime")

    model_config = ConfigDict(frozen=True)

    @field_validator("value")
    @classmethod
    def _require_offset(cls, v: datetime) -> datetime:
        if v.tzinfo is None or v.utcoffset() is None:
            raise ValueError("DateTimeValue requires a timezone-aware datetime")
        return v

    @property
    def kind(self) -> ValueKind:
        return ValueKind.DATETIME


class DurationValue(BaseModel):
    """A signed span of elapsed time."""

    value: timedelta

    model_config = ConfigDict(frozen=True)

    @property
    def kind(self) -> ValueKind:
        return ValueKind.DURATION


class TimeValue(BaseModel):
    """A time of day with no date."""

    value: time

    model_config = ConfigDict(frozen=True)

    @property
    def kind(self) -> ValueKind:
        return ValueKind.TIME


Value = DateValue | DateTimeValue | DurationValue | TimeValue


# ---------------------------------------------------------------------------
# Operator table
# ---------------------------------------------------------------------------

# (op, left kind, right kind) -> result kind. Pairs not listed are invalid.
# Date - Date is a span; Date + Date and Duration + Date are not listed.
OPERATION_RESULTS: dict[tuple[BinaryOp, ValueKind, ValueKind], ValueKind] = {
    (BinaryOp.ADD, ValueKind.DATE, ValueKind.DURATION): ValueKind.DATE,
    (BinaryOp.SUB, ValueKind.DATE, ValueKind.DURATION): ValueKind.DATE,
    (BinaryOp.ADD, ValueKind.DATETIME, ValueKind.DURATION): ValueKind.DATETIME,
    (BinaryOp.SUB, ValueKind.DATETIME, ValueKind.DURATION): ValueKind.DATETIME,
    (BinaryOp.ADD, ValueKind.TIME, ValueKind.DURATION): ValueKind.TIME,
    (BinaryOp.SUB, ValueKind.TIME, ValueKind.DURATION): ValueKind.TIME,
    (BinaryOp.ADD, ValueKind.DURATION, ValueKind.DURATION): ValueKind.DURATION,
    (BinaryOp.SUB, ValueKind.DURATION, ValueKind.DURATION): ValueKind.DURATION,
    (BinaryOp.SUB, ValueKind.DATE, ValueKind.DATE): ValueKind.DURATION,
}


def result_kind(op: BinaryOp, left: ValueKind, right: ValueKind) -> ValueKind | None:
    """Return the kind produced by ``left op right``, or None if invalid."""
    return OPERATION_RESULTS.get((op, left, right))

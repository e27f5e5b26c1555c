"""
Display formatting for evaluated values.

Output is stable text meant for terminals and scripts:

    Date      2025-09-29
    Time      01:30, 01:30:15, 01:30:15.12
    DateTime  2025-09-27 14:30 +00:00
    Duration  1d2h30m, -45m, 0s
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta

from tcalc.core.ir.values import DateTimeValue, DateValue, DurationValue, TimeValue, Value

_MICROSECOND = timedelta(microseconds=1)

# (suffix, microseconds per unit), largest first
_DURATION_UNITS: list[tuple[str, int]] = [
    ("d", 86_400_000_000),
    ("h", 3_600_000_000),
    ("m", 60_000_000),
    ("s", 1_000_000),
    ("ms", 1_000),
    ("µs", 1),
]


def format_value(value: Value) -> str:
    """Render a value as display text."""
    if isinstance(value, DateValue):
        return format_date(value.value)
    if isinstance(value, TimeValue):
        return format_time(value.value)
    if isinstance(value, DateTimeValue):
        return format_datetime(value.value)
    if isinstance(value, DurationValue):
        return format_duration(value.value)
    raise TypeError(f"Unknown value type: {type(value).__name__}")


def format_date(d: date) -> str:
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def format_time(t: time) -> str:
    """HH:MM, adding seconds and a trimmed fraction only when non-zero."""
    text = f"{t.hour:02d}:{t.minute:02d}"
    if t.second or t.microsecond:
        text += f":{t.second:02d}"
    if t.microsecond:
        nanos = t.microsecond * 1000
        text += "." + f"{nanos:09d}".rstrip("0")
    return text


def format_offset(offset: timedelta | None) -> str:
    """±HH:MM, or ±HH:MM:SS when the offset has a seconds component."""
    total = int((offset or timedelta()).total_seconds())
    sign = "-" if total < 0 else "+"
    hours, rem = divmod(abs(total), 3600)
    minutes, seconds = divmod(rem, 60)
    text = f"{sign}{hours:02d}:{minutes:02d}"
    if seconds:
        text += f":{seconds:02d}"
    return text


def format_datetime(dt: datetime) -> str:
    return f"{format_date(dt.date())} {format_time(dt.timetz())} {format_offset(dt.utcoffset())}"


def format_duration(delta: timedelta) -> str:
    """Compact span: non-zero units largest first, e.g. ``-1d2h30m``."""
    micros = delta // _MICROSECOND
    if micros == 0:
        return "0s"

    remaining = abs(micros)
    parts: list[str] = []
    for suffix, size in _DURATION_UNITS:
        count, remaining = divmod(remaining, size)
        if count:
            parts.append(f"{count}{suffix}")

    sign = "-" if micros < 0 else ""
    return sign + "".join(parts)

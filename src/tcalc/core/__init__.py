"""Core tcalc functionality: IR, expression language, clock, configuration, errors."""

from . import ir
from .clock import Clock, FixedClock, SystemClock
from .errors import ErrorContext, EvaluationError, ParseError, TcalcError
from .runner import run

__all__ = [
    "ir",
    "Clock",
    "FixedClock",
    "SystemClock",
    "ErrorContext",
    "EvaluationError",
    "ParseError",
    "TcalcError",
    "run",
]

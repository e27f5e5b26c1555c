"""
tcalc intermediate representation: expression AST and evaluated values.
"""

from tcalc.core.ir.expressions import (
    UNIT_ALIASES,
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
    OPERATION_RESULTS,
    DateTimeValue,
    DateValue,
    DurationValue,
    TimeValue,
    Value,
    ValueKind,
    result_kind,
)

__all__ = [
    # Expressions
    "BinaryExpr",
    "BinaryOp",
    "DateLiteral",
    "DateTimeLiteral",
    "DurationLiteral",
    "DurationUnit",
    "Expr",
    "Keyword",
    "KeywordRef",
    "TimeLiteral",
    "UNIT_ALIASES",
    "flatten_chain",
    # Values
    "DateTimeValue",
    "DateValue",
    "DurationValue",
    "OPERATION_RESULTS",
    "TimeValue",
    "Value",
    "ValueKind",
    "result_kind",
]

"""
Type inference for tcalc expressions.

Infers the kind of value an expression produces without evaluating it,
using the same operator table as the evaluator. Literal ranges are not
checked here: ``2025/13/01`` infers as Date and only fails at evaluation.
"""

from __future__ import annotations

from tcalc.core.ir.expressions import (
    BinaryExpr,
    DateLiteral,
    DateTimeLiteral,
    DurationLiteral,
    Expr,
    Keyword,
    KeywordRef,
    TimeLiteral,
    flatten_chain,
)
from tcalc.core.ir.values import ValueKind, result_kind


class ExpressionTypeError(Exception):
    """Type error in an expression."""


def infer_type(expr: Expr) -> ValueKind:
    """Infer the result kind of an expression.

    Args:
        expr: Expression AST node.

    Returns:
        The inferred ValueKind.

    Raises:
        ExpressionTypeError: If an operator is applied to operand kinds it
            does not support.
    """
    if isinstance(expr, DateLiteral):
        return ValueKind.DATE

    if isinstance(expr, TimeLiteral):
        return ValueKind.TIME

    if isinstance(expr, DateTimeLiteral):
        return ValueKind.DATETIME

    if isinstance(expr, DurationLiteral):
        return ValueKind.DURATION

    if isinstance(expr, KeywordRef):
        return ValueKind.DATETIME if expr.keyword == Keyword.NOW else ValueKind.DATE

    if isinstance(expr, BinaryExpr):
        return _infer_binary(expr)

    raise TypeError(f"Unknown expression type: {type(expr).__name__}")


def _infer_binary(expr: BinaryExpr) -> ValueKind:
    """Infer result kind of a +/- chain, folding left to right."""
    first, steps = flatten_chain(expr)
    left_t = infer_type(first)
    for op, right in steps:
        right_t = infer_type(right)
        result = result_kind(op, left_t, right_t)
        if result is None:
            raise ExpressionTypeError(
                f"invalid operation '{op.value}' for '{left_t}' and '{right_t}'"
            )
        left_t = result
    return left_t

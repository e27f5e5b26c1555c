"""
Entry points that run an expression through the tokenizer, parser and evaluator.
"""

from __future__ import annotations

import logging

from tcalc.core.clock import Clock
from tcalc.core.environment import get_clock
from tcalc.core.errors import ErrorContext, EvaluationError, ParseError
from tcalc.core.expression_lang.evaluator import ExpressionEvalError, evaluate
from tcalc.core.expression_lang.formatter import format_value
from tcalc.core.expression_lang.parser import ExpressionParseError, parse_expr
from tcalc.core.expression_lang.type_checker import ExpressionTypeError, infer_type
from tcalc.core.ir.expressions import Expr
from tcalc.core.ir.values import ValueKind

logger = logging.getLogger(__name__)


def run(expression: str, clock: Clock | None = None) -> str:
    """Parse, evaluate and render an expression.

    Args:
        expression: One line of expression text, e.g. "2am - 30m".
        clock: Clock for keywords. Defaults to the one configured through
            the environment (see tcalc.core.environment).

    Returns:
        The rendered result, e.g. "01:30".

    Raises:
        ParseError: If the text is not a valid expression.
        EvaluationError: If the expression is well formed but cannot be
            evaluated.
    """
    expr = _parse(expression)

    try:
        value = evaluate(expr, clock or get_clock())
    except ExpressionEvalError as e:
        logger.debug("Evaluation failed (%s): %s", e.kind, e.details)
        raise EvaluationError(e) from e

    return format_value(value)


def check(expression: str) -> ValueKind:
    """Report the kind of value an expression would produce, without a clock.

    Raises:
        ParseError: If the text is not a valid expression.
        EvaluationError: If an operator is applied to unsupported kinds.
    """
    expr = _parse(expression)

    try:
        return infer_type(expr)
    except ExpressionTypeError as e:
        raise EvaluationError(e) from e


def _parse(expression: str) -> Expr:
    try:
        return parse_expr(expression)
    except ExpressionParseError as e:
        logger.debug("Parse failed (%s) at offset %d", e.kind, e.pos)
        raise ParseError(e, ErrorContext(source=expression, column=e.pos + 1)) from e

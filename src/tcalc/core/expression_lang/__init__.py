"""
tcalc expression language.

Tokenizer, parser, evaluator, formatter and type checker for date/time
arithmetic expressions.

Usage:
    from tcalc.core.expression_lang import evaluate, format_value, parse_expr

    expr = parse_expr("2025/09/27 + 2d")
    result = format_value(evaluate(expr))
    # result == "2025-09-29"
"""

from tcalc.core.expression_lang.evaluator import evaluate
from tcalc.core.expression_lang.formatter import format_value
from tcalc.core.expression_lang.parser import parse, parse_expr
from tcalc.core.expression_lang.tokenizer import Tokenizer, tokenize
from tcalc.core.expression_lang.type_checker import infer_type

__all__ = [
    "Tokenizer",
    "evaluate",
    "format_value",
    "infer_type",
    "parse",
    "parse_expr",
    "tokenize",
]

"""
Entry point for hosts that embed tcalc (browser bridges, editor plugins).

Hosts get one string back in every case: the result, or the error message
prefixed with "Error: ".
"""

from tcalc.core.errors import TcalcError
from tcalc.core.runner import run


def run_embedded(expression: str) -> str:
    """Evaluate an expression, folding failures into the returned text."""
    try:
        return run(expression)
    except TcalcError as e:
        return f"Error: {e}"

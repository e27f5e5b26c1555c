"""
tcalc - date and time arithmetic from the command line.

Evaluates one-line expressions such as "2025/09/27 + 2d", "2am - 30m"
or "now - 90 minutes" and renders the resulting date, time, date-time
or duration as text.
"""

from __future__ import annotations

from ._version import get_version
from .core import ir
from .core.errors import EvaluationError, ParseError, TcalcError
from .core.runner import run

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "run",
    "TcalcError",
    "ParseError",
    "EvaluationError",
]

"""
calcpad - arithmetic expression evaluator.

Turns expressions such as ``2 + 3 * sin(pi/2)`` into numbers and reports
malformed input as a structured error instead of raising.
"""

from __future__ import annotations

from ._version import get_version
from .core.errors import CalcpadError, ConfigError, EvaluationError
from .core.expression_lang import ErrorKind, EvalError, EvalResult, evaluate, format_value

__version__ = get_version()

__all__ = [
    "__version__",
    "evaluate",
    "format_value",
    "EvalResult",
    "EvalError",
    "ErrorKind",
    "CalcpadError",
    "ConfigError",
    "EvaluationError",
]

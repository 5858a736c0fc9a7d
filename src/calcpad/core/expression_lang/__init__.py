"""
calcpad arithmetic expression language.

Lexer, recursive descent evaluator, and result types.

Usage:
    from calcpad.core.expression_lang import evaluate

    result = evaluate("2 + 3 * 4")
    # result.value == 14.0

    result = evaluate("5 / 0")
    # result.error.message == "Division by zero"
"""

from calcpad.core.expression_lang.evaluator import evaluate, format_value
from calcpad.core.expression_lang.results import ErrorKind, EvalError, EvalResult

__all__ = ["ErrorKind", "EvalError", "EvalResult", "evaluate", "format_value"]

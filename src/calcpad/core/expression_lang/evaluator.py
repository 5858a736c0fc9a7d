"""
Public entry point for evaluating calcpad expressions.

Pure evaluation: no I/O, no shared state. Each call builds its own lexer and
parser, so concurrent calls from different threads are safe.
"""

from __future__ import annotations

import logging

from calcpad.core.expression_lang.parser import DEFAULT_MAX_DEPTH, Parser
from calcpad.core.expression_lang.results import ErrorKind, EvalResult
from calcpad.core.expression_lang.tokenizer import Lexer, TokenKind

logger = logging.getLogger(__name__)

DEFAULT_PRECISION = 10


def evaluate(
    expression: str,
    *,
    implicit_multiplication: bool = False,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> EvalResult:
    """Evaluate an arithmetic expression.

    Args:
        expression: Expression text (e.g., "2 + 3 * sin(pi/2)")
        implicit_multiplication: Accept adjacent operands such as "2pi" or
            "2(3+4)" as products
        max_depth: Deepest nesting of parentheses, unary signs and powers
            before the expression is rejected

    Returns:
        EvalResult with either ``value`` or ``error`` set.
    """
    parser = Parser(
        Lexer(expression),
        implicit_multiplication=implicit_multiplication,
        max_depth=max_depth,
    )
    value = parser.parse_expression()

    if parser.error is None and parser.current != TokenKind.EOF:
        parser.fail("Extra tokens", ErrorKind.SYNTAX)

    if parser.error is not None:
        logger.debug(
            "Evaluation of %r failed at %d: %s",
            expression,
            parser.error.position,
            parser.error.message,
        )
        return EvalResult(expression=expression, error=parser.error)

    return EvalResult(expression=expression, value=value)


def format_value(value: float, precision: int = DEFAULT_PRECISION) -> str:
    """Format a result the way every front-end shows it (``%.10g`` by default)."""
    return f"{value:.{precision}g}"

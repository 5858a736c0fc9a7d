"""
Error types for calcpad evaluation and configuration.

Evaluation itself never raises: ``evaluate`` returns an ``EvalResult`` that
carries either a value or an ``EvalError``. The exceptions here are for
callers that prefer raising (``EvalResult.unwrap``) and for configuration
loading.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from calcpad.core.expression_lang.results import EvalError


class CalcpadError(Exception):
    """Base exception for all calcpad errors."""

    def __init__(self, message: str, context: ErrorContext | None = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.message}\n{self.context.format()}"
        return self.message


class EvaluationError(CalcpadError):
    """
    Raised by ``EvalResult.unwrap`` when an evaluation failed.

    Examples:
    - Division by zero
    - Unknown identifier
    - Missing closing parenthesis
    """

    def __init__(self, error: EvalError, expression: str | None = None):
        self.error = error
        context = None
        if expression is not None:
            context = ErrorContext(expression=expression, position=error.position)
        super().__init__(error.message, context)


class ConfigError(CalcpadError):
    """
    Raised when a calcpad.toml file cannot be used.

    Examples:
    - Malformed TOML
    - Values outside their allowed range
    """

    pass


@dataclass
class ErrorContext:
    """
    Location of an error inside the evaluated expression.

    Attributes:
        expression: The expression text as given by the user
        position: Zero-based offset of the offending token
    """

    expression: str
    position: int

    def format(self) -> str:
        """
        Format the expression with a marker under the error position.

        Returns:
            Two lines: the expression and a ``^`` marker
        """
        lines = self.expression.split("\n")
        # Newlines count as insignificant whitespace; show the line holding the error
        offset = 0
        for line in lines:
            if self.position <= offset + len(line):
                column = self.position - offset
                return f"  {line}\n  {' ' * column}^"
            offset += len(line) + 1
        return f"  {lines[-1]}\n  {' ' * len(lines[-1])}^"

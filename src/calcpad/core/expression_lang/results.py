"""
Outcome types for expression evaluation.

An evaluation produces exactly one of a value or an error, never both.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from calcpad.core.errors import EvaluationError


class ErrorKind(StrEnum):
    """Where in the pipeline an evaluation failed."""

    LEXICAL = "lexical"
    SYNTAX = "syntax"
    DOMAIN = "domain"


class EvalError(BaseModel):
    """A human-readable evaluation failure."""

    message: str = Field(description="Message shown to the user verbatim")
    kind: ErrorKind
    position: int = Field(default=0, ge=0, description="Source offset of the failure")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.message


class EvalResult(BaseModel):
    """Result of evaluating one expression: a value or an error."""

    expression: str
    value: float | None = None
    error: EvalError | None = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _exactly_one_outcome(self) -> Self:
        if (self.value is None) == (self.error is None):
            raise ValueError("EvalResult needs exactly one of value or error")
        return self

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> float:
        """Return the value, or raise ``EvaluationError`` for a failed evaluation."""
        if self.error is not None:
            raise EvaluationError(self.error, self.expression)
        assert self.value is not None
        return self.value

"""
Recursive descent parser and evaluator for calcpad expressions.

Values are computed while descending; no AST is built.

Grammar (precedence low to high):
    expression  → term (("+" | "-") term)*
    term        → factor (("*" | "/" | "%") factor)*
    factor      → power power*          (implicit multiplication)
                | power                 (default)
    power       → unary ("^" power)?
    unary       → ("+" | "-") unary
                | FUNCTION primary
                | primary
    primary     → NUMBER | "pi" | "e" | "(" expression ")"

A function applies to a single primary, so ``sin 2^2`` is ``sin(2)^2``.

Failures are latched: the first call to ``fail`` records the error and every
rule still on the stack returns 0.0 without recording anything else.
"""

from __future__ import annotations

import math
from collections.abc import Callable

from calcpad.core.expression_lang.results import ErrorKind, EvalError
from calcpad.core.expression_lang.tokenizer import FUNCTION_KINDS, Lexer, TokenKind

DEFAULT_MAX_DEPTH = 100
# A parenthesis level costs six interpreter frames; stay well under the
# default recursion limit of 1000.
MAX_DEPTH_LIMIT = 128


def _trig(fn: Callable[[float], float]) -> Callable[[float], float]:
    def apply(x: float) -> float:
        try:
            return fn(x)
        except ValueError:
            # infinite argument
            return math.nan

    return apply


def _exp(x: float) -> float:
    try:
        return math.exp(x)
    except OverflowError:
        return math.inf


def _signed_inf(base: float, exponent: float) -> float:
    if abs(math.fmod(exponent, 2.0)) == 1.0:
        return math.copysign(math.inf, base)
    return math.inf


def _power(base: float, exponent: float) -> float:
    try:
        return math.pow(base, exponent)
    except OverflowError:
        return _signed_inf(base, exponent)
    except ValueError:
        if base == 0:
            return _signed_inf(base, exponent)
        # negative base with a fractional exponent
        return math.nan


def _fmod(x: float, y: float) -> float:
    try:
        return math.fmod(x, y)
    except ValueError:
        return math.nan


_FUNCTIONS: dict[TokenKind, Callable[[float], float]] = {
    TokenKind.SIN: _trig(math.sin),
    TokenKind.COS: _trig(math.cos),
    TokenKind.TAN: _trig(math.tan),
    TokenKind.SQRT: math.sqrt,
    TokenKind.LOG: math.log,
    TokenKind.EXP: _exp,
    TokenKind.ABS: math.fabs,
}

# Tokens that may start an implicit multiplicand, as in 2pi or 2(3+4)
_IMPLICIT_OPERAND_KINDS = frozenset(
    {TokenKind.NUMBER, TokenKind.PI, TokenKind.E, TokenKind.LPAREN} | FUNCTION_KINDS
)


class Parser:
    """Recursive descent evaluator over a single ``Lexer``."""

    def __init__(
        self,
        lexer: Lexer,
        *,
        implicit_multiplication: bool = False,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        self.lexer = lexer
        self.implicit_multiplication = implicit_multiplication
        self.max_depth = min(max_depth, MAX_DEPTH_LIMIT)
        self.error: EvalError | None = None
        self.depth = 0
        lexer.advance()

    @property
    def current(self) -> TokenKind:
        return self.lexer.current.kind

    def advance(self) -> None:
        self.lexer.advance()

    def fail(self, message: str, kind: ErrorKind, pos: int | None = None) -> float:
        """Latch an error unless one is already recorded; always returns 0.0."""
        if self.error is None:
            if pos is None:
                pos = self.lexer.current.pos
            self.error = EvalError(message=message, kind=kind, position=pos)
        return 0.0

    def enter(self) -> bool:
        """Count one nesting level; latch an error past ``max_depth``.

        Callers that get True must decrement ``depth`` when the nested rule
        returns.
        """
        self.depth += 1
        if self.depth > self.max_depth:
            self.depth -= 1
            self.fail("Nesting too deep", ErrorKind.SYNTAX)
            return False
        return True

    # -- Grammar rules --

    def parse_expression(self) -> float:
        """term (('+' | '-') term)*"""
        left = self.parse_term()
        while self.error is None:
            if self.current == TokenKind.PLUS:
                self.advance()
                left = left + self.parse_term()
            elif self.current == TokenKind.MINUS:
                self.advance()
                left = left - self.parse_term()
            else:
                break
        return left if self.error is None else 0.0

    def parse_term(self) -> float:
        """factor (('*' | '/' | '%') factor)*"""
        left = self.parse_factor()
        while self.error is None:
            op = self.lexer.current
            if op.kind == TokenKind.STAR:
                self.advance()
                left = left * self.parse_factor()
            elif op.kind == TokenKind.SLASH:
                self.advance()
                right = self.parse_factor()
                if right == 0:
                    return self.fail("Division by zero", ErrorKind.DOMAIN, op.pos)
                left = left / right
            elif op.kind == TokenKind.PERCENT:
                self.advance()
                right = self.parse_factor()
                if right == 0:
                    return self.fail("Modulo by zero", ErrorKind.DOMAIN, op.pos)
                left = _fmod(left, right)
            else:
                break
        return left if self.error is None else 0.0

    def parse_factor(self) -> float:
        """power power* with implicit multiplication, otherwise power."""
        left = self.parse_power()
        if not self.implicit_multiplication:
            return left
        while self.error is None and self.current in _IMPLICIT_OPERAND_KINDS:
            left = left * self.parse_power()
        return left if self.error is None else 0.0

    def parse_power(self) -> float:
        """unary ('^' power)?  -- right-associative"""
        left = self.parse_unary()
        if self.error is None and self.current == TokenKind.CARET:
            self.advance()
            if not self.enter():
                return 0.0
            try:
                right = self.parse_power()
            finally:
                self.depth -= 1
            if self.error is not None:
                return 0.0
            return _power(left, right)
        return left if self.error is None else 0.0

    def parse_unary(self) -> float:
        """('+' | '-') unary | FUNCTION primary | primary"""
        if self.error is not None:
            return 0.0
        tok = self.lexer.current

        if tok.kind in (TokenKind.MINUS, TokenKind.PLUS):
            self.advance()
            if not self.enter():
                return 0.0
            try:
                value = self.parse_unary()
            finally:
                self.depth -= 1
            if self.error is not None:
                return 0.0
            return -value if tok.kind == TokenKind.MINUS else value

        if tok.kind in FUNCTION_KINDS:
            self.advance()
            value = self.parse_primary()
            if self.error is not None:
                return 0.0
            if tok.kind == TokenKind.SQRT and value < 0:
                return self.fail("Sqrt of negative", ErrorKind.DOMAIN, tok.pos)
            if tok.kind == TokenKind.LOG and value <= 0:
                return self.fail("Log of non-positive", ErrorKind.DOMAIN, tok.pos)
            return _FUNCTIONS[tok.kind](value)

        return self.parse_primary()

    def parse_primary(self) -> float:
        """NUMBER | 'pi' | 'e' | '(' expression ')'"""
        tok = self.lexer.current

        if tok.kind in (TokenKind.NUMBER, TokenKind.PI, TokenKind.E):
            self.advance()
            return tok.value

        if tok.kind == TokenKind.LPAREN:
            self.advance()
            if not self.enter():
                return 0.0
            try:
                value = self.parse_expression()
            finally:
                self.depth -= 1
            if self.error is not None:
                return 0.0
            if self.current != TokenKind.RPAREN:
                return self.fail("Missing )", ErrorKind.SYNTAX)
            self.advance()
            return value

        if tok.kind == TokenKind.EOF:
            return self.fail("Unexpected end of input", ErrorKind.SYNTAX)
        if tok.kind == TokenKind.INVALID:
            return self.fail(tok.text, ErrorKind.LEXICAL)
        return self.fail(f"Unexpected token: {tok.text}", ErrorKind.SYNTAX)

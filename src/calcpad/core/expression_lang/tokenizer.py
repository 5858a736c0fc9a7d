"""
Tokenizer for calcpad arithmetic expressions.

The lexer is pull-based: the parser asks for one token at a time and only
ever looks at ``Lexer.current``. Lexical problems are not raised; they come
back as ``TokenKind.INVALID`` tokens whose text is the diagnostic, and the
parser decides what to do with them.
"""

from __future__ import annotations

import math
import re
from enum import StrEnum, auto

# Longest diagnostic text an INVALID token carries
MAX_TOKEN_TEXT = 256


class TokenKind(StrEnum):
    """Token types for arithmetic expressions."""

    # Literals
    NUMBER = auto()

    # Operators
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()
    PERCENT = auto()
    CARET = auto()

    # Punctuation
    LPAREN = auto()
    RPAREN = auto()

    # Unary functions
    SIN = auto()
    COS = auto()
    TAN = auto()
    SQRT = auto()
    LOG = auto()
    EXP = auto()
    ABS = auto()

    # Constants
    PI = auto()
    E = auto()

    # End of input
    EOF = auto()

    # Unrecognized character or identifier
    INVALID = auto()


FUNCTION_KINDS = frozenset(
    {
        TokenKind.SIN,
        TokenKind.COS,
        TokenKind.TAN,
        TokenKind.SQRT,
        TokenKind.LOG,
        TokenKind.EXP,
        TokenKind.ABS,
    }
)


class Token:
    """A single token from the expression lexer."""

    __slots__ = ("kind", "text", "value", "pos")

    def __init__(self, kind: TokenKind, text: str, pos: int, value: float = 0.0) -> None:
        self.kind = kind
        self.text = text
        self.pos = pos
        self.value = value

    def __repr__(self) -> str:
        if self.kind in (TokenKind.NUMBER, TokenKind.PI, TokenKind.E):
            return f"Token({self.kind}, {self.value!r}, pos={self.pos})"
        return f"Token({self.kind}, {self.text!r}, pos={self.pos})"


_WORDS: dict[str, TokenKind] = {
    "sin": TokenKind.SIN,
    "cos": TokenKind.COS,
    "tan": TokenKind.TAN,
    "sqrt": TokenKind.SQRT,
    "log": TokenKind.LOG,
    "exp": TokenKind.EXP,
    "abs": TokenKind.ABS,
    "pi": TokenKind.PI,
    "e": TokenKind.E,
}

_CONSTANTS: dict[TokenKind, float] = {
    TokenKind.PI: math.pi,
    TokenKind.E: math.e,
}

_SINGLE: dict[str, TokenKind] = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.STAR,
    "/": TokenKind.SLASH,
    "%": TokenKind.PERCENT,
    "^": TokenKind.CARET,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
}

_WHITESPACE = " \t\n\r\f\v"

# Digits with at most one fractional part, or a bare leading-dot fraction
_NUMBER_RE = re.compile(r"[0-9]+(?:\.[0-9]+)?|\.[0-9]+")
_IDENT_RE = re.compile(r"[A-Za-z]+")


def _invalid(text: str, pos: int) -> Token:
    return Token(TokenKind.INVALID, f"Unknown: {text}"[:MAX_TOKEN_TEXT], pos)


class Lexer:
    """Left-to-right scanner over one expression string."""

    def __init__(self, source: str) -> None:
        self.source = source
        self.pos = 0
        self.current = Token(TokenKind.EOF, "", 0)

    def advance(self) -> Token:
        """Scan the next token into ``current`` and return it."""
        self.current = self.next_token()
        return self.current

    def next_token(self) -> Token:
        """Scan and return the next token, moving the cursor past it."""
        source = self.source
        n = len(source)
        i = self.pos

        while i < n and source[i] in _WHITESPACE:
            i += 1
        self.pos = i

        if i >= n:
            return Token(TokenKind.EOF, "", i)

        c = source[i]

        m = _NUMBER_RE.match(source, i)
        if m:
            self.pos = m.end()
            return Token(TokenKind.NUMBER, m.group(0), i, float(m.group(0)))

        m = _IDENT_RE.match(source, i)
        if m:
            word = m.group(0)
            self.pos = m.end()
            kind = _WORDS.get(word)
            if kind is None:
                return _invalid(word, i)
            return Token(kind, word, i, _CONSTANTS.get(kind, 0.0))

        self.pos = i + 1
        kind = _SINGLE.get(c)
        if kind is None:
            return _invalid(c, i)
        return Token(kind, c, i)


def tokenize(source: str) -> list[Token]:
    """Tokenize a whole expression, ending with the EOF token.

    Only used for inspection and tests; the parser pulls tokens lazily.
    """
    lexer = Lexer(source)
    tokens: list[Token] = []
    while True:
        tok = lexer.advance()
        tokens.append(tok)
        if tok.kind == TokenKind.EOF:
            return tokens

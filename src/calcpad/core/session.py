"""
Interactive calculator session state.

Holds the line being edited, its cursor, and the history of evaluated
expressions. Front-ends own one ``Session`` each instead of sharing globals.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass, field

from calcpad.core.config import CalcpadConfig
from calcpad.core.expression_lang import EvalResult, evaluate


@dataclass(frozen=True)
class HistoryEntry:
    """One evaluated expression and its outcome."""

    expression: str
    result: EvalResult


class History:
    """Bounded list of evaluated expressions with a navigation cursor.

    ``current`` ranges over 0..len(self); ``len(self)`` means "past the newest
    entry", i.e. a fresh line.
    """

    def __init__(self, max_size: int = 10) -> None:
        self._entries: deque[HistoryEntry] = deque(maxlen=max_size)
        self.current = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> HistoryEntry:
        return self._entries[index]

    @property
    def max_size(self) -> int:
        assert self._entries.maxlen is not None
        return self._entries.maxlen

    def add(self, expression: str, result: EvalResult) -> HistoryEntry:
        """Append an entry, dropping the oldest when full."""
        entry = HistoryEntry(expression=expression, result=result)
        self._entries.append(entry)
        self.current = len(self._entries)
        return entry

    def previous(self) -> str | None:
        """Step back one entry; None when already at the oldest."""
        if self.current == 0:
            return None
        self.current -= 1
        return self._entries[self.current].expression

    def next(self) -> str | None:
        """Step forward one entry.

        Returns "" when stepping past the newest entry and None when already
        there.
        """
        if self.current < len(self._entries) - 1:
            self.current += 1
            return self._entries[self.current].expression
        if self.current == len(self._entries) - 1:
            self.current = len(self._entries)
            return ""
        return None

    def clear(self) -> None:
        self._entries.clear()
        self.current = 0


@dataclass
class EditBuffer:
    """Single-line text buffer with a cursor."""

    max_length: int = 1024
    text: str = ""
    cursor: int = 0

    def insert(self, char: str) -> bool:
        """Insert one printable ASCII character at the cursor."""
        if len(char) != 1 or not (" " <= char <= "~"):
            return False
        if len(self.text) >= self.max_length:
            return False
        self.text = self.text[: self.cursor] + char + self.text[self.cursor :]
        self.cursor += 1
        return True

    def backspace(self) -> bool:
        """Delete the character before the cursor."""
        if self.cursor == 0:
            return False
        self.text = self.text[: self.cursor - 1] + self.text[self.cursor :]
        self.cursor -= 1
        return True

    def move_left(self) -> None:
        if self.cursor > 0:
            self.cursor -= 1

    def move_right(self) -> None:
        if self.cursor < len(self.text):
            self.cursor += 1

    def clear(self) -> None:
        self.text = ""
        self.cursor = 0

    def replace(self, text: str) -> None:
        """Replace the whole line, clipped to ``max_length``; cursor goes to the end."""
        self.text = text[: self.max_length]
        self.cursor = len(self.text)


@dataclass
class Session:
    """Editing and history state for one interactive front-end."""

    config: CalcpadConfig = field(default_factory=CalcpadConfig)
    buffer: EditBuffer = field(init=False)
    history: History = field(init=False)

    def __post_init__(self) -> None:
        self.buffer = EditBuffer(max_length=self.config.max_expression_length)
        self.history = History(max_size=self.config.history_size)

    def evaluate(self, expression: str) -> EvalResult:
        """Evaluate with this session's settings without touching history."""
        return evaluate(
            expression,
            implicit_multiplication=self.config.implicit_multiplication,
            max_depth=self.config.max_depth,
        )

    def submit(self) -> EvalResult | None:
        """Evaluate the buffer, record it, and start a fresh line.

        Returns None, and changes nothing, when the buffer is empty.
        """
        expression = self.buffer.text
        if not expression:
            return None
        result = self.evaluate(expression)
        self.history.add(expression, result)
        self.buffer.clear()
        return result

    def history_up(self) -> None:
        expression = self.history.previous()
        if expression is not None:
            self.buffer.replace(expression)

    def history_down(self) -> None:
        expression = self.history.next()
        if expression is not None:
            self.buffer.replace(expression)

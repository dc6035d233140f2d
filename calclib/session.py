"""
Headless calculator session.

Models the state behind a calculator panel: the input line (shown with
display operators), the last result or error message, and the history of
evaluated expressions. Front ends forward keystrokes and typed text here
and render ``input``, ``result`` and ``history``.

A session is mutable and belongs to one user; do not share it between
threads.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from pydantic import BaseModel, Field

from .errors import CalcError
from .evaluator import evaluate
from .validator import substitute, unsubstitute, validate, validate_text

logger = logging.getLogger(__name__)

INITIAL_RESULT = "0"

# Keypad keys with a meaning beyond inserting text
KEY_ALL_CLEAR = "AC"
KEY_CLEAR = "C"
KEY_BACKSPACE = "⌫"
KEY_TOGGLE_SIGN = "±"
KEY_EVALUATE = "="

# Layout of the basic keypad, row by row
KEYPAD: tuple[tuple[str, ...], ...] = (
    ("AC", "C", "±", "%", "⌫"),
    ("7", "8", "9", "÷", "("),
    ("4", "5", "6", "×", ")"),
    ("1", "2", "3", "−", "!"),
    ("0", ".", "=", "+"),
)

MINUS_SIGNS = ("-", "−")


class HistoryEntry(BaseModel):
    """One evaluated expression and its displayed result"""
    expression: str
    result: str


class SessionState(BaseModel):
    """Snapshot of a calculator session"""
    input: str = ""
    result: str = INITIAL_RESULT
    history: List[HistoryEntry] = Field(default_factory=list)


class CalculatorSession:
    """
    Input line, result and history of one calculator.

    Args:
        history_limit: Maximum number of history entries kept (None = unlimited)
    """

    def __init__(self, history_limit: Optional[int] = None):
        self.history_limit = history_limit
        self.input = ""
        self.result = INITIAL_RESULT
        self.history: list[HistoryEntry] = []

    def type_text(self, text: str) -> bool:
        """
        Replace the input line with typed text.

        Text containing ``=`` or a newline triggers evaluation of the current
        input instead. Text with any character ``validate`` rejects is
        ignored.

        Returns:
            True if the text was accepted
        """
        if "=" in text or "\n" in text:
            self.evaluate_input()
            return True

        if not validate_text(text):
            logger.debug("Rejected input %r", text)
            return False

        self.input = substitute(text)
        return True

    def press(self, key: str) -> bool:
        """
        Handle a keypad key.

        Returns:
            True if the key was handled
        """
        if key == KEY_ALL_CLEAR:
            self.history.clear()
            self.input = ""
            self.result = INITIAL_RESULT
        elif key == KEY_CLEAR:
            self.input = ""
            self.result = INITIAL_RESULT
        elif key == KEY_BACKSPACE:
            self.input = self.input[:-1]
        elif key == KEY_TOGGLE_SIGN:
            self.toggle_sign()
        elif key == KEY_EVALUATE:
            self.evaluate_input()
        elif key and validate_text(key):
            self.input += substitute(key)
        else:
            logger.debug("Ignored key %r", key)
            return False
        return True

    def toggle_sign(self) -> None:
        if self.input.startswith(MINUS_SIGNS):
            self.input = self.input[1:]
        else:
            self.input = substitute("-") + self.input

    def evaluate_input(self) -> bool:
        """
        Evaluate the input line.

        On success the result is recorded in history and the input cleared.
        On failure the error message replaces the result and the input is
        kept for correction.

        Returns:
            True if the input evaluated
        """
        expression = unsubstitute(self.input)
        try:
            value = evaluate(expression)
        except CalcError as e:
            logger.debug("Evaluation of %r failed: %s", expression, e)
            self.result = str(e)
            return False

        self.result = value.display()
        self._record(HistoryEntry(expression=self.input, result=self.result))
        self.input = ""
        return True

    def copy_result_to_input(self, result: str) -> None:
        """Append a (history) result to the input line."""
        self.input += substitute(result)

    def snapshot(self) -> SessionState:
        return SessionState(
            input=self.input,
            result=self.result,
            history=[entry.model_copy() for entry in self.history],
        )

    def _record(self, entry: HistoryEntry) -> None:
        self.history.append(entry)
        if self.history_limit is not None and len(self.history) > self.history_limit:
            del self.history[: len(self.history) - self.history_limit]


def is_keypad_key(key: str) -> bool:
    return any(key in row for row in KEYPAD)


def is_valid_key(key: str) -> bool:
    """True for keypad keys and any single character ``validate`` accepts."""
    return is_keypad_key(key) or (len(key) == 1 and validate(key))

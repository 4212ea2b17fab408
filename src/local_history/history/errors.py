"""Exceptions raised by strict-mode timelines."""

from __future__ import annotations

from .records import Caret


class HistoryValidationError(RuntimeError):
    """Raised when a record does not fit the buffer it is applied to."""

    def __init__(self, message: str, *, caret: Caret | None = None) -> None:
        super().__init__(message)
        self.caret = caret


class InvalidCaretRange(HistoryValidationError):
    """Caret is inverted, negative, or runs past the current buffer."""


class RecordOutOfBounds(HistoryValidationError):
    """Reverting the record would read past the end of the buffer."""


__all__ = [
    "HistoryValidationError",
    "InvalidCaretRange",
    "RecordOutOfBounds",
]

"""Strict-mode checks run before a record touches the buffer."""

from __future__ import annotations

from .errors import InvalidCaretRange, RecordOutOfBounds
from .records import EditRecord


def ensure_applicable(value: str, record: EditRecord) -> EditRecord:
    caret = record.caret
    if caret.start < 0 or caret.end < 0:
        raise InvalidCaretRange("Caret bounds must be non-negative", caret=caret)
    if caret.start > caret.end:
        raise InvalidCaretRange("Caret start is past its end", caret=caret)
    if caret.end > len(value):
        raise InvalidCaretRange(
            f"Caret end {caret.end} is past buffer length {len(value)}", caret=caret
        )
    return record


def ensure_revertible(value: str, record: EditRecord) -> EditRecord:
    caret = record.caret
    if caret.start < 0 or caret.start + len(record.after_text) > len(value):
        raise RecordOutOfBounds(
            "Record text runs past the end of the buffer", caret=caret
        )
    return record


def ensure_count(count: float) -> float:
    if count < 0:
        raise ValueError("count must be non-negative")
    return count


__all__ = [
    "ensure_applicable",
    "ensure_revertible",
    "ensure_count",
]

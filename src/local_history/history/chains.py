"""Predicates deciding whether a chained apply/revert keeps going."""

from __future__ import annotations

from typing import Callable

from .records import EditRecord

ChainPredicate = Callable[[EditRecord, EditRecord], bool]

_BLANK_CHARACTERS = (" ", "\t", "\n")


def is_blank(text: str) -> bool:
    """Return True if ``text`` is non-empty and only made of whitespace."""

    return len(text) > 0 and not text.strip()


def has_blank(text: str) -> bool:
    """Return True if ``text`` holds a space, tab or newline."""

    return any(char in text for char in _BLANK_CHARACTERS)


def split_on_blank_space(a: EditRecord, b: EditRecord) -> bool:
    """Chain word runs with word runs and blank runs with blank runs."""

    if is_blank(a.after_text) and is_blank(b.after_text):
        return True
    return not has_blank(a.after_text) and not has_blank(b.after_text)


def keep_continuity(a: EditRecord, b: EditRecord) -> bool:
    """Chain records whose carets sit next to each other."""

    left, right = a.caret, b.caret
    return (
        left.start == right.end + 1
        or right.start == left.end + 1
        or left.end == right.start + 1
        or right.end == left.start + 1
    )


__all__ = [
    "ChainPredicate",
    "is_blank",
    "has_blank",
    "split_on_blank_space",
    "keep_continuity",
]

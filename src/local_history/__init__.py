"""In-memory undo/redo history for a single-user text editing session."""

from .history import (
    Caret,
    EditRecord,
    EditTimeline,
    HistoryValidationError,
    InvalidCaretRange,
    RecordOutOfBounds,
    TimelineView,
    has_blank,
    is_blank,
    keep_continuity,
    split_on_blank_space,
)

__all__ = [
    "Caret",
    "EditRecord",
    "EditTimeline",
    "TimelineView",
    "HistoryValidationError",
    "InvalidCaretRange",
    "RecordOutOfBounds",
    "is_blank",
    "has_blank",
    "split_on_blank_space",
    "keep_continuity",
]

__version__ = "0.1.0"

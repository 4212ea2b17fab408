"""Edit records, the undo/redo timeline, and chain predicates."""

from .chains import (
    ChainPredicate,
    has_blank,
    is_blank,
    keep_continuity,
    split_on_blank_space,
)
from .errors import HistoryValidationError, InvalidCaretRange, RecordOutOfBounds
from .records import Caret, EditRecord, TimelineView
from .timeline import EditTimeline, RecordLike

__all__ = [
    "Caret",
    "EditRecord",
    "TimelineView",
    "EditTimeline",
    "RecordLike",
    "ChainPredicate",
    "is_blank",
    "has_blank",
    "split_on_blank_space",
    "keep_continuity",
    "HistoryValidationError",
    "InvalidCaretRange",
    "RecordOutOfBounds",
]

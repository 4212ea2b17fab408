from __future__ import annotations

from local_history import Caret, EditRecord, EditTimeline

SAMPLE_EDITS: tuple[tuple[str, int, int], ...] = (
    ("h", 0, 0),
    ("e", 1, 1),
    ("w", 2, 2),
    ("l", 2, 3),
    ("l", 3, 3),
    ("o", 4, 4),
    (" ", 5, 5),
    (" ", 6, 6),
    ("\t", 7, 7),
    ("m", 8, 8),
    ("a", 9, 9),
    ("m", 10, 10),
    ("a", 11, 11),
    ("w", 5, 5),
    ("o", 6, 6),
    ("r", 7, 7),
    ("l", 8, 8),
    ("d", 9, 9),
)


def make_record(text: str, start: int, end: int | None = None) -> EditRecord:
    return EditRecord(after_text=text, caret=Caret(start, start if end is None else end))


def typed_timeline() -> EditTimeline:
    """Timeline spelling ``helloworld  \\tmama`` one keystroke at a time."""

    timeline = EditTimeline()
    for text, start, end in SAMPLE_EDITS:
        timeline.push(make_record(text, start, end))
    return timeline

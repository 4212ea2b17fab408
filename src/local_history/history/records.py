"""Caret ranges and edit records tracked by the timeline."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Mapping


@dataclass(frozen=True, slots=True)
class Caret:
    """Range ``[start, end)`` over the buffer as it is before the edit lands."""

    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Caret":
        return cls(start=int(data["start"]), end=int(data["end"]))

    def to_dict(self) -> dict[str, int]:
        return {"start": self.start, "end": self.end}


@dataclass(slots=True)
class EditRecord:
    """One reversible substitution.

    ``after_text`` is what the caller wants at ``caret``; ``before_text`` is
    filled in from the buffer whenever the record is applied. Reverting
    re-reads ``after_text`` from the buffer, so both fields drift with the
    record's history rather than staying as first supplied.
    """

    after_text: str
    caret: Caret
    before_text: str = ""
    active: bool = False

    def copy(self) -> "EditRecord":
        return replace(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EditRecord":
        caret = data["caret"]
        if not isinstance(caret, Caret):
            if not isinstance(caret, Mapping):
                raise ValueError(f"caret must be a mapping, got {type(caret).__name__}")
            caret = Caret.from_dict(caret)
        return cls(
            after_text=_text_field(data, "to"),
            caret=caret,
            before_text=_text_field(data, "from"),
            active=data.get("active") is True,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "from": self.before_text,
            "to": self.after_text,
            "caret": self.caret.to_dict(),
            "active": self.active,
        }


@dataclass(frozen=True, slots=True)
class TimelineView:
    """Host-friendly summary of a timeline's state."""

    value: str
    last_active_index: int
    record_count: int


def _text_field(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(
            f"record field '{key}' must be a string, got {type(value).__name__}"
        )
    return value


def coerce_record(record: EditRecord | Mapping[str, Any]) -> EditRecord:
    if isinstance(record, EditRecord):
        return record
    return EditRecord.from_dict(record)


__all__ = [
    "Caret",
    "EditRecord",
    "TimelineView",
    "coerce_record",
]

"""Linear undo/redo timeline over a single plain-text buffer."""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional

from local_history.runtime.settings import HistorySettings
from local_history.runtime.telemetry import operation, record_event

from . import chains
from .chains import ChainPredicate
from .records import EditRecord, TimelineView, coerce_record
from .validation import ensure_applicable, ensure_count, ensure_revertible

RecordLike = EditRecord | Mapping[str, Any]


class EditTimeline:
    """Record every edit of a local single-user session so it can be undone.

    Records are kept in the order they were pushed. The active ones form a
    prefix of that list and, replayed over the initial content, give the
    current value. Everything after the prefix is redo history until the next
    ``push`` discards it.

    Counts are clamped and chains on an empty history do nothing. With
    ``strict=True`` (or ``LOCAL_HISTORY_STRICT=1``) carets and counts are
    validated and bad input raises instead of producing a garbled buffer.
    """

    is_blank = staticmethod(chains.is_blank)
    has_blank = staticmethod(chains.has_blank)
    split_on_blank_space = staticmethod(chains.split_on_blank_space)
    keep_continuity = staticmethod(chains.keep_continuity)

    def __init__(
        self,
        content: Optional[str] = None,
        records: Optional[Iterable[RecordLike]] = None,
        *,
        strict: Optional[bool] = None,
        logger_name: Optional[str] = None,
    ) -> None:
        settings = HistorySettings.from_env()
        self._strict = settings.strict if strict is None else strict
        self._logger_name = logger_name or settings.logger_name
        self._initial_value = ""
        self._value = ""
        self._records: List[EditRecord] = []

        if content:
            self._initial_value = content
            self._value = content

        prior = [coerce_record(record) for record in records or ()]
        if prior:
            self._rehydrate(prior)

    @property
    def initial_value(self) -> str:
        return self._initial_value

    @property
    def strict(self) -> bool:
        return self._strict

    def get_value(self) -> str:
        return self._value

    def get_records(self) -> List[EditRecord]:
        return self._records

    def last_active_index(self) -> int:
        """Highest index holding an active record, or ``-1``."""

        last = -1
        for index, record in enumerate(self._records):
            if record.active:
                last = index
        return last

    def can_apply(self) -> bool:
        return self.last_active_index() < len(self._records) - 1

    def can_revert(self) -> bool:
        return self.last_active_index() >= 0

    def push(self, record: RecordLike) -> EditRecord:
        """Apply a new edit, dropping any redo history first."""

        entry = coerce_record(record)
        with operation(
            "push",
            logger_name=self._logger_name,
            start=entry.caret.start,
            end=entry.caret.end,
        ) as handle:
            dropped = len(self._records)
            entry = self._push(entry)
            dropped -= len(self._records) - 1
            if dropped:
                handle.note("dropped", dropped)
            return entry

    def apply(self, count: float) -> int:
        """Redo up to ``count`` records; returns how many were applied."""

        with operation("apply", logger_name=self._logger_name, count=count) as handle:
            if self._strict:
                ensure_count(count)
            first = self.last_active_index() + 1
            index = first
            while index < first + count and index < len(self._records):
                self._records[index] = self._apply_record(self._records[index])
                index += 1
            handle.note("applied", index - first)
            return index - first

    def revert(self, count: float) -> int:
        """Undo up to ``count`` records; returns how many were reverted."""

        with operation("revert", logger_name=self._logger_name, count=count) as handle:
            if self._strict:
                ensure_count(count)
            last = self.last_active_index()
            index = last
            while index > last - count and index >= 0:
                self._records[index] = self._revert_record(self._records[index])
                index -= 1
            handle.note("reverted", last - index)
            return last - index

    def apply_chain(self, predicate: ChainPredicate) -> int:
        """Redo the next record, then keep going while ``predicate`` holds.

        ``predicate`` receives the candidate record and the record applied
        just before it.
        """

        with operation(
            "apply_chain",
            logger_name=self._logger_name,
            predicate=getattr(predicate, "__name__", repr(predicate)),
        ) as handle:
            index = self.last_active_index() + 1
            if index >= len(self._records):
                handle.note("applied", 0)
                return 0

            first = index
            self._records[index] = self._apply_record(self._records[index])
            while index < len(self._records) - 1 and predicate(
                self._records[index + 1], self._records[index]
            ):
                index += 1
                self._records[index] = self._apply_record(self._records[index])

            handle.note("applied", index - first + 1)
            return index - first + 1

    def revert_chain(self, predicate: ChainPredicate) -> int:
        """Undo the last record, then keep going while ``predicate`` holds.

        ``predicate`` receives the candidate record and the record reverted
        just before it.
        """

        with operation(
            "revert_chain",
            logger_name=self._logger_name,
            predicate=getattr(predicate, "__name__", repr(predicate)),
        ) as handle:
            index = self.last_active_index()
            if index < 0:
                handle.note("reverted", 0)
                return 0

            last = index
            self._records[index] = self._revert_record(self._records[index])
            while index > 0 and predicate(
                self._records[index - 1], self._records[index]
            ):
                index -= 1
                self._records[index] = self._revert_record(self._records[index])

            handle.note("reverted", last - index + 1)
            return last - index + 1

    def check_integrity(self) -> str:
        """Replay the active records from scratch and compare with the value.

        Returns ``""`` when they agree, otherwise the replayed value, which is
        what the buffer should hold.
        """

        with operation("check_integrity", logger_name=self._logger_name) as handle:
            mirror = self._mirror()
            for record in self._records:
                if record.active:
                    mirror._push(record.copy())

            expected = mirror.get_value()
            if expected == self._value:
                return ""

            handle.note("mismatch", True)
            record_event(
                "history.integrity_mismatch",
                level="warning",
                data={
                    "expected_length": len(expected),
                    "actual_length": len(self._value),
                },
                logger_name=self._logger_name,
            )
            return expected

    def serialize(self) -> list[dict[str, Any]]:
        """Records as plain mappings, ready to feed back into a new timeline."""

        return [record.to_dict() for record in self._records]

    def snapshot(self) -> TimelineView:
        return TimelineView(
            value=self._value,
            last_active_index=self.last_active_index(),
            record_count=len(self._records),
        )

    def _mirror(self) -> "EditTimeline":
        mirror = EditTimeline.__new__(EditTimeline)
        mirror._strict = False
        mirror._logger_name = self._logger_name
        mirror._initial_value = self._initial_value
        mirror._value = self._initial_value
        mirror._records = []
        return mirror

    def _rehydrate(self, prior: List[EditRecord]) -> None:
        with operation(
            "rehydrate", logger_name=self._logger_name, records=len(prior)
        ) as handle:
            self._records.extend(prior)
            frontier = self.last_active_index()
            for index in range(frontier + 1):
                self._records[index] = self._apply_record(self._records[index])
            handle.note("replayed", frontier + 1)

    def _push(self, record: EditRecord) -> EditRecord:
        kept = [entry for entry in self._records if entry.active]
        record = self._apply_record(record)
        kept.append(record)
        self._records = kept
        return record

    def _apply_record(self, record: EditRecord) -> EditRecord:
        if self._strict:
            ensure_applicable(self._value, record)
        start, end = record.caret.start, record.caret.end
        record.before_text = self._value[start:end]
        record.active = True
        self._value = self._value[:start] + record.after_text + self._value[end:]
        return record

    def _revert_record(self, record: EditRecord) -> EditRecord:
        # after_text is re-read from the buffer rather than trusted.
        if self._strict:
            ensure_revertible(self._value, record)
        start = record.caret.start
        end = start + len(record.after_text)
        record.after_text = self._value[start:end]
        record.active = False
        self._value = self._value[:start] + record.before_text + self._value[end:]
        return record


__all__ = ["EditTimeline", "RecordLike"]

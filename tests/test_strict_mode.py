import pytest

from local_history import (
    EditTimeline,
    HistoryValidationError,
    InvalidCaretRange,
    RecordOutOfBounds,
)
from local_history.runtime.settings import HistorySettings, env_flag, env_int

from tests.helpers import make_record


def test_strict_rejects_caret_past_buffer() -> None:
    timeline = EditTimeline(strict=True)

    with pytest.raises(InvalidCaretRange) as excinfo:
        timeline.push(make_record("x", 2))

    assert excinfo.value.caret.start == 2
    assert timeline.get_records() == []
    assert timeline.get_value() == ""


def test_strict_rejects_inverted_caret() -> None:
    timeline = EditTimeline("abc", strict=True)

    with pytest.raises(InvalidCaretRange):
        timeline.push(make_record("x", 2, 1))

    assert timeline.get_value() == "abc"


def test_strict_rejects_negative_caret() -> None:
    timeline = EditTimeline("abc", strict=True)

    with pytest.raises(HistoryValidationError):
        timeline.push(make_record("x", -1, 0))


def test_strict_revert_out_of_bounds() -> None:
    timeline = EditTimeline("abc", strict=True)
    record = timeline.push(make_record("XY", 0))
    record.after_text = "XYZWVUT"

    with pytest.raises(RecordOutOfBounds):
        timeline.revert(1)

    assert timeline.get_value() == "XYabc"
    assert record.active is True


def test_strict_rejects_negative_counts() -> None:
    timeline = EditTimeline(strict=True)

    with pytest.raises(ValueError):
        timeline.apply(-1)
    with pytest.raises(ValueError):
        timeline.revert(-1)


def test_strict_mode_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOCAL_HISTORY_STRICT", "yes")

    assert EditTimeline().strict is True
    assert EditTimeline(strict=False).strict is False


def test_permissive_by_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("LOCAL_HISTORY_STRICT", raising=False)

    timeline = EditTimeline()
    timeline.push(make_record("x", 3))

    assert timeline.strict is False
    assert timeline.get_value() == "x"


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOCAL_HISTORY_STRICT", "0")
    monkeypatch.setenv("LOCAL_HISTORY_LOGGER", "editor.history")

    assert HistorySettings.from_env() == HistorySettings(
        strict=False, logger_name="editor.history"
    )


def test_env_helpers(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOCAL_HISTORY_LOG_JSON", "On")
    monkeypatch.setenv("LOCAL_HISTORY_LOG_BUFFER_SIZE", "lots")
    monkeypatch.delenv("LOCAL_HISTORY_NO_COLOR", raising=False)

    assert env_flag("LOG_JSON", False) is True
    assert env_flag("NO_COLOR", True) is True
    with pytest.raises(ValueError):
        env_int("LOG_BUFFER_SIZE", 2048)


def test_rejected_push_keeps_redo_history() -> None:
    timeline = EditTimeline(strict=True)
    timeline.push(make_record("a", 0))
    timeline.push(make_record("b", 1))
    timeline.revert(1)

    with pytest.raises(InvalidCaretRange):
        timeline.push(make_record("x", 9))

    assert [record.after_text for record in timeline.get_records()] == ["a", "b"]
    assert timeline.get_value() == "a"
    assert timeline.apply(1) == 1
    assert timeline.get_value() == "ab"

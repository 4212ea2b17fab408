"""telelog plumbing for timeline operations.

Every public timeline mutation runs inside ``operation(...)``, which profiles
it as ``history::<name>`` under the ``history`` component. Anything worth a
standalone log line goes through ``record_event``.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

from .settings import env, env_flag, env_int

tl = cast(Any, telelog)

COMPONENT = "history"
DEFAULT_LOGGER_NAME = env("LOGGER") or "local_history"

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def _pairs(payload: Dict[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), str(value)) for key, value in payload.items()]


def _emit(log: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    method = getattr(log, f"{level}_with", None)
    if method is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    method(message, _pairs(payload))


def _preset(name: str) -> Any:
    config = tl.Config()
    key = name.lower()
    if key == "development":
        config.with_min_level("DEBUG")
        config.with_console_output(True)
        config.with_colored_output(True)
    elif key == "production":
        config.with_min_level("INFO")
        config.with_console_output(False)
        config.with_file_output(env("LOG_FILE") or "local_history.log")
        config.with_buffering(True)
    elif key == "quiet":
        config.with_min_level("ERROR")
        config.with_console_output(False)
    else:
        raise ValueError(f"Unknown preset '{name}'.")
    return config


def _from_env() -> Any:
    config = tl.Config()
    config.with_min_level((env("LOG_LEVEL") or "INFO").upper())
    console = not env_flag("DISABLE_CONSOLE", False)
    config.with_console_output(console)
    if console:
        config.with_colored_output(not env_flag("NO_COLOR", False))
    if env_flag("LOG_JSON", False):
        config.with_json_format(True)
    log_file = env("LOG_FILE")
    if log_file:
        config.with_file_output(log_file)
    if env_flag("LOG_BUFFERED", False):
        config.with_buffering(True)
        config.with_buffer_size(env_int("LOG_BUFFER_SIZE", 2048))
    return config


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Swap the telelog configuration used by every history logger.

    ``preset`` is one of ``"development"``, ``"production"`` or ``"quiet"``;
    with neither argument the ``LOCAL_HISTORY_*`` environment decides.
    Operation profiling is always switched on.
    """

    global _ACTIVE_CONFIG
    if config and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")

    if preset:
        config = _preset(preset)
    elif config is None:
        config = _from_env()

    config.with_profiling(True)
    _ACTIVE_CONFIG = config
    _LOGGER_CACHE.clear()


def get_logger(name: Optional[str] = None) -> Any:
    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGER_CACHE:
        if _ACTIVE_CONFIG is None:
            configure()
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(logger_name, _ACTIVE_CONFIG)
    return _LOGGER_CACHE[logger_name]


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    _emit(
        get_logger(logger_name),
        level,
        f"event::{name}",
        {"event": name, **(data or {})},
    )


@dataclass
class OperationSpan:
    """Running timeline operation; collects counts for the failure report."""

    logger: Any
    name: str
    metadata: Dict[str, str] = field(default_factory=dict)

    def note(self, key: str, value: Any) -> None:
        self.metadata[key] = str(value)

    def fail(self, reason: str) -> None:
        payload = {"operation": self.name, "component": COMPONENT, **self.metadata}
        _emit(self.logger, "error", "operation::fail", {**payload, "reason": reason})


@contextmanager
def operation(
    name: str, *, logger_name: Optional[str] = None, **metadata: Any
) -> Iterator[OperationSpan]:
    """Profile one timeline operation as ``history::<name>``.

    Keyword metadata is attached as logger context while the block runs.
    An exception escaping the block is logged through ``OperationSpan.fail``
    and re-raised.
    """

    log = get_logger(logger_name)
    current = OperationSpan(
        logger=log,
        name=f"{COMPONENT}::{name}",
        metadata={key: str(value) for key, value in metadata.items()},
    )
    for key, value in current.metadata.items():
        log.add_context(key, value)

    try:
        with log.track_component(COMPONENT), log.profile(current.name):
            try:
                yield current
            except Exception as exc:
                current.fail(str(exc))
                raise
    finally:
        for key in metadata:
            log.remove_context(key)


__all__ = [
    "COMPONENT",
    "OperationSpan",
    "configure",
    "get_logger",
    "operation",
    "record_event",
]

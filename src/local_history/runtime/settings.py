"""Environment-driven configuration shared by the history and telemetry layers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

ENV_PREFIX = "LOCAL_HISTORY_"
TRUTHY = frozenset({"1", "true", "yes", "on"})


def env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def env_flag(name: str, default: bool) -> bool:
    raw = env(name)
    if raw is None:
        return default
    return raw.strip().lower() in TRUTHY


def env_int(name: str, default: int) -> int:
    raw = env(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from exc


@dataclass(frozen=True, slots=True)
class HistorySettings:
    """Timeline options resolved from the environment."""

    strict: bool = False
    logger_name: str = "local_history"

    @classmethod
    def from_env(cls) -> "HistorySettings":
        return cls(
            strict=env_flag("STRICT", False),
            logger_name=env("LOGGER") or "local_history",
        )


__all__ = [
    "ENV_PREFIX",
    "HistorySettings",
    "env",
    "env_flag",
    "env_int",
]

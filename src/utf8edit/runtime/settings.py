"""Environment-driven settings for utf8edit telemetry."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "UTF8EDIT_"
_TRUTHY = {"1", "true", "yes", "on"}
DEFAULT_LOGGER_NAME = "utf8edit"
DEFAULT_LEVEL = "INFO"
DEFAULT_BUFFER_SIZE = 2048


def _read(env: Mapping[str, str], name: str) -> Optional[str]:
    return env.get(f"{ENV_PREFIX}{name}")


def _flag(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = _read(env, name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


@dataclass(frozen=True, slots=True)
class TelemetrySettings:
    """Resolved logging options.

    Every field maps to a ``UTF8EDIT_*`` variable; see :meth:`from_env`.
    """

    logger_name: str = DEFAULT_LOGGER_NAME
    level: str = DEFAULT_LEVEL
    log_file: str = ""
    json_format: bool = False
    console: bool = True
    colored: bool = True
    buffered: bool = False
    buffer_size: int = DEFAULT_BUFFER_SIZE

    def __post_init__(self) -> None:
        if self.buffer_size <= 0:
            raise ValueError("buffer_size must be positive")

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "TelemetrySettings":
        env = os.environ if env is None else env
        raw_size = _read(env, "LOG_BUFFER_SIZE")
        try:
            buffer_size = int(raw_size) if raw_size else DEFAULT_BUFFER_SIZE
        except ValueError as exc:
            raise ValueError(
                f"{ENV_PREFIX}LOG_BUFFER_SIZE must be an integer, got {raw_size!r}"
            ) from exc
        return cls(
            logger_name=_read(env, "LOGGER") or DEFAULT_LOGGER_NAME,
            level=(_read(env, "LOG_LEVEL") or DEFAULT_LEVEL).upper(),
            log_file=_read(env, "LOG_FILE") or "",
            json_format=_flag(env, "LOG_JSON", False),
            console=not _flag(env, "DISABLE_CONSOLE", False),
            colored=not _flag(env, "NO_COLOR", False),
            buffered=_flag(env, "LOG_BUFFERED", False),
            buffer_size=buffer_size,
        )


__all__ = ["ENV_PREFIX", "TelemetrySettings"]

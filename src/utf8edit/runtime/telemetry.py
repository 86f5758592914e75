"""Telemetry services built directly on telelog.

The codec and the editing view only need a small surface:

``configure(...)`` -- adopt settings or a named preset
``get_logger(name)`` -- fetch (and cache) a configured logger
``record_event(name, ...)`` -- emit a structured event at a chosen level
``span(name, ...)`` -- context manager marrying profiling + component tracking
"""

from __future__ import annotations

from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterator, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

from .settings import TelemetrySettings

tl = cast(Any, telelog)

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None
_ACTIVE_SETTINGS: Optional[TelemetrySettings] = None


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).hex(" ")
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _format_pairs(data: Dict[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), _stringify(value)) for key, value in data.items()]


def _preset_settings(preset: str, base: TelemetrySettings) -> TelemetrySettings:
    key = preset.lower()
    if key == "development":
        return replace(
            base, level="DEBUG", console=True, colored=True, json_format=False
        )
    if key == "production":
        return replace(
            base,
            level="INFO",
            console=False,
            log_file=base.log_file or "utf8edit.log",
            buffered=True,
        )
    if key in {"performance", "performance_analysis"}:
        return replace(
            base,
            level="DEBUG",
            console=False,
            json_format=True,
            log_file=base.log_file or "utf8edit-performance.log",
            buffered=True,
        )
    raise ValueError(f"Unknown preset '{preset}'.")


def _build_config(settings: TelemetrySettings) -> Any:
    config = tl.Config()
    config.with_min_level(settings.level)
    config.with_console_output(settings.console)
    if settings.console:
        config.with_colored_output(settings.colored)
    if settings.json_format:
        config.with_json_format(True)
    if settings.log_file:
        config.with_file_output(settings.log_file)
    if settings.buffered:
        config.with_buffering(True)
        config.with_buffer_size(settings.buffer_size)
    # Spans rely on logger.profile, keep profiling on regardless of settings.
    config.with_profiling(True)
    return config


def configure(
    *,
    settings: Optional[TelemetrySettings] = None,
    preset: Optional[str] = None,
) -> TelemetrySettings:
    """Rebuild the telelog configuration and drop cached loggers.

    Parameters
    ----------
    settings:
        Explicit settings; defaults to :meth:`TelemetrySettings.from_env`.
    preset:
        ``"development"``, ``"production"`` or ``"performance"``, applied on
        top of ``settings``.
    """

    global _ACTIVE_CONFIG, _ACTIVE_SETTINGS
    resolved = settings or TelemetrySettings.from_env()
    if preset:
        resolved = _preset_settings(preset, resolved)

    _ACTIVE_CONFIG = _build_config(resolved)
    _ACTIVE_SETTINGS = resolved
    _LOGGER_CACHE.clear()
    return resolved


def active_settings() -> TelemetrySettings:
    if _ACTIVE_SETTINGS is None:
        return configure()
    return _ACTIVE_SETTINGS


def get_logger(name: Optional[str] = None) -> Any:
    """Return a cached ``telelog.Logger`` for ``name`` (default: the package logger)."""

    settings = active_settings()
    logger_name = name or settings.logger_name
    if logger_name not in _LOGGER_CACHE:
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(logger_name, _ACTIVE_CONFIG)
    return _LOGGER_CACHE[logger_name]


def _level_method(logger: Any, level: Any) -> Tuple[Any, bool]:
    name = str(level).lower()
    with_data = getattr(logger, f"{name}_with", None)
    if with_data is not None:
        return with_data, True
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    return plain, False


def _emit(logger: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    method, accepts_data = _level_method(logger, level)
    if accepts_data:
        method(message, _format_pairs(payload))
    else:
        method(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit ``event::<name>`` with ``data`` attached as key/value pairs."""

    payload = {"event": name, **(data or {})}
    _emit(get_logger(logger_name), level, f"event::{name}", payload)


@dataclass
class SpanHandle:
    """Yielded by ``span``; carries the span identity used by failure reports."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def _payload(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        if extra:
            payload.update(extra)
        return payload

    def fail(self, reason: str) -> None:
        _emit(self.logger, "error", "span::fail", self._payload({"reason": reason}))


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block and optionally track it as a component.

    ``component=True`` reuses ``name`` as the component identifier. Metadata is
    pushed as transient logger context for the duration of the block.
    """

    log = get_logger(logger_name)
    component_name = name if component is True else (component or None)

    context_keys = []
    serialized: Dict[str, Any] = {}
    for key, value in (metadata or {}).items():
        serialized[key] = _stringify(value)
        log.add_context(key, serialized[key])
        context_keys.append(key)

    with ExitStack() as stack:
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))
        handle = SpanHandle(
            logger=log,
            span_name=name,
            component_name=component_name,
            metadata=serialized,
        )
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise
        finally:
            for key in context_keys:
                log.remove_context(key)


__all__ = [
    "SpanHandle",
    "active_settings",
    "configure",
    "get_logger",
    "record_event",
    "span",
]

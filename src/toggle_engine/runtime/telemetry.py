"""Telemetry for the toggle engine, built directly on telelog.

Public surface:

``configure(...)`` -- pick a preset or an explicit telelog configuration
``get_logger(name)`` -- fetch (and cache) a configured logger
``record_event(name, ...)`` -- emit a structured event at a chosen level
``span(name, ...)`` -- profile a block under an optional component
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "TOGGLE_ENGINE_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "toggle_engine")
DEFAULT_LOG_FILE = os.getenv(f"{ENV_PREFIX}LOG_FILE", "")

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def _env_flag(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _format_pairs(data: Dict[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), _stringify(value)) for key, value in data.items()]


# Preset name -> (min level, console, json, buffered, default log file).
_PRESETS: Dict[str, Tuple[str, bool, bool, bool, Optional[str]]] = {
    "development": ("DEBUG", True, False, False, None),
    "production": ("INFO", False, False, True, "toggle_engine.log"),
    "performance": ("DEBUG", False, True, True, "toggle_engine-performance.log"),
}


def _preset_config(name: str) -> Any:
    try:
        level, console, json_format, buffered, log_file = _PRESETS[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown preset '{name}'.") from None
    config = tl.Config()
    config.with_min_level(level)
    config.with_console_output(console)
    if console:
        config.with_colored_output(True)
    config.with_json_format(json_format)
    if buffered:
        config.with_buffering(True)
    if log_file:
        config.with_file_output(_env("LOG_FILE", DEFAULT_LOG_FILE) or log_file)
    return config


def _with_profiling(config: Any) -> Any:
    # Spans use ``log.profile``, which only records with profiling on.
    config.with_profiling(True)
    return config


def _build_default_config() -> Any:
    config = tl.Config()
    config.with_min_level((_env("LOG_LEVEL") or "WARNING").upper())

    console = not _env_flag("DISABLE_CONSOLE", False)
    config.with_console_output(console)
    if console:
        config.with_colored_output(not _env_flag("NO_COLOR", False))

    if _env_flag("LOG_JSON", False):
        config.with_json_format(True)

    log_file = _env("LOG_FILE") or DEFAULT_LOG_FILE
    if log_file:
        config.with_file_output(log_file)

    if _env_flag("LOG_BUFFERED", False):
        config.with_buffering(True)
        config.with_buffer_size(int(_env("LOG_BUFFER_SIZE") or "2048"))

    return config


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Replace the active telelog configuration.

    Parameters
    ----------
    config:
        Explicit ``tl.Config`` instance to adopt.
    preset:
        One of ``"development"``, ``"production"`` or ``"performance"``.
        Mutually exclusive with ``config``.
    """

    global _ACTIVE_CONFIG
    if config and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")

    if preset:
        config = _preset_config(preset)
    elif config is None:
        config = _build_default_config()

    _ACTIVE_CONFIG = _with_profiling(config)
    _LOGGER_CACHE.clear()


def _ensure_config() -> Any:
    global _ACTIVE_CONFIG
    if _ACTIVE_CONFIG is None:
        _ACTIVE_CONFIG = _with_profiling(_build_default_config())
    return _ACTIVE_CONFIG


def get_logger(name: Optional[str] = None) -> Any:
    """Return a cached ``telelog.Logger`` for the engine."""

    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGER_CACHE:
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(
            logger_name, _ensure_config()
        )
    return _LOGGER_CACHE[logger_name]


def _level_method(logger: Any, level: Any) -> Tuple[Any, bool]:
    name = str(level).lower()
    structured = getattr(logger, f"{name}_with", None)
    if structured is not None:
        return structured, True
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    return plain, False


def _emit(logger: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    method, structured = _level_method(logger, level)
    if structured:
        method(message, _format_pairs(payload))
    else:
        method(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str | Any = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit a structured ``event::<name>`` line."""

    _emit(
        get_logger(logger_name),
        str(level),
        f"event::{name}",
        {"event": name, **(data or {})},
    )


@dataclass
class SpanHandle:
    """Handle yielded by ``span`` for attaching metadata mid-flight."""

    logger: Any
    span_name: str
    component: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def _payload(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component:
            payload["component"] = self.component
        if extra:
            payload.update({key: _stringify(val) for key, val in extra.items()})
        return payload

    def fail(self, reason: str) -> None:
        _emit(self.logger, "error", "span::fail", self._payload({"reason": reason}))


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block of toggle work, tracked under ``component`` if given.

    ``metadata`` is pushed as logger context for the duration of the block.
    """

    log = get_logger(logger_name)

    serialized = {key: _stringify(value) for key, value in (metadata or {}).items()}
    for key, value in serialized.items():
        log.add_context(key, value)

    with ExitStack() as stack:
        if component:
            stack.enter_context(log.track_component(component))
        stack.enter_context(log.profile(name))
        handle = SpanHandle(
            logger=log,
            span_name=name,
            component=component,
            metadata=dict(serialized),
        )
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise
        finally:
            for key in serialized:
                log.remove_context(key)


configure()

__all__ = [
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "span",
]

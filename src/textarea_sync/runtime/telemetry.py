"""Logging for textarea_sync, built on telelog.

Every logger shares one telelog configuration assembled from
``TEXTAREA_SYNC_*`` environment variables on first use:

``LOG_LEVEL``        minimum level, ``WARNING`` unless set
``LOG_FILE``         additionally write to this file
``DISABLE_CONSOLE``  no console output
``NO_COLOR``         plain console output

Call :func:`reset` after changing the environment to rebuild it.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from typing import Any, Dict, Iterator, List, MutableMapping, Optional, Tuple

import telelog  # type: ignore[import]

ENV_PREFIX = "TEXTAREA_SYNC_"
PACKAGE_LOGGER = "textarea_sync"

_loggers: MutableMapping[str, Any] = {}
_config: Optional[Any] = None


def env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def env_flag(name: str, default: bool) -> bool:
    raw = env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _build_config() -> Any:
    config = telelog.Config()
    config.with_min_level((env("LOG_LEVEL") or "WARNING").upper())

    console = not env_flag("DISABLE_CONSOLE", False)
    config.with_console_output(console)
    if console:
        config.with_colored_output(not env_flag("NO_COLOR", False))

    log_file = env("LOG_FILE")
    if log_file:
        config.with_file_output(log_file)

    # spans are timed through telelog's profiler
    config.with_profiling(True)
    return config


def reset() -> None:
    """Forget the configuration and every cached logger."""

    global _config
    _config = None
    _loggers.clear()


def get_logger(name: Optional[str] = None) -> Any:
    """Return a cached ``telelog.Logger``; ``None`` means the package logger."""

    global _config
    if _config is None:
        _config = _build_config()
    logger_name = name or PACKAGE_LOGGER
    if logger_name not in _loggers:
        _loggers[logger_name] = telelog.Logger.with_config(logger_name, _config)
    return _loggers[logger_name]


def _pairs(data: Dict[str, Any]) -> List[Tuple[str, str]]:
    return [
        (str(key), value if isinstance(value, str) else repr(value))
        for key, value in data.items()
    ]


def _emit(logger: Any, level: str, message: str, data: Dict[str, Any]) -> None:
    name = level.lower()
    with_data = getattr(logger, f"{name}_with", None)
    if with_data is not None:
        with_data(message, _pairs(data))
        return
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {data}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit ``event::<name>`` with ``data`` as structured pairs."""

    _emit(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


@contextmanager
def span(
    name: str,
    *,
    component: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> Iterator[None]:
    """Profile a block as ``name``, tracked under ``component`` when given.

    ``metadata`` is attached as logger context while the block runs. A block
    that raises logs ``span::fail`` at error level, then the error propagates.
    """

    log = get_logger(logger_name)
    context = dict(_pairs(metadata or {}))
    for key, value in context.items():
        log.add_context(key, value)

    try:
        with ExitStack() as stack:
            if component:
                stack.enter_context(log.track_component(component))
            stack.enter_context(log.profile(name))
            yield
    except Exception as exc:
        _emit(log, "error", "span::fail", {"span": name, "reason": str(exc)})
        raise
    finally:
        for key in context:
            log.remove_context(key)


__all__ = ["env", "env_flag", "get_logger", "record_event", "reset", "span"]

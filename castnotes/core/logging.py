from __future__ import annotations

import logging
import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, TextIO

# LogRecord attributes that are never rendered as key=value context.
_RESERVED_RECORD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__.keys()
) | {"message", "asctime", "taskName", "level_color", "name_color", "reset", "color_message"}

# Survives awaits and is copied into tasks spawned from the request.
_LOG_CONTEXT: ContextVar[dict[str, Any] | None] = ContextVar("log_context", default=None)

DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

APP_LOGGER_PREFIX = "castnotes"

_THIRD_PARTY_LEVELS: dict[str, int] = {
    "uvicorn": logging.WARNING,
    "uvicorn.error": logging.INFO,
    "uvicorn.access": logging.WARNING,
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "openai": logging.WARNING,
    "multipart": logging.WARNING,
}


class ContextInjectionFilter(logging.Filter):
    """Copies the active log_context() fields onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in (_LOG_CONTEXT.get() or {}).items():
            if key not in _RESERVED_RECORD_ATTRS:
                setattr(record, key, value)
        return True


class ContextFormatter(logging.Formatter):
    """Appends every non-standard record attribute as key=value."""

    def format(self, record: logging.LogRecord) -> str:
        base_message = super().format(record)
        extra_fields = {key: value for key, value in record.__dict__.items() if key not in _RESERVED_RECORD_ATTRS}
        if not extra_fields:
            return base_message

        context_str = " ".join(f"{key}={value}" for key, value in extra_fields.items())
        return f"{base_message} [{context_str}]"


class ColorFormatter(ContextFormatter):
    _RESET = "\x1b[0m"
    _LEVEL_COLORS = {
        "DEBUG": "\x1b[36m",
        "INFO": "\x1b[32m",
        "WARNING": "\x1b[33m",
        "ERROR": "\x1b[31m",
        "CRITICAL": "\x1b[1;31m",
    }
    _NAME_COLOR = "\x1b[34m"

    def format(self, record: logging.LogRecord) -> str:
        record.level_color = self._LEVEL_COLORS.get(record.levelname, "")  # type: ignore[attr-defined]
        record.name_color = self._NAME_COLOR  # type: ignore[attr-defined]
        record.reset = self._RESET  # type: ignore[attr-defined]
        return super().format(record)


@contextmanager
def log_context(**kwargs: Any) -> Iterator[None]:
    """Temporarily attach context fields to all log lines in this scope."""

    current = _LOG_CONTEXT.get() or {}
    token = _LOG_CONTEXT.set({**current, **kwargs})
    try:
        yield
    finally:
        _LOG_CONTEXT.reset(token)


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _resolve_log_level(level_name: str | None) -> int:
    raw_level = (level_name or os.getenv("LOG_LEVEL", "INFO")).upper().strip()
    return getattr(logging, raw_level, logging.INFO)


def setup_logging(*, log_level: str | None = None, stream: TextIO | None = None) -> None:
    """
    Configure process-wide logging.

    Environment variables:
    - LOG_LEVEL: DEBUG, INFO, WARNING, ERROR, CRITICAL (default: INFO)
    - LOG_COLOR: enable ANSI colors (default: auto when the stream is a TTY)
    """
    root_level = _resolve_log_level(log_level)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    formatter: logging.Formatter
    if _env_flag("LOG_COLOR", (stream or sys.stdout).isatty()):
        formatter = ColorFormatter(
            "%(level_color)s%(asctime)s | %(levelname)s%(reset)s | "
            "%(name_color)s%(name)s%(reset)s | %(level_color)s%(message)s%(reset)s",
            datefmt=DEFAULT_DATE_FORMAT,
        )
    else:
        formatter = ContextFormatter(
            "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            datefmt=DEFAULT_DATE_FORMAT,
        )
    handler.setFormatter(formatter)
    handler.addFilter(ContextInjectionFilter())
    root_logger.addHandler(handler)
    root_logger.setLevel(root_level)
    logging.captureWarnings(True)

    logging.getLogger(APP_LOGGER_PREFIX).setLevel(root_level)
    # Third-party chatter stays at WARNING even when the app runs at DEBUG.
    for name, level in _THIRD_PARTY_LEVELS.items():
        logging.getLogger(name).setLevel(level)

    logging.getLogger(__name__).info(
        "Logging configured",
        extra={"log_level": logging.getLevelName(root_level)},
    )

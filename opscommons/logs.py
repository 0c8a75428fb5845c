"""Helpers for setting up CLI-wide loggers that log output at various levels."""

from __future__ import annotations

import json
import logging
import sys
import threading
from datetime import datetime
from typing import Any

_level_lock = threading.Lock()
_formatter_lock = threading.Lock()

_global_log_level: int = logging.INFO
_global_log_formatter: str = "text"

_LEVEL_NAMES = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "fatal": logging.CRITICAL,
    "critical": logging.CRITICAL,
    "panic": logging.CRITICAL,
}

_UNQUOTED_PUNCTUATION = set("-._/@^+")


def _timestamp(record: logging.LogRecord) -> str:
    return datetime.fromtimestamp(record.created).astimezone().isoformat(timespec="seconds")


def _level_name(record: logging.LogRecord) -> str:
    return record.levelname.lower()


def _needs_quoting(text: str) -> bool:
    return any(not (ch.isascii() and ch.isalnum()) and ch not in _UNQUOTED_PUNCTUATION for ch in text)


def _format_value(value: Any) -> str:
    text = str(value)
    return json.dumps(text) if _needs_quoting(text) else text


class _TextFormatter(logging.Formatter):
    """Formats records as key=value pairs with a full timestamp."""

    def format(self, record: logging.LogRecord) -> str:
        fields = getattr(record, "fields", {})
        parts = [
            f"time={_format_value(_timestamp(record))}",
            f"level={_level_name(record)}",
            f"msg={_format_value(record.getMessage())}",
        ]
        parts.extend(f"{key}={_format_value(fields[key])}" for key in sorted(fields))
        return " ".join(parts)


class _JsonFormatter(logging.Formatter):
    """Formats records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = dict(getattr(record, "fields", {}))
        payload["level"] = _level_name(record)
        payload["msg"] = record.getMessage()
        payload["time"] = _timestamp(record)
        return json.dumps(payload, sort_keys=True, default=str)


class _LogEntry(logging.LoggerAdapter):
    """A logger bound to a set of structured fields."""

    def __init__(self, logger: logging.Logger, fields: dict[str, Any] | None = None) -> None:
        super().__init__(logger, {})
        self.fields: dict[str, Any] = dict(fields or {})

    def with_field(self, key: str, value: Any) -> "_LogEntry":
        """Return a new entry carrying one more field."""
        return _LogEntry(self.logger, {**self.fields, key: value})

    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        extra = dict(kwargs.get("extra") or {})
        extra["fields"] = {**self.fields, **extra.get("fields", {})}
        kwargs["extra"] = extra
        return msg, kwargs


def _new_logger(name: str) -> logging.Logger:
    with _level_lock:
        level = _global_log_level
    with _formatter_lock:
        formatter_name = _global_log_formatter

    logger = logging.Logger(name or "opscommons", level)
    logger.propagate = False
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_JsonFormatter() if formatter_name == "json" else _TextFormatter())
    logger.addHandler(handler)
    return logger


def get_logger(name: str = "", version: str = "") -> _LogEntry:
    """Create a new logger tagged with the given binary name and version."""
    return _LogEntry(_new_logger(name)).with_field("binary", name).with_field("version", version)


def get_project_logger() -> _LogEntry:
    """Return a logger tagged with this project's name."""
    return get_logger("", "").with_field("name", "opscommons")


def _resolve_level(level: int | str) -> int:
    if isinstance(level, bool):
        raise ValueError(f"not a valid log level: {level!r}")
    if isinstance(level, int):
        return level
    try:
        return _LEVEL_NAMES[level.strip().lower()]
    except (KeyError, AttributeError):
        raise ValueError(f"not a valid log level: {level!r}") from None


def set_global_log_level(level: int | str) -> None:
    """Set the level used by loggers created after this call."""
    global _global_log_level
    resolved = _resolve_level(level)
    with _level_lock:
        _global_log_level = resolved


def set_global_log_formatter(formatter: str) -> None:
    """Set the formatter ("json" or "text") used by loggers created after this call."""
    global _global_log_formatter
    with _formatter_lock:
        _global_log_formatter = formatter
"""Logging helpers for pathlocker.

Library modules only ask for loggers and bind the marker path to them.
``setup_logging`` is for host processes that want console or file output,
either as text or as one JSON object per line.
"""

import json
import logging
import sys
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path

from pathlocker.core.constants import (
    LOG_FILE_BACKUP_COUNT,
    LOG_FILE_MAX_BYTES,
    LOG_TEXT_FORMAT,
    VALID_LOG_LEVELS,
)

# Attributes every LogRecord carries; anything else came in through ``extra``
_BUILTIN_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class LockContextAdapter(logging.LoggerAdapter):
    """Adapter that stamps each record with the marker path it concerns.

    Per-call ``extra`` values are kept alongside the bound fields.
    """

    def process(self, msg, kwargs):
        kwargs["extra"] = {**self.extra, **(kwargs.get("extra") or {})}
        return msg, kwargs


def bind_lock_path(logger: logging.Logger | logging.LoggerAdapter, lock_path: str) -> LockContextAdapter:
    """Return an adapter over logger whose records carry ``lock_path``."""
    bound: dict[str, object] = {}
    target = logger
    while isinstance(target, logging.LoggerAdapter):
        # Adapters replace ``extra`` wholesale, so bind against the real logger
        if isinstance(target.extra, dict):
            bound = {**target.extra, **bound}
        target = target.logger
    bound["lock_path"] = lock_path
    return LockContextAdapter(target, bound)


class JSONLineFormatter(logging.Formatter):
    """Render a record as a single JSON object, extras included."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "thread_name": record.threadName,
        }
        entry.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _BUILTIN_RECORD_ATTRS and not key.startswith("_")
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def setup_logging(
    log_level: str = "INFO", log_format: str = "text", log_file: str | Path | None = None
) -> logging.Logger:
    """Route root logging to stdout and, optionally, a rotating file.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL; anything else means INFO
        log_format: "text" (default) or "json"
        log_file: Optional log file; missing parent directories are created

    Returns:
        The ``pathlocker`` package logger
    """
    level_name = log_level.upper()
    if level_name not in VALID_LOG_LEVELS:
        print(f"Warning: Invalid log level '{log_level}', using INFO", file=sys.stderr)
        level_name = "INFO"
    level = logging.getLevelName(level_name)

    formatter = JSONLineFormatter() if log_format.lower() == "json" else logging.Formatter(LOG_TEXT_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        log_path = Path(log_file)
        try:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(
                RotatingFileHandler(log_path, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUP_COUNT)
            )
        except OSError as e:
            print(f"Warning: Cannot open log file {log_path}: {e}. Logging to console only.", file=sys.stderr)

    root = logging.getLogger()
    for old in root.handlers[:]:
        root.removeHandler(old)
        old.close()
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level)

    return logging.getLogger("pathlocker")

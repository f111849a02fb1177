"""
Structured Logging — JSON Output

Configures Python logging to emit structured JSON logs.
Each log entry includes timestamp, level, module, and
any additional scan context fields.

Usage:
    from linepatterns.logging import get_logger
    logger = get_logger("engine")
    logger.info("Scan complete", extra={"lines_scanned": 12, "satisfied_count": 3})
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone


LOG_LEVEL = os.getenv("LINEPATTERNS_LOG_LEVEL", "WARNING").upper()
LOG_FORMAT = os.getenv("LINEPATTERNS_LOG_FORMAT", "json")  # "json" or "text"

_EXTRA_FIELDS = (
    "patterns_count", "satisfied_count", "missing_count", "lines_scanned",
    "short_circuit", "pattern", "limit", "strategy", "source_type",
    "error", "error_type",
)


class JSONFormatter(logging.Formatter):
    """Formats log records as JSON lines."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key in _EXTRA_FIELDS:
            val = getattr(record, key, None)
            if val is not None:
                entry[key] = val

        if record.exc_info and record.exc_info[0]:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable format for development."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s [%(levelname)-8s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )


def setup_logging(level: str | None = None, fmt: str | None = None):
    """Configure the package logger. Call once from the embedding application."""
    root = logging.getLogger("linepatterns")
    root.setLevel(getattr(logging, (level or LOG_LEVEL).upper(), logging.WARNING))

    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    if (fmt or LOG_FORMAT) == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(TextFormatter())

    root.addHandler(handler)
    return root


def get_logger(name: str) -> logging.Logger:
    """Get a named logger under the linepatterns namespace."""
    return logging.getLogger(f"linepatterns.{name}")

"""
Structured Logging

JSON lines in production, readable text in development. Level and
format come from Settings (HEADLINECHECK_LOG_LEVEL, HEADLINECHECK_LOG_FORMAT).

Classification context passed through ``extra`` (label, confidence,
scores) is carried into both formats, so a request log line shows
what the engine decided.

Usage:
    from headlinecheck.logging import get_logger
    logger = get_logger("api")
    logger.info("Headline classified", extra={"label": "fake", "confidence": 95})
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

from headlinecheck.config import settings

# Classification fields come first; text output shows only these
CLASSIFICATION_FIELDS = ("label", "confidence", "fake_score", "trust_score", "final_score")

REQUEST_FIELDS = (
    "engine_version", "batch_size", "log_path", "error", "error_type",
    "duration_ms", "status_code", "method", "path",
)


def _extra_fields(record: logging.LogRecord, keys: tuple[str, ...]) -> dict:
    return {
        key: getattr(record, key)
        for key in keys
        if getattr(record, key, None) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per line, with whitelisted extra fields."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(_extra_fields(record, CLASSIFICATION_FIELDS + REQUEST_FIELDS))

        if record.exc_info and record.exc_info[0]:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """
    Human-readable format for development.

    Appends classification context as ``[label=fake confidence=95]``
    when a record carries it.
    """

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s [%(levelname)-8s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = _extra_fields(record, CLASSIFICATION_FIELDS)
        if not context:
            return line

        tags = " ".join(f"{k}={v}" for k, v in context.items())
        first, sep, rest = line.partition("\n")
        return f"{first} [{tags}]{sep}{rest}"


def setup_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> logging.Logger:
    """
    Configure the headlinecheck logger. Call once at app startup.

    ``level`` and ``fmt`` override Settings.LOG_LEVEL and Settings.LOG_FORMAT.
    """
    level = (level or settings.LOG_LEVEL).upper()
    fmt = fmt or settings.LOG_FORMAT

    root = logging.getLogger("headlinecheck")
    root.setLevel(getattr(logging, level, logging.INFO))
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter() if fmt == "json" else TextFormatter())
    root.addHandler(handler)

    # uvicorn's access log duplicates the request logging middleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    return root


def get_logger(name: str) -> logging.Logger:
    """Get a named logger under the headlinecheck namespace."""
    return logging.getLogger(f"headlinecheck.{name}")

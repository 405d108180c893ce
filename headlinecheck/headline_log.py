"""
Headline Log — Append-Only CSV Record of Classifications

Every headline the client chooses to record is appended as one line
to a UTF-8 CSV file with the header:

    timestamp,headline,label,confidence

Text fields are double-quoted with embedded quotes doubled, and the
confidence is written as a bare number. Rows are never rewritten or
removed. The file is created with its header on first append.

Appends are serialized through a lock so concurrent requests cannot
interleave partial lines.
"""

from __future__ import annotations

import csv
import os
import threading
from datetime import datetime, timezone
from typing import Optional

from headlinecheck.logging import get_logger

logger = get_logger("headline_log")

CSV_HEADER = ("timestamp", "headline", "label", "confidence")


def _utc_timestamp() -> str:
    """UTC ISO-8601 with millisecond precision and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _format_confidence(value: Optional[float]) -> float | int:
    """Write 88, not 88.0, when the confidence is integral."""
    number = float(value or 0)
    return int(number) if number.is_integer() else number


class HeadlineLog:
    """Append-only headline logger backed by a CSV file."""

    def __init__(self, path: str = "headline_logs.csv"):
        self.path = path
        self._lock = threading.Lock()

    def _ensure_header(self) -> None:
        if os.path.exists(self.path):
            return
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8", newline="") as f:
            f.write(",".join(CSV_HEADER) + "\n")
        logger.info("Created headline log", extra={"log_path": self.path})

    def append(
        self,
        headline: str,
        label: Optional[str] = None,
        confidence: Optional[float] = None,
    ) -> dict:
        """
        Append one classification to the log.

        Returns the row as written, with its timestamp.
        """
        row = {
            "timestamp": _utc_timestamp(),
            "headline": headline,
            "label": "" if label is None else str(label),
            "confidence": _format_confidence(confidence),
        }

        with self._lock:
            self._ensure_header()
            with open(self.path, "a", encoding="utf-8", newline="") as f:
                # QUOTE_NONNUMERIC quotes every string and doubles embedded
                # quotes, leaving the numeric confidence bare.
                writer = csv.writer(
                    f, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n",
                )
                writer.writerow([row[k] for k in CSV_HEADER])

        return row

    def _read_rows(self) -> list[dict]:
        if not os.path.exists(self.path):
            return []
        with open(self.path, "r", encoding="utf-8", newline="") as f:
            rows = []
            for r in csv.DictReader(f):
                raw = r.get("confidence") or "0"
                try:
                    confidence = _format_confidence(float(raw))
                except ValueError:
                    logger.warning(
                        "Unparseable confidence in headline log",
                        extra={"log_path": self.path, "error": raw},
                    )
                    confidence = 0
                rows.append({
                    "timestamp": r.get("timestamp", ""),
                    "headline": r.get("headline", ""),
                    "label": r.get("label", ""),
                    "confidence": confidence,
                })
            return rows

    def get_recent(self, limit: int = 20) -> list[dict]:
        """Get the most recent entries, newest first."""
        with self._lock:
            rows = self._read_rows()
        return list(reversed(rows[-limit:])) if limit > 0 else []

    def get_count(self) -> int:
        with self._lock:
            return len(self._read_rows())

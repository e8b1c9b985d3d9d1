"""JSONL formatter for watchdog.jsonl.

Each line is one WatchdogEvent, led by its UTC timestamp and level:

    {"time": "2026-10-19T12:00:00.123Z", "level": "INFO", "event": "shutdown_scheduled",
     "message": "Shutdown scheduled successfully", "tunnel_id": "quiet-lake-2k9d1.euw"}
"""

from __future__ import annotations

__all__ = ["ISO8601Formatter"]

import json
import logging
from datetime import datetime, timezone


def _utc_timestamp(created: float) -> str:
    """Millisecond-precision UTC timestamp with a Z suffix."""
    return (
        datetime.fromtimestamp(created, tz=timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


class ISO8601Formatter(logging.Formatter):
    """Writes log records as watchdog.jsonl lines.

    Records from log_event() carry a WatchdogEvent dump as their msg; the
    formatter fills in the event's empty `time` field. Anything logged as a
    plain string becomes {"message": ...} so the file stays one JSON object
    per line.
    """

    def format(self, record: logging.LogRecord) -> str:
        if isinstance(record.msg, dict):
            fields = {k: v for k, v in record.msg.items() if k != "time"}
        else:
            fields = {"message": record.getMessage()}

        entry = {"time": _utc_timestamp(record.created), "level": record.levelname, **fields}
        # details may hold non-JSON values such as Paths
        return json.dumps(entry, default=str)

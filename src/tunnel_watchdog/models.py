"""Pydantic models for watchdog log entries.

IMPORTANT: The 'time' field is Optional[str] = None because:
- Model instances are created WITHOUT timestamps (time=None)
- ISO8601Formatter adds the timestamp during log serialization
- Console output never shows it
"""

from __future__ import annotations

__all__ = [
    "WatchdogEvent",
]

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class WatchdogEvent(BaseModel):
    """One watchdog log entry (<log_dir>/watchdog.jsonl).

    Used for every severity: INFO for polling decisions, WARNING for
    unparseable command output, ERROR for command failures and CRITICAL
    for the fatal "no tunnel" condition.

    Note: 'time' is None when created, populated by ISO8601Formatter during logging.
    """

    # --- core ---
    time: Optional[str] = Field(
        None,
        description="ISO 8601 timestamp (UTC), added by formatter during serialization",
    )
    event: str = Field(description="Machine-friendly event name, e.g. 'shutdown_scheduled'")
    message: str = Field(description="Human-readable log message")

    # --- watchdog context ---
    tunnel_id: Optional[str] = Field(None, description="Monitored dev tunnel id")
    command: Optional[str] = Field(None, description="Shell command line that was run")
    connections: Optional[int] = Field(None, description="Client connection count from the last poll")
    elapsed_seconds: Optional[float] = Field(
        None,
        description="Seconds since a connection was last seen",
    )

    # --- error details ---
    error_type: Optional[str] = None  # Exception class, e.g. BashCommandError
    error_message: Optional[str] = None

    # --- additional structured details ---
    details: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(extra="allow")

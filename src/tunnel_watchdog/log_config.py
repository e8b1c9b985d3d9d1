"""Watchdog logging configuration.

Owns the application logger configuration (handlers, formatters).
Other modules log through log_event() with a WatchdogEvent so that
console and file output share one structured representation.

Python loggers are singletons by name, so all modules share the same
logger instance. This module owns the configuration; others just call
log_event().
"""

from __future__ import annotations

__all__ = [
    "configure_logging",
    "get_logger",
    "log_event",
]

import logging

from tunnel_watchdog.config import LoggingConfig, get_log_path
from tunnel_watchdog.constants import APP_NAME
from tunnel_watchdog.models import WatchdogEvent
from tunnel_watchdog.utils.iso_formatter import ISO8601Formatter

# Initially with stderr only; file handler added by configure_logging()
_logger = logging.getLogger(APP_NAME)
_logger.setLevel(logging.INFO)
_logger.propagate = False


class _ConsoleFormatter(logging.Formatter):
    """Human-readable formatter for console output."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record for console output."""
        if isinstance(record.msg, dict):
            msg = record.msg.get("message") or record.msg.get("event", "")
            return f"{record.levelname}: {msg}"
        return f"{record.levelname}: {record.getMessage()}"


# Initialize with stderr-only until config is loaded
if not _logger.handlers:
    _stderr_handler = logging.StreamHandler()
    _stderr_handler.setFormatter(_ConsoleFormatter())
    _logger.addHandler(_stderr_handler)


def get_logger() -> logging.Logger:
    """Return the application logger."""
    return _logger


def configure_logging(config: LoggingConfig) -> None:
    """Configure watchdog logging from the loaded configuration.

    Sets up:
    - stderr handler: human-readable, at the configured level
    - file handler: JSONL with ISO 8601 timestamps (if file_logging is on)

    Replaces any handlers installed by an earlier call.

    Args:
        config: Logging configuration.
    """
    level = logging.getLevelName(config.log_level)
    _logger.setLevel(level)

    # Close and clear any existing handlers to avoid resource leaks
    for handler in _logger.handlers:
        handler.close()
    _logger.handlers.clear()

    stderr_handler = logging.StreamHandler()
    stderr_handler.setLevel(level)
    stderr_handler.setFormatter(_ConsoleFormatter())
    _logger.addHandler(stderr_handler)

    if not config.file_logging:
        return

    log_path = get_log_path(config)
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    except OSError as e:
        log_event(
            logging.WARNING,
            WatchdogEvent(
                event="file_logging_failed",
                message=f"Failed to open log file {log_path}, logging to stderr only",
                error_type=type(e).__name__,
                error_message=str(e),
            ),
        )
        return

    file_handler.setLevel(level)
    file_handler.setFormatter(ISO8601Formatter())
    _logger.addHandler(file_handler)


def log_event(level: int, event: WatchdogEvent) -> None:
    """Log a WatchdogEvent at the specified level.

    Serializes the event to a dict (excluding None values) and logs it.
    The ISO8601Formatter adds the timestamp during serialization.

    Args:
        level: Logging level (e.g., logging.INFO, logging.WARNING).
        event: The event to log.
    """
    _logger.log(level, event.model_dump(exclude_none=True))

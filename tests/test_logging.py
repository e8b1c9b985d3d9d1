"""Tests for structured logging and the JSONL formatter."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from tunnel_watchdog.config import LoggingConfig
from tunnel_watchdog.log_config import configure_logging, get_logger, log_event
from tunnel_watchdog.models import WatchdogEvent
from tunnel_watchdog.utils.iso_formatter import ISO8601Formatter


def make_record(msg: object) -> logging.LogRecord:
    return logging.LogRecord("tunnel-watchdog", logging.INFO, __file__, 1, msg, None, None)


class TestISO8601Formatter:
    """ISO8601Formatter output shape."""

    def test_dict_message_fields_follow_time_and_level(self) -> None:
        line = ISO8601Formatter().format(make_record({"event": "tick", "message": "hi"}))

        entry = json.loads(line)
        assert list(entry)[:2] == ["time", "level"]
        assert entry["level"] == "INFO"
        assert entry["event"] == "tick"

    def test_timestamp_is_utc_with_milliseconds(self) -> None:
        entry = json.loads(ISO8601Formatter().format(make_record("plain")))

        assert entry["time"].endswith("Z")
        assert len(entry["time"]) == len("2025-12-04T10:48:37.123Z")

    def test_plain_message_wrapped(self) -> None:
        entry = json.loads(ISO8601Formatter().format(make_record("plain text")))

        assert entry["message"] == "plain text"

    def test_event_time_field_is_filled_by_formatter(self) -> None:
        record = make_record({"time": "stale", "event": "tick", "message": "hi"})

        entry = json.loads(ISO8601Formatter().format(record))

        assert entry["time"] != "stale"
        assert entry["time"].endswith("Z")

    def test_non_json_details_are_stringified(self, tmp_path: Path) -> None:
        event = WatchdogEvent(event="file_logging_failed", message="x", details={"path": tmp_path})

        entry = json.loads(ISO8601Formatter().format(make_record(event.model_dump(exclude_none=True))))

        assert entry["details"]["path"] == str(tmp_path)


class TestConfigureLogging:
    """configure_logging handler setup."""

    def test_file_logging_writes_jsonl(self, tmp_path: Path) -> None:
        configure_logging(LoggingConfig(log_dir=str(tmp_path)))

        log_event(
            logging.INFO,
            WatchdogEvent(event="shutdown_scheduled", message="Shutdown scheduled", tunnel_id="abc123"),
        )
        for handler in get_logger().handlers:
            handler.flush()

        lines = (tmp_path / "watchdog.jsonl").read_text().splitlines()
        entry = json.loads(lines[-1])
        assert entry["event"] == "shutdown_scheduled"
        assert entry["tunnel_id"] == "abc123"
        assert "error_type" not in entry

    def test_level_filters_file_output(self, tmp_path: Path) -> None:
        configure_logging(LoggingConfig(log_dir=str(tmp_path), log_level="WARNING"))

        log_event(logging.INFO, WatchdogEvent(event="connection_check", message="Checking"))
        log_event(logging.WARNING, WatchdogEvent(event="shutdown_unconfirmed", message="No output"))
        for handler in get_logger().handlers:
            handler.flush()

        events = [json.loads(line)["event"] for line in (tmp_path / "watchdog.jsonl").read_text().splitlines()]
        assert events == ["shutdown_unconfirmed"]

    def test_disabled_file_logging_has_single_handler(self, tmp_path: Path) -> None:
        configure_logging(LoggingConfig(log_dir=str(tmp_path), file_logging=False))

        assert len(get_logger().handlers) == 1
        assert not (tmp_path / "watchdog.jsonl").exists()

    def test_reconfiguring_replaces_handlers(self, tmp_path: Path) -> None:
        configure_logging(LoggingConfig(log_dir=str(tmp_path)))
        configure_logging(LoggingConfig(log_dir=str(tmp_path)))

        assert len(get_logger().handlers) == 2

    def test_unwritable_log_dir_falls_back_to_stderr(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("")

        configure_logging(LoggingConfig(log_dir=str(blocker / "logs")))

        assert len(get_logger().handlers) == 1

    def test_logger_does_not_propagate(self) -> None:
        assert get_logger().propagate is False

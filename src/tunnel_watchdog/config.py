"""Application configuration for tunnel-watchdog.

Defines configuration models for the watchdog timing and logging.
The config file is optional: it lives at the OS-appropriate location
(via click.get_app_dir) and every value can be overridden on the command line.

Example usage:
    # Load from config file (defaults if the file does not exist)
    config = load_config(get_config_path())

    # Save configuration
    config.save_to_file(get_config_path())
"""

from __future__ import annotations

__all__ = [
    "AppConfig",
    "LoggingConfig",
    "WatchdogConfig",
    "apply_defaults",
    "get_config_path",
    "get_log_path",
    "load_config",
]

import json
import sys
from pathlib import Path
from typing import Any, Literal

import click
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from tunnel_watchdog.constants import (
    APP_NAME,
    CONFIG_FILENAME,
    DEFAULT_CHECK_INTERVAL,
    DEFAULT_GRACE_PERIOD,
    DEFAULT_LOG_DIR,
    LOG_FILENAME,
    SECONDS_PER_UNIT,
)
from tunnel_watchdog.exceptions import ConfigurationError


class WatchdogConfig(BaseModel):
    """Polling and shutdown timing.

    Both values are scaled by SECONDS_PER_UNIT at runtime, so with the
    defaults the tunnel is polled every 5 minutes and the host is shut down
    after 30 idle minutes.

    Attributes:
        check_interval: How often the tunnel is polled.
        grace_period: How long the tunnel may stay without clients before
            a shutdown is scheduled. Also used as the shutdown delay.
    """

    check_interval: int = Field(default=DEFAULT_CHECK_INTERVAL, gt=0)
    grace_period: int = Field(default=DEFAULT_GRACE_PERIOD, gt=0)

    model_config = ConfigDict(frozen=True)

    @property
    def check_interval_seconds(self) -> float:
        """Timer period in seconds."""
        return float(self.check_interval * SECONDS_PER_UNIT)

    @property
    def grace_period_seconds(self) -> float:
        """Idle time in seconds tolerated before a shutdown is scheduled."""
        return float(self.grace_period * SECONDS_PER_UNIT)


class LoggingConfig(BaseModel):
    """Logging configuration settings.

    Attributes:
        log_dir: Directory for the JSONL log file (watchdog.jsonl).
        log_level: Minimum level for console and file output.
        file_logging: Whether to write the JSONL log file at all.
    """

    log_dir: str = Field(default=DEFAULT_LOG_DIR, min_length=1)
    log_level: Literal["DEBUG", "INFO", "WARNING"] = "INFO"
    file_logging: bool = True


class AppConfig(BaseModel):
    """Main application configuration for tunnel-watchdog.

    Attributes:
        watchdog: Polling interval and grace period.
        logging: Log directory and level.
    """

    watchdog: WatchdogConfig = Field(default_factory=WatchdogConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"extra": "ignore"}  # Ignore unknown fields for forward compat

    @field_validator("watchdog", mode="before")
    @classmethod
    def zero_means_default(cls, v: Any) -> Any:
        """Treat 0 in the file like 0 on the command line: use the default."""
        if not isinstance(v, dict):
            return v
        values = dict(v)
        for key, default in (
            ("check_interval", DEFAULT_CHECK_INTERVAL),
            ("grace_period", DEFAULT_GRACE_PERIOD),
        ):
            if values.get(key) == 0:
                values[key] = default
        return values

    def save_to_file(self, config_path: Path) -> None:
        """Save configuration to JSON file.

        Creates parent directories if they don't exist and restricts the
        file to its owner.

        Args:
            config_path: Path where the config JSON file should be saved.
        """
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(self.model_dump(), f, indent=2)
            f.write("\n")

        if sys.platform != "win32":
            try:
                config_path.chmod(0o600)
            except OSError:
                pass  # Permission changes might fail on some systems


def get_config_path() -> Path:
    """Get the default config file path.

    Uses click.get_app_dir() which returns:
    - macOS: ~/Library/Application Support/tunnel-watchdog
    - Linux: ~/.config/tunnel-watchdog (XDG compliant)

    Returns:
        Path to config.json in the application directory.
    """
    return Path(click.get_app_dir(APP_NAME)) / CONFIG_FILENAME


def get_log_path(config: LoggingConfig) -> Path:
    """Get full path to the JSONL log file.

    Args:
        config: Logging configuration.

    Returns:
        Path: <log_dir>/watchdog.jsonl with ~ expanded.
    """
    return Path(config.log_dir).expanduser() / LOG_FILENAME


def load_config(config_path: Path) -> AppConfig:
    """Load configuration from file.

    A missing file is not an error: the watchdog runs on defaults and
    command-line options. A file that exists must be valid.

    Args:
        config_path: Path to the config JSON file.

    Returns:
        AppConfig: Loaded or default configuration.

    Raises:
        ConfigurationError: If the file is unreadable, not JSON, or invalid.
    """
    if not config_path.exists():
        return AppConfig()

    try:
        with config_path.open(encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read {config_path}: {e}") from e

    try:
        return AppConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid config in {config_path}: {e}") from e


def apply_defaults(check_interval: int, grace_period: int) -> tuple[int, int]:
    """Replace zero values with the built-in defaults.

    The core never sees a zero: the CLI calls this before building
    WatchdogConfig.

    Args:
        check_interval: Requested poll interval, 0 for default.
        grace_period: Requested grace period, 0 for default.

    Returns:
        (check_interval, grace_period) with zeros replaced.
    """
    return (
        check_interval or DEFAULT_CHECK_INTERVAL,
        grace_period or DEFAULT_GRACE_PERIOD,
    )

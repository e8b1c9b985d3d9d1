"""Application-wide constants for tunnel-watchdog.

Constants that define application behavior.
For user-configurable settings, see config.py.
"""

from __future__ import annotations

__all__ = [
    # Application identity
    "APP_NAME",
    "CONFIG_FILENAME",
    "LOG_FILENAME",
    "DEFAULT_LOG_DIR",
    # Watchdog timing
    "DEFAULT_CHECK_INTERVAL",
    "DEFAULT_GRACE_PERIOD",
    "SECONDS_PER_UNIT",
    # External commands
    "SHELL_PATH",
    "TUNNEL_LIST_COMMAND",
    "TUNNEL_SHOW_COMMAND",
    "SHUTDOWN_SCHEDULE_COMMAND",
    "SHUTDOWN_CANCEL_COMMAND",
    # Output patterns
    "CLIENT_CONNECTIONS_PATTERN",
    "SHUTDOWN_SCHEDULED_PATTERN",
    # Exit codes
    "ExitCode",
]

import re
from enum import IntEnum

from platformdirs import user_log_dir

# ============================================================================
# Application Identity
# ============================================================================

# Application name used for directory names, logger names, etc.
APP_NAME: str = "tunnel-watchdog"

# Config file name inside click.get_app_dir(APP_NAME)
CONFIG_FILENAME: str = "config.json"

# JSONL log file name inside the configured log directory
LOG_FILENAME: str = "watchdog.jsonl"

# Platform-specific log directory:
# - Linux: ~/.local/state/tunnel-watchdog/log
# - macOS: ~/Library/Logs/tunnel-watchdog
DEFAULT_LOG_DIR: str = user_log_dir(APP_NAME)

# ============================================================================
# Watchdog Timing
# ============================================================================

# Used when the caller passes 0 (or nothing) for the respective option
DEFAULT_CHECK_INTERVAL: int = 5
DEFAULT_GRACE_PERIOD: int = 30

# Interval and grace period are scaled by a minute at runtime.
# Both values are minutes, as the CLI help and README state.
SECONDS_PER_UNIT: int = 60

# ============================================================================
# External Commands
# ============================================================================

# Every command is passed as a single string to `/bin/sh -c`
SHELL_PATH: str = "/bin/sh"

TUNNEL_LIST_COMMAND: str = "devtunnel list"
TUNNEL_SHOW_COMMAND: str = "devtunnel show {tunnel_id}"
SHUTDOWN_SCHEDULE_COMMAND: str = "shutdown -h {minutes}"
SHUTDOWN_CANCEL_COMMAND: str = "shutdown -c"

# ============================================================================
# Output Patterns
# ============================================================================

# `devtunnel show` report line; the spacing before the colon is literal
CLIENT_CONNECTIONS_PATTERN: re.Pattern[str] = re.compile(r"Client connections    : (\d+)")

# systemd `shutdown -h` confirmation
SHUTDOWN_SCHEDULED_PATTERN: re.Pattern[str] = re.compile(
    r"Shutdown scheduled for .*, use 'shutdown -c' to cancel\."
)

# ============================================================================
# Exit Codes
# ============================================================================


class ExitCode(IntEnum):
    """Process exit codes.

    The watchdog never exits on its own during normal operation; these
    codes only cover startup failures.
    """

    OK = 0
    ERROR = 1  # Invalid configuration or other startup failure
    NO_TUNNEL = 3  # No dev tunnel could be resolved at startup

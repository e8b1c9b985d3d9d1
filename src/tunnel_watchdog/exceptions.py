"""Custom exceptions for tunnel-watchdog.

Exceptions are organized into two categories:

Recoverable Errors (watchdog keeps ticking):
    - ProcessLaunchError: The shell could not be spawned
    - BashCommandError: A gateway operation failed

Fatal Failures (process must exit):
    - WatchdogFailure: Base for startup failures with a distinct exit code
    - NoTunnelFoundError: No dev tunnel could be resolved
    - ConfigurationError: Config file is unreadable or invalid

Usage:
    from tunnel_watchdog.exceptions import BashCommandError, NoTunnelFoundError
"""

from __future__ import annotations

__all__ = [
    "BashCommandError",
    "ConfigurationError",
    "NoTunnelFoundError",
    "ProcessLaunchError",
    "TunnelWatchdogError",
    "WatchdogFailure",
]

from tunnel_watchdog.constants import ExitCode


class TunnelWatchdogError(Exception):
    """Base class for all tunnel-watchdog errors."""


# =============================================================================
# Recoverable Errors (logged by the tick handler, polling continues)
# =============================================================================


class ProcessLaunchError(TunnelWatchdogError):
    """The shell process could not be started.

    Raised by the command runner only. Gateways always wrap it in a
    BashCommandError.

    Attributes:
        command: The command line that failed to launch.
    """

    def __init__(self, command: str, reason: str) -> None:
        self.command = command
        super().__init__(f"Unable to launch process for '{command}': {reason}")


class BashCommandError(TunnelWatchdogError):
    """A gateway operation failed.

    Raised when the underlying command cannot be launched, or (for tunnel
    listing only) when it produced no output. The launch error, if any,
    is chained as __cause__.

    Attributes:
        context: Which operation failed, e.g. "list tunnels" or "shutdown".
    """

    def __init__(self, context: str, detail: str | None = None) -> None:
        self.context = context
        message = f"Unable to {context}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


# =============================================================================
# Fatal Failures (process exits with a distinct code)
# =============================================================================


class WatchdogFailure(TunnelWatchdogError):
    """Base exception for failures that terminate the process.

    Attributes:
        exit_code: Process exit code.
        failure_type: Category string for logging.
    """

    exit_code: int = ExitCode.ERROR
    failure_type: str = "unknown"


class NoTunnelFoundError(WatchdogFailure):
    """No dev tunnel could be resolved at startup.

    Raised when:
    - `devtunnel list` cannot be launched or prints nothing
    - The listing has no usable last line
    - The last line has no space-delimited id

    This is the only condition that ends the watchdog on its own.
    """

    exit_code = ExitCode.NO_TUNNEL
    failure_type = "no_tunnel"


class ConfigurationError(WatchdogFailure):
    """Configuration is invalid.

    Raised when:
    - Config file contains invalid JSON
    - Config file fails Pydantic validation
    - Config file cannot be read
    """

    exit_code = ExitCode.ERROR
    failure_type = "configuration_failure"

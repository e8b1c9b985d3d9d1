"""Host shutdown gateway.

Schedules and cancels a delayed host shutdown via the `shutdown` command.
"""

from __future__ import annotations

__all__ = [
    "ShutdownGateway",
    "is_shutdown_scheduled",
]

import logging

from tunnel_watchdog.constants import (
    SHUTDOWN_CANCEL_COMMAND,
    SHUTDOWN_SCHEDULE_COMMAND,
    SHUTDOWN_SCHEDULED_PATTERN,
)
from tunnel_watchdog.exceptions import BashCommandError, ProcessLaunchError
from tunnel_watchdog.log_config import log_event
from tunnel_watchdog.models import WatchdogEvent
from tunnel_watchdog.runner import CommandRunner, run_command


class ShutdownGateway:
    """Runs `shutdown` commands through a command runner."""

    def __init__(self, runner: CommandRunner = run_command) -> None:
        self._run = runner

    def schedule_shutdown(self, delay_minutes: int) -> str:
        """Schedule a host shutdown in delay_minutes minutes.

        Returns:
            Raw command output, to be checked with is_shutdown_scheduled().

        Raises:
            BashCommandError: If the command cannot be launched.
        """
        return self._execute(SHUTDOWN_SCHEDULE_COMMAND.format(minutes=delay_minutes))

    def cancel_shutdown(self) -> None:
        """Cancel a pending host shutdown. The output is ignored.

        Raises:
            BashCommandError: If the command cannot be launched.
        """
        self._execute(SHUTDOWN_CANCEL_COMMAND)

    def _execute(self, command: str) -> str:
        log_event(
            logging.INFO,
            WatchdogEvent(event="command_started", message=f"Executing '{command}' command", command=command),
        )
        try:
            output = self._run(command)
        except ProcessLaunchError as e:
            log_event(
                logging.ERROR,
                WatchdogEvent(
                    event="command_failed",
                    message=f"Error executing '{command}' command",
                    command=command,
                    error_type=type(e).__name__,
                    error_message=str(e),
                ),
            )
            raise BashCommandError("shutdown", str(e)) from e

        log_event(
            logging.INFO,
            WatchdogEvent(
                event="command_succeeded",
                message=f"'{command}' command executed successfully",
                command=command,
            ),
        )
        return output


def is_shutdown_scheduled(output: str) -> bool:
    """Check for systemd's "Shutdown scheduled for ..." confirmation."""
    return SHUTDOWN_SCHEDULED_PATTERN.search(output) is not None

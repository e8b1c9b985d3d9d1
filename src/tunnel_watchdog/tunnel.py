"""Dev tunnel gateway.

Wraps the `devtunnel` CLI:
- list_tunnels / show_tunnel: run the commands (TunnelGateway)
- resolve_tunnel_id / count_connections: parse their output (pure functions)

Parsing is kept separate from command execution so it can be tested
against captured output without spawning processes.
"""

from __future__ import annotations

__all__ = [
    "TunnelGateway",
    "TunnelId",
    "count_connections",
    "resolve_tunnel_id",
]

import logging
from dataclasses import dataclass

from tunnel_watchdog.constants import (
    CLIENT_CONNECTIONS_PATTERN,
    TUNNEL_LIST_COMMAND,
    TUNNEL_SHOW_COMMAND,
)
from tunnel_watchdog.exceptions import BashCommandError, ProcessLaunchError
from tunnel_watchdog.log_config import log_event
from tunnel_watchdog.models import WatchdogEvent
from tunnel_watchdog.runner import CommandRunner, run_command


@dataclass(frozen=True, order=True, slots=True)
class TunnelId:
    """Identifier of the monitored dev tunnel.

    Resolved once at startup and never changed afterwards.
    """

    value: str

    def __str__(self) -> str:
        return self.value


class TunnelGateway:
    """Runs `devtunnel` commands through a command runner."""

    def __init__(self, runner: CommandRunner = run_command) -> None:
        self._run = runner

    def list_tunnels(self) -> str:
        """Return the raw `devtunnel list` output.

        Raises:
            BashCommandError: If the command cannot be launched or prints nothing.
        """
        command = TUNNEL_LIST_COMMAND
        try:
            output = self._run(command)
        except ProcessLaunchError as e:
            raise BashCommandError("list tunnels", str(e)) from e

        if output == "":
            raise BashCommandError("list tunnels", "no output from command")

        log_event(
            logging.INFO,
            WatchdogEvent(
                event="command_succeeded",
                message=f"'{command}' command executed successfully",
                command=command,
            ),
        )
        return output

    def show_tunnel(self, tunnel_id: TunnelId) -> str:
        """Return the raw `devtunnel show <id>` output.

        Empty output is returned as-is; callers read it as zero connections.

        Raises:
            BashCommandError: If the command cannot be launched.
        """
        command = TUNNEL_SHOW_COMMAND.format(tunnel_id=tunnel_id)
        try:
            return self._run(command)
        except ProcessLaunchError as e:
            log_event(
                logging.ERROR,
                WatchdogEvent(
                    event="command_failed",
                    message=f"Error executing '{command}' command",
                    command=command,
                    tunnel_id=str(tunnel_id),
                    error_type=type(e).__name__,
                    error_message=str(e),
                ),
            )
            raise BashCommandError(f"show tunnel {tunnel_id}", str(e)) from e


def _warn(event: str, message: str, **fields: object) -> None:
    log_event(logging.WARNING, WatchdogEvent(event=event, message=message, **fields))


def resolve_tunnel_id(listing: str) -> TunnelId | None:
    """Extract the tunnel id from `devtunnel list` output.

    The id is the text before the first space on the last non-empty line.

    Args:
        listing: Raw listing output.

    Returns:
        The TunnelId, or None if the listing holds no usable id.
    """
    if not listing:
        _warn("tunnel_listing_empty", "No output when fetching tunnel id")
        return None

    lines = [line for line in listing.split("\n") if line]
    if not lines:
        _warn("tunnel_listing_empty", "Output only contained empty lines when fetching tunnel id")
        return None

    last_line = lines[-1]
    if not last_line.strip():
        _warn("tunnel_listing_blank_line", "Last line of the listing is blank")
        return None

    index = last_line.find(" ")
    if index == -1:
        _warn("tunnel_listing_no_delimiter", "No space found in the last line of the listing")
        return None

    raw_id = last_line[:index]
    if not raw_id.strip():
        _warn("tunnel_id_blank", "Extracted tunnel id is empty")
        return None

    return TunnelId(raw_id)


def count_connections(report: str) -> int:
    """Extract the client connection count from `devtunnel show` output.

    Anything that does not match "Client connections    : <digits>"
    counts as zero connections.

    Args:
        report: Raw show output.

    Returns:
        Number of connected clients, never negative.
    """
    if not report:
        _warn("tunnel_status_empty", "No output when checking tunnel connections")
        return 0

    match = CLIENT_CONNECTIONS_PATTERN.search(report)
    if match is None:
        _warn("tunnel_status_unparsed", "Failed to match client connections in the tunnel status")
        return 0

    try:
        return int(match.group(1))
    except ValueError:
        _warn("tunnel_status_unparsed", "Failed to parse number of connections")
        return 0

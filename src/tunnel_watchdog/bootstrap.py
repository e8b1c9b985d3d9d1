"""Watchdog startup: resolve the tunnel, then run until signalled.

Resolving the tunnel is the one fatal step. Once the timer is running
the watchdog only stops on SIGTERM or SIGINT.
"""

from __future__ import annotations

__all__ = [
    "bootstrap",
    "resolve_tunnel",
    "run",
]

import asyncio
import logging
import os
import signal

from tunnel_watchdog.config import WatchdogConfig
from tunnel_watchdog.exceptions import BashCommandError, NoTunnelFoundError
from tunnel_watchdog.log_config import log_event
from tunnel_watchdog.models import WatchdogEvent
from tunnel_watchdog.shutdown import ShutdownGateway
from tunnel_watchdog.tunnel import TunnelGateway, TunnelId, resolve_tunnel_id
from tunnel_watchdog.watchdog import ConnectionChecker, Notifier, run_watchdog


def resolve_tunnel(tunnels: TunnelGateway) -> TunnelId | None:
    """List tunnels and pick the one to monitor.

    Returns:
        The resolved TunnelId, or None if there is none.

    Raises:
        BashCommandError: If `devtunnel list` fails or prints nothing.
    """
    log_event(
        logging.INFO,
        WatchdogEvent(event="tunnel_resolving", message="Fetching tunnel id"),
    )
    return resolve_tunnel_id(tunnels.list_tunnels())


def bootstrap(
    config: WatchdogConfig,
    tunnels: TunnelGateway,
    shutdowns: ShutdownGateway,
    notifier: Notifier | None = None,
) -> ConnectionChecker:
    """Resolve the tunnel and build the connection checker.

    Raises:
        NoTunnelFoundError: If no tunnel can be resolved.
    """
    try:
        tunnel_id = resolve_tunnel(tunnels)
    except BashCommandError as e:
        log_event(
            logging.CRITICAL,
            WatchdogEvent(
                event="no_tunnel",
                message=f"No tunnel found, exiting with code {int(NoTunnelFoundError.exit_code)}",
                error_type=type(e).__name__,
                error_message=str(e),
            ),
        )
        raise NoTunnelFoundError(str(e)) from e

    if tunnel_id is None:
        log_event(
            logging.CRITICAL,
            WatchdogEvent(
                event="no_tunnel",
                message=f"No tunnel found, exiting with code {int(NoTunnelFoundError.exit_code)}",
            ),
        )
        raise NoTunnelFoundError("No dev tunnel found in 'devtunnel list' output")

    log_event(
        logging.INFO,
        WatchdogEvent(
            event="tunnel_found",
            message=f"Found tunnel '{tunnel_id}'",
            tunnel_id=str(tunnel_id),
        ),
    )
    return ConnectionChecker(tunnel_id, config, tunnels, shutdowns, notifier)


async def run(
    config: WatchdogConfig,
    tunnels: TunnelGateway | None = None,
    shutdowns: ShutdownGateway | None = None,
    notifier: Notifier | None = None,
) -> None:
    """Run the watchdog until SIGTERM or SIGINT.

    Raises:
        NoTunnelFoundError: If no tunnel can be resolved at startup.
    """
    log_event(
        logging.INFO,
        WatchdogEvent(
            event="watchdog_starting",
            message=f"Watchdog starting: check_interval={config.check_interval}, grace_period={config.grace_period}",
            details={
                "check_interval": config.check_interval,
                "grace_period": config.grace_period,
                "pid": os.getpid(),
            },
        ),
    )

    checker = bootstrap(config, tunnels or TunnelGateway(), shutdowns or ShutdownGateway(), notifier)

    stop_event = asyncio.Event()
    loop = asyncio.get_running_loop()

    def signal_handler(signum: int) -> None:
        """Handle shutdown signals (SIGTERM, SIGINT)."""
        log_event(
            logging.INFO,
            WatchdogEvent(
                event="shutdown_signal_received",
                message=f"Received signal {signum}, stopping watchdog",
                details={"signal": signum},
            ),
        )
        stop_event.set()

    for signum in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(signum, signal_handler, signum)

    try:
        await run_watchdog(checker, stop_event)
    finally:
        for signum in (signal.SIGTERM, signal.SIGINT):
            loop.remove_signal_handler(signum)
        log_event(
            logging.INFO,
            WatchdogEvent(
                event="watchdog_stopped",
                message="Watchdog stopped",
                tunnel_id=str(checker.tunnel_id),
                details={"status": checker.status.value},
            ),
        )

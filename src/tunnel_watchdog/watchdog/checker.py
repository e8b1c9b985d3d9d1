"""Connection checker: the watchdog's per-tick decision logic.

Each tick polls the tunnel once and moves between two states:

    IDLE --(no clients for >= grace period)--> SHUTDOWN_PENDING
    SHUTDOWN_PENDING --(client connected)--> IDLE

A shutdown is scheduled at most once per idle episode and cancelled at
most once per reconnect. Command failures are logged and the tick ends
without a decision; the next tick tries again.
"""

from __future__ import annotations

__all__ = [
    "ConnectionChecker",
]

import logging
import time
from typing import Callable

from tunnel_watchdog.config import WatchdogConfig
from tunnel_watchdog.exceptions import BashCommandError
from tunnel_watchdog.log_config import log_event
from tunnel_watchdog.models import WatchdogEvent
from tunnel_watchdog.shutdown import ShutdownGateway, is_shutdown_scheduled
from tunnel_watchdog.tunnel import TunnelGateway, TunnelId, count_connections

from .notify import NotificationKind, Notifier, SilentNotifier
from .state import WatchdogState, WatchdogStatus


class ConnectionChecker:
    """Polls one tunnel and drives shutdown scheduling.

    Args:
        tunnel_id: Tunnel resolved at startup.
        config: Check interval and grace period.
        tunnels: Gateway for `devtunnel show`.
        shutdowns: Gateway for `shutdown -h` / `shutdown -c`.
        notifier: Receives initiated/cancelled notifications.
        clock: Monotonic clock in seconds (injectable for tests).
    """

    def __init__(
        self,
        tunnel_id: TunnelId,
        config: WatchdogConfig,
        tunnels: TunnelGateway,
        shutdowns: ShutdownGateway,
        notifier: Notifier | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.tunnel_id = tunnel_id
        self.config = config
        self._tunnels = tunnels
        self._shutdowns = shutdowns
        self._notifier = notifier or SilentNotifier()
        self._clock = clock
        self.state = WatchdogState(last_seen=clock())

    @property
    def status(self) -> WatchdogStatus:
        return self.state.status

    def check_connections(self) -> None:
        """Run one tick. Never raises for command failures."""
        log_event(
            logging.INFO,
            WatchdogEvent(
                event="connection_check",
                message=f"Checking connections for tunnel '{self.tunnel_id}'",
                tunnel_id=str(self.tunnel_id),
            ),
        )
        try:
            connections = self.poll_connections()
            if connections > 0:
                self._on_connected(connections)
            else:
                self._on_disconnected()
        except BashCommandError as e:
            log_event(
                logging.ERROR,
                WatchdogEvent(
                    event="check_failed",
                    message=f"Connection check failed: {e}",
                    tunnel_id=str(self.tunnel_id),
                    error_type=type(e).__name__,
                    error_message=str(e),
                    details={"context": e.context, "status": self.status.value},
                ),
            )

    def poll_connections(self) -> int:
        """Return the tunnel's current client connection count.

        Raises:
            BashCommandError: If `devtunnel show` cannot be launched.
        """
        return count_connections(self._tunnels.show_tunnel(self.tunnel_id))

    def _on_connected(self, connections: int) -> None:
        self.state.last_seen = self._clock()
        log_event(
            logging.INFO,
            WatchdogEvent(
                event="tunnel_connected",
                message=f"Tunnel '{self.tunnel_id}' has {connections} connection(s)",
                tunnel_id=str(self.tunnel_id),
                connections=connections,
            ),
        )

        if not self.state.shutdown_pending:
            return

        self._notifier.notify(NotificationKind.SHUTDOWN_CANCELLED)
        log_event(
            logging.INFO,
            WatchdogEvent(
                event="shutdown_cancelling",
                message="Canceling shutdown",
                tunnel_id=str(self.tunnel_id),
            ),
        )
        # A failed cancel leaves the flag set, so the next connected tick retries
        self._shutdowns.cancel_shutdown()
        self.state.shutdown_pending = False
        log_event(
            logging.INFO,
            WatchdogEvent(
                event="shutdown_cancelled",
                message="Shutdown canceled due to active connection",
                tunnel_id=str(self.tunnel_id),
                connections=connections,
            ),
        )

    def _on_disconnected(self) -> None:
        elapsed = self._clock() - self.state.last_seen
        grace = self.config.grace_period_seconds

        if elapsed < grace:
            log_event(
                logging.INFO,
                WatchdogEvent(
                    event="within_grace_period",
                    message=f"No active connections, still within grace period ({elapsed:.0f}s of {grace:.0f}s)",
                    tunnel_id=str(self.tunnel_id),
                    connections=0,
                    elapsed_seconds=elapsed,
                ),
            )
            return

        if self.state.shutdown_pending:
            log_event(
                logging.INFO,
                WatchdogEvent(
                    event="shutdown_already_pending",
                    message="Already shutting down, no further action needed",
                    tunnel_id=str(self.tunnel_id),
                    connections=0,
                    elapsed_seconds=elapsed,
                ),
            )
            return

        log_event(
            logging.INFO,
            WatchdogEvent(
                event="shutdown_initiating",
                message=f"Initiating shutdown due to inactivity ({elapsed:.0f}s without connections)",
                tunnel_id=str(self.tunnel_id),
                connections=0,
                elapsed_seconds=elapsed,
            ),
        )
        self._notifier.notify(NotificationKind.SHUTDOWN_INITIATED)
        output = self._shutdowns.schedule_shutdown(self.config.grace_period)
        self.state.shutdown_pending = True
        self._verify_schedule(output)

    def _verify_schedule(self, output: str) -> None:
        # Observational only: state already reflects the issued shutdown
        if not output:
            log_event(
                logging.WARNING,
                WatchdogEvent(
                    event="shutdown_unconfirmed",
                    message="Shutdown command did not return any output",
                    tunnel_id=str(self.tunnel_id),
                ),
            )
        elif not is_shutdown_scheduled(output):
            log_event(
                logging.WARNING,
                WatchdogEvent(
                    event="shutdown_unconfirmed",
                    message="No valid shutdown schedule found in output",
                    tunnel_id=str(self.tunnel_id),
                    details={"output": output.strip()},
                ),
            )
        else:
            log_event(
                logging.INFO,
                WatchdogEvent(
                    event="shutdown_scheduled",
                    message="Shutdown scheduled successfully",
                    tunnel_id=str(self.tunnel_id),
                ),
            )

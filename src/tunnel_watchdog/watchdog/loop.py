"""Repeating timer driving the connection checker.

Ticks are serialized: the next interval only starts once the previous
tick, including its blocking shell commands, has returned.
"""

from __future__ import annotations

__all__ = [
    "run_watchdog",
]

import asyncio
import logging

from tunnel_watchdog.log_config import log_event
from tunnel_watchdog.models import WatchdogEvent

from .checker import ConnectionChecker


async def run_watchdog(checker: ConnectionChecker, stop_event: asyncio.Event) -> None:
    """Run the checker every check interval until stop_event is set.

    The first check happens one interval after start. Each tick runs in a
    worker thread so signal handling stays responsive while a command blocks.

    Args:
        checker: Connection checker owning the watchdog state.
        stop_event: Event that ends the loop when set.
    """
    interval = checker.config.check_interval_seconds
    log_event(
        logging.INFO,
        WatchdogEvent(
            event="timer_started",
            message=f"Starting connection check timer with an interval of {interval:.0f}s",
            tunnel_id=str(checker.tunnel_id),
            details={
                "check_interval_seconds": interval,
                "grace_period_seconds": checker.config.grace_period_seconds,
            },
        ),
    )

    while not stop_event.is_set():
        try:
            await asyncio.wait_for(stop_event.wait(), timeout=interval)
            break
        except asyncio.TimeoutError:
            pass

        try:
            await asyncio.to_thread(checker.check_connections)
        except Exception as e:
            # Keep ticking on anything the checker did not handle itself
            log_event(
                logging.ERROR,
                WatchdogEvent(
                    event="tick_failed",
                    message=f"Unexpected error during connection check: {e}",
                    tunnel_id=str(checker.tunnel_id),
                    error_type=type(e).__name__,
                    error_message=str(e),
                ),
            )

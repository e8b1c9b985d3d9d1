"""Connection watchdog: state machine and timer loop.

The watchdog:
- Polls the dev tunnel every check interval
- Tracks when a client was last connected
- Schedules a host shutdown after the grace period without clients
- Cancels it again when a client reconnects
"""

from __future__ import annotations

from .checker import ConnectionChecker
from .loop import run_watchdog
from .notify import BellNotifier, NotificationKind, Notifier, SilentNotifier
from .state import WatchdogState, WatchdogStatus

__all__ = [
    "BellNotifier",
    "ConnectionChecker",
    "NotificationKind",
    "Notifier",
    "SilentNotifier",
    "WatchdogState",
    "WatchdogStatus",
    "run_watchdog",
]

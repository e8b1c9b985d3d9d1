"""Operator notifications for shutdown transitions.

The host rings the terminal bell once when a shutdown is scheduled and
twice when it is cancelled because a client came back.
"""

from __future__ import annotations

__all__ = [
    "BellNotifier",
    "NotificationKind",
    "Notifier",
    "SilentNotifier",
]

import logging
from enum import Enum
from typing import Protocol

import click

from tunnel_watchdog.log_config import log_event
from tunnel_watchdog.models import WatchdogEvent


class NotificationKind(str, Enum):
    SHUTDOWN_INITIATED = "shutdown_initiated"
    SHUTDOWN_CANCELLED = "shutdown_cancelled"


# Number of bells per notification
_BELLS: dict[NotificationKind, int] = {
    NotificationKind.SHUTDOWN_INITIATED: 1,
    NotificationKind.SHUTDOWN_CANCELLED: 2,
}


class Notifier(Protocol):
    """Receives shutdown transition notifications."""

    def notify(self, kind: NotificationKind) -> None: ...


class SilentNotifier:
    """Records notifications in the log only."""

    def notify(self, kind: NotificationKind) -> None:
        log_event(
            logging.DEBUG,
            WatchdogEvent(event="notification", message=f"Notification: {kind.value}"),
        )


class BellNotifier(SilentNotifier):
    """Rings the terminal bell on stderr."""

    def notify(self, kind: NotificationKind) -> None:
        super().notify(kind)
        click.echo("\a" * _BELLS[kind], nl=False, err=True)

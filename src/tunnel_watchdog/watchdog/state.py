"""Mutable watchdog state carried across polls."""

from __future__ import annotations

__all__ = [
    "WatchdogState",
    "WatchdogStatus",
]

from dataclasses import dataclass
from enum import Enum


class WatchdogStatus(str, Enum):
    """Whether a shutdown is currently scheduled."""

    IDLE = "idle"
    SHUTDOWN_PENDING = "shutdown_pending"


@dataclass(slots=True)
class WatchdogState:
    """State owned by the connection checker.

    Only touched from the serialized tick, so no locking is needed.

    Attributes:
        last_seen: Clock reading of the last poll that saw a client.
        shutdown_pending: True between a successfully issued shutdown
            and its cancellation.
    """

    last_seen: float
    shutdown_pending: bool = False

    @property
    def status(self) -> WatchdogStatus:
        if self.shutdown_pending:
            return WatchdogStatus.SHUTDOWN_PENDING
        return WatchdogStatus.IDLE

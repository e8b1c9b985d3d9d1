"""Shared fixtures: captured command output and injectable fakes.

The fake runner stands in for run_command() so gateway and watchdog tests
never spawn processes. Outputs are keyed by the exact command line.
"""

from __future__ import annotations

from typing import Callable, Iterator, Union

import pytest

from tunnel_watchdog.config import LoggingConfig
from tunnel_watchdog.log_config import configure_logging

# ---------------------------------------------------------------------------
# Captured command output
# ---------------------------------------------------------------------------

TUNNEL_LISTING = """\
Found 1 tunnel.

Tunnel ID                           Host Connections     Labels                    Ports                Expiration
quiet-lake-2k9d1.euw                1                                              1                    30 days
"""

TUNNEL_SHOW_TEMPLATE = """\
Tunnel ID             : quiet-lake-2k9d1.euw
Description           :
Labels                :
Access control        : {{+Owner}}
Host connections      : 1
Client connections    : {connections}
Current upload rate   : 0 MB/s (limit: 20 MB/s)
Current download rate : 0 MB/s (limit: 20 MB/s)
Tunnel Expiration     : 30 days
"""

SHUTDOWN_CONFIRMATION = "Shutdown scheduled for Mon 2026-10-19 12:30:00 UTC, use 'shutdown -c' to cancel.\n"

TUNNEL_ID = "quiet-lake-2k9d1.euw"


def show_output(connections: int) -> str:
    """`devtunnel show` output reporting the given client count."""
    return TUNNEL_SHOW_TEMPLATE.format(connections=connections)


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------

Output = Union[str, Exception]


class FakeRunner:
    """Command runner returning canned output per command line.

    Unknown commands return "". An Exception value is raised instead.
    """

    def __init__(self, outputs: dict[str, Output] | None = None) -> None:
        self.outputs: dict[str, Output] = dict(outputs or {})
        self.commands: list[str] = []

    def __call__(self, command: str) -> str:
        self.commands.append(command)
        result = self.outputs.get(command, "")
        if isinstance(result, Exception):
            raise result
        return result

    def count(self, command: str) -> int:
        return self.commands.count(command)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def make_runner() -> Callable[..., FakeRunner]:
    """Factory for FakeRunner instances."""
    return FakeRunner


@pytest.fixture
def clock() -> FakeClock:
    """Fake clock starting at t=1000s."""
    return FakeClock()


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Drop any file handlers a test installed."""
    yield
    configure_logging(LoggingConfig(file_logging=False))


@pytest.fixture
def tunnel_listing() -> str:
    """`devtunnel list` output with one hosted tunnel."""
    return TUNNEL_LISTING


@pytest.fixture
def tunnel_id() -> str:
    """Id contained in tunnel_listing."""
    return TUNNEL_ID


@pytest.fixture
def make_show_output() -> Callable[[int], str]:
    """Factory for `devtunnel show` output with a given client count."""
    return show_output


@pytest.fixture
def shutdown_confirmation() -> str:
    """`shutdown -h` confirmation as printed by systemd."""
    return SHUTDOWN_CONFIRMATION

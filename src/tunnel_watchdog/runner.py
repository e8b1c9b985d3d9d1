"""Synchronous shell command runner.

Every external tool the watchdog uses (devtunnel, shutdown) is invoked
through run_command(): one `/bin/sh -c <command>` process per call,
stdout captured as UTF-8 text (undecodable bytes replaced), stderr discarded.

The call blocks until the process exits. There is no timeout: a hung
command stalls the watchdog until it returns.
"""

from __future__ import annotations

__all__ = [
    "CommandRunner",
    "run_command",
]

import logging
import subprocess
from typing import Callable

from tunnel_watchdog.constants import SHELL_PATH
from tunnel_watchdog.exceptions import ProcessLaunchError
from tunnel_watchdog.log_config import log_event
from tunnel_watchdog.models import WatchdogEvent

# Signature shared by run_command and test doubles
CommandRunner = Callable[[str], str]


def run_command(command: str) -> str:
    """Run a shell command and return its standard output.

    The exit status is not inspected: a failing command that prints
    nothing simply yields "" and callers deal with empty output.

    Args:
        command: Fully formed command line, interpreted by /bin/sh.

    Returns:
        Captured stdout, including any trailing newline.

    Raises:
        ProcessLaunchError: If the shell could not be spawned.
    """
    log_event(
        logging.DEBUG,
        WatchdogEvent(event="command_started", message=f"Executing '{command}'", command=command),
    )

    try:
        result = subprocess.run(
            [SHELL_PATH, "-c", command],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            stdin=subprocess.DEVNULL,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except (OSError, ValueError) as e:
        raise ProcessLaunchError(command, str(e)) from e

    log_event(
        logging.DEBUG,
        WatchdogEvent(
            event="command_finished",
            message=f"'{command}' exited with code {result.returncode}",
            command=command,
            details={"returncode": result.returncode, "stdout_length": len(result.stdout)},
        ),
    )
    return result.stdout

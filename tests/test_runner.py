"""Tests for the shell command runner.

These run real /bin/sh processes with trivial commands.
"""

from __future__ import annotations

from unittest.mock import patch

import pytest

from tunnel_watchdog.exceptions import ProcessLaunchError
from tunnel_watchdog.runner import run_command
from tunnel_watchdog.tunnel import count_connections


class TestRunCommand:
    """run_command behavior."""

    def test_returns_stdout_with_trailing_newline(self) -> None:
        assert run_command("echo hello") == "hello\n"

    def test_command_is_interpreted_by_shell(self) -> None:
        assert run_command("echo one; echo two | tr a-z A-Z") == "one\nTWO\n"

    def test_stderr_is_discarded(self) -> None:
        assert run_command("echo oops 1>&2") == ""

    def test_nonzero_exit_is_not_an_error(self) -> None:
        assert run_command("echo partial; exit 3") == "partial\n"

    def test_missing_shell_raises_launch_error(self) -> None:
        with patch("tunnel_watchdog.runner.SHELL_PATH", "/nonexistent/sh"):
            with pytest.raises(ProcessLaunchError) as exc_info:
                run_command("echo hello")

        assert exc_info.value.command == "echo hello"
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_undecodable_bytes_are_replaced(self) -> None:
        output = run_command("printf 'Client connections    : 0\\n\\377\\n'")

        assert output == "Client connections    : 0\n\ufffd\n"

    def test_latin1_description_does_not_hide_connection_count(self) -> None:
        output = run_command("printf 'Description : caf\\351\\nClient connections    : 2\\n'")

        assert count_connections(output) == 2

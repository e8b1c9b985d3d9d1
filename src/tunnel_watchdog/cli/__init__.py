"""Command-line interface for tunnel-watchdog.

Provides commands for running the watchdog, checking the tunnel once,
and managing configuration.
"""

from .main import cli, main

__all__ = ["cli", "main"]

"""Main CLI entry point for tunnel-watchdog.

Defines the CLI group and registers all subcommands.

Commands:
    run     - Run the watchdog (alias: connection-checker)
    check   - Poll the tunnel once and report connections
    config  - Configuration management (show, path, init)

Subcommand help:
    tunnel-watchdog COMMAND -h         Show help for a specific command
"""

from __future__ import annotations

__all__ = ["cli"]

import sys

import click

from tunnel_watchdog import __version__

from .commands.check import check
from .commands.config import config
from .commands.run import run


class ReorderedGroup(click.Group):
    """Custom group that shows commands before custom help text."""

    def format_epilog(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        """Add extra help after commands section."""
        formatter.write(
            """
Quick Start:
  tunnel-watchdog check                        Verify the tunnel is detected
  tunnel-watchdog run                          Poll every 5 min, shut down after 30 idle min

Requirements:
  devtunnel   Logged in, with the tunnel hosted on this machine
  shutdown    Permission to schedule and cancel a shutdown (root or polkit)

Exit codes:
  3   No tunnel found at startup
"""
        )


@click.group(
    cls=ReorderedGroup,
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.option("--version", "-v", is_flag=True, help="Show version")
@click.pass_context
def cli(ctx: click.Context, version: bool) -> None:
    """tunnel-watchdog: shut down an idle dev tunnel host."""
    if version:
        click.echo(f"tunnel-watchdog {__version__}")
        sys.exit(0)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# Register commands
cli.add_command(run)
cli.add_command(run, name="connection-checker")
cli.add_command(check)
cli.add_command(config)


def main() -> None:
    """CLI entry point."""
    cli()

"""Check command for tunnel-watchdog CLI.

Runs one poll of the tunnel without touching the shutdown schedule.
Useful to verify that devtunnel output is parsed as expected.
"""

from __future__ import annotations

__all__ = ["check"]

import json
import sys
from pathlib import Path

import click

from tunnel_watchdog.bootstrap import resolve_tunnel
from tunnel_watchdog.constants import ExitCode
from tunnel_watchdog.exceptions import BashCommandError
from tunnel_watchdog.log_config import configure_logging
from tunnel_watchdog.tunnel import TunnelGateway, count_connections

from ..helpers import config_option, load_app_config
from ..styling import style_error, style_label, style_success, style_warning


@click.command()
@config_option
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def check(config_path: Path | None, as_json: bool) -> None:
    """Poll the dev tunnel once and report its client connections.

    Never schedules or cancels a shutdown.
    """
    app_config = load_app_config(config_path)
    # Only problems go to stderr; the report is the output
    configure_logging(app_config.logging.model_copy(update={"log_level": "WARNING", "file_logging": False}))

    tunnels = TunnelGateway()
    try:
        tunnel_id = resolve_tunnel(tunnels)
    except BashCommandError as e:
        click.echo(style_error(str(e)), err=True)
        sys.exit(ExitCode.NO_TUNNEL)

    if tunnel_id is None:
        click.echo(style_error("No tunnel found in 'devtunnel list' output"), err=True)
        sys.exit(ExitCode.NO_TUNNEL)

    try:
        connections = count_connections(tunnels.show_tunnel(tunnel_id))
    except BashCommandError as e:
        click.echo(style_error(str(e)), err=True)
        sys.exit(ExitCode.ERROR)

    if as_json:
        click.echo(
            json.dumps(
                {
                    "tunnel_id": str(tunnel_id),
                    "connections": connections,
                    "connected": connections > 0,
                },
                indent=2,
            )
        )
        return

    click.echo(f"{style_label('Tunnel')} {tunnel_id}")
    click.echo(f"{style_label('Client connections')} {connections}")
    if connections > 0:
        click.echo(style_success("Tunnel is in use"))
    else:
        click.echo(style_warning("No clients connected"))

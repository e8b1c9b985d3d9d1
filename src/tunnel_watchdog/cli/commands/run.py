"""Run command for tunnel-watchdog CLI.

Starts the watchdog in the foreground. Normally launched by a systemd
unit or a login script on the dev box.
"""

from __future__ import annotations

__all__ = [
    "run",
]

import asyncio
import sys
from pathlib import Path

import click

from tunnel_watchdog import bootstrap
from tunnel_watchdog.config import WatchdogConfig, apply_defaults
from tunnel_watchdog.constants import DEFAULT_CHECK_INTERVAL, DEFAULT_GRACE_PERIOD
from tunnel_watchdog.exceptions import WatchdogFailure
from tunnel_watchdog.log_config import configure_logging
from tunnel_watchdog.watchdog import BellNotifier, SilentNotifier

from ..helpers import config_option, load_app_config
from ..styling import style_error


@click.command()
@click.option(
    "--check-interval",
    "--check-frequency",
    "check_interval",
    type=click.IntRange(min=0),
    default=None,
    help=f"How often to check for an active connection, in minutes (default: {DEFAULT_CHECK_INTERVAL}, 0 = default)",
)
@click.option(
    "--grace-period",
    type=click.IntRange(min=0),
    default=None,
    help=f"How long to wait without connections before shutting down, in minutes (default: {DEFAULT_GRACE_PERIOD}, 0 = default)",
)
@config_option
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING"], case_sensitive=False),
    default=None,
    help="Override the configured log level",
)
@click.option("--log-dir", default=None, help="Override the configured log directory")
@click.option("--no-bell", is_flag=True, help="Don't ring the terminal bell on shutdown/cancel")
def run(
    check_interval: int | None,
    grace_period: int | None,
    config_path: Path | None,
    log_level: str | None,
    log_dir: str | None,
    no_bell: bool,
) -> None:
    """Shut down the host after a period of tunnel inactivity.

    Resolves the dev tunnel from 'devtunnel list', then polls its client
    connections. When nobody has been connected for the grace period a
    shutdown is scheduled; a reconnecting client cancels it.

    Command-line values take precedence over the config file.

    Examples:
        tunnel-watchdog run                                  # 5 / 30 minutes
        tunnel-watchdog run --check-interval 1 --grace-period 10
    """
    app_config = load_app_config(config_path, log_level, log_dir)
    configure_logging(app_config.logging)

    check_interval, grace_period = apply_defaults(
        check_interval if check_interval is not None else app_config.watchdog.check_interval,
        grace_period if grace_period is not None else app_config.watchdog.grace_period,
    )
    watchdog_config = WatchdogConfig(check_interval=check_interval, grace_period=grace_period)
    notifier = SilentNotifier() if no_bell else BellNotifier()

    try:
        asyncio.run(bootstrap.run(watchdog_config, notifier=notifier))
    except WatchdogFailure as e:
        click.echo(style_error(str(e)), err=True)
        sys.exit(e.exit_code)

"""Config command group for tunnel-watchdog CLI.

Provides configuration management subcommands.
"""

from __future__ import annotations

__all__ = ["config"]

import json
import sys
from pathlib import Path

import click

from tunnel_watchdog.config import AppConfig, get_config_path, get_log_path

from ..helpers import config_option, load_app_config
from ..styling import style_error, style_header, style_success


@click.group()
def config() -> None:
    """Configuration management commands.

    The config file is optional. Without it the watchdog uses built-in
    defaults and command-line options.
    """
    pass


@config.command("show")
@config_option
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def config_show(config_path: Path | None, as_json: bool) -> None:
    """Display the effective configuration."""
    path = config_path if config_path is not None else get_config_path()
    loaded_config = load_app_config(path)

    if as_json:
        config_dict = loaded_config.model_dump(mode="json")
        config_dict["_computed"] = {
            "config_file": str(path),
            "config_file_exists": path.exists(),
            "log_file": str(get_log_path(loaded_config.logging)),
        }
        click.echo(json.dumps(config_dict, indent=2))
        return

    click.echo("\ntunnel-watchdog configuration:\n")
    if not path.exists():
        click.echo(click.style(f"  (no config file at {path}, using defaults)", dim=True))
        click.echo()

    click.echo(style_header("Watchdog"))
    click.echo(f"  check_interval: {loaded_config.watchdog.check_interval} min")
    click.echo(f"  grace_period: {loaded_config.watchdog.grace_period} min")
    click.echo()

    click.echo(style_header("Logging"))
    click.echo(f"  log_dir: {loaded_config.logging.log_dir}")
    click.echo(f"  log_level: {loaded_config.logging.log_level}")
    click.echo(f"  file_logging: {loaded_config.logging.file_logging}")
    click.echo(f"  log_file: {get_log_path(loaded_config.logging)}")
    click.echo()


@config.command("path")
def config_path_cmd() -> None:
    """Print the default config file path."""
    click.echo(str(get_config_path()))


@config.command("init")
@config_option
@click.option("--force", is_flag=True, help="Overwrite an existing config file")
def config_init(config_path: Path | None, force: bool) -> None:
    """Write a config file with the default values."""
    path = config_path if config_path is not None else get_config_path()
    if path.exists() and not force:
        click.echo(style_error(f"Config file already exists: {path}"), err=True)
        click.echo("Use --force to overwrite it.", err=True)
        sys.exit(1)

    try:
        AppConfig().save_to_file(path)
    except OSError as e:
        click.echo(style_error(f"Failed to write {path}: {e}"), err=True)
        sys.exit(1)

    click.echo(style_success(f"Configuration saved to {path}"))

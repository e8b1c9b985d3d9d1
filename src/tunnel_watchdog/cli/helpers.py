"""Shared helpers for CLI commands."""

from __future__ import annotations

__all__ = [
    "config_option",
    "load_app_config",
]

import sys
from pathlib import Path
from typing import Any, Callable

import click

from tunnel_watchdog.config import AppConfig, get_config_path, load_config
from tunnel_watchdog.exceptions import ConfigurationError

from .styling import style_error


def config_option(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add the --config/-c option (path to the JSON config file)."""
    return click.option(
        "--config",
        "-c",
        "config_path",
        type=click.Path(dir_okay=False, path_type=Path),
        default=None,
        help="Config file (default: OS config dir, see 'tunnel-watchdog config path')",
    )(func)


def load_app_config(
    config_path: Path | None,
    log_level: str | None = None,
    log_dir: str | None = None,
) -> AppConfig:
    """Load the config file and apply logging overrides.

    Exits the process with the configuration failure's exit code if the
    file is invalid.

    Args:
        config_path: Explicit config file, or None for the default location.
        log_level: Override for logging.log_level.
        log_dir: Override for logging.log_dir.

    Returns:
        Loaded configuration with overrides applied.
    """
    path = config_path if config_path is not None else get_config_path()
    try:
        app_config = load_config(path)
    except ConfigurationError as e:
        click.echo(style_error(str(e)), err=True)
        sys.exit(e.exit_code)

    overrides: dict[str, Any] = {}
    if log_level is not None:
        overrides["log_level"] = log_level.upper()
    if log_dir is not None:
        overrides["log_dir"] = log_dir
    if overrides:
        app_config = app_config.model_copy(
            update={"logging": app_config.logging.model_copy(update=overrides)}
        )
    return app_config

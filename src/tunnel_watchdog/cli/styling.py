"""Terminal styling for tunnel-watchdog reports.

`check` and `config show` print short labelled reports; failures go to
stderr with a red cross so they stand out next to the watchdog's log lines.
"""

from __future__ import annotations

__all__ = [
    "style_error",
    "style_header",
    "style_label",
    "style_success",
    "style_warning",
]

import click


def style_header(title: str) -> str:
    """Section title in `config show`, e.g. "--- Watchdog ---"."""
    return click.style(f"--- {title} ---", fg="cyan", bold=True)


def style_label(label: str) -> str:
    """Field label in the `check` report, e.g. "Client connections:"."""
    return click.style(f"{label}:", fg="cyan", bold=True)


def style_success(message: str) -> str:
    return click.style(f"✓ {message}", fg="green")


def style_error(message: str) -> str:
    """Red message for stderr, e.g. "✗ Unable to list tunnels"."""
    return click.style(f"✗ {message}", fg="red")


def style_warning(message: str) -> str:
    """Yellow notice, used when the tunnel has no clients."""
    return click.style(f"Warning: {message}", fg="yellow", bold=True)

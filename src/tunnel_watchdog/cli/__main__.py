"""Allow running the CLI with `python -m tunnel_watchdog.cli`."""

from .main import main

main()

"""Shared utilities for tunnel-watchdog."""

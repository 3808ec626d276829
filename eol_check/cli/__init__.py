"""CLI module for eol-check.

This module provides the command-line interface for eol-check.
It supports both CLI arguments and environment variables for configuration.
"""

from .main import build_config, cli, initialize_sentry, main, run_check

__all__ = [
    "cli",
    "main",
    "build_config",
    "initialize_sentry",
    "run_check",
]

"""
CLI module for filmcheck.

Provides the command-line interface using Click.
"""

from filmcheck.cli.main import cli, main

__all__ = ["main", "cli"]

"""
CLI module for nestmap.

Provides the command-line interface using Click.
"""

from nestmap.cli.main import cli, main

__all__ = ["main", "cli"]

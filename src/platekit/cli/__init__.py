"""Command-line interface for PlateKit.

This module provides the Typer application and Rich output helpers.
"""

from platekit.cli.app import app, cli, main

__all__ = ["app", "cli", "main"]

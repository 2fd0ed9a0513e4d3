"""CLI module for lakecatalog."""

from lakecatalog.cli.main import app, main_cli

__all__ = [
    "app",
    "main_cli",
]

"""Interfaces layer for DevFocus.

Adapters that accept user input, call application services and format
the output. Only a Typer CLI for now.
"""

from devfocus.interfaces.cli import app

__all__ = ["app"]

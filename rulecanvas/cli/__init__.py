"""CLI application setup using Typer."""

from rulecanvas.cli.main import app

__all__ = ["app"]

"""CLI package for psmodctl.

This package contains the Typer application and all subcommands.
"""

from psmodctl.cli.main import app

__all__ = ["app"]

"""CLI commands for psmodctl.

This package contains all subcommand implementations.
"""

from psmodctl.cli.commands import config, inventory, update_apply, update_scan, version_cleanup

__all__ = ["config", "inventory", "update_apply", "update_scan", "version_cleanup"]

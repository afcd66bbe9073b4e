"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.logging import RichHandler

from psmodctl import __version__
from psmodctl.cli.commands import config, inventory, update_apply, update_scan, version_cleanup
from psmodctl.core.config import ConfigError, load_config
from psmodctl.core.paths import CONFIG_ENV_VAR, get_config_path
from psmodctl.utils.formatting import err_console, print_error

# Create main Typer app
app = typer.Typer(
    name="psmodctl",
    help="Keep installed PowerShell modules up to date and tidy.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"psmodctl version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Route psmodctl log records to stderr through Rich.

    Args:
        verbose: Show DEBUG records.
        quiet: Show ERROR records only.
    """
    level = logging.WARNING
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR

    package_logger = logging.getLogger("psmodctl")
    for handler in list(package_logger.handlers):
        if isinstance(handler, RichHandler):
            package_logger.removeHandler(handler)

    handler = RichHandler(console=err_console, show_time=False, show_path=verbose)
    handler.setLevel(level)
    package_logger.addHandler(handler)
    package_logger.setLevel(level)


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            envvar=CONFIG_ENV_VAR,
            help="Path to config.toml.",
        ),
    ] = None,
) -> None:
    """psmodctl - PowerShell module lifecycle management.

    Lists installed modules, checks for and applies updates through
    PSResourceGet or PowerShellGet, and removes superseded versions.
    """
    configure_logging(verbose=verbose, quiet=quiet)

    resolved_path = config_path or get_config_path()
    try:
        app_config = load_config(resolved_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = resolved_path
    ctx.obj["config"] = app_config


# Register commands
app.add_typer(inventory.app, name="list")
app.add_typer(update_scan.app, name="update-scan")
app.add_typer(update_apply.app, name="update-apply")
app.add_typer(version_cleanup.app, name="version-cleanup")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()

"""Config command implementation.

Shows, locates, and initializes the psmodctl configuration file.
"""

import json
from typing import Annotated

import typer

from psmodctl.cli.types import get_config, get_config_file
from psmodctl.core.config import AppConfig, ConfigError, save_config
from psmodctl.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Manage psmodctl configuration.",
    no_args_is_help=True,
)


@app.command()
def show(ctx: typer.Context) -> None:
    """Show the effective configuration as JSON."""
    config = get_config(ctx)
    console.print_json(json.dumps(config.model_dump(mode="json")))


@app.command()
def path(ctx: typer.Context) -> None:
    """Print the configuration file path."""
    typer.echo(str(get_config_file(ctx)))


@app.command()
def init(
    ctx: typer.Context,
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite an existing configuration file.",
        ),
    ] = False,
) -> None:
    """Write a configuration file containing the defaults."""
    config_path = get_config_file(ctx)
    if config_path.exists() and not force:
        print_info(f"Config already exists: {config_path} (use --force to overwrite)")
        raise typer.Exit(code=1)

    try:
        saved = save_config(AppConfig(), config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Wrote default config to {saved}")

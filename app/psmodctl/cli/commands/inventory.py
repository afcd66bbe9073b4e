"""List command implementation.

Lists installed PowerShell modules as reported by a provider.
"""

import json
from typing import Annotated

import typer

from psmodctl.cli.types import (
    OutputFormat,
    ProviderChoice,
    ScopeChoice,
    effective_provider,
    get_config,
    get_resolver,
    to_provider_kind,
    to_scope,
)
from psmodctl.cli.display import create_inventory_table
from psmodctl.models.scan_result import record_to_dict
from psmodctl.utils.formatting import console, print_info

app = typer.Typer(
    help="List installed modules.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def list_modules(
    ctx: typer.Context,
    provider: Annotated[
        ProviderChoice | None,
        typer.Option(
            "--provider",
            "-p",
            help="Provider to query: auto, psresourceget, or powershellget.",
            case_sensitive=False,
        ),
    ] = None,
    scope: Annotated[
        ScopeChoice,
        typer.Option(
            "--scope",
            "-s",
            help="Only show modules in this scope: user, system, unknown, or all.",
            case_sensitive=False,
        ),
    ] = ScopeChoice.ALL,
    names: Annotated[
        list[str] | None,
        typer.Option(
            "--name",
            "-n",
            help="Wildcard name filter (repeatable).",
        ),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format: table or json.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """List installed modules.

    Examples:
        psmodctl list                           # All modules, auto provider
        psmodctl list --scope user              # Only CurrentUser installs
        psmodctl list --name 'Az.*'             # Wildcard filter
        psmodctl list --provider powershellget  # Force PowerShellGet
    """
    if ctx.invoked_subcommand is not None:
        return

    config = get_config(ctx)
    resolver = get_resolver(config)
    kind = to_provider_kind(effective_provider(provider, config))

    records = resolver.list_installed(kind, names)
    scope_filter = to_scope(scope)
    if scope_filter is not None:
        records = [r for r in records if r.scope == scope_filter]

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps([record_to_dict(r) for r in records]))
        return

    if not records:
        print_info("No installed modules found.")
        return

    console.print(create_inventory_table(records, title=f"Installed Modules ({selected.kind.value})"))
    console.print(f"\n[dim]{len(records)} module(s)[/]")

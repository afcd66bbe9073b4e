"""Update-scan command implementation.

Shows installed modules for which a newer version is available.
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from psmodctl.cli.display import create_candidates_table
from psmodctl.cli.planning import build_plan
from psmodctl.cli.types import (
    OutputFormat,
    ProviderChoice,
    ScopeChoice,
    effective_provider,
    get_config,
    get_resolver,
)
from psmodctl.models.scan_result import UpdateScanResult
from psmodctl.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Check installed modules for available updates.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def update_scan(
    ctx: typer.Context,
    scope: Annotated[
        ScopeChoice,
        typer.Option(
            "--scope",
            "-s",
            help="Only check modules in this scope: user, system, unknown, or all.",
            case_sensitive=False,
        ),
    ] = ScopeChoice.ALL,
    provider: Annotated[
        ProviderChoice | None,
        typer.Option(
            "--provider",
            "-p",
            help="Provider to use: auto, psresourceget, or powershellget.",
            case_sensitive=False,
        ),
    ] = None,
    include_prerelease: Annotated[
        bool | None,
        typer.Option(
            "--include-prerelease/--no-prerelease",
            help="Consider prerelease versions.",
        ),
    ] = None,
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
    export_path: Annotated[
        Path | None,
        typer.Option(
            "--export",
            "-e",
            help="Export scan results to JSON file.",
        ),
    ] = None,
) -> None:
    """Check installed modules for available updates.

    Makes no changes. Use update-apply to install the updates.

    Examples:
        psmodctl update-scan                        # All scopes, auto provider
        psmodctl update-scan --scope user           # CurrentUser modules only
        psmodctl update-scan --include-prerelease   # Consider previews
        psmodctl update-scan --name 'Az.*' -f json  # JSON for scripting
        psmodctl update-scan --export updates.json  # Save results
    """
    if ctx.invoked_subcommand is not None:
        return

    config = get_config(ctx)
    quiet = bool((ctx.obj or {}).get("quiet", False))
    prerelease = config.include_prerelease if include_prerelease is None else include_prerelease
    choice = effective_provider(provider, config)

    resolver = get_resolver(config)
    selected, plan = build_plan(resolver, choice, scope, prerelease, names, quiet=quiet)

    scan_result = UpdateScanResult.create(
        plan=plan,
        provider=selected.kind.value,
        scope=scope.value,
        include_prerelease=prerelease,
    )

    if export_path is not None:
        export_path = export_path.resolve()
        if export_path.is_dir():
            print_error(f"Export path is a directory: {export_path}")
            raise typer.Exit(code=1)
        try:
            export_path.parent.mkdir(parents=True, exist_ok=True)
            export_path.write_text(json.dumps(scan_result.to_dict(), indent=2))
            print_info(f"Scan results exported to {export_path}")
        except OSError as e:
            print_error(f"Failed to export: {e}")
            raise typer.Exit(code=1) from e

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(scan_result.to_dict()))
        return

    if plan.is_empty:
        print_success("All checked modules are up to date.")
        return

    console.print(create_candidates_table(list(plan.candidates)))
    console.print(
        f"\n[dim]{len(plan.candidates)} update(s) available "
        f"({plan.checked} checked, {len(plan.failures)} lookup failure(s))[/]"
    )

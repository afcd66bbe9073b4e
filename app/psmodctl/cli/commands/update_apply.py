"""Update-apply command implementation.

Installs the newest version of every outdated module, optionally
removing the superseded versions afterwards.
"""

from typing import Annotated

import typer

from psmodctl.cli.display import (
    create_candidates_table,
    create_removal_table,
    create_update_results_table,
    print_update_summary,
)
from psmodctl.cli.planning import build_plan
from psmodctl.cli.types import (
    ProviderChoice,
    ScopeChoice,
    effective_provider,
    get_config,
    get_resolver,
)
from psmodctl.core.planner import UpdatePlanner, gate_by_privilege
from psmodctl.core.privilege import is_elevated
from psmodctl.utils.formatting import console, print_info, print_success, print_warning

app = typer.Typer(
    help="Apply available module updates.",
    invoke_without_command=True,
)


def _confirm_updates(count: int) -> bool:
    """Prompt user to confirm applying updates."""
    return typer.confirm(f"\nApply {count} update(s)?", default=False)


@app.callback(invoke_without_command=True)
def update_apply(
    ctx: typer.Context,
    scope: Annotated[
        ScopeChoice,
        typer.Option(
            "--scope",
            "-s",
            help="Only update modules in this scope: user, system, unknown, or all.",
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
    preview: Annotated[
        bool,
        typer.Option(
            "--preview",
            help="Show the update plan without making changes.",
        ),
    ] = False,
    cleanup_old: Annotated[
        bool,
        typer.Option(
            "--cleanup-old",
            help="Remove superseded versions after each successful update.",
        ),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Skip confirmation prompt and proceed.",
        ),
    ] = False,
) -> None:
    """Apply available module updates.

    Each update installs the newest version into the module's current
    scope (CurrentUser or AllUsers). System-scope modules are skipped
    unless running elevated. A failed update does not stop the others.

    Examples:
        psmodctl update-apply --preview         # Show the plan only
        psmodctl update-apply --yes             # Apply without confirmation
        psmodctl update-apply --scope user      # CurrentUser modules only
        psmodctl update-apply --cleanup-old     # Also remove old versions
    """
    if ctx.invoked_subcommand is not None:
        return

    config = get_config(ctx)
    quiet = bool((ctx.obj or {}).get("quiet", False))
    prerelease = config.include_prerelease if include_prerelease is None else include_prerelease
    choice = effective_provider(provider, config)

    resolver = get_resolver(config)
    _, plan = build_plan(resolver, choice, scope, prerelease, names, quiet=quiet)

    if plan.is_empty:
        print_success("All checked modules are up to date. Nothing to do.")
        return

    console.print(create_candidates_table(list(plan.candidates), preview=preview))

    if preview:
        print_info("\nPreview mode: No changes were made.")
        return

    gate = gate_by_privilege(plan.candidates, elevated=is_elevated())
    for candidate in gate.dropped:
        print_warning(f"Skipping {candidate.name}: System scope requires an elevated session.")

    if not gate.allowed:
        print_info("No updates can be applied without elevation. No changes were made.")
        return

    if not yes and not _confirm_updates(len(gate.allowed)):
        print_info("Aborted.")
        raise typer.Exit(code=0)

    console.print("\n[bold]Applying updates...[/bold]\n")
    planner = UpdatePlanner(resolver)
    results = planner.execute(gate.allowed, cleanup_old=cleanup_old)

    console.print(create_update_results_table(results))
    cleanup = [r for result in results for r in result.cleanup]
    if cleanup:
        console.print(create_removal_table(cleanup, title="Cleanup Results"))
    print_update_summary(results)

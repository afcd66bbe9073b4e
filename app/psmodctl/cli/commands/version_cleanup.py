"""Version-cleanup command implementation.

Removes all but the newest N on-disk versions of one module.
"""

from pathlib import Path
from typing import Annotated

import typer

from psmodctl.cli.display import (
    create_ledger_table,
    create_removal_table,
    print_removal_summary,
)
from psmodctl.cli.types import get_config, get_resolver
from psmodctl.core.module_paths import get_module_roots
from psmodctl.core.reconciler import VersionReconciler
from psmodctl.utils.formatting import console, print_error, print_info, print_success
from psmodctl.utils.version import ModuleVersion

app = typer.Typer(
    help="Remove old versions of a module.",
    invoke_without_command=True,
)


def _confirm_removal(name: str, version: ModuleVersion, path: Path) -> bool:
    """Prompt user to confirm removing one version directory."""
    return typer.confirm(f"Remove {name} {version} at {path}?", default=False)


@app.callback(invoke_without_command=True)
def version_cleanup(
    ctx: typer.Context,
    name: Annotated[
        str,
        typer.Option(
            "--name",
            "-n",
            help="Exact module name.",
        ),
    ],
    keep: Annotated[
        int | None,
        typer.Option(
            "--keep",
            "-k",
            min=1,
            help="Number of newest versions to keep (default from config, else 1).",
        ),
    ] = None,
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            help="Force provider uninstalls (skip dependency checks).",
        ),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            help="Show what would be removed without making changes.",
        ),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Do not ask before each removal.",
        ),
    ] = False,
) -> None:
    """Remove all but the newest versions of a module.

    Versions are removed through PSResourceGet or PowerShellGet when one of
    them tracks the version; untracked version directories are deleted
    directly. Failures are reported per version and do not stop the run.

    Examples:
        psmodctl version-cleanup --name Pester --dry-run
        psmodctl version-cleanup --name Az.Accounts --keep 2 --yes
    """
    if ctx.invoked_subcommand is not None:
        return

    config = get_config(ctx)
    keep_count = keep if keep is not None else config.keep_versions
    roots = get_module_roots(config.module_paths)

    reconciler = VersionReconciler(
        get_resolver(config),
        roots,
        dry_run=dry_run,
        confirm=None if (yes or dry_run) else _confirm_removal,
    )

    try:
        report = reconciler.reconcile(name, keep=keep_count, force=force)
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    kept = {entry.version.text for entry in report.split.keep}
    console.print(
        create_ledger_table(
            list(report.split.keep) + list(report.split.remove),
            keep=kept,
            title=f"{name} Versions",
        )
    )

    if report.nothing_to_remove:
        print_success(f"Nothing to remove: {name} has no more than {keep_count} version(s).")
        return

    console.print(create_removal_table(list(report.results)))
    print_removal_summary(list(report.results))

    if dry_run:
        print_info("\nDry-run mode: No changes were made.")
        return

    remaining = reconciler.snapshot(name)
    console.print(create_ledger_table(remaining, title=f"{name} Versions After Cleanup"))

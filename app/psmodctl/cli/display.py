"""Shared Rich display functions for plans and results.

Provides reusable table builders and summary printers used by the
list, update-scan, update-apply, and version-cleanup commands.
"""

from rich.table import Table

from psmodctl.models.action import RemovalResult, RemovalStatus, UpdateResult
from psmodctl.models.ledger import VersionLedgerEntry
from psmodctl.models.package import PackageRecord, UpdateCandidate
from psmodctl.utils.formatting import console, format_scope, print_success

_REMOVAL_STATUS_MARKUP: dict[RemovalStatus, str] = {
    RemovalStatus.REMOVED: "[success]removed[/success]",
    RemovalStatus.SKIPPED: "[muted]skipped[/muted]",
    RemovalStatus.FAILED: "[error]failed[/error]",
    RemovalStatus.WOULD_REMOVE: "[warning]would remove[/warning]",
}


def _new_table(title: str) -> Table:
    return Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )


def create_inventory_table(records: list[PackageRecord], title: str = "Installed Modules") -> Table:
    """Create a table of installed modules.

    Args:
        records: Installed module records.
        title: Table title.

    Returns:
        Rich Table with Module, Version, Scope, Repository, and Location columns.
    """
    table = _new_table(title)
    table.add_column("Module", no_wrap=True)
    table.add_column("Version", style="muted")
    table.add_column("Scope", width=8)
    table.add_column("Repository", style="info")
    table.add_column("Location", style="muted", overflow="ellipsis")

    for record in records:
        table.add_row(
            f"[text]{record.name}[/text]",
            str(record.version),
            format_scope(record.scope),
            record.repository or "-",
            record.location or "-",
        )

    return table


def create_candidates_table(candidates: list[UpdateCandidate], preview: bool = False) -> Table:
    """Create a table of available updates.

    Args:
        candidates: Planned update candidates.
        preview: Whether this is a preview (changes table title).

    Returns:
        Rich Table with Module, Installed, Latest, Scope, and Provider columns.
    """
    title = "Available Updates (Preview)" if preview else "Available Updates"
    table = _new_table(title)
    table.add_column("Module", no_wrap=True)
    table.add_column("Installed")
    table.add_column("Latest")
    table.add_column("Scope", width=8)
    table.add_column("Provider", style="muted")

    for candidate in candidates:
        table.add_row(
            f"[text]{candidate.name}[/text]",
            f"[version_old]{candidate.installed_version}[/version_old]",
            f"[version_new]{candidate.latest_version}[/version_new]",
            format_scope(candidate.scope),
            candidate.provider.value,
        )

    return table


def create_update_results_table(results: list[UpdateResult]) -> Table:
    """Create a table of applied updates.

    Args:
        results: Per-candidate update results.

    Returns:
        Rich Table with Status, Module, Version, Cleanup, and Message columns.
    """
    table = _new_table("Update Results")
    table.add_column("Status", width=8, justify="center")
    table.add_column("Module", no_wrap=True)
    table.add_column("Version")
    table.add_column("Cleanup", justify="right")
    table.add_column("Message")

    for result in results:
        status = "[success]OK[/success]" if result.success else "[error]FAIL[/error]"
        removed = sum(1 for r in result.cleanup if r.status == RemovalStatus.REMOVED)
        cleanup = f"{removed}/{len(result.cleanup)}" if result.cleanup else "-"
        table.add_row(
            status,
            result.candidate.name,
            f"{result.candidate.installed_version} -> {result.candidate.latest_version}",
            cleanup,
            f"[muted]{result.error or ''}[/muted]",
        )

    return table


def create_removal_table(results: list[RemovalResult], title: str = "Removal Results") -> Table:
    """Create a table of removal results.

    Args:
        results: Per-path removal results.
        title: Table title.

    Returns:
        Rich Table with Status, Version, Method, Path, and Message columns.
    """
    table = _new_table(title)
    table.add_column("Status", justify="center")
    table.add_column("Version", no_wrap=True)
    table.add_column("Method", style="muted")
    table.add_column("Path", overflow="ellipsis")
    table.add_column("Message")

    for result in results:
        table.add_row(
            _REMOVAL_STATUS_MARKUP[result.status],
            str(result.version),
            result.method.value,
            str(result.path) if result.path else "-",
            f"[muted]{result.message or ''}[/muted]",
        )

    return table


def create_ledger_table(
    entries: list[VersionLedgerEntry],
    keep: set[str] | None = None,
    title: str = "Installed Versions",
) -> Table:
    """Create a table of a module's on-disk versions.

    Args:
        entries: Ledger entries, ascending by version.
        keep: Version texts being kept (marked in the Action column).
        title: Table title.

    Returns:
        Rich Table with Version, PSResourceGet, PowerShellGet, Paths, and
        (when ``keep`` is given) Action columns.
    """
    table = _new_table(title)
    table.add_column("Version", no_wrap=True)
    table.add_column("PSResourceGet", justify="center")
    table.add_column("PowerShellGet", justify="center")
    table.add_column("Paths", style="muted")
    if keep is not None:
        table.add_column("Action", justify="center")

    for entry in entries:
        row = [
            str(entry.version),
            "[success]yes[/success]" if entry.tracked_by_psresourceget else "[muted]no[/muted]",
            "[success]yes[/success]" if entry.tracked_by_powershellget else "[muted]no[/muted]",
            "\n".join(str(p) for p in entry.paths),
        ]
        if keep is not None:
            row.append(
                "[success]keep[/success]"
                if entry.version.text in keep
                else "[removed]remove[/removed]"
            )
        table.add_row(*row)

    return table


def print_update_summary(results: list[UpdateResult]) -> None:
    """Print a summary of update results."""
    success_count = sum(1 for r in results if r.success)
    fail_count = sum(1 for r in results if r.failed)

    if fail_count == 0:
        print_success(f"All {success_count} update(s) applied successfully.")
    else:
        console.print(
            f"\n[success]{success_count} updated[/success], [error]{fail_count} failed[/error]"
        )


def print_removal_summary(results: list[RemovalResult]) -> None:
    """Print a summary of removal results."""
    counts: dict[RemovalStatus, int] = {}
    for result in results:
        counts[result.status] = counts.get(result.status, 0) + 1

    parts: list[str] = []
    if counts.get(RemovalStatus.REMOVED):
        parts.append(f"[success]{counts[RemovalStatus.REMOVED]} removed[/success]")
    if counts.get(RemovalStatus.WOULD_REMOVE):
        parts.append(f"[warning]{counts[RemovalStatus.WOULD_REMOVE]} would be removed[/warning]")
    if counts.get(RemovalStatus.SKIPPED):
        parts.append(f"[muted]{counts[RemovalStatus.SKIPPED]} skipped[/muted]")
    if counts.get(RemovalStatus.FAILED):
        parts.append(f"[error]{counts[RemovalStatus.FAILED]} failed[/error]")

    if parts:
        console.print(f"\nSummary: {', '.join(parts)}")

"""Plan building shared by the update-scan and update-apply commands."""

from collections.abc import Sequence

from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn

from psmodctl.cli.types import ProviderChoice, ScopeChoice, to_provider_kind, to_scope
from psmodctl.core.inventory import InventoryResolver
from psmodctl.core.planner import UpdatePlanner
from psmodctl.models.plan import ProgressEvent, UpdatePlan
from psmodctl.providers.base import Provider
from psmodctl.utils.formatting import err_console, print_info, print_warning


def build_plan(
    resolver: InventoryResolver,
    provider_choice: ProviderChoice,
    scope_choice: ScopeChoice,
    include_prerelease: bool,
    names: Sequence[str] | None,
    quiet: bool = False,
) -> tuple[Provider, UpdatePlan]:
    """List installed modules and look up their latest versions.

    Lookups are shown with a progress bar on stderr unless ``quiet``.

    Args:
        resolver: Inventory resolver for this invocation.
        provider_choice: Provider option value.
        scope_choice: Scope filter option value.
        include_prerelease: Consider prerelease catalog versions.
        names: Optional wildcard name filters.
        quiet: Suppress progress output.

    Returns:
        Tuple of (resolved provider, update plan).
    """
    kind = to_provider_kind(provider_choice)
    provider = resolver.resolve(kind)
    installed = resolver.list_installed(kind, names)

    if not installed:
        if not provider.is_available():
            print_warning(f"{provider.module_name} is not available; nothing to check.")
        else:
            print_info("No installed modules matched.")
        return provider, UpdatePlan(candidates=())

    planner = UpdatePlanner(resolver)
    with Progress(
        TextColumn("[info]{task.description}[/]"),
        BarColumn(),
        TaskProgressColumn(),
        console=err_console,
        transient=True,
        disable=quiet,
    ) as progress:
        task = progress.add_task("Checking for updates", total=len(installed))

        def on_progress(event: ProgressEvent) -> None:
            progress.update(
                task,
                completed=event.index,
                total=event.total,
                description=f"Checking {event.name}",
            )

        plan = planner.plan(
            installed,
            provider,
            include_prerelease=include_prerelease,
            scope_filter=to_scope(scope_choice),
            on_progress=on_progress,
        )

    for failure in plan.failures:
        print_warning(f"Could not check {failure.name}: {failure.error}")

    return provider, plan

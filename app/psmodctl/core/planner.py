"""Update planning and execution.

Cross-references installed modules against the newest catalog versions
from the same provider, gates the resulting plan by process elevation,
and applies it one candidate at a time with best-effort semantics.
"""

import logging
from collections.abc import Callable, Sequence
from pathlib import Path

from psmodctl.core.inventory import InventoryResolver
from psmodctl.core.removal import RemovalAttempt, run_removal_chain
from psmodctl.models.action import (
    UNINSTALL_METHODS,
    RemovalResult,
    UpdateResult,
    UpdateStatus,
)
from psmodctl.models.package import PackageRecord, ProviderKind, Scope, UpdateCandidate
from psmodctl.models.plan import LookupFailure, PrivilegeGate, ProgressEvent, UpdatePlan
from psmodctl.providers.base import Provider
from psmodctl.providers.errors import ProviderError
from psmodctl.utils.version import ModuleVersion

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[ProgressEvent], None]


def gate_by_privilege(candidates: Sequence[UpdateCandidate], elevated: bool) -> PrivilegeGate:
    """Drop System-scope candidates when the process is not elevated.

    Args:
        candidates: Planned candidates.
        elevated: Whether the current process has administrative privilege.

    Returns:
        PrivilegeGate with the candidates that may be applied and those
        dropped for lack of elevation.
    """
    if elevated:
        return PrivilegeGate(allowed=tuple(candidates))

    allowed = tuple(c for c in candidates if c.scope != Scope.SYSTEM)
    dropped = tuple(c for c in candidates if c.scope == Scope.SYSTEM)
    if dropped:
        logger.warning(
            "Skipping %d System-scope update(s) (%s): administrative privilege required",
            len(dropped),
            ", ".join(c.name for c in dropped),
        )
    return PrivilegeGate(allowed=allowed, dropped=dropped)


class UpdatePlanner:
    """Plans and applies module updates.

    All provider calls are made sequentially, in input order.
    """

    def __init__(self, resolver: InventoryResolver) -> None:
        """Initialize the planner.

        Args:
            resolver: Resolver giving access to both providers.
        """
        self._resolver = resolver

    def plan(
        self,
        installed: Sequence[PackageRecord],
        provider: Provider,
        include_prerelease: bool = False,
        scope_filter: Scope | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> UpdatePlan:
        """Build an update plan.

        Records outside ``scope_filter`` are not looked up. A failing
        lookup is logged, recorded as a LookupFailure, and skipped.

        Args:
            installed: Installed modules, all reported by ``provider``.
            provider: Provider used for the "find latest" lookups.
            include_prerelease: Consider prerelease catalog versions.
            scope_filter: Only plan modules in this scope (None = all).
            on_progress: Called once per looked-up module.

        Returns:
            UpdatePlan with strict-upgrade candidates and lookup failures.

        Raises:
            ValueError: If a record came from a different provider.
        """
        for record in installed:
            if record.provider != provider.kind:
                msg = (
                    f"{record.name} was listed by {record.provider.value}, "
                    f"not {provider.kind.value}"
                )
                raise ValueError(msg)

        in_scope = [r for r in installed if scope_filter is None or r.scope == scope_filter]
        total = len(in_scope)
        candidates: list[UpdateCandidate] = []
        failures: list[LookupFailure] = []

        for index, record in enumerate(in_scope, start=1):
            if on_progress is not None:
                on_progress(ProgressEvent(index=index, total=total, name=record.name))

            try:
                latest = provider.find_latest(record.name, include_prerelease=include_prerelease)
            except ProviderError as e:
                logger.warning("Could not look up latest version of %s: %s", record.name, e)
                failures.append(LookupFailure(name=record.name, error=str(e)))
                continue

            if latest is None:
                logger.debug("%s not found in any repository", record.name)
                continue

            if latest > record.version:
                candidates.append(UpdateCandidate(record=record, latest_version=latest))
            else:
                logger.debug("%s %s is up to date", record.name, record.version)

        return UpdatePlan(candidates=tuple(candidates), failures=tuple(failures), checked=total)

    def execute(
        self,
        candidates: Sequence[UpdateCandidate],
        preview: bool = False,
        cleanup_old: bool = False,
    ) -> list[UpdateResult]:
        """Apply candidates one at a time.

        A failed install is recorded and does not stop the remaining
        candidates. In preview mode no provider is called at all.

        Args:
            candidates: Candidates to apply (already privilege-gated).
            preview: Only report; make no changes.
            cleanup_old: After a successful update, remove older versions.

        Returns:
            One UpdateResult per candidate (empty in preview mode).
        """
        if preview:
            logger.info("Preview mode: %d update(s) not applied", len(candidates))
            return []

        results: list[UpdateResult] = []
        for candidate in candidates:
            provider = self._resolver.provider(candidate.provider)
            try:
                provider.install(candidate.name, candidate.latest_version, candidate.target_scope)
            except ProviderError as e:
                logger.warning("Updating %s failed: %s", candidate.name, e)
                results.append(
                    UpdateResult(candidate=candidate, status=UpdateStatus.FAILED, error=str(e))
                )
                continue

            cleanup: tuple[RemovalResult, ...] = ()
            if cleanup_old:
                cleanup = self.cleanup_after_update(candidate)
            results.append(
                UpdateResult(candidate=candidate, status=UpdateStatus.UPDATED, cleanup=cleanup)
            )

        return results

    def cleanup_after_update(self, candidate: UpdateCandidate) -> tuple[RemovalResult, ...]:
        """Remove every installed version of an updated module but the newest.

        Versions are re-listed through the provider that applied the update.
        Each old version is uninstalled via that provider, falling back to
        the other provider's uninstall on failure.

        Args:
            candidate: The successfully applied candidate.

        Returns:
            One RemovalResult per old version.
        """
        provider = self._resolver.provider(candidate.provider)
        try:
            versions = provider.list_installed_versions(candidate.name)
        except ProviderError as e:
            logger.warning("Could not list versions of %s for cleanup: %s", candidate.name, e)
            return ()

        if len(versions) <= 1:
            return ()

        ordered = sorted(versions, key=lambda r: r.version)
        results: list[RemovalResult] = []
        for record in ordered[:-1]:
            attempts = [
                self._uninstall_attempt(candidate.provider, record.name, record.version),
                self._uninstall_attempt(candidate.provider.other, record.name, record.version),
            ]
            path = Path(record.location) if record.location else None
            results.append(run_removal_chain(record.name, record.version, path, attempts))
        return tuple(results)

    def _uninstall_attempt(
        self,
        kind: ProviderKind,
        name: str,
        version: ModuleVersion,
    ) -> RemovalAttempt:
        """Build a removal attempt that uninstalls via one provider."""
        provider = self._resolver.provider(kind)

        def action() -> None:
            provider.uninstall(name, version)

        return (UNINSTALL_METHODS[kind], action)

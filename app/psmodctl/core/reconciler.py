"""Version reconciliation (old version cleanup).

Builds the ledger of on-disk versions of one module, cross-referenced
with what each provider still tracks, and removes all but the newest
``keep`` versions.

Removal order for each old version directory:

1. PSResourceGet uninstall, if PSResourceGet tracks the version
2. PowerShellGet uninstall, if PowerShellGet tracks the version
3. Direct deletion of the directory tree, if no provider tracks it

Attempts stop at the first success. Every (version, path) pair yields
exactly one RemovalResult; individual failures never raise.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from psmodctl.core.inventory import InventoryResolver
from psmodctl.core.module_paths import list_disk_versions
from psmodctl.core.removal import RemovalAttempt, run_removal_chain
from psmodctl.filesystem.operator import FilesystemOperator
from psmodctl.models.action import (
    UNINSTALL_METHODS,
    RemovalMethod,
    RemovalResult,
    RemovalStatus,
)
from psmodctl.models.ledger import LedgerSplit, VersionLedgerEntry, split_ledger
from psmodctl.models.package import ProviderKind
from psmodctl.providers.errors import ProviderError
from psmodctl.utils.version import ModuleVersion

logger = logging.getLogger(__name__)

ConfirmCallback = Callable[[str, ModuleVersion, Path], bool]

# Providers in removal priority order
PROVIDER_PRIORITY: tuple[ProviderKind, ...] = (
    ProviderKind.PSRESOURCEGET,
    ProviderKind.POWERSHELLGET,
)


class ModuleNotFoundOnDiskError(ValueError):
    """Raised when a module has no version directories under any root."""


@dataclass(frozen=True, slots=True)
class ReconcileReport:
    """Outcome of a version cleanup run.

    Attributes:
        name: Module name.
        split: Ledger split into kept and removable versions.
        results: One RemovalResult per (version, path) pair removed.
        dry_run: Whether no changes were made.
    """

    name: str
    split: LedgerSplit
    results: tuple[RemovalResult, ...]
    dry_run: bool = False

    @property
    def nothing_to_remove(self) -> bool:
        """Check if the ledger had nothing beyond the kept versions."""
        return self.split.nothing_to_remove

    @property
    def failed(self) -> list[RemovalResult]:
        """Return the failed removals."""
        return [r for r in self.results if r.failed]


class VersionReconciler:
    """Removes superseded on-disk versions of a module."""

    def __init__(
        self,
        resolver: InventoryResolver,
        roots: list[Path],
        dry_run: bool = False,
        confirm: ConfirmCallback | None = None,
    ) -> None:
        """Initialize the reconciler.

        Args:
            resolver: Resolver giving access to both providers.
            roots: Module roots searched for version directories.
            dry_run: Report what would be removed without removing anything.
            confirm: Called before each removal; returning False skips it.
        """
        self._resolver = resolver
        self._roots = roots
        self._dry_run = dry_run
        self._confirm = confirm
        self._fs = FilesystemOperator(roots, dry_run=dry_run)

    @property
    def dry_run(self) -> bool:
        """Check if reconciler is in dry-run mode."""
        return self._dry_run

    def build_ledger(self, name: str) -> list[VersionLedgerEntry]:
        """Build the version ledger for a module.

        Args:
            name: Module name.

        Returns:
            Ledger entries sorted ascending by version (empty if the module
            has no version directories on disk).
        """
        disk = list_disk_versions(name, self._roots)
        tracked_by_kind = {kind: self._tracked_versions(kind, name) for kind in PROVIDER_PRIORITY}

        entries: list[VersionLedgerEntry] = []
        for version, paths in disk.items():
            tracked = {
                kind: versions[version]
                for kind, versions in tracked_by_kind.items()
                if version in versions
            }
            entries.append(VersionLedgerEntry(version=version, paths=tuple(paths), tracked=tracked))

        entries.sort(key=lambda e: e.version)
        return entries

    def snapshot(self, name: str) -> list[VersionLedgerEntry]:
        """Re-query the ledger, e.g. to show what remains after cleanup."""
        return self.build_ledger(name)

    def reconcile(self, name: str, keep: int = 1, force: bool = False) -> ReconcileReport:
        """Remove all but the newest ``keep`` versions of a module.

        Args:
            name: Exact module name.
            keep: Number of newest versions to retain (>= 1).
            force: Passed through to provider uninstall calls.

        Returns:
            ReconcileReport with the ledger split and per-path results.

        Raises:
            ValueError: If keep is less than 1.
            ModuleNotFoundOnDiskError: If no version of the module is on disk.
        """
        if keep < 1:
            msg = f"keep must be at least 1, got {keep}"
            raise ValueError(msg)

        ledger = self.build_ledger(name)
        if not ledger:
            roots = ", ".join(str(r) for r in self._roots) or "(none)"
            msg = f"Module '{name}' was not found under any module root: {roots}"
            raise ModuleNotFoundOnDiskError(msg)

        split = split_ledger(ledger, keep)
        if split.nothing_to_remove:
            logger.info("%s: nothing to remove (%d version(s), keep %d)", name, len(ledger), keep)
            return ReconcileReport(name=name, split=split, results=(), dry_run=self._dry_run)

        results: list[RemovalResult] = []
        for entry in split.remove:
            for path in entry.paths:
                results.append(self._remove(name, entry, path, force))

        return ReconcileReport(
            name=name,
            split=split,
            results=tuple(results),
            dry_run=self._dry_run,
        )

    def _tracked_versions(
        self,
        kind: ProviderKind,
        name: str,
    ) -> dict[ModuleVersion, ModuleVersion]:
        """Map on-disk release versions to the versions a provider reports.

        An unavailable or failing provider tracks nothing.
        """
        provider = self._resolver.provider(kind)
        if not provider.is_available():
            return {}

        try:
            records = provider.list_installed_versions(name)
        except ProviderError as e:
            logger.warning("Could not list %s versions via %s: %s", name, kind.value, e)
            return {}

        return {record.version.release: record.version for record in records}

    def _remove(
        self,
        name: str,
        entry: VersionLedgerEntry,
        path: Path,
        force: bool,
    ) -> RemovalResult:
        """Remove one version directory, honoring dry-run and confirmation."""
        attempts = self._attempts(name, entry, path, force)
        planned = attempts[0][0]

        if not path.exists():
            return RemovalResult(
                name=name,
                version=entry.version,
                path=path,
                method=planned,
                status=RemovalStatus.SKIPPED,
                message="No longer on disk",
            )

        if self._dry_run:
            return RemovalResult(
                name=name,
                version=entry.version,
                path=path,
                method=planned,
                status=RemovalStatus.WOULD_REMOVE,
            )

        if self._confirm is not None and not self._confirm(name, entry.version, path):
            return RemovalResult(
                name=name,
                version=entry.version,
                path=path,
                method=planned,
                status=RemovalStatus.SKIPPED,
                message="Declined",
            )

        return run_removal_chain(name, entry.version, path, attempts)

    def _attempts(
        self,
        name: str,
        entry: VersionLedgerEntry,
        path: Path,
        force: bool,
    ) -> list[RemovalAttempt]:
        """Build the ordered removal attempts for one version directory."""
        attempts: list[RemovalAttempt] = []

        for kind in PROVIDER_PRIORITY:
            reported = entry.tracked.get(kind)
            if reported is None:
                continue
            provider = self._resolver.provider(kind)

            def uninstall(provider=provider, reported=reported) -> None:
                provider.uninstall(name, reported, force=force)

            attempts.append((UNINSTALL_METHODS[kind], uninstall))

        if not attempts:

            def delete() -> None:
                result = self._fs.delete_tree(path)
                if not result.success:
                    raise OSError(result.error)

            attempts.append((RemovalMethod.FILESYSTEM_DELETE, delete))

        return attempts

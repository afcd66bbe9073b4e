"""Version ledger models.

The ledger is the complete set of on-disk versions of one module,
annotated with which provider(s) still track each version.
"""

from dataclasses import dataclass, field
from pathlib import Path

from psmodctl.models.package import ProviderKind
from psmodctl.utils.version import ModuleVersion


@dataclass(frozen=True, slots=True)
class VersionLedgerEntry:
    """One on-disk version of a named module.

    Attributes:
        version: The version found on disk.
        paths: Directories containing this exact version (a version may be
            installed under several module roots).
        tracked: Providers whose inventory lists this version, mapped to the
            version as that provider reports it (prerelease labels included).
    """

    version: ModuleVersion
    paths: tuple[Path, ...]
    tracked: dict[ProviderKind, ModuleVersion] = field(default_factory=lambda: {})

    @property
    def tracked_by_psresourceget(self) -> bool:
        """Check if PSResourceGet still tracks this version."""
        return ProviderKind.PSRESOURCEGET in self.tracked

    @property
    def tracked_by_powershellget(self) -> bool:
        """Check if PowerShellGet still tracks this version."""
        return ProviderKind.POWERSHELLGET in self.tracked

    @property
    def is_untracked(self) -> bool:
        """Check if no provider tracks this version."""
        return not self.tracked


@dataclass(frozen=True, slots=True)
class LedgerSplit:
    """Ledger divided into versions to keep and versions to remove.

    Attributes:
        keep: Most recent entries, ascending by version.
        remove: Older entries, ascending by version.
    """

    keep: tuple[VersionLedgerEntry, ...]
    remove: tuple[VersionLedgerEntry, ...]

    @property
    def nothing_to_remove(self) -> bool:
        """Check if the split is a no-op."""
        return not self.remove


def split_ledger(entries: list[VersionLedgerEntry], keep: int) -> LedgerSplit:
    """Split a ledger into the newest ``keep`` entries and the rest.

    Args:
        entries: Ledger entries in any order.
        keep: Number of most recent versions to retain (>= 1).

    Returns:
        LedgerSplit with both halves sorted ascending by version.

    Raises:
        ValueError: If keep is less than 1.
    """
    if keep < 1:
        msg = f"keep must be at least 1, got {keep}"
        raise ValueError(msg)

    ordered = sorted(entries, key=lambda e: e.version)
    if keep >= len(ordered):
        return LedgerSplit(keep=tuple(ordered), remove=())

    cut = len(ordered) - keep
    return LedgerSplit(keep=tuple(ordered[cut:]), remove=tuple(ordered[:cut]))

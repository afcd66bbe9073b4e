"""Action result models for update and removal operations.

This module defines the structured per-item outcomes produced by the
update planner and version reconciler, so callers can inspect results
instead of relying on printed warnings.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from psmodctl.models.package import ProviderKind, UpdateCandidate
from psmodctl.utils.version import ModuleVersion


class RemovalMethod(Enum):
    """How a module version was (or would be) removed."""

    PSRESOURCEGET_UNINSTALL = "psresourceget-uninstall"
    POWERSHELLGET_UNINSTALL = "powershellget-uninstall"
    FILESYSTEM_DELETE = "filesystem-delete"


UNINSTALL_METHODS: dict[ProviderKind, RemovalMethod] = {
    ProviderKind.PSRESOURCEGET: RemovalMethod.PSRESOURCEGET_UNINSTALL,
    ProviderKind.POWERSHELLGET: RemovalMethod.POWERSHELLGET_UNINSTALL,
}


class RemovalStatus(Enum):
    """Outcome of a single removal attempt.

    Attributes:
        REMOVED: The version was removed.
        SKIPPED: Nothing was done (path already gone or removal declined).
        FAILED: Every applicable removal method failed.
        WOULD_REMOVE: Dry-run; the version would have been removed.
    """

    REMOVED = "removed"
    SKIPPED = "skipped"
    FAILED = "failed"
    WOULD_REMOVE = "would-remove"


@dataclass(frozen=True, slots=True)
class RemovalResult:
    """Outcome of attempting to remove one version at one path.

    Attributes:
        name: Module name.
        version: Version that was targeted.
        path: Directory holding the version, if known.
        method: Last removal method attempted (or planned, for dry-run).
        status: Outcome of the attempt.
        message: Optional detail, e.g. the captured failure message.
    """

    name: str
    version: ModuleVersion
    path: Path | None
    method: RemovalMethod
    status: RemovalStatus
    message: str | None = None

    @property
    def failed(self) -> bool:
        """Check if the removal failed."""
        return self.status == RemovalStatus.FAILED


class UpdateStatus(Enum):
    """Outcome of applying one update candidate."""

    UPDATED = "updated"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class UpdateResult:
    """Result of installing the latest version for one candidate.

    Attributes:
        candidate: The candidate that was applied.
        status: Whether the install succeeded.
        error: Failure message if the install failed.
        cleanup: Removal results from post-update cleanup, if requested.
    """

    candidate: UpdateCandidate
    status: UpdateStatus
    error: str | None = None
    cleanup: tuple[RemovalResult, ...] = ()

    @property
    def success(self) -> bool:
        """Check if the update was applied."""
        return self.status == UpdateStatus.UPDATED

    @property
    def failed(self) -> bool:
        """Check if the update failed."""
        return not self.success

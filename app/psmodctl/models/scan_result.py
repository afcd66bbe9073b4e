"""Update scan result model for JSON export.

This module defines the data structure for exporting update scan
results to JSON with proper metadata.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from psmodctl.models.package import PackageRecord, UpdateCandidate
from psmodctl.models.plan import UpdatePlan


@dataclass(frozen=True, slots=True)
class ScanMetadata:
    """Metadata for an update scan.

    Attributes:
        timestamp: ISO format timestamp when the scan was performed.
        hostname: Name of the machine that was scanned.
        psmodctl_version: Version of psmodctl that performed the scan.
        provider: Provider used for the scan.
        scope: Scope filter applied to candidates.
        include_prerelease: Whether prerelease versions were considered.
    """

    timestamp: str
    hostname: str
    psmodctl_version: str
    provider: str
    scope: str
    include_prerelease: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "timestamp": self.timestamp,
            "hostname": self.hostname,
            "psmodctl_version": self.psmodctl_version,
            "provider": self.provider,
            "scope": self.scope,
            "include_prerelease": self.include_prerelease,
        }


@dataclass(frozen=True, slots=True)
class UpdateScanResult:
    """Complete update scan result for export.

    Attributes:
        metadata: Scan metadata including timestamp and hostname.
        plan: The computed update plan.
        summary: Candidate counts by scope plus totals.
    """

    metadata: ScanMetadata
    plan: UpdatePlan
    summary: dict[str, int] = field(default_factory=lambda: {})

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "metadata": self.metadata.to_dict(),
            "candidates": [candidate_to_dict(c) for c in self.plan.candidates],
            "failures": [{"name": f.name, "error": f.error} for f in self.plan.failures],
            "summary": self.summary,
        }

    @classmethod
    def create(
        cls,
        plan: UpdatePlan,
        provider: str,
        scope: str,
        include_prerelease: bool = False,
    ) -> UpdateScanResult:
        """Create an UpdateScanResult with auto-generated metadata.

        Args:
            plan: The computed update plan.
            provider: Name of the provider that was queried.
            scope: Scope filter that was applied.
            include_prerelease: Whether prerelease versions were considered.

        Returns:
            UpdateScanResult with populated metadata and summary.
        """
        import socket

        from psmodctl import __version__

        summary: dict[str, int] = {}
        for candidate in plan.candidates:
            scope_key = candidate.scope.value
            summary[scope_key] = summary.get(scope_key, 0) + 1

        summary["checked"] = plan.checked
        summary["candidates"] = len(plan.candidates)
        summary["failed_lookups"] = len(plan.failures)

        metadata = ScanMetadata(
            timestamp=datetime.now(UTC).isoformat(),
            hostname=socket.gethostname(),
            psmodctl_version=__version__,
            provider=provider,
            scope=scope,
            include_prerelease=include_prerelease,
        )

        return cls(metadata=metadata, plan=plan, summary=summary)


def record_to_dict(record: PackageRecord) -> dict[str, Any]:
    """Convert a PackageRecord to a dictionary.

    Args:
        record: The installed module record to convert.

    Returns:
        Dictionary representation of the record.
    """
    return {
        "name": record.name,
        "version": str(record.version),
        "location": record.location,
        "scope": record.scope.value,
        "provider": record.provider.value,
        "repository": record.repository,
    }


def candidate_to_dict(candidate: UpdateCandidate) -> dict[str, Any]:
    """Convert an UpdateCandidate to a dictionary."""
    return {
        "name": candidate.name,
        "installed_version": str(candidate.installed_version),
        "latest_version": str(candidate.latest_version),
        "scope": candidate.scope.value,
        "target_scope": candidate.target_scope,
        "provider": candidate.provider.value,
        "location": candidate.record.location,
    }

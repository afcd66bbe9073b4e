"""Data models for psmodctl.

This module exports the core data structures used throughout the application.
"""

from psmodctl.models.action import (
    RemovalMethod,
    RemovalResult,
    RemovalStatus,
    UpdateResult,
    UpdateStatus,
)
from psmodctl.models.ledger import LedgerSplit, VersionLedgerEntry, split_ledger
from psmodctl.models.package import (
    PackageRecord,
    ProviderKind,
    Scope,
    UpdateCandidate,
    install_scope_for,
)
from psmodctl.models.plan import LookupFailure, PrivilegeGate, ProgressEvent, UpdatePlan
from psmodctl.models.scan_result import ScanMetadata, UpdateScanResult

__all__ = [
    "LedgerSplit",
    "LookupFailure",
    "PackageRecord",
    "PrivilegeGate",
    "ProgressEvent",
    "ProviderKind",
    "RemovalMethod",
    "RemovalResult",
    "RemovalStatus",
    "ScanMetadata",
    "Scope",
    "UpdateCandidate",
    "UpdatePlan",
    "UpdateResult",
    "UpdateScanResult",
    "UpdateStatus",
    "VersionLedgerEntry",
    "install_scope_for",
    "split_ledger",
]

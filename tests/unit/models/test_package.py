"""Unit tests for package models.

Tests for PackageRecord, UpdateCandidate, and scope mapping.
"""

import pytest

from psmodctl.models.package import (
    PackageRecord,
    ProviderKind,
    Scope,
    UpdateCandidate,
    install_scope_for,
)
from psmodctl.utils.version import parse_version


def _record(version: str = "1.0.0", scope: Scope = Scope.USER) -> PackageRecord:
    return PackageRecord(
        name="Foo",
        version=parse_version(version),
        location="C:/Users/alice/Documents/PowerShell/Modules/Foo",
        scope=scope,
        provider=ProviderKind.PSRESOURCEGET,
    )


class TestProviderKind:
    """Tests for ProviderKind enum."""

    def test_other(self) -> None:
        """other returns the competing provider."""
        assert ProviderKind.PSRESOURCEGET.other is ProviderKind.POWERSHELLGET
        assert ProviderKind.POWERSHELLGET.other is ProviderKind.PSRESOURCEGET


class TestInstallScope:
    """Tests for install_scope_for function."""

    @pytest.mark.parametrize(
        ("scope", "expected"),
        [
            (Scope.USER, "CurrentUser"),
            (Scope.SYSTEM, "AllUsers"),
            (Scope.UNKNOWN, "CurrentUser"),
        ],
    )
    def test_mapping(self, scope: Scope, expected: str) -> None:
        """Scopes map to provider install scope names."""
        assert install_scope_for(scope) == expected


class TestPackageRecord:
    """Tests for PackageRecord dataclass."""

    def test_create(self) -> None:
        """Records keep their fields."""
        record = _record()
        assert record.name == "Foo"
        assert record.version.text == "1.0.0"
        assert record.repository is None

    def test_empty_name_raises(self) -> None:
        """An empty module name is rejected."""
        with pytest.raises(ValueError, match="name cannot be empty"):
            PackageRecord(
                name="",
                version=parse_version("1.0.0"),
                location="",
                scope=Scope.UNKNOWN,
                provider=ProviderKind.POWERSHELLGET,
            )

    def test_frozen(self) -> None:
        """Records are immutable."""
        record = _record()
        with pytest.raises(AttributeError):
            record.name = "Bar"  # type: ignore[misc]


class TestUpdateCandidate:
    """Tests for UpdateCandidate dataclass."""

    def test_strict_upgrade(self) -> None:
        """A newer latest version yields a candidate."""
        candidate = UpdateCandidate(record=_record("1.0.0"), latest_version=parse_version("1.2.0"))
        assert candidate.name == "Foo"
        assert candidate.installed_version.text == "1.0.0"
        assert candidate.latest_version.text == "1.2.0"
        assert candidate.provider == ProviderKind.PSRESOURCEGET
        assert candidate.scope == Scope.USER
        assert candidate.target_scope == "CurrentUser"

    @pytest.mark.parametrize("latest", ["1.0.0", "0.9.0", "1.0"])
    def test_not_newer_raises(self, latest: str) -> None:
        """Equal or older latest versions are rejected."""
        with pytest.raises(ValueError, match="not newer"):
            UpdateCandidate(record=_record("1.0.0"), latest_version=parse_version(latest))

    def test_system_target_scope(self) -> None:
        """System candidates install to AllUsers."""
        candidate = UpdateCandidate(
            record=_record("1.0.0", Scope.SYSTEM), latest_version=parse_version("2.0.0")
        )
        assert candidate.target_scope == "AllUsers"

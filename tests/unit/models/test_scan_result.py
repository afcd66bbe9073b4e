"""Unit tests for the update scan result model."""

from psmodctl import __version__
from psmodctl.models.package import PackageRecord, ProviderKind, Scope, UpdateCandidate
from psmodctl.models.plan import LookupFailure, ProgressEvent, UpdatePlan
from psmodctl.models.scan_result import UpdateScanResult, record_to_dict
from psmodctl.utils.version import parse_version


def _candidate(name: str, scope: Scope) -> UpdateCandidate:
    record = PackageRecord(
        name=name,
        version=parse_version("1.0.0"),
        location=f"/modules/{name}",
        scope=scope,
        provider=ProviderKind.POWERSHELLGET,
        repository="PSGallery",
    )
    return UpdateCandidate(record=record, latest_version=parse_version("1.1.0"))


class TestUpdateScanResult:
    """Tests for UpdateScanResult.create and to_dict."""

    def test_create_summary(self) -> None:
        """Summary counts candidates per scope plus totals."""
        plan = UpdatePlan(
            candidates=(
                _candidate("A", Scope.USER),
                _candidate("B", Scope.USER),
                _candidate("C", Scope.SYSTEM),
            ),
            failures=(LookupFailure(name="D", error="timeout"),),
            checked=4,
        )

        result = UpdateScanResult.create(plan, provider="powershellget", scope="all")

        assert result.summary == {
            "user": 2,
            "system": 1,
            "checked": 4,
            "candidates": 3,
            "failed_lookups": 1,
        }
        assert result.metadata.psmodctl_version == __version__
        assert result.metadata.provider == "powershellget"

    def test_to_dict(self) -> None:
        """to_dict serializes candidates and failures."""
        plan = UpdatePlan(
            candidates=(_candidate("A", Scope.SYSTEM),),
            failures=(LookupFailure(name="D", error="timeout"),),
            checked=2,
        )
        data = UpdateScanResult.create(plan, "powershellget", "system", True).to_dict()

        assert data["metadata"]["include_prerelease"] is True
        assert data["metadata"]["scope"] == "system"
        assert data["candidates"] == [
            {
                "name": "A",
                "installed_version": "1.0.0",
                "latest_version": "1.1.0",
                "scope": "system",
                "target_scope": "AllUsers",
                "provider": "powershellget",
                "location": "/modules/A",
            }
        ]
        assert data["failures"] == [{"name": "D", "error": "timeout"}]


class TestRecordToDict:
    """Tests for record_to_dict function."""

    def test_fields(self) -> None:
        """All record fields are serialized with plain values."""
        record = _candidate("A", Scope.USER).record
        assert record_to_dict(record) == {
            "name": "A",
            "version": "1.0.0",
            "location": "/modules/A",
            "scope": "user",
            "provider": "powershellget",
            "repository": "PSGallery",
        }


class TestProgressEvent:
    """Tests for ProgressEvent percent."""

    def test_percent(self) -> None:
        """percent is the running completion percentage."""
        assert ProgressEvent(index=1, total=3, name="A").percent == 33
        assert ProgressEvent(index=3, total=3, name="C").percent == 100
        assert ProgressEvent(index=0, total=0, name="").percent == 100

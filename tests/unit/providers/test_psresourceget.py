"""Unit tests for PSResourceGetProvider."""

import json
from unittest.mock import MagicMock, patch

import pytest

from psmodctl.models.package import ProviderKind, Scope
from psmodctl.providers.errors import ProviderError, ProviderUnavailableError
from psmodctl.providers.psresourceget import PSResourceGetProvider
from psmodctl.providers.pwsh import PwshRunner
from psmodctl.utils.shell import CommandResult
from psmodctl.utils.version import parse_version


class TestPSResourceGetProvider:
    """Tests for PSResourceGetProvider class."""

    @pytest.fixture
    def runner(self) -> MagicMock:
        """Mock runner reporting the module as installed."""
        mock = MagicMock(spec=PwshRunner)
        mock.has_module.return_value = True
        mock.run.return_value = CommandResult(stdout="", stderr="", returncode=0)
        return mock

    @pytest.fixture
    def provider(self, runner: MagicMock) -> PSResourceGetProvider:
        """Create provider over the mock runner."""
        return PSResourceGetProvider(runner)

    def test_kind(self, provider: PSResourceGetProvider) -> None:
        """Provider reports its kind and module."""
        assert provider.kind == ProviderKind.PSRESOURCEGET
        assert provider.module_name == "Microsoft.PowerShell.PSResourceGet"

    def test_availability_memoized(
        self, provider: PSResourceGetProvider, runner: MagicMock
    ) -> None:
        """The module check runs once."""
        assert provider.is_available() is True
        assert provider.is_available() is True
        runner.has_module.assert_called_once_with("Microsoft.PowerShell.PSResourceGet")

    def test_list_installed_newest_per_name(
        self,
        provider: PSResourceGetProvider,
        runner: MagicMock,
        psresourceget_installed_json: str,
    ) -> None:
        """Installed versions are reduced to the newest per module."""
        runner.run_json.return_value = json.loads(psresourceget_installed_json)

        records = {r.name: r for r in provider.list_installed()}

        assert sorted(records) == ["Az.Accounts", "PSReadLine", "Pester"]
        assert records["Pester"].version.text == "5.6.1"
        assert records["Pester"].scope == Scope.USER
        assert records["Pester"].repository == "PSGallery"
        assert records["Az.Accounts"].scope == Scope.SYSTEM
        assert records["PSReadLine"].version.text == "2.4.0-beta1"
        assert records["PSReadLine"].scope == Scope.USER
        assert all(r.provider == ProviderKind.PSRESOURCEGET for r in records.values())
        assert "Get-InstalledPSResource" in runner.run_json.call_args[0][0]

    def test_malformed_entries_skipped(
        self, provider: PSResourceGetProvider, runner: MagicMock
    ) -> None:
        """Entries without name or with bad versions are dropped."""
        runner.run_json.return_value = [
            {"Name": "", "Version": "1.0.0"},
            {"Name": "Bad", "Version": "x.y"},
            {"Name": "Good", "Version": "1.0.0", "InstalledLocation": "D:/Mods"},
        ]

        records = provider.list_installed()

        assert [r.name for r in records] == ["Good"]
        assert records[0].scope == Scope.UNKNOWN

    def test_list_installed_versions(
        self, provider: PSResourceGetProvider, runner: MagicMock
    ) -> None:
        """All versions of one module are returned."""
        runner.run_json.return_value = [
            {"Name": "Bar", "Version": "1.0.0"},
            {"Name": "Bar", "Version": "1.1.0"},
        ]

        records = provider.list_installed_versions("Bar")

        assert [r.version.text for r in records] == ["1.0.0", "1.1.0"]
        assert "-Name 'Bar'" in runner.run_json.call_args[0][0]

    def test_find_latest(self, provider: PSResourceGetProvider, runner: MagicMock) -> None:
        """The newest catalog version is returned."""
        runner.run_json.return_value = [
            {"Name": "Az", "Version": "11.2.0"},
            {"Name": "Az", "Version": "11.10.0"},
        ]

        assert provider.find_latest("Az") == parse_version("11.10.0")
        pipeline = runner.run_json.call_args[0][0]
        assert "Find-PSResource -Name 'Az' -Type Module" in pipeline
        assert "-Prerelease" not in pipeline

    def test_find_latest_prerelease(
        self, provider: PSResourceGetProvider, runner: MagicMock
    ) -> None:
        """Prerelease lookups pass -Prerelease."""
        runner.run_json.return_value = [{"Name": "Az", "Version": "12.0.0", "Prerelease": "rc1"}]

        latest = provider.find_latest("Az", include_prerelease=True)

        assert latest is not None and latest.text == "12.0.0-rc1"
        assert "-Prerelease" in runner.run_json.call_args[0][0]

    def test_find_latest_not_found(
        self, provider: PSResourceGetProvider, runner: MagicMock
    ) -> None:
        """No catalog entries means None."""
        runner.run_json.return_value = []
        assert provider.find_latest("Nope") is None

    def test_find_latest_unknown_module_in_pwsh(self) -> None:
        """The not-found error Find-PSResource raises maps to None."""
        provider = PSResourceGetProvider(PwshRunner())
        stderr = (
            "Find-PSResource: Package(s) 'LocalOnly' could not be found "
            "in any registered repositories."
        )
        with (
            patch.object(PwshRunner, "has_module", return_value=True),
            patch("psmodctl.providers.pwsh.run_command") as mock_run,
        ):
            mock_run.return_value = CommandResult(stdout="", stderr=stderr, returncode=1)
            assert provider.find_latest("LocalOnly") is None

        script = mock_run.call_args[0][0][-1]
        assert "Find-PSResource -Name 'LocalOnly' -Type Module" in script

    def test_find_latest_other_errors_propagate(self) -> None:
        """Lookup failures other than not-found still raise."""
        provider = PSResourceGetProvider(PwshRunner())
        with (
            patch.object(PwshRunner, "has_module", return_value=True),
            patch("psmodctl.providers.pwsh.run_command") as mock_run,
        ):
            mock_run.return_value = CommandResult(
                stdout="", stderr="Unable to resolve package source", returncode=1
            )
            with pytest.raises(ProviderError, match="Unable to resolve package source"):
                provider.find_latest("Az")

    def test_install(self, provider: PSResourceGetProvider, runner: MagicMock) -> None:
        """install pins the version and scope."""
        provider.install("Pester", parse_version("5.6.1"), "AllUsers")

        script = runner.run.call_args[0][0]
        assert script.startswith("Install-PSResource -Name 'Pester' -Version '5.6.1'")
        assert "-Scope AllUsers" in script
        assert "-TrustRepository" in script
        assert "-Prerelease" not in script
        assert runner.run.call_args.kwargs["mutating"] is True

    def test_install_untrusted_prerelease(self, runner: MagicMock) -> None:
        """Prereleases pass -Prerelease; trust can be disabled."""
        provider = PSResourceGetProvider(runner, trust_repository=False)

        provider.install("Az", parse_version("12.0.0-rc1"), "CurrentUser")

        script = runner.run.call_args[0][0]
        assert "-Version '12.0.0-rc1'" in script
        assert "-Prerelease" in script
        assert "-TrustRepository" not in script

    def test_uninstall_force(self, provider: PSResourceGetProvider, runner: MagicMock) -> None:
        """force skips the dependency check."""
        provider.uninstall("Bar", parse_version("1.0.0"), force=True)

        script = runner.run.call_args[0][0]
        assert script == "Uninstall-PSResource -Name 'Bar' -Version '1.0.0' -SkipDependencyCheck"

    def test_uninstall_error_propagates(
        self, provider: PSResourceGetProvider, runner: MagicMock
    ) -> None:
        """Runner errors propagate to the caller."""
        runner.run.side_effect = ProviderError("in use")
        with pytest.raises(ProviderError, match="in use"):
            provider.uninstall("Bar", parse_version("1.0.0"))

    def test_unavailable(self, provider: PSResourceGetProvider, runner: MagicMock) -> None:
        """Calls on an unavailable provider raise ProviderUnavailableError."""
        runner.has_module.return_value = False
        with pytest.raises(ProviderUnavailableError):
            provider.list_installed()
        runner.run_json.assert_not_called()

"""PowerShellGet provider implementation.

Drives the legacy PowerShellGet cmdlets (Get-InstalledModule,
Find-Module, Install-Module, Uninstall-Module).
"""

import logging

from psmodctl.models.package import PackageRecord, ProviderKind
from psmodctl.providers.base import Provider
from psmodctl.providers.pwsh import ps_quote
from psmodctl.utils.version import ModuleVersion

logger = logging.getLogger(__name__)

# PowerShellGet folds the prerelease label into the Version string.
_SELECT = (
    "Select-Object Name, @{ n = 'Version'; e = { \"$($_.Version)\" } }, "
    "InstalledLocation, Repository"
)


class PowerShellGetProvider(Provider):
    """Provider backed by PowerShellGet."""

    @property
    def kind(self) -> ProviderKind:
        """Return POWERSHELLGET as the provider kind."""
        return ProviderKind.POWERSHELLGET

    @property
    def module_name(self) -> str:
        """Return the PowerShellGet module name."""
        return "PowerShellGet"

    def list_installed(self) -> list[PackageRecord]:
        """List installed modules (Get-InstalledModule reports the newest only)."""
        self._require_available()
        items = self._runner.run_json("Get-InstalledModule | " + _SELECT)
        return self._to_records(items)

    def list_installed_versions(self, name: str) -> list[PackageRecord]:
        """List every installed version of a module, prereleases included."""
        self._require_available()
        items = self._runner.run_json(
            f"Get-InstalledModule -Name {ps_quote(name)} -AllVersions -AllowPrerelease | " + _SELECT
        )
        return self._to_records(items)

    def find_latest(self, name: str, include_prerelease: bool = False) -> ModuleVersion | None:
        """Find the newest version of a module in the registered repositories."""
        self._require_available()
        pipeline = f"Find-Module -Name {ps_quote(name)}"
        if include_prerelease:
            pipeline += " -AllowPrerelease"
        items = self._find_catalog(f"{pipeline} | " + _SELECT)
        return self._parse_latest(items)

    def install(self, name: str, version: ModuleVersion, scope: str) -> None:
        """Install an exact module version with Install-Module."""
        self._require_available()
        script = (
            f"Install-Module -Name {ps_quote(name)} -RequiredVersion {ps_quote(version.text)} "
            f"-Scope {scope} -AllowClobber"
        )
        if version.is_prerelease:
            script += " -AllowPrerelease"
        if self._trust_repository:
            script += " -Force"

        logger.info("Installing %s %s (%s) via PowerShellGet", name, version, scope)
        self._runner.run(script, mutating=True)

    def uninstall(self, name: str, version: ModuleVersion, force: bool = False) -> None:
        """Uninstall an exact module version with Uninstall-Module."""
        self._require_available()
        script = (
            f"Uninstall-Module -Name {ps_quote(name)} -RequiredVersion {ps_quote(version.text)}"
        )
        if version.is_prerelease:
            script += " -AllowPrerelease"
        if force:
            script += " -Force"

        logger.info("Uninstalling %s %s via PowerShellGet", name, version)
        self._runner.run(script, mutating=True)

"""PSResourceGet provider implementation.

Drives the Microsoft.PowerShell.PSResourceGet cmdlets
(Get-InstalledPSResource, Find-PSResource, Install-PSResource,
Uninstall-PSResource).
"""

import logging

from psmodctl.models.package import PackageRecord, ProviderKind
from psmodctl.providers.base import Provider, newest_per_name
from psmodctl.providers.pwsh import ps_quote
from psmodctl.utils.version import ModuleVersion

logger = logging.getLogger(__name__)

# PSResourceGet reports Version and Prerelease separately; Version is a
# System.Version, so it is stringified before serialization.
_SELECT = (
    "ForEach-Object { [pscustomobject]@{ "
    "Name = $_.Name; Version = \"$($_.Version)\"; Prerelease = $_.Prerelease; "
    "InstalledLocation = $_.InstalledLocation; Repository = $_.Repository } }"
)


class PSResourceGetProvider(Provider):
    """Provider backed by Microsoft.PowerShell.PSResourceGet."""

    @property
    def kind(self) -> ProviderKind:
        """Return PSRESOURCEGET as the provider kind."""
        return ProviderKind.PSRESOURCEGET

    @property
    def module_name(self) -> str:
        """Return the PSResourceGet module name."""
        return "Microsoft.PowerShell.PSResourceGet"

    def list_installed(self) -> list[PackageRecord]:
        """List installed modules (newest version per name).

        Get-InstalledPSResource returns every installed version, so the
        result is reduced to the newest one per module.
        """
        self._require_available()
        items = self._runner.run_json(
            "Get-InstalledPSResource | Where-Object { \"$($_.Type)\" -ne 'Script' } | " + _SELECT
        )
        return newest_per_name(self._to_records(items))

    def list_installed_versions(self, name: str) -> list[PackageRecord]:
        """List every installed version of a module."""
        self._require_available()
        items = self._runner.run_json(
            f"Get-InstalledPSResource -Name {ps_quote(name)} | " + _SELECT
        )
        return self._to_records(items)

    def find_latest(self, name: str, include_prerelease: bool = False) -> ModuleVersion | None:
        """Find the newest version of a module in the registered repositories."""
        self._require_available()
        pipeline = f"Find-PSResource -Name {ps_quote(name)} -Type Module"
        if include_prerelease:
            pipeline += " -Prerelease"
        items = self._find_catalog(f"{pipeline} | " + _SELECT)
        return self._parse_latest(items)

    def install(self, name: str, version: ModuleVersion, scope: str) -> None:
        """Install an exact module version with Install-PSResource."""
        self._require_available()
        script = (
            f"Install-PSResource -Name {ps_quote(name)} -Version {ps_quote(version.text)} "
            f"-Scope {scope} -AcceptLicense -Quiet"
        )
        if version.is_prerelease:
            script += " -Prerelease"
        if self._trust_repository:
            script += " -TrustRepository"

        logger.info("Installing %s %s (%s) via PSResourceGet", name, version, scope)
        self._runner.run(script, mutating=True)

    def uninstall(self, name: str, version: ModuleVersion, force: bool = False) -> None:
        """Uninstall an exact module version with Uninstall-PSResource.

        ``force`` maps to -SkipDependencyCheck, PSResourceGet's equivalent
        of forcing removal.
        """
        self._require_available()
        script = f"Uninstall-PSResource -Name {ps_quote(name)} -Version {ps_quote(version.text)}"
        if version.is_prerelease:
            script += " -Prerelease"
        if force:
            script += " -SkipDependencyCheck"

        logger.info("Uninstalling %s %s via PSResourceGet", name, version)
        self._runner.run(script, mutating=True)

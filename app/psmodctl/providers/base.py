"""Abstract base class for package providers.

This module defines the Provider interface implemented by both
PowerShell package providers. Each implementation normalizes its native
result shape into PackageRecord.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

from psmodctl.core.scope import PathPatternClassifier, ScopeClassifier
from psmodctl.models.package import PackageRecord, ProviderKind
from psmodctl.providers.errors import ProviderError, ProviderUnavailableError
from psmodctl.providers.pwsh import PwshRunner
from psmodctl.utils.version import InvalidModuleVersionError, ModuleVersion, parse_version

logger = logging.getLogger(__name__)

# Find-Module and Find-PSResource report an unknown module as an error
_NOT_FOUND_MARKERS = ("no match was found", "could not be found")


class Provider(ABC):
    """Abstract base class for all package providers.

    Providers list installed modules, look up the latest catalog version,
    and install or uninstall exact versions.

    Example:
        >>> provider = PSResourceGetProvider(PwshRunner())
        >>> if provider.is_available():
        ...     for record in provider.list_installed():
        ...         print(f"{record.name}: {record.version}")
    """

    def __init__(
        self,
        runner: PwshRunner,
        classifier: ScopeClassifier | None = None,
        trust_repository: bool = True,
    ) -> None:
        """Initialize the provider.

        Args:
            runner: PowerShell runner used for every call.
            classifier: Scope classifier for install locations.
            trust_repository: Skip repository trust prompts when installing.
        """
        self._runner = runner
        self._classifier: ScopeClassifier = classifier or PathPatternClassifier()
        self._trust_repository = trust_repository
        self._available: bool | None = None

    @property
    @abstractmethod
    def kind(self) -> ProviderKind:
        """Return which provider this is."""

    @property
    @abstractmethod
    def module_name(self) -> str:
        """Return the PowerShell module implementing this provider."""

    @abstractmethod
    def list_installed(self) -> list[PackageRecord]:
        """List installed modules, one record (the newest) per name.

        Raises:
            ProviderError: If the provider query fails.
        """

    @abstractmethod
    def list_installed_versions(self, name: str) -> list[PackageRecord]:
        """List every installed version of one module.

        Raises:
            ProviderError: If the provider query fails.
        """

    @abstractmethod
    def find_latest(self, name: str, include_prerelease: bool = False) -> ModuleVersion | None:
        """Find the newest catalog version of a module.

        Returns:
            The newest version, or None if the catalog has no such module.

        Raises:
            ProviderError: If the lookup fails.
        """

    @abstractmethod
    def install(self, name: str, version: ModuleVersion, scope: str) -> None:
        """Install an exact version of a module.

        Args:
            name: Module name.
            version: Version to install.
            scope: Install scope ("CurrentUser" or "AllUsers").

        Raises:
            ProviderError: If the install fails.
        """

    @abstractmethod
    def uninstall(self, name: str, version: ModuleVersion, force: bool = False) -> None:
        """Uninstall an exact version of a module.

        Raises:
            ProviderError: If the uninstall fails.
        """

    def is_available(self) -> bool:
        """Check if this provider can be used on the host.

        The result is memoized for the lifetime of the instance.
        """
        if self._available is None:
            self._available = self._runner.has_module(self.module_name)
            logger.debug("%s available: %s", self.kind.value, self._available)
        return self._available

    def _require_available(self) -> None:
        """Raise ProviderUnavailableError unless the provider is usable."""
        if not self.is_available():
            msg = f"{self.module_name} is not available on this system"
            raise ProviderUnavailableError(msg)

    def _to_record(self, item: dict[str, Any]) -> PackageRecord | None:
        """Normalize one provider object into a PackageRecord.

        Returns:
            PackageRecord, or None if the object is malformed.
        """
        name = str(item.get("Name") or "").strip()
        raw_version = str(item.get("Version") or "").strip()
        prerelease = item.get("Prerelease") or None
        location = str(item.get("InstalledLocation") or "")
        repository = item.get("Repository") or None

        if not name or not raw_version:
            logger.debug("Skipping %s entry without name/version: %r", self.kind.value, item)
            return None

        try:
            version = parse_version(raw_version, prerelease)
        except InvalidModuleVersionError as e:
            logger.warning("Skipping %s %s: %s", self.kind.value, name, e)
            return None

        return PackageRecord(
            name=name,
            version=version,
            location=location,
            scope=self._classifier.classify(location),
            provider=self.kind,
            repository=repository,
        )

    def _to_records(self, items: list[dict[str, Any]]) -> list[PackageRecord]:
        """Normalize a list of provider objects, dropping malformed ones."""
        records: list[PackageRecord] = []
        for item in items:
            record = self._to_record(item)
            if record is not None:
                records.append(record)
        return records

    def _find_catalog(self, pipeline: str) -> list[dict[str, Any]]:
        """Run a catalog lookup, treating "no such module" as an empty result.

        Raises:
            ProviderError: If the lookup fails for any other reason.
        """
        try:
            return self._runner.run_json(pipeline)
        except ProviderUnavailableError:
            raise
        except ProviderError as e:
            text = str(e).lower()
            if any(marker in text for marker in _NOT_FOUND_MARKERS):
                logger.debug("%s catalog has no match: %s", self.kind.value, e)
                return []
            raise

    def _parse_latest(self, items: list[dict[str, Any]]) -> ModuleVersion | None:
        """Pick the newest version out of catalog lookup results."""
        versions: list[ModuleVersion] = []
        for item in items:
            raw = str(item.get("Version") or "").strip()
            if not raw:
                continue
            try:
                versions.append(parse_version(raw, item.get("Prerelease") or None))
            except InvalidModuleVersionError as e:
                logger.debug("Ignoring catalog version for %s: %s", item.get("Name"), e)
        return max(versions) if versions else None


def newest_per_name(records: list[PackageRecord]) -> list[PackageRecord]:
    """Reduce records to the newest version per module name (case-insensitive)."""
    newest: dict[str, PackageRecord] = {}
    for record in records:
        key = record.name.lower()
        current = newest.get(key)
        if current is None or record.version > current.version:
            newest[key] = record
    return list(newest.values())

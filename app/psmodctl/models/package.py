"""Package models for module inventory and update planning.

This module defines the core data structures for representing installed
PowerShell modules and the updates available for them.
"""

from dataclasses import dataclass, field
from enum import Enum

from psmodctl.utils.version import ModuleVersion


class ProviderKind(Enum):
    """Enumeration of supported package providers.

    PSRESOURCEGET is the preferred provider; POWERSHELLGET is the legacy
    one used when PSResourceGet is not installed.
    """

    PSRESOURCEGET = "psresourceget"
    POWERSHELLGET = "powershellget"

    @property
    def other(self) -> "ProviderKind":
        """Return the competing provider."""
        if self is ProviderKind.PSRESOURCEGET:
            return ProviderKind.POWERSHELLGET
        return ProviderKind.PSRESOURCEGET


class Scope(Enum):
    """Installation scope inferred from the install location.

    Attributes:
        USER: Visible to the current user only.
        SYSTEM: Visible to all users on the host.
        UNKNOWN: Location did not match any known pattern.
    """

    USER = "user"
    SYSTEM = "system"
    UNKNOWN = "unknown"


# Install scope names understood by both providers' install commands.
_INSTALL_SCOPES: dict[Scope, str] = {
    Scope.USER: "CurrentUser",
    Scope.SYSTEM: "AllUsers",
    Scope.UNKNOWN: "CurrentUser",
}


def install_scope_for(scope: Scope) -> str:
    """Map an inferred scope to the provider install scope name."""
    return _INSTALL_SCOPES[scope]


@dataclass(frozen=True, slots=True)
class PackageRecord:
    """Represents an installed module discovered during an inventory scan.

    Attributes:
        name: Module name (e.g., 'Pester', 'Az.Accounts')
        version: Installed version
        location: Installation path reported by the provider
        scope: Scope inferred from the installation path
        provider: Provider that reported this module
        repository: Repository the module was installed from (if known)
    """

    name: str
    version: ModuleVersion
    location: str
    scope: Scope
    provider: ProviderKind
    repository: str | None = field(default=None)

    def __post_init__(self) -> None:
        """Validate record data after initialization."""
        if not self.name:
            msg = "Module name cannot be empty"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class UpdateCandidate:
    """An installed module for which a newer version is available.

    Attributes:
        record: The installed module.
        latest_version: Newest version found by the same provider.
    """

    record: PackageRecord
    latest_version: ModuleVersion

    def __post_init__(self) -> None:
        """Enforce that the candidate is a strict upgrade."""
        if not self.latest_version > self.record.version:
            msg = (
                f"Latest version {self.latest_version} of {self.record.name} "
                f"is not newer than installed {self.record.version}"
            )
            raise ValueError(msg)

    @property
    def name(self) -> str:
        """Return the module name."""
        return self.record.name

    @property
    def installed_version(self) -> ModuleVersion:
        """Return the currently installed version."""
        return self.record.version

    @property
    def provider(self) -> ProviderKind:
        """Return the provider supplying both installed and latest data."""
        return self.record.provider

    @property
    def scope(self) -> Scope:
        """Return the inferred scope of the installed module."""
        return self.record.scope

    @property
    def target_scope(self) -> str:
        """Return the install scope used when applying the update."""
        return install_scope_for(self.record.scope)

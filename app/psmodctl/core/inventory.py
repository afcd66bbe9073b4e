"""Inventory resolution across the two package providers.

Chooses a provider (PSResourceGet when present, else PowerShellGet) and
lists the installed modules it knows about, normalized to PackageRecord.
"""

import fnmatch
import logging
from collections.abc import Mapping, Sequence

from psmodctl.models.package import PackageRecord, ProviderKind
from psmodctl.providers.base import Provider
from psmodctl.providers.errors import ProviderError

logger = logging.getLogger(__name__)


def matches_any(name: str, patterns: Sequence[str] | None) -> bool:
    """Check a module name against wildcard patterns, ignoring case.

    Args:
        name: Module name.
        patterns: fnmatch-style patterns. None or empty matches everything.

    Returns:
        True if any pattern matches.
    """
    if not patterns:
        return True
    lowered = name.lower()
    return any(fnmatch.fnmatchcase(lowered, pattern.lower()) for pattern in patterns)


class InventoryResolver:
    """Resolves the active provider and lists installed modules.

    The "auto" choice is resolved at most once per resolver instance; a
    new resolver is built for every command invocation.
    """

    def __init__(self, providers: Mapping[ProviderKind, Provider]) -> None:
        """Initialize the resolver.

        Args:
            providers: One provider instance per ProviderKind.
        """
        missing = set(ProviderKind) - set(providers)
        if missing:
            names = ", ".join(sorted(k.value for k in missing))
            msg = f"Missing provider implementations: {names}"
            raise ValueError(msg)
        self._providers = dict(providers)
        self._auto: Provider | None = None

    def provider(self, kind: ProviderKind) -> Provider:
        """Return the provider instance for a kind."""
        return self._providers[kind]

    @property
    def providers(self) -> dict[ProviderKind, Provider]:
        """Return all provider instances keyed by kind."""
        return dict(self._providers)

    def resolve(self, preferred: ProviderKind | None = None) -> Provider:
        """Resolve the provider to use.

        Args:
            preferred: Explicit provider, or None for automatic selection.

        Returns:
            The explicit provider, or PSResourceGet if it is available on
            the host, else PowerShellGet.
        """
        if preferred is not None:
            return self._providers[preferred]

        if self._auto is None:
            primary = self._providers[ProviderKind.PSRESOURCEGET]
            if primary.is_available():
                self._auto = primary
            else:
                self._auto = self._providers[ProviderKind.POWERSHELLGET]
            logger.debug("Auto-selected provider: %s", self._auto.kind.value)
        return self._auto

    def list_installed(
        self,
        preferred: ProviderKind | None = None,
        name_filter: Sequence[str] | None = None,
    ) -> list[PackageRecord]:
        """List installed modules from the resolved provider.

        An unavailable or failing provider yields an empty list and a
        warning; callers treat empty as "nothing to do".

        Args:
            preferred: Explicit provider, or None for automatic selection.
            name_filter: Optional wildcard patterns; any match keeps a record.

        Returns:
            Matching records sorted by name (case-insensitive).
        """
        provider = self.resolve(preferred)

        if not provider.is_available():
            logger.warning("%s is not available; no modules listed", provider.module_name)
            return []

        try:
            records = provider.list_installed()
        except ProviderError as e:
            logger.warning("Listing installed modules via %s failed: %s", provider.kind.value, e)
            return []

        matched = [r for r in records if matches_any(r.name, name_filter)]
        matched.sort(key=lambda r: r.name.lower())
        return matched

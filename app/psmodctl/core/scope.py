"""Installation scope classification.

Scope is inferred from the install location with path heuristics. The
heuristic lives behind the ScopeClassifier protocol so it can be swapped
without touching inventory or planning code.
"""

from typing import Protocol

from psmodctl.models.package import Scope

# Markers are matched case-insensitively against the path with "/" separators.
SYSTEM_MARKERS: tuple[str, ...] = (
    "/program files/",
    "/program files (x86)/",
    "/programdata/",
    "/windows/system32/",
    "/usr/local/share/powershell/",
    "/opt/microsoft/powershell/",
    "/usr/share/",
    "/usr/local/microsoft/powershell/",
)

USER_MARKERS: tuple[str, ...] = (
    "/users/",
    "/home/",
    "/documents/",
    "/.local/share/powershell/",
)


class ScopeClassifier(Protocol):
    """Strategy mapping an install location to a Scope."""

    def classify(self, location: str) -> Scope: ...


def _normalize(location: str) -> str:
    """Lower-case and use forward slashes, with a trailing separator."""
    path = location.replace("\\", "/").lower()
    if not path.startswith("/"):
        path = "/" + path
    return path.rstrip("/") + "/"


class PathPatternClassifier:
    """Classify scope by looking for well-known directory markers.

    System markers win over user markers, so a path like
    ``/home/x/.local/share/powershell`` is User but
    ``C:\\Program Files\\PowerShell\\Modules`` is System. Paths matching
    neither are classified as ``unknown_scope``.
    """

    def __init__(
        self,
        system_markers: tuple[str, ...] = SYSTEM_MARKERS,
        user_markers: tuple[str, ...] = USER_MARKERS,
        unknown_scope: Scope = Scope.UNKNOWN,
    ) -> None:
        self._system_markers = system_markers
        self._user_markers = user_markers
        self._unknown_scope = unknown_scope

    def classify(self, location: str) -> Scope:
        """Classify an install location.

        Args:
            location: Installation path reported by a provider.

        Returns:
            Scope.SYSTEM, Scope.USER, or the configured unknown scope.
        """
        if not location:
            return self._unknown_scope

        path = _normalize(location)
        if any(marker in path for marker in self._system_markers):
            return Scope.SYSTEM
        if any(marker in path for marker in self._user_markers):
            return Scope.USER
        return self._unknown_scope

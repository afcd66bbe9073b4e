"""Update plan models."""

from dataclasses import dataclass

from psmodctl.models.package import UpdateCandidate


@dataclass(frozen=True, slots=True)
class LookupFailure:
    """A "find latest" lookup that failed for one module.

    Attributes:
        name: Module whose lookup failed.
        error: Captured error message.
    """

    name: str
    error: str


@dataclass(frozen=True, slots=True)
class UpdatePlan:
    """Result of cross-referencing installed modules against the catalog.

    Attributes:
        candidates: Modules with a strictly newer version available.
        failures: Lookups that failed and were skipped.
        checked: Number of installed modules that were looked up.
    """

    candidates: tuple[UpdateCandidate, ...]
    failures: tuple[LookupFailure, ...] = ()
    checked: int = 0

    @property
    def is_empty(self) -> bool:
        """Check if the plan contains no candidates."""
        return not self.candidates


@dataclass(frozen=True, slots=True)
class PrivilegeGate:
    """Candidates split by whether the current process may apply them.

    Attributes:
        allowed: Candidates that can be applied.
        dropped: System-scope candidates dropped for lack of elevation.
    """

    allowed: tuple[UpdateCandidate, ...]
    dropped: tuple[UpdateCandidate, ...] = ()


@dataclass(frozen=True, slots=True)
class ProgressEvent:
    """Progress of a sequential catalog lookup.

    Attributes:
        index: 1-based position of the module being looked up.
        total: Number of modules to look up.
        name: Module being looked up.
    """

    index: int
    total: int
    name: str

    @property
    def percent(self) -> int:
        """Return the running completion percentage."""
        if self.total <= 0:
            return 100
        return int(self.index * 100 / self.total)

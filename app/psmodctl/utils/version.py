"""Module version parsing and ordering.

PowerShell module versions are numeric (``1.2.3`` or ``1.2.3.4``) with an
optional prerelease label (``2.0.0-preview3``). PSResourceGet reports the
label separately from the numeric part, so both forms are accepted here.

The numeric part is compared with :class:`packaging.version.Version`.
Prerelease labels follow SemVer 2.0 precedence, the way the PowerShell
repositories order them: identifiers are split on ``.``, numeric
identifiers compare as numbers and sort before alphanumeric ones, and a
release sorts after any of its prereleases. The original text is kept
because provider commands expect the version exactly as the provider
reported it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import total_ordering

from packaging.version import InvalidVersion, Version

_NUMERIC = re.compile(r"^[0-9]+(\.[0-9]+)*$")
_LABEL = re.compile(r"^[0-9A-Za-z-]+(\.[0-9A-Za-z-]+)*$")


class InvalidModuleVersionError(ValueError):
    """Raised when a version string cannot be interpreted."""


def _identifier_key(identifier: str) -> tuple[int, int, str]:
    # Numeric identifiers sort before alphanumeric ones; labels are
    # compared case-insensitively like the NuGet feeds do.
    if identifier.isdigit():
        return (0, int(identifier), "")
    return (1, 0, identifier.lower())


@total_ordering
@dataclass(frozen=True, slots=True, eq=False)
class ModuleVersion:
    """A module version with SemVer ordering and its original spelling.

    Attributes:
        text: Version exactly as reported (e.g. "2.0.0-preview3").
        value: Parsed numeric release used for comparisons.
        prerelease: Dot-separated prerelease identifiers, empty for a release.
    """

    text: str
    value: Version = field(repr=False)
    prerelease: tuple[str, ...] = field(default=(), repr=False)

    def __str__(self) -> str:
        return self.text

    def _key(self) -> tuple[Version, int, tuple[tuple[int, int, str], ...]]:
        labels = tuple(_identifier_key(part) for part in self.prerelease)
        return (self.value, 0 if self.prerelease else 1, labels)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ModuleVersion):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: ModuleVersion) -> bool:
        if not isinstance(other, ModuleVersion):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    @property
    def is_prerelease(self) -> bool:
        """Check if this version carries a prerelease label."""
        return bool(self.prerelease)

    @property
    def release(self) -> ModuleVersion:
        """Return the numeric release without any prerelease label.

        Module folders on disk are named after the release only, so a
        prerelease such as 2.0.0-preview3 lives in a "2.0.0" directory.
        """
        base = re.split(r"[-+]", self.text, maxsplit=1)[0]
        return ModuleVersion(text=base, value=self.value)


def parse_version(raw: str, prerelease: str | None = None) -> ModuleVersion:
    """Parse a module version.

    Args:
        raw: Version string, e.g. "1.2.0" or "2.0.0-preview3".
        prerelease: Optional prerelease label reported separately
            from the numeric version (e.g. "beta1").

    Returns:
        ModuleVersion supporting SemVer ordering.

    Raises:
        InvalidModuleVersionError: If the string is not a valid version.
    """
    text = (raw or "").strip()
    label = (prerelease or "").strip().lstrip("-")
    if label and "-" not in text:
        text = f"{text}-{label}"

    if not text:
        msg = "Version string cannot be empty"
        raise InvalidModuleVersionError(msg)

    # Build metadata never takes part in ordering.
    core = text.split("+", 1)[0]
    numeric, dash, suffix = core.partition("-")
    if not _NUMERIC.match(numeric) or (dash and not _LABEL.match(suffix)):
        msg = f"Invalid module version: {raw!r}"
        raise InvalidModuleVersionError(msg)

    try:
        value = Version(numeric)
    except InvalidVersion as e:
        msg = f"Invalid module version: {raw!r}"
        raise InvalidModuleVersionError(msg) from e

    identifiers = tuple(suffix.split(".")) if suffix else ()
    return ModuleVersion(text=text, value=value, prerelease=identifiers)

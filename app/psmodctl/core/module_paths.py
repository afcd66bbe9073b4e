"""Module root discovery and on-disk version listing.

PowerShell installs a module version into ``<root>/<Name>/<Version>/``,
where the roots come from the PSModulePath environment variable.
"""

import logging
import os
import sys
from collections.abc import Iterable
from pathlib import Path

from psmodctl.utils.version import InvalidModuleVersionError, ModuleVersion, parse_version

logger = logging.getLogger(__name__)


def default_module_roots() -> list[Path]:
    """Return the platform's conventional module roots.

    Used when PSModulePath is not set in the environment.
    """
    home = Path.home()
    if sys.platform == "win32":
        program_files = Path(os.environ.get("ProgramFiles", r"C:\Program Files"))
        return [
            home / "Documents" / "PowerShell" / "Modules",
            home / "Documents" / "WindowsPowerShell" / "Modules",
            program_files / "PowerShell" / "Modules",
            program_files / "WindowsPowerShell" / "Modules",
        ]
    return [
        home / ".local" / "share" / "powershell" / "Modules",
        Path("/usr/local/share/powershell/Modules"),
        Path("/opt/microsoft/powershell/7/Modules"),
    ]


def get_module_roots(extra: Iterable[str] = ()) -> list[Path]:
    """Collect existing module roots.

    Args:
        extra: Additional roots (e.g. from config), searched first.

    Returns:
        De-duplicated list of existing directories, in search order.
    """
    candidates: list[Path] = [Path(p).expanduser() for p in extra if p]

    env_value = os.environ.get("PSModulePath")
    if env_value:
        candidates.extend(Path(p) for p in env_value.split(os.pathsep) if p.strip())
    else:
        candidates.extend(default_module_roots())

    roots: list[Path] = []
    seen: set[str] = set()
    for path in candidates:
        key = os.path.normcase(str(path))
        if key in seen:
            continue
        seen.add(key)
        if path.is_dir():
            roots.append(path)
        else:
            logger.debug("Skipping missing module root %s", path)
    return roots


def _find_module_dir(root: Path, name: str) -> Path | None:
    """Find the module directory under a root, ignoring name case."""
    exact = root / name
    if exact.is_dir():
        return exact
    lowered = name.lower()
    try:
        for child in root.iterdir():
            if child.is_dir() and child.name.lower() == lowered:
                return child
    except OSError as e:
        logger.debug("Cannot list module root %s: %s", root, e)
    return None


def list_disk_versions(name: str, roots: Iterable[Path]) -> dict[ModuleVersion, list[Path]]:
    """List every on-disk version directory of a module.

    Args:
        name: Module name (matched case-insensitively).
        roots: Module roots to search.

    Returns:
        Mapping of version to the directories that contain it. Directories
        whose names aren't versions are ignored.
    """
    versions: dict[ModuleVersion, list[Path]] = {}

    for root in roots:
        module_dir = _find_module_dir(root, name)
        if module_dir is None:
            continue

        try:
            children = sorted(module_dir.iterdir())
        except OSError as e:
            logger.warning("Cannot list %s: %s", module_dir, e)
            continue

        for child in children:
            if not child.is_dir():
                continue
            try:
                version = parse_version(child.name)
            except InvalidModuleVersionError:
                logger.debug("Ignoring non-version directory %s", child)
                continue
            versions.setdefault(version, []).append(child)

    return versions

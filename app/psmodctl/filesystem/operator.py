"""Filesystem deletion operator.

Deletes module version directories that no provider tracks any more,
with dry-run support and a guard that keeps deletions inside the
module roots.
"""

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FilesystemActionResult:
    """Result of a single directory deletion.

    Attributes:
        path: Path that was operated on.
        success: Whether the operation completed successfully.
        error: Error message if the operation failed, None otherwise.
        dry_run: Whether this was a dry-run (no actual deletion).
    """

    path: Path
    success: bool
    error: str | None = None
    dry_run: bool = False


class FilesystemOperator:
    """Deletes module version directory trees.

    Only paths strictly below one of the allowed roots may be deleted; a
    root itself is never removed.

    Attributes:
        _roots: Resolved module roots deletions are confined to.
        _dry_run: If True, report what would be deleted without deleting.
    """

    def __init__(self, roots: list[Path], dry_run: bool = False) -> None:
        """Initialize the FilesystemOperator.

        Args:
            roots: Module roots deletions are confined to.
            dry_run: If True, report what would be deleted without deleting.
        """
        self._roots = [root.resolve() for root in roots]
        self._dry_run = dry_run

    @property
    def dry_run(self) -> bool:
        """Check if operator is in dry-run mode."""
        return self._dry_run

    def is_allowed(self, path: Path) -> bool:
        """Check if a path lies strictly inside one of the module roots."""
        target = path.resolve()
        return any(target != root and target.is_relative_to(root) for root in self._roots)

    def delete_tree(self, path: Path) -> FilesystemActionResult:
        """Delete a directory tree.

        Args:
            path: Version directory to delete.

        Returns:
            FilesystemActionResult indicating success or failure.
        """
        if not self.is_allowed(path):
            return FilesystemActionResult(
                path=path,
                success=False,
                error=f"Refusing to delete path outside module roots: {path}",
            )

        if not path.exists():
            return FilesystemActionResult(
                path=path,
                success=False,
                error=f"Path does not exist: {path}",
            )

        if self._dry_run:
            logger.info("Dry-run: would delete %s", path)
            return FilesystemActionResult(path=path, success=True, dry_run=True)

        try:
            if path.is_dir() and not path.is_symlink():
                shutil.rmtree(path)
            else:
                path.unlink()
        except OSError as e:
            logger.warning("Failed to delete %s: %s", path, e)
            return FilesystemActionResult(path=path, success=False, error=str(e))

        logger.info("Deleted %s", path)
        return FilesystemActionResult(path=path, success=True)

"""Unit tests for FilesystemOperator."""

from pathlib import Path
from unittest.mock import patch

import pytest

from psmodctl.filesystem.operator import FilesystemOperator


class TestFilesystemOperator:
    """Tests for FilesystemOperator class."""

    @pytest.fixture
    def root(self, tmp_path: Path) -> Path:
        """Module root with one version directory."""
        version_dir = tmp_path / "Modules" / "Bar" / "1.0.0"
        version_dir.mkdir(parents=True)
        (version_dir / "Bar.psm1").write_text("function Get-Bar {}")
        return tmp_path / "Modules"

    def test_delete_tree(self, root: Path) -> None:
        """A version directory is removed with its contents."""
        result = FilesystemOperator([root]).delete_tree(root / "Bar" / "1.0.0")

        assert result.success is True
        assert not (root / "Bar" / "1.0.0").exists()
        assert (root / "Bar").exists()

    def test_dry_run(self, root: Path) -> None:
        """Dry-run reports success without deleting."""
        operator = FilesystemOperator([root], dry_run=True)
        result = operator.delete_tree(root / "Bar" / "1.0.0")

        assert operator.dry_run is True
        assert result.success is True
        assert result.dry_run is True
        assert (root / "Bar" / "1.0.0").exists()

    def test_refuses_outside_roots(self, root: Path, tmp_path: Path) -> None:
        """Paths outside the module roots are never deleted."""
        outside = tmp_path / "elsewhere"
        outside.mkdir()

        result = FilesystemOperator([root]).delete_tree(outside)

        assert result.success is False
        assert "outside module roots" in (result.error or "")
        assert outside.exists()

    def test_refuses_root_itself(self, root: Path) -> None:
        """A module root is not deletable."""
        result = FilesystemOperator([root]).delete_tree(root)
        assert result.success is False
        assert root.exists()

    def test_missing_path(self, root: Path) -> None:
        """A missing path is a failed result."""
        result = FilesystemOperator([root]).delete_tree(root / "Bar" / "9.9.9")
        assert result.success is False
        assert "does not exist" in (result.error or "")

    def test_os_error(self, root: Path) -> None:
        """OS errors are captured in the result."""
        with patch(
            "psmodctl.filesystem.operator.shutil.rmtree",
            side_effect=PermissionError("access denied"),
        ):
            result = FilesystemOperator([root]).delete_tree(root / "Bar" / "1.0.0")

        assert result.success is False
        assert result.error == "access denied"

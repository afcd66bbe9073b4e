"""Filesystem operations on module version directories."""

from psmodctl.filesystem.operator import FilesystemActionResult, FilesystemOperator

__all__ = ["FilesystemActionResult", "FilesystemOperator"]

"""Utility modules for psmodctl.

This module exports commonly used utility functions.
"""

from psmodctl.utils.formatting import (
    console,
    err_console,
    format_scope,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from psmodctl.utils.shell import CommandResult, command_exists, run_command
from psmodctl.utils.version import InvalidModuleVersionError, ModuleVersion, parse_version

__all__ = [
    "CommandResult",
    "InvalidModuleVersionError",
    "ModuleVersion",
    "command_exists",
    "console",
    "err_console",
    "format_scope",
    "parse_version",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "run_command",
]

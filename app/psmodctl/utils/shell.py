"""Subprocess helpers.

Thin wrappers around :mod:`subprocess` used by the provider backends.
"""

import os
import shutil
import subprocess
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Captured outcome of a finished subprocess.

    Attributes:
        stdout: Standard output from the command.
        stderr: Standard error from the command.
        returncode: Exit code of the command.
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """Check if command exited with status 0."""
        return self.returncode == 0

    @property
    def error_text(self) -> str:
        """Return the most useful failure text available."""
        return self.stderr.strip() or self.stdout.strip() or f"exit code {self.returncode}"


def run_command(
    args: list[str],
    *,
    timeout: float | None = 60.0,
    env: dict[str, str] | None = None,
) -> CommandResult:
    """Run a command to completion and capture its output.

    Args:
        args: Command and arguments to execute.
        timeout: Maximum time in seconds to wait for the command.
        env: Extra environment variables merged over the current environment.

    Returns:
        CommandResult with stdout, stderr, and returncode.

    Raises:
        subprocess.TimeoutExpired: If command exceeds timeout.
        FileNotFoundError: If command executable is not found.
    """
    full_env = {**os.environ, **env} if env else None
    completed = subprocess.run(  # nosec: B603
        args,
        capture_output=True,
        text=True,
        check=False,
        timeout=timeout,
        env=full_env,
    )
    return CommandResult(
        stdout=completed.stdout,
        stderr=completed.stderr,
        returncode=completed.returncode,
    )


def command_exists(name: str) -> bool:
    """Check if an executable is reachable on PATH (or is an existing path)."""
    return shutil.which(name) is not None

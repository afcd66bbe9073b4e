"""PowerShell process runner.

Both providers are PowerShell modules, so every provider call is a short
script executed by ``pwsh -NoProfile -NonInteractive -Command``. Results
come back as JSON produced by ConvertTo-Json.
"""

import json
import logging
import subprocess
from typing import Any

from psmodctl.providers.errors import ProviderError, ProviderUnavailableError
from psmodctl.utils.shell import CommandResult, command_exists, run_command

logger = logging.getLogger(__name__)

# Prepended to every script so failures surface as a non-zero exit code
_PREAMBLE = "$ErrorActionPreference = 'Stop'; $ProgressPreference = 'SilentlyContinue'; "

# Keeps every call free of telemetry and update-check side effects
_PWSH_ENV = {"POWERSHELL_TELEMETRY_OPTOUT": "1", "POWERSHELL_UPDATECHECK": "Off"}


def ps_quote(value: str) -> str:
    """Quote a value as a PowerShell single-quoted string literal."""
    return "'" + value.replace("'", "''") + "'"


def to_json_script(pipeline: str) -> str:
    """Wrap a pipeline so its output is always emitted as a JSON array."""
    return f"ConvertTo-Json -InputObject @({pipeline}) -Depth 4 -Compress"


class PwshRunner:
    """Runs PowerShell scripts and parses their JSON output.

    Attributes:
        executable: PowerShell executable name or path.
        lookup_timeout: Timeout for read-only queries, in seconds.
        command_timeout: Timeout for install/uninstall commands, in seconds.
    """

    def __init__(
        self,
        executable: str = "pwsh",
        lookup_timeout: float = 120.0,
        command_timeout: float = 600.0,
    ) -> None:
        self.executable = executable
        self.lookup_timeout = lookup_timeout
        self.command_timeout = command_timeout

    def is_available(self) -> bool:
        """Check if the PowerShell executable can be found."""
        return command_exists(self.executable)

    def has_module(self, module: str) -> bool:
        """Check if a PowerShell module is installed on the host.

        Args:
            module: Module name, e.g. "Microsoft.PowerShell.PSResourceGet".

        Returns:
            True if ``Get-Module -ListAvailable`` finds the module.
        """
        if not self.is_available():
            return False

        script = f"if (Get-Module -ListAvailable -Name {ps_quote(module)}) {{ 'yes' }} else {{ 'no' }}"
        try:
            result = self.run(script)
        except ProviderError as e:
            logger.debug("Module check for %s failed: %s", module, e)
            return False
        return result.stdout.strip().lower() == "yes"

    def run(self, script: str, *, mutating: bool = False) -> CommandResult:
        """Execute a PowerShell script.

        Args:
            script: Script text passed to -Command.
            mutating: Use the longer install/uninstall timeout.

        Returns:
            CommandResult of the successful run.

        Raises:
            ProviderUnavailableError: If the executable cannot be started.
            ProviderError: If the script fails or times out.
        """
        timeout = self.command_timeout if mutating else self.lookup_timeout
        args = [self.executable, "-NoProfile", "-NonInteractive", "-Command", _PREAMBLE + script]

        logger.debug("Running PowerShell: %s", script)
        try:
            result = run_command(args, timeout=timeout, env=_PWSH_ENV)
        except FileNotFoundError as e:
            msg = f"PowerShell executable not found: {self.executable}"
            raise ProviderUnavailableError(msg) from e
        except subprocess.TimeoutExpired as e:
            msg = f"PowerShell command timed out after {timeout:.0f}s"
            raise ProviderError(msg) from e
        except OSError as e:
            msg = f"Failed to start PowerShell: {e}"
            raise ProviderUnavailableError(msg) from e

        if not result.success:
            raise ProviderError(result.error_text)
        return result

    def run_json(self, pipeline: str) -> list[dict[str, Any]]:
        """Run a pipeline and parse its output as a list of objects.

        Args:
            pipeline: PowerShell pipeline producing objects.

        Returns:
            List of JSON objects (empty if the pipeline produced nothing).

        Raises:
            ProviderError: If the script fails or emits invalid JSON.
        """
        result = self.run(to_json_script(pipeline))
        text = result.stdout.strip()
        if not text:
            return []

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            msg = f"Invalid JSON from PowerShell: {e}"
            raise ProviderError(msg) from e

        if isinstance(data, dict):
            data = [data]
        if not isinstance(data, list):
            msg = f"Unexpected PowerShell output type: {type(data).__name__}"
            raise ProviderError(msg)
        return [item for item in data if isinstance(item, dict)]

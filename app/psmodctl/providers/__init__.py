"""Package providers for PowerShell modules.

This module exports the provider interface and its two implementations.
"""

from psmodctl.providers.base import Provider
from psmodctl.providers.errors import ProviderError, ProviderUnavailableError
from psmodctl.providers.powershellget import PowerShellGetProvider
from psmodctl.providers.psresourceget import PSResourceGetProvider
from psmodctl.providers.pwsh import PwshRunner

__all__ = [
    "PSResourceGetProvider",
    "PowerShellGetProvider",
    "Provider",
    "ProviderError",
    "ProviderUnavailableError",
    "PwshRunner",
]

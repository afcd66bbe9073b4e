"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import json
from pathlib import Path

import pytest
from fakes import FakeProvider

from psmodctl.core.inventory import InventoryResolver
from psmodctl.models.package import ProviderKind


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point config lookups at an empty temporary directory."""
    config_home = tmp_path / "xdg-config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.delenv("PSMODCTL_CONFIG", raising=False)
    return config_home / "psmodctl" / "config.toml"


@pytest.fixture
def call_log() -> list[tuple[str, str, str]]:
    """Call log shared by both fake providers."""
    return []


@pytest.fixture
def psresourceget(call_log: list[tuple[str, str, str]]) -> FakeProvider:
    """Fake PSResourceGet provider."""
    return FakeProvider(ProviderKind.PSRESOURCEGET, calls=call_log)


@pytest.fixture
def powershellget(call_log: list[tuple[str, str, str]]) -> FakeProvider:
    """Fake PowerShellGet provider."""
    return FakeProvider(ProviderKind.POWERSHELLGET, calls=call_log)


@pytest.fixture
def resolver(psresourceget: FakeProvider, powershellget: FakeProvider) -> InventoryResolver:
    """Resolver over the two fake providers."""
    return InventoryResolver(
        {
            ProviderKind.PSRESOURCEGET: psresourceget,
            ProviderKind.POWERSHELLGET: powershellget,
        }
    )


@pytest.fixture
def psresourceget_installed_json() -> str:
    """Sample Get-InstalledPSResource output after ConvertTo-Json."""
    return json.dumps(
        [
            {
                "Name": "Pester",
                "Version": "5.5.0",
                "Prerelease": None,
                "InstalledLocation": "C:\\Users\\alice\\Documents\\PowerShell\\Modules",
                "Repository": "PSGallery",
            },
            {
                "Name": "Pester",
                "Version": "5.6.1",
                "Prerelease": None,
                "InstalledLocation": "C:\\Users\\alice\\Documents\\PowerShell\\Modules",
                "Repository": "PSGallery",
            },
            {
                "Name": "Az.Accounts",
                "Version": "2.10.0",
                "Prerelease": "",
                "InstalledLocation": "C:\\Program Files\\PowerShell\\Modules",
                "Repository": "PSGallery",
            },
            {
                "Name": "PSReadLine",
                "Version": "2.4.0",
                "Prerelease": "beta1",
                "InstalledLocation": "/home/alice/.local/share/powershell/Modules",
                "Repository": "PSGallery",
            },
        ]
    )


@pytest.fixture
def powershellget_installed_json() -> str:
    """Sample Get-InstalledModule output after ConvertTo-Json."""
    return json.dumps(
        [
            {
                "Name": "Pester",
                "Version": "5.6.1",
                "InstalledLocation": "C:\\Users\\alice\\Documents\\PowerShell\\Modules\\Pester\\5.6.1",
                "Repository": "PSGallery",
            },
            {
                "Name": "PSScriptAnalyzer",
                "Version": "1.22.0-preview1",
                "InstalledLocation": "/opt/microsoft/powershell/7/Modules/PSScriptAnalyzer/1.22.0",
                "Repository": "PSGallery",
            },
        ]
    )

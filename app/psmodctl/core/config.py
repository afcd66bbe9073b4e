"""Application configuration.

This module provides the configuration model and I/O functions for
psmodctl. Configuration is stored in ~/.config/psmodctl/config.toml and
is optional: a missing file yields the defaults.

Example config.toml::

    provider = "psresourceget"
    keep_versions = 2
    module_paths = ["D:/Modules"]

    [theme]
    success = "#00ff00"
"""

import logging
import tomllib
from pathlib import Path
from typing import Annotated, Literal

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from psmodctl.core.paths import get_config_path
from psmodctl.core.theme import ThemeColors

logger = logging.getLogger(__name__)

ProviderSetting = Literal["auto", "psresourceget", "powershellget"]


class AppConfig(BaseModel):
    """Configuration for psmodctl.

    Attributes:
        provider: Default provider selection ("auto" prefers PSResourceGet).
        pwsh_executable: PowerShell executable used to drive the providers.
        command_timeout_seconds: Timeout for install/uninstall commands.
        lookup_timeout_seconds: Timeout for inventory and catalog lookups.
        keep_versions: Default number of versions kept by version-cleanup.
        include_prerelease: Consider prerelease versions by default.
        trust_repository: Install without repository trust prompts.
        module_paths: Extra module roots searched for on-disk versions.
        unknown_scope_as_system: Treat unclassifiable install paths as
            System scope (requires elevation to update them).
        theme: CLI color overrides.
    """

    model_config = ConfigDict(extra="forbid")

    provider: Annotated[
        ProviderSetting,
        Field(description="Default provider"),
    ] = "auto"
    pwsh_executable: Annotated[
        str,
        Field(min_length=1, description="PowerShell executable"),
    ] = "pwsh"
    command_timeout_seconds: Annotated[
        int,
        Field(ge=10, le=3600, description="Install/uninstall timeout (10-3600)"),
    ] = 600
    lookup_timeout_seconds: Annotated[
        int,
        Field(ge=5, le=3600, description="Lookup timeout (5-3600)"),
    ] = 120
    keep_versions: Annotated[
        int,
        Field(ge=1, description="Versions kept by version-cleanup"),
    ] = 1
    include_prerelease: bool = False
    trust_repository: bool = True
    module_paths: list[str] = Field(default_factory=list)
    unknown_scope_as_system: bool = False
    theme: ThemeColors = Field(default_factory=ThemeColors)


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> AppConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated AppConfig. Defaults are returned if the file doesn't exist.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file can't be read or doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        logger.debug("No config file at %s, using defaults", config_path)
        return AppConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config {config_path}: {e}") from e

    try:
        return AppConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config content in {config_path}: {e}") from e


def save_config(config: AppConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written to a temporary sibling first and then moved into
    place with os.replace().

    Args:
        config: The AppConfig to save.
        path: Destination. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    import os
    from tempfile import NamedTemporaryFile

    config_path = path or get_config_path()
    data = config.model_dump(mode="json")

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path

"""Shared types and factories for CLI commands.

This module provides the option enums and the helpers that build the
per-invocation provider, resolver, and configuration objects.
"""

from enum import Enum
from pathlib import Path

import typer

from psmodctl.core.config import AppConfig, load_config
from psmodctl.core.inventory import InventoryResolver
from psmodctl.core.paths import get_config_path
from psmodctl.core.scope import PathPatternClassifier
from psmodctl.models.package import ProviderKind, Scope
from psmodctl.providers.base import Provider
from psmodctl.providers.powershellget import PowerShellGetProvider
from psmodctl.providers.psresourceget import PSResourceGetProvider
from psmodctl.providers.pwsh import PwshRunner


class ProviderChoice(str, Enum):
    """Provider selection for CLI commands."""

    AUTO = "auto"
    PSRESOURCEGET = "psresourceget"
    POWERSHELLGET = "powershellget"


class ScopeChoice(str, Enum):
    """Scope filter for CLI commands."""

    USER = "user"
    SYSTEM = "system"
    UNKNOWN = "unknown"
    ALL = "all"


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def to_provider_kind(choice: ProviderChoice) -> ProviderKind | None:
    """Convert a provider choice to a ProviderKind (None for auto)."""
    if choice == ProviderChoice.AUTO:
        return None
    return ProviderKind(choice.value)


def to_scope(choice: ScopeChoice) -> Scope | None:
    """Convert a scope choice to a Scope (None for all)."""
    if choice == ScopeChoice.ALL:
        return None
    return Scope(choice.value)


def effective_provider(choice: ProviderChoice | None, config: AppConfig) -> ProviderChoice:
    """Resolve the provider option, falling back to the configured default."""
    if choice is not None:
        return choice
    return ProviderChoice(config.provider)


def get_config(ctx: typer.Context) -> AppConfig:
    """Return the config loaded by the root command, or load it now."""
    obj = ctx.obj if isinstance(ctx.obj, dict) else {}
    config = obj.get("config")
    if isinstance(config, AppConfig):
        return config
    return load_config()


def get_providers(config: AppConfig) -> dict[ProviderKind, Provider]:
    """Build one instance of each provider sharing a PowerShell runner.

    Args:
        config: Application configuration.

    Returns:
        Provider instances keyed by kind.
    """
    runner = PwshRunner(
        executable=config.pwsh_executable,
        lookup_timeout=float(config.lookup_timeout_seconds),
        command_timeout=float(config.command_timeout_seconds),
    )
    unknown_scope = Scope.SYSTEM if config.unknown_scope_as_system else Scope.UNKNOWN
    classifier = PathPatternClassifier(unknown_scope=unknown_scope)

    return {
        ProviderKind.PSRESOURCEGET: PSResourceGetProvider(
            runner, classifier, trust_repository=config.trust_repository
        ),
        ProviderKind.POWERSHELLGET: PowerShellGetProvider(
            runner, classifier, trust_repository=config.trust_repository
        ),
    }


def get_resolver(config: AppConfig) -> InventoryResolver:
    """Build a fresh inventory resolver for this invocation."""
    return InventoryResolver(get_providers(config))


def get_config_file(ctx: typer.Context) -> Path:
    """Return the config file path chosen by the root command."""
    obj = ctx.obj if isinstance(ctx.obj, dict) else {}
    chosen = obj.get("config_path")
    if isinstance(chosen, Path):
        return chosen
    return get_config_path()

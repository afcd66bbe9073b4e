"""XDG-compliant path management for psmodctl.

XDG defaults:
- Config: ~/.config/psmodctl/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "psmodctl"

# Environment variable overriding the config file location
CONFIG_ENV_VAR = "PSMODCTL_CONFIG"


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/psmodctl/ (or XDG_CONFIG_HOME/psmodctl/).
    """
    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        return Path(base) / APP_NAME
    return Path.home() / ".config" / APP_NAME


def get_config_path() -> Path:
    """Get the config file path.

    The PSMODCTL_CONFIG environment variable takes precedence over the
    XDG location.

    Returns:
        Path to the config.toml file.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return get_config_dir() / "config.toml"

"""Theme management for psmodctl CLI.

Colors come from the ``[theme]`` table of the config file; anything not
set there falls back to the defaults below.
"""

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from rich.theme import Theme

logger = logging.getLogger(__name__)


class ThemeColors(BaseModel):
    """Color configuration for psmodctl CLI.

    All colors must be valid hex codes (#RRGGBB or #RGB).
    """

    model_config = ConfigDict(extra="forbid")

    # Base colors
    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"

    # Semantic colors
    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    # Version colors
    version_old: str = "#b2bec3"
    version_new: str = "#c1ff62"
    removed: str = "#f53263"

    # Scope colors
    scope_user: str = "#69B9A1"
    scope_system: str = "#d44ebc"
    scope_unknown: str = "#faf870"

    @field_validator("*", mode="before")
    @classmethod
    def validate_hex_color(cls, v: object, info: Any) -> str:
        """Validate that all color values are valid hex codes."""
        if not isinstance(v, str):
            msg = f"{info.field_name}: color must be a string"
            raise ValueError(msg)
        color = v.strip()
        if not color.startswith("#"):
            msg = f"{info.field_name}: color must start with '#'"
            raise ValueError(msg)
        digits = color[1:]
        if len(digits) not in (3, 6):
            msg = f"{info.field_name}: color must be #RGB or #RRGGBB format"
            raise ValueError(msg)
        try:
            int(digits, 16)
        except ValueError:
            msg = f"{info.field_name}: invalid hex color '{color}'"
            raise ValueError(msg) from None
        return color


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Convert ThemeColors to a Rich Theme.

    Args:
        colors: ThemeColors instance to convert. If None, loads the
            colors from the config file.

    Returns:
        Rich Theme instance configured with the color scheme.
    """
    if colors is None:
        colors = _load_configured_colors()

    styles: dict[str, str] = {
        "text": colors.text,
        "muted": colors.muted,
        "header": colors.header,
        "border": colors.border,
        "success": colors.success,
        "warning": colors.warning,
        "error": f"bold {colors.error}",
        "info": colors.info,
        "version_old": colors.version_old,
        "version_new": f"bold {colors.version_new}",
        "removed": colors.removed,
        "scope_user": colors.scope_user,
        "scope_system": f"bold {colors.scope_system}",
        "scope_unknown": colors.scope_unknown,
        # Convenience styles
        "bold_header": f"bold {colors.header}",
        "dim": colors.muted,
    }

    return Theme(styles)


def _load_configured_colors() -> ThemeColors:
    """Load theme colors from the config file, falling back to defaults."""
    from psmodctl.core.config import ConfigError, load_config

    try:
        return load_config().theme
    except ConfigError as e:
        logger.warning("Could not load theme from config, using defaults: %s", e)
        return ThemeColors()


# Module-level cached theme instance
_cached_theme: Theme | None = None


def get_theme() -> Theme:
    """Get the Rich theme, loading and caching it on first use."""
    global _cached_theme
    if _cached_theme is None:
        _cached_theme = get_rich_theme()
    return _cached_theme

"""
Theme registry.

A theme is any object with ``name``, ``display_name``, ``description`` and a
``render(world)`` method. Themes register themselves by name; the terrain
engine never needs to know which one is drawing it.
"""

from typing import Any, Dict, List, Protocol

import structlog

from ..core.world import WorldModel

logger = structlog.get_logger()


class Theme(Protocol):
    """Renderer strategy for a world model."""

    name: str
    display_name: str
    description: str

    def render(self, world: WorldModel) -> Any:
        ...


class UnknownThemeError(KeyError):
    """Raised when a theme name is not registered."""


_THEMES: Dict[str, Theme] = {}


def register_theme(theme: Theme) -> Theme:
    """Register a theme under its name, replacing any previous one."""
    if not getattr(theme, "name", None):
        raise ValueError("Theme must have a non-empty name")
    if theme.name in _THEMES:
        logger.warning("Replacing registered theme", theme=theme.name)
    _THEMES[theme.name] = theme
    return theme


def get_theme(name: str) -> Theme:
    """Look up a registered theme."""
    try:
        return _THEMES[name]
    except KeyError:
        raise UnknownThemeError(f"Unknown theme '{name}'. Available: {list_themes()}") from None


def list_themes() -> List[str]:
    return sorted(_THEMES.keys())


def unregister_theme(name: str) -> None:
    _THEMES.pop(name, None)

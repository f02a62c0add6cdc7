"""
Renderers for world models.

Importing this package registers the built-in themes.
"""

from .registry import Theme, UnknownThemeError, get_theme, list_themes, register_theme, unregister_theme
from .terrain import TerrainTheme
from .summary import SummaryTheme

__all__ = ['Theme', 'UnknownThemeError', 'get_theme', 'list_themes', 'register_theme',
           'unregister_theme', 'TerrainTheme', 'SummaryTheme']

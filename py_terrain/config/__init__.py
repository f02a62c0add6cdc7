"""
Configuration modules for world generation.
"""

from .config import Settings, settings
from .palettes import PALETTES, ElevationPalette, get_palette, list_palettes

__all__ = ['Settings', 'settings', 'PALETTES', 'ElevationPalette', 'get_palette', 'list_palettes']

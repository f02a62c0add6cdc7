"""
Elevation and colour curves.

Maps a fine level (0-99) to a block height and to the three face colours of
an isometric block. Water levels sit flush at height 0; land rises
monotonically through piecewise-linear height anchors. Colours interpolate
linearly per RGB channel between the colour anchors bracketing the level.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Optional, Sequence

from ..config.palettes import ElevationPalette, get_palette
from ..utils.color import RGB, darken, lerp_rgb, rgb_to_hex
from ..utils.interpolation import clamp, interpolate_anchors, lerp
from .seasons import SeasonalTint, apply_tint, is_identity_tint


@dataclass(frozen=True)
class ElevationColors:
    """Face colours for one block: top, left (side) and right (shade)."""

    top: str
    side: str
    shade: str


@dataclass(frozen=True)
class ElevationSample:
    """Height and colours for one fine level."""

    level: int
    height: float
    top: str
    side: str
    shade: str

    @property
    def colors(self) -> ElevationColors:
        return ElevationColors(self.top, self.side, self.shade)

    @property
    def is_water(self) -> bool:
        return self.height == 0


class ElevationCurve:
    """Continuous height and colour lookup over one palette."""

    def __init__(self, palette: ElevationPalette, tint: Optional[SeasonalTint] = None):
        """
        Initialize the curve.

        Args:
            palette: Validated anchor tables
            tint: Optional seasonal tint applied to interpolated colours
        """
        self.palette = palette
        self.tint = None if tint is None or is_identity_tint(tint) else tint
        self._color_levels = [a.level for a in palette.color_anchors]
        self._color_values = [a.rgb for a in palette.color_anchors]
        self._height_levels = [a.level for a in palette.height_anchors]
        self._height_values = [a.height for a in palette.height_anchors]

    def __eq__(self, other) -> bool:
        if not isinstance(other, ElevationCurve):
            return NotImplemented
        return self.palette == other.palette and self.tint == other.tint

    @property
    def water_max_level(self) -> int:
        return self.palette.water_max_level

    def height(self, level: float) -> float:
        """Block height for a level; 0 throughout the water range."""
        level = clamp(level, 0, 99)
        if level <= self.palette.water_max_level:
            return 0.0
        return float(interpolate_anchors(self._height_levels, self._height_values, level, lerp))

    def base_rgb(self, level: float) -> RGB:
        """Untinted top colour as integer channels."""
        return interpolate_anchors(self._color_levels, self._color_values, clamp(level, 0, 99), lerp_rgb)

    def top_rgb(self, level: float) -> RGB:
        rgb = self.base_rgb(level)
        if self.tint is not None:
            rgb = apply_tint(rgb, self.tint)
        return rgb

    def colors(self, level: float) -> ElevationColors:
        """Top, side and shade colours for a level."""
        rgb = self.top_rgb(level)
        return ElevationColors(
            top=rgb_to_hex(rgb),
            side=rgb_to_hex(darken(rgb, self.palette.side_factor)),
            shade=rgb_to_hex(darken(rgb, self.palette.shade_factor)),
        )

    def sample(self, level: int) -> ElevationSample:
        c = self.colors(level)
        return ElevationSample(level=level, height=self.height(level), top=c.top, side=c.side, shade=c.shade)

    def tinted(self, tint: SeasonalTint) -> "ElevationCurve":
        """Same palette with colours passed through a seasonal tint."""
        return ElevationCurve(self.palette, tint)

    def anchor_colors(self, levels: Sequence[int] = (0, 20, 45, 70, 95)) -> Dict[int, str]:
        """Top colours sampled at legend levels."""
        return {level: self.colors(level).top for level in levels}


@lru_cache(maxsize=None)
def get_curve(mode: str) -> ElevationCurve:
    """Untinted curve for a built-in colour mode."""
    return ElevationCurve(get_palette(mode))


def height(level: int, mode: str = "dark") -> float:
    """Block height for a fine level."""
    return get_curve(mode).height(level)


def elevation_color(level: int, mode: str = "dark") -> ElevationColors:
    """Face colours for a fine level in a colour mode."""
    return get_curve(mode).colors(level)

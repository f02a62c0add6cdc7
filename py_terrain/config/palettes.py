"""
Elevation palettes for the terrain curve.

A palette is a pair of anchor tables: colours and block heights keyed by fine
level (0-99). The curve in ``core.elevation`` interpolates between them; the
validators here enforce the properties that interpolation relies on.
"""

from typing import Dict, List, Literal, Tuple

from pydantic import BaseModel, Field, field_validator, model_validator

from ..utils.color import hex_to_rgb, luma

ColorMode = Literal["dark", "light"]


class ColorAnchor(BaseModel):
    """Colour pinned to a fine level."""

    level: int = Field(..., ge=0, le=99, description="Fine level of the anchor")
    color: str = Field(..., description="Hex colour of the top face")

    @field_validator("color")
    @classmethod
    def _parse_color(cls, value: str) -> str:
        try:
            hex_to_rgb(value)
        except ValueError as e:
            raise ValueError(f"Invalid colour {value!r}") from e
        return value

    @property
    def rgb(self) -> Tuple[int, int, int]:
        return hex_to_rgb(self.color)


class HeightAnchor(BaseModel):
    """Block height pinned to a fine level."""

    level: int = Field(..., ge=0, le=99, description="Fine level of the anchor")
    height: float = Field(..., ge=0, description="Block height in screen units")


def _check_levels(anchors, kind: str):
    levels = [a.level for a in anchors]
    if not levels:
        raise ValueError(f"{kind} anchors must not be empty")
    if levels[0] != 0 or levels[-1] != 99:
        raise ValueError(f"{kind} anchors must span levels 0 to 99")
    if any(b <= a for a, b in zip(levels, levels[1:])):
        raise ValueError(f"{kind} anchor levels must be strictly increasing")


class ElevationPalette(BaseModel):
    """Anchor tables for one colour mode."""

    name: str
    water_max_level: int = Field(default=9, ge=0, le=99, description="Highest level drawn as flat water")
    side_factor: float = Field(default=0.75, gt=0, lt=1, description="Left face shade relative to top")
    shade_factor: float = Field(default=0.60, gt=0, lt=1, description="Right face shade relative to top")
    color_anchors: List[ColorAnchor]
    height_anchors: List[HeightAnchor]

    @model_validator(mode="after")
    def _check_curves(self) -> "ElevationPalette":
        _check_levels(self.color_anchors, "Colour")
        _check_levels(self.height_anchors, "Height")

        heights = [a.height for a in self.height_anchors]
        if any(b < a for a, b in zip(heights, heights[1:])):
            raise ValueError("Height anchors must be non-decreasing")
        for anchor in self.height_anchors:
            if anchor.level <= self.water_max_level and anchor.height != 0:
                raise ValueError(f"Height anchor at level {anchor.level} lies in the water range but is not 0")
        if not any(a.level >= self.water_max_level for a in self.height_anchors if a.height == 0):
            raise ValueError("Height curve must stay at 0 up to water_max_level")

        lumas = [luma(a.rgb) for a in self.color_anchors]
        steps = [b - a for a, b in zip(lumas, lumas[1:])]
        if not (all(s >= 0 for s in steps) or all(s <= 0 for s in steps)):
            raise ValueError("Colour anchors must change lightness monotonically")

        if self.shade_factor > self.side_factor:
            raise ValueError("Right face must not be lighter than the left face")
        return self


_HEIGHTS = [
    HeightAnchor(level=0, height=0),
    HeightAnchor(level=9, height=0),
    HeightAnchor(level=20, height=2),
    HeightAnchor(level=45, height=7),
    HeightAnchor(level=70, height=14),
    HeightAnchor(level=95, height=22),
    HeightAnchor(level=99, height=24),
]

# Dark mode brightens with activity
DARK_PALETTE = ElevationPalette(
    name="dark",
    color_anchors=[
        ColorAnchor(level=0, color="#163052"),  # deep water
        ColorAnchor(level=9, color="#264e78"),  # shallows
        ColorAnchor(level=10, color="#5c543e"),  # mud flats
        ColorAnchor(level=20, color="#6e7046"),  # dry grass
        ColorAnchor(level=45, color="#46823c"),  # meadow
        ColorAnchor(level=70, color="#60a048"),  # woodland
        ColorAnchor(level=95, color="#96c46e"),  # farmland
        ColorAnchor(level=99, color="#b0d484"),  # settled valley
    ],
    height_anchors=_HEIGHTS,
)

# Light mode darkens with activity
LIGHT_PALETTE = ElevationPalette(
    name="light",
    color_anchors=[
        ColorAnchor(level=0, color="#aacdeb"),
        ColorAnchor(level=9, color="#82b4dc"),
        ColorAnchor(level=10, color="#b4a078"),
        ColorAnchor(level=20, color="#a09e64"),
        ColorAnchor(level=45, color="#6e9650"),
        ColorAnchor(level=70, color="#50823c"),
        ColorAnchor(level=95, color="#37692d"),
        ColorAnchor(level=99, color="#2d5c28"),
    ],
    height_anchors=_HEIGHTS,
)

PALETTES: Dict[str, ElevationPalette] = {
    "dark": DARK_PALETTE,
    "light": LIGHT_PALETTE,
}


def get_palette(mode: str) -> ElevationPalette:
    """Get the built-in palette for a colour mode."""
    if mode not in PALETTES:
        raise ValueError(f"Unknown colour mode '{mode}'. Available: {list(PALETTES)}")
    return PALETTES[mode]


def list_palettes() -> List[str]:
    return list(PALETTES.keys())

"""
Seasonal terrain tinting.

The 52-week grid is split into eight zones so the terrain moves through
winter, spring, summer and autumn. Even zones are peak seasons, odd zones
blend linearly from one peak into the next.

Zone layout (rotation 0):
    Week:  0-6  7-12  13-19  20-25  26-32  33-38  39-45  46-51
    Zone:   0     1     2      3      4      5      6      7

Summer is the untinted base palette.
"""

from dataclasses import dataclass
from datetime import date
from typing import Dict, NamedTuple, Sequence, Tuple

from ..utils.interpolation import clamp, lerp, round_half_up

WEEKS_PER_YEAR = 52
HEMISPHERES = ("north", "south")

WINTER = "winter"
SPRING = "spring"
SUMMER = "summer"
AUTUMN = "autumn"


class ZoneBound(NamedTuple):
    zone: int
    start: int
    end: int


ZONE_BOUNDS = (
    ZoneBound(0, 0, 6),
    ZoneBound(1, 7, 12),
    ZoneBound(2, 13, 19),
    ZoneBound(3, 20, 25),
    ZoneBound(4, 26, 32),
    ZoneBound(5, 33, 38),
    ZoneBound(6, 39, 45),
    ZoneBound(7, 46, 51),
)

# zone -> (from season, to season); peaks have from == to
ZONE_SEASONS = {
    0: (WINTER, WINTER),
    1: (WINTER, SPRING),
    2: (SPRING, SPRING),
    3: (SPRING, SUMMER),
    4: (SUMMER, SUMMER),
    5: (SUMMER, AUTUMN),
    6: (AUTUMN, AUTUMN),
    7: (AUTUMN, WINTER),
}

SNOW_WHITE = (240, 244, 250)


@dataclass(frozen=True)
class SeasonalTint:
    """Colour transform for one season."""

    color_shift: float = 0.0  # blend toward color_target
    color_target: Tuple[int, int, int] = (0, 0, 0)
    green_mul: float = 1.0
    warmth: float = 0.0  # added to red, subtracted from blue
    snow_coverage: float = 0.0  # blend toward snow white
    saturation: float = 1.0


SEASON_TINTS: Dict[str, SeasonalTint] = {
    WINTER: SeasonalTint(
        color_shift=0.35,
        color_target=(238, 242, 248),
        green_mul=0.60,
        warmth=-5,
        snow_coverage=0.35,
        saturation=0.65,
    ),
    SPRING: SeasonalTint(
        color_shift=0.05,
        color_target=(255, 220, 230),
        green_mul=1.15,
        warmth=5,
        saturation=1.15,
    ),
    SUMMER: SeasonalTint(),
    AUTUMN: SeasonalTint(
        color_shift=0.10,
        color_target=(210, 140, 60),
        green_mul=0.70,
        warmth=20,
        saturation=1.05,
    ),
}


class TransitionBlend(NamedTuple):
    season_from: str
    season_to: str
    t: float


def compute_season_rotation(oldest: date, hemisphere: str = "north") -> int:
    """
    Week offset that aligns grid column 0 with the seasonal calendar.

    Counts whole weeks from the most recent December 1st on or before the
    first calendar day. The southern hemisphere is shifted by half a year.

    Args:
        oldest: Date of the first day in the calendar
        hemisphere: "north" or "south"

    Returns:
        Rotation in [0, 52)
    """
    if hemisphere not in HEMISPHERES:
        raise ValueError(f"Unknown hemisphere '{hemisphere}'. Available: {list(HEMISPHERES)}")
    dec1 = date(oldest.year, 12, 1)
    ref = dec1 if oldest >= dec1 else date(oldest.year - 1, 12, 1)
    rotation = round_half_up((oldest - ref).days / 7)
    if hemisphere == "south":
        rotation += WEEKS_PER_YEAR // 2
    return rotation % WEEKS_PER_YEAR


def _rotated_week(week: int, rotation: int) -> int:
    return int(clamp((week + rotation) % WEEKS_PER_YEAR, 0, WEEKS_PER_YEAR - 1))


def season_zone(week: int, rotation: int = 0) -> int:
    """Season zone (0-7) for a grid column."""
    w = _rotated_week(week, rotation)
    for bound in ZONE_BOUNDS:
        if bound.start <= w <= bound.end:
            return bound.zone
    return 4


def transition_blend(week: int, rotation: int = 0) -> TransitionBlend:
    """Seasons on either side of a week and how far it sits between them."""
    w = _rotated_week(week, rotation)
    zone = season_zone(week, rotation)
    season_from, season_to = ZONE_SEASONS[zone]
    if season_from == season_to:
        return TransitionBlend(season_from, season_to, 0.0)
    bound = ZONE_BOUNDS[zone]
    return TransitionBlend(season_from, season_to, (w - bound.start) / (bound.end - bound.start))


def lerp_tint(a: SeasonalTint, b: SeasonalTint, t: float) -> SeasonalTint:
    return SeasonalTint(
        color_shift=lerp(a.color_shift, b.color_shift, t),
        color_target=tuple(round_half_up(lerp(a.color_target[i], b.color_target[i], t)) for i in range(3)),
        green_mul=lerp(a.green_mul, b.green_mul, t),
        warmth=lerp(a.warmth, b.warmth, t),
        snow_coverage=lerp(a.snow_coverage, b.snow_coverage, t),
        saturation=lerp(a.saturation, b.saturation, t),
    )


def seasonal_tint(week: int, rotation: int = 0) -> SeasonalTint:
    """Tint for a grid column; transition zones blend neighbouring peaks."""
    blend = transition_blend(week, rotation)
    return lerp_tint(SEASON_TINTS[blend.season_from], SEASON_TINTS[blend.season_to], blend.t)


def is_identity_tint(tint: SeasonalTint) -> bool:
    return (
        tint.color_shift == 0
        and tint.warmth == 0
        and tint.snow_coverage == 0
        and tint.green_mul == 1
        and tint.saturation == 1
    )


def apply_tint(rgb: Sequence[float], tint: SeasonalTint) -> Tuple[int, int, int]:
    """
    Apply a seasonal tint to an RGB colour.

    Steps, in order: saturation about Rec. 601 grey, green multiplier,
    warmth, blend toward the target colour, blend toward snow.
    """
    r, g, b = rgb[0], rgb[1], rgb[2]
    gray = 0.299 * r + 0.587 * g + 0.114 * b
    nr = gray + (r - gray) * tint.saturation
    ng = gray + (g - gray) * tint.saturation
    nb = gray + (b - gray) * tint.saturation

    ng *= tint.green_mul

    nr += tint.warmth
    nb -= tint.warmth

    if tint.color_shift > 0:
        nr = lerp(nr, tint.color_target[0], tint.color_shift)
        ng = lerp(ng, tint.color_target[1], tint.color_shift)
        nb = lerp(nb, tint.color_target[2], tint.color_shift)

    if tint.snow_coverage > 0:
        nr = lerp(nr, SNOW_WHITE[0], tint.snow_coverage)
        ng = lerp(ng, SNOW_WHITE[1], tint.snow_coverage)
        nb = lerp(nb, SNOW_WHITE[2], tint.snow_coverage)

    return tuple(int(clamp(round_half_up(c), 0, 255)) for c in (nr, ng, nb))

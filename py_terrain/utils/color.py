"""
Colour helpers shared by the elevation curve, seasons and themes.

Colours travel through the core as integer RGB tuples and leave it as hex
strings; parsing goes through matplotlib so named colours work as well.
"""

from typing import Sequence, Tuple

from matplotlib import colors as mcolors

from .interpolation import clamp, lerp, round_half_up

RGB = Tuple[int, int, int]

# Rec. 709 luma weights
_LUMA = (0.2126, 0.7152, 0.0722)


def hex_to_rgb(value: str) -> RGB:
    """
    Parse a colour string into 0-255 integer channels.

    Args:
        value: "#rrggbb", "rrggbb" or any matplotlib colour name

    Returns:
        (r, g, b) tuple
    """
    if not value.startswith("#") and len(value) == 6 and all(c in "0123456789abcdefABCDEF" for c in value):
        value = "#" + value
    r, g, b = mcolors.to_rgb(value)
    return round_half_up(r * 255), round_half_up(g * 255), round_half_up(b * 255)


def rgb_to_hex(rgb: Sequence[float]) -> str:
    """Format channels as "#rrggbb", rounding and clamping each one."""
    return "#" + "".join(f"{int(clamp(round_half_up(c), 0, 255)):02x}" for c in rgb[:3])


def lerp_rgb(a: Sequence[float], b: Sequence[float], t: float) -> RGB:
    """Per-channel linear interpolation, rounded to integers."""
    return tuple(round_half_up(lerp(a[i], b[i], t)) for i in range(3))


def darken(rgb: Sequence[float], factor: float) -> RGB:
    """Scale every channel by ``factor`` (shaded isometric faces)."""
    return tuple(int(clamp(round_half_up(c * factor), 0, 255)) for c in rgb[:3])


def luma(rgb: Sequence[float]) -> float:
    """Perceptual lightness proxy on gamma-encoded channels."""
    return _LUMA[0] * rgb[0] + _LUMA[1] * rgb[1] + _LUMA[2] * rgb[2]


def to_mpl(value: str, alpha: float = 1.0) -> Tuple[float, float, float, float]:
    """Hex colour to a matplotlib RGBA tuple."""
    return mcolors.to_rgba(value, alpha=alpha)

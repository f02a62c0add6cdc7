"""Scalar interpolation helpers."""

import math
from typing import Callable, Sequence, Tuple, TypeVar

T = TypeVar("T")


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation between a and b."""
    return a + (b - a) * t


def clamp(value: float, lo: float, hi: float) -> float:
    """Limit value to [lo, hi]."""
    return min(max(value, lo), hi)


def round_half_up(value: float) -> int:
    """Round to nearest integer, halves toward positive infinity."""
    return int(math.floor(value + 0.5))


def bracket(levels: Sequence[float], value: float) -> Tuple[int, int, float]:
    """
    Find the anchors surrounding ``value``.

    Args:
        levels: Strictly increasing anchor positions
        value: Query position (clamped to the anchor range)

    Returns:
        (lower index, upper index, t in [0, 1])
    """
    if not levels:
        raise ValueError("At least one anchor is required")
    v = clamp(value, levels[0], levels[-1])
    for i in range(len(levels) - 1):
        if levels[i] <= v <= levels[i + 1]:
            span = levels[i + 1] - levels[i]
            return i, i + 1, (v - levels[i]) / span if span else 0.0
    last = len(levels) - 1
    return last, last, 0.0


def interpolate_anchors(
    levels: Sequence[float],
    values: Sequence[T],
    value: float,
    mix: Callable[[T, T, float], T],
) -> T:
    """Piecewise interpolation of ``values`` at ``value`` using ``mix``."""
    lo, hi, t = bracket(levels, value)
    if lo == hi:
        return values[lo]
    return mix(values[lo], values[hi], t)

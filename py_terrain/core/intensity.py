"""
Intensity curves mapping raw daily counts onto fine level scales.

Most calendars have many low-count days and a handful of very busy ones. A
linear mapping would collapse all of the quiet days into the bottom bucket,
so the 100-level scale compresses the ratio logarithmically.
"""

import math
from typing import Iterable

import numpy as np

from ..utils.interpolation import clamp, round_half_up

MAX_LEVEL100 = 99
MAX_LEVEL10 = 9

# Upper ratio bounds for levels 1..8; anything above the last is level 9
LEVEL10_BREAKPOINTS = (0.06, 0.12, 0.20, 0.30, 0.42, 0.55, 0.70, 0.85)

_LOG_100 = math.log(100)


def _ratio(count: float, max_count: float) -> float:
    return clamp(count / max_count, 0.0, 1.0)


def compute_level100(count: float, max_count: float) -> int:
    """
    Compute a 0-99 intensity level from a raw count.

    Args:
        count: Raw count for the day
        max_count: Largest count in the calendar

    Returns:
        0 for no activity, otherwise 1-99 on a log curve
    """
    if count == 0:
        return 0
    if max_count <= 0:
        return 1
    curved = math.log(1 + _ratio(count, max_count) * 99) / _LOG_100
    return int(clamp(round_half_up(curved * 98) + 1, 1, MAX_LEVEL100))


def compute_level10(count: float, max_count: float) -> int:
    """Compute a 0-9 level from a fixed breakpoint table over count/max_count."""
    if count == 0:
        return 0
    if max_count <= 0:
        return 1
    ratio = _ratio(count, max_count)
    for level, bound in enumerate(LEVEL10_BREAKPOINTS, start=1):
        if ratio <= bound:
            return level
    return MAX_LEVEL10


def compute_levels100(counts: Iterable[float], max_count: float) -> np.ndarray:
    """Vectorised compute_level100 over an array of counts."""
    counts = np.asarray(list(counts), dtype=np.float64)
    if max_count <= 0:
        return np.where(counts == 0, 0, 1).astype(np.int64)
    ratio = np.clip(counts / max_count, 0.0, 1.0)
    curved = np.log(1 + ratio * 99) / _LOG_100
    levels = np.clip(np.floor(curved * 98 + 0.5).astype(np.int64) + 1, 1, MAX_LEVEL100)
    return np.where(counts == 0, 0, levels)

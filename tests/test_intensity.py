"""Tests for intensity level curves."""

import math

import numpy as np
import pytest
from py_terrain.core.intensity import (
    LEVEL10_BREAKPOINTS, compute_level10, compute_level100, compute_levels100
)


def expected_level100(count, max_count):
    ratio = min(max(count / max_count, 0.0), 1.0)
    return int(math.floor(math.log(1 + ratio * 99) / math.log(100) * 98 + 0.5)) + 1


class TestLevel100:
    """Test the 0-99 log curve."""

    def test_zero_count(self):
        assert compute_level100(0, 10) == 0
        assert compute_level100(0, 0) == 0

    def test_max_count(self):
        assert compute_level100(10, 10) == 99
        assert compute_level100(1, 1) == 99

    def test_zero_max_count_with_activity(self):
        assert compute_level100(3, 0) == 1

    def test_ratio_clamped(self):
        assert compute_level100(20, 10) == 99

    def test_monotonic(self):
        levels = [compute_level100(c, 50) for c in range(51)]
        assert levels == sorted(levels)
        assert levels[0] == 0
        assert levels[-1] == 99
        assert all(1 <= lv <= 99 for lv in levels[1:])

    def test_low_counts_spread(self):
        assert compute_level100(5, 100) > 15
        assert compute_level100(10, 100) > 40
        distinct = {compute_level100(c, 100) for c in range(1, 11)}
        assert len(distinct) == 10

    def test_week_scenario(self):
        """A week in a calendar whose busiest day elsewhere is 8."""
        week = [0, 2, 0, 5, 3, 0, 1]
        levels = [compute_level100(c, 8) for c in week]
        assert levels[1] == 70
        assert levels[0] == levels[2] == levels[5] == 0
        for count, level in zip(week, levels):
            if count:
                assert level == expected_level100(count, 8)
        assert levels[3] > levels[4] > levels[1] > levels[6] > 0

    def test_vectorised_matches_scalar(self):
        counts = list(range(0, 101, 3))
        np.testing.assert_array_equal(
            compute_levels100(counts, 100),
            [compute_level100(c, 100) for c in counts],
        )

    def test_vectorised_zero_max(self):
        np.testing.assert_array_equal(compute_levels100([0, 2, 0], 0), [0, 1, 0])


class TestLevel10:
    """Test the 0-9 breakpoint table."""

    @pytest.mark.parametrize("count,level", [
        (0, 0), (1, 1), (6, 1), (7, 2), (12, 2), (13, 3), (20, 3), (21, 4),
        (30, 4), (42, 5), (55, 6), (70, 7), (85, 8), (86, 9), (100, 9),
    ])
    def test_breakpoints(self, count, level):
        assert compute_level10(count, 100) == level

    def test_breakpoint_table(self):
        assert LEVEL10_BREAKPOINTS == (0.06, 0.12, 0.20, 0.30, 0.42, 0.55, 0.70, 0.85)

    def test_zero_max_count(self):
        assert compute_level10(4, 0) == 1

    def test_monotonic(self):
        levels = [compute_level10(c, 37) for c in range(38)]
        assert levels == sorted(levels)

"""Tests for seeded gradient noise."""

import math

import numpy as np
import pytest
from py_terrain.core.noise import PerlinNoise2D, create_noise2d, make_permutation
from py_terrain.core.seeding import Mulberry32


@pytest.fixture
def noise():
    return PerlinNoise2D(12345)


class TestPerlinNoise2D:
    """Test the noise field."""

    def test_bounded(self, noise):
        for i in range(20):
            for j in range(20):
                v = noise(i * 0.37 + 0.11, j * 0.53 + 0.07)
                assert -1.0 <= v <= 1.0

    def test_smooth_for_small_steps(self, noise):
        for i in range(50):
            x = i * 0.29 + 0.13
            y = i * 0.17 + 0.41
            assert abs(noise(x, y) - noise(x + 0.01, y)) < 0.1
            assert abs(noise(x, y) - noise(x, y + 0.01)) < 0.1
            assert abs(noise(x, y) - noise(x + 0.01, y + 0.01)) < 0.1

    def test_deterministic(self):
        a = create_noise2d(7)
        b = create_noise2d(7)
        for i in range(30):
            x, y = i * 0.31 + 0.5, i * 0.23 + 0.25
            assert a(x, y) == b(x, y)

    def test_seeds_differ(self):
        a = PerlinNoise2D(1)
        b = PerlinNoise2D(2)
        coords = [(i * 0.37 + 0.5, i * 0.61 + 0.25) for i in range(20)]
        assert [a(x, y) for x, y in coords] != [b(x, y) for x, y in coords]

    def test_zero_at_lattice_points(self, noise):
        assert noise(3.0, 4.0) == 0.0

    def test_non_finite_input(self, noise):
        assert noise(math.nan, 1.5) == 0.0
        assert noise(1.5, math.inf) == 0.0

    def test_sample_grid_matches_scalar(self, noise):
        xs = [0.25, 1.5, 2.75]
        ys = [0.1, 0.6]
        grid = noise.sample_grid(xs, ys)
        assert grid.shape == (3, 2)
        for i, x in enumerate(xs):
            for j, y in enumerate(ys):
                assert grid[i, j] == pytest.approx(noise(x, y))

    def test_negative_coordinates(self, noise):
        v = noise(-3.7, -12.2)
        assert -1.0 <= v <= 1.0


class TestPermutation:
    """Test the permutation table."""

    def test_is_doubled_permutation(self):
        perm = make_permutation(Mulberry32(99))
        assert perm.shape == (512,)
        np.testing.assert_array_equal(np.sort(perm[:256]), np.arange(256))
        np.testing.assert_array_equal(perm[:256], perm[256:])

"""
Seeded 2-D gradient noise.

Classic Perlin noise over a permutation table shuffled by the world's
mulberry32 stream. Output is clamped to [-1, 1]; with the eight unit-lattice
gradients used here the raw range already stays within it.
"""

import math
from typing import Callable

import numpy as np

from .seeding import Mulberry32

_GRADS_2D = np.array(
    [(1, 0), (-1, 0), (0, 1), (0, -1), (1, 1), (-1, 1), (1, -1), (-1, -1)],
    dtype=np.float64,
)


def _fade(t):
    return t * t * t * (t * (t * 6 - 15) + 10)


def _lerp(a, b, t):
    return a + t * (b - a)


def make_permutation(rng: Mulberry32) -> np.ndarray:
    """Fisher-Yates shuffle of 0..255, doubled to avoid index wrapping."""
    p = list(range(256))
    for i in range(255, 0, -1):
        j = int(rng.random() * (i + 1))
        p[i], p[j] = p[j], p[i]
    return np.array(p * 2, dtype=np.int64)


class PerlinNoise2D:
    """Smooth noise field in [-1, 1] parameterised by a seed."""

    def __init__(self, seed: int):
        self.seed = seed
        self.perm = make_permutation(Mulberry32(seed))

    def _grad(self, hashv, x, y):
        g = _GRADS_2D[hashv & 7]
        return g[..., 0] * x + g[..., 1] * y

    def _sample(self, x, y):
        perm = self.perm
        x0 = np.floor(x)
        y0 = np.floor(y)
        xi = x0.astype(np.int64) & 255
        yi = y0.astype(np.int64) & 255
        xf = x - x0
        yf = y - y0
        u = _fade(xf)
        v = _fade(yf)

        aa = perm[(perm[xi] + yi) & 255]
        ab = perm[(perm[xi] + yi + 1) & 255]
        ba = perm[(perm[xi + 1] + yi) & 255]
        bb = perm[(perm[xi + 1] + yi + 1) & 255]

        x1 = _lerp(self._grad(aa, xf, yf), self._grad(ba, xf - 1, yf), u)
        x2 = _lerp(self._grad(ab, xf, yf - 1), self._grad(bb, xf - 1, yf - 1), u)
        return np.clip(_lerp(x1, x2, v), -1.0, 1.0)

    def __call__(self, x: float, y: float) -> float:
        if not (math.isfinite(x) and math.isfinite(y)):
            return 0.0
        return float(self._sample(np.asarray(x, dtype=np.float64), np.asarray(y, dtype=np.float64)))

    def sample_grid(self, xs, ys) -> np.ndarray:
        """
        Sample the field on the cartesian product of xs and ys.

        Returns:
            Array of shape (len(xs), len(ys))
        """
        gx, gy = np.meshgrid(np.asarray(xs, dtype=np.float64), np.asarray(ys, dtype=np.float64), indexing="ij")
        return self._sample(gx, gy)


def create_noise2d(seed: int) -> Callable[[float, float], float]:
    """Return a noise function bound to ``seed``."""
    return PerlinNoise2D(seed)

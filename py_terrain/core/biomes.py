"""
Biome overlay synthesis.

This module implements:
- River paths drifting across the grid from left to right
- Ponds grown around randomly chosen river bends
- Near-water flags for cells bordering a river or pond
- Forest density falling off smoothly from random nuclei

The overlay depends only on the grid dimensions and the seed, never on the
activity data, so water and trees appear across every intensity band. All
layers draw from a single generator in a fixed order; changing the order
changes every world.
"""

import math
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

import numpy as np
import structlog
from scipy.spatial.distance import cdist

from .seeding import Mulberry32

logger = structlog.get_logger()


@dataclass
class BiomeOptions:
    """Biome synthesis options."""

    num_rivers: int = 2
    drift_up_below: float = 0.2  # draw below this moves one row up
    drift_down_above: float = 0.8  # draw above this moves one row down
    max_extra_ponds: int = 2  # ponds = min(bends, 1 + floor(r * this))
    pond_base_size: int = 2
    pond_size_spread: int = 3  # growth attempts = base + floor(r * spread)
    forest_base_count: int = 4
    forest_count_spread: int = 3
    forest_min_radius: float = 2.0
    forest_radius_spread: float = 3.0


@dataclass(frozen=True)
class BiomeContext:
    """Spatial context for one grid cell, independent of activity level."""

    is_river: bool
    is_pond: bool
    near_water: bool
    forest_density: float

    @property
    def is_water(self) -> bool:
        return self.is_river or self.is_pond


@dataclass(eq=False)
class BiomeMap:
    """
    Dense biome overlay indexed by [week, day].

    Every coordinate of the grid has exactly one context, including
    coordinates that no calendar day maps onto.
    """

    weeks: int
    days: int
    seed: int
    is_river: np.ndarray
    is_pond: np.ndarray
    near_water: np.ndarray
    forest_density: np.ndarray
    bends: List[Tuple[int, int]] = field(default_factory=list)

    def __len__(self) -> int:
        return self.weeks * self.days

    def __contains__(self, coord) -> bool:
        w, d = coord
        return 0 <= w < self.weeks and 0 <= d < self.days

    def context(self, week: int, day: int) -> BiomeContext:
        """Context at (week, day); raises IndexError outside the grid."""
        if (week, day) not in self:
            raise IndexError(f"({week}, {day}) is outside a {self.weeks}x{self.days} grid")
        return BiomeContext(
            is_river=bool(self.is_river[week, day]),
            is_pond=bool(self.is_pond[week, day]),
            near_water=bool(self.near_water[week, day]),
            forest_density=float(self.forest_density[week, day]),
        )

    def __iter__(self) -> Iterator[Tuple[Tuple[int, int], BiomeContext]]:
        for w in range(self.weeks):
            for d in range(self.days):
                yield (w, d), self.context(w, d)

    @property
    def water(self) -> np.ndarray:
        return self.is_river | self.is_pond

    @property
    def river_count(self) -> int:
        return int(self.is_river.sum())

    @property
    def pond_count(self) -> int:
        return int(self.is_pond.sum())

    def __eq__(self, other) -> bool:
        if not isinstance(other, BiomeMap):
            return NotImplemented
        return (
            (self.weeks, self.days, self.seed, self.bends) == (other.weeks, other.days, other.seed, other.bends)
            and np.array_equal(self.is_river, other.is_river)
            and np.array_equal(self.is_pond, other.is_pond)
            and np.array_equal(self.near_water, other.near_water)
            and np.array_equal(self.forest_density, other.forest_density)
        )

    def freeze(self) -> "BiomeMap":
        """Mark the underlying arrays read-only."""
        for arr in (self.is_river, self.is_pond, self.near_water, self.forest_density):
            arr.flags.writeable = False
        return self


class BiomeGenerator:
    """Builds a BiomeMap layer by layer from one seeded stream."""

    def __init__(self, weeks: int, days: int, seed: int, options: Optional[BiomeOptions] = None):
        """
        Initialize the generator.

        Args:
            weeks: Grid columns, typically 52
            days: Grid rows, typically 7
            seed: 32-bit world seed (already offset for biomes)
            options: Biome synthesis options
        """
        self.weeks = max(int(weeks), 0)
        self.days = max(int(days), 0)
        self.seed = seed
        self.options = options or BiomeOptions()
        self.rng = Mulberry32(seed)

        shape = (self.weeks, self.days)
        self.is_river = np.zeros(shape, dtype=bool)
        self.is_pond = np.zeros(shape, dtype=bool)
        self.near_water = np.zeros(shape, dtype=bool)
        self.forest_density = np.zeros(shape, dtype=np.float64)
        self.bends: List[Tuple[int, int]] = []

    def _in_bounds(self, w: int, d: int) -> bool:
        return 0 <= w < self.weeks and 0 <= d < self.days

    def _river_start_row(self, river: int) -> int:
        half = self.days // 2
        if river == 0:
            return math.floor(self.rng.random() * half)
        return half + math.floor(self.rng.random() * math.ceil(self.days / 2))

    def generate_rivers(self):
        """Walk each river left to right, recording bends where the row changes."""
        opts = self.options
        for r in range(opts.num_rivers):
            day = self._river_start_row(r)
            for week in range(self.weeks):
                if self._in_bounds(week, day):
                    self.is_river[week, day] = True

                drift = self.rng.random()
                prev_day = day
                if drift < opts.drift_up_below:
                    day = max(0, day - 1)
                elif drift > opts.drift_down_above:
                    day = min(self.days - 1, day + 1)

                if day != prev_day and 0 <= day < self.days:
                    self.bends.append((week, day))

    def generate_ponds(self):
        """
        Grow ponds from a shuffled selection of river bends.

        Growth candidates that land outside the grid are dropped, so small
        grids can end up with fewer pond cells than attempted.
        """
        opts = self.options
        num_ponds = min(len(self.bends), 1 + math.floor(self.rng.random() * opts.max_extra_ponds))
        keyed = [(self.rng.random(), bend) for bend in self.bends]
        shuffled = [bend for _, bend in sorted(keyed, key=lambda item: item[0])]

        for center in shuffled[:num_ponds]:
            pond_size = opts.pond_base_size + math.floor(self.rng.random() * opts.pond_size_spread)
            pond_cells = [center]
            for _ in range(pond_size):
                base_w, base_d = pond_cells[math.floor(self.rng.random() * len(pond_cells))]
                dw = math.floor(self.rng.random() * 3) - 1
                dd = math.floor(self.rng.random() * 3) - 1
                nw, nd = base_w + dw, base_d + dd
                if self._in_bounds(nw, nd):
                    pond_cells.append((nw, nd))

            for w, d in pond_cells:
                if self._in_bounds(w, d):
                    self.is_pond[w, d] = True

    def mark_near_water(self):
        """Flag dry cells that share an edge with a river or pond."""
        water = self.is_river | self.is_pond
        adjacent = np.zeros_like(water)
        adjacent[1:, :] |= water[:-1, :]
        adjacent[:-1, :] |= water[1:, :]
        adjacent[:, 1:] |= water[:, :-1]
        adjacent[:, :-1] |= water[:, 1:]
        self.near_water = adjacent & ~water

    def generate_forests(self):
        """Assign each cell the strongest linear falloff among forest nuclei."""
        opts = self.options
        num_forests = opts.forest_base_count + math.floor(self.rng.random() * opts.forest_count_spread)
        nuclei = []
        for _ in range(num_forests):
            nuclei.append(
                (
                    math.floor(self.rng.random() * self.weeks),
                    math.floor(self.rng.random() * self.days),
                    opts.forest_min_radius + self.rng.random() * opts.forest_radius_spread,
                )
            )

        if self.weeks == 0 or self.days == 0:
            return

        centers = np.array([(w, d) for w, d, _ in nuclei], dtype=np.float64)
        radii = np.array([radius for _, _, radius in nuclei], dtype=np.float64)
        ww, dd = np.meshgrid(np.arange(self.weeks), np.arange(self.days), indexing="ij")
        coords = np.column_stack([ww.ravel(), dd.ravel()]).astype(np.float64)

        dist = cdist(coords, centers)
        density = np.where(dist < radii, 1.0 - dist / radii, 0.0)
        self.forest_density = density.max(axis=1).reshape(self.weeks, self.days)

    def generate(self) -> BiomeMap:
        """Run all layers in order and return the finished map."""
        self.generate_rivers()
        self.generate_ponds()
        self.mark_near_water()
        self.generate_forests()

        biome_map = BiomeMap(
            weeks=self.weeks,
            days=self.days,
            seed=self.seed,
            is_river=self.is_river,
            is_pond=self.is_pond,
            near_water=self.near_water,
            forest_density=self.forest_density,
            bends=list(self.bends),
        ).freeze()

        logger.debug(
            "Biome map generated",
            weeks=self.weeks,
            days=self.days,
            rivers=biome_map.river_count,
            ponds=biome_map.pond_count,
            bends=len(self.bends),
            prng_calls=self.rng.call_count,
        )
        return biome_map


def generate_biome_map(weeks: int, days: int, seed: int, options: Optional[BiomeOptions] = None) -> BiomeMap:
    """
    Generate the biome overlay for a weeks x days grid.

    Args:
        weeks: Number of grid columns
        days: Number of grid rows
        seed: Deterministic seed
        options: Optional synthesis parameters

    Returns:
        BiomeMap with one context per coordinate
    """
    return BiomeGenerator(weeks, days, seed, options).generate()

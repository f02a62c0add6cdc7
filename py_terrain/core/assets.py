"""
Asset placement.

Chooses the small objects (trees, animals, boats, buildings) that decorate
each block. A cell's candidate pool comes from its fine level, widened by its
biome context and swapped seasonally; neighbouring activity raises the odds
of placing anything at all.

Two generators drive placement. The world generator decides whether, what and
where; a separate variant generator picks the visual variant, so a world keeps
its layout when only the variant seed changes. Cells are visited in draw
order and every draw happens in a fixed sequence; changing either changes
every world.
"""

import math
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Mapping, NamedTuple, Optional, Sequence, Tuple

import structlog

from ..utils.interpolation import round_half_up
from .biomes import BiomeContext, BiomeMap
from .seasons import AUTUMN, SPRING, SUMMER, WINTER, transition_blend
from .seeding import Mulberry32

logger = structlog.get_logger()

VARIANTS = 3
MAX_POOL_CHANCE = 0.65
RICHNESS_WEIGHT = 0.2
NEIGHBOURS = ((-1, -1), (-1, 0), (-1, 1), (0, -1), (0, 1), (1, -1), (1, 0), (1, 1))


class AssetPool(NamedTuple):
    """Candidate kinds for a cell and the chance of placing one."""

    types: Tuple[str, ...]
    chance: float


# (highest level, pool); duplicated kinds weight the draw
LEVEL_POOLS: Tuple[Tuple[int, AssetPool], ...] = (
    (4, AssetPool(("rock", "boulder", "stump", "dead_tree", "puddle"), 0.06)),
    (8, AssetPool(("rock", "boulder", "bush", "stump", "dead_tree", "signpost"), 0.10)),
    (14, AssetPool((
        "whale", "fish", "fish_school", "boat", "seagull", "dock", "waves", "kelp", "coral",
        "jellyfish", "turtle", "crab", "buoy",
    ), 0.16)),
    (22, AssetPool((
        "fish", "fish_school", "boat", "seagull", "waves", "dock", "kelp", "coral", "turtle",
        "sailboat", "lighthouse", "crab", "buoy",
    ), 0.18)),
    (27, AssetPool((
        "rock", "boulder", "flower", "bush", "bird", "driftwood", "sandcastle", "tide_pools",
        "heron", "shellfish", "cattail", "frog", "lily",
    ), 0.16)),
    (30, AssetPool((
        "bush", "flower", "rock", "fence", "driftwood", "tide_pools", "heron", "cattail", "frog",
        "lily", "puddle",
    ), 0.18)),
    (36, AssetPool((
        "bush", "flower", "mushroom", "deer", "bird", "rabbit", "fox", "butterfly",
        "wildflower_patch", "tall_grass", "signpost", "puddle",
    ), 0.22)),
    (42, AssetPool((
        "pine", "deciduous", "bush", "mushroom", "flower", "deer", "rabbit", "fox", "butterfly",
        "beehive", "birch", "haybale", "tall_grass", "lantern",
    ), 0.25)),
    (52, AssetPool((
        "pine", "pine", "deciduous", "willow", "bird", "bush", "owl", "squirrel", "moss", "fern",
        "berry_bush", "log", "woodpile",
    ), 0.30)),
    (58, AssetPool((
        "pine", "deciduous", "willow", "palm", "bird", "pine", "stump", "owl", "moss", "fern",
        "dead_tree", "log", "spider", "campfire",
    ), 0.32)),
    (65, AssetPool((
        "deciduous", "willow", "pine", "palm", "bird", "mushroom", "squirrel", "berry_bush",
        "fern", "moss", "log", "woodpile",
    ), 0.28)),
    (70, AssetPool((
        "wheat", "fence", "sheep", "chicken", "bush", "rice_paddy", "pumpkin", "orchard",
        "trough", "haystack", "signpost",
    ), 0.30)),
    (75, AssetPool((
        "wheat", "fence", "scarecrow", "cow", "sheep", "chicken", "horse", "rice_paddy", "silo",
        "pigpen", "trough", "orchard", "bee_farm", "pumpkin",
    ), 0.35)),
    (78, AssetPool((
        "barn", "sheep", "cow", "horse", "wheat", "fence", "chicken", "cart", "rice_paddy",
        "silo", "pigpen", "haystack", "orchard", "bee_farm", "haybale",
    ), 0.38)),
    (84, AssetPool((
        "tent", "hut", "house", "well", "fence", "sheep", "barrel", "tavern", "bakery", "stable",
        "garden", "doghouse", "shrine", "lantern", "woodpile",
    ), 0.38)),
    (90, AssetPool((
        "house", "house_b", "church", "windmill", "well", "barrel", "torch", "tavern", "bakery",
        "stable", "garden", "laundry", "wagon", "shrine", "lantern", "signpost",
    ), 0.42)),
    (95, AssetPool((
        "house", "house_b", "market", "inn", "windmill", "flag", "cobble_path", "torch",
        "garden_tree", "flower", "bush", "cathedral", "library", "clocktower", "statue", "park",
        "warehouse", "lantern",
    ), 0.48)),
    (99, AssetPool((
        "castle", "tower", "church", "market", "inn", "blacksmith", "bridge", "flag",
        "cobble_path", "garden_tree", "flower", "fountain", "cathedral", "library", "clocktower",
        "statue", "park", "gatehouse", "manor", "warehouse", "lantern",
    ), 0.55)),
)

# Kinds with a continuous animation; each world has a fixed budget of them
ANIMATED_KINDS: FrozenSet[str] = frozenset({
    "seagull", "waves", "bird", "windmill", "smoke", "fountain", "watermill", "jellyfish",
    "turtle", "butterfly", "bakery", "clocktower", "campfire",
})

# Kinds that sway in the wind; over budget they fall back to the still variant 0
SWAYING_KINDS: FrozenSet[str] = frozenset({"cattail", "tall_grass", "laundry"})

_WINTER_ONLY = (
    "snow_pine", "snow_deciduous", "snowman", "snowdrift", "igloo", "frozen_pond", "icicle",
    "sled", "snow_covered_rock", "bare_bush", "winter_bird", "firewood",
)
_WARM_ONLY = (
    "flower", "butterfly", "wildflower_patch", "tulip", "tulip_field", "cherry_blossom",
    "cherry_blossom_small", "cherry_petals", "crocus", "lamb", "sprout", "garden_bed",
    "birdhouse", "nest", "parasol", "beach_towel", "surfboard", "swimming_pool", "sunflower",
    "watermelon", "hammock", "ice_cream_cart", "lemonade", "sprinkler", "fireflies",
    "sandcastle_summer",
)

SEASON_REMOVE: Dict[str, FrozenSet[str]] = {
    WINTER: frozenset(_WARM_ONLY),
    SPRING: frozenset(_WINTER_ONLY + (
        "parasol", "beach_towel", "surfboard", "swimming_pool", "ice_cream_cart", "lemonade",
        "sprinkler", "sandcastle_summer",
    )),
    SUMMER: frozenset(_WINTER_ONLY + (
        "autumn_maple", "autumn_oak", "autumn_birch", "autumn_ginkgo", "fallen_leaves",
        "leaf_swirl", "corn_stalk", "scarecrow_autumn", "harvest_basket", "hot_drink",
        "autumn_wreath",
    )),
    AUTUMN: frozenset(_WINTER_ONLY + _WARM_ONLY),
}

SEASON_ADD: Dict[str, Dict[str, Tuple[str, ...]]] = {
    WINTER: {
        "nature": ("snow_pine", "snow_deciduous", "snow_covered_rock", "bare_bush", "winter_bird", "snowdrift"),
        "settlement": ("snowman", "igloo", "sled", "firewood", "icicle", "snowdrift"),
        "general": ("snowdrift", "snow_covered_rock", "bare_bush", "icicle"),
    },
    SPRING: {
        "nature": ("cherry_blossom", "cherry_blossom_small", "tulip", "tulip_field", "sprout", "crocus", "lamb"),
        "settlement": (
            "cherry_blossom", "tulip_field", "nest", "birdhouse", "garden_bed", "rain_puddle", "cherry_petals",
        ),
        "general": ("sprout", "crocus", "cherry_petals", "rain_puddle"),
    },
    SUMMER: {
        "nature": ("sunflower", "fireflies", "watermelon"),
        "settlement": (
            "parasol", "beach_towel", "hammock", "ice_cream_cart", "lemonade", "sprinkler", "swimming_pool",
        ),
        "general": ("sunflower", "watermelon"),
    },
    AUTUMN: {
        "nature": (
            "autumn_maple", "autumn_oak", "autumn_birch", "autumn_ginkgo", "fallen_leaves", "leaf_swirl", "acorn",
        ),
        "settlement": (
            "corn_stalk", "scarecrow_autumn", "harvest_basket", "hot_drink", "autumn_wreath", "fallen_leaves",
        ),
        "general": ("fallen_leaves", "leaf_swirl", "acorn"),
    },
}

ASSET_CATEGORIES: Dict[str, FrozenSet[str]] = {
    "tree": frozenset({
        "pine", "deciduous", "willow", "palm", "birch", "dead_tree", "garden_tree", "orchard",
        "snow_pine", "snow_deciduous", "cherry_blossom", "cherry_blossom_small", "autumn_maple",
        "autumn_oak", "autumn_birch", "autumn_ginkgo",
    }),
    "building": frozenset({
        "tent", "hut", "house", "house_b", "barn", "silo", "well", "tavern", "bakery", "stable",
        "church", "windmill", "watermill", "market", "inn", "cathedral", "library", "clocktower",
        "castle", "tower", "blacksmith", "gatehouse", "manor", "warehouse", "lighthouse", "shrine",
        "doghouse", "igloo", "bridge",
    }),
    "water": frozenset({
        "whale", "fish", "fish_school", "boat", "sailboat", "dock", "waves", "kelp", "coral",
        "jellyfish", "buoy", "tide_pools", "lily", "pond_lily", "reeds", "canal", "fountain",
        "puddle", "rain_puddle", "frozen_pond",
    }),
    "animal": frozenset({
        "seagull", "turtle", "crab", "bird", "heron", "shellfish", "frog", "deer", "rabbit", "fox",
        "butterfly", "owl", "squirrel", "spider", "sheep", "chicken", "cow", "horse", "lamb",
        "winter_bird", "fireflies",
    }),
}


@dataclass(frozen=True)
class AssetOptions:
    """Placement options."""

    density: float = 5.0  # 5 keeps the pool chances as tabulated
    smoke_budget: int = 5
    animated_budget: int = 12
    sway_budget: int = 10


@dataclass(frozen=True)
class PlacedAsset:
    """One asset on one cell, offset from the cell's top-face centre."""

    week: int
    day: int
    kind: str
    cx: float
    cy: float
    ox: float
    oy: float
    variant: int

    @property
    def x(self) -> float:
        return self.cx + self.ox

    @property
    def y(self) -> float:
        return self.cy + self.oy

    @property
    def category(self) -> str:
        return asset_category(self.kind)


def asset_category(kind: str) -> str:
    """Broad drawing category for a kind: tree, building, water, animal or decor."""
    for category, kinds in ASSET_CATEGORIES.items():
        if kind in kinds:
            return category
    return "decor"


def level_pool(level: int) -> AssetPool:
    """Base pool for a fine level (0-99)."""
    for upper, pool in LEVEL_POOLS:
        if level <= upper:
            return pool
    return LEVEL_POOLS[-1][1]


def blend_with_biome(pool: AssetPool, ctx: BiomeContext, level: int) -> AssetPool:
    """
    Widen a pool with kinds suited to the cell's biome.

    Water and shore cells add their own kinds and raise the chance; forest
    density repeats tree kinds so they dominate the draw. The chance is
    capped at MAX_POOL_CHANCE.
    """
    types = list(pool.types)
    chance = pool.chance

    if ctx.is_river:
        if level >= 91:
            types += ["bridge", "canal"]
        elif level >= 66:
            types += ["watermill", "canal", "reeds", "heron"]
        elif level >= 31:
            types += ["reeds", "reeds", "willow", "frog", "heron", "cattail"]
        else:
            types += ["reeds", "pond_lily", "lily", "frog"]
        chance = max(chance, 0.35)
    elif ctx.is_pond:
        if level >= 79:
            types += ["fountain", "pond_lily", "reeds", "lily"]
        else:
            types += ["pond_lily", "pond_lily", "reeds", "lily", "frog", "cattail"]
        chance = max(chance, 0.30)
    elif ctx.near_water:
        if level >= 79:
            types += ["fountain", "garden_tree"]
        else:
            types += ["willow", "reeds", "bush", "driftwood", "heron"]
        chance += 0.05

    if ctx.forest_density > 0.3:
        for _ in range(3 if ctx.forest_density > 0.6 else 1):
            if level >= 91:
                types += ["garden_tree", "flower"]
            elif level >= 79:
                types += ["garden_tree"]
            elif level >= 43:
                types += ["pine", "deciduous", "owl", "squirrel", "moss", "fern"]
            else:
                types += ["pine", "birch"]
        chance += ctx.forest_density * 0.08

    if level >= 96:
        types += ["garden_tree", "fountain", "park"]
    elif level >= 91:
        types += ["garden_tree", "lantern"]

    return AssetPool(tuple(types), min(chance, MAX_POOL_CHANCE))


def _season_additions(season: str, level: int) -> List[str]:
    additions = SEASON_ADD[season]
    kinds = list(additions["general"])
    if 31 <= level <= 65:
        kinds += additions["nature"]
    elif level >= 66:
        kinds += additions["settlement"]
    return kinds


def seasonal_pool_overrides(week: int, rotation: int, level: int) -> Tuple[List[str], FrozenSet[str]]:
    """
    Kinds to add to and remove from a pool for a week's season.

    Between two seasons both remove sets apply, and the additions are a
    prefix of each season's list sized by how far the week has progressed.

    Returns:
        (add, remove)
    """
    blend = transition_blend(week, rotation)
    if blend.season_from == blend.season_to:
        return _season_additions(blend.season_from, level), SEASON_REMOVE[blend.season_from]

    remove = SEASON_REMOVE[blend.season_from] | SEASON_REMOVE[blend.season_to]
    from_add = _season_additions(blend.season_from, level)
    to_add = _season_additions(blend.season_to, level)
    from_count = round_half_up(len(from_add) * (1 - blend.t))
    to_count = round_half_up(len(to_add) * blend.t)
    return from_add[:from_count] + to_add[:to_count], remove


def neighbour_richness(week: int, day: int, levels: Mapping[Tuple[int, int], int]) -> float:
    """Mean level of the existing 8-neighbours scaled to 0-1; 0 with no neighbours."""
    total = 0
    count = 0
    for dw, dd in NEIGHBOURS:
        level = levels.get((week + dw, day + dd))
        if level is not None:
            total += level
            count += 1
    return total / (count * 99) if count else 0.0


class AssetSelector:
    """Walks cells in draw order placing a primary asset and, on rich cells, a second."""

    def __init__(
        self,
        seed: int,
        variant_seed: Optional[int] = None,
        biome_map: Optional[BiomeMap] = None,
        season_rotation: Optional[int] = None,
        options: Optional[AssetOptions] = None,
    ):
        """
        Initialize the selector.

        Args:
            seed: World seed; drives placement, kind and offsets
            variant_seed: Seed for visual variants, defaults to the world seed
            biome_map: Overlay widening pools near water and in forests
            season_rotation: Season rotation in weeks; None disables seasonal pools
            options: Density and animation budgets
        """
        self.options = options or AssetOptions()
        self.rng = Mulberry32(seed)
        self.variant_rng = Mulberry32(seed if variant_seed is None else variant_seed)
        self.biome_map = biome_map
        self.season_rotation = season_rotation

        self.smoke_left = self.options.smoke_budget
        self.animated_left = self.options.animated_budget
        self.sway_left = self.options.sway_budget

    def pool_for(self, week: int, day: int, level: int) -> AssetPool:
        """Level pool adjusted for biome and season, before richness and density."""
        pool = level_pool(level)
        if self.biome_map is not None and (week, day) in self.biome_map:
            pool = blend_with_biome(pool, self.biome_map.context(week, day), level)
        if self.season_rotation is not None:
            add, remove = seasonal_pool_overrides(week, self.season_rotation, level)
            pool = AssetPool(tuple(t for t in pool.types if t not in remove) + tuple(add), pool.chance)
        return pool

    def _spend_smoke(self, kind: str, fallback: str) -> str:
        if kind != "smoke":
            return kind
        if self.smoke_left <= 0:
            return fallback
        self.smoke_left -= 1
        return kind

    def _spend_animated(self, kind: str) -> str:
        if kind not in ANIMATED_KINDS:
            return kind
        if self.animated_left > 0:
            self.animated_left -= 1
            return kind
        return "barrel"

    def _spend_sway(self, kind: str, variant: int) -> int:
        if kind not in SWAYING_KINDS:
            return variant
        if self.sway_left > 0:
            self.sway_left -= 1
            return variant
        return 0

    def _place_primary(self, cell, types: Sequence[str]) -> PlacedAsset:
        kind = types[math.floor(self.rng.random() * len(types))]
        kind = self._spend_smoke(kind, "barrel")
        ox = (self.rng.random() - 0.5) * 3
        oy = (self.rng.random() - 0.5) * 1.5
        variant = math.floor(self.variant_rng.random() * VARIANTS)
        kind = self._spend_animated(kind)
        variant = self._spend_sway(kind, variant)
        return PlacedAsset(cell.week, cell.day, kind, cell.iso_x, cell.iso_y, ox, oy, variant)

    def _place_secondary(self, cell, types: Sequence[str]) -> PlacedAsset:
        kind = types[math.floor(self.rng.random() * len(types))]
        kind = self._spend_smoke(kind, "torch")
        kind = self._spend_animated(kind)
        variant = math.floor(self.variant_rng.random() * VARIANTS)
        variant = self._spend_sway(kind, variant)
        ox = (self.rng.random() - 0.5) * 4
        oy = (self.rng.random() - 0.5) * 2
        return PlacedAsset(cell.week, cell.day, kind, cell.iso_x, cell.iso_y, ox, oy, variant)

    def select(self, cells: Sequence) -> List[PlacedAsset]:
        """
        Place assets on cells.

        Cells need week, day, level100, iso_x and iso_y and must already be in
        draw order.
        """
        levels = {(c.week, c.day): c.level100 for c in cells}
        scale = self.options.density / 5
        placed: List[PlacedAsset] = []

        for cell in cells:
            level = cell.level100
            pool = self.pool_for(cell.week, cell.day, level)
            richness = neighbour_richness(cell.week, cell.day, levels)
            chance = (pool.chance + richness * RICHNESS_WEIGHT) * scale
            if not pool.types:
                continue

            if self.rng.random() >= chance:
                continue
            placed.append(self._place_primary(cell, pool.types))
            if richness > 0.5 and level >= 30 and self.rng.random() < 0.3:
                placed.append(self._place_secondary(cell, pool.types))

        logger.debug(
            "Assets selected",
            cells=len(cells),
            assets=len(placed),
            animated=self.options.animated_budget - self.animated_left,
            prng_calls=self.rng.call_count,
        )
        return placed


def select_assets(
    cells: Iterable,
    seed: int,
    variant_seed: Optional[int] = None,
    biome_map: Optional[BiomeMap] = None,
    season_rotation: Optional[int] = None,
    options: Optional[AssetOptions] = None,
) -> List[PlacedAsset]:
    """
    Choose assets for cells in draw order.

    Args:
        cells: Cells in back-to-front order (e.g. WorldModel.cells)
        seed: World seed
        variant_seed: Seed for visual variants
        biome_map: Optional biome overlay
        season_rotation: Optional season rotation; None disables seasonal pools
        options: Placement options

    Returns:
        Placed assets, at most two per cell
    """
    return AssetSelector(seed, variant_seed, biome_map, season_rotation, options).select(list(cells))

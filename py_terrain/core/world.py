"""
World assembly.

Runs the full pipeline for one identity, calendar and colour mode:
seed -> fine levels -> grid and isometric positions -> biome overlay ->
per-cell height and colours -> placed assets. The result is a plain value
object that renderers consume; nothing is cached between calls.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import structlog

from ..config import settings
from ..config.palettes import get_palette
from .assets import AssetOptions, PlacedAsset, select_assets
from .biomes import BiomeContext, BiomeMap, BiomeOptions, generate_biome_map
from .calendar import Calendar
from .elevation import ElevationColors, ElevationCurve
from .grid_layout import IsometricProjection, LayoutOptions, contribution_grid, sort_draw_order
from .seasons import compute_season_rotation, seasonal_tint
from .seeding import derive_seed, offset_seed

logger = structlog.get_logger()

COLOR_MODES = ("dark", "light")
LEGEND_LEVELS = (0, 20, 45, 70, 95)


@dataclass(frozen=True)
class WorldOptions:
    """Options for building a world, defaulting to application settings."""

    layout: LayoutOptions = field(
        default_factory=lambda: LayoutOptions(
            cell_size=settings.cell_size,
            gap=settings.cell_gap,
            offset_x=settings.offset_x,
            offset_y=settings.offset_y,
        )
    )
    projection: IsometricProjection = field(
        default_factory=lambda: IsometricProjection(
            origin_x=settings.iso_origin_x,
            origin_y=settings.iso_origin_y,
            half_width=settings.tile_half_width,
            half_height=settings.tile_half_height,
        )
    )
    grid_weeks: int = field(default_factory=lambda: settings.grid_weeks)
    grid_days: int = field(default_factory=lambda: settings.grid_days)
    biome_seed_offset: int = field(default_factory=lambda: settings.biome_seed_offset)
    hemisphere: str = field(default_factory=lambda: settings.hemisphere)
    seasonal_tint: bool = field(default_factory=lambda: settings.seasonal_tint)
    biome_options: Optional[BiomeOptions] = None
    asset_options: AssetOptions = field(default_factory=lambda: AssetOptions(density=settings.asset_density))


@dataclass(frozen=True)
class WorldCell:
    """One calendar day placed in the world, ready to draw."""

    week: int
    day: int
    date: str
    count: int
    level100: int
    level10: int
    x: float
    y: float
    iso_x: float
    iso_y: float
    height: float
    colors: ElevationColors
    biome: BiomeContext


@dataclass(frozen=True)
class WorldModel:
    """Deterministic world for one identity, calendar and colour mode."""

    identity: str
    mode: str
    seed: int
    variant_seed: int
    biome_seed: int
    season_rotation: int
    max_count: int
    cells: Tuple[WorldCell, ...]  # back-to-front draw order
    biome_map: BiomeMap
    projection: IsometricProjection
    curve: ElevationCurve
    assets: Tuple[PlacedAsset, ...] = ()

    def cell_at(self, week: int, day: int) -> Optional[WorldCell]:
        for cell in self.cells:
            if cell.week == week and cell.day == day:
                return cell
        return None

    def level_anchor_colors(self) -> Dict[int, str]:
        """Untinted top colours at legend levels."""
        return self.curve.anchor_colors(LEGEND_LEVELS)

    def water_cells(self) -> List[WorldCell]:
        return [c for c in self.cells if c.biome.is_water]


def build_world(
    identity: str,
    calendar: Calendar,
    mode: Optional[str] = None,
    options: Optional[WorldOptions] = None,
) -> WorldModel:
    """
    Build the world model for an identity and calendar.

    Args:
        identity: Identity string (e.g. username) seeding all variation
        calendar: Validated calendar
        mode: "dark" or "light", defaults to settings.color_mode
        options: Layout, projection and synthesis options

    Returns:
        WorldModel with one WorldCell per calendar day
    """
    mode = mode or settings.color_mode
    if mode not in COLOR_MODES:
        raise ValueError(f"Unknown colour mode '{mode}'. Available: {list(COLOR_MODES)}")
    options = options or WorldOptions()

    seed = derive_seed(identity, mode)
    variant_seed = derive_seed(identity, str(calendar.year) if calendar.year is not None else "")
    biome_seed = offset_seed(seed, options.biome_seed_offset)
    logger.info("Building world", identity=identity, mode=mode, seed=seed, weeks=calendar.num_weeks)

    oldest = calendar.oldest_date
    rotation = compute_season_rotation(oldest, options.hemisphere) if oldest else 0

    base_curve = ElevationCurve(get_palette(mode))
    week_curves: Dict[int, ElevationCurve] = {}

    def curve_for(week: int) -> ElevationCurve:
        if not options.seasonal_tint:
            return base_curve
        if week not in week_curves:
            week_curves[week] = base_curve.tinted(seasonal_tint(week, rotation))
        return week_curves[week]

    biome_map = generate_biome_map(options.grid_weeks, options.grid_days, biome_seed, options.biome_options)
    empty = BiomeContext(is_river=False, is_pond=False, near_water=False, forest_density=0.0)

    cells = []
    for grid_cell in contribution_grid(calendar, options.layout):
        w, d = grid_cell.week, grid_cell.day
        iso_x, iso_y = options.projection.project(w, d)
        curve = curve_for(w)
        cells.append(
            WorldCell(
                week=w,
                day=d,
                date=grid_cell.date,
                count=grid_cell.count,
                level100=grid_cell.level100,
                level10=grid_cell.level10,
                x=grid_cell.x,
                y=grid_cell.y,
                iso_x=iso_x,
                iso_y=iso_y,
                height=curve.height(grid_cell.level100),
                colors=curve.colors(grid_cell.level100),
                biome=biome_map.context(w, d) if (w, d) in biome_map else empty,
            )
        )

    ordered = tuple(sort_draw_order(cells))
    assets = select_assets(
        ordered,
        seed,
        variant_seed=variant_seed,
        biome_map=biome_map,
        season_rotation=rotation if options.seasonal_tint else None,
        options=options.asset_options,
    )

    world = WorldModel(
        identity=identity,
        mode=mode,
        seed=seed,
        variant_seed=variant_seed,
        biome_seed=biome_seed,
        season_rotation=rotation,
        max_count=calendar.max_count,
        cells=ordered,
        biome_map=biome_map,
        projection=options.projection,
        curve=base_curve,
        assets=tuple(assets),
    )
    logger.info(
        "World built",
        identity=identity,
        mode=mode,
        cells=len(world.cells),
        rivers=biome_map.river_count,
        ponds=biome_map.pond_count,
        assets=len(world.assets),
    )
    return world

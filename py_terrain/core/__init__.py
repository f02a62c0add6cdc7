"""
Core world generation functionality.
"""

from .seeding import Mulberry32, hash_identity, derive_seed, offset_seed, seeded_random
from .noise import PerlinNoise2D, create_noise2d
from .intensity import compute_level10, compute_level100, compute_levels100
from .calendar import Calendar, CalendarError, ContributionDay, ContributionWeek
from .grid_layout import GridCell, IsometricProjection, LayoutOptions, contribution_grid
from .biomes import BiomeContext, BiomeMap, BiomeOptions, generate_biome_map
from .elevation import ElevationCurve, ElevationSample, elevation_color, height
from .assets import AssetOptions, PlacedAsset, select_assets
from .world import WorldModel, WorldOptions, build_world

__all__ = ['Mulberry32', 'hash_identity', 'derive_seed', 'offset_seed', 'seeded_random',
           'PerlinNoise2D', 'create_noise2d',
           'compute_level10', 'compute_level100', 'compute_levels100',
           'Calendar', 'CalendarError', 'ContributionDay', 'ContributionWeek',
           'GridCell', 'IsometricProjection', 'LayoutOptions', 'contribution_grid',
           'BiomeContext', 'BiomeMap', 'BiomeOptions', 'generate_biome_map',
           'ElevationCurve', 'ElevationSample', 'elevation_color', 'height',
           'AssetOptions', 'PlacedAsset', 'select_assets',
           'WorldModel', 'WorldOptions', 'build_world']

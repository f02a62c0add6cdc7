"""Summary theme: the world as a JSON-ready dict for external serializers."""

from typing import Any, Dict

from ..core.world import WorldModel
from .registry import register_theme


class SummaryTheme:
    name = "summary"
    display_name = "Summary"
    description = "Plain data view of the world for downstream renderers"

    def render(self, world: WorldModel) -> Dict[str, Any]:
        biome_map = world.biome_map
        return {
            "identity": world.identity,
            "mode": world.mode,
            "seed": world.seed,
            "variant_seed": world.variant_seed,
            "biome_seed": world.biome_seed,
            "season_rotation": world.season_rotation,
            "max_count": world.max_count,
            "grid": {"weeks": biome_map.weeks, "days": biome_map.days},
            "legend": {str(level): color for level, color in world.level_anchor_colors().items()},
            "biomes": {
                "rivers": biome_map.river_count,
                "ponds": biome_map.pond_count,
                "bends": [list(b) for b in biome_map.bends],
            },
            "cells": [
                {
                    "week": c.week,
                    "day": c.day,
                    "date": c.date,
                    "count": c.count,
                    "level": c.level100,
                    "position": [c.x, c.y],
                    "iso": [c.iso_x, c.iso_y],
                    "height": c.height,
                    "top": c.colors.top,
                    "side": c.colors.side,
                    "shade": c.colors.shade,
                    "river": c.biome.is_river,
                    "pond": c.biome.is_pond,
                    "near_water": c.biome.near_water,
                    "forest": round(c.biome.forest_density, 4),
                }
                for c in world.cells
            ],
            "assets": [
                {
                    "week": a.week,
                    "day": a.day,
                    "kind": a.kind,
                    "category": a.category,
                    "position": [a.x, a.y],
                    "variant": a.variant,
                }
                for a in world.assets
            ],
        }


summary_theme = register_theme(SummaryTheme())

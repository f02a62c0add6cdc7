"""Tests for world assembly."""

import pytest
from py_terrain.core.calendar import Calendar
from py_terrain.core.elevation import elevation_color
from py_terrain.core.grid_layout import draw_order_key
from py_terrain.core.seeding import derive_seed
from py_terrain.core.assets import AssetOptions
from py_terrain.core.world import WorldOptions, build_world


@pytest.fixture
def year_calendar():
    return Calendar.from_counts(
        [[(w * 7 + d) % 9 for d in range(7)] for w in range(52)],
        identity="octocat",
    )


@pytest.fixture
def world(year_calendar):
    return build_world("octocat", year_calendar, "dark")


class TestBuildWorld:
    """Test the assembled world."""

    def test_deterministic(self, year_calendar, world):
        again = build_world("octocat", year_calendar, "dark")
        assert again == world
        assert again.assets == world.assets

    def test_worlds_compare_by_value(self, year_calendar, world):
        assert build_world("hubot", year_calendar, "dark") != world
        assert build_world("octocat", year_calendar, "light") != world

    def test_seeds(self, world):
        assert world.seed == derive_seed("octocat", "dark")
        assert world.biome_seed == (world.seed + 7919) % 2**32
        assert world.variant_seed == derive_seed("octocat", "2024")

    def test_variant_seed_without_year(self):
        cal = Calendar(weeks=Calendar.from_counts([[1] * 7]).weeks)
        assert build_world("octocat", cal, "dark").variant_seed == derive_seed("octocat", "")

    def test_modes_use_different_seeds(self, year_calendar, world):
        light = build_world("octocat", year_calendar, "light")
        assert light.seed != world.seed
        assert light.mode == "light"

    def test_identities_use_different_seeds(self, year_calendar, world):
        other = build_world("hubot", year_calendar, "dark")
        assert other.seed != world.seed

    def test_one_cell_per_day(self, world):
        assert len(world.cells) == 364
        assert len(world.biome_map) == 364
        assert world.max_count == 8

    def test_draw_order(self, world):
        keys = [draw_order_key(c.week, c.day) for c in world.cells]
        assert keys == sorted(keys)

    def test_positions(self, world):
        cell = world.cell_at(0, 0)
        assert (cell.iso_x, cell.iso_y) == (405, 6)
        assert (cell.x, cell.y) == (24, 42)
        assert world.cell_at(60, 0) is None

    def test_inactive_days_are_water_level(self, world):
        for cell in world.cells:
            if cell.count == 0:
                assert cell.level100 == 0
                assert cell.height == 0.0
            else:
                assert cell.height > 0.0

    def test_biome_matches_map(self, world):
        for cell in world.cells:
            assert cell.biome == world.biome_map.context(cell.week, cell.day)
        assert all(c.biome.is_water for c in world.water_cells())

    def test_unknown_mode(self, year_calendar):
        with pytest.raises(ValueError):
            build_world("octocat", year_calendar, "sepia")

    def test_legend(self, world):
        legend = world.level_anchor_colors()
        assert list(legend) == [0, 20, 45, 70, 95]
        assert legend[0] == "#163052"


class TestScenarios:
    """End-to-end scenarios on small calendars."""

    def test_week_levels(self):
        cal = Calendar.from_counts([[0, 2, 0, 5, 3, 0, 1], [8, 0, 0, 0, 0, 0, 0]])
        world = build_world("octocat", cal, "dark")
        assert world.max_count == 8
        assert world.cell_at(0, 1).level100 == 70
        assert world.cell_at(1, 0).level100 == 99
        assert world.cell_at(0, 0).height == 0.0
        # the biome overlay still covers the full grid
        assert len(world.biome_map) == 364

    def test_empty_calendar(self):
        world = build_world("nobody", Calendar(weeks=()), "dark")
        assert world.cells == ()
        assert world.season_rotation == 0
        assert world.max_count == 0

    def test_untinted_colours(self, year_calendar):
        world = build_world("octocat", year_calendar, "light", WorldOptions(seasonal_tint=False))
        for cell in world.cells:
            assert cell.colors == elevation_color(cell.level100, "light")

    def test_tint_varies_by_week(self, year_calendar, world):
        summer_week = next(c for c in world.cells if c.level100 > 30 and c.week == 30)
        winter_week = next(c for c in world.cells if c.level100 == summer_week.level100 and c.week < 5)
        assert summer_week.colors != winter_week.colors
        assert summer_week.height == winter_week.height

    def test_hemisphere_shifts_rotation(self, year_calendar, world):
        south = build_world("octocat", year_calendar, "dark", WorldOptions(hemisphere="south"))
        assert south.season_rotation == (world.season_rotation + 26) % 52

    def test_calendar_wider_than_grid(self):
        cal = Calendar.from_counts([[1] * 7 for _ in range(3)])
        world = build_world("octocat", cal, "dark", WorldOptions(grid_weeks=2))
        assert len(world.cells) == 21
        outside = [c for c in world.cells if c.week == 2]
        assert all(not c.biome.is_water and c.biome.forest_density == 0.0 for c in outside)


class TestWorldAssets:
    """Test asset placement inside the assembled world."""

    def test_assets_sit_on_cells(self, world):
        assert world.assets
        for asset in world.assets:
            cell = world.cell_at(asset.week, asset.day)
            assert (asset.cx, asset.cy) == (cell.iso_x, cell.iso_y)

    def test_assets_follow_draw_order(self, world):
        keys = [draw_order_key(a.week, a.day) for a in world.assets]
        assert keys == sorted(keys)

    def test_density_zero_places_nothing(self, year_calendar):
        world = build_world("octocat", year_calendar, "dark", WorldOptions(asset_options=AssetOptions(density=0)))
        assert world.assets == ()
        assert len(world.cells) == 364

    def test_variant_seed_keeps_layout(self, year_calendar, world):
        # a different year changes variants only
        other_year = Calendar(weeks=year_calendar.weeks, identity="octocat", year=2023)
        again = build_world("octocat", other_year, "dark")
        assert again.variant_seed != world.variant_seed
        assert [(a.week, a.day, a.ox, a.oy) for a in again.assets] == [
            (a.week, a.day, a.ox, a.oy) for a in world.assets
        ]

    def test_untinted_world_skips_seasonal_kinds(self, year_calendar):
        world = build_world("octocat", year_calendar, "dark", WorldOptions(seasonal_tint=False))
        seasonal = {"snowman", "snowdrift", "sunflower", "fallen_leaves", "sprout", "crocus"}
        assert not seasonal & {a.kind for a in world.assets}

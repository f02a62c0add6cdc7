"""Tests for grid layout and isometric projection."""

import pytest
from py_terrain.core.calendar import Calendar
from py_terrain.core.grid_layout import (
    IsometricProjection, LayoutOptions, contribution_grid, draw_order_key,
    grid_position, sort_draw_order
)


@pytest.fixture
def projection():
    return IsometricProjection()


class TestGridLayout:
    """Test orthogonal layout."""

    def test_grid_position(self):
        opts = LayoutOptions()
        assert grid_position(0, 0, opts) == (24, 42)
        assert grid_position(3, 2, opts) == (63, 68)

    def test_custom_options(self):
        opts = LayoutOptions(cell_size=10, gap=0, offset_x=0, offset_y=0)
        assert opts.pitch == 10
        assert grid_position(5, 6, opts) == (50, 60)

    def test_contribution_grid(self):
        cal = Calendar.from_counts([[0, 2, 0, 5, 3, 0, 1], [8]])
        cells = contribution_grid(cal)
        assert len(cells) == 8
        assert cells[1].week == 0 and cells[1].day == 1
        assert cells[1].level100 == 70
        assert cells[7].level100 == 99
        assert cells[7].level10 == 9
        assert cells[0].level100 == 0
        assert cells[7].x == 24 + 13


class TestIsometricProjection:
    """Test the isometric map."""

    def test_origin(self, projection):
        assert projection.project(0, 0) == (405, 6)

    def test_axes(self, projection):
        assert projection.project(1, 0) == (412, 9)
        assert projection.project(0, 1) == (398, 9)

    def test_round_trip(self, projection):
        for w in range(52):
            for d in range(7):
                uw, ud = projection.unproject(*projection.project(w, d))
                assert uw == pytest.approx(w)
                assert ud == pytest.approx(d)

    def test_positions_unique(self, projection):
        positions = {projection.project(w, d) for w in range(52) for d in range(7)}
        assert len(positions) == 52 * 7

    def test_degenerate_projection_rejected(self):
        with pytest.raises(ValueError):
            IsometricProjection(half_width=0)
        with pytest.raises(ValueError):
            IsometricProjection(half_height=0)

    def test_faces(self, projection):
        top = projection.top_face(100, 50)
        assert top == [(100, 47), (107, 50), (100, 53), (93, 50)]
        left = projection.left_face(100, 50, 4)
        assert left[2] == (100, 57)
        right = projection.right_face(100, 50, 4)
        assert right[3] == (107, 54)


class TestDrawOrder:
    """Test back-to-front ordering."""

    def test_key(self):
        assert draw_order_key(3, 2) == (5, 3)

    def test_cells_behind_are_drawn_first(self):
        cal = Calendar.from_counts([[1] * 7 for _ in range(10)])
        ordered = sort_draw_order(reversed(contribution_grid(cal)))
        index = {(c.week, c.day): i for i, c in enumerate(ordered)}
        for (w, d), i in index.items():
            if (w + 1, d) in index:
                assert i < index[(w + 1, d)]
            if (w, d + 1) in index:
                assert i < index[(w, d + 1)]

    def test_diagonal_ties_broken_by_week(self):
        cal = Calendar.from_counts([[1] * 7 for _ in range(3)])
        ordered = sort_draw_order(contribution_grid(cal))
        diagonal = [(c.week, c.day) for c in ordered if c.week + c.day == 2]
        assert diagonal == [(0, 2), (1, 1), (2, 0)]

"""
Grid layout and isometric projection.

Calendar coordinates (week, day) are first laid out on a flat rectangular
grid, then projected onto a diamond arrangement for the 3-D look. Both stages
are plain arithmetic with no randomness.
"""

from dataclasses import dataclass
from typing import Iterable, List, Tuple, TypeVar

from .calendar import Calendar
from .intensity import compute_level10, compute_level100


@dataclass(frozen=True)
class LayoutOptions:
    """Orthogonal grid layout parameters."""

    cell_size: float = 11
    gap: float = 2
    offset_x: float = 24
    offset_y: float = 42

    @property
    def pitch(self) -> float:
        return self.cell_size + self.gap


@dataclass(frozen=True)
class GridCell:
    """A positioned calendar day with its intensity levels."""

    week: int
    day: int
    x: float
    y: float
    count: int
    date: str
    level: int  # coarse 0-4
    level10: int
    level100: int


def grid_position(week: int, day: int, options: LayoutOptions) -> Tuple[float, float]:
    """Orthogonal screen position of a calendar coordinate."""
    return (
        options.offset_x + week * options.pitch,
        options.offset_y + day * options.pitch,
    )


def contribution_grid(calendar: Calendar, options: LayoutOptions = LayoutOptions()) -> List[GridCell]:
    """
    Lay out every calendar day on the orthogonal grid.

    Args:
        calendar: Validated calendar
        options: Cell size, gap and offsets

    Returns:
        One GridCell per day, in week-major order
    """
    max_count = calendar.max_count
    cells = []
    for w, d, day in calendar.iter_days():
        x, y = grid_position(w, d, options)
        cells.append(
            GridCell(
                week=w,
                day=d,
                x=x,
                y=y,
                count=day.count,
                date=day.date,
                level=day.level,
                level10=compute_level10(day.count, max_count),
                level100=compute_level100(day.count, max_count),
            )
        )
    return cells


@dataclass(frozen=True)
class IsometricProjection:
    """
    Fixed linear map from grid coordinates to an isometric screen layout.

    ``x = ox + (w - d) * hw`` and ``y = oy + (w + d) * hh``. The matrix
    [[hw, -hw], [hh, hh]] has determinant 2*hw*hh, so the map is invertible
    whenever both half sizes are non-zero.
    """

    origin_x: float = 405
    origin_y: float = 6
    half_width: float = 7
    half_height: float = 3

    def __post_init__(self):
        if self.half_width == 0 or self.half_height == 0:
            raise ValueError("Tile half sizes must be non-zero for an invertible projection")

    def project(self, week: float, day: float) -> Tuple[float, float]:
        """Screen position of the tile centre for (week, day)."""
        return (
            self.origin_x + (week - day) * self.half_width,
            self.origin_y + (week + day) * self.half_height,
        )

    def unproject(self, x: float, y: float) -> Tuple[float, float]:
        """Inverse of project()."""
        a = (x - self.origin_x) / self.half_width  # w - d
        b = (y - self.origin_y) / self.half_height  # w + d
        return (a + b) / 2, (b - a) / 2

    def top_face(self, cx: float, cy: float) -> List[Tuple[float, float]]:
        """Diamond outline of a tile top centred on (cx, cy)."""
        hw, hh = self.half_width, self.half_height
        return [(cx, cy - hh), (cx + hw, cy), (cx, cy + hh), (cx - hw, cy)]

    def left_face(self, cx: float, cy: float, height: float) -> List[Tuple[float, float]]:
        hw, hh = self.half_width, self.half_height
        return [(cx - hw, cy), (cx, cy + hh), (cx, cy + hh + height), (cx - hw, cy + height)]

    def right_face(self, cx: float, cy: float, height: float) -> List[Tuple[float, float]]:
        hw, hh = self.half_width, self.half_height
        return [(cx + hw, cy), (cx, cy + hh), (cx, cy + hh + height), (cx + hw, cy + height)]


T = TypeVar("T")


def draw_order_key(week: int, day: int) -> Tuple[int, int]:
    """Back-to-front painter's order: by diagonal, then by week."""
    return week + day, week


def sort_draw_order(cells: Iterable[T]) -> List[T]:
    """Sort anything with ``week`` and ``day`` attributes back to front."""
    return sorted(cells, key=lambda c: draw_order_key(c.week, c.day))

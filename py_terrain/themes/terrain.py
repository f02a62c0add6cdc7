"""
Terrain theme: isometric blocks drawn with matplotlib.

Blocks are painted back to front. Each land block gets a shaded left face,
a darker right face and its top; water blocks are a flat top with a
translucent river or pond overlay. Placed assets are drawn after all
blocks as small markers shaped by category, their size wobbling with the
world's noise field so neighbouring markers do not look stamped.
"""

from typing import List, Sequence, Tuple

from matplotlib.collections import PatchCollection
from matplotlib.figure import Figure
from matplotlib.patches import Polygon

from ..core.assets import PlacedAsset
from ..core.noise import PerlinNoise2D
from ..core.world import WorldCell, WorldModel
from ..utils.color import to_mpl
from .registry import register_theme

BACKGROUNDS = {"dark": "#0d1117", "light": "#ffffff"}
RIVER_OVERLAY = {"dark": ("#2355a0", 0.60), "light": ("#3c82d2", 0.55)}
POND_OVERLAY = {"dark": ("#194b96", 0.65), "light": ("#3278c8", 0.60)}
ASSET_COLORS = {
    "dark": {"tree": "#2a6e1e", "building": "#b5653a", "water": "#8fc4ef", "animal": "#e8dcc0", "decor": "#9a8a6a"},
    "light": {"tree": "#358025", "building": "#a0522d", "water": "#1f5fa8", "animal": "#6b4f2a", "decor": "#7d6b4a"},
}
ASSET_SIZE = 2.2
NOISE_SCALE = 0.37


class TerrainTheme:
    """Isometric terrain rendered to a matplotlib Figure."""

    name = "terrain"
    display_name = "Terrain"
    description = "Your activity builds a living world"

    def __init__(self, width: float = 8.4, height: float = 2.4, dpi: int = 100):
        self.width = width
        self.height = height
        self.dpi = dpi

    def _block_patches(self, world: WorldModel, cell: WorldCell) -> List[Tuple[Polygon, tuple]]:
        proj = world.projection
        cx, cy, h = cell.iso_x, cell.iso_y, cell.height
        colors = cell.colors
        parts = []
        if h > 0:
            parts.append((Polygon(proj.left_face(cx, cy, h), closed=True), to_mpl(colors.side)))
            parts.append((Polygon(proj.right_face(cx, cy, h), closed=True), to_mpl(colors.shade)))
        parts.append((Polygon(proj.top_face(cx, cy), closed=True), to_mpl(colors.top)))

        if cell.biome.is_water:
            color, alpha = (POND_OVERLAY if cell.biome.is_pond else RIVER_OVERLAY)[world.mode]
            parts.append((Polygon(proj.top_face(cx, cy), closed=True), to_mpl(color, alpha)))
        return parts

    def _asset_patch(self, asset: PlacedAsset, noise: PerlinNoise2D) -> Polygon:
        s = ASSET_SIZE * (1 + 0.3 * noise(asset.x * NOISE_SCALE, asset.y * NOISE_SCALE))
        return Polygon(_marker(asset.category, asset.x, asset.y, s), closed=True)

    def render(self, world: WorldModel) -> Figure:
        """Draw the world and return the figure (not shown or saved)."""
        fig = Figure(figsize=(self.width, self.height), dpi=self.dpi)
        fig.patch.set_facecolor(BACKGROUNDS[world.mode])
        ax = fig.add_axes([0, 0, 1, 1])
        ax.set_facecolor(BACKGROUNDS[world.mode])

        noise = PerlinNoise2D(world.seed)
        patches, facecolors = [], []
        for cell in world.cells:
            for patch, color in self._block_patches(world, cell):
                patches.append(patch)
                facecolors.append(color)
        colors = ASSET_COLORS[world.mode]
        for asset in world.assets:
            patches.append(self._asset_patch(asset, noise))
            facecolors.append(to_mpl(colors[asset.category]))

        if patches:
            ax.add_collection(PatchCollection(patches, facecolors=facecolors, edgecolors="none"))
            xs = [x for p in patches for x, _ in p.get_xy()]
            ys = [y for p in patches for _, y in p.get_xy()]
            ax.set_xlim(min(xs) - 4, max(xs) + 4)
            ax.set_ylim(max(ys) + 4, min(ys) - 4)  # screen y grows downward
        ax.set_aspect("equal")
        ax.axis("off")
        return fig


def _marker(category: str, x: float, y: float, s: float) -> Sequence[Tuple[float, float]]:
    """Outline for a category marker standing on (x, y); screen y grows downward."""
    if category == "tree":
        return [(x - s / 2, y), (x + s / 2, y), (x, y - s * 1.6)]
    if category == "building":
        return [(x - s / 2, y), (x + s / 2, y), (x + s / 2, y - s * 0.7), (x, y - s * 1.2), (x - s / 2, y - s * 0.7)]
    if category == "water":
        return [(x - s * 0.6, y), (x, y - s * 0.3), (x + s * 0.6, y), (x, y + s * 0.3)]
    if category == "animal":
        r = s * 0.35
        return [(x + r * dx, y - r + r * dy) for dx, dy in _HEXAGON]
    return [(x - s * 0.3, y), (x, y - s * 0.4), (x + s * 0.3, y), (x, y + s * 0.1)]


_HEXAGON = ((1.0, 0.0), (0.5, -0.866), (-0.5, -0.866), (-1.0, 0.0), (-0.5, 0.866), (0.5, 0.866))


terrain_theme = register_theme(TerrainTheme())

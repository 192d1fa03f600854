"""World-space geometry derived from a maze grid.

Grid cells are laid out on the x/z plane with a fixed cell size, centred so
the whole maze is symmetric around the world origin. The same offset is used
for wall segments and for the entry/exit points; collision depends on the two
agreeing.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Tuple

from .cells import Grid

logger = logging.getLogger(__name__)

CELL_SIZE = 1.0


@dataclass(frozen=True)
class Vec2:
    """A continuous (x, z) position or displacement on the floor plane."""

    x: float
    z: float

    def offset(self, dx: float = 0.0, dz: float = 0.0) -> "Vec2":
        return Vec2(self.x + dx, self.z + dz)

    def distance_to(self, other: "Vec2") -> float:
        return math.hypot(self.x - other.x, self.z - other.z)

    @property
    def is_zero(self) -> bool:
        return self.x == 0 and self.z == 0


@dataclass(frozen=True)
class WallSegment:
    """Undirected wall line from (x1, z1) to (x2, z2)."""

    x1: float
    z1: float
    x2: float
    z2: float

    @property
    def length(self) -> float:
        return math.hypot(self.x2 - self.x1, self.z2 - self.z1)

    @property
    def midpoint(self) -> Vec2:
        return Vec2((self.x1 + self.x2) / 2, (self.z1 + self.z2) / 2)

    @property
    def is_horizontal(self) -> bool:
        return abs(self.z1 - self.z2) < 0.1

    @property
    def is_vertical(self) -> bool:
        return abs(self.x1 - self.x2) < 0.1

    def key(self) -> Tuple[float, float, float, float]:
        """Direction-independent identity, used to spot duplicates."""
        a, b = (self.x1, self.z1), (self.x2, self.z2)
        lo, hi = (a, b) if a <= b else (b, a)
        return (lo[0], lo[1], hi[0], hi[1])


def grid_offset(width: int, height: int) -> Vec2:
    """World coordinates of the top-left maze corner."""
    return Vec2(-(width * CELL_SIZE) / 2, -(height * CELL_SIZE) / 2)


def cell_center(x: int, y: int, width: int, height: int) -> Vec2:
    origin = grid_offset(width, height)
    return Vec2(origin.x + x * CELL_SIZE + CELL_SIZE / 2, origin.z + y * CELL_SIZE + CELL_SIZE / 2)


def world_to_cell(position: Vec2, width: int, height: int) -> Tuple[int, int]:
    """Cell containing ``position``, clamped to the grid."""
    origin = grid_offset(width, height)
    cx = int(math.floor((position.x - origin.x) / CELL_SIZE))
    cy = int(math.floor((position.z - origin.z) / CELL_SIZE))
    return min(max(cx, 0), width - 1), min(max(cy, 0), height - 1)


def outer_wall_segments(width: int, height: int) -> List[WallSegment]:
    """The four boundary walls: top, right, bottom, left."""
    o = grid_offset(width, height)
    w = width * CELL_SIZE
    h = height * CELL_SIZE
    return [
        WallSegment(o.x, o.z, o.x + w, o.z),
        WallSegment(o.x + w, o.z, o.x + w, o.z + h),
        WallSegment(o.x, o.z + h, o.x + w, o.z + h),
        WallSegment(o.x, o.z, o.x, o.z + h),
    ]


def build_wall_segments(grid: Grid) -> Tuple[WallSegment, ...]:
    """Lower a grid to world-space wall segments.

    The boundary is always emitted as four full-length segments. Interior walls
    are emitted once each, from the cell on their left/top side, so a wall
    shared by two cells never appears twice.
    """
    o = grid_offset(grid.width, grid.height)
    segments = outer_wall_segments(grid.width, grid.height)
    for y in range(grid.height):
        for x in range(grid.width):
            cell = grid.cells[y][x]
            cx = o.x + x * CELL_SIZE
            cz = o.z + y * CELL_SIZE
            if x < grid.width - 1 and not cell.right:
                segments.append(WallSegment(cx + CELL_SIZE, cz, cx + CELL_SIZE, cz + CELL_SIZE))
            if y < grid.height - 1 and not cell.bottom:
                segments.append(WallSegment(cx, cz + CELL_SIZE, cx + CELL_SIZE, cz + CELL_SIZE))
    logger.debug("Built %d wall segments for %dx%d grid", len(segments), grid.width, grid.height)
    return tuple(segments)


@dataclass(frozen=True)
class MazeLayout:
    """Everything a level needs from a generated maze."""

    grid: Grid
    walls: Tuple[WallSegment, ...]
    entry: Vec2
    exit: Vec2

    @property
    def extent(self) -> Tuple[float, float]:
        return self.grid.width * CELL_SIZE, self.grid.height * CELL_SIZE


def build_layout(grid: Grid) -> MazeLayout:
    ex, ey = grid.exit
    return MazeLayout(
        grid=grid,
        walls=build_wall_segments(grid),
        entry=cell_center(0, 0, grid.width, grid.height),
        exit=cell_center(ex, ey, grid.width, grid.height),
    )


__all__ = [
    "CELL_SIZE",
    "Vec2",
    "WallSegment",
    "MazeLayout",
    "grid_offset",
    "cell_center",
    "world_to_cell",
    "outer_wall_segments",
    "build_wall_segments",
    "build_layout",
]

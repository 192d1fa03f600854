from .builder import MazeBuilder
from .cells import Cell, Direction, Grid, MazeArena
from .geometry import CELL_SIZE, MazeLayout, Vec2, WallSegment, build_layout, build_wall_segments

__all__ = [
    "MazeBuilder",
    "Cell",
    "Direction",
    "Grid",
    "MazeArena",
    "CELL_SIZE",
    "MazeLayout",
    "Vec2",
    "WallSegment",
    "build_layout",
    "build_wall_segments",
]

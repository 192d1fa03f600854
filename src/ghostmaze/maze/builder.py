from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from ..core.rng import RandomSource
from ..errors import MazeConsistencyError
from .cells import Direction, Grid, MazeArena
from .pathfinding import lattice_path

logger = logging.getLogger(__name__)

# Order in which the exit looks for an already-carved neighbour.
EXIT_NEIGHBOR_PRIORITY = (Direction.LEFT, Direction.TOP, Direction.RIGHT, Direction.BOTTOM)


class MazeBuilder:
    """Maze generator using depth-first backtracking.

    Carving starts at the entry cell (0, 0) and uses an explicit stack of
    ``(x, y, remaining directions)`` frames, so grids of any size can be built
    without hitting the interpreter's recursion limit. Each frame's directions
    are shuffled once, when the cell is entered.

    Usage:
      grid = MazeBuilder(RandomSource(seed=42)).generate(10, 10)
    """

    def __init__(self, rng: Optional[RandomSource] = None, seed: Optional[int] = None) -> None:
        self.rng = rng if rng is not None else RandomSource(seed)

    def generate(self, width: int, height: int) -> Grid:
        arena = MazeArena(width, height)
        self._carve(arena)
        connect_exit(arena)
        grid = arena.freeze()
        logger.debug("MazeBuilder: generated %dx%d maze (signature=%s)", width, height, grid.signature())
        return grid

    def _shuffled_directions(self) -> List[Direction]:
        dirs = list(Direction)
        self.rng.shuffle(dirs)
        return dirs

    def _carve(self, arena: MazeArena) -> None:
        arena.mark_visited(0, 0)
        stack: List[Tuple[int, int, List[Direction]]] = [(0, 0, self._shuffled_directions())]
        while stack:
            x, y, remaining = stack[-1]
            if not remaining:
                stack.pop()
                continue
            d = remaining.pop(0)
            nx, ny = x + d.dx, y + d.dy
            if not arena.in_bounds(nx, ny) or arena.visited[ny][nx]:
                continue
            arena.mark_visited(nx, ny)
            arena.open_wall(x, y, d)
            stack.append((nx, ny, self._shuffled_directions()))


def connect_exit(arena: MazeArena) -> None:
    """Make sure the exit cell (bottom-right) joins the carved component.

    The exit opens a wall toward the first visited neighbour in
    left, top, right, bottom order. When no neighbour is visited it falls back
    to :func:`connect_to_nearest_visited`. After a full carve the fallback
    never triggers.
    """
    ex, ey = arena.width - 1, arena.height - 1
    arena.mark_visited(ex, ey)
    if (ex, ey) == (0, 0):
        return

    for d in EXIT_NEIGHBOR_PRIORITY:
        nx, ny = ex + d.dx, ey + d.dy
        if arena.is_visited(nx, ny):
            arena.open_wall(ex, ey, d)
            return

    logger.warning("Exit (%d,%d) has no carved neighbour; running ring search", ex, ey)
    connect_to_nearest_visited(arena, ex, ey)


def connect_to_nearest_visited(arena: MazeArena, x: int, y: int) -> Tuple[int, int]:
    """Connect (x, y) to the closest visited cell by Chebyshev ring, opening a BFS path to it.

    Rings are scanned for distances 1 .. width + height - 1, ``dx`` outer and ``dy``
    inner, both from -d to d. Returns the cell that was joined.

    Raises:
        MazeConsistencyError: no visited cell exists within range.
    """
    for dist in range(1, arena.width + arena.height):
        for dx in range(-dist, dist + 1):
            for dy in range(-dist, dist + 1):
                if abs(dx) != dist and abs(dy) != dist:
                    continue
                nx, ny = x + dx, y + dy
                if not arena.is_visited(nx, ny):
                    continue
                steps = lattice_path(arena.width, arena.height, (x, y), (nx, ny))
                if steps is None:  # pragma: no cover - the lattice is always connected
                    continue
                cx, cy = x, y
                for step in steps:
                    cx, cy = arena.open_wall(cx, cy, step)
                logger.info("Connected (%d,%d) to visited cell (%d,%d) via %d steps", x, y, nx, ny, len(steps))
                return nx, ny

    logger.error("No visited cell within reach of (%d,%d) in %dx%d maze", x, y, arena.width, arena.height)
    raise MazeConsistencyError(f"Cannot connect cell ({x}, {y}): no visited cell found")


__all__ = ["MazeBuilder", "connect_exit", "connect_to_nearest_visited", "EXIT_NEIGHBOR_PRIORITY"]

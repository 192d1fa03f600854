from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Tuple

logger = logging.getLogger(__name__)


class Direction(Enum):
    """The four cell sides, in the canonical order top, right, bottom, left."""

    TOP = (0, -1)
    RIGHT = (1, 0)
    BOTTOM = (0, 1)
    LEFT = (-1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITE[self]


_OPPOSITE = {
    Direction.TOP: Direction.BOTTOM,
    Direction.RIGHT: Direction.LEFT,
    Direction.BOTTOM: Direction.TOP,
    Direction.LEFT: Direction.RIGHT,
}


@dataclass(frozen=True)
class Cell:
    """Wall flags of one grid square. ``True`` means passage, ``False`` means wall."""

    top: bool = False
    right: bool = False
    bottom: bool = False
    left: bool = False

    def is_open(self, direction: Direction) -> bool:
        return getattr(self, direction.name.lower())

    @property
    def open_count(self) -> int:
        return sum(1 for d in Direction if self.is_open(d))


@dataclass(frozen=True)
class Grid:
    """Immutable maze grid.

    Coordinates are (x, y) with (0,0) at top-left; x grows to the right, y grows down.
    """

    width: int
    height: int
    cells: Tuple[Tuple[Cell, ...], ...]  # cells[y][x]

    @property
    def entry(self) -> Tuple[int, int]:
        return (0, 0)

    @property
    def exit(self) -> Tuple[int, int]:
        return (self.width - 1, self.height - 1)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def cell(self, x: int, y: int) -> Cell:
        if not self.in_bounds(x, y):
            raise IndexError(f"Cell out of bounds: ({x}, {y}) for grid {self.width}x{self.height}")
        return self.cells[y][x]

    def neighbors(self, x: int, y: int) -> Iterator[Tuple[Direction, int, int]]:
        """Yield in-bounds lattice neighbours, walls ignored, in canonical direction order."""
        for d in Direction:
            nx, ny = x + d.dx, y + d.dy
            if self.in_bounds(nx, ny):
                yield d, nx, ny

    def passages(self, x: int, y: int) -> Iterator[Tuple[int, int]]:
        """Yield neighbours reachable from (x, y) through an open wall."""
        cell = self.cell(x, y)
        for d, nx, ny in self.neighbors(x, y):
            if cell.is_open(d):
                yield nx, ny

    def to_lines(self) -> List[str]:
        """Render the maze as ASCII art (``+``/``-``/``|`` walls), for debugging and the CLI."""
        rows: List[str] = []
        for y in range(self.height):
            top = "+"
            mid = "|" if not self.cells[y][0].left else " "
            for x in range(self.width):
                c = self.cells[y][x]
                top += ("   " if c.top else "---") + "+"
                mid += "   " + ("|" if not c.right else " ")
            rows.append(top)
            rows.append(mid)
        bottom = "+"
        for x in range(self.width):
            bottom += ("   " if self.cells[self.height - 1][x].bottom else "---") + "+"
        rows.append(bottom)
        return rows

    def signature(self) -> str:
        """Deterministic digest of the wall layout."""
        payload = {
            "w": self.width,
            "h": self.height,
            "cells": [[(c.top, c.right, c.bottom, c.left) for c in row] for row in self.cells],
        }
        h = hashlib.blake2b(str(payload).encode("utf-8"), digest_size=16)
        return h.hexdigest()


class MazeArena:
    """Mutable workspace used while carving: wall flags plus the ``visited`` marks.

    Only the builder mutates it; ``freeze()`` produces the immutable :class:`Grid`
    and the arena is thrown away afterwards.
    """

    def __init__(self, width: int, height: int) -> None:
        if width < 1 or height < 1:
            raise ValueError("Maze dimensions must be positive")
        self.width = width
        self.height = height
        # walls[y][x][direction] -> passage flag
        self.walls: List[List[dict]] = [
            [{d: False for d in Direction} for _ in range(width)] for _ in range(height)
        ]
        self.visited: List[List[bool]] = [[False] * width for _ in range(height)]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_visited(self, x: int, y: int) -> bool:
        return self.in_bounds(x, y) and self.visited[y][x]

    def mark_visited(self, x: int, y: int) -> None:
        self.visited[y][x] = True

    def open_wall(self, x: int, y: int, direction: Direction) -> Tuple[int, int]:
        """Open the wall pair between (x, y) and its neighbour; returns the neighbour."""
        nx, ny = x + direction.dx, y + direction.dy
        if not (self.in_bounds(x, y) and self.in_bounds(nx, ny)):
            raise IndexError(f"Cannot open {direction.name} wall of ({x}, {y}) in {self.width}x{self.height} arena")
        self.walls[y][x][direction] = True
        self.walls[ny][nx][direction.opposite] = True
        return nx, ny

    def freeze(self) -> Grid:
        cells = tuple(
            tuple(
                Cell(
                    top=w[Direction.TOP],
                    right=w[Direction.RIGHT],
                    bottom=w[Direction.BOTTOM],
                    left=w[Direction.LEFT],
                )
                for w in row
            )
            for row in self.walls
        )
        return Grid(self.width, self.height, cells)


__all__ = ["Direction", "Cell", "Grid", "MazeArena"]

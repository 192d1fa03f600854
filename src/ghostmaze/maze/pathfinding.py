from collections import deque
from typing import Dict, List, Optional, Set, Tuple

from .cells import Direction, Grid

Coord = Tuple[int, int]


def lattice_path(width: int, height: int, start: Coord, goal: Coord) -> Optional[List[Direction]]:
    """Breadth-first shortest path over the bare 4-neighbour lattice (walls ignored).

    Returns the list of steps from ``start`` to ``goal``; neighbours are expanded
    in top, right, bottom, left order so the result is deterministic.
    """
    parents: Dict[Coord, Tuple[Coord, Direction]] = {}
    seen = {start}
    q = deque([start])
    while q:
        x, y = q.popleft()
        if (x, y) == goal:
            steps: List[Direction] = []
            cur = goal
            while cur != start:
                prev, d = parents[cur]
                steps.append(d)
                cur = prev
            steps.reverse()
            return steps
        for d in Direction:
            nx, ny = x + d.dx, y + d.dy
            if 0 <= nx < width and 0 <= ny < height and (nx, ny) not in seen:
                seen.add((nx, ny))
                parents[(nx, ny)] = ((x, y), d)
                q.append((nx, ny))
    return None


def reachable_cells(grid: Grid, start: Coord = (0, 0)) -> Set[Coord]:
    """Flood fill through open passages; returns every cell connected to ``start``."""
    seen = {start}
    q = deque([start])
    while q:
        x, y = q.popleft()
        for n in grid.passages(x, y):
            if n not in seen:
                seen.add(n)
                q.append(n)
    return seen


def find_path(grid: Grid, start: Coord, goal: Coord) -> Optional[List[Coord]]:
    """Shortest walkable route through passages, inclusive of both ends; None if unreachable."""
    parents: Dict[Coord, Coord] = {}
    seen = {start}
    q = deque([start])
    while q:
        cur = q.popleft()
        if cur == goal:
            path = [cur]
            while cur != start:
                cur = parents[cur]
                path.append(cur)
            path.reverse()
            return path
        for n in grid.passages(*cur):
            if n not in seen:
                seen.add(n)
                parents[n] = cur
                q.append(n)
    return None

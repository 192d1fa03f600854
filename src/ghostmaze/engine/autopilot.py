from __future__ import annotations

import logging
import math
from typing import List, Optional

from ..maze.geometry import MazeLayout, Vec2, cell_center, world_to_cell
from ..maze.pathfinding import find_path
from .session import GameSession

logger = logging.getLogger(__name__)

ARRIVAL_EPSILON = 1e-6


class Autopilot:
    """Steers the ghost along the shortest passage route to the exit.

    Waypoints are cell centres, so the ghost always travels down the middle of
    corridors and never brushes a wall. The route is recomputed whenever the
    session switches to a new maze. Used by the headless runner and tests.
    """

    def __init__(self, session: GameSession) -> None:
        self.session = session
        self._layout: Optional[MazeLayout] = None
        self._waypoints: List[Vec2] = []

    def _plan(self, layout: MazeLayout) -> None:
        grid = layout.grid
        start = world_to_cell(self.session.position, grid.width, grid.height)
        path = find_path(grid, start, grid.exit)
        if path is None:
            logger.error("Autopilot found no route from %s to %s", start, grid.exit)
            self._waypoints = []
        else:
            self._waypoints = [cell_center(x, y, grid.width, grid.height) for x, y in path]
            logger.debug("Autopilot planned %d waypoints", len(self._waypoints))
        self._layout = layout

    def __call__(self, dt: float) -> Vec2:
        """Movement direction for the next ``session.update(dt, ...)``."""
        layout = self.session.layout
        if layout is None:
            return Vec2(0.0, 0.0)
        if layout is not self._layout:
            self._plan(layout)

        pos = self.session.position
        while self._waypoints and pos.distance_to(self._waypoints[0]) < ARRIVAL_EPSILON:
            self._waypoints.pop(0)
        if not self._waypoints:
            return Vec2(0.0, 0.0)

        target = self._waypoints[0]
        dx, dz = target.x - pos.x, target.z - pos.z
        dist = math.hypot(dx, dz)
        step = self.session.step_length(dt)
        # Shorten the last bit so the ghost lands exactly on the waypoint.
        scale = 1.0 if step <= dist or step == 0 else dist / step
        return Vec2(dx / dist * scale, dz / dist * scale)


__all__ = ["Autopilot"]

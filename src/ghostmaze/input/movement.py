from __future__ import annotations

import math
from typing import Set

from ..maze.geometry import Vec2
from .actions import STEERING, MazeAction


class MovementInput:
    """Tracks held movement keys and turns them into a direction.

    When opposite keys are held, down beats up and right beats left. Diagonals
    are normalised so moving at an angle is not faster.
    """

    def __init__(self) -> None:
        self._held: Set[MazeAction] = set()

    def press(self, action: MazeAction) -> bool:
        """Hold ``action``; returns False for non-movement actions, which are left to the caller."""
        if not action.is_movement:
            return False
        self._held.add(action)
        return True

    def release(self, action: MazeAction) -> bool:
        if not action.is_movement:
            return False
        self._held.discard(action)
        return True

    def clear(self) -> None:
        self._held.clear()

    def vector(self) -> Vec2:
        axes = {"x": 0.0, "z": 0.0}
        # STEERING order is up, down, left, right: the later key on an axis wins
        for action, (axis, sign) in STEERING.items():
            if action in self._held:
                axes[axis] = sign
        x, z = axes["x"], axes["z"]
        if x != 0 and z != 0:
            length = math.hypot(x, z)
            x /= length
            z /= length
        return Vec2(x, z)


__all__ = ["MovementInput"]

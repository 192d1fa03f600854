from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple


class MazeAction(Enum):
    """What a key does in the maze. Values match the ``controls`` settings keys."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    CONFIRM = "confirm"  # next level, or a new run after game over
    QUIT = "quit"

    @property
    def is_movement(self) -> bool:
        return self in STEERING


# Movement action -> (axis, sign) on the floor plane; "up" is toward -z.
STEERING: Dict[MazeAction, Tuple[str, float]] = {
    MazeAction.UP: ("z", -1.0),
    MazeAction.DOWN: ("z", 1.0),
    MazeAction.LEFT: ("x", -1.0),
    MazeAction.RIGHT: ("x", 1.0),
}


__all__ = ["MazeAction", "STEERING"]

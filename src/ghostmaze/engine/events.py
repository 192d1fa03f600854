from enum import Enum, auto


class GameEvent(Enum):
    """Events emitted by GameSession to notify UI, audio or feedback systems."""

    LEVEL_STARTED = auto()
    ACTOR_MOVED = auto()
    GOAL_NEAR = auto()
    GOAL_FAR = auto()
    LEVEL_COMPLETE = auto()
    GAME_OVER = auto()

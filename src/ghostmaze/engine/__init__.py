from .autopilot import Autopilot
from .events import GameEvent
from .levels import level_score, maze_size_for_level, time_limit_for_level
from .loop import GameLoop, LoopConfig
from .session import GameSession

__all__ = [
    "Autopilot",
    "GameEvent",
    "GameLoop",
    "GameSession",
    "LoopConfig",
    "level_score",
    "maze_size_for_level",
    "time_limit_for_level",
]

"""Difficulty curve: how maze size, time limit and score scale with the level number."""
from __future__ import annotations

import math

from ..settings import MazeSettings, ScoreSettings, TimerSettings


def maze_size_for_level(level: int, maze: MazeSettings) -> int:
    """Side length of the square maze for ``level`` (1-based).

    Grows by one cell every ``levels_per_step`` levels, capped at ``max_size`` and
    never below ``min_size``.
    """
    size = min(maze.base_size + max(level, 0) // maze.levels_per_step, maze.max_size)
    return max(size, maze.min_size)


def time_limit_for_level(level: int, timer: TimerSettings) -> float:
    """Countdown for ``level``: shrinks by a fixed penalty per level down to a floor."""
    return max(timer.min_time, timer.base_time - (max(level, 1) - 1) * timer.penalty_per_level)


def level_score(level: int, time_remaining: float, score: ScoreSettings) -> int:
    """Points for clearing ``level`` with ``time_remaining`` seconds on the clock.

    The clock counts whole seconds, so partially elapsed seconds still count.
    """
    seconds = max(0, math.ceil(time_remaining))
    return level * score.level_bonus + seconds * score.time_bonus


__all__ = ["maze_size_for_level", "time_limit_for_level", "level_score"]

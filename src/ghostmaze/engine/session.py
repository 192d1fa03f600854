from __future__ import annotations

import logging
from typing import Callable, List, Optional

from ..core.rng import RandomSource
from ..maze.builder import MazeBuilder
from ..maze.geometry import MazeLayout, Vec2, build_layout
from ..navigation.collision import NearestWall, nearest_wall, resolve
from ..settings import Settings
from .events import GameEvent
from .levels import level_score, maze_size_for_level, time_limit_for_level

logger = logging.getLogger(__name__)

Listener = Callable[[GameEvent, "GameSession"], None]


class GameSession:
    """Holds the run state: level, score, countdown, maze layout and ghost position.

    Rendering and input stay outside; callers feed ``update`` a time step and a
    movement direction and read the state back. A new maze is generated for
    every level and the previous one is discarded.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        rng: Optional[RandomSource] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.settings = settings or Settings()
        self._builder = MazeBuilder(rng if rng is not None else RandomSource(seed))
        self._listeners: List[Listener] = []

        self.level: int = 1
        self.score: int = 0
        self.time_remaining: float = 0.0
        self.running: bool = False
        self.is_level_complete: bool = False
        self.is_game_over: bool = False
        self.beckoning: bool = False
        self.layout: Optional[MazeLayout] = None
        self.position: Vec2 = Vec2(0.0, 0.0)

    def add_listener(self, listener: Listener) -> None:
        """Subscribe to game events (movement, level transitions, goal proximity)."""
        self._listeners.append(listener)

    def _emit(self, event: GameEvent) -> None:
        for l in list(self._listeners):
            try:
                l(event, self)
            except Exception as ex:  # pragma: no cover - listeners shouldn't crash engine
                logger.exception("Listener errored on %s: %s", event, ex)

    # ---- Lifecycle -------------------------------------------------------
    def start(self) -> None:
        """Begin a fresh run at level 1."""
        self.level = 1
        self.score = 0
        self.is_game_over = False
        self.is_level_complete = False
        self.time_remaining = time_limit_for_level(self.level, self.settings.timer)
        self._generate_level()
        self.running = True
        logger.info("Game started (time=%.0fs)", self.time_remaining)

    def restart(self) -> None:
        """Throw away the current run and maze and start over."""
        logger.info("Restarting game from level %d (score=%d)", self.level, self.score)
        self.start()

    def continue_to_next_level(self) -> bool:
        """Advance after a completed level. Returns False if there is nothing to continue."""
        if not self.is_level_complete:
            logger.debug("continue_to_next_level() called with no completed level; ignored")
            return False
        self.level += 1
        self.time_remaining = time_limit_for_level(self.level, self.settings.timer)
        self.is_level_complete = False
        self._generate_level()
        self.running = True
        return True

    def _generate_level(self) -> None:
        size = maze_size_for_level(self.level, self.settings.maze)
        grid = self._builder.generate(size, size)
        self.layout = build_layout(grid)
        self.position = self.layout.entry
        self.beckoning = False
        logger.info("Level %d: %dx%d maze, %d walls", self.level, size, size, len(self.layout.walls))
        self._emit(GameEvent.LEVEL_STARTED)

    # ---- Simulation ------------------------------------------------------
    def clamp_dt(self, dt: float) -> float:
        return min(max(dt, 0.0), self.settings.movement.max_delta_time)

    def step_length(self, dt: float) -> float:
        """World distance a unit movement vector covers in one ``update(dt)``."""
        return self.settings.movement.speed * self.clamp_dt(dt)

    def update(self, dt: float, movement: Vec2 = Vec2(0.0, 0.0)) -> None:
        """Advance one tick.

        Args:
            dt: Seconds since the previous tick; clamped to ``max_delta_time``.
            movement: Requested direction (unit length or shorter), world axes.
        """
        if not self.running or self.layout is None:
            return
        dt = self.clamp_dt(dt)

        if not movement.is_zero:
            step = self.settings.movement.speed * dt
            mv = self.settings.movement
            new_pos = resolve(
                self.position,
                Vec2(movement.x * step, movement.z * step),
                self.layout.walls,
                mv.actor_radius,
                mv.collision_padding,
            )
            if new_pos != self.position:
                self.position = new_pos
                self._emit(GameEvent.ACTOR_MOVED)

        distance = self.distance_to_goal
        if distance < self.settings.goal.beckon_distance:
            if not self.beckoning:
                self.beckoning = True
                self._emit(GameEvent.GOAL_NEAR)
        elif self.beckoning:
            self.beckoning = False
            self._emit(GameEvent.GOAL_FAR)

        if distance < self.settings.goal.reach_distance:
            self._complete_level()
            return

        self.time_remaining -= dt
        if self.time_remaining <= 0:
            self.time_remaining = 0.0
            self._game_over()

    def _complete_level(self) -> None:
        if self.is_level_complete:
            return
        self.running = False
        self.is_level_complete = True
        gained = level_score(self.level, self.time_remaining, self.settings.score)
        self.score += gained
        logger.info("Level %d complete: +%d (score=%d)", self.level, gained, self.score)
        self._emit(GameEvent.LEVEL_COMPLETE)

    def _game_over(self) -> None:
        if self.is_game_over:
            return
        self.running = False
        self.is_game_over = True
        logger.info("Game over at level %d (score=%d)", self.level, self.score)
        self._emit(GameEvent.GAME_OVER)

    # ---- Queries ---------------------------------------------------------
    @property
    def goal(self) -> Vec2:
        if self.layout is None:
            raise RuntimeError("No level generated; call start() first")
        return self.layout.exit

    @property
    def distance_to_goal(self) -> float:
        return self.position.distance_to(self.goal)

    def nearest_wall(self) -> NearestWall:
        """Closest wall to the ghost, for proximity feedback."""
        if self.layout is None:
            return nearest_wall(self.position, ())
        return nearest_wall(self.position, self.layout.walls)


__all__ = ["GameSession"]

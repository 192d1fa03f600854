from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from ..maze.geometry import Vec2
from .session import GameSession

logger = logging.getLogger(__name__)

MovementSource = Callable[[float], Vec2]


@dataclass
class LoopConfig:
    """Configuration for the headless game loop.

    Attributes:
        tick_rate: Target updates per second for the loop. If 0 or None, updates as fast as possible.
        max_steps: If provided and > 0, the loop will automatically stop after this many updates.
        fixed_dt: If set, every tick advances the session by exactly this many seconds
            instead of the measured wall-clock time (deterministic runs).
        auto_continue: Start the next level as soon as one is completed.
    """

    tick_rate: float = 60.0
    max_steps: Optional[int] = None
    fixed_dt: Optional[float] = None
    auto_continue: bool = True


class GameLoop:
    """Drives a GameSession tick by tick from a movement source.

    Keeps timing apart from any rendering backend so it can be tested and run
    in a console; the arcade window drives the session directly instead.
    """

    def __init__(self, session: GameSession, movement: MovementSource, config: Optional[LoopConfig] = None) -> None:
        self.session = session
        self.movement = movement
        self.config = config or LoopConfig()
        self._running: bool = False
        self._step: int = 0
        self._last_time: Optional[float] = None

    @property
    def running(self) -> bool:
        return self._running

    @property
    def step(self) -> int:
        return self._step

    def start(self) -> None:
        """Start the loop and, if needed, the session.

        Safe to call multiple times; subsequent calls are no-ops.
        """
        if self._running:
            logger.debug("GameLoop.start() called while already running")
            return
        if self.session.layout is None:
            self.session.start()
        self._running = True
        self._step = 0
        self._last_time = time.perf_counter()
        logger.info("GameLoop started (tick_rate=%s, max_steps=%s)", self.config.tick_rate, self.config.max_steps)

    def stop(self) -> None:
        """Stop the loop gracefully."""
        if not self._running:
            return
        self._running = False
        logger.info("GameLoop stopped at step=%s", self._step)

    def update(self, dt: float) -> None:
        """Perform a single update tick.

        Args:
            dt: Delta time in seconds since last update.
        """
        if not self._running:
            logger.debug("update() called while not running; ignored")
            return
        if self.config.fixed_dt is not None:
            dt = self.config.fixed_dt
        self._step += 1
        self.session.update(dt, self.movement(dt))

        if self.session.is_level_complete:
            if not self.config.auto_continue:
                self.stop()
                return
            self.session.continue_to_next_level()
        elif self.session.is_game_over:
            self.stop()
            return

        if self.config.max_steps is not None and self._step >= self.config.max_steps:
            self.stop()

    def run(self) -> None:
        """Run a blocking loop until stopped, the game ends, or max_steps is reached."""
        self.start()
        target_dt = 0.0
        if self.config.tick_rate and self.config.tick_rate > 0:
            target_dt = 1.0 / float(self.config.tick_rate)

        while self._running:
            now = time.perf_counter()
            if self._last_time is None:
                dt = 0.0
            else:
                dt = now - self._last_time
            self._last_time = now

            self.update(dt)

            if target_dt > 0:
                elapsed = time.perf_counter() - now
                remaining = target_dt - elapsed
                if remaining > 0:
                    time.sleep(remaining)

        logger.info("Loop complete (steps=%d, level=%d, score=%d)", self._step, self.session.level, self.session.score)


__all__ = ["GameLoop", "LoopConfig", "MovementSource"]

from __future__ import annotations

import logging
import math
import os
from typing import Optional

from .core.rng import RandomSource
from .engine.autopilot import Autopilot
from .engine.events import GameEvent
from .engine.loop import GameLoop, LoopConfig
from .engine.session import GameSession
from .input.actions import MazeAction
from .input.keymap import KeyMap
from .input.movement import MovementInput
from .maze.builder import MazeBuilder
from .settings import Settings

logger = logging.getLogger(__name__)

HEADLESS_DT = 1.0 / 60.0


def _arcade_available() -> bool:
    try:
        import arcade  # noqa: F401
        return True
    except Exception:
        return False


def print_maze(width: int, height: int, seed: Optional[int] = None) -> int:
    """Generate a single maze and print it as ASCII art."""
    grid = MazeBuilder(RandomSource(seed)).generate(width, height)
    for line in grid.to_lines():
        print(line)
    print(f"signature={grid.signature()}")
    return 0


def handle_action(session: GameSession, movement: MovementInput, action: MazeAction, pressed: bool) -> bool:
    """Apply one key press or release to the game; returns True when the player quits."""
    if not pressed:
        movement.release(action)
        return False
    if movement.press(action):
        return False
    if action is MazeAction.QUIT:
        return True
    if action is MazeAction.CONFIRM:
        if session.is_level_complete:
            session.continue_to_next_level()
        elif session.is_game_over:
            session.restart()
    return False


def run_gui(
    settings: Optional[Settings] = None,
    seed: Optional[int] = None,
    max_steps: Optional[int] = None,
    tick_rate: float = 0.0,
    require_arcade: bool = False,
) -> int:
    """Play in an arcade window.

    Without arcade this falls back to headless mode, unless ``require_arcade``
    is set, in which case it logs an error and returns 1.

    Returns:
        Process exit code (0 on success).
    """
    if not _arcade_available():
        if require_arcade:
            logger.error("GUI mode requested but arcade is not installed")
            return 1
        logger.warning("Arcade not available; falling back to headless mode")
        return run_headless(settings=settings, seed=seed, max_steps=max_steps, tick_rate=tick_rate)

    import arcade

    settings = settings or Settings.load()
    session = GameSession(settings, seed=seed)
    keymap = KeyMap(settings.controls)
    learned = keymap.learn_codes(arcade.key)
    logger.debug("Learned %d arcade key codes", learned)
    update_rate = 1.0 / tick_rate if tick_rate and tick_rate > 0 else 1.0 / 60.0

    class MazeWindow(arcade.Window):
        def __init__(self) -> None:
            win = settings.window
            super().__init__(win.width, win.height, title=win.title, update_rate=update_rate)
            self.background_color = arcade.color.BLACK
            self.session = session
            self.movement = MovementInput()
            self.ticks = 0
            session.add_listener(self._on_event)
            session.start()

        def _on_event(self, event: GameEvent, state: GameSession) -> None:
            if event is GameEvent.LEVEL_STARTED:
                self.set_caption(f"{settings.window.title} - Level {state.level}")

        def _to_screen(self, x: float, z: float):
            layout = self.session.layout
            ew, eh = layout.extent
            scale = 0.9 * min(self.width / ew, (self.height - 40) / eh)
            return self.width / 2 + x * scale, (self.height - 40) / 2 - z * scale, scale

        def on_draw(self):
            self.clear()
            layout = self.session.layout
            if layout is None:
                return
            for wall in layout.walls:
                x1, y1, _ = self._to_screen(wall.x1, wall.z1)
                x2, y2, _ = self._to_screen(wall.x2, wall.z2)
                arcade.draw_line(x1, y1, x2, y2, (153, 153, 153), 2)

            gx, gy, scale = self._to_screen(layout.exit.x, layout.exit.z)
            goal_color = (255, 120, 200) if self.session.beckoning else (200, 80, 160)
            arcade.draw_circle_filled(gx, gy, 0.3 * scale, goal_color)
            px, py, _ = self._to_screen(self.session.position.x, self.session.position.z)
            arcade.draw_circle_filled(px, py, settings.movement.actor_radius * scale, (255, 255, 255))

            hud = f"Level {self.session.level}   Score {self.session.score}   Time {math.ceil(self.session.time_remaining)}"
            arcade.draw_text(hud, 10, self.height - 28, (204, 204, 204), 16)
            if self.session.is_level_complete:
                arcade.draw_text("Level complete! Press Enter", 10, 10, (120, 220, 120), 18)
            elif self.session.is_game_over:
                arcade.draw_text(f"Game over - score {self.session.score}. Press Enter", 10, 10, (220, 90, 90), 18)

        def on_update(self, delta_time: float):
            self.session.update(delta_time, self.movement.vector())
            self.ticks += 1
            if max_steps is not None and self.ticks >= max_steps:
                self.close()

        def _on_key(self, symbol: int, pressed: bool) -> None:
            action = keymap.action_for(symbol)
            if action is not None and handle_action(self.session, self.movement, action, pressed):
                self.close()

        def on_key_press(self, symbol: int, modifiers: int):
            self._on_key(symbol, True)

        def on_key_release(self, symbol: int, modifiers: int):
            self._on_key(symbol, False)

    MazeWindow()
    try:
        logger.info("Launching Arcade window")
        arcade.run()
        logger.info("Arcade loop finished")
        return 0
    except Exception:
        logger.exception("Unhandled exception in GUI loop; exiting with code 1")
        return 1


def run_headless(
    settings: Optional[Settings] = None,
    seed: Optional[int] = None,
    max_steps: Optional[int] = 600,
    tick_rate: float = 0.0,
) -> int:
    """Let the autopilot play in the console for a bounded number of ticks."""
    if max_steps is None:
        # Safety in CI/headless: always bound the loop
        max_steps = 600

    print("Ghost Maze (headless)")
    session = GameSession(settings or Settings.load(), seed=seed)
    session.start()
    for line in session.layout.grid.to_lines():
        print(line)

    loop = GameLoop(
        session,
        Autopilot(session),
        LoopConfig(tick_rate=tick_rate, max_steps=max_steps, fixed_dt=HEADLESS_DT),
    )
    try:
        loop.run()
        print(f"Loop complete (steps={loop.step}, level={session.level}, score={session.score})")
        return 0
    except KeyboardInterrupt:
        loop.stop()
        print("Interrupted by user")
        return 130
    except Exception:
        logger.exception("Unhandled exception in headless loop")
        return 1


def run_auto(
    settings: Optional[Settings] = None,
    seed: Optional[int] = None,
    max_steps: Optional[int] = None,
    tick_rate: float = 0.0,
) -> int:
    """Run GUI if available and not explicitly overridden, else headless.

    Honors environment overrides:
      - GM_HEADLESS=1 forces headless.
      - GM_GUI=1 forces GUI and fails with exit code 1 when arcade is missing.
    """
    if os.getenv("GM_HEADLESS") == "1":
        return run_headless(settings=settings, seed=seed, max_steps=max_steps, tick_rate=tick_rate)
    require_arcade = os.getenv("GM_GUI") == "1"
    return run_gui(settings=settings, seed=seed, max_steps=max_steps, tick_rate=tick_rate, require_arcade=require_arcade)

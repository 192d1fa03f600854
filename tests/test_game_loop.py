from __future__ import annotations

import pytest

from ghostmaze.engine.loop import GameLoop, LoopConfig
from ghostmaze.engine.session import GameSession
from ghostmaze.maze.geometry import Vec2
from ghostmaze.settings import Settings, TimerSettings


def idle(dt: float) -> Vec2:
    return Vec2(0.0, 0.0)


def test_loop_runs_exact_steps():
    session = GameSession(seed=1)
    loop = GameLoop(session, idle, LoopConfig(tick_rate=0, max_steps=5))
    loop.run()
    assert loop.step == 5
    assert loop.running is False
    assert session.level == 1


def test_loop_starts_session_lazily():
    session = GameSession(seed=1)
    assert session.layout is None
    loop = GameLoop(session, idle, LoopConfig(tick_rate=0, max_steps=2))
    loop.start()
    assert session.layout is not None
    loop.update(0.016)
    loop.update(0.016)
    assert loop.step == 2
    assert loop.running is False


def test_fixed_dt_overrides_measured_time():
    session = GameSession(seed=1)
    loop = GameLoop(session, idle, LoopConfig(tick_rate=0, max_steps=10, fixed_dt=0.1))
    loop.run()
    assert session.time_remaining == pytest.approx(59.0)


def test_loop_stops_on_game_over():
    settings = Settings(timer=TimerSettings(base_time=0.5, penalty_per_level=0, min_time=0.5))
    session = GameSession(settings, seed=1)
    loop = GameLoop(session, idle, LoopConfig(tick_rate=0, max_steps=1000, fixed_dt=0.1))
    loop.run()
    assert session.is_game_over is True
    assert loop.step <= 6


def test_update_ignored_when_not_running():
    session = GameSession(seed=1)
    loop = GameLoop(session, idle, LoopConfig(tick_rate=0, max_steps=3))
    loop.update(0.1)
    assert loop.step == 0
    assert session.layout is None

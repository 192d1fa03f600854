import pytest

from ghostmaze.engine.autopilot import Autopilot
from ghostmaze.engine.events import GameEvent
from ghostmaze.engine.loop import GameLoop, LoopConfig
from ghostmaze.engine.session import GameSession
from ghostmaze.maze.geometry import Vec2
from ghostmaze.settings import Settings, TimerSettings


def make_session(seed=123, settings=None):
    session = GameSession(settings or Settings(), seed=seed)
    events = []
    session.add_listener(lambda e, s: events.append(e))
    session.start()
    return session, events


def test_start_places_ghost_at_entry():
    session, events = make_session()
    assert session.level == 1
    assert session.score == 0
    assert session.time_remaining == 60
    assert session.running is True
    assert session.layout.grid.width == 10
    assert session.position == session.layout.entry
    assert events == [GameEvent.LEVEL_STARTED]


def test_timer_counts_down_with_clamped_dt():
    session, _ = make_session()
    session.update(0.05)
    assert session.time_remaining == pytest.approx(59.95)
    # A long frame hitch only advances by max_delta_time
    session.update(5.0)
    assert session.time_remaining == pytest.approx(59.85)


def test_outer_walls_block_movement():
    session, events = make_session()
    start = session.position
    session.update(0.1, Vec2(0.0, -1.0))
    session.update(0.1, Vec2(-1.0, 0.0))
    assert session.position == start
    assert GameEvent.ACTOR_MOVED not in events


def test_movement_is_scaled_by_speed_and_dt():
    session, events = make_session()
    grid = session.layout.grid
    start = session.position
    # Head through whichever side of the entry cell is open
    if grid.cell(0, 0).right:
        session.update(0.1, Vec2(1.0, 0.0))
        assert session.position.x == pytest.approx(start.x + 0.35)
        assert session.position.z == start.z
    else:
        session.update(0.1, Vec2(0.0, 1.0))
        assert session.position.z == pytest.approx(start.z + 0.35)
        assert session.position.x == start.x
    assert GameEvent.ACTOR_MOVED in events


def test_reaching_goal_completes_level_and_scores():
    session, events = make_session()
    goal = session.goal
    session.position = Vec2(goal.x - 0.5, goal.z)
    session.update(0.016)
    assert session.is_level_complete is True
    assert session.running is False
    assert session.score == 100 + 60 * 10
    assert events[-2:] == [GameEvent.GOAL_NEAR, GameEvent.LEVEL_COMPLETE]

    # Further updates are ignored until continuing
    session.update(0.1, Vec2(1.0, 0.0))
    assert session.score == 700


def test_goal_proximity_events_toggle():
    session, events = make_session()
    goal = session.goal
    session.position = Vec2(goal.x - 1.0, goal.z)
    session.update(0.0)
    assert session.beckoning is True
    session.position = session.layout.entry
    session.update(0.0)
    assert session.beckoning is False
    assert events[-2:] == [GameEvent.GOAL_NEAR, GameEvent.GOAL_FAR]


def test_continue_to_next_level_regenerates_bigger_maze():
    session, events = make_session()
    assert session.continue_to_next_level() is False

    first_layout = session.layout
    session.position = session.goal
    session.update(0.016)
    assert session.continue_to_next_level() is True
    assert session.level == 2
    assert session.time_remaining == 55
    assert session.layout is not first_layout
    assert session.layout.grid.width == 11
    assert session.position == session.layout.entry
    assert session.running is True
    assert events.count(GameEvent.LEVEL_STARTED) == 2


def test_timer_expiry_ends_game():
    settings = Settings(timer=TimerSettings(base_time=1, penalty_per_level=0, min_time=1))
    session, events = make_session(settings=settings)
    for _ in range(20):
        session.update(0.1)
    assert session.is_game_over is True
    assert session.running is False
    assert session.time_remaining == 0
    assert events.count(GameEvent.GAME_OVER) == 1


def test_restart_resets_run():
    session, _ = make_session()
    session.position = session.goal
    session.update(0.016)
    session.continue_to_next_level()
    session.restart()
    assert session.level == 1
    assert session.score == 0
    assert session.time_remaining == 60
    assert session.layout.grid.width == 10


def test_nearest_wall_feedback():
    session, _ = make_session()
    result = session.nearest_wall()
    # Entry sits in the middle of a 1x1 cell: every wall is half a cell away
    assert result.distance == pytest.approx(0.5)
    assert result.wall is not None


def test_same_seed_same_levels():
    a, _ = make_session(seed=77)
    b, _ = make_session(seed=77)
    assert a.layout == b.layout


def test_autopilot_solves_first_level():
    session, _ = make_session(seed=7)
    loop = GameLoop(
        session,
        Autopilot(session),
        LoopConfig(tick_rate=0, max_steps=5000, fixed_dt=1 / 60, auto_continue=False),
    )
    loop.run()
    assert session.is_level_complete is True
    assert session.is_game_over is False
    assert loop.step < 5000
    assert session.score > 100


def test_autopilot_plays_through_levels():
    # Generous clock so only the step budget ends the run
    settings = Settings(timer=TimerSettings(base_time=600, penalty_per_level=5, min_time=300))
    session, events = make_session(seed=31, settings=settings)
    loop = GameLoop(
        session,
        Autopilot(session),
        LoopConfig(tick_rate=0, max_steps=12000, fixed_dt=1 / 60),
    )
    loop.run()
    assert session.is_game_over is False
    assert session.level >= 3
    assert events.count(GameEvent.LEVEL_COMPLETE) >= 2

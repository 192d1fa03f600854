from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from ghostmaze.errors import ConfigError, GhostMazeError
from ghostmaze.settings import MovementSettings, Settings


def write(tmp_path: Path, body: str) -> Path:
    path = tmp_path / "settings.yaml"
    path.write_text(textwrap.dedent(body), encoding="utf-8")
    return path


def test_packaged_defaults_match_dataclass_defaults():
    assert Settings.load() == Settings()


def test_user_overlay_is_deep_merged(tmp_path):
    path = write(
        tmp_path,
        """
        movement:
          speed: 5.0
        timer:
          base_time: 90
        """,
    )
    settings = Settings.load(path)
    assert settings.movement.speed == 5.0
    assert settings.movement.actor_radius == 0.3
    assert settings.timer.base_time == 90
    assert settings.timer.min_time == 30
    assert settings.maze.max_size == 20


def test_missing_user_file_falls_back_to_defaults(tmp_path, caplog):
    with caplog.at_level("WARNING"):
        settings = Settings.load(tmp_path / "nope.yaml")
    assert settings == Settings()
    assert "not found" in caplog.text


def test_padding_must_stay_below_radius(tmp_path):
    path = write(
        tmp_path,
        """
        movement:
          actor_radius: 0.3
          collision_padding: 0.3
        """,
    )
    with pytest.raises(ConfigError):
        Settings.load(path)


def test_unknown_key_is_config_error(tmp_path):
    path = write(tmp_path, "maze:\n  depth: 3\n")
    with pytest.raises(GhostMazeError):
        Settings.load(path)


def test_inconsistent_maze_sizes_rejected():
    settings = Settings()
    settings.maze.base_size = 30
    with pytest.raises(ConfigError):
        settings.validate()


def test_save_then_load(tmp_path):
    settings = Settings(movement=MovementSettings(speed=2.0))
    path = tmp_path / "out" / "settings.yaml"
    settings.save(path)
    assert Settings.load(path) == settings


@pytest.mark.parametrize(
    "body,fragment",
    [
        ("- maze\n- timer\n", "mapping of sections"),
        ("movement: [1, 2\n", "not valid YAML"),
        ("maze:\n  base_size: ten\n", "maze.base_size must be an integer"),
        ("movement:\n  speed: fast\n", "movement.speed must be a number"),
        ("movement:\n  speed: true\n", "movement.speed must be a number"),
        ("window:\n  title: 42\n", "window.title must be a string"),
        ("timer: 30\n", "section 'timer' must be a mapping"),
        ("sound:\n  volume: 1\n", "Unknown settings section"),
        ("controls:\n  up: W\n", "controls.up must be a list of key names"),
    ],
)
def test_malformed_files_raise_config_error(tmp_path, body, fragment):
    path = tmp_path / "settings.yaml"
    path.write_text(body, encoding="utf-8")
    with pytest.raises(ConfigError) as excinfo:
        Settings.load(path)
    assert fragment in str(excinfo.value)


def test_integer_values_accepted_for_float_fields(tmp_path):
    path = write(tmp_path, "movement:\n  speed: 4\ntimer:\n  base_time: 45.5\n  min_time: 20\n")
    settings = Settings.load(path)
    assert settings.movement.speed == 4
    assert settings.timer.base_time == 45.5


def test_controls_overlay_replaces_key_list(tmp_path):
    path = write(tmp_path, "controls:\n  up: [I]\n  down: [K]\n")
    settings = Settings.load(path)
    assert settings.controls.up == ["I"]
    assert settings.controls.down == ["K"]
    assert settings.controls.left == ["LEFT", "A"]


def test_key_bound_to_two_actions_rejected(tmp_path):
    path = write(tmp_path, "controls:\n  quit: [escape, w]\n")
    with pytest.raises(ConfigError, match="bound to both"):
        Settings.load(path)

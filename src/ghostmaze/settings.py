from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import IO, Dict, List, Optional, Union

import yaml

from .errors import ConfigError

logger = logging.getLogger(__name__)


@dataclass
class MazeSettings:
    base_size: int = 10
    max_size: int = 20
    min_size: int = 2
    levels_per_step: int = 2


@dataclass
class MovementSettings:
    speed: float = 3.5
    actor_radius: float = 0.3
    collision_padding: float = 0.1
    max_delta_time: float = 0.1


@dataclass
class TimerSettings:
    base_time: float = 60.0
    penalty_per_level: float = 5.0
    min_time: float = 30.0


@dataclass
class GoalSettings:
    reach_distance: float = 0.7
    beckon_distance: float = 1.5


@dataclass
class ScoreSettings:
    level_bonus: int = 100
    time_bonus: int = 10


@dataclass
class WindowSettings:
    width: int = 800
    height: int = 600
    title: str = "Ghost Maze"


@dataclass
class ControlsSettings:
    # Key names as in arcade.key; each action accepts several keys
    up: List[str] = field(default_factory=lambda: ["UP", "W"])
    down: List[str] = field(default_factory=lambda: ["DOWN", "S"])
    left: List[str] = field(default_factory=lambda: ["LEFT", "A"])
    right: List[str] = field(default_factory=lambda: ["RIGHT", "D"])
    confirm: List[str] = field(default_factory=lambda: ["ENTER", "SPACE"])
    quit: List[str] = field(default_factory=lambda: ["ESCAPE"])


# Field annotations are strings under postponed evaluation
_NUMBER_TYPES = {"int": (int,), "float": (int, float)}


@dataclass
class Settings:
    maze: MazeSettings = field(default_factory=MazeSettings)
    movement: MovementSettings = field(default_factory=MovementSettings)
    timer: TimerSettings = field(default_factory=TimerSettings)
    goal: GoalSettings = field(default_factory=GoalSettings)
    score: ScoreSettings = field(default_factory=ScoreSettings)
    window: WindowSettings = field(default_factory=WindowSettings)
    controls: ControlsSettings = field(default_factory=ControlsSettings)

    @staticmethod
    def _load_yaml(source: Union[Path, IO[str]], label: str) -> dict:
        try:
            if isinstance(source, Path):
                with source.open("r", encoding="utf-8") as f:
                    data = yaml.safe_load(f)
            else:
                data = yaml.safe_load(source)
        except yaml.YAMLError as exc:
            raise ConfigError(f"{label} is not valid YAML: {exc}") from exc
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"{label} must contain a mapping of sections, got {type(data).__name__}")
        return data

    @classmethod
    def _deep_merge(cls, base: dict, overlay: dict) -> dict:
        merged = dict(base)
        for k, v in (overlay or {}).items():
            if isinstance(v, dict) and isinstance(base.get(k), dict):
                merged[k] = cls._deep_merge(base[k], v)
            else:
                merged[k] = v
        return merged

    @classmethod
    def _from_dict(cls, data: dict) -> "Settings":
        unknown = set(data) - {f.name for f in dataclasses.fields(cls)}
        if unknown:
            raise ConfigError(f"Unknown settings section(s): {', '.join(sorted(unknown))}")
        sections = {}
        for f in dataclasses.fields(cls):
            raw = data.get(f.name, {})
            if not isinstance(raw, dict):
                raise ConfigError(f"Settings section '{f.name}' must be a mapping, got {type(raw).__name__}")
            try:
                sections[f.name] = f.default_factory(**raw)
            except TypeError as exc:
                raise ConfigError(f"Unknown key in settings section '{f.name}': {exc}") from exc
        return cls(**sections)

    @classmethod
    def load(cls, user_path: Optional[Path] = None) -> "Settings":
        """Load settings from built-in defaults and optional user override file.

        If user_path is provided and exists, overlay values onto defaults.

        Raises:
            ConfigError: the user file is not YAML, is not a mapping of sections,
                or holds values of the wrong type or range.
        """
        try:
            with resources.files("ghostmaze.resources").joinpath("default_settings.yaml").open("r", encoding="utf-8") as f:
                default_data = cls._load_yaml(f, "Default settings")
        except FileNotFoundError:
            logger.warning("Default settings not found; falling back to dataclass defaults.")
            default_data = dataclasses.asdict(Settings())

        user_data = {}
        if user_path is not None:
            if user_path.exists():
                user_data = cls._load_yaml(user_path, f"Settings file {user_path}")
                logger.info("Loaded user settings from %s", user_path)
            else:
                logger.warning("User settings file not found: %s", user_path)

        merged = cls._deep_merge(default_data, user_data)
        settings = cls._from_dict(merged)
        settings.validate()
        logger.debug("Settings merged: %s", settings)
        return settings

    def _check_types(self) -> None:
        for section in dataclasses.fields(self):
            values = getattr(self, section.name)
            for f in dataclasses.fields(values):
                value = getattr(values, f.name)
                where = f"{section.name}.{f.name}"
                if f.type in _NUMBER_TYPES:
                    if isinstance(value, bool) or not isinstance(value, _NUMBER_TYPES[f.type]):
                        kind = "an integer" if f.type == "int" else "a number"
                        raise ConfigError(f"{where} must be {kind}, got {value!r}")
                elif f.type == "str":
                    if not isinstance(value, str):
                        raise ConfigError(f"{where} must be a string, got {value!r}")
                elif not isinstance(value, list) or not all(isinstance(k, str) and k.strip() for k in value):
                    raise ConfigError(f"{where} must be a list of key names, got {value!r}")

    def _check_controls(self) -> None:
        owner: Dict[str, str] = {}
        for f in dataclasses.fields(self.controls):
            for key in getattr(self.controls, f.name):
                name = key.strip().upper()
                if owner.setdefault(name, f.name) != f.name:
                    raise ConfigError(f"Key {key!r} is bound to both controls.{owner[name]} and controls.{f.name}")

    def validate(self) -> None:
        """Reject values the maze engine cannot work with."""
        self._check_types()
        m = self.maze
        if m.min_size < 1:
            raise ConfigError(f"maze.min_size must be >= 1, got {m.min_size}")
        if not m.min_size <= m.base_size <= m.max_size:
            raise ConfigError(
                f"maze sizes must satisfy min_size <= base_size <= max_size, got {m.min_size}/{m.base_size}/{m.max_size}"
            )
        if m.levels_per_step < 1:
            raise ConfigError(f"maze.levels_per_step must be >= 1, got {m.levels_per_step}")
        mv = self.movement
        if mv.actor_radius <= 0:
            raise ConfigError(f"movement.actor_radius must be positive, got {mv.actor_radius}")
        if not 0 <= mv.collision_padding < mv.actor_radius:
            raise ConfigError(
                f"movement.collision_padding must be in [0, actor_radius), got {mv.collision_padding}"
            )
        if mv.speed <= 0 or mv.max_delta_time <= 0:
            raise ConfigError("movement.speed and movement.max_delta_time must be positive")
        if self.timer.min_time <= 0 or self.timer.base_time < self.timer.min_time:
            raise ConfigError("timer.base_time must be >= timer.min_time > 0")
        if self.goal.reach_distance <= 0:
            raise ConfigError(f"goal.reach_distance must be positive, got {self.goal.reach_distance}")
        self._check_controls()

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(dataclasses.asdict(self), f, sort_keys=False)
        logger.info("Saved settings to %s", path)


__all__ = [
    "Settings",
    "MazeSettings",
    "MovementSettings",
    "TimerSettings",
    "GoalSettings",
    "ScoreSettings",
    "WindowSettings",
    "ControlsSettings",
]

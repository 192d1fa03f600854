"""Keyboard handling for the maze window: key names or codes to actions to a direction."""
from .actions import STEERING, MazeAction
from .keymap import KeyMap
from .movement import MovementInput

__all__ = ["MazeAction", "STEERING", "KeyMap", "MovementInput"]

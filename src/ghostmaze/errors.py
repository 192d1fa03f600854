class GhostMazeError(Exception):
    """Base exception for the Ghost Maze project."""


class MazeConsistencyError(GhostMazeError):
    """Raised when a generated maze breaks an internal invariant (e.g. the exit cannot be connected)."""


class ConfigError(GhostMazeError):
    """Raised when settings values are out of their valid range."""

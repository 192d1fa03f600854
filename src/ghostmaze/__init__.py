"""
Ghost Maze package root.

Procedural maze generation and continuous-space navigation for a top-down
maze chase. Rendering (arcade) stays in ``ghostmaze.app``; everything else
is pure logic that can be driven headless.
"""
from importlib.metadata import PackageNotFoundError, version

__all__ = ["__version__"]

try:
    __version__ = version("ghost-maze")
except PackageNotFoundError:  # pragma: no cover - during tests without packaging
    __version__ = "0.0.0"

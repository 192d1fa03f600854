from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from ..maze.geometry import Vec2, WallSegment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NearestWall:
    wall: Optional[WallSegment]
    distance: float


def distance_to_segment(point: Vec2, segment: WallSegment) -> float:
    """Shortest distance from ``point`` to the segment (not the infinite line).

    The projection parameter is clamped to [0, 1]; a zero-length segment
    degenerates to point distance.
    """
    sx = segment.x2 - segment.x1
    sz = segment.z2 - segment.z1
    length_sq = sx * sx + sz * sz
    if length_sq == 0:
        return math.hypot(point.x - segment.x1, point.z - segment.z1)

    t = ((point.x - segment.x1) * sx + (point.z - segment.z1) * sz) / length_sq
    t = max(0.0, min(1.0, t))
    closest_x = segment.x1 + t * sx
    closest_z = segment.z1 + t * sz
    return math.hypot(point.x - closest_x, point.z - closest_z)


def collides(position: Vec2, walls: Iterable[WallSegment], actor_radius: float, padding: float = 0.0) -> bool:
    """True if any wall is closer than ``actor_radius - padding`` to ``position``."""
    effective_radius = actor_radius - padding
    for wall in walls:
        if distance_to_segment(position, wall) < effective_radius:
            return True
    return False


def resolve(
    current: Vec2,
    delta: Vec2,
    walls: Sequence[WallSegment],
    actor_radius: float,
    padding: float = 0.0,
) -> Vec2:
    """Apply a movement step with axis-separated sliding.

    Both single-axis candidates are tested from the pre-movement position,
    never one after the other, and each axis is applied only if its own
    candidate is collision-free. Pushing diagonally into a wall therefore
    keeps the clear axis instead of cancelling the whole move.
    """
    if delta.is_zero:
        return current

    x, z = current.x, current.z
    if delta.x != 0 and not collides(current.offset(dx=delta.x), walls, actor_radius, padding):
        x = current.x + delta.x
    if delta.z != 0 and not collides(current.offset(dz=delta.z), walls, actor_radius, padding):
        z = current.z + delta.z

    resolved = Vec2(x, z)
    if resolved != current.offset(delta.x, delta.z):
        logger.debug("Movement from %s by %s blocked; resolved to %s", current, delta, resolved)
    return resolved


def nearest_wall(position: Vec2, walls: Iterable[WallSegment]) -> NearestWall:
    """Closest wall and its distance; ``(None, inf)`` when there are no walls."""
    best: Optional[WallSegment] = None
    best_distance = math.inf
    for wall in walls:
        d = distance_to_segment(position, wall)
        if d < best_distance:
            best_distance = d
            best = wall
    return NearestWall(best, best_distance)


__all__ = ["NearestWall", "distance_to_segment", "collides", "resolve", "nearest_wall"]

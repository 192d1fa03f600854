from .collision import NearestWall, collides, distance_to_segment, nearest_wall, resolve

__all__ = ["NearestWall", "collides", "distance_to_segment", "nearest_wall", "resolve"]

# core/ray.py
from pathtracer.core.vector import Point, Vector3


class Ray:
    """
    Represents a ray in 3D space with an origin, a direction and the
    moment in time it was cast (used for motion blur).
    """
    __slots__ = ("origin", "direction", "time")

    def __init__(self, origin: Point, direction: Vector3, time: float = 0.0):
        self.origin = origin
        self.direction = direction
        self.time = time

    def at(self, t: float) -> Point:
        """
        Returns the point along the ray at parameter t.
        """
        return self.origin + self.direction * t

    def __repr__(self) -> str:
        return f"Ray({self.origin!r}, {self.direction!r}, time={self.time})"

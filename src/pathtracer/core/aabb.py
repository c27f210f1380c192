# core/aabb.py
import math

from pathtracer.core.vector import Point


class AABB:
    """
    Axis-aligned bounding box given by its minimum and maximum corners.
    """
    __slots__ = ("minimum", "maximum")

    def __init__(self, minimum: Point, maximum: Point):
        self.minimum = minimum
        self.maximum = maximum

    def hit(self, ray, t_min: float, t_max: float) -> bool:
        # Slab method: for each axis, narrow the [t_min, t_max] interval.
        # A zero direction component yields +/-inf, which the narrowing handles.
        for a in range(3):
            direction = ray.direction[a]
            origin = ray.origin[a]
            try:
                inv_d = 1.0 / direction
            except ZeroDivisionError:
                inv_d = math.copysign(math.inf, direction)
            t0 = (self.minimum[a] - origin) * inv_d
            t1 = (self.maximum[a] - origin) * inv_d
            if inv_d < 0:
                t0, t1 = t1, t0
            # NaN (origin on a slab face of a parallel ray) leaves the bound unchanged.
            t_min = t0 if t0 > t_min else t_min
            t_max = t1 if t1 < t_max else t_max
            if t_max <= t_min:
                return False
        return True

    def is_valid(self) -> bool:
        """True when every component is finite-or-infinite (not NaN) and min <= max."""
        for a in range(3):
            lo = self.minimum[a]
            hi = self.maximum[a]
            if math.isnan(lo) or math.isnan(hi) or lo > hi:
                return False
        return True

    def contains(self, other: "AABB") -> bool:
        return all(
            self.minimum[a] <= other.minimum[a] and other.maximum[a] <= self.maximum[a]
            for a in range(3)
        )

    def centroid(self) -> Point:
        return (self.minimum + self.maximum) * 0.5

    @staticmethod
    def surrounding_box(box0: "AABB", box1: "AABB") -> "AABB":
        small = Point(
            min(box0.minimum.x, box1.minimum.x),
            min(box0.minimum.y, box1.minimum.y),
            min(box0.minimum.z, box1.minimum.z)
        )
        big = Point(
            max(box0.maximum.x, box1.maximum.x),
            max(box0.maximum.y, box1.maximum.y),
            max(box0.maximum.z, box1.maximum.z)
        )
        return AABB(small, big)

    def __repr__(self) -> str:
        return f"AABB({self.minimum!r}, {self.maximum!r})"

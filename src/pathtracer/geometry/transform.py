# geometry/transform.py
import math
import random
from typing import Optional

from pathtracer.core.aabb import AABB
from pathtracer.core.ray import Ray
from pathtracer.core.utils import degrees_to_radians
from pathtracer.core.vector import Point, Vector3
from pathtracer.geometry.hittable import Hittable, HitRecord


class Translate(Hittable):
    """
    Moves the wrapped object by offset. Rays are moved into object space
    instead of moving the geometry.
    """
    def __init__(self, obj: Hittable, offset: Vector3):
        self.obj = obj
        self.offset = offset

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=random) -> Optional[HitRecord]:
        moved = Ray(ray.origin - self.offset, ray.direction, ray.time)
        rec = self.obj.hit(moved, t_min, t_max, rng)
        if rec is None:
            return None
        out = rec.copy()
        out.p = rec.p + self.offset
        return out

    def bounding_box(self, time0: float, time1: float) -> Optional[AABB]:
        box = self.obj.bounding_box(time0, time1)
        if box is None:
            return None
        return AABB(box.minimum + self.offset, box.maximum + self.offset)


class RotateY(Hittable):
    """
    Rotates the wrapped object by angle degrees around the Y axis.
    """
    def __init__(self, obj: Hittable, angle: float):
        self.obj = obj
        self.angle = angle
        radians = degrees_to_radians(angle)
        self.sin_theta = math.sin(radians)
        self.cos_theta = math.cos(radians)
        self.bbox = self._rotated_bounds(obj.bounding_box(0.0, 1.0))

    def _rotated_bounds(self, box: Optional[AABB]) -> Optional[AABB]:
        if box is None:
            return None
        lo = [math.inf, math.inf, math.inf]
        hi = [-math.inf, -math.inf, -math.inf]
        for x in (box.minimum.x, box.maximum.x):
            for y in (box.minimum.y, box.maximum.y):
                for z in (box.minimum.z, box.maximum.z):
                    corner = self._to_world(Vector3(x, y, z))
                    for a in range(3):
                        lo[a] = min(lo[a], corner[a])
                        hi[a] = max(hi[a], corner[a])
        return AABB(Point(*lo), Point(*hi))

    def _to_object(self, v: Vector3) -> Vector3:
        return Vector3(self.cos_theta * v.x - self.sin_theta * v.z,
                       v.y,
                       self.sin_theta * v.x + self.cos_theta * v.z)

    def _to_world(self, v: Vector3) -> Vector3:
        return Vector3(self.cos_theta * v.x + self.sin_theta * v.z,
                       v.y,
                       -self.sin_theta * v.x + self.cos_theta * v.z)

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=random) -> Optional[HitRecord]:
        rotated = Ray(self._to_object(ray.origin), self._to_object(ray.direction), ray.time)
        rec = self.obj.hit(rotated, t_min, t_max, rng)
        if rec is None:
            return None
        # Rotation preserves the angle between ray and normal, so front_face
        # carries over unchanged.
        out = rec.copy()
        out.p = self._to_world(rec.p)
        out.normal = self._to_world(rec.normal)
        return out

    def bounding_box(self, time0: float, time1: float) -> Optional[AABB]:
        return self.bbox

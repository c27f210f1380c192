# geometry/rect.py
import random
from typing import Optional

from pathtracer.core.aabb import AABB
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Point, Vector3
from pathtracer.geometry.hittable import Hittable, HitRecord

# Half thickness given to the flat axis so the box is never degenerate.
PADDING = 0.0001


class AARect(Hittable):
    """
    Axis-aligned rectangle lying in the plane axis[k_axis] = k and spanning
    [a0, a1] x [b0, b1] on the two remaining axes.
    """
    a_axis = 0
    b_axis = 1
    k_axis = 2

    def __init__(self, a0: float, a1: float, b0: float, b1: float, k: float, material):
        self.a0 = a0
        self.a1 = a1
        self.b0 = b0
        self.b1 = b1
        self.k = k
        self.material = material
        n = [0.0, 0.0, 0.0]
        n[self.k_axis] = 1.0
        self.outward_normal = Vector3(*n)

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=random) -> Optional[HitRecord]:
        direction = ray.direction[self.k_axis]
        if direction == 0.0:
            return None
        t = (self.k - ray.origin[self.k_axis]) / direction
        if t < t_min or t > t_max:
            return None

        a = ray.origin[self.a_axis] + t * ray.direction[self.a_axis]
        b = ray.origin[self.b_axis] + t * ray.direction[self.b_axis]
        if a < self.a0 or a > self.a1 or b < self.b0 or b > self.b1:
            return None

        rec = HitRecord()
        rec.u = (a - self.a0) / (self.a1 - self.a0)
        rec.v = (b - self.b0) / (self.b1 - self.b0)
        rec.t = t
        rec.set_face_normal(ray, self.outward_normal)
        rec.material = self.material
        rec.p = ray.at(t)
        return rec

    def bounding_box(self, time0: float = 0.0, time1: float = 0.0) -> AABB:
        lo = [0.0, 0.0, 0.0]
        hi = [0.0, 0.0, 0.0]
        lo[self.a_axis], hi[self.a_axis] = self.a0, self.a1
        lo[self.b_axis], hi[self.b_axis] = self.b0, self.b1
        lo[self.k_axis], hi[self.k_axis] = self.k - PADDING, self.k + PADDING
        return AABB(Point(*lo), Point(*hi))


class XYRect(AARect):
    """Rectangle in the plane z = k."""
    a_axis, b_axis, k_axis = 0, 1, 2

    def __init__(self, x0: float, x1: float, y0: float, y1: float, k: float, material):
        super().__init__(x0, x1, y0, y1, k, material)


class XZRect(AARect):
    """Rectangle in the plane y = k."""
    a_axis, b_axis, k_axis = 0, 2, 1

    def __init__(self, x0: float, x1: float, z0: float, z1: float, k: float, material):
        super().__init__(x0, x1, z0, z1, k, material)


class YZRect(AARect):
    """Rectangle in the plane x = k."""
    a_axis, b_axis, k_axis = 1, 2, 0

    def __init__(self, y0: float, y1: float, z0: float, z1: float, k: float, material):
        super().__init__(y0, y1, z0, z1, k, material)

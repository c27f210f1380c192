# geometry/box.py
import random
from typing import Optional

from pathtracer.core.aabb import AABB
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Point
from pathtracer.geometry.hittable import Hittable, HitRecord
from pathtracer.geometry.rect import XYRect, XZRect, YZRect
from pathtracer.geometry.world import HittableList


class Box(Hittable):
    """
    Axis-aligned box between corners p0 and p1, built from six rectangles
    sharing one material.
    """
    def __init__(self, p0: Point, p1: Point, material):
        self.box_min = p0
        self.box_max = p1
        self.material = material

        sides = HittableList()
        sides.add(XYRect(p0.x, p1.x, p0.y, p1.y, p1.z, material))
        sides.add(XYRect(p0.x, p1.x, p0.y, p1.y, p0.z, material))
        sides.add(XZRect(p0.x, p1.x, p0.z, p1.z, p1.y, material))
        sides.add(XZRect(p0.x, p1.x, p0.z, p1.z, p0.y, material))
        sides.add(YZRect(p0.y, p1.y, p0.z, p1.z, p1.x, material))
        sides.add(YZRect(p0.y, p1.y, p0.z, p1.z, p0.x, material))
        self.sides = sides

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=random) -> Optional[HitRecord]:
        return self.sides.hit(ray, t_min, t_max, rng)

    def bounding_box(self, time0: float = 0.0, time1: float = 0.0) -> AABB:
        return self.sides.bounding_box(time0, time1)

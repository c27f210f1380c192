# geometry/sphere.py
import math
import random
from typing import Optional, Tuple

from pathtracer.core.aabb import AABB
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Point, Vector3
from pathtracer.geometry.hittable import Hittable, HitRecord


def get_sphere_uv(p: Point) -> Tuple[float, float]:
    """
    Maps a point on the unit sphere to texture coordinates.

    u: angle around the Y axis from X=-1, in [0, 1].
    v: angle from Y=-1 to Y=+1, in [0, 1].
        <1 0 0> yields <0.50 0.50>       <-1  0  0> yields <0.00 0.50>
        <0 1 0> yields <0.50 1.00>       < 0 -1  0> yields <0.50 0.00>
        <0 0 1> yields <0.25 0.50>       < 0  0 -1> yields <0.75 0.50>
    """
    theta = math.acos(max(-1.0, min(1.0, -p.y)))
    phi = math.atan2(-p.z, p.x) + math.pi
    return phi / (2 * math.pi), theta / math.pi


def _hit_sphere(center: Point, radius: float, material, ray: Ray,
                t_min: float, t_max: float) -> Optional[HitRecord]:
    oc = ray.origin - center
    a = ray.direction.length_squared()
    half_b = oc.dot(ray.direction)
    c = oc.length_squared() - radius * radius
    discriminant = half_b * half_b - a * c

    if discriminant < 0:
        return None

    sqrt_disc = math.sqrt(discriminant)
    # Find the nearest root that lies in the acceptable range
    root = (-half_b - sqrt_disc) / a
    if root < t_min or root > t_max:
        root = (-half_b + sqrt_disc) / a
        if root < t_min or root > t_max:
            return None

    rec = HitRecord()
    rec.t = root
    rec.p = ray.at(root)
    outward_normal = (rec.p - center) / radius
    rec.set_face_normal(ray, outward_normal)
    rec.u, rec.v = get_sphere_uv(outward_normal)
    rec.material = material
    return rec


class Sphere(Hittable):
    """
    Represents a sphere defined by its center, radius, and material.
    A negative radius flips the normals (hollow glass trick).
    """
    def __init__(self, center: Point, radius: float, material):
        self.center = center
        self.radius = radius
        self.material = material

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=random) -> Optional[HitRecord]:
        return _hit_sphere(self.center, self.radius, self.material, ray, t_min, t_max)

    def bounding_box(self, time0: float = 0.0, time1: float = 0.0) -> AABB:
        # The bounding box of a sphere is center ± radius
        r = abs(self.radius)
        offset = Vector3(r, r, r)
        return AABB(self.center - offset, self.center + offset)

    def __repr__(self) -> str:
        return f"Sphere({self.center!r}, {self.radius})"


class MovingSphere(Hittable):
    """
    A sphere whose center moves linearly from center0 at time0 to
    center1 at time1.
    """
    def __init__(self, center0: Point, center1: Point, time0: float, time1: float,
                 radius: float, material):
        self.center0 = center0
        self.center1 = center1
        self.time0 = time0
        self.time1 = time1
        self.radius = radius
        self.material = material

    def center(self, time: float) -> Point:
        if self.time1 == self.time0:
            return self.center0
        return self.center0 + (self.center1 - self.center0) * (
            (time - self.time0) / (self.time1 - self.time0))

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=random) -> Optional[HitRecord]:
        return _hit_sphere(self.center(ray.time), self.radius, self.material,
                           ray, t_min, t_max)

    def bounding_box(self, time0: float, time1: float) -> AABB:
        r = abs(self.radius)
        offset = Vector3(r, r, r)
        c0 = self.center(time0)
        c1 = self.center(time1)
        box0 = AABB(c0 - offset, c0 + offset)
        box1 = AABB(c1 - offset, c1 + offset)
        return AABB.surrounding_box(box0, box1)

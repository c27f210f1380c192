# geometry/hittable.py
import random
from typing import Optional

from pathtracer.core.aabb import AABB
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Point, Vector3


class HitRecord:
    """
    Records details of a ray-object intersection.

    A record is only ever handed out fully populated; a failed hit test
    returns None instead of a partial record.
    """
    __slots__ = ("p", "normal", "t", "u", "v", "front_face", "material")

    def __init__(self, p: Point = None, normal: Vector3 = None,
                 t: float = 0.0, u: float = 0.0, v: float = 0.0,
                 front_face: bool = True, material=None):
        self.p = p              # Intersection point
        self.normal = normal    # Surface normal, always against the ray
        self.t = t              # Ray parameter at intersection
        self.u = u              # Surface coordinates
        self.v = v
        self.front_face = front_face  # Whether the ray approached from outside
        self.material = material

    def set_face_normal(self, ray: Ray, outward_normal: Vector3):
        """
        Ensures that the normal always points against the ray.
        """
        self.front_face = ray.direction.dot(outward_normal) < 0
        self.normal = outward_normal if self.front_face else -outward_normal

    def copy(self) -> "HitRecord":
        return HitRecord(self.p, self.normal, self.t, self.u, self.v,
                         self.front_face, self.material)

    def __repr__(self) -> str:
        return (f"HitRecord(t={self.t}, p={self.p!r}, normal={self.normal!r}, "
                f"front_face={self.front_face})")


class Hittable:
    """
    Abstract class for objects that can be hit by a ray.
    """
    def hit(self, ray: Ray, t_min: float, t_max: float, rng=random) -> Optional[HitRecord]:
        raise NotImplementedError("hit() must be implemented by subclasses.")

    def bounding_box(self, time0: float, time1: float) -> Optional[AABB]:
        """
        Returns the box enclosing the object over [time0, time1], or None
        if the object is unbounded.
        """
        raise NotImplementedError("bounding_box() must be implemented by subclasses.")

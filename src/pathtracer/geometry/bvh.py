# geometry/bvh.py
import logging
import math
import random
from typing import List, Optional

from pathtracer.core.aabb import AABB
from pathtracer.core.errors import BVHBuildError
from pathtracer.core.ray import Ray
from pathtracer.geometry.hittable import Hittable, HitRecord

logger = logging.getLogger(__name__)


def _checked_box(obj: Hittable, time0: float, time1: float) -> AABB:
    box = obj.bounding_box(time0, time1)
    if box is None:
        raise BVHBuildError(f"No bounding box for {obj!r} in BVH construction.")
    if not box.is_valid():
        raise BVHBuildError(f"Malformed bounding box {box!r} for {obj!r} in BVH construction.")
    return box


def _sort_key(obj: Hittable, axis: int, time0: float, time1: float) -> float:
    key = _checked_box(obj, time0, time1).minimum[axis]
    if not math.isfinite(key):
        raise BVHBuildError(f"Non-finite sort key {key} on axis {axis} for {obj!r}.")
    return key


class BVHNode(Hittable):
    """
    Binary bounding volume hierarchy node.

    Each node picks a random axis, sorts its span of objects by the minimum
    corner of their boxes along it and splits at the midpoint. A span of one
    object stores it as both children. Nodes are never modified after
    construction.
    """
    def __init__(self, objects: List[Hittable], start: int, end: int,
                 time0: float = 0.0, time1: float = 1.0, rng=random):
        object_span = end - start
        if object_span <= 0:
            raise BVHBuildError("Cannot build a BVH over an empty span of objects.")

        axis = rng.randint(0, 2)

        if object_span == 1:
            self.left = self.right = objects[start]
        elif object_span == 2:
            first, second = objects[start], objects[start + 1]
            if _sort_key(first, axis, time0, time1) <= _sort_key(second, axis, time0, time1):
                self.left, self.right = first, second
            else:
                self.left, self.right = second, first
        else:
            objects[start:end] = sorted(
                objects[start:end],
                key=lambda obj: _sort_key(obj, axis, time0, time1))
            mid = start + object_span // 2
            self.left = BVHNode(objects, start, mid, time0, time1, rng)
            self.right = BVHNode(objects, mid, end, time0, time1, rng)

        self.box = AABB.surrounding_box(
            _checked_box(self.left, time0, time1),
            _checked_box(self.right, time0, time1))

    @classmethod
    def from_list(cls, hittables, time0: float = 0.0, time1: float = 1.0,
                  rng=random) -> "BVHNode":
        """
        Builds a hierarchy over a HittableList (or any iterable of hittables)
        without reordering the caller's objects.
        """
        objects = list(hittables)
        node = cls(objects, 0, len(objects), time0, time1, rng)
        logger.info("Built BVH over %d objects (depth %d)", len(objects), node.depth())
        return node

    def depth(self) -> int:
        left = self.left.depth() if isinstance(self.left, BVHNode) else 0
        right = self.right.depth() if isinstance(self.right, BVHNode) else 0
        return 1 + max(left, right)

    def bounding_box(self, time0: float = 0.0, time1: float = 1.0) -> AABB:
        return self.box

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=random) -> Optional[HitRecord]:
        if not self.box.hit(ray, t_min, t_max):
            return None

        hit_left = self.left.hit(ray, t_min, t_max, rng)
        if self.right is self.left:
            return hit_left

        # Update t_max for right branch if we hit something on the left
        if hit_left is not None:
            t_max = hit_left.t

        hit_right = self.right.hit(ray, t_min, t_max, rng)

        # The right child only reports hits closer than the left one.
        return hit_right if hit_right is not None else hit_left

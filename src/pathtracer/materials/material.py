# materials/material.py
import random
from typing import Optional, Tuple

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Color, Point
from pathtracer.geometry.hittable import HitRecord


class Material:
    """
    Abstract material class. Subclasses must implement scatter().
    """
    def scatter(self, ray_in: Ray, rec: HitRecord, rng=random) -> Optional[Tuple[Ray, Color]]:
        """
        Computes the scattered ray and attenuation.
        Returns a tuple (scattered_ray, attenuation) or None if the ray is absorbed.
        """
        raise NotImplementedError("scatter() must be implemented by subclasses.")

    def emitted(self, u: float, v: float, p: Point) -> Color:
        """Light emitted at the hit point. Non-emissive materials emit black."""
        return Color(0.0, 0.0, 0.0)

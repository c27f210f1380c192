# materials/metal.py
import random
from typing import Optional, Tuple, Union

from pathtracer.core.ray import Ray
from pathtracer.core.utils import random_in_unit_sphere, reflect
from pathtracer.core.vector import Color
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material
from pathtracer.materials.textures import Texture, as_texture


class Metal(Material):
    """
    Metal material with reflective properties and optional texture support.
    fuzz in [0, 1] blurs the reflection; values above 1 are clamped.
    """
    def __init__(self, albedo: Union[Color, Texture], fuzz: float = 0.0):
        self.texture = as_texture(albedo)
        self.fuzz = min(fuzz, 1.0)

    def scatter(self, ray_in: Ray, rec: HitRecord, rng=random) -> Optional[Tuple[Ray, Color]]:
        reflected = reflect(ray_in.direction.normalize(), rec.normal)
        scattered = Ray(rec.p, reflected + random_in_unit_sphere(rng) * self.fuzz, ray_in.time)

        if scattered.direction.dot(rec.normal) > 0:
            return scattered, self.texture.value(rec.u, rec.v, rec.p)

        return None  # Absorb the ray if it does not scatter forward

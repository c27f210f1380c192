# materials/diffuse_light.py
import random
from typing import Optional, Tuple, Union

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Color, Point
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material
from pathtracer.materials.textures import Texture, as_texture


class DiffuseLight(Material):
    """
    Area light. Emits its texture's color and absorbs every incoming ray,
    so a path ends at the first light it reaches.
    """
    def __init__(self, emit: Union[Color, Texture]):
        self.texture = as_texture(emit)

    def scatter(self, ray_in: Ray, rec: HitRecord, rng=random) -> Optional[Tuple[Ray, Color]]:
        return None

    def emitted(self, u: float, v: float, p: Point) -> Color:
        return self.texture.value(u, v, p)

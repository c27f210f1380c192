# renderer/integrator.py
import math
import random
from typing import Union

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Color
from pathtracer.geometry.hittable import Hittable
from pathtracer.renderer.background import Background, as_background

# Minimum hit distance, keeps bounced rays from re-hitting their own surface.
T_MIN = 0.001


def ray_color(ray: Ray, background: Union[Color, Background], world: Hittable,
              depth: int, rng=random) -> Color:
    """
    Radiance carried back along ray, following at most depth bounces.

    Equivalent to emitted + attenuation * ray_color(scattered, depth - 1)
    unrolled into a loop: throughput is the product of the attenuations
    seen so far.
    """
    background = as_background(background)
    radiance = Color(0.0, 0.0, 0.0)
    throughput = Color(1.0, 1.0, 1.0)

    while depth > 0:
        rec = world.hit(ray, T_MIN, math.inf, rng)
        if rec is None:
            return radiance + throughput * background.value(ray.direction)

        material = rec.material
        radiance = radiance + throughput * material.emitted(rec.u, rec.v, rec.p)

        result = material.scatter(ray, rec, rng)
        if result is None:
            return radiance

        ray, attenuation = result
        throughput = throughput * attenuation
        depth -= 1

    # Bounce budget exhausted; no more light is gathered.
    return radiance

# materials/textures.py
import math
from typing import Optional, Union

import numpy as np

from pathtracer.core.utils import clamp
from pathtracer.core.vector import Color, Point
from pathtracer.materials.perlin import Perlin


class Texture:
    """Base class for all textures."""
    def value(self, u: float, v: float, p: Point) -> Color:
        """Sample the texture at surface coordinates (u, v) and hit point p."""
        raise NotImplementedError("value() must be implemented by texture subclasses.")


def as_texture(source: Union[Color, Texture]) -> Texture:
    """Wraps a plain color in a SolidColor; textures pass through."""
    if isinstance(source, Texture):
        return source
    return SolidColor(source)


class SolidColor(Texture):
    """A solid color texture."""
    def __init__(self, color: Color):
        self.color = color

    def value(self, u: float, v: float, p: Point) -> Color:
        return self.color


class CheckerTexture(Texture):
    """
    A 3D checker pattern: the sign of sin(10x)·sin(10y)·sin(10z) at the hit
    point selects between the even and odd sub-textures.
    """
    def __init__(self, even: Union[Color, Texture], odd: Union[Color, Texture]):
        self.even = as_texture(even)
        self.odd = as_texture(odd)

    def value(self, u: float, v: float, p: Point) -> Color:
        sines = math.sin(10 * p.x) * math.sin(10 * p.y) * math.sin(10 * p.z)
        if sines < 0:
            return self.odd.value(u, v, p)
        return self.even.value(u, v, p)


class NoiseTexture(Texture):
    """
    Perlin-noise texture.

    With marble=True (the default) the noise phase-shifts a sine along z,
    giving marble-like veins; otherwise the raw noise is mapped to grey.
    """
    def __init__(self, scale: float = 1.0, marble: bool = True,
                 noise: Optional[Perlin] = None, rng: Optional[np.random.Generator] = None):
        self.scale = scale
        self.marble = marble
        self.noise = noise if noise is not None else Perlin(rng)

    def value(self, u: float, v: float, p: Point) -> Color:
        if self.marble:
            intensity = 0.5 * (1.0 + math.sin(self.scale * p.z + 10.0 * self.noise.turb(p)))
        else:
            intensity = 0.5 * (1.0 + self.noise.noise(p * self.scale))
        return Color(intensity, intensity, intensity)


class ImageTexture(Texture):
    """
    A texture backed by an already-decoded (height, width, 3) pixel buffer
    with 8-bit channel values.
    """
    def __init__(self, data: Optional[np.ndarray]):
        if data is None:
            self.data = None
            self.width = 0
            self.height = 0
            return
        data = np.asarray(data)
        if data.ndim != 3 or data.shape[2] < 3:
            raise ValueError(f"Image texture needs a (height, width, 3) buffer, got {data.shape}")
        self.data = np.ascontiguousarray(data[:, :, :3], dtype=np.float64) / 255.0
        self.height, self.width = self.data.shape[:2]

    def value(self, u: float, v: float, p: Point) -> Color:
        # Without texture data, return solid cyan as a debugging aid.
        if self.data is None or self.width == 0 or self.height == 0:
            return Color(0.0, 1.0, 1.0)

        # Clamp input texture coordinates to [0,1] x [1,0]
        u = clamp(u, 0.0, 1.0)
        v = 1.0 - clamp(v, 0.0, 1.0)  # Flip V to image coordinates

        # Continuous pixel coordinates, then blend the four neighbours.
        x = u * (self.width - 1)
        y = v * (self.height - 1)
        i0 = int(x)
        j0 = int(y)
        i1 = min(i0 + 1, self.width - 1)
        j1 = min(j0 + 1, self.height - 1)
        fx = x - i0
        fy = y - j0

        top = self.data[j0, i0] * (1.0 - fx) + self.data[j0, i1] * fx
        bottom = self.data[j1, i0] * (1.0 - fx) + self.data[j1, i1] * fx
        pixel = top * (1.0 - fy) + bottom * fy
        return Color(float(pixel[0]), float(pixel[1]), float(pixel[2]))

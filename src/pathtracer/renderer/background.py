# renderer/background.py
from typing import Union

from pathtracer.core.vector import Color, Vector3


class Background:
    """Radiance seen by rays that leave the scene."""
    def value(self, direction: Vector3) -> Color:
        raise NotImplementedError("value() must be implemented by background subclasses.")


class SolidBackground(Background):
    def __init__(self, color: Color):
        self.color = color

    def value(self, direction: Vector3) -> Color:
        return self.color

    def __eq__(self, other) -> bool:
        return isinstance(other, SolidBackground) and self.color == other.color

    def __hash__(self) -> int:
        return hash(self.color)


class SkyGradient(Background):
    """
    Sky that interpolates vertically between a horizon color and a zenith
    color by the height of the ray direction.
    """
    def __init__(self, horizon: Color = None, zenith: Color = None):
        self.horizon = horizon if horizon is not None else Color(1.0, 1.0, 1.0)   # White haze
        self.zenith = zenith if zenith is not None else Color(0.5, 0.7, 1.0)      # Light blue sky

    def value(self, direction: Vector3) -> Color:
        # t goes from 0 straight down to 1 straight up
        t = 0.5 * (direction.normalize().y + 1.0)
        return self.horizon * (1.0 - t) + self.zenith * t

    def __eq__(self, other) -> bool:
        return (isinstance(other, SkyGradient)
                and self.horizon == other.horizon and self.zenith == other.zenith)

    def __hash__(self) -> int:
        return hash((self.horizon, self.zenith))


def as_background(source: Union[Color, Background]) -> Background:
    """Wraps a plain color in a SolidBackground; backgrounds pass through."""
    if isinstance(source, Background):
        return source
    return SolidBackground(source)

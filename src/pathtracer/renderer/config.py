# renderer/config.py
import dataclasses
from dataclasses import dataclass, field
from typing import Optional, Union

from pathtracer.core.errors import ConfigError
from pathtracer.core.vector import Color
from pathtracer.renderer.background import Background

ASPECT_RATIO = 16.0 / 9.0
IMAGE_WIDTH = 160 * 4
SAMPLES_PER_PIXEL = 100
MAX_DEPTH = 50
GAMMA = 2.0


@dataclass(frozen=True)
class Config:
    """
    Render settings shared by every worker.

    image_height is derived from image_width and aspect_ratio. background is
    a plain color or a Background such as SkyGradient. time0/time1
    is the interval used for bounding boxes of moving geometry.
    """
    image_width: int = IMAGE_WIDTH
    aspect_ratio: float = ASPECT_RATIO
    samples_per_pixel: int = SAMPLES_PER_PIXEL
    max_depth: int = MAX_DEPTH
    gamma: float = GAMMA
    background: Union[Color, Background] = field(default_factory=Color.zeros)
    repetitions: int = 1
    workers: Optional[int] = None
    seed: Optional[int] = None
    time0: float = 0.0
    time1: float = 1.0

    def __post_init__(self):
        if self.image_width <= 0:
            raise ConfigError(f"image_width must be positive, got {self.image_width}")
        if self.aspect_ratio <= 0:
            raise ConfigError(f"aspect_ratio must be positive, got {self.aspect_ratio}")
        if self.image_height <= 0:
            raise ConfigError(
                f"image width {self.image_width} at aspect ratio {self.aspect_ratio} "
                f"gives an empty image")
        if self.samples_per_pixel <= 0:
            raise ConfigError(f"samples_per_pixel must be positive, got {self.samples_per_pixel}")
        if self.max_depth < 0:
            raise ConfigError(f"max_depth must not be negative, got {self.max_depth}")
        if self.gamma <= 0:
            raise ConfigError(f"gamma must be positive, got {self.gamma}")
        if self.repetitions <= 0:
            raise ConfigError(f"repetitions must be positive, got {self.repetitions}")
        if self.workers is not None and self.workers <= 0:
            raise ConfigError(f"workers must be positive, got {self.workers}")
        if self.seed is not None and self.seed < 0:
            raise ConfigError(f"seed must not be negative, got {self.seed}")
        if self.time1 < self.time0:
            raise ConfigError(f"time1 ({self.time1}) is before time0 ({self.time0})")

    @property
    def image_height(self) -> int:
        return int(self.image_width / self.aspect_ratio)

    def with_overrides(self, **changes) -> "Config":
        """Returns a copy with the given fields replaced; None values are ignored."""
        changes = {k: v for k, v in changes.items() if v is not None}
        return dataclasses.replace(self, **changes)

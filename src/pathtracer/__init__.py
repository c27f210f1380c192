# pathtracer/__init__.py
from pathtracer.camera.camera import Camera
from pathtracer.core.errors import (BVHBuildError, ConfigError, RayTracerError, RenderError,
                                    SceneError, TextureLoadError)
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Color, Point, Vector3
from pathtracer.geometry.bvh import BVHNode
from pathtracer.geometry.world import HittableList
from pathtracer.renderer.background import SkyGradient
from pathtracer.renderer.config import Config
from pathtracer.renderer.raytracer import Renderer, render
from pathtracer.scenes import SceneSettings, setup

__version__ = "0.1.0"

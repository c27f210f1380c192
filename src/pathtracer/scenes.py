# scenes.py
import logging
import random
from dataclasses import dataclass
from typing import Callable, Dict, Optional

import numpy as np

from pathtracer.camera.camera import Camera
from pathtracer.core.errors import SceneError
from pathtracer.core.utils import random_vector
from pathtracer.core.vector import Color, Point, Vector3
from pathtracer.geometry.box import Box
from pathtracer.geometry.hittable import Hittable
from pathtracer.geometry.medium import ConstantMedium
from pathtracer.geometry.rect import XYRect, XZRect, YZRect
from pathtracer.geometry.sphere import MovingSphere, Sphere
from pathtracer.geometry.transform import RotateY, Translate
from pathtracer.geometry.world import HittableList
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.diffuse_light import DiffuseLight
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.metal import Metal
from pathtracer.materials.textures import CheckerTexture, NoiseTexture
from pathtracer.materials.texture_loader import load_texture
from pathtracer.renderer.background import SkyGradient
from pathtracer.renderer.config import Config

logger = logging.getLogger(__name__)

EARTH_TEXTURE = "assets/earthmap.jpg"


@dataclass
class SceneSettings:
    """Everything a render needs: the BVH-wrapped world, a camera and a config."""
    world: Hittable
    camera: Camera
    config: Config


def random_scene(rng=random) -> HittableList:
    """Checkered ground with a grid of small random spheres and three big ones."""
    world = HittableList()

    checker = CheckerTexture(Color(0.2, 0.3, 0.1), Color(0.9, 0.9, 0.9))
    world.add(Sphere(Point(0, -1000, 0), 1000, Lambertian(checker)))

    for a in range(-11, 11):
        for b in range(-11, 11):
            choose_mat = rng.random()
            center = Point(a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())

            if (center - Point(4, 0.2, 0)).length() <= 0.9:
                continue

            if choose_mat < 0.5:
                # diffuse, bouncing up during the shutter interval
                albedo = random_vector(0.05, 0.95, rng) * random_vector(0.05, 0.95, rng)
                center2 = center + Vector3(0, rng.uniform(0, 0.5), 0)
                world.add(MovingSphere(center, center2, 0.0, 1.0, 0.2, Lambertian(albedo)))
            elif choose_mat < 0.85:
                # metal
                albedo = random_vector(0.5, 1.0, rng)
                fuzz = rng.uniform(0, 0.5)
                world.add(Sphere(center, 0.2, Metal(albedo, fuzz)))
            else:
                # glass
                world.add(Sphere(center, 0.2, Dielectric(1.5)))

    world.add(Sphere(Point(0, 1, 0), 1.0, Dielectric(1.5)))
    world.add(Sphere(Point(-4, 1, 0), 1.0, Lambertian(Color(130 / 256, 22 / 256, 22 / 256))))
    world.add(Sphere(Point(4, 1, 0), 1.0, Metal(Color(0.7, 0.6, 0.5), 0.0)))
    return world


def two_spheres() -> HittableList:
    checker = Lambertian(CheckerTexture(Color(0.2, 0.3, 0.1), Color(0.9, 0.9, 0.9)))
    return HittableList([
        Sphere(Point(0, -10, 0), 10, checker),
        Sphere(Point(0, 10, 0), 10, checker),
    ])


def two_perlin_spheres(np_rng: Optional[np.random.Generator] = None) -> HittableList:
    marble = Lambertian(NoiseTexture(4.0, rng=np_rng))
    return HittableList([
        Sphere(Point(0, -1000, 0), 1000, marble),
        Sphere(Point(0, 2, 0), 2, marble),
    ])


def earth(asset_path: str = EARTH_TEXTURE) -> HittableList:
    earth_surface = Lambertian(load_texture(asset_path))
    return HittableList([Sphere(Point(0, 0, 0), 2, earth_surface)])


def simple_light(np_rng: Optional[np.random.Generator] = None) -> HittableList:
    """Two marble spheres lit only by a rectangular area light."""
    marble = Lambertian(NoiseTexture(4.0, rng=np_rng))
    world = HittableList([
        Sphere(Point(0, -1000, 0), 1000, marble),
        Sphere(Point(0, 2, 0), 2, marble),
    ])
    world.add(XYRect(3, 5, 1, 3, -2, DiffuseLight(Color(4, 4, 4))))
    return world


def _cornell_walls() -> HittableList:
    red = Lambertian(Color(0.65, 0.05, 0.05))
    white = Lambertian(Color(0.73, 0.73, 0.73))
    green = Lambertian(Color(0.12, 0.45, 0.15))
    light = DiffuseLight(Color(15, 15, 15))

    world = HittableList()
    world.add(YZRect(0, 555, 0, 555, 555, green))
    world.add(YZRect(0, 555, 0, 555, 0, red))
    world.add(XZRect(213, 343, 227, 332, 554, light))
    world.add(XZRect(0, 555, 0, 555, 555, white))
    world.add(XZRect(0, 555, 0, 555, 0, white))
    world.add(XYRect(0, 555, 0, 555, 555, white))
    return world


# (size, rotation in degrees, offset) of the two blocks inside the box
_CORNELL_BLOCKS = [
    (Point(165, 333, 165), 15, Vector3(265, 0, 295)),
    (Point(165, 165, 165), -18, Vector3(130, 0, 65)),
]


def cornell_box() -> HittableList:
    world = _cornell_walls()
    white = Lambertian(Color(0.73, 0.73, 0.73))
    for size, angle, offset in _CORNELL_BLOCKS:
        block = Box(Point(0, 0, 0), size, white)
        world.add(Translate(RotateY(block, angle), offset))
    return world


def cornell_box_smoke() -> HittableList:
    """Cornell box whose blocks are filled with dark and light smoke."""
    world = _cornell_walls()
    white = Lambertian(Color(0.73, 0.73, 0.73))
    for (size, angle, offset), smoke in zip(_CORNELL_BLOCKS, [Color(0, 0, 0), Color(1, 1, 1)]):
        block = Translate(RotateY(Box(Point(0, 0, 0), size, white), angle), offset)
        world.add(ConstantMedium(block, 0.01, smoke))
    return world


def final_scene(asset_path: str = EARTH_TEXTURE, rng=random,
                np_rng: Optional[np.random.Generator] = None) -> HittableList:
    """
    Every feature at once: a field of random-height boxes, an area light, a
    moving sphere, glass, metal, volumes, an image texture, marble and a
    rotated cluster of small spheres.
    """
    objects = HittableList()

    boxes_per_side = 20
    ground = Lambertian(Color(0.48, 0.83, 0.53))
    boxes = HittableList()
    for i in range(boxes_per_side):
        for j in range(boxes_per_side):
            w = 100.0
            x0 = -1000.0 + i * w
            z0 = -1000.0 + j * w
            y1 = rng.uniform(1, 101)
            boxes.add(Box(Point(x0, 0.0, z0), Point(x0 + w, y1, z0 + w), ground))
    objects.add(boxes.build_bvh(0.0, 1.0, rng))

    objects.add(XZRect(123, 423, 147, 412, 554, DiffuseLight(Color(7, 7, 7))))

    center1 = Point(400, 400, 200)
    center2 = center1 + Vector3(30, 0, 0)
    objects.add(MovingSphere(center1, center2, 0, 1, 50, Lambertian(Color(0.7, 0.3, 0.1))))

    objects.add(Sphere(Point(260, 150, 45), 50, Dielectric(1.5)))
    objects.add(Sphere(Point(0, 150, 145), 50, Metal(Color(0.8, 0.8, 0.9), 1.0)))

    boundary = Sphere(Point(360, 150, 145), 70, Dielectric(1.5))
    objects.add(boundary)
    objects.add(ConstantMedium(boundary, 0.2, Color(0.2, 0.4, 0.9)))
    # Thin mist over the whole scene
    mist = Sphere(Point(0, 0, 0), 5000, Dielectric(1.5))
    objects.add(ConstantMedium(mist, 0.0001, Color(1, 1, 1)))

    objects.add(Sphere(Point(400, 200, 400), 100, Lambertian(load_texture(asset_path))))
    objects.add(Sphere(Point(200, 280, 300), 80, Lambertian(NoiseTexture(0.1, rng=np_rng))))

    white = Lambertian(Color(0.73, 0.73, 0.73))
    cluster = HittableList(Sphere(random_vector(0, 165, rng), 10, white) for _ in range(1000))
    objects.add(Translate(RotateY(cluster.build_bvh(0.0, 1.0, rng), 15), Vector3(-100, 270, 395)))

    return objects


def ground_and_sphere() -> HittableList:
    """A red ball resting on a huge grey ground sphere."""
    return HittableList([
        Sphere(Point(0, -1000, 0), 1000, Lambertian(Color(0.5, 0.5, 0.5))),
        Sphere(Point(0, 0.5, 0), 0.5, Lambertian(Color(0.7, 0.1, 0.1))),
    ])


@dataclass
class _SceneView:
    build: Callable[..., HittableList]
    lookfrom: Point = Point(13, 2, 3)
    lookat: Point = Point(0, 0, 0)
    vfov: float = 20.0
    aperture: float = 0.0
    config: Optional[dict] = None


_SKY = Color(0.7, 0.8, 1.0)
_DARK_SQUARE = dict(aspect_ratio=1.0, image_width=600, samples_per_pixel=200, background=Color(0, 0, 0))

SCENES: Dict[str, _SceneView] = {
    "random_scene": _SceneView(lambda ctx: random_scene(ctx["rng"]), aperture=0.1),
    "two_spheres": _SceneView(lambda ctx: two_spheres()),
    "two_perlin_spheres": _SceneView(lambda ctx: two_perlin_spheres(ctx["np_rng"])),
    "earth": _SceneView(lambda ctx: earth(ctx["asset_path"])),
    "simple_light": _SceneView(
        lambda ctx: simple_light(ctx["np_rng"]),
        lookfrom=Point(26, 3, 6), lookat=Point(0, 2, 0),
        config=dict(samples_per_pixel=400, background=Color(0, 0, 0))),
    "cornell_box": _SceneView(
        lambda ctx: cornell_box(),
        lookfrom=Point(278, 278, -800), lookat=Point(278, 278, 0), vfov=40.0,
        config=_DARK_SQUARE),
    "cornell_box_smoke": _SceneView(
        lambda ctx: cornell_box_smoke(),
        lookfrom=Point(278, 278, -800), lookat=Point(278, 278, 0), vfov=40.0,
        config=_DARK_SQUARE),
    "final_scene": _SceneView(
        lambda ctx: final_scene(ctx["asset_path"], ctx["rng"], ctx["np_rng"]),
        lookfrom=Point(478, 278, -600), lookat=Point(278, 278, 0), vfov=40.0,
        config=dict(_DARK_SQUARE, samples_per_pixel=100)),
    "ground_and_sphere": _SceneView(
        lambda ctx: ground_and_sphere(),
        lookfrom=Point(0, 1, 5), lookat=Point(0, 0.5, 0), vfov=40.0,
        config=dict(image_width=400, samples_per_pixel=50, background=SkyGradient())),
}


def setup(name: str, asset_path: Optional[str] = None, seed: Optional[int] = None,
          **overrides) -> SceneSettings:
    """
    Build one of the demo scenes by name.

    The scene's own camera and config are applied first, then any config
    overrides (e.g. image_width=200). seed fixes both the scene layout and
    the render noise. Missing assets raise TextureLoadError before any
    rendering starts.
    """
    try:
        view = SCENES[name]
    except KeyError:
        raise SceneError(f"Unknown scene {name!r}; choose from {', '.join(SCENES)}") from None

    config = Config(background=_SKY, seed=seed).with_overrides(**(view.config or {}))
    config = config.with_overrides(**overrides)

    ctx = {
        "rng": random.Random(seed),
        "np_rng": np.random.default_rng(seed),
        "asset_path": asset_path or EARTH_TEXTURE,
    }
    objects = view.build(ctx)
    logger.info("Built scene %r with %d top-level objects", name, len(objects))
    world = objects.build_bvh(config.time0, config.time1, ctx["rng"])

    camera = Camera(view.lookfrom, view.lookat, Vector3(0, 1, 0), view.vfov,
                    config.aspect_ratio, view.aperture, 10.0, 0.0, 1.0)
    return SceneSettings(world, camera, config)

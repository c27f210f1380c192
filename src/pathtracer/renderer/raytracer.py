# renderer/raytracer.py
import logging
import os
import random
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import Optional

import numpy as np

from pathtracer.camera.camera import Camera
from pathtracer.core.errors import RenderError
from pathtracer.core.vector import Color
from pathtracer.geometry.hittable import Hittable
from pathtracer.renderer.config import Config
from pathtracer.renderer.integrator import ray_color
from pathtracer.renderer.tone_mapping import gamma_tone_mapping

logger = logging.getLogger(__name__)

# Scene shipped to each worker process once by the pool initializer.
_worker_scene = None


def row_rng(entropy: int, repetition: int, row: int) -> random.Random:
    """
    Independent generator for one image row of one repetition.

    The seed depends only on (entropy, repetition, row), so the image does
    not depend on how rows are spread over workers.
    """
    state = np.random.SeedSequence(entropy, spawn_key=(repetition, row)).generate_state(2)
    return random.Random((int(state[0]) << 32) | int(state[1]))


def render_row(world: Hittable, camera: Camera, config: Config, row: int,
               rng=random) -> np.ndarray:
    """
    Accumulated radiance sums for output row `row` (0 is the top of the image).

    Returns a (width, 3) float array; nothing is averaged or tone mapped here.
    """
    width = config.image_width
    height = config.image_height
    j = height - 1 - row
    # A one-pixel axis has no extent to spread samples over.
    u_scale = 1.0 / (width - 1) if width > 1 else 0.0
    v_scale = 1.0 / (height - 1) if height > 1 else 0.0

    out = np.empty((width, 3), dtype=np.float64)
    for i in range(width):
        pixel_color = Color(0.0, 0.0, 0.0)
        for _ in range(config.samples_per_pixel):
            u = (i + rng.random()) * u_scale
            v = (j + rng.random()) * v_scale
            ray = camera.get_ray(u, v, rng)
            pixel_color.add_into(ray_color(ray, config.background, world, config.max_depth, rng))
        out[i] = (pixel_color.x, pixel_color.y, pixel_color.z)
    return out


def _init_worker(world: Hittable, camera: Camera, config: Config):
    global _worker_scene
    _worker_scene = (world, camera, config)


def _render_row_task(entropy: int, repetition: int, row: int):
    world, camera, config = _worker_scene
    return row, render_row(world, camera, config, row, row_rng(entropy, repetition, row))


class Renderer:
    """
    Parallel row sampler.

    Rows are independent tasks spread over a process pool; each row draws
    from its own generator and the results are reassembled by row index.
    The world, camera and config are read-only for the whole render.
    """
    def __init__(self, world: Hittable, camera: Camera, config: Config):
        self.world = world
        self.camera = camera
        self.config = config

    @property
    def workers(self) -> int:
        return self.config.workers or os.cpu_count() or 1

    def render(self) -> np.ndarray:
        """
        Renders config.repetitions independent passes and averages them.

        Returns a (height, width, 3) float array of display values in
        [0, 256), row 0 at the top.
        """
        config = self.config
        entropy = config.seed if config.seed is not None else np.random.SeedSequence().entropy
        height, width = config.image_height, config.image_width
        logger.info("Rendering %dx%d, %d spp, depth %d, %d repetition(s) on %d worker(s)",
                    width, height, config.samples_per_pixel, config.max_depth,
                    config.repetitions, self.workers)

        if self.workers == 1:
            passes = (self._render_serial(entropy, rep) for rep in range(config.repetitions))
            return self._average(passes)

        with ProcessPoolExecutor(max_workers=self.workers,
                                 initializer=_init_worker,
                                 initargs=(self.world, self.camera, config)) as executor:
            passes = (self._render_parallel(executor, entropy, rep)
                      for rep in range(config.repetitions))
            return self._average(passes)

    def _average(self, passes) -> np.ndarray:
        config = self.config
        total = np.zeros((config.image_height, config.image_width, 3), dtype=np.float64)
        for rep, sums in enumerate(passes):
            if not np.all(np.isfinite(sums)):
                raise RenderError(f"Repetition {rep} produced non-finite radiance values")
            total += gamma_tone_mapping(sums, config.samples_per_pixel, config.gamma)
        return total / config.repetitions

    def _render_serial(self, entropy: int, repetition: int) -> np.ndarray:
        config = self.config
        start = time.perf_counter()
        sums = np.empty((config.image_height, config.image_width, 3), dtype=np.float64)
        for row in range(config.image_height):
            sums[row] = render_row(self.world, self.camera, config, row,
                                   row_rng(entropy, repetition, row))
            logger.debug("Repetition %d: row %d/%d done", repetition, row + 1, config.image_height)
        logger.info("Repetition %d finished in %.2fs", repetition, time.perf_counter() - start)
        return sums

    def _render_parallel(self, executor, entropy: int, repetition: int) -> np.ndarray:
        config = self.config
        start = time.perf_counter()
        sums = np.empty((config.image_height, config.image_width, 3), dtype=np.float64)
        futures = [executor.submit(_render_row_task, entropy, repetition, row)
                   for row in range(config.image_height)]
        for done, future in enumerate(as_completed(futures), start=1):
            row, data = future.result()
            sums[row] = data
            logger.debug("Repetition %d: %d/%d rows done", repetition, done, config.image_height)
        logger.info("Repetition %d finished in %.2fs", repetition, time.perf_counter() - start)
        return sums


def render(world: Hittable, camera: Camera, config: Config,
           workers: Optional[int] = None) -> np.ndarray:
    """Convenience wrapper: render world through camera with config."""
    if workers is not None:
        config = config.with_overrides(workers=workers)
    return Renderer(world, camera, config).render()

# renderer/image_output.py
import logging

import numpy as np
from PIL import Image

from pathtracer.renderer.tone_mapping import to_rgb8

logger = logging.getLogger(__name__)

FORMATS = ("png", "ppm")


def _with_suffix(path: str, suffix: str) -> str:
    path = str(path)
    return path if path.endswith(suffix) else path + suffix


def save_png(image, path: str) -> str:
    """
    Write a (height, width, 3) image of [0, 256) values as PNG.
    '.png' is appended when the path lacks it. Returns the written path.
    """
    path = _with_suffix(path, ".png")
    Image.fromarray(to_rgb8(image)).save(path)
    logger.info("Wrote %s", path)
    return path


def save_ppm(image, path: str) -> str:
    """Write the image as a plain-text (P3) PPM file. Returns the written path."""
    path = _with_suffix(path, ".ppm")
    pixels = to_rgb8(image)
    height, width = pixels.shape[:2]
    with open(path, "w") as f:
        f.write(f"P3\n{width} {height}\n255\n")
        for row in pixels:
            for r, g, b in row:
                f.write(f"{r} {g} {b}\n")
    logger.info("Wrote %s", path)
    return path


def save(image: np.ndarray, path: str, fmt: str = "png") -> str:
    """Dispatch to the writer for fmt ('png' or 'ppm')."""
    if fmt == "png":
        return save_png(image, path)
    if fmt == "ppm":
        return save_ppm(image, path)
    raise ValueError(f"Unsupported image format: {fmt!r} (expected one of {FORMATS})")

# materials/texture_loader.py
import logging
import os

import numpy as np
from PIL import Image, UnidentifiedImageError

from pathtracer.core.errors import TextureLoadError
from pathtracer.materials.textures import ImageTexture

logger = logging.getLogger(__name__)


def load_image(image_path: str) -> np.ndarray:
    """
    Decode an image file into a (height, width, 3) uint8 RGB array.

    Raises:
        TextureLoadError: If the file is missing or cannot be decoded.
    """
    if not os.path.exists(image_path):
        raise TextureLoadError(image_path, "file not found")

    try:
        with Image.open(image_path) as img:
            # Convert to RGB if necessary
            if img.mode != 'RGB':
                img = img.convert('RGB')
            data = np.asarray(img, dtype=np.uint8)
    except (UnidentifiedImageError, OSError) as e:
        raise TextureLoadError(image_path, str(e)) from e

    logger.debug("Loaded texture %s (%dx%d)", image_path, data.shape[1], data.shape[0])
    return data


def load_texture(image_path: str) -> ImageTexture:
    """Load an image file as an ImageTexture."""
    return ImageTexture(load_image(image_path))


def create_image_material(image_path: str, material_class, **material_params):
    """
    Create a material with an image texture.

    Args:
        image_path: Path to the image file
        material_class: Material class to instantiate (e.g., Lambertian, Metal)
        **material_params: Additional parameters for the material (e.g., fuzz for Metal)
    """
    texture = load_texture(image_path)
    return material_class(texture, **material_params)

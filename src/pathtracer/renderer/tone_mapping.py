# renderer/tone_mapping.py
import numpy as np
from numba import njit

# Upper clamp before scaling, so 8-bit truncation never reaches 256.
MAX_INTENSITY = 0.999


@njit(cache=True)
def _gamma_clamp_kernel(sums, scale, inv_gamma, out):
    height, width, channels = sums.shape
    for y in range(height):
        for x in range(width):
            for c in range(channels):
                v = (sums[y, x, c] * scale) ** inv_gamma
                if v < 0.0:
                    v = 0.0
                elif v > MAX_INTENSITY:
                    v = MAX_INTENSITY
                out[y, x, c] = 256.0 * v


def gamma_tone_mapping(sums, samples_per_pixel: int, gamma: float = 2.0) -> np.ndarray:
    """
    Turn accumulated per-pixel radiance sums into display values.

    Each channel is averaged over samples_per_pixel, gamma corrected,
    clamped to [0, 0.999] and scaled by 256, giving floats in [0, 256).
    """
    sums = np.ascontiguousarray(sums, dtype=np.float64)
    out = np.empty_like(sums)
    _gamma_clamp_kernel(sums, 1.0 / samples_per_pixel, 1.0 / gamma, out)
    return out


def to_rgb8(image) -> np.ndarray:
    """Truncate [0, 256) display values to an 8-bit RGB buffer."""
    return np.clip(np.asarray(image, dtype=np.float64), 0.0, 255.0).astype(np.uint8)

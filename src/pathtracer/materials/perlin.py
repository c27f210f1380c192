# materials/perlin.py
import math
from typing import Optional

import numpy as np
from numba import njit

from pathtracer.core.vector import Point

POINT_COUNT = 256


@njit(cache=True)
def _perlin_interp(c, u, v, w):
    """
    Hermite-smoothed trilinear interpolation of the gradient dot products
    at the eight lattice corners (JIT-compiled).
    """
    uu = u * u * (3.0 - 2.0 * u)
    vv = v * v * (3.0 - 2.0 * v)
    ww = w * w * (3.0 - 2.0 * w)
    accum = 0.0
    for i in range(2):
        for j in range(2):
            for k in range(2):
                weight_x = u - i
                weight_y = v - j
                weight_z = w - k
                dot = (c[i, j, k, 0] * weight_x
                       + c[i, j, k, 1] * weight_y
                       + c[i, j, k, 2] * weight_z)
                accum += ((i * uu + (1 - i) * (1.0 - uu))
                          * (j * vv + (1 - j) * (1.0 - vv))
                          * (k * ww + (1 - k) * (1.0 - ww))
                          * dot)
    return accum


@njit(cache=True)
def _noise(ranvec, perm_x, perm_y, perm_z, x, y, z):
    fx = math.floor(x)
    fy = math.floor(y)
    fz = math.floor(z)
    u = x - fx
    v = y - fy
    w = z - fz
    i = int(fx)
    j = int(fy)
    k = int(fz)

    c = np.empty((2, 2, 2, 3))
    for di in range(2):
        for dj in range(2):
            for dk in range(2):
                idx = (perm_x[(i + di) & 255]
                       ^ perm_y[(j + dj) & 255]
                       ^ perm_z[(k + dk) & 255])
                c[di, dj, dk, 0] = ranvec[idx, 0]
                c[di, dj, dk, 1] = ranvec[idx, 1]
                c[di, dj, dk, 2] = ranvec[idx, 2]
    return _perlin_interp(c, u, v, w)


@njit(cache=True)
def _turb(ranvec, perm_x, perm_y, perm_z, x, y, z, depth):
    accum = 0.0
    weight = 1.0
    for _ in range(depth):
        accum += weight * _noise(ranvec, perm_x, perm_y, perm_z, x, y, z)
        weight *= 0.5
        x *= 2.0
        y *= 2.0
        z *= 2.0
    return abs(accum)


class Perlin:
    """
    Gradient noise over a 256-entry lattice.

    Holds 256 random unit gradients and three independent permutation
    tables. Generated once and read-only afterwards, so one instance can be
    shared by every texture lookup on every worker.
    """
    def __init__(self, rng: Optional[np.random.Generator] = None):
        if rng is None:
            rng = np.random.default_rng()
        ranvec = rng.uniform(-1.0, 1.0, size=(POINT_COUNT, 3))
        norms = np.linalg.norm(ranvec, axis=1, keepdims=True)
        # Redraw the (vanishingly unlikely) zero vectors before normalising.
        while np.any(norms == 0.0):
            zero = norms[:, 0] == 0.0
            ranvec[zero] = rng.uniform(-1.0, 1.0, size=(int(zero.sum()), 3))
            norms = np.linalg.norm(ranvec, axis=1, keepdims=True)
        self.ranvec = np.ascontiguousarray(ranvec / norms, dtype=np.float64)
        self.perm_x = rng.permutation(POINT_COUNT).astype(np.int64)
        self.perm_y = rng.permutation(POINT_COUNT).astype(np.int64)
        self.perm_z = rng.permutation(POINT_COUNT).astype(np.int64)

    def noise(self, p: Point) -> float:
        """Noise value in roughly [-1, 1] at point p."""
        return float(_noise(self.ranvec, self.perm_x, self.perm_y, self.perm_z,
                            float(p.x), float(p.y), float(p.z)))

    def turb(self, p: Point, depth: int = 7) -> float:
        """
        Turbulence: sum of depth octaves of noise, each at twice the
        frequency and half the weight of the previous one.
        """
        return float(_turb(self.ranvec, self.perm_x, self.perm_y, self.perm_z,
                           float(p.x), float(p.y), float(p.z), depth))

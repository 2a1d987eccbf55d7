from __future__ import annotations

import numpy as np

from .core import freeze, grad2_classic, lerp, make_permutation
from .errors import InvalidParameters


class GradientNoise2D:
    """Lattice gradient noise with linear blending, scaled by `amplitude`.

    Corners use the 8 classic `+/-x +/-y` gradients selected by `h & 7`.
    """

    def __init__(self, *, seed: int = 1, amplitude: float = 1.0):
        self.seed = int(seed)
        self.amplitude = float(amplitude)
        self.perm = freeze(make_permutation(self.seed))

    def _hash(self, xi: np.ndarray, yi: np.ndarray) -> np.ndarray:
        p = self.perm
        return p[(xi & 255) + p[yi & 255]]

    def noise(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)

        x0 = np.floor(x)
        y0 = np.floor(y)
        xi0 = x0.astype(np.int64)
        yi0 = y0.astype(np.int64)
        sx = x - x0
        sy = y - y0

        n0 = grad2_classic(self._hash(xi0, yi0), sx, sy)
        n1 = grad2_classic(self._hash(xi0 + 1, yi0), sx - 1.0, sy)
        n2 = grad2_classic(self._hash(xi0, yi0 + 1), sx, sy - 1.0)
        n3 = grad2_classic(self._hash(xi0 + 1, yi0 + 1), sx - 1.0, sy - 1.0)

        return lerp(lerp(n0, n1, sx), lerp(n2, n3, sx), sy) * self.amplitude


class SparseConvolution2D:
    """Gaussian-weighted sum of hashed gradients over a square window.

    For every integer offset `o` with `|o_x|, |o_y| <= kernel_size` the cell
    containing `p + o` contributes `exp(-|o|^2) * grad(hash, o)`. The sum is
    divided by the total weight.
    """

    def __init__(self, *, seed: int = 1, kernel_size: int = 3):
        kernel_size = int(kernel_size)
        if kernel_size < 0:
            raise InvalidParameters("kernel_size must be >= 0")
        self.seed = int(seed)
        self.kernel_size = kernel_size
        self.perm = freeze(make_permutation(self.seed))

        r = np.arange(-kernel_size, kernel_size + 1, dtype=np.float64)
        ox, oy = np.meshgrid(r, r, indexing="ij")
        self.offsets = freeze(np.stack([ox.ravel(), oy.ravel()], axis=1))
        self.weights = freeze(np.exp(-(ox.ravel() ** 2 + oy.ravel() ** 2)))

    def noise(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)

        p = self.perm
        total = np.zeros(np.broadcast(x, y).shape, dtype=np.float64)
        for (ox, oy), w in zip(self.offsets, self.weights):
            xi = np.floor(x + ox).astype(np.int64) & 255
            yi = np.floor(y + oy).astype(np.int64) & 255
            h = p[xi + p[yi]]
            total += w * grad2_classic(h, ox, oy)
        return total / float(np.sum(self.weights))

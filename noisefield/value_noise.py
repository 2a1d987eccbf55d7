from __future__ import annotations

import numpy as np

from .core import freeze, lattice_hash, lerp, make_value_table


class _Lattice2D:
    def __init__(self, *, seed: int = 1):
        self.seed = int(seed)
        self.table = freeze(make_value_table(self.seed))

    def _corners(self, x: np.ndarray, y: np.ndarray):
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        x0 = np.floor(x)
        y0 = np.floor(y)
        xi0 = x0.astype(np.int64)
        yi0 = y0.astype(np.int64)
        sx = x - x0
        sy = y - y0
        t = self.table
        v00 = t[lattice_hash(xi0, yi0)]
        v10 = t[lattice_hash(xi0 + 1, yi0)]
        v01 = t[lattice_hash(xi0, yi0 + 1)]
        v11 = t[lattice_hash(xi0 + 1, yi0 + 1)]
        return sx, sy, v00, v10, v01, v11


class ValueNoise2D(_Lattice2D):
    """2D value noise (hashed lattice values + bilinear interpolation).

    Lattice values are uniform in [0, 1), so the output is too.
    """

    def noise(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        sx, sy, v00, v10, v01, v11 = self._corners(x, y)
        return lerp(lerp(v00, v10, sx), lerp(v01, v11, sx), sy)


class WaveletNoise2D(_Lattice2D):
    """Lattice noise where each corner contributes `value * (dx + dy)`.

    This is the simplified band-limited approximation, not Cook & DeRose
    wavelet noise: there is no downsample/upsample basis construction.
    """

    def noise(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        sx, sy, v00, v10, v01, v11 = self._corners(x, y)
        n00 = v00 * (sx + sy)
        n10 = v10 * ((sx - 1.0) + sy)
        n01 = v01 * (sx + (sy - 1.0))
        n11 = v11 * ((sx - 1.0) + (sy - 1.0))
        return lerp(lerp(n00, n10, sx), lerp(n01, n11, sx), sy)

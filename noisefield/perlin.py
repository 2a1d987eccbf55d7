from __future__ import annotations

import numpy as np

from .core import fade, freeze, lerp, make_gradients, make_permutation
from .octaves import accumulate_octaves, check_octaves


class Perlin2D:
    """Gradient noise over a lattice of seeded random unit vectors.

    Output is roughly in [-1, 1] (the theoretical bound for unit gradients is
    sqrt(2)/2) and exactly 0 on lattice points.
    """

    def __init__(self, *, seed: int = 1):
        self.seed = int(seed)
        self.perm = freeze(make_permutation(self.seed))
        self.gradients = freeze(make_gradients(self.seed))

    def _hash(self, xi: np.ndarray, yi: np.ndarray) -> np.ndarray:
        p = self.perm
        return p[(xi + p[yi & 255]) & 255]

    def noise(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)

        x0 = np.floor(x)
        y0 = np.floor(y)
        xi0 = x0.astype(np.int64)
        yi0 = y0.astype(np.int64)
        xi1 = xi0 + 1
        yi1 = yi0 + 1

        xf = x - x0
        yf = y - y0
        u = fade(xf)
        v = fade(yf)

        g = self.gradients
        g00 = g[self._hash(xi0, yi0)]
        g10 = g[self._hash(xi1, yi0)]
        g01 = g[self._hash(xi0, yi1)]
        g11 = g[self._hash(xi1, yi1)]

        d00 = g00[..., 0] * xf + g00[..., 1] * yf
        d10 = g10[..., 0] * (xf - 1.0) + g10[..., 1] * yf
        d01 = g01[..., 0] * xf + g01[..., 1] * (yf - 1.0)
        d11 = g11[..., 0] * (xf - 1.0) + g11[..., 1] * (yf - 1.0)

        return lerp(lerp(d00, d10, u), lerp(d01, d11, u), v)


class ClassicPerlin2D:
    """Improved Perlin noise with the hash-selected classic gradient set.

    Gradients are picked from `h & 7` with the y-ish component doubled, so the
    raw output spans roughly [-2, 2]. Used as the basis of `Fractal`.
    """

    def __init__(self, *, seed: int = 1):
        self.seed = int(seed)
        self.perm = freeze(make_permutation(self.seed))

    @staticmethod
    def _grad(h: np.ndarray, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        h = h & 7
        u = np.where(h < 4, x, y)
        v = np.where(h < 4, y, x)
        u = np.where((h & 1) != 0, -u, u)
        v = np.where((h & 2) != 0, -2.0 * v, 2.0 * v)
        return u + v

    def noise(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)

        xi = np.floor(x).astype(np.int64) & 255
        yi = np.floor(y).astype(np.int64) & 255
        xf = x - np.floor(x)
        yf = y - np.floor(y)
        u = fade(xf)
        v = fade(yf)

        p = self.perm
        aa = p[p[xi] + yi]
        ab = p[p[xi] + yi + 1]
        ba = p[p[xi + 1] + yi]
        bb = p[p[xi + 1] + yi + 1]

        x1 = lerp(self._grad(aa, xf, yf), self._grad(ba, xf - 1.0, yf), u)
        x2 = lerp(self._grad(ab, xf, yf - 1.0), self._grad(bb, xf - 1.0, yf - 1.0), u)
        return lerp(x1, x2, v)


class FractalPerlin2D:
    """Octave-summed `ClassicPerlin2D`, remapped into [0, 1].

    Each octave contributes `n * 2 - 1` of the classic kernel sampled at
    `(x, y) * frequency + offset`; the normalized sum `s` is returned as
    `clip((s + 1) / 2, 0, 1)`.
    """

    def __init__(
        self,
        *,
        seed: int = 1,
        octaves: int = 4,
        lacunarity: float = 2.0,
        persistence: float = 0.5,
        offset: tuple[float, float] = (0.0, 0.0),
    ):
        self.basis = ClassicPerlin2D(seed=seed)
        self.octaves = check_octaves(octaves)
        self.lacunarity = float(lacunarity)
        self.persistence = float(persistence)
        self.offset = (float(offset[0]), float(offset[1]))

    def _octave(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        return self.basis.noise(x + self.offset[0], y + self.offset[1]) * 2.0 - 1.0

    def noise(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        s = accumulate_octaves(
            self._octave,
            x,
            y,
            octaves=self.octaves,
            lacunarity=self.lacunarity,
            gain=self.persistence,
        )
        return np.clip((s + 1.0) / 2.0, 0.0, 1.0)

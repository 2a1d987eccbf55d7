from __future__ import annotations

import math

import numpy as np

from .core import freeze, grad2_axis, grad3_dot, make_permutation

F2 = 0.5 * (math.sqrt(3.0) - 1.0)
G2 = (3.0 - math.sqrt(3.0)) / 6.0


def _grad_fn(name: str):
    name = str(name)
    if name in {"axis8", "default"}:
        return grad2_axis
    if name in {"grad12"}:
        return grad3_dot
    raise ValueError(f"unknown simplex gradient set: {name}")


def _corner(t: np.ndarray, g: np.ndarray) -> np.ndarray:
    t2 = t * t
    return np.where(t < 0.0, 0.0, t2 * t2 * g)


class Simplex2D:
    """2D simplex noise (skewed triangular lattice), roughly in [-1, 1].

    `grad_set="axis8"` picks one of the four axis directions from `h & 7`;
    `grad_set="grad12"` uses the 12 edge directions of a cube (`h % 12`),
    projected onto the plane.
    """

    def __init__(self, *, seed: int = 1, grad_set: str = "axis8"):
        self.seed = int(seed)
        self.grad_set = str(grad_set)
        self._grad = _grad_fn(self.grad_set)
        self.perm = freeze(make_permutation(self.seed))

    def noise(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)

        s = (x + y) * F2
        i = np.floor(x + s).astype(np.int64)
        j = np.floor(y + s).astype(np.int64)

        t = (i + j) * G2
        x0 = x - (i - t)
        y0 = y - (j - t)

        upper = x0 > y0
        i1 = np.where(upper, 1, 0)
        j1 = np.where(upper, 0, 1)

        x1 = x0 - i1 + G2
        y1 = y0 - j1 + G2
        x2 = x0 - 1.0 + 2.0 * G2
        y2 = y0 - 1.0 + 2.0 * G2

        p = self.perm
        ii = i & 255
        jj = j & 255
        h0 = p[ii + p[jj]]
        h1 = p[ii + i1 + p[jj + j1]]
        h2 = p[ii + 1 + p[jj + 1]]

        n0 = _corner(0.5 - x0 * x0 - y0 * y0, self._grad(h0, x0, y0))
        n1 = _corner(0.5 - x1 * x1 - y1 * y1, self._grad(h1, x1, y1))
        n2 = _corner(0.5 - x2 * x2 - y2 * y2, self._grad(h2, x2, y2))

        return 70.0 * (n0 + n1 + n2)

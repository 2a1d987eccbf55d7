from __future__ import annotations

import math

import numpy as np

from .core import freeze
from .errors import InvalidParameters
from .params import DistanceFunction
from .rng import XorShift32, first_unit_vectors


def make_cell_points(
    seed: int, *, num_cells: int, width: int, height: int, scale: float
) -> np.ndarray:
    """Scatter `num_cells` points over the scaled sample domain, shape (n, 2)."""

    rng = XorShift32(seed)
    span_x = float(width) / float(scale)
    span_y = float(height) / float(scale)
    pts = np.empty((int(num_cells), 2), dtype=np.float64)
    for i in range(int(num_cells)):
        pts[i, 0] = rng.next_float(0.0, span_x)
        pts[i, 1] = rng.next_float(0.0, span_y)
    return pts


def distance(dx: np.ndarray, dy: np.ndarray, func: DistanceFunction | str) -> np.ndarray:
    func = DistanceFunction.parse(func)
    if func is DistanceFunction.MANHATTAN:
        return np.abs(dx) + np.abs(dy)
    if func is DistanceFunction.CHEBYSHEV:
        return np.maximum(np.abs(dx), np.abs(dy))
    return np.sqrt(dx * dx + dy * dy)


def nearest_features(distances: np.ndarray, count: int) -> np.ndarray:
    """The `count` smallest values along the last axis, ascending."""

    count = int(count)
    d = np.asarray(distances, dtype=np.float64)
    if count < d.shape[-1]:
        d = np.partition(d, count - 1, axis=-1)[..., :count]
    return np.sort(d, axis=-1)


class Worley2D:
    """Cellular noise: distance to the N-th nearest jittered feature point.

    Feature points are scattered once per instance. Each (pixel, cell) pair
    gets its own jitter direction from an RNG stream created from
    `index + cell`, so a pixel's value never depends on evaluation order.
    Distances are divided by the pixel-grid diagonal.
    """

    cell_block = 1024

    def __init__(
        self,
        *,
        seed: int = 1,
        width: int,
        height: int,
        num_cells: int = 64,
        scale: float = 1.0,
        jitter: float = 1.0,
        distance_function: DistanceFunction | str = DistanceFunction.EUCLIDEAN,
        number_of_features: int = 1,
    ):
        num_cells = int(num_cells)
        number_of_features = int(number_of_features)
        if num_cells < 1:
            raise InvalidParameters("num_cells must be >= 1")
        if not 1 <= number_of_features <= num_cells:
            raise InvalidParameters("number_of_features must be in [1, num_cells]")
        if float(scale) <= 0.0:
            raise InvalidParameters("scale must be > 0")

        self.seed = int(seed)
        self.width = int(width)
        self.height = int(height)
        self.num_cells = num_cells
        self.scale = float(scale)
        self.jitter = float(jitter)
        self.distance_function = DistanceFunction.parse(distance_function)
        self.number_of_features = number_of_features
        self.diagonal = math.sqrt(float(self.width) ** 2 + float(self.height) ** 2)
        self.cells = freeze(
            make_cell_points(
                self.seed,
                num_cells=num_cells,
                width=self.width,
                height=self.height,
                scale=self.scale,
            )
        )

    def features(
        self, x: np.ndarray, y: np.ndarray, index: np.ndarray | None = None
    ) -> np.ndarray:
        """Sorted nearest distances, shape `x.shape + (number_of_features,)`.

        `index` is the flat pixel index of each sample; it defaults to the
        row-major position of each element in `x`. Cells are visited
        `cell_block` at a time, keeping only the running nearest set, so
        scratch memory stays at `x.size * (cell_block + number_of_features)`.
        """

        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        if index is None:
            index = np.arange(x.size, dtype=np.int64).reshape(x.shape)
        index = np.asarray(index, dtype=np.int64)[..., None]
        xs = x[..., None]
        ys = y[..., None]

        count = self.number_of_features
        block = max(int(self.cell_block), 1)
        best = None
        for start in range(0, self.num_cells, block):
            stop = min(start + block, self.num_cells)
            jx, jy = first_unit_vectors(index + np.arange(start, stop, dtype=np.int64))
            cx = self.cells[start:stop, 0] + self.jitter * jx
            cy = self.cells[start:stop, 1] + self.jitter * jy
            d = distance(xs - cx, ys - cy, self.distance_function)
            if best is not None:
                d = np.concatenate([best, d], axis=-1)
            if d.shape[-1] > count:
                d = np.partition(d, count - 1, axis=-1)[..., :count]
            best = d
        return nearest_features(best, count)

    def noise(
        self, x: np.ndarray, y: np.ndarray, index: np.ndarray | None = None
    ) -> np.ndarray:
        f = self.features(x, y, index)
        return f[..., -1] / self.diagonal

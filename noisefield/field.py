from __future__ import annotations

import numpy as np

from .errors import InvalidDimensions, ShapeMismatch


class NoiseField:
    """A finished `width * height` grid of float32 samples, row-major.

    The field takes ownership of `values` and marks it read-only; use
    `from_array` to build one from an array you want to keep mutating.
    """

    __slots__ = ("width", "height", "values")

    def __init__(self, width: int, height: int, values: np.ndarray):
        width = int(width)
        height = int(height)
        if width <= 0 or height <= 0:
            raise InvalidDimensions(f"width and height must be > 0, got {width}x{height}")
        values = np.asarray(values, dtype=np.float32).reshape(-1)
        if values.size != width * height:
            raise ShapeMismatch(
                f"expected {width * height} values for {width}x{height}, got {values.size}"
            )
        values.flags.writeable = False
        self.width = width
        self.height = height
        self.values = values

    @classmethod
    def from_array(cls, grid: np.ndarray) -> "NoiseField":
        """Copy a 2D `(height, width)` array into a new field."""

        grid = np.array(grid, dtype=np.float32, copy=True)
        if grid.ndim != 2:
            raise InvalidDimensions("expected a 2D array")
        h, w = grid.shape
        return cls(w, h, grid)

    @classmethod
    def full(cls, width: int, height: int, value: float) -> "NoiseField":
        w = int(width)
        h = int(height)
        return cls(w, h, np.full(max(w, 0) * max(h, 0), value, dtype=np.float32))

    def __len__(self) -> int:
        return int(self.values.size)

    def __getitem__(self, index):
        return self.values[index]

    def __array__(self, dtype=None, copy=None):
        a = self.values if dtype is None else self.values.astype(dtype)
        if copy and a is self.values:
            return a.copy()
        return a

    def __repr__(self) -> str:
        return f"NoiseField(width={self.width}, height={self.height})"

    def as_grid(self) -> np.ndarray:
        return self.values.reshape(self.height, self.width)

    def at(self, x: int, y: int) -> float:
        return float(self.values[int(y) * self.width + int(x)])

from __future__ import annotations

import numpy as np

from .rng import first_floats, wang_hash


class White2D:
    """Spatially incoherent noise: `uniform(0, 1) * amplitude + bias`.

    The draw for pixel `i` is the first float of an RNG stream keyed by
    `i` mixed with the seed, so any subset of pixels can be evaluated in
    any order. Coordinates are ignored.
    """

    def __init__(self, *, seed: int = 1, amplitude: float = 1.0, bias: float = 0.0):
        self.seed = int(seed)
        self.amplitude = float(amplitude)
        self.bias = float(bias)
        self._key = wang_hash(self.seed)

    def noise(
        self, x: np.ndarray, y: np.ndarray, index: np.ndarray | None = None
    ) -> np.ndarray:
        x = np.asarray(x, dtype=np.float64)
        if index is None:
            index = np.arange(x.size, dtype=np.int64).reshape(x.shape)
        index = np.asarray(index, dtype=np.int64)
        u = first_floats(index ^ self._key)
        return u * self.amplitude + self.bias

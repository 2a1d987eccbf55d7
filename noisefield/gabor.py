from __future__ import annotations

import math

import numpy as np


class Gabor2D:
    """A single Gabor kernel centred on the origin.

    The sample point is rotated by `orientation` degrees, its x axis is
    stretched by `aspect_ratio`, and the result is
    `amplitude * sin(2*pi*frequency*x + phase) * exp(-0.5 * |p|^2)`.
    No impulses are scattered, so there is nothing to seed.
    """

    def __init__(
        self,
        *,
        frequency: float = 1.0,
        orientation: float = 0.0,
        aspect_ratio: float = 1.0,
        phase: float = 0.0,
        amplitude: float = 1.0,
    ):
        self.frequency = float(frequency)
        self.orientation = float(orientation)
        self.aspect_ratio = float(aspect_ratio)
        self.phase = float(phase)
        self.amplitude = float(amplitude)

        angle = math.radians(self.orientation)
        self._cos = math.cos(angle)
        self._sin = math.sin(angle)

    def noise(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)

        rx = self._cos * x - self._sin * y
        ry = self._sin * x + self._cos * y
        gx = rx * self.aspect_ratio
        gy = ry

        wave = np.sin(2.0 * math.pi * self.frequency * gx + self.phase)
        envelope = np.exp(-0.5 * (gx * gx + gy * gy))
        return self.amplitude * wave * envelope

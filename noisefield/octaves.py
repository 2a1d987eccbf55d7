from __future__ import annotations

from typing import Callable, Protocol

import numpy as np

from .errors import InvalidOctaveCount


class Noise2D(Protocol):
    def noise(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:  # pragma: no cover
        ...


def check_octaves(octaves: int) -> int:
    if isinstance(octaves, bool) or int(octaves) != octaves:
        raise InvalidOctaveCount(f"octaves must be an integer, got {octaves!r}")
    octaves = int(octaves)
    if octaves <= 0:
        raise InvalidOctaveCount(f"octaves must be >= 1, got {octaves}")
    return octaves


def accumulate_octaves(
    kernel: Callable[[np.ndarray, np.ndarray], np.ndarray],
    x: np.ndarray,
    y: np.ndarray,
    *,
    octaves: int,
    lacunarity: float = 2.0,
    gain: float = 0.5,
    amplitude: float = 1.0,
    frequency: float = 1.0,
) -> np.ndarray:
    """Sum `octaves` layers of `kernel` and normalize by the amplitude total.

    Octave i samples at `(x, y) * frequency * lacunarity**i` with weight
    `amplitude * gain**i`. Dividing by the summed weights keeps the result in
    the kernel's own range.
    """

    octaves = check_octaves(octaves)
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)

    lacunarity = float(lacunarity)
    gain = float(gain)
    amp = float(amplitude)
    freq = float(frequency)

    total = np.zeros(np.broadcast(x, y).shape, dtype=np.float64)
    amp_sum = 0.0

    for _ in range(octaves):
        total += amp * kernel(x * freq, y * freq)
        amp_sum += amp
        amp *= gain
        freq *= lacunarity

    if amp_sum == 0.0:
        return total
    return total / amp_sum


class Fractal2D:
    """Wrap a single-octave noise object into its fractal sum."""

    def __init__(
        self,
        base: Noise2D,
        *,
        octaves: int,
        lacunarity: float = 2.0,
        gain: float = 0.5,
        amplitude: float = 1.0,
        frequency: float = 1.0,
    ):
        self.base = base
        self.octaves = check_octaves(octaves)
        self.lacunarity = float(lacunarity)
        self.gain = float(gain)
        self.amplitude = float(amplitude)
        self.frequency = float(frequency)

    def noise(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        return accumulate_octaves(
            self.base.noise,
            x,
            y,
            octaves=self.octaves,
            lacunarity=self.lacunarity,
            gain=self.gain,
            amplitude=self.amplitude,
            frequency=self.frequency,
        )

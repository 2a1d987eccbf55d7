from __future__ import annotations

import math

import numpy as np

from .rng import XorShift32

TABLE_SIZE = 256


def fade(t: np.ndarray) -> np.ndarray:
    """Quintic fade curve used by Improved Perlin Noise (2002)."""
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def lerp(a: np.ndarray, b: np.ndarray, t: np.ndarray) -> np.ndarray:
    return a + t * (b - a)


def make_permutation(seed: int) -> np.ndarray:
    """Seeded Fisher-Yates shuffle of 0..255, duplicated to 512 entries."""

    rng = XorShift32(seed)
    p = list(range(TABLE_SIZE))
    for i in range(TABLE_SIZE - 1, 0, -1):
        j = rng.next_int(0, i + 1)
        p[i], p[j] = p[j], p[i]
    p = np.asarray(p, dtype=np.int32)
    return np.concatenate([p, p])


def make_gradients(seed: int) -> np.ndarray:
    """512 random unit vectors, shape (512, 2).

    Drawn from a fresh generator seeded with `seed`, independent of the
    permutation stream, so either table can be rebuilt on its own.
    """

    rng = XorShift32(seed)
    angles = np.empty(TABLE_SIZE, dtype=np.float64)
    for i in range(TABLE_SIZE):
        angles[i] = rng.next_float(0.0, 2.0 * math.pi)
    g = np.stack([np.cos(angles), np.sin(angles)], axis=1)
    return np.concatenate([g, g])


def make_value_table(seed: int, size: int = 2 * TABLE_SIZE) -> np.ndarray:
    rng = XorShift32(seed)
    return np.array([rng.next_float_01() for _ in range(int(size))], dtype=np.float64)


def freeze(a: np.ndarray) -> np.ndarray:
    a.flags.writeable = False
    return a


def lattice_hash(x: np.ndarray, y: np.ndarray) -> np.ndarray:
    """Integer spatial hash into a 512-entry table (32-bit wraparound)."""

    h = np.asarray(x, dtype=np.int64) * 374761393 + np.asarray(y, dtype=np.int64) * 668265263
    return (h & 511).astype(np.intp)


def grad2_classic(h: np.ndarray, x: np.ndarray, y: np.ndarray) -> np.ndarray:
    """Hash-selected gradient from the 8 classic +/-x +/-y combinations."""

    h = np.asarray(h) & 7
    u = np.where(h < 4, x, y)
    v = np.where(h < 4, y, x)
    u = np.where((h & 1) != 0, -u, u)
    v = np.where((h & 2) != 0, -v, v)
    return u + v


def grad2_axis(h: np.ndarray, x: np.ndarray, y: np.ndarray) -> np.ndarray:
    h = np.asarray(h) & 7
    gx = np.where(h < 4, 1.0, 0.0)
    gy = np.where(h < 4, 0.0, 1.0)
    gx = np.where((h & 1) != 0, -gx, gx)
    gy = np.where((h & 2) != 0, -gy, gy)
    return gx * x + gy * y


GRAD3 = freeze(
    np.array(
        [
            [1.0, 1.0, 0.0],
            [-1.0, 1.0, 0.0],
            [1.0, -1.0, 0.0],
            [-1.0, -1.0, 0.0],
            [1.0, 0.0, 1.0],
            [-1.0, 0.0, 1.0],
            [1.0, 0.0, -1.0],
            [-1.0, 0.0, -1.0],
            [0.0, 1.0, 1.0],
            [0.0, -1.0, 1.0],
            [0.0, 1.0, -1.0],
            [0.0, -1.0, -1.0],
        ],
        dtype=np.float64,
    )
)


def grad3_dot(h: np.ndarray, x: np.ndarray, y: np.ndarray) -> np.ndarray:
    # z component of the sample is always 0 in 2D
    g = GRAD3[np.asarray(h) % 12]
    return g[..., 0] * x + g[..., 1] * y

from __future__ import annotations

import math

import numpy as np

_MASK32 = 0xFFFFFFFF
_DEFAULT_STATE = 0x6E624EB7
_INV_2_23 = 1.0 / 8388608.0


def _xorshift32(state: int) -> int:
    state ^= (state << 13) & _MASK32
    state ^= state >> 17
    state ^= (state << 5) & _MASK32
    return state


def wang_hash(n: int) -> int:
    n &= _MASK32
    n = (n ^ 61) ^ (n >> 16)
    n = (n * 9) & _MASK32
    n ^= n >> 4
    n = (n * 0x27D4EB2D) & _MASK32
    n ^= n >> 15
    return n


class XorShift32:
    """Small 32-bit xorshift generator.

    The sequence for a given seed is fixed bit-for-bit on every platform, so
    every permutation and gradient table built from it is reproducible.
    """

    def __init__(self, seed: int = _DEFAULT_STATE):
        state = int(seed) & _MASK32
        if state == 0:
            state = _DEFAULT_STATE
        self.state = state
        self._next_state()

    @classmethod
    def from_index(cls, index: int) -> "XorShift32":
        return cls(wang_hash(int(index) + 62))

    def _next_state(self) -> int:
        t = self.state
        self.state = _xorshift32(self.state)
        return t

    def next_uint32(self) -> int:
        return (self._next_state() - 1) & _MASK32

    def next_float_01(self) -> float:
        return float(self._next_state() >> 9) * _INV_2_23

    def next_float(self, lo: float, hi: float) -> float:
        return self.next_float_01() * (hi - lo) + lo

    def next_int_below(self, bound: int) -> int:
        bound = int(bound)
        if bound <= 0:
            raise ValueError("bound must be > 0")
        return (self._next_state() * bound) >> 32

    def next_int(self, lo: int, hi: int) -> int:
        lo = int(lo)
        hi = int(hi)
        if hi <= lo:
            raise ValueError("hi must be > lo")
        return lo + ((self._next_state() * (hi - lo)) >> 32)

    def next_unit_vector_2d(self) -> tuple[float, float]:
        angle = self.next_float_01() * 2.0 * math.pi
        return math.cos(angle), math.sin(angle)


def _wang_hash_array(n: np.ndarray) -> np.ndarray:
    n = n.astype(np.uint32)
    n = (n ^ np.uint32(61)) ^ (n >> np.uint32(16))
    n = n * np.uint32(9)
    n = n ^ (n >> np.uint32(4))
    n = n * np.uint32(0x27D4EB2D)
    n = n ^ (n >> np.uint32(15))
    return n


def index_states(indices: np.ndarray) -> np.ndarray:
    """Vectorized `XorShift32.from_index(i).state` for many indices at once."""

    idx = np.asarray(indices, dtype=np.int64) & _MASK32
    with np.errstate(over="ignore"):
        seeds = _wang_hash_array((idx + 62) & _MASK32)
    seeds = np.where(seeds == 0, np.uint32(_DEFAULT_STATE), seeds)
    s = seeds.astype(np.uint32)
    s ^= s << np.uint32(13)
    s ^= s >> np.uint32(17)
    s ^= s << np.uint32(5)
    return s


def first_floats(indices: np.ndarray) -> np.ndarray:
    """First `next_float_01()` of each `XorShift32.from_index(i)` stream."""

    s = index_states(indices)
    return (s >> np.uint32(9)).astype(np.float64) * _INV_2_23


def first_unit_vectors(indices: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    angle = first_floats(indices) * (2.0 * math.pi)
    return np.cos(angle), np.sin(angle)

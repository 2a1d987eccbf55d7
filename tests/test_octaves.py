import numpy as np
import pytest

from noisefield.errors import InvalidOctaveCount
from noisefield.octaves import Fractal2D, accumulate_octaves, check_octaves


class _Constant:
    def __init__(self, value):
        self.value = value

    def noise(self, x, y):
        return np.full(np.broadcast(x, y).shape, self.value, dtype=np.float64)


class _Recorder:
    def __init__(self):
        self.frequencies = []

    def noise(self, x, y):
        self.frequencies.append(float(np.asarray(x).ravel()[0]))
        return np.asarray(x, dtype=np.float64)


def test_constant_kernel_survives_normalization():
    x = np.linspace(0, 1, 5)
    z = accumulate_octaves(_Constant(0.75).noise, x, x, octaves=6, lacunarity=2.0, gain=0.5)
    assert np.allclose(z, 0.75)


def test_single_octave_equals_kernel():
    x = np.linspace(0.1, 3.0, 7)
    y = np.linspace(1.0, 2.0, 7)
    k = _Recorder()
    assert np.allclose(accumulate_octaves(k.noise, x, y, octaves=1), x)


def test_frequency_starts_and_grows_by_lacunarity():
    k = _Recorder()
    accumulate_octaves(k.noise, np.ones(2), np.ones(2), octaves=4, lacunarity=3.0, frequency=0.5)
    assert k.frequencies == [0.5, 1.5, 4.5, 13.5]


def test_weights_follow_gain():
    x = np.ones(1)
    z = accumulate_octaves(lambda a, b: a, x, x, octaves=2, lacunarity=2.0, gain=0.25)
    # (1 * 1 + 0.25 * 2) / 1.25
    assert np.allclose(z, 1.2)


def test_zero_amplitude_returns_raw_sum():
    x = np.ones(3)
    z = accumulate_octaves(_Constant(1.0).noise, x, x, octaves=3, amplitude=0.0)
    assert np.allclose(z, 0.0)


@pytest.mark.parametrize("octaves", [0, -1, 2.5, True])
def test_rejects_bad_octave_counts(octaves):
    with pytest.raises(InvalidOctaveCount):
        check_octaves(octaves)
    with pytest.raises(InvalidOctaveCount):
        Fractal2D(_Constant(0.0), octaves=octaves)


def test_fractal2d_matches_accumulate():
    x = np.linspace(0, 2, 9)
    base = _Constant(0.2)
    f = Fractal2D(base, octaves=3, gain=0.7)
    assert np.allclose(f.noise(x, x), accumulate_octaves(base.noise, x, x, octaves=3, gain=0.7))

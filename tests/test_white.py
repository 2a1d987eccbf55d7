import numpy as np

from noisefield.rng import first_floats, wang_hash
from noisefield.white import White2D


def test_white_range_follows_amplitude_and_bias():
    n = White2D(seed=9, amplitude=2.0, bias=-1.0)
    z = n.noise(np.zeros(4096), np.zeros(4096), np.arange(4096))
    assert float(z.min()) >= -1.0
    assert float(z.max()) < 1.0
    assert float(np.std(z)) > 0.3


def test_white_deterministic_and_seeded():
    idx = np.arange(256)
    a = White2D(seed=5).noise(idx, idx, idx)
    b = White2D(seed=5).noise(idx, idx, idx)
    c = White2D(seed=6).noise(idx, idx, idx)
    assert np.array_equal(a, b)
    assert not np.allclose(a, c)


def test_white_depends_only_on_index():
    n = White2D(seed=5)
    idx = np.array([3, 1000, 7])
    a = n.noise(np.array([0.0, 1.0, 2.0]), np.array([0.0, 0.0, 0.0]), idx)
    b = n.noise(np.array([9.0, -4.0, 0.5]), np.array([1.0, 2.0, 3.0]), idx)
    assert np.array_equal(a, b)
    assert np.array_equal(a[1:2], n.noise(np.zeros(1), np.zeros(1), idx[1:2]))


def test_white_draw_matches_index_stream():
    n = White2D(seed=11)
    idx = np.arange(10)
    assert np.allclose(n.noise(idx, idx, idx), first_floats(idx ^ wang_hash(11)))

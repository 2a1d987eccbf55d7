import numpy as np

from noisefield.core import (
    fade,
    grad2_axis,
    grad2_classic,
    lattice_hash,
    lerp,
    make_gradients,
    make_permutation,
    make_value_table,
)


def test_fade_endpoints():
    t = np.array([0.0, 1.0], dtype=np.float64)
    out = fade(t)
    assert out[0] == 0.0
    assert out[1] == 1.0


def test_lerp_basic():
    a = np.array([0.0, 10.0])
    b = np.array([10.0, 20.0])
    t = np.array([0.0, 0.5])
    out = lerp(a, b, t)
    assert np.allclose(out, np.array([0.0, 15.0]))


def test_permutation_is_bijection_and_duplicated():
    for seed in [0, 1, 42, 43, 2**31 - 1, 2**32 - 1]:
        p = make_permutation(seed)
        assert p.shape == (512,)
        assert sorted(p[:256].tolist()) == list(range(256))
        assert np.array_equal(p[:256], p[256:])


def test_permutation_reference_values_seed_42():
    p = make_permutation(42)
    assert p[:16].tolist() == [159, 64, 108, 226, 111, 43, 250, 147, 217, 125, 138, 21, 15, 70, 37, 191]
    assert p[250:256].tolist() == [84, 220, 214, 28, 168, 0]


def test_permutation_changes_with_seed():
    assert not np.array_equal(make_permutation(42), make_permutation(43))


def test_gradients_are_unit_vectors_and_duplicated():
    g = make_gradients(42)
    assert g.shape == (512, 2)
    assert np.allclose(np.linalg.norm(g, axis=1), 1.0)
    assert np.array_equal(g[:256], g[256:])


def test_gradients_first_angle_seed_42():
    g = make_gradients(42)
    angle = 0.0026438236236572266 * 2.0 * np.pi
    assert np.allclose(g[0], [np.cos(angle), np.sin(angle)])


def test_value_table_range_and_determinism():
    t1 = make_value_table(7)
    t2 = make_value_table(7)
    assert t1.shape == (512,)
    assert np.array_equal(t1, t2)
    assert float(t1.min()) >= 0.0
    assert float(t1.max()) < 1.0


def test_lattice_hash_wraps_like_32bit():
    x = np.array([0, 1, -1, 100000])
    y = np.array([0, 0, -1, 100000])
    h = lattice_hash(x, y)
    expected = [((int(a) * 374761393 + int(b) * 668265263) & 0xFFFFFFFF) & 511 for a, b in zip(x, y)]
    assert h.tolist() == expected
    assert h.min() >= 0 and h.max() < 512


def test_classic_gradients_pick_signed_axes():
    x = np.full(8, 0.25)
    y = np.full(8, 0.75)
    h = np.arange(8)
    out = grad2_classic(h, x, y)
    assert np.allclose(out, [1.0, 0.5, -0.5, -1.0, 1.0, -0.5, 0.5, -1.0])


def test_axis_gradients_are_unit_axes():
    x = np.full(8, 0.25)
    y = np.full(8, 0.75)
    out = grad2_axis(np.arange(8), x, y)
    assert np.allclose(out, [0.25, -0.25, 0.25, -0.25, 0.75, 0.75, -0.75, -0.75])

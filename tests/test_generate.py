import importlib
import math

import numpy as np
import pytest

from noisefield.errors import (
    InvalidDimensions,
    InvalidOctaveCount,
    InvalidParameters,
    UnsupportedNoiseType,
)
from noisefield.generate import generate, generate_combined
from noisefield.params import CombinedNoiseConfiguration, CombineMethod, NoiseParameters, NoiseType

generate_module = importlib.import_module("noisefield.generate")

PERLIN_SEED_42 = [
    -0.482628547, 0.45167589, 0.251976227, 0.385442074,
    -0.146869689, 0.021575771, 0.0586228997, -0.376985216,
    -0.326489198, -0.151098656, 0.0912072396, 0.363069012,
    -0.471480299, 0.0264421773, -0.296771317, 0.0175458416,
]


def _params(noise_type, **kw):
    base = dict(noise_type=noise_type, seed=5, width=24, height=16, scale=0.15, num_cells=16)
    base.update(kw)
    return NoiseParameters(**base)


@pytest.mark.parametrize("noise_type", list(NoiseType))
def test_every_type_is_deterministic_and_sized(noise_type):
    p = _params(noise_type, scale=1.0) if noise_type is NoiseType.WORLEY else _params(noise_type)
    a = generate(p, workers=1)
    b = generate(p, workers=3, chunk_size=50)
    assert (a.width, a.height, len(a)) == (24, 16, 384)
    assert np.isfinite(np.asarray(a)).all()
    assert np.array_equal(np.asarray(a), np.asarray(b))


def test_perlin_reference_values():
    f = generate(noise_type="perlin", seed=42, width=4, height=4, scale=1.0)
    assert np.allclose(np.asarray(f), PERLIN_SEED_42, atol=1e-6)
    g = generate(noise_type="perlin", seed=43, width=4, height=4, scale=1.0)
    assert np.isclose(g[0], 0.0185263471, atol=1e-6)
    assert not np.allclose(np.asarray(f), np.asarray(g))


def test_worley_reference_values():
    f = generate(noise_type="worley", seed=1, width=8, height=8, num_cells=4, number_of_features=1)
    z = np.asarray(f)
    assert float(z.min()) >= 0.0
    assert float(z.max()) <= 1.0
    assert np.allclose(z[:4], [0.0924308321, 0.0648888456, 0.143389762, 0.0601991536], atol=1e-6)


@pytest.mark.parametrize(
    "noise_type",
    [NoiseType.PERLIN_FRACTAL, NoiseType.SIMPLEX_FRACTAL, NoiseType.VALUE, NoiseType.FRACTAL],
)
def test_fractal_types_reject_zero_octaves(noise_type):
    with pytest.raises(InvalidOctaveCount):
        generate(_params(noise_type, octaves=0))


@pytest.mark.parametrize("noise_type", [NoiseType.VALUE, NoiseType.FRACTAL, NoiseType.WHITE])
def test_unit_range_types(noise_type):
    z = np.asarray(generate(_params(noise_type)))
    assert float(z.min()) >= 0.0
    assert float(z.max()) <= 1.0


def test_mapping_and_overrides():
    base = {"noise_type": "simplex", "seed": 3, "width": 8, "height": 8}
    a = generate(base, seed=4)
    b = generate(NoiseParameters(**base).replace(seed=4))
    c = generate(noise_type="simplex", seed=4, width=8, height=8)
    assert np.array_equal(np.asarray(a), np.asarray(b))
    assert np.array_equal(np.asarray(a), np.asarray(c))


def test_invalid_dimensions():
    with pytest.raises(InvalidDimensions):
        generate(noise_type="white", width=0, height=4)


def test_unregistered_type_is_unsupported(monkeypatch):
    builders = dict(generate_module.KERNEL_BUILDERS)
    del builders[NoiseType.GABOR]
    monkeypatch.setattr(generate_module, "KERNEL_BUILDERS", builders)
    with pytest.raises(UnsupportedNoiseType):
        generate(noise_type="gabor", width=4, height=4)


def test_gabor_centre_pixel_shift():
    p = _params(NoiseType.GABOR, width=4, height=4, scale=1.0, phase=0.5, frequency=0.0)
    f = generate(p)
    # frequency 0 leaves sin(phase) under a Gaussian at (px + 0.5, py + 0.5)
    assert np.isclose(f.at(0, 0), np.sin(0.5) * np.exp(-0.25), atol=1e-6)


def test_white_pixels_independent_of_size():
    small = generate(noise_type="white", seed=2, width=4, height=1)
    large = generate(noise_type="white", seed=2, width=4, height=5)
    assert np.array_equal(np.asarray(small), np.asarray(large)[:4])


def test_generate_combined_average_of_same_layer():
    layer = _params(NoiseType.PERLIN)
    cfg = CombinedNoiseConfiguration(layers=[layer, layer], method=CombineMethod.AVERAGE)
    out = generate_combined(cfg, workers=2)
    assert np.allclose(np.asarray(out), np.asarray(generate(layer)), atol=1e-6)


def test_unused_fields_are_not_validated():
    f = generate(noise_type="perlin", seed=42, width=4, height=4, jitter=math.inf, offset=(math.nan, 0.0))
    assert np.allclose(np.asarray(f), PERLIN_SEED_42, atol=1e-6)


@pytest.mark.parametrize(
    "noise_type,field,value",
    [
        (NoiseType.WORLEY, "jitter", math.inf),
        (NoiseType.PERLIN, "scale", math.nan),
        (NoiseType.WHITE, "bias", -math.inf),
        (NoiseType.GABOR, "orientation", math.inf),
        (NoiseType.FRACTAL, "offset", (0.0, math.inf)),
        (NoiseType.SIMPLEX_FRACTAL, "persistence", math.nan),
    ],
)
def test_fields_read_by_the_kernel_must_be_finite(noise_type, field, value):
    with pytest.raises(InvalidParameters, match=field):
        generate(_params(noise_type, **{field: value}))

from __future__ import annotations

import logging
import math
import time
from typing import Any, Callable, Mapping

import numpy as np

from .combine import combine
from .errors import InvalidParameters, UnsupportedNoiseType
from .evaluator import DEFAULT_CHUNK_SIZE, PixelKernel, check_dimensions, evaluate
from .field import NoiseField
from .gabor import Gabor2D
from .gradient import GradientNoise2D, SparseConvolution2D
from .octaves import Fractal2D
from .params import CombinedNoiseConfiguration, NoiseParameters, NoiseType
from .perlin import FractalPerlin2D, Perlin2D
from .simplex import Simplex2D
from .value_noise import ValueNoise2D, WaveletNoise2D
from .white import White2D
from .worley import Worley2D

logger = logging.getLogger(__name__)


def _finite(p: NoiseParameters, *names: str) -> None:
    for name in names:
        value = getattr(p, name)
        values = value if isinstance(value, tuple) else (value,)
        if not all(math.isfinite(v) for v in values):
            raise InvalidParameters(f"{name} must be finite, got {value!r}")


def _centre(px: np.ndarray, py: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    return px.astype(np.float64) + 0.5, py.astype(np.float64) + 0.5


def _scaled(noise, scale: float) -> PixelKernel:
    def kernel(px: np.ndarray, py: np.ndarray, index: np.ndarray) -> np.ndarray:
        x, y = _centre(px, py)
        return noise.noise(x * scale, y * scale)

    return kernel


def _perlin(p: NoiseParameters) -> PixelKernel:
    _finite(p, "scale")
    return _scaled(Perlin2D(seed=p.seed), p.scale)


def _perlin_fractal(p: NoiseParameters) -> PixelKernel:
    _finite(p, "scale", "lacunarity", "gain")
    noise = Fractal2D(
        Perlin2D(seed=p.seed),
        octaves=p.octaves,
        lacunarity=p.lacunarity,
        gain=p.gain,
    )
    return _scaled(noise, p.scale)


def _simplex(p: NoiseParameters) -> PixelKernel:
    _finite(p, "scale")
    return _scaled(Simplex2D(seed=p.seed), p.scale)


def _simplex_fractal(p: NoiseParameters) -> PixelKernel:
    _finite(p, "scale", "lacunarity", "persistence", "amplitude", "frequency")
    noise = Fractal2D(
        Simplex2D(seed=p.seed, grad_set="grad12"),
        octaves=p.octaves,
        lacunarity=p.lacunarity,
        gain=p.persistence,
        amplitude=p.amplitude,
        frequency=p.frequency,
    )
    return _scaled(noise, p.scale)


def _worley(p: NoiseParameters) -> PixelKernel:
    _finite(p, "scale", "jitter")
    noise = Worley2D(
        seed=p.seed,
        width=p.width,
        height=p.height,
        num_cells=p.num_cells,
        scale=p.scale,
        jitter=p.jitter,
        distance_function=p.distance_function,
        number_of_features=p.number_of_features,
    )
    scale = p.scale

    def kernel(px: np.ndarray, py: np.ndarray, index: np.ndarray) -> np.ndarray:
        x, y = _centre(px, py)
        return noise.noise(x / scale, y / scale, index)

    return kernel


def _white(p: NoiseParameters) -> PixelKernel:
    _finite(p, "amplitude", "bias")
    noise = White2D(seed=p.seed, amplitude=p.amplitude, bias=p.bias)

    def kernel(px: np.ndarray, py: np.ndarray, index: np.ndarray) -> np.ndarray:
        return noise.noise(px, py, index)

    return kernel


def _value(p: NoiseParameters) -> PixelKernel:
    _finite(p, "scale", "lacunarity", "persistence")
    noise = Fractal2D(
        ValueNoise2D(seed=p.seed),
        octaves=p.octaves,
        lacunarity=p.lacunarity,
        gain=p.persistence,
    )
    return _scaled(noise, p.scale)


def _wavelet(p: NoiseParameters) -> PixelKernel:
    _finite(p, "scale", "lacunarity", "persistence")
    noise = Fractal2D(
        WaveletNoise2D(seed=p.seed),
        octaves=p.octaves,
        lacunarity=p.lacunarity,
        gain=p.persistence,
    )
    return _scaled(noise, p.scale)


def _fractal(p: NoiseParameters) -> PixelKernel:
    _finite(p, "scale", "lacunarity", "persistence", "offset")
    noise = FractalPerlin2D(
        seed=p.seed,
        octaves=p.octaves,
        lacunarity=p.lacunarity,
        persistence=p.persistence,
        offset=p.offset,
    )
    sx = p.scale / float(p.width)
    sy = p.scale / float(p.height)

    def kernel(px: np.ndarray, py: np.ndarray, index: np.ndarray) -> np.ndarray:
        x, y = _centre(px, py)
        return noise.noise(x * sx, y * sy)

    return kernel


def _gradient(p: NoiseParameters) -> PixelKernel:
    _finite(p, "scale", "frequency", "amplitude", "offset")
    noise = GradientNoise2D(seed=p.seed, amplitude=p.amplitude)
    ox, oy = p.offset
    k = p.scale * p.frequency

    def kernel(px: np.ndarray, py: np.ndarray, index: np.ndarray) -> np.ndarray:
        x, y = _centre(px, py)
        return noise.noise((x + ox) * k, (y + oy) * k)

    return kernel


def _sparse_convolution(p: NoiseParameters) -> PixelKernel:
    _finite(p, "scale")
    return _scaled(SparseConvolution2D(seed=p.seed, kernel_size=p.kernel_size), p.scale)


def _gabor(p: NoiseParameters) -> PixelKernel:
    _finite(p, "scale", "frequency", "orientation", "aspect_ratio", "phase", "amplitude")
    noise = Gabor2D(
        frequency=p.frequency,
        orientation=p.orientation,
        aspect_ratio=p.aspect_ratio,
        phase=p.phase,
        amplitude=p.amplitude,
    )
    return _scaled(noise, p.scale)


KERNEL_BUILDERS: dict[NoiseType, Callable[[NoiseParameters], PixelKernel]] = {
    NoiseType.PERLIN: _perlin,
    NoiseType.PERLIN_FRACTAL: _perlin_fractal,
    NoiseType.WORLEY: _worley,
    NoiseType.SIMPLEX: _simplex,
    NoiseType.SIMPLEX_FRACTAL: _simplex_fractal,
    NoiseType.WHITE: _white,
    NoiseType.VALUE: _value,
    NoiseType.WAVELET: _wavelet,
    NoiseType.FRACTAL: _fractal,
    NoiseType.GRADIENT: _gradient,
    NoiseType.SPARSE_CONVOLUTION: _sparse_convolution,
    NoiseType.GABOR: _gabor,
}


def build_kernel(params: NoiseParameters) -> PixelKernel:
    """Build the tables for `params` and return its per-pixel kernel."""

    builder = KERNEL_BUILDERS.get(params.noise_type)
    if builder is None:
        raise UnsupportedNoiseType(f"no kernel registered for {params.noise_type!r}")
    return builder(params)


def _coerce(params: NoiseParameters | Mapping[str, Any] | None, overrides: dict) -> NoiseParameters:
    if params is None:
        return NoiseParameters.from_dict(overrides)
    if isinstance(params, NoiseParameters):
        return params.replace(**overrides) if overrides else params
    if isinstance(params, Mapping):
        return NoiseParameters.from_dict({**params, **overrides})
    raise InvalidParameters(f"expected NoiseParameters or a mapping, got {type(params).__name__}")


def generate(
    params: NoiseParameters | Mapping[str, Any] | None = None,
    *,
    workers: int | None = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    **overrides: Any,
) -> NoiseField:
    """Generate one deterministic noise field.

    `params` may be a `NoiseParameters`, a plain mapping, or omitted in favour
    of keyword overrides, e.g. `generate(noise_type="perlin", seed=42,
    width=4, height=4)`. Tables are built for this call only.
    """

    p = _coerce(params, overrides)
    check_dimensions(p.width, p.height)

    t0 = time.perf_counter()
    kernel = build_kernel(p)
    field = evaluate(p.width, p.height, kernel, workers=workers, chunk_size=chunk_size)
    ms = (time.perf_counter() - t0) * 1000.0
    logger.debug(
        "generated %s %dx%d (seed=%d) in %.2f ms",
        p.noise_type.value,
        p.width,
        p.height,
        p.seed,
        ms,
    )
    return field


def generate_combined(
    config: CombinedNoiseConfiguration,
    *,
    workers: int | None = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> NoiseField:
    fields = [
        generate(layer, workers=workers, chunk_size=chunk_size) for layer in config.layers
    ]
    return combine(config.method, fields, workers=workers, chunk_size=chunk_size)

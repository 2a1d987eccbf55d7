from .combine import combine
from .core import make_gradients, make_permutation, make_value_table
from .errors import (
    AllocationFailure,
    InvalidDimensions,
    InvalidOctaveCount,
    InvalidParameters,
    NoiseError,
    ShapeMismatch,
    UnsupportedNoiseType,
)
from .evaluator import evaluate
from .field import NoiseField
from .gabor import Gabor2D
from .generate import build_kernel, generate, generate_combined
from .gradient import GradientNoise2D, SparseConvolution2D
from .octaves import Fractal2D, accumulate_octaves
from .params import (
    CombinedNoiseConfiguration,
    CombineMethod,
    DistanceFunction,
    NoiseParameters,
    NoiseType,
)
from .perlin import ClassicPerlin2D, FractalPerlin2D, Perlin2D
from .rng import XorShift32
from .simplex import Simplex2D
from .value_noise import ValueNoise2D, WaveletNoise2D
from .white import White2D
from .worley import Worley2D

__all__ = [
    "AllocationFailure",
    "ClassicPerlin2D",
    "CombineMethod",
    "CombinedNoiseConfiguration",
    "DistanceFunction",
    "Fractal2D",
    "FractalPerlin2D",
    "Gabor2D",
    "GradientNoise2D",
    "InvalidDimensions",
    "InvalidOctaveCount",
    "InvalidParameters",
    "NoiseError",
    "NoiseField",
    "NoiseParameters",
    "NoiseType",
    "Perlin2D",
    "ShapeMismatch",
    "Simplex2D",
    "SparseConvolution2D",
    "UnsupportedNoiseType",
    "ValueNoise2D",
    "WaveletNoise2D",
    "White2D",
    "Worley2D",
    "XorShift32",
    "accumulate_octaves",
    "build_kernel",
    "combine",
    "evaluate",
    "generate",
    "generate_combined",
    "make_gradients",
    "make_permutation",
    "make_value_table",
]

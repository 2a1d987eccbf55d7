from __future__ import annotations

import dataclasses
import enum
from dataclasses import dataclass, field
from typing import Any, Mapping

import numpy as np

from .errors import InvalidParameters, UnsupportedNoiseType


class NoiseType(str, enum.Enum):
    PERLIN = "perlin"
    PERLIN_FRACTAL = "perlin_fractal"
    WORLEY = "worley"
    SIMPLEX = "simplex"
    SIMPLEX_FRACTAL = "simplex_fractal"
    WHITE = "white"
    VALUE = "value"
    WAVELET = "wavelet"
    FRACTAL = "fractal"
    GRADIENT = "gradient"
    SPARSE_CONVOLUTION = "sparse_convolution"
    GABOR = "gabor"

    @classmethod
    def parse(cls, value: "NoiseType | str") -> "NoiseType":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise UnsupportedNoiseType(f"unknown noise type: {value!r}") from None


class DistanceFunction(str, enum.Enum):
    EUCLIDEAN = "euclidean"
    MANHATTAN = "manhattan"
    CHEBYSHEV = "chebyshev"

    @classmethod
    def parse(cls, value: "DistanceFunction | str") -> "DistanceFunction":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise InvalidParameters(f"unknown distance function: {value!r}") from None


class CombineMethod(str, enum.Enum):
    ADD = "add"
    SUBTRACT = "subtract"
    AVERAGE = "average"
    MULTIPLY = "multiply"

    @classmethod
    def parse(cls, value: "CombineMethod | str") -> "CombineMethod":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise InvalidParameters(f"unknown combine method: {value!r}") from None


_FLOAT_FIELDS = (
    "scale",
    "lacunarity",
    "gain",
    "persistence",
    "amplitude",
    "frequency",
    "bias",
    "jitter",
    "orientation",
    "aspect_ratio",
    "phase",
)


@dataclass(frozen=True)
class NoiseParameters:
    """Everything needed to generate one noise field.

    Each kernel reads only the fields it uses; the rest are carried along
    untouched. `gain` drives PerlinFractal, `persistence` drives the other
    octave-based kernels. Numbers are only type-converted here; range and
    finiteness checks happen when a kernel is built from the fields it reads.
    """

    noise_type: NoiseType = NoiseType.PERLIN
    seed: int = 1
    width: int = 256
    height: int = 256
    scale: float = 1.0
    octaves: int = 4
    lacunarity: float = 2.0
    gain: float = 0.5
    persistence: float = 0.5
    amplitude: float = 1.0
    frequency: float = 1.0
    bias: float = 0.0
    num_cells: int = 64
    jitter: float = 1.0
    distance_function: DistanceFunction = DistanceFunction.EUCLIDEAN
    number_of_features: int = 1
    orientation: float = 0.0
    aspect_ratio: float = 1.0
    phase: float = 0.0
    kernel_size: int = 3
    offset: tuple[float, float] = (0.0, 0.0)

    def __post_init__(self) -> None:
        object.__setattr__(self, "noise_type", NoiseType.parse(self.noise_type))
        object.__setattr__(
            self, "distance_function", DistanceFunction.parse(self.distance_function)
        )
        seed = self.seed
        if isinstance(seed, bool) or not isinstance(seed, (int, np.integer)):
            raise InvalidParameters(f"seed must be an integer, got {seed!r}")
        object.__setattr__(self, "seed", int(seed))
        for name in _FLOAT_FIELDS:
            value = getattr(self, name)
            try:
                value = float(value)
            except (TypeError, ValueError):
                raise InvalidParameters(f"{name} must be a number, got {value!r}") from None
            object.__setattr__(self, name, value)
        try:
            ox, oy = self.offset
            offset = (float(ox), float(oy))
        except (TypeError, ValueError):
            raise InvalidParameters(f"offset must be a pair of numbers, got {self.offset!r}") from None
        object.__setattr__(self, "offset", offset)

    @property
    def size(self) -> int:
        return int(self.width) * int(self.height)

    def replace(self, **changes: Any) -> "NoiseParameters":
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        out = dataclasses.asdict(self)
        out["noise_type"] = self.noise_type.value
        out["distance_function"] = self.distance_function.value
        out["offset"] = list(self.offset)
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "NoiseParameters":
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise InvalidParameters(f"unknown noise parameters: {', '.join(unknown)}")
        return cls(**dict(data))


@dataclass(frozen=True)
class CombinedNoiseConfiguration:
    """Ordered noise layers merged into one field with `method`."""

    layers: tuple[NoiseParameters, ...] = field(default_factory=tuple)
    method: CombineMethod = CombineMethod.ADD

    def __post_init__(self) -> None:
        object.__setattr__(self, "layers", tuple(self.layers))
        object.__setattr__(self, "method", CombineMethod.parse(self.method))
        for layer in self.layers:
            if not isinstance(layer, NoiseParameters):
                raise InvalidParameters(
                    f"layers must be NoiseParameters, got {type(layer).__name__}"
                )

from __future__ import annotations


class NoiseError(Exception):
    """Base class for every error raised by noisefield."""


class InvalidDimensions(NoiseError, ValueError):
    pass


class InvalidOctaveCount(NoiseError, ValueError):
    pass


class InvalidParameters(NoiseError, ValueError):
    pass


class ShapeMismatch(NoiseError, ValueError):
    pass


class UnsupportedNoiseType(NoiseError, ValueError):
    pass


class AllocationFailure(NoiseError, MemoryError):
    pass

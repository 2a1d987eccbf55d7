from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from .errors import ShapeMismatch
from .evaluator import DEFAULT_CHUNK_SIZE, allocate, run_chunked
from .field import NoiseField
from .params import CombineMethod

logger = logging.getLogger(__name__)


def _reduce(method: CombineMethod, stack: list[np.ndarray]) -> np.ndarray:
    acc = stack[0].astype(np.float64)
    if method is CombineMethod.ADD or method is CombineMethod.AVERAGE:
        for v in stack[1:]:
            acc += v
        if method is CombineMethod.AVERAGE:
            acc /= float(len(stack))
    elif method is CombineMethod.SUBTRACT:
        for v in stack[1:]:
            acc -= v
    elif method is CombineMethod.MULTIPLY:
        for v in stack[1:]:
            acc *= v
    return acc


def combine(
    method: CombineMethod | str,
    fields: Sequence[NoiseField],
    *,
    workers: int | None = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> NoiseField:
    """Merge equally sized fields pixel by pixel into a new field.

    Subtract folds left in input order: `f0 - f1 - ... - fn`. Inputs are
    never modified.
    """

    method = CombineMethod.parse(method)
    fields = list(fields)
    if not fields:
        raise ShapeMismatch("combine needs at least one field")
    first = fields[0]
    for i, f in enumerate(fields):
        if not isinstance(f, NoiseField):
            raise ShapeMismatch(f"field {i} is not a NoiseField: {type(f).__name__}")
        if len(f) != len(first) or (f.width, f.height) != (first.width, first.height):
            raise ShapeMismatch(
                f"field {i} is {f.width}x{f.height}, expected {first.width}x{first.height}"
            )

    logger.debug("combining %d fields with %s", len(fields), method.value)
    size = len(first)
    out = allocate(size)

    def task(start: int, stop: int) -> None:
        out[start:stop] = _reduce(method, [f.values[start:stop] for f in fields])

    run_chunked(size, task, workers=workers, chunk_size=chunk_size)
    return NoiseField(first.width, first.height, out)

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Callable

import numpy as np

from .errors import AllocationFailure, InvalidDimensions, InvalidParameters
from .field import NoiseField

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 4096

# kernel(px, py, index) -> values, all arrays of the same 1-D shape
PixelKernel = Callable[[np.ndarray, np.ndarray, np.ndarray], np.ndarray]

_MAX_ELEMENTS = np.iinfo(np.intp).max // np.dtype(np.float32).itemsize


def check_dimensions(width: int, height: int) -> tuple[int, int]:
    if isinstance(width, bool) or isinstance(height, bool):
        raise InvalidDimensions("width and height must be integers")
    try:
        w = int(width)
        h = int(height)
    except (TypeError, ValueError):
        raise InvalidDimensions(f"width and height must be integers, got {width!r}x{height!r}") from None
    if w != width or h != height:
        raise InvalidDimensions(f"width and height must be integers, got {width!r}x{height!r}")
    if w <= 0 or h <= 0:
        raise InvalidDimensions(f"width and height must be > 0, got {w}x{h}")
    return w, h


def allocate(size: int) -> np.ndarray:
    size = int(size)
    if size > _MAX_ELEMENTS:
        raise AllocationFailure(f"cannot allocate {size} samples")
    try:
        return np.empty(size, dtype=np.float32)
    except (MemoryError, ValueError) as e:
        raise AllocationFailure(f"cannot allocate {size} samples: {e}") from e


def chunk_ranges(size: int, chunk_size: int) -> list[tuple[int, int]]:
    return [(start, min(start + chunk_size, size)) for start in range(0, size, chunk_size)]


def resolve_workers(workers: int | None) -> int:
    if workers is None:
        return os.cpu_count() or 1
    workers = int(workers)
    if workers < 1:
        raise InvalidParameters("workers must be >= 1")
    return workers


def run_chunked(
    size: int,
    task: Callable[[int, int], None],
    *,
    workers: int | None = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> None:
    """Call `task(start, stop)` over contiguous slices covering `[0, size)`.

    Slices are disjoint, so tasks writing `out[start:stop]` never race.
    Returns once every slice is done; the first failure is re-raised.
    """

    chunk_size = int(chunk_size)
    if chunk_size < 1:
        raise InvalidParameters("chunk_size must be >= 1")
    workers = resolve_workers(workers)
    chunks = chunk_ranges(int(size), chunk_size)
    logger.debug("evaluating %d samples in %d chunks on %d workers", size, len(chunks), workers)

    if workers == 1 or len(chunks) <= 1:
        for start, stop in chunks:
            task(start, stop)
        return

    with ThreadPoolExecutor(max_workers=min(workers, len(chunks))) as executor:
        futures = [executor.submit(task, start, stop) for start, stop in chunks]
        for future in futures:
            future.result()


def evaluate(
    width: int,
    height: int,
    kernel: PixelKernel,
    *,
    workers: int | None = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> NoiseField:
    """Evaluate `kernel` at every pixel of a `width x height` grid.

    The kernel receives integer pixel columns, rows and flat indices for one
    chunk at a time and must return one value per pixel. Output order is
    row-major regardless of which worker computed which chunk.
    """

    width, height = check_dimensions(width, height)
    size = width * height
    out = allocate(size)

    def task(start: int, stop: int) -> None:
        index = np.arange(start, stop, dtype=np.int64)
        px = index % width
        py = index // width
        try:
            values = np.asarray(kernel(px, py, index))
        except MemoryError as e:
            raise AllocationFailure(
                f"out of memory evaluating pixels {start}..{stop}: {e}"
            ) from e
        if values.shape != index.shape:
            raise ValueError(
                f"kernel returned shape {values.shape} for {index.size} pixels"
            )
        out[start:stop] = values

    run_chunked(size, task, workers=workers, chunk_size=chunk_size)
    return NoiseField(width, height, out)

from __future__ import annotations

import io

import numpy as np
from PIL import Image

from noisefield.field import NoiseField


def _grid(field: NoiseField | np.ndarray) -> np.ndarray:
    if isinstance(field, NoiseField):
        return np.asarray(field.as_grid(), dtype=np.float64)
    z = np.asarray(field, dtype=np.float64)
    if z.ndim != 2:
        raise ValueError("expected a NoiseField or a 2D array")
    return z


def field_to_gray8(field: NoiseField | np.ndarray, *, normalize: bool = False) -> np.ndarray:
    """Map samples to 8-bit grey levels, shape (height, width).

    By default values are clamped to [0, 1]. With `normalize=True` they are
    min/max stretched instead; constant fields become all zeros.
    """

    z = _grid(field)
    if normalize:
        zmin = float(np.min(z))
        zmax = float(np.max(z))
        if zmax == zmin:
            return np.zeros(z.shape, dtype=np.uint8)
        z = (z - zmin) / (zmax - zmin)
    return np.clip(np.rint(z * 255.0), 0.0, 255.0).astype(np.uint8)


def field_to_png_bytes(field: NoiseField | np.ndarray, *, normalize: bool = False) -> bytes:
    img = field_to_gray8(field, normalize=normalize)
    out = io.BytesIO()
    Image.fromarray(img).save(out, format="PNG")
    return out.getvalue()


def field_to_npy_bytes(field: NoiseField | np.ndarray) -> bytes:
    z = np.asarray(field.as_grid()) if isinstance(field, NoiseField) else np.asarray(field)
    out = io.BytesIO()
    np.save(out, z)
    return out.getvalue()

from __future__ import annotations

import logging
import time

import numpy as np

from noisefield import CombineMethod, NoiseParameters, NoiseType, combine, generate


def _timeit(label: str, fn) -> float:
    t0 = time.perf_counter()
    fn()
    t1 = time.perf_counter()
    ms = (t1 - t0) * 1000.0
    print(f"{label}: {ms:.2f} ms")
    return ms


def main() -> None:
    """Quick CPU benchmark of every noise type at 512x512.

    Worley and SparseConvolution scale with `num_cells` and `kernel_size`
    and are the slowest by far.
    """

    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    base = NoiseParameters(seed=0, width=512, height=512, scale=0.05)
    fields = []
    for noise_type in NoiseType:
        params = base.replace(noise_type=noise_type)
        if noise_type is NoiseType.WORLEY:
            params = params.replace(scale=1.0, num_cells=32)
        _timeit(
            f"generate {noise_type.value} 512x512",
            lambda p=params: fields.append(generate(p)),
        )

    _timeit(
        f"combine average of {len(fields)} fields",
        lambda: combine(CombineMethod.AVERAGE, fields),
    )

    single = base.replace(noise_type=NoiseType.PERLIN_FRACTAL)
    _timeit("perlin_fractal 512x512 (1 worker)", lambda: generate(single, workers=1))
    out = generate(single)
    print(f"perlin_fractal mean={float(np.mean(out.values)):.4f}")


if __name__ == "__main__":
    main()

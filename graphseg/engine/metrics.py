"""Stock color-distance functions for edge weights.

Any symmetric, non-negative ``distance(color_a, color_b) -> float`` works
with the edge builder. These cover the common cases:

- ``rgb``: Euclidean distance over channel values (scalars work too)
- ``lab``: CIE76 ΔE, Euclidean distance in CIELAB (8-bit sRGB input)
- ``gray``: absolute luminance difference
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

import numpy as np
from skimage.color import rgb2lab

from graphseg.engine.edges import DistanceFn
from graphseg.engine.errors import InvalidInputError

# Maximum Euclidean distance in 8-bit RGB space:
# d = √(255² + 255² + 255²) = 255√3, the diagonal of the RGB cube.
MAX_RGB_DIST = 255.0 * np.sqrt(3.0)

# ITU-R BT.709 luma coefficients (same weights as skimage.color.rgb2gray).
_LUMA_WEIGHTS = np.array([0.2125, 0.7154, 0.0721])


def _channels(color: Any) -> np.ndarray:
    return np.atleast_1d(np.asarray(color, dtype=np.float64))


def rgb_euclidean(a: Any, b: Any) -> float:
    """√Σ(aᵢ - bᵢ)² over channels."""
    return float(np.linalg.norm(_channels(a) - _channels(b)))


@lru_cache(maxsize=65536)
def _to_lab(rgb: tuple[int, ...]) -> tuple[float, float, float]:
    pixel = np.asarray(rgb[:3], dtype=np.uint8).reshape(1, 1, 3)
    L, a, b = rgb2lab(pixel)[0, 0]
    return (float(L), float(a), float(b))


def _rgb_key(color: Any) -> tuple[int, ...]:
    values = _channels(color)
    if values.size < 3:
        raise InvalidInputError(f"Lab distance needs RGB colors, got {color!r}")
    return tuple(int(v) for v in np.clip(np.rint(values[:3]), 0, 255))


def lab_cie76(a: Any, b: Any) -> float:
    """CIE76 ΔE between two 8-bit sRGB colors. Alpha is ignored."""
    la, lb = _to_lab(_rgb_key(a)), _to_lab(_rgb_key(b))
    return float(np.linalg.norm(np.subtract(la, lb)))


def _luma(color: Any) -> float:
    values = _channels(color)
    if values.size == 1:
        return float(values[0])
    if values.size < 3:
        raise InvalidInputError(f"Luma needs a scalar or RGB color, got {color!r}")
    return float(values[:3] @ _LUMA_WEIGHTS)


def gray_difference(a: Any, b: Any) -> float:
    """|luma(a) - luma(b)|; scalar colors are taken as intensity."""
    return abs(_luma(a) - _luma(b))


METRICS: dict[str, DistanceFn] = {
    "rgb": rgb_euclidean,
    "lab": lab_cie76,
    "gray": gray_difference,
}


def get_metric(name: str) -> DistanceFn:
    try:
        return METRICS[name]
    except KeyError:
        raise InvalidInputError(
            f"Unknown metric {name!r}; expected one of {sorted(METRICS)}"
        ) from None

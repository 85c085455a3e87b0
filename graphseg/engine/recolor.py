"""Recoloring — paint every segment with its own palette color.

Runs after the partition is final. Segments are disjoint, so each one is an
independent task: workers write only their own segment's cells of a shared,
preallocated output array and need no locking.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed

import numpy as np
from numpy.typing import NDArray
from skimage.color import hsv2rgb

from graphseg.engine.errors import InvalidInputError
from graphseg.engine.pixels import Pixel

logger = logging.getLogger(__name__)

# Golden ratio conjugate φ⁻¹ = (√5 − 1) / 2. Stepping hue by φ⁻¹ gives the
# most even coverage of the hue circle for any prefix length (three-distance
# theorem), so consecutive segments get well-separated colors.
_GOLDEN_RATIO_CONJUGATE = (np.sqrt(5.0) - 1.0) / 2.0

# Lightness tiers: 64 hues each, saturation and value dropping 15% per tier
# (the fourth tier sits at 55% of the base).
_HUES_PER_TIER = 64
_TIERS = 4
_TIER_STEP = 0.15

_RGB_CODES = 1 << 24


def generate_palette(
    n_colors: int,
    seed: int = 0,
    saturation: float = 0.65,
    value: float = 0.95,
) -> NDArray[np.uint8]:
    """n_colors distinct RGB colors, shape (n_colors, 3), deterministic per seed.

    Past _HUES_PER_TIER colors, saturation and value step down in tiers so
    the hue circle is reused at another lightness. Any collision left after
    uint8 rounding is nudged to the next unused 24-bit color, so colors are
    unique up to 2²⁴ segments.
    """
    if n_colors < 0:
        raise InvalidInputError(f"n_colors must be >= 0, got {n_colors}")
    if n_colors > _RGB_CODES:
        raise InvalidInputError(f"Cannot make {n_colors} distinct 8-bit RGB colors")
    if n_colors == 0:
        return np.empty((0, 3), dtype=np.uint8)

    offset = np.random.default_rng(seed).random()
    index = np.arange(n_colors)
    hues = (offset + index * _GOLDEN_RATIO_CONJUGATE) % 1.0
    tier = (index // _HUES_PER_TIER) % _TIERS
    sats = saturation * (1.0 - _TIER_STEP * tier)
    vals = value * (1.0 - _TIER_STEP * tier)
    hsv = np.stack([hues, sats, vals], axis=-1).reshape(1, n_colors, 3)
    rgb = np.round(hsv2rgb(hsv)[0] * 255.0).astype(np.int64)
    return _dedupe(rgb)


def _dedupe(rgb: NDArray[np.int64]) -> NDArray[np.uint8]:
    codes = (rgb[:, 0] << 16) | (rgb[:, 1] << 8) | rgb[:, 2]
    seen: set[int] = set()
    for i, code in enumerate(codes.tolist()):
        while code in seen:
            code = (code + 1) % _RGB_CODES
        seen.add(code)
        codes[i] = code
    out = np.stack([(codes >> 16) & 0xFF, (codes >> 8) & 0xFF, codes & 0xFF], axis=-1)
    return out.astype(np.uint8)


def _paint(out: NDArray[np.uint8], members: Sequence[Pixel], color: NDArray[np.uint8]) -> int:
    rows = np.fromiter((p.row for p in members), dtype=np.intp, count=len(members))
    cols = np.fromiter((p.col for p in members), dtype=np.intp, count=len(members))
    out[rows, cols] = color
    return len(members)


def recolor(
    segments: Sequence[Sequence[Pixel]],
    height: int,
    width: int,
    palette: NDArray[np.uint8],
    workers: int = 4,
) -> NDArray[np.uint8]:
    """Paint segment i with palette[i] into a fresh (height, width, 3) array."""
    if workers < 1:
        raise InvalidInputError(f"workers must be >= 1, got {workers}")
    if len(palette) < len(segments):
        raise InvalidInputError(
            f"Palette has {len(palette)} colors for {len(segments)} segments"
        )

    out = np.zeros((height, width, 3), dtype=np.uint8)

    # sequential path
    if workers == 1 or len(segments) <= 1:
        painted = sum(_paint(out, members, palette[i]) for i, members in enumerate(segments))
    # parallel path
    else:
        painted = 0
        with ThreadPoolExecutor(max_workers=workers) as ex:
            promises = [
                ex.submit(_paint, out, members, palette[i])
                for i, members in enumerate(segments)
            ]
            for promise in as_completed(promises):
                painted += promise.result()

    logger.debug("Recolored %d pixels across %d segments", painted, len(segments))
    return out

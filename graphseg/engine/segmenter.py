"""Felzenszwalb–Huttenlocher graph-based segmentation driver.

Pipeline for one request:
1. Build the pixel grid (input validation happens here)
2. Build the sorted edge set with the pluggable distance function
3. Greedy merge pass over a fresh disjoint-set forest
4. Extract the partition once, then hand it to the recolorer

The merge rule, for an edge e joining segments C1 and C2:

    MInt(C1, C2) = min(Int(C1) + k/|C1|, Int(C2) + k/|C2|)
    merge iff w(e) < MInt(C1, C2)

The comparison is strict: an edge exactly at the threshold keeps the
segments apart. On merge, Int of the new segment becomes w(e).

Steps 1-3 are strictly sequential; each decision depends on every merge
before it. Only recoloring fans out to workers.
"""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from numbers import Real
from typing import Any

import numpy as np
from numpy.typing import NDArray

from graphseg.engine.config import SegmentationConfig
from graphseg.engine.edges import DistanceFn, Edge, build_edge_set
from graphseg.engine.errors import InvalidInputError
from graphseg.engine.forest import DisjointSetForest
from graphseg.engine.metrics import get_metric
from graphseg.engine.pixels import Pixel, PixelGrid
from graphseg.engine.recolor import generate_palette, recolor

logger = logging.getLogger(__name__)

Partition = dict[Pixel, list[Pixel]]
EdgeCallback = Callable[[int, Edge, DisjointSetForest], None]


@dataclass
class SegmentationResult:
    """Output grid plus the partition and run diagnostics."""
    image: NDArray[np.uint8]                 # (H, W, 3) recolored grid
    labels: NDArray[np.intp]                 # (H, W) segment index per pixel
    segments: Partition
    n_edges: int
    n_segments: int
    granularity: float
    elapsed_ms: float = 0.0
    params: dict[str, Any] = field(default_factory=dict)

    @property
    def shape(self) -> tuple[int, int]:
        return (int(self.labels.shape[0]), int(self.labels.shape[1]))

    def segment_sizes(self) -> list[int]:
        return [len(members) for members in self.segments.values()]


# ---------------------------------------------------------------------------
# Core algorithm
# ---------------------------------------------------------------------------

def validate_granularity(granularity: Any) -> float:
    if isinstance(granularity, bool) or not isinstance(granularity, Real):
        raise InvalidInputError(f"granularity must be a real number, got {granularity!r}")
    k = float(granularity)
    if not math.isfinite(k) or k <= 0:
        raise InvalidInputError(f"granularity must be positive and finite, got {k}")
    return k


def merge_threshold(forest: DisjointSetForest, rep: Pixel, granularity: float) -> float:
    """Int(C) + k/|C| for the segment represented by ``rep``."""
    return forest.get_internal_distance(rep) + granularity / forest.get_size(rep)


def run_merge_pass(
    forest: DisjointSetForest,
    edges: Sequence[Edge],
    granularity: float,
    on_edge: EdgeCallback | None = None,
) -> int:
    """Process ``edges`` in order, merging under the adaptive threshold.

    ``on_edge(i, edge, forest)`` fires after each edge is decided.
    Returns the number of merges performed.
    """
    merges = 0
    for i, e in enumerate(edges):
        r1 = forest.find(e.a)
        r2 = forest.find(e.b)
        if r1 != r2:
            threshold = min(
                merge_threshold(forest, r1, granularity),
                merge_threshold(forest, r2, granularity),
            )
            if e.weight < threshold:
                forest.union(r1, r2, e.weight)
                merges += 1
        if on_edge is not None:
            on_edge(i, e, forest)
    return merges


def segment_grid(
    grid: PixelGrid,
    granularity: float,
    distance: DistanceFn,
    on_edge: EdgeCallback | None = None,
) -> tuple[Partition, int]:
    """Segment a pixel grid. Returns (partition, number of edges built)."""
    k = validate_granularity(granularity)

    t0 = time.perf_counter()
    edges = build_edge_set(grid, distance)
    logger.info("Created %d edges.", len(edges))
    t1 = time.perf_counter()

    forest = DisjointSetForest(grid)
    merges = run_merge_pass(forest, edges, k, on_edge=on_edge)
    t2 = time.perf_counter()

    segments = forest.get_segments()
    logger.info("Created %d segments.", len(segments))
    logger.debug(
        "  edges %.1fms, merge pass %.1fms (%d merges), extraction %.1fms",
        (t1 - t0) * 1000,
        (t2 - t1) * 1000,
        merges,
        (time.perf_counter() - t2) * 1000,
    )
    return segments, len(edges)


def label_grid(segments: Partition, height: int, width: int) -> NDArray[np.intp]:
    """Integer label per pixel; segments numbered in partition order."""
    labels = np.empty((height, width), dtype=np.intp)
    for label, members in enumerate(segments.values()):
        for p in members:
            labels[p.row, p.col] = label
    return labels


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

class GraphSegmenter:
    """Configured segmenter: colors in, recolored grid plus diagnostics out."""

    def __init__(
        self,
        config: SegmentationConfig | None = None,
        distance: DistanceFn | None = None,
    ) -> None:
        self.config = config or SegmentationConfig()
        self.distance = distance or get_metric(self.config.metric)
        self.metric_name = "custom" if distance is not None else self.config.metric

    def segment(self, colors: Any) -> SegmentationResult:
        """Run the full segmentation on a 2D color grid."""
        start = time.perf_counter()
        cfg = self.config
        k = validate_granularity(cfg.granularity)
        if cfg.recolor_workers < 1:
            raise InvalidInputError(f"recolor_workers must be >= 1, got {cfg.recolor_workers}")

        logger.info("Segmenting image...")
        grid = PixelGrid.from_colors(colors)
        height, width = grid.shape
        segments, n_edges = segment_grid(grid, k, self.distance)

        palette = generate_palette(
            len(segments),
            seed=cfg.palette_seed,
            saturation=cfg.palette_saturation,
            value=cfg.palette_value,
        )
        image = recolor(
            list(segments.values()),
            height,
            width,
            palette,
            workers=cfg.recolor_workers,
        )
        labels = label_grid(segments, height, width)

        elapsed = (time.perf_counter() - start) * 1000
        logger.info(
            "Segmentation complete: %dx%d grid, %d segments in %.0fms",
            height,
            width,
            len(segments),
            elapsed,
        )
        return SegmentationResult(
            image=image,
            labels=labels,
            segments=segments,
            n_edges=n_edges,
            n_segments=len(segments),
            granularity=k,
            elapsed_ms=elapsed,
            params={
                "metric": self.metric_name,
                "recolor_workers": cfg.recolor_workers,
                "palette_seed": cfg.palette_seed,
            },
        )


def segment_image(
    colors: Any,
    granularity: float = 300.0,
    distance: DistanceFn | None = None,
    **config_overrides: Any,
) -> SegmentationResult:
    """One-shot convenience wrapper around :class:`GraphSegmenter`."""
    config = SegmentationConfig(granularity=granularity, **config_overrides)
    return GraphSegmenter(config, distance=distance).segment(colors)

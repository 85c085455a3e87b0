"""Segmentation configuration — controls coarseness, metric and recoloring."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class SegmentationConfig:
    """Per-run knobs for the segmentation engine."""

    # Felzenszwalb k: larger values raise the merge threshold → fewer, larger segments
    granularity: float = 300.0

    # Edge weight metric name, see graphseg.engine.metrics.METRICS
    metric: str = "rgb"

    # Recoloring worker pool size (1 = paint sequentially)
    recolor_workers: int = 4

    # Palette: hue offset seed plus fixed HSV saturation/value
    palette_seed: int = 0
    palette_saturation: float = 0.65
    palette_value: float = 0.95

    @classmethod
    def from_settings(cls) -> SegmentationConfig:
        """Defaults taken from the environment-level settings."""
        from graphseg.config import settings

        return cls(
            granularity=settings.default_granularity,
            metric=settings.default_metric,
            recolor_workers=settings.recolor_workers,
            palette_seed=settings.palette_seed,
        )

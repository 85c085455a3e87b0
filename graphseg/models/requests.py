"""API request models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class SegmentRequest(BaseModel):
    grid: list[list[Any]] = Field(
        ...,
        description="Rows of pixel colors: scalars (intensity) or [r, g, b] lists",
    )
    granularity: float | None = Field(
        default=None,
        description="Merge coarseness k; larger gives fewer, larger segments",
    )
    metric: str | None = Field(
        default=None,
        description="Edge weight metric (rgb, lab, gray)",
    )

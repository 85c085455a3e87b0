"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    metrics: list[str] = Field(default_factory=list)


class SegmentResponse(BaseModel):
    grid: list[list[list[int]]]
    labels: list[list[int]]
    n_edges: int = 0
    n_segments: int = 0
    granularity: float = 0.0
    metric: str = ""
    processing_time_ms: float = 0.0

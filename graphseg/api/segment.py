"""POST /api/segment — segment a JSON color grid."""

from __future__ import annotations

import asyncio
import logging
from functools import partial

from fastapi import APIRouter, HTTPException

from graphseg.engine.config import SegmentationConfig
from graphseg.engine.errors import InvalidInputError
from graphseg.engine.segmenter import GraphSegmenter, SegmentationResult
from graphseg.models.requests import SegmentRequest
from graphseg.models.responses import SegmentResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def _run_segmentation(req: SegmentRequest) -> SegmentationResult:
    config = SegmentationConfig.from_settings()
    if req.granularity is not None:
        config.granularity = req.granularity
    if req.metric is not None:
        config.metric = req.metric
    return GraphSegmenter(config).segment(req.grid)


@router.post("/segment", response_model=SegmentResponse)
async def segment(req: SegmentRequest) -> SegmentResponse:
    # CPU-bound merge pass runs off the event loop
    loop = asyncio.get_running_loop()
    try:
        result = await loop.run_in_executor(None, partial(_run_segmentation, req))
    except InvalidInputError as e:
        logger.info("Rejected segmentation request: %s", e)
        raise HTTPException(status_code=422, detail=str(e)) from e

    return SegmentResponse(
        grid=result.image.tolist(),
        labels=result.labels.tolist(),
        n_edges=result.n_edges,
        n_segments=result.n_segments,
        granularity=result.granularity,
        metric=result.params.get("metric", ""),
        processing_time_ms=round(result.elapsed_ms, 1),
    )

"""graphseg segmentation engine."""

from graphseg.engine.config import SegmentationConfig
from graphseg.engine.edges import Edge, build_edge_set
from graphseg.engine.errors import ForestConsistencyError, InvalidInputError
from graphseg.engine.forest import DisjointSetForest
from graphseg.engine.pixels import Pixel, PixelGrid
from graphseg.engine.segmenter import GraphSegmenter, SegmentationResult, segment_grid, segment_image

__all__ = [
    "SegmentationConfig",
    "Edge",
    "build_edge_set",
    "ForestConsistencyError",
    "InvalidInputError",
    "DisjointSetForest",
    "Pixel",
    "PixelGrid",
    "GraphSegmenter",
    "SegmentationResult",
    "segment_grid",
    "segment_image",
]

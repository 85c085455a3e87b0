"""Edge set builder — weighted grid graph over pixels.

Each pixel links forward to its east, southeast, south and southwest
neighbors. Together with the bounds check this visits every undirected
8-neighborhood adjacency exactly once.

Edge order is load-bearing: the greedy merge pass is order-dependent, so
edges sort by weight and break ties on endpoint coordinates, giving one
total order that is reproducible across runs.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from graphseg.engine.errors import InvalidInputError
from graphseg.engine.pixels import Pixel, PixelGrid

logger = logging.getLogger(__name__)

DistanceFn = Callable[[Any, Any], float]

# (d_row, d_col): east, southeast, south, southwest
FORWARD_OFFSETS: tuple[tuple[int, int], ...] = (
    (0, 1),
    (1, 1),
    (1, 0),
    (1, -1),
)


@dataclass(frozen=True)
class Edge:
    """Undirected edge between two distinct pixels, weight precomputed."""
    a: Pixel
    b: Pixel
    weight: float

    @property
    def sort_key(self) -> tuple[float, int, int, int, int]:
        return (self.weight, self.a.row, self.a.col, self.b.row, self.b.col)

    def __lt__(self, other: Edge) -> bool:
        return self.sort_key < other.sort_key


def expected_edge_count(height: int, width: int) -> int:
    """Number of 8-neighborhood adjacencies in an H×W grid."""
    horizontal = height * (width - 1)
    vertical = (height - 1) * width
    diagonal = 2 * (height - 1) * (width - 1)
    return horizontal + vertical + diagonal


def _weigh(distance: DistanceFn, a: Pixel, b: Pixel) -> float:
    w = float(distance(a.color, b.color))
    if math.isnan(w) or w < 0:
        raise InvalidInputError(
            f"Distance between {a.coord} and {b.coord} must be a non-negative number, got {w}"
        )
    return w


def build_edge_set(grid: PixelGrid, distance: DistanceFn) -> list[Edge]:
    """Enumerate all grid edges and return them in ascending total order."""
    edges: list[Edge] = []
    for p1 in grid:
        for d_row, d_col in FORWARD_OFFSETS:
            row, col = p1.row + d_row, p1.col + d_col
            if grid.contains(row, col):
                p2 = grid[row, col]
                edges.append(Edge(p1, p2, _weigh(distance, p1, p2)))

    edges.sort(key=lambda e: e.sort_key)
    logger.debug("Built %d edges over %dx%d grid", len(edges), grid.height, grid.width)
    return edges

"""Disjoint-set forest over grid pixels, augmented with segment statistics.

Nodes live in a fixed arena indexed by flattened grid coordinate; a node's
parent is an optional arena index (None = the node is a representative).
find() compresses paths and union() attaches by rank, so a find/union pair
costs effectively O(1) amortized.

Each representative carries:
- size: number of pixels in its segment
- internal_distance: weight of the edge that produced the latest merge

Both are stale on non-representatives. Reading them through a merged-away
pixel is a ForestConsistencyError, so callers must find() first.
"""

from __future__ import annotations

from dataclasses import dataclass

from graphseg.engine.errors import ForestConsistencyError
from graphseg.engine.pixels import Pixel, PixelGrid


@dataclass
class SegmentNode:
    """Arena slot for one pixel."""
    pixel: Pixel
    parent: int | None = None
    rank: int = 0
    size: int = 1
    internal_distance: float = 0.0


class DisjointSetForest:
    """One node per grid cell, built once, mutated in place, never resized."""

    def __init__(self, grid: PixelGrid) -> None:
        self._grid = grid
        self._nodes: list[SegmentNode] = [SegmentNode(pixel) for pixel in grid]
        self._segment_count = len(self._nodes)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def height(self) -> int:
        return self._grid.height

    @property
    def width(self) -> int:
        return self._grid.width

    @property
    def segment_count(self) -> int:
        """Current number of representatives."""
        return self._segment_count

    def __len__(self) -> int:
        return len(self._nodes)

    def _index(self, pixel: Pixel) -> int:
        if not self._grid.contains(pixel.row, pixel.col):
            raise ForestConsistencyError(
                f"No forest node for {pixel.coord} in {self.height}x{self.width} grid"
            )
        return self._grid.index_of(pixel)

    def _root_node(self, pixel: Pixel) -> SegmentNode:
        node = self._nodes[self._index(pixel)]
        if node.parent is not None:
            raise ForestConsistencyError(
                f"{pixel.coord} is not the representative of its segment"
            )
        return node

    def is_representative(self, pixel: Pixel) -> bool:
        return self._nodes[self._index(pixel)].parent is None

    # ------------------------------------------------------------------
    # Core operations
    # ------------------------------------------------------------------

    def find(self, pixel: Pixel) -> Pixel:
        """Return the representative pixel of ``pixel``'s segment.

        Every node on the walked path is re-pointed directly at the root.
        """
        start = self._index(pixel)
        nodes = self._nodes

        root = start
        while nodes[root].parent is not None:
            root = nodes[root].parent

        current = start
        while current != root:
            nxt = nodes[current].parent
            nodes[current].parent = root
            current = nxt

        return nodes[root].pixel

    def union(self, p1: Pixel, p2: Pixel, internal_distance: float) -> Pixel:
        """Merge the segments represented by ``p1`` and ``p2``.

        Both must be representatives. The lower-rank root goes under the
        higher-rank one; on a tie ``p2`` goes under ``p1`` and ``p1``'s rank
        grows. The survivor's internal distance is overwritten with
        ``internal_distance`` (the merging edge's weight).

        Returns the surviving representative.
        """
        i1, i2 = self._index(p1), self._index(p2)
        if i1 == i2:
            raise ForestConsistencyError(f"Cannot union {p1.coord} with itself")

        n1, n2 = self._nodes[i1], self._nodes[i2]
        if n1.parent is not None or n2.parent is not None:
            raise ForestConsistencyError(
                f"Both {p1.coord} and {p2.coord} must be segment representatives"
            )

        if n1.rank >= n2.rank:
            survivor, survivor_idx, absorbed = n1, i1, n2
            if n1.rank == n2.rank:
                n1.rank += 1
        else:
            survivor, survivor_idx, absorbed = n2, i2, n1

        absorbed.parent = survivor_idx
        survivor.size += absorbed.size
        survivor.internal_distance = internal_distance
        self._segment_count -= 1
        return survivor.pixel

    def get_size(self, pixel: Pixel) -> int:
        return self._root_node(pixel).size

    def get_internal_distance(self, pixel: Pixel) -> float:
        return self._root_node(pixel).internal_distance

    def get_segments(self) -> dict[Pixel, list[Pixel]]:
        """Group every pixel under its representative.

        Members are listed in row-major order; representatives appear in the
        row-major order of their first member.
        """
        segments: dict[Pixel, list[Pixel]] = {}
        for node in self._nodes:
            rep = self.find(node.pixel)
            segments.setdefault(rep, []).append(node.pixel)
        return segments

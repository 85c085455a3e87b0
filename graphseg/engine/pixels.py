"""Pixel grid — immutable addressable nodes, one per grid cell.

Pixel identity is the (row, col) coordinate. The color rides along for the
distance function but never takes part in equality or hashing, so two
Pixel values at the same coordinate are the same node of the graph.
"""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from numbers import Real
from typing import Any

import numpy as np

from graphseg.engine.errors import InvalidInputError


@dataclass(frozen=True)
class Pixel:
    """One grid cell: coordinate plus an opaque color value."""
    row: int
    col: int
    color: Any = field(default=None, compare=False, hash=False, repr=False)

    @property
    def coord(self) -> tuple[int, int]:
        return (self.row, self.col)


def _is_channel(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def _freeze_cell(value: Any, row: int, col: int) -> tuple[Any, int]:
    """Validate one color cell.

    Returns the immutable color and its channel count (0 for a scalar).
    """
    if isinstance(value, np.ndarray):
        value = value.tolist()
    if _is_channel(value):
        return value, 0
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        if len(value) > 0 and all(_is_channel(v) for v in value):
            return tuple(value), len(value)
    raise InvalidInputError(
        f"Color at ({row}, {col}) must be a finite number or a non-empty "
        f"sequence of finite numbers, got {value!r}"
    )


def _describe(channels: int) -> str:
    return "a scalar" if channels == 0 else f"{channels} channels"


def _as_rows(colors: Any) -> list[list[Any]]:
    """Normalize list-of-rows or numpy input into a rectangular list of rows."""
    if isinstance(colors, np.ndarray):
        if colors.ndim not in (2, 3):
            raise InvalidInputError(
                f"Expected an array of shape (H, W) or (H, W, C), got {colors.shape}"
            )
        if colors.shape[0] == 0 or colors.shape[1] == 0:
            raise InvalidInputError(f"Grid has a zero-size dimension: {colors.shape}")
        return colors.tolist()

    if not isinstance(colors, Sequence) or isinstance(colors, (str, bytes)):
        raise InvalidInputError(f"Grid must be a sequence of rows, got {type(colors).__name__}")
    if len(colors) == 0:
        raise InvalidInputError("Grid has no rows")

    rows: list[list[Any]] = []
    width = -1
    for i, row in enumerate(colors):
        if isinstance(row, np.ndarray):
            row = row.tolist()
        if not isinstance(row, Sequence) or isinstance(row, (str, bytes)):
            raise InvalidInputError(f"Row {i} is not a sequence")
        if width < 0:
            width = len(row)
        elif len(row) != width:
            raise InvalidInputError(
                f"Grid is not rectangular: row {i} has {len(row)} cells, expected {width}"
            )
        rows.append(list(row))

    if width == 0:
        raise InvalidInputError("Grid has no columns")
    return rows


class PixelGrid:
    """Fixed height×width grid of pixels, addressed by (row, col).

    Pixels are created once, here, and never destroyed. Flattened indices are
    row-major: ``index = row * width + col``.
    """

    def __init__(self, rows: list[list[Pixel]]) -> None:
        self._rows = rows
        self.height = len(rows)
        self.width = len(rows[0])

    @classmethod
    def from_colors(cls, colors: Any) -> PixelGrid:
        """Build a grid from a 2D color grid (nested lists or numpy array).

        Every cell must be a finite number, or every cell a sequence of
        finite numbers with the same channel count.
        """
        raw = _as_rows(colors)
        expected: int | None = None
        rows: list[list[Pixel]] = []
        for r, raw_row in enumerate(raw):
            row: list[Pixel] = []
            for c, value in enumerate(raw_row):
                color, channels = _freeze_cell(value, r, c)
                if expected is None:
                    expected = channels
                elif channels != expected:
                    raise InvalidInputError(
                        f"Color at ({r}, {c}) has {_describe(channels)}, "
                        f"expected {_describe(expected)}"
                    )
                row.append(Pixel(r, c, color))
            rows.append(row)
        return cls(rows)

    @property
    def shape(self) -> tuple[int, int]:
        return (self.height, self.width)

    def __len__(self) -> int:
        return self.height * self.width

    def __iter__(self) -> Iterator[Pixel]:
        """Row-major scan."""
        for row in self._rows:
            yield from row

    def __getitem__(self, coord: tuple[int, int]) -> Pixel:
        row, col = coord
        if not self.contains(row, col):
            raise IndexError(f"({row}, {col}) outside {self.height}x{self.width} grid")
        return self._rows[row][col]

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def index_of(self, pixel: Pixel) -> int:
        return pixel.row * self.width + pixel.col

"""Tests for the pixel grid."""

from __future__ import annotations

import numpy as np
import pytest

from graphseg.engine.errors import InvalidInputError
from graphseg.engine.pixels import Pixel, PixelGrid


def test_pixel_identity_ignores_color():
    assert Pixel(1, 2, (0, 0, 0)) == Pixel(1, 2, (255, 255, 255))
    assert hash(Pixel(1, 2, 5)) == hash(Pixel(1, 2, 99))
    assert Pixel(1, 2) != Pixel(2, 1)
    assert len({Pixel(0, 0, 1), Pixel(0, 0, 2), Pixel(0, 1, 1)}) == 2


def test_pixel_is_immutable():
    p = Pixel(0, 0, 1)
    with pytest.raises(AttributeError):
        p.row = 3


def test_from_nested_lists():
    grid = PixelGrid.from_colors([[1, 2, 3], [4, 5, 6]])
    assert grid.shape == (2, 3)
    assert len(grid) == 6
    assert grid[1, 2].color == 6
    assert [p.coord for p in grid] == [(0, 0), (0, 1), (0, 2), (1, 0), (1, 1), (1, 2)]


def test_from_rgb_array_freezes_channels():
    img = np.zeros((2, 2, 3), dtype=np.uint8)
    img[1, 0] = (10, 20, 30)
    grid = PixelGrid.from_colors(img)
    assert grid[1, 0].color == (10, 20, 30)
    assert isinstance(grid[0, 0].color, tuple)


def test_list_channels_become_tuples():
    grid = PixelGrid.from_colors([[[1, 2, 3]]])
    assert grid[0, 0].color == (1, 2, 3)


def test_index_is_row_major():
    grid = PixelGrid.from_colors(np.zeros((3, 4)))
    assert [grid.index_of(p) for p in grid] == list(range(12))
    assert grid.shape == (3, 4)
    assert grid.index_of(Pixel(2, 1)) == 9


def test_getitem_out_of_bounds():
    grid = PixelGrid.from_colors([[0, 0]])
    assert not grid.contains(1, 0)
    assert not grid.contains(0, -1)
    with pytest.raises(IndexError):
        grid[0, 2]


class TestValidation:
    def test_ragged_rows(self):
        with pytest.raises(InvalidInputError, match="not rectangular"):
            PixelGrid.from_colors([[1, 2], [3]])

    def test_no_rows(self):
        with pytest.raises(InvalidInputError):
            PixelGrid.from_colors([])

    def test_no_columns(self):
        with pytest.raises(InvalidInputError):
            PixelGrid.from_colors([[], []])

    def test_zero_size_array(self):
        with pytest.raises(InvalidInputError):
            PixelGrid.from_colors(np.zeros((0, 4, 3)))

    def test_one_dimensional_array(self):
        with pytest.raises(InvalidInputError):
            PixelGrid.from_colors(np.zeros(5))

    def test_not_a_grid(self):
        with pytest.raises(InvalidInputError):
            PixelGrid.from_colors("pixels")
        with pytest.raises(InvalidInputError):
            PixelGrid.from_colors([1, 2, 3])

    def test_invalid_input_is_value_error(self):
        with pytest.raises(ValueError):
            PixelGrid.from_colors([])


class TestCellValidation:
    def test_mixed_channel_counts(self):
        with pytest.raises(InvalidInputError, match="has 2 channels, expected 3 channels"):
            PixelGrid.from_colors([[[1, 2, 3], [1, 2]]])

    def test_scalar_mixed_with_channels(self):
        with pytest.raises(InvalidInputError, match="expected a scalar"):
            PixelGrid.from_colors([[0, [1, 2, 3]]])

    @pytest.mark.parametrize("cell", ["a", None, True, float("nan"), float("inf")])
    def test_bad_scalar_cell(self, cell):
        with pytest.raises(InvalidInputError, match=r"Color at \(0, 1\)"):
            PixelGrid.from_colors([[0, cell]])

    @pytest.mark.parametrize("cell", [[], ["r", "g", "b"], [1, [2], 3], [0, None, 0]])
    def test_bad_channel_cell(self, cell):
        with pytest.raises(InvalidInputError, match=r"Color at \(0, 1\)"):
            PixelGrid.from_colors([[[0, 0, 0], cell]])

    def test_string_array(self):
        with pytest.raises(InvalidInputError):
            PixelGrid.from_colors(np.array([["a", "b"]]))

    def test_nan_in_float_array(self):
        img = np.zeros((2, 2))
        img[1, 1] = np.nan
        with pytest.raises(InvalidInputError, match=r"\(1, 1\)"):
            PixelGrid.from_colors(img)

    def test_numpy_scalars_accepted(self):
        grid = PixelGrid.from_colors([[np.float32(0.5), np.int64(3)]])
        assert grid[0, 1].color == 3

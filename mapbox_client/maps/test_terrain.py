"""
Tests for Terrain-RGB decoding, flattening and gradient fill.
"""

import math
import random

import pytest
from PIL import Image

from .maps_terrain import (
    MAX_ELEVATION,
    MIN_ELEVATION,
    elevation_to_pixel,
    flatten_elevations,
    gradient_fill_2d,
    highest_elevation,
    pixel_to_elevation,
)
from .maps_tile import Tile


def terrain_tile(elevations):
    """Build a Terrain-RGB tile from rows of elevations."""
    height, width = len(elevations), len(elevations[0])
    image = Image.new("RGBA", (width, height))
    image.putdata([elevation_to_pixel(e) + (255,) for row in elevations for e in row])
    return Tile(1, 2, 3, width, image)


class TestElevationCodec:
    """Test the Terrain-RGB encoding."""

    def test_known_values(self):
        assert pixel_to_elevation(0, 0, 0) == -10000.0
        assert pixel_to_elevation(1, 134, 160) == pytest.approx(0.0)
        assert pixel_to_elevation(255, 255, 255) == pytest.approx(MAX_ELEVATION)

    def test_encode_sea_level(self):
        assert elevation_to_pixel(0.0) == (1, 134, 160)

    def test_round_trip_extremes(self):
        for pixel in [(0, 0, 0), (255, 255, 255), (0, 0, 1), (1, 0, 0), (0, 255, 0)]:
            assert elevation_to_pixel(pixel_to_elevation(*pixel)) == pixel

    def test_round_trip_sampled(self):
        rng = random.Random(42)
        for _ in range(2000):
            pixel = (rng.randrange(256), rng.randrange(256), rng.randrange(256))
            assert elevation_to_pixel(pixel_to_elevation(*pixel)) == pixel

    def test_out_of_range(self):
        with pytest.raises(ValueError):
            elevation_to_pixel(MIN_ELEVATION - 1)
        with pytest.raises(ValueError):
            elevation_to_pixel(MAX_ELEVATION + 1)


class TestTerrainTiles:
    """Test whole-tile terrain helpers."""

    def test_highest_elevation(self):
        tile = terrain_tile([[10.0, 2518.0], [-30.5, 400.0]])
        assert highest_elevation(tile) == pytest.approx(2518.0)

    def test_flatten(self):
        tile = terrain_tile([[0.0, 1500.0], [3000.0, 6000.0]])
        original = tile.image.tobytes()

        flattened = flatten_elevations(tile, 3000.0)

        assert flattened.image.getpixel((0, 0)) == (0, 0, 0, 255)
        assert flattened.image.getpixel((1, 0)) == (127, 127, 127, 255)
        assert flattened.image.getpixel((0, 1)) == (255, 255, 255, 255)
        # Clamped above max_height
        assert flattened.image.getpixel((1, 1)) == (255, 255, 255, 255)
        assert (flattened.x, flattened.y, flattened.level) == (tile.x, tile.y, tile.level)
        assert tile.image.tobytes() == original

    def test_flatten_clamps_below_sea_level(self):
        flattened = flatten_elevations(terrain_tile([[-500.0]]), 1000.0)
        assert flattened.image.getpixel((0, 0)) == (0, 0, 0, 255)

    def test_flatten_invalid_height(self):
        with pytest.raises(ValueError):
            flatten_elevations(terrain_tile([[0.0]]), 0)


S = -1.0


class TestGradientFill:
    """Test sparse grid interpolation."""

    def test_single_row(self):
        assert gradient_fill_2d([[5.0, S, S, 8.0]], S) == [[5.0, 6.0, 7.0, 8.0]]

    def test_single_column(self):
        assert gradient_fill_2d([[0.0], [S], [10.0]], S) == [[0.0], [5.0], [10.0]]

    def test_unbracketed_edges_left_alone(self):
        assert gradient_fill_2d([[S, 2.0, S, 4.0, S]], S) == [[S, 2.0, 3.0, 4.0, S]]

    def test_axes_averaged(self):
        grid = [
            [0.0, 10.0, 20.0],
            [S, S, S],
            [20.0, 10.0, 40.0],
        ]
        result = gradient_fill_2d(grid, S)
        # Rows cannot fill the middle row; columns can
        assert result[1] == [10.0, 10.0, 30.0]

    def test_both_axes(self):
        grid = [
            [S, 4.0, S],
            [2.0, S, 6.0],
            [S, 8.0, S],
        ]
        result = gradient_fill_2d(grid, S)
        # Row gives 4.0, column gives 6.0
        assert result[1][1] == 5.0
        assert result[0][0] == S

    def test_nan_sentinel(self):
        nan = float("nan")
        result = gradient_fill_2d([[1.0, nan, 3.0], [nan, nan, nan]], nan)
        assert result[0] == [1.0, 2.0, 3.0]
        assert all(math.isnan(v) for v in result[1])

    def test_input_unchanged(self):
        grid = [[5.0, S, 8.0]]
        gradient_fill_2d(grid, S)
        assert grid == [[5.0, S, 8.0]]

    def test_empty(self):
        assert gradient_fill_2d([], S) == []

    def test_ragged(self):
        with pytest.raises(ValueError):
            gradient_fill_2d([[1.0, 2.0], [1.0]], S)

"""
Terrain-RGB decoding and elevation grid helpers.

Terrain-RGB tiles encode elevation in metres across the red, green and
blue channels:

    elevation = -10000 + (R * 256 * 256 + G * 256 + B) * 0.1

See https://docs.mapbox.com/data/tilesets/guides/access-elevation-data/
"""

import math
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple

from PIL import Image

from ..config.logger_module import log_debug

if TYPE_CHECKING:
    from .maps_tile import Tile


ELEVATION_OFFSET = -10000.0
ELEVATION_SCALE = 0.1
MAX_ENCODED_VALUE = (1 << 24) - 1

MIN_ELEVATION = ELEVATION_OFFSET
MAX_ELEVATION = ELEVATION_OFFSET + MAX_ENCODED_VALUE * ELEVATION_SCALE


def pixel_to_elevation(r: int, g: int, b: int) -> float:
    """Decode one Terrain-RGB pixel to an elevation in metres."""
    return ELEVATION_OFFSET + (r * 65536 + g * 256 + b) * ELEVATION_SCALE


def elevation_to_pixel(elevation: float) -> Tuple[int, int, int]:
    """
    Encode an elevation in metres as a Terrain-RGB (r, g, b) triple.

    Raises:
        ValueError: If the elevation is outside the encodable range
    """
    value = int(round((elevation - ELEVATION_OFFSET) / ELEVATION_SCALE))
    if not 0 <= value <= MAX_ENCODED_VALUE:
        raise ValueError(
            f"Elevation {elevation} outside encodable range "
            f"[{MIN_ELEVATION}, {MAX_ELEVATION}]"
        )
    return (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF


def highest_elevation(tile: "Tile") -> float:
    """Return the highest decoded elevation in a Terrain-RGB tile."""
    return max(pixel_to_elevation(r, g, b) for r, g, b, _ in tile.image.getdata())


def flatten_elevations(tile: "Tile", max_height: float) -> "Tile":
    """
    Render a Terrain-RGB tile as greyscale, scaling ``max_height`` metres to
    white. Elevations outside [0, max_height] are clamped. Returns a new tile;
    the source tile is left unchanged.
    """
    if max_height <= 0:
        raise ValueError(f"max_height must be positive, got {max_height}")

    data = []
    for r, g, b, _ in tile.image.getdata():
        level = int(pixel_to_elevation(r, g, b) / max_height * 255)
        level = min(max(level, 0), 255)
        data.append((level, level, level, 255))

    flattened = Image.new("RGBA", tile.image.size)
    flattened.putdata(data)
    return tile.with_image(flattened)


def _is_missing(value: float, sentinel: float) -> bool:
    if math.isnan(sentinel):
        return math.isnan(value)
    return value == sentinel


def _fill_line(values: Sequence[float], sentinel: float) -> List[float]:
    """Linearly fill sentinel runs bracketed by valid values on both sides."""
    filled = list(values)
    last: Optional[int] = None

    for i, value in enumerate(values):
        if _is_missing(value, sentinel):
            continue
        if last is not None and i - last > 1:
            start = values[last]
            delta = (value - start) / (i - last)
            for j in range(1, i - last):
                filled[last + j] = start + j * delta
        last = i

    return filled


def gradient_fill_2d(grid: Sequence[Sequence[float]], sentinel: float) -> List[List[float]]:
    """
    Interpolate missing values in a sparse 2D grid.

    Gaps are filled linearly along each row and, independently, along each
    column; the two results are averaged per cell. A cell filled along only
    one axis takes that axis' value, and a cell with no bracketing values on
    either axis stays ``sentinel``. ``sentinel`` may be NaN.

    Raises:
        ValueError: For a ragged grid
    """
    if not grid:
        return []

    width = len(grid[0])
    if any(len(row) != width for row in grid):
        raise ValueError("gradient_fill_2d requires rows of equal length")
    height = len(grid)

    by_row = [_fill_line(row, sentinel) for row in grid]

    by_column = [[sentinel] * width for _ in range(height)]
    for x in range(width):
        column = _fill_line([grid[y][x] for y in range(height)], sentinel)
        for y in range(height):
            by_column[y][x] = column[y]

    result = []
    for y in range(height):
        row = []
        for x in range(width):
            from_row, from_column = by_row[y][x], by_column[y][x]
            if _is_missing(from_row, sentinel):
                row.append(from_column)
            elif _is_missing(from_column, sentinel):
                row.append(from_row)
            else:
                row.append((from_row + from_column) / 2)
        result.append(row)

    log_debug(f"gradient_fill_2d filled {width}x{height} grid")
    return result

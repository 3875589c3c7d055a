"""
Tile index helpers: slippy-map tile coordinates, enclosing tile ranges,
antimeridian wrapping and stitching of tile grids.

See http://wiki.openstreetmap.org/wiki/Slippy_map_tilenames
"""

import math
from typing import List, Sequence, Tuple

from PIL import Image

from ..base.base_errors import GeometryError, InvalidZoomError
from ..base.base_types import GeoPoint
from .maps_tile import Tile


# Latitude limit of the square Web Mercator world
MAX_LATITUDE = 85.05112878


def lat_lon_to_tile_xy(lat: float, lon: float, zoom: int) -> Tuple[float, float]:
    """Convert a location in degrees to fractional tile coordinates at ``zoom``."""
    n = 2.0 ** zoom
    lat = min(max(lat, -MAX_LATITUDE), MAX_LATITUDE)
    lat_rad = math.radians(lat)

    x = n * ((lon + 180.0) / 360.0)
    y = n * (1 - (math.log(math.tan(lat_rad) + 1 / math.cos(lat_rad)) / math.pi)) / 2
    return x, y


def tile_xy_to_lat_lon(x: float, y: float, zoom: int) -> Tuple[float, float]:
    """Convert fractional tile coordinates at ``zoom`` to (lat, lon) in degrees."""
    n = 2.0 ** zoom
    lon = x / n * 360.0 - 180.0
    lat = math.degrees(math.atan(math.sinh(math.pi * (1 - 2 * y / n))))
    return lat, lon


def location_to_tile_id(point: GeoPoint, zoom: int) -> Tuple[int, int]:
    """Return the (x, y) index of the tile containing ``point``."""
    x, y = lat_lon_to_tile_xy(point.latitude, point.longitude, zoom)
    return math.floor(x), math.floor(y)


def get_enclosing_tile_ids(a: GeoPoint, b: GeoPoint, zoom: int) -> Tuple[int, int, int, int]:
    """
    Return the inclusive tile range (x_start, y_start, x_end, y_end) covering
    the box spanned by two corner points given in any order.

    Ids are not wrapped, so the range reflects the true span of boxes that
    cross the antimeridian.
    """
    ax, ay = location_to_tile_id(a, zoom)
    bx, by = location_to_tile_id(b, zoom)
    return min(ax, bx), min(ay, by), max(ax, bx), max(ay, by)


def wrap_tile_id(x: int, y: int, zoom: int) -> Tuple[int, int]:
    """
    Wrap tile ids into the valid [0, 2^zoom) range for an API request,
    e.g. (16, 10) at zoom 4 becomes (0, 10).

    Raises:
        InvalidZoomError: If zoom is below 1
    """
    if zoom < 1:
        raise InvalidZoomError(f"Tile wrapping requires zoom >= 1 (got {zoom})")
    n = 1 << zoom
    return x % n, y % n


def stitch_tiles(grid: Sequence[Sequence[Tile]]) -> Tile:
    """
    Combine a 2D grid (rows of tiles) into a single tile.

    Every tile must have the same pixel dimensions. The result carries the
    id of the top-left tile.

    Raises:
        GeometryError: For an empty or ragged grid, or mismatched tile sizes
    """
    if not grid or not grid[0]:
        raise GeometryError("Cannot stitch an empty tile grid")

    x_len = len(grid[0])
    if any(len(row) != x_len for row in grid):
        raise GeometryError("Cannot stitch a ragged tile grid")

    origin = grid[0][0]
    tile_w, tile_h = origin.image.size
    for row in grid:
        for tile in row:
            if tile.image.size != (tile_w, tile_h):
                raise GeometryError(
                    f"Tile size mismatch: expected {tile_w}x{tile_h}, "
                    f"got {tile.image.width}x{tile.image.height}"
                )

    stitched = Image.new("RGBA", (tile_w * x_len, tile_h * len(grid)))
    for y, row in enumerate(grid):
        for x, tile in enumerate(row):
            stitched.paste(tile.image, (x * tile_w, y * tile_h))

    return Tile(origin.x, origin.y, origin.level, origin.size, stitched,
                projector=origin.projector)

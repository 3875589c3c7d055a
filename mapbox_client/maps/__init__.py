"""
Maps module for the Mapbox client.

This module provides functionality for:
- Fetching raster map tiles, singly or as a grid enclosing a bounding box
- Projecting locations to tile and pixel space (spherical Mercator)
- Stitching tile grids and drawing overlays and lines on tiles
- Decoding Terrain-RGB elevation tiles
- Caching fetched tiles on disk

Main classes:
- Maps: Raster tiles API wrapper
- TileGridFetcher: Cache-then-network grid fetch, sequential or parallel
- Tile: Positioned RGBA raster
- MercatorProjector: Geographic <-> pixel conversion
- FileTileCache: Local cache for tiles
"""

from .maps_cache import FileTileCache, TileCache
from .maps_client import Maps
from .maps_image import decode_image, encode_image, load_image, save_image, save_image_jpg, save_image_png
from .maps_mercator import MercatorCache, MercatorProjector
from .maps_terrain import (
    elevation_to_pixel,
    flatten_elevations,
    gradient_fill_2d,
    highest_elevation,
    pixel_to_elevation,
)
from .maps_tile import CENTER, DrawConfig, Justify, Tile
from .maps_tiles import (
    get_enclosing_tile_ids,
    lat_lon_to_tile_xy,
    location_to_tile_id,
    stitch_tiles,
    tile_xy_to_lat_lon,
    wrap_tile_id,
)
from .maps_types import MapFormat, MapID, validate_map_format
from .maps_workflow import TileGridFetcher

__all__ = [
    # Main classes
    "Maps",
    "TileGridFetcher",
    "Tile",
    "MercatorProjector",
    "MercatorCache",
    "TileCache",
    "FileTileCache",

    # Types
    "MapID",
    "MapFormat",
    "Justify",
    "DrawConfig",
    "CENTER",

    # Functions
    "validate_map_format",
    "lat_lon_to_tile_xy",
    "tile_xy_to_lat_lon",
    "location_to_tile_id",
    "get_enclosing_tile_ids",
    "wrap_tile_id",
    "stitch_tiles",
    "pixel_to_elevation",
    "elevation_to_pixel",
    "highest_elevation",
    "flatten_elevations",
    "gradient_fill_2d",
    "decode_image",
    "encode_image",
    "load_image",
    "save_image",
    "save_image_png",
    "save_image_jpg",
]

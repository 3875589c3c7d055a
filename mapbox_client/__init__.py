"""
Python client for the Mapbox web services.

Main classes:
- Mapbox: Binds every API module to one authenticated base client
- Maps: Raster tiles, tile grids, stitching and drawing
- Geocode, Directions, DirectionsMatrix, MapMatching, Surface: JSON APIs

Errors:
- MapboxError and its subclasses
"""

from .base.base_client import BaseClient
from .base.base_errors import (
    APIError,
    CacheError,
    ConfigurationError,
    DecodeError,
    GeometryError,
    GeometryTypeMismatchError,
    InvalidZoomError,
    MapboxError,
    OutOfBoundsError,
    RateLimitError,
    TransportError,
    UnauthorizedError,
)
from .base.base_rate_limiter import TokenBucketRateLimiter
from .base.base_types import BoundingBox, GeoPoint, Location
from .directions.directions_client import Directions
from .directions.directions_types import RouteGeometry, RoutingProfile
from .directions_matrix.directions_matrix_client import DirectionsMatrix
from .geocode.geocode_client import Geocode
from .map_matching.map_matching_client import MapMatching
from .mapbox import Mapbox
from .maps.maps_cache import FileTileCache, TileCache
from .maps.maps_client import Maps
from .maps.maps_tile import CENTER, DrawConfig, Justify, Tile
from .maps.maps_types import MapFormat, MapID
from .surface.surface_client import Surface

__version__ = "1.0.0"

__all__ = [
    # Main classes
    "Mapbox",
    "BaseClient",
    "TokenBucketRateLimiter",
    "Maps",
    "Geocode",
    "Directions",
    "DirectionsMatrix",
    "MapMatching",
    "Surface",
    "TileCache",
    "FileTileCache",
    "Tile",
    "DrawConfig",
    "Justify",
    "CENTER",
    "MapID",
    "MapFormat",
    "RoutingProfile",
    "RouteGeometry",
    "GeoPoint",
    "Location",
    "BoundingBox",

    # Errors
    "MapboxError",
    "ConfigurationError",
    "TransportError",
    "APIError",
    "RateLimitError",
    "UnauthorizedError",
    "DecodeError",
    "GeometryError",
    "OutOfBoundsError",
    "InvalidZoomError",
    "CacheError",
    "GeometryTypeMismatchError",
]

"""
Shared building blocks for every Mapbox API module.

Main classes:
- BaseClient: Authenticated, rate limited HTTP access to api.mapbox.com
- TokenBucketRateLimiter: Rate limiting implementation
- GeoPoint / BoundingBox: Geographic value types

Errors:
- MapboxError and its subclasses (see base_errors)
"""

from .base_client import BaseClient, build_params, parse_model
from .base_errors import (
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
from .base_rate_limiter import TokenBucketRateLimiter
from .base_types import BoundingBox, Feature, FeatureCollection, GeoPoint, Location

__all__ = [
    # Main classes
    "BaseClient",
    "TokenBucketRateLimiter",
    "GeoPoint",
    "Location",
    "BoundingBox",
    "Feature",
    "FeatureCollection",
    "build_params",
    "parse_model",

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

"""
Custom exceptions for the Mapbox client.

Every error raised by the client derives from MapboxError so callers can
catch the whole family at once, or pick out the failure mode they care about:
configuration, transport, service-side API errors, decoding, tile geometry
and caching.
"""


class MapboxError(Exception):
    """Base exception for all client errors."""
    pass


class ConfigurationError(MapboxError):
    """Raised for invalid client setup or request combinations, before any network call."""
    pass


class TransportError(MapboxError):
    """Raised on network failures, truncated transfers and unexpected HTTP statuses."""
    pass


class APIError(MapboxError):
    """Raised when the service responds but signals a logical error."""
    pass


class RateLimitError(APIError):
    """Raised when the API rate limit is exceeded (HTTP 429) or local throttling gives up."""
    pass


class UnauthorizedError(APIError):
    """Raised when the API rejects the access token (HTTP 401)."""
    pass


class DecodeError(MapboxError):
    """Raised when a response body cannot be decoded as the expected image or JSON."""
    pass


class GeometryError(MapboxError):
    """Raised when a tile geometry precondition is violated."""
    pass


class OutOfBoundsError(GeometryError):
    """Raised when a coordinate falls outside a tile raster after translation."""
    pass


class InvalidZoomError(GeometryError):
    """Raised when a zoom level is not valid for the requested operation."""
    pass


class CacheError(MapboxError):
    """Raised on tile cache read/write failures."""
    pass


class GeometryTypeMismatchError(MapboxError):
    """Raised when a route geometry is accessed as the wrong variant."""
    pass


# Fixed messages for the well-known HTTP failure statuses
UNAUTHORIZED_MESSAGE = "Mapbox API error unauthorized"
RATE_LIMIT_MESSAGE = "Mapbox API error api rate limit exceeded"

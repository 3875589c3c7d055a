"""
Top-level Mapbox client.

Binds every API wrapper to one shared BaseClient, so all of them use the
same token, HTTP session and rate limiter.
"""

from typing import Optional

import requests

from .config.logger_module import log_info
from .base.base_client import BaseClient
from .base.base_rate_limiter import TokenBucketRateLimiter
from .directions.directions_client import Directions
from .directions_matrix.directions_matrix_client import DirectionsMatrix
from .geocode.geocode_client import Geocode
from .map_matching.map_matching_client import MapMatching
from .maps.maps_cache import TileCache
from .maps.maps_client import Maps
from .surface.surface_client import Surface


class Mapbox:
    """
    Entry point to the Mapbox web services.

    Attributes:
        maps: Raster tiles
        geocode: Forward and reverse geocoding
        directions: Routing between waypoints
        directions_matrix: Travel time matrices
        map_matching: GPS trace matching
        surface: Terrain sampling
    """

    def __init__(self,
                 token: Optional[str] = None,
                 cache: Optional[TileCache] = None,
                 max_workers: Optional[int] = None,
                 base_url: Optional[str] = None,
                 rate_limiter: Optional[TokenBucketRateLimiter] = None,
                 session: Optional[requests.Session] = None):
        """
        Initialize the client.

        Args:
            token: Mapbox access token (read from MAPBOX_TOKEN if not provided)
            cache: Optional tile cache for the maps API
            max_workers: Thread count for parallel tile grid fetches
            base_url: API root override
            rate_limiter: Shared limiter; one is built from config if omitted
            session: Pre-configured requests session

        Raises:
            ConfigurationError: If no token is given or configured
        """
        self.base = BaseClient(token=token, base_url=base_url,
                               rate_limiter=rate_limiter, session=session)

        self.maps = Maps(self.base, cache=cache, max_workers=max_workers)
        self.geocode = Geocode(self.base)
        self.directions = Directions(self.base)
        self.directions_matrix = DirectionsMatrix(self.base)
        self.map_matching = MapMatching(self.base)
        self.surface = Surface(self.base)

        log_info(f"Mapbox client ready ({self.base.base_url})")

    def set_debug(self, debug: bool) -> None:
        self.base.set_debug(debug)

    def close(self) -> None:
        self.base.close()

    def __enter__(self) -> "Mapbox":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

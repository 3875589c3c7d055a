"""
Mapbox raster tiles API client.

Fetches single tiles as Pillow images and grids of tiles enclosing a
bounding box, with an optional tile cache in front of the network.
See https://docs.mapbox.com/api/maps/raster-tiles/
"""

from typing import List, Optional

from PIL import Image

from ..config.logger_module import log_debug, log_error
from ..base.base_client import BaseClient, extract_error_message
from ..base.base_errors import APIError, TransportError
from ..base.base_types import GeoPoint
from .maps_cache import TileCache
from .maps_image import decode_image
from .maps_mercator import MercatorProjector
from .maps_tile import Tile
from .maps_types import MapFormat, MapID, validate_map_format
from .maps_workflow import TileGridFetcher


API_VERSION = "v4"


class Maps:
    """
    Wraps the raster tiles API.

    Provides two main functions:
    1. get_tile: one tile by id, decoded to an image
    2. get_enclosing_tiles: the grid of tiles covering a bounding box
    """

    def __init__(self,
                 base: BaseClient,
                 cache: Optional[TileCache] = None,
                 max_workers: Optional[int] = None,
                 projector: Optional[MercatorProjector] = None):
        self.base = base
        self.projector = projector or MercatorProjector()
        self.fetcher = TileGridFetcher(self, cache=cache, max_workers=max_workers,
                                       projector=self.projector)

    @property
    def cache(self) -> Optional[TileCache]:
        return self.fetcher.cache

    def set_cache(self, cache: Optional[TileCache]) -> None:
        """Attach (or with None, detach) a tile cache."""
        self.fetcher.cache = cache

    def get_tile(self,
                 map_id: MapID,
                 x: int,
                 y: int,
                 level: int,
                 fmt: MapFormat = MapFormat.PNG,
                 high_dpi: bool = False) -> Image.Image:
        """
        Fetch a single map tile.

        Args:
            map_id: Map source
            x, y: Tile id, already wrapped into [0, 2^level)
            level: Zoom level
            fmt: Tile image format
            high_dpi: Request a 512px (@2x) tile

        Returns:
            Decoded tile image

        Raises:
            ConfigurationError: For an unsupported map/format combination
            TransportError: On network failures, truncated bodies and non-2xx statuses
            APIError: When the service answers with a JSON error payload
            DecodeError: For an unknown content type or undecodable image
        """
        validate_map_format(map_id, fmt)

        dpi_flag = "@2x" if high_dpi else ""
        path = f"{API_VERSION}/{MapID(map_id)}/{level}/{x}/{y}{dpi_flag}.{MapFormat(fmt)}"

        response = self.base.query_request(path)

        content_type = response.headers.get("Content-Type", "")
        data = response.content

        # Content-encoded bodies are decompressed by requests, so their
        # declared length no longer matches
        declared = response.headers.get("Content-Length")
        if declared is not None and not response.headers.get("Content-Encoding"):
            try:
                expected = int(declared)
            except ValueError:
                log_error(f"Malformed Content-Length for {path}: {declared!r}")
                raise TransportError(f"Malformed Content-Length header ({declared!r})")
            if expected != len(data):
                log_error(f"Content length mismatch for {path}")
                raise TransportError(
                    f"Content length mismatch (expected {declared} received {len(data)})"
                )

        if content_type.startswith("application/json"):
            message = extract_error_message(response) or response.text
            raise APIError(f"api error: {message}")

        if not 200 <= response.status_code < 300:
            raise TransportError(f"HTTP {response.status_code} fetching tile {path}")

        log_debug(f"Fetched tile {path} ({len(data)} bytes, {content_type})")
        return decode_image(data, content_type)

    def get_enclosing_tiles(self,
                            map_id: MapID,
                            a: GeoPoint,
                            b: GeoPoint,
                            level: int,
                            fmt: MapFormat = MapFormat.PNG,
                            high_dpi: bool = False,
                            parallel: bool = False) -> List[List[Tile]]:
        """Fetch the grid of tiles enclosing the box spanned by ``a`` and ``b``."""
        return self.fetcher.fetch_grid(map_id, a, b, level, fmt, high_dpi, parallel=parallel)

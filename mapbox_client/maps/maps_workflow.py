"""
Tile grid fetch orchestration.

Resolves the tiles enclosing a bounding box, fetches each one through the
cache then the network, and assembles them into a row-major grid, either
sequentially or on a thread pool.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import TYPE_CHECKING, List, Optional

from ..config.config_module import MAX_WORKERS_KEY, get_config_int
from ..config.logger_module import log_debug, log_info, log_warning, log_error
from ..base.base_errors import CacheError, TransportError
from ..base.base_types import GeoPoint
from .maps_cache import TileCache
from .maps_mercator import MercatorProjector
from .maps_tile import Tile
from .maps_tiles import get_enclosing_tile_ids, wrap_tile_id
from .maps_types import MapFormat, MapID, validate_map_format

if TYPE_CHECKING:
    from .maps_client import Maps


TILE_SIZE = 256
HIGH_DPI_TILE_SIZE = 512


def tile_size_for(high_dpi: bool) -> int:
    return HIGH_DPI_TILE_SIZE if high_dpi else TILE_SIZE


class TileGridFetcher:
    """
    Fetches the grid of tiles covering a bounding box.

    Workflow per tile:
    1. Wrap the tile id into the valid range for the zoom level
    2. Check the cache (read errors are logged and treated as a miss)
    3. On a miss, fetch and decode the tile from the tiles API
    4. Write the tile through to the cache (write errors are logged)

    Tiles keep their unwrapped ids so the grid geometry matches the true
    span of the box, also across the antimeridian.
    """

    def __init__(self,
                 maps: "Maps",
                 cache: Optional[TileCache] = None,
                 max_workers: Optional[int] = None,
                 projector: Optional[MercatorProjector] = None):
        """
        Initialize the fetcher.

        Args:
            maps: Tiles API used on cache misses
            cache: Optional tile cache
            max_workers: Thread pool size for parallel fetches (MAPBOX_MAX_WORKERS, default 8)
            projector: Projector handed to the fetched tiles
        """
        self.maps = maps
        self.cache = cache
        self.max_workers = max_workers or get_config_int(MAX_WORKERS_KEY, 8)
        self.projector = projector or MercatorProjector()

    def fetch_tile(self,
                   map_id: MapID,
                   x: int,
                   y: int,
                   level: int,
                   fmt: MapFormat,
                   high_dpi: bool) -> Tile:
        """
        Fetch one tile by its (possibly unwrapped) id.

        Raises:
            InvalidZoomError: If level is below 1
            TransportError, APIError, DecodeError: From the network fetch
        """
        wrapped_x, wrapped_y = wrap_tile_id(x, y, level)

        image = None
        if self.cache is not None:
            try:
                image = self.cache.fetch(map_id, wrapped_x, wrapped_y, level, fmt, high_dpi)
            except CacheError as e:
                log_warning(f"Cache read error (continuing): {e}")

        if image is None:
            image = self.maps.get_tile(map_id, wrapped_x, wrapped_y, level, fmt, high_dpi)
            if image is None:
                raise TransportError(f"No image returned for tile {wrapped_x}/{wrapped_y}/{level}")

            if self.cache is not None:
                try:
                    self.cache.save(map_id, wrapped_x, wrapped_y, level, fmt, high_dpi, image)
                except CacheError as e:
                    log_warning(f"Failed to cache tile (continuing): {e}")

        return Tile(x, y, level, tile_size_for(high_dpi), image, projector=self.projector)

    def fetch_grid(self,
                   map_id: MapID,
                   a: GeoPoint,
                   b: GeoPoint,
                   level: int,
                   fmt: MapFormat = MapFormat.PNG,
                   high_dpi: bool = False,
                   parallel: bool = False) -> List[List[Tile]]:
        """
        Fetch every tile enclosing the box spanned by ``a`` and ``b``.

        Returns:
            Rows of tiles, shape (y_end - y_start + 1) x (x_end - x_start + 1)

        Raises:
            ConfigurationError: For an unsupported map/format combination
            MapboxError: The first tile failure; no partial grid is returned
        """
        validate_map_format(map_id, fmt)

        x_start, y_start, x_end, y_end = get_enclosing_tile_ids(a, b, level)
        x_len = x_end - x_start + 1
        y_len = y_end - y_start + 1

        log_info(
            f"Fetching {x_len}x{y_len} tiles of {MapID(map_id)} at level {level} "
            f"(x {x_start}-{x_end}, y {y_start}-{y_end}, parallel={parallel})"
        )

        if not parallel:
            return [
                [self.fetch_tile(map_id, x, y, level, fmt, high_dpi) for x in range(x_start, x_end + 1)]
                for y in range(y_start, y_end + 1)
            ]

        grid: List[List[Optional[Tile]]] = [[None] * x_len for _ in range(y_len)]

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = {
                executor.submit(self.fetch_tile, map_id, x, y, level, fmt, high_dpi): (y - y_start, x - x_start)
                for y in range(y_start, y_end + 1)
                for x in range(x_start, x_end + 1)
            }
            try:
                for future in as_completed(futures):
                    row, col = futures[future]
                    grid[row][col] = future.result()
                    log_debug(f"Fetched tile at grid position ({row}, {col})")
            except Exception as e:
                # Tasks already running finish in the executor; their results are dropped
                for pending in futures:
                    pending.cancel()
                log_error(f"Tile grid fetch aborted: {e}")
                raise

        return grid

"""
Tile caches keyed by (map id, x, y, level, format, high DPI flag).

FileTileCache stores decoded tiles as image files. It never evicts or
revalidates entries: once a tile is written it is served forever, which
suits map tiles that rarely change but is not suitable for unbounded
production use.
"""

import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from PIL import Image

from ..config.config_module import CACHE_DIR_KEY, get_config
from ..config.logger_module import log_debug, log_info, log_error
from ..base.base_errors import CacheError
from .maps_image import encode_image, load_image
from .maps_types import MapFormat, MapID


class TileCache(ABC):
    """
    Pluggable tile store used by the tile grid fetcher.

    Implementations must tolerate concurrent fetch/save calls from the
    worker threads of a parallel grid fetch.
    """

    @abstractmethod
    def fetch(self,
              map_id: MapID,
              x: int,
              y: int,
              level: int,
              fmt: MapFormat,
              high_dpi: bool) -> Optional[Image.Image]:
        """
        Return the cached tile image, or None on a miss.

        Raises:
            CacheError: On read failures
        """

    @abstractmethod
    def save(self,
             map_id: MapID,
             x: int,
             y: int,
             level: int,
             fmt: MapFormat,
             high_dpi: bool,
             image: Image.Image) -> None:
        """
        Store a tile image.

        Raises:
            CacheError: On write failures
        """


def tile_cache_name(map_id: MapID, x: int, y: int, level: int, fmt: MapFormat, high_dpi: bool) -> str:
    """Build the cache file name, e.g. "mapbox.satellite-15-9-4@2x.jpg90"."""
    dpi_flag = "@2x" if high_dpi else ""
    return f"{MapID(map_id)}-{x}-{y}-{level}{dpi_flag}.{MapFormat(fmt)}"


class FileTileCache(TileCache):
    """
    Caches tiles as files in a local directory.

    PNG formats are stored as PNG and JPEG formats as JPEG. Raw terrain
    tiles (pngraw) are neither stored nor served.
    """

    def __init__(self, base_path: Optional[str] = None):
        """
        Initialize the file cache.

        Args:
            base_path: Cache directory (defaults to MAPBOX_CACHE_DIR or ./.cache_tiles)
        """
        self.base_path = Path(base_path or get_config(CACHE_DIR_KEY, "./.cache_tiles"))

        try:
            self.base_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CacheError(f"Failed to create cache directory: {e}") from e

        log_info(f"FileTileCache using {self.base_path}")

    def _cache_path(self, map_id, x, y, level, fmt, high_dpi) -> Path:
        return self.base_path / tile_cache_name(map_id, x, y, level, fmt, high_dpi)

    def fetch(self, map_id, x, y, level, fmt, high_dpi):
        if MapFormat(fmt) == MapFormat.PNG_RAW:
            return None

        path = self._cache_path(map_id, x, y, level, fmt, high_dpi)
        if not path.exists():
            log_debug(f"Cache miss: {path.name}")
            return None

        try:
            image = load_image(path)
        except OSError as e:
            log_error(f"Failed to read cache file {path.name}: {e}")
            raise CacheError(f"Failed to read cache file {path.name}: {e}") from e

        log_debug(f"Cache hit: {path.name}")
        return image

    def save(self, map_id, x, y, level, fmt, high_dpi, image):
        fmt = MapFormat(fmt)
        if fmt == MapFormat.PNG_RAW:
            log_debug("Skipping cache write for pngraw tile")
            return

        path = self._cache_path(map_id, x, y, level, fmt, high_dpi)
        if path.exists():
            return

        try:
            data = encode_image(image, fmt)
            # Write then rename so concurrent readers never see a partial file
            fd, tmp_name = tempfile.mkstemp(dir=self.base_path, suffix=".tmp")
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(data)
                os.replace(tmp_name, path)
            except OSError:
                os.unlink(tmp_name)
                raise
        except OSError as e:
            log_error(f"Failed to write cache file {path.name}: {e}")
            raise CacheError(f"Failed to write cache file {path.name}: {e}") from e

        log_debug(f"Cached {len(data)} bytes as {path.name}")

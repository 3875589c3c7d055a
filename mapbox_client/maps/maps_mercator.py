"""
Spherical (Web) Mercator projection between geographic and global pixel space.

Scaling constants depend only on (tile size, zoom), so a MercatorCache
precomputes them per tile size on first use. The cache is an explicit object
owned by (or injected into) each projector.
"""

import math
import threading
from typing import Dict, List, NamedTuple, Optional, Tuple


CACHED_ZOOM_LEVELS = 30

# sin(lat) limit; keeps the log term finite at the poles
MAX_SIN_LATITUDE = 0.9999


class ZoomConstants(NamedTuple):
    bc: float      # pixels per degree of longitude
    cc: float      # pixels per radian
    zc: float      # pixel offset of the map centre
    extent: float  # global pixel span


def _compute_constants(tile_size: int, zoom: int) -> ZoomConstants:
    scaled = tile_size * (2 ** zoom)
    return ZoomConstants(
        bc=scaled / 360.0,
        cc=scaled / (2 * math.pi),
        zc=scaled / 2.0,
        extent=float(scaled),
    )


class MercatorCache:
    """
    Per tile size table of Mercator scaling constants.

    Entries are written once and never mutated; two threads populating the
    same tile size concurrently produce identical tables.
    """

    def __init__(self, levels: int = CACHED_ZOOM_LEVELS):
        self.levels = levels
        self._tables: Dict[int, List[ZoomConstants]] = {}
        self._lock = threading.Lock()

    def get(self, tile_size: int, zoom: int) -> ZoomConstants:
        if zoom < 0:
            raise ValueError(f"zoom must be non-negative, got {zoom}")
        if zoom >= self.levels:
            return _compute_constants(tile_size, zoom)

        table = self._tables.get(tile_size)
        if table is None:
            table = [_compute_constants(tile_size, z) for z in range(self.levels)]
            with self._lock:
                table = self._tables.setdefault(tile_size, table)
        return table[zoom]

    def __contains__(self, tile_size: int) -> bool:
        return tile_size in self._tables


class MercatorProjector:
    """Converts between (lat, lon) and global pixel / tile coordinates."""

    def __init__(self, cache: Optional[MercatorCache] = None):
        self.cache = cache or MercatorCache()

    def project(self, lat: float, lon: float, zoom: int, tile_size: int) -> Tuple[int, int]:
        """Project a location to global pixel coordinates at ``zoom``."""
        c = self.cache.get(tile_size, zoom)

        f = min(max(math.sin(math.radians(lat)), -MAX_SIN_LATITUDE), MAX_SIN_LATITUDE)
        x = math.floor(c.zc + lon * c.bc)
        y = math.floor(c.zc + 0.5 * math.log((1 + f) / (1 - f)) * -c.cc)

        extent = int(c.extent)
        return min(x, extent), min(y, extent)

    def unproject(self, x: float, y: float, zoom: int, tile_size: int) -> Tuple[float, float]:
        """Convert global pixel coordinates back to (lat, lon) in degrees."""
        c = self.cache.get(tile_size, zoom)

        lon = (x - c.zc) / c.bc
        lat = math.degrees(2 * math.atan(math.exp((y - c.zc) / -c.cc)) - 0.5 * math.pi)
        return lat, lon

    def tile_id(self, lat: float, lon: float, zoom: int, tile_size: int) -> Tuple[int, int]:
        """Return the (x, y) index of the tile containing a location."""
        x, y = self.project(lat, lon, zoom, tile_size)
        return x // tile_size, y // tile_size

"""
Map tile: an RGBA raster positioned in Web Mercator tile space.

A Tile exclusively owns its raster. Drawing and line interpolation mutate
only that raster, addressed in local pixels, global pixels or geographic
coordinates.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

from PIL import Image

from ..base.base_errors import OutOfBoundsError
from ..base.base_types import GeoPoint
from .maps_mercator import MercatorProjector
from .maps_terrain import pixel_to_elevation


Pixel = Tuple[int, int, int, int]

# Called with the current pixel, returns the pixel to write back
Interpolate = Callable[[Pixel], Pixel]


class Justify(str, Enum):
    TOP = "top"
    LEFT = "left"
    CENTER = "center"
    BOTTOM = "bottom"
    RIGHT = "right"


@dataclass(frozen=True)
class DrawConfig:
    """Where an overlay sits relative to its anchor point."""

    vertical: Justify = Justify.CENTER
    horizontal: Justify = Justify.CENTER


CENTER = DrawConfig(Justify.CENTER, Justify.CENTER)


def _offset(anchor: int, extent: int, justify: Justify, start: Justify, end: Justify) -> int:
    if justify == start:
        return anchor
    if justify == Justify.CENTER:
        return anchor - extent // 2
    if justify == end:
        return anchor - extent
    raise ValueError(f"Unsupported justification ({justify})")


class Tile:
    """A raster tile with its (unwrapped) tile id, zoom level and tile size."""

    def __init__(self,
                 x: int,
                 y: int,
                 level: int,
                 size: int,
                 image: Image.Image,
                 projector: Optional[MercatorProjector] = None):
        self.x = x
        self.y = y
        self.level = level
        self.size = size
        # convert() always copies, so the tile never aliases the caller's image
        self.image = image.convert("RGBA")
        self.projector = projector or MercatorProjector()

    def __repr__(self) -> str:
        return (f"Tile(x={self.x}, y={self.y}, level={self.level}, size={self.size}, "
                f"image={self.image.width}x{self.image.height})")

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    def with_image(self, image: Image.Image) -> "Tile":
        """Return a new tile at the same position holding ``image``."""
        return Tile(self.x, self.y, self.level, self.size, image, projector=self.projector)

    def _check_local(self, x: int, y: int) -> None:
        if not 0 <= x < self.width:
            raise OutOfBoundsError(f"X offset not within tile space (x: {x} max: {self.width - 1})")
        if not 0 <= y < self.height:
            raise OutOfBoundsError(f"Y offset not within tile space (y: {y} max: {self.height - 1})")

    def translate_global_to_local_xy(self, x: int, y: int) -> Tuple[int, int]:
        """
        Convert global pixel coordinates to pixel coordinates in this tile.

        Raises:
            OutOfBoundsError: If the point lies outside the tile raster
        """
        offset_x = x - self.x * self.size
        offset_y = y - self.y * self.size
        self._check_local(offset_x, offset_y)
        return offset_x, offset_y

    def location_to_global_xy(self, point: GeoPoint) -> Tuple[int, int]:
        return self.projector.project(point.latitude, point.longitude, self.level, self.size)

    def draw_local_xy(self, overlay: Image.Image, x: int, y: int, config: DrawConfig = CENTER) -> None:
        """
        Draw ``overlay`` anchored at local pixel (x, y).

        The overlay is composited over the tile using its own alpha channel
        and clipped at the tile edges.

        Raises:
            OutOfBoundsError: If the anchor lies outside the tile raster
            ValueError: For an unsupported justification
        """
        self._check_local(x, y)

        overlay = overlay.convert("RGBA")
        dx = _offset(x, overlay.width, config.horizontal, Justify.LEFT, Justify.RIGHT)
        dy = _offset(y, overlay.height, config.vertical, Justify.TOP, Justify.BOTTOM)

        # Source-over: place the overlay on a clear layer, then composite
        layer = Image.new("RGBA", self.image.size, (0, 0, 0, 0))
        layer.paste(overlay, (dx, dy))
        self.image.alpha_composite(layer)

    def draw_global_xy(self, overlay: Image.Image, x: int, y: int, config: DrawConfig = CENTER) -> None:
        """Draw ``overlay`` anchored at global pixel (x, y)."""
        local_x, local_y = self.translate_global_to_local_xy(x, y)
        self.draw_local_xy(overlay, local_x, local_y, config)

    def draw_location(self, overlay: Image.Image, point: GeoPoint, config: DrawConfig = CENTER) -> None:
        """Draw ``overlay`` anchored at a geographic location."""
        x, y = self.location_to_global_xy(point)
        self.draw_global_xy(overlay, x, y, config)

    def interpolate_local_xy(self, x1: int, y1: int, x2: int, y2: int, interpolate: Interpolate) -> None:
        """
        Walk the line from (x1, y1) towards (x2, y2) and replace each visited
        pixel with ``interpolate(pixel)``.

        The walk takes round(length) steps; the end point itself is not
        visited. Ordering of the two points is preserved, so callbacks that
        sample pixels see them from start to end.
        """
        self._check_local(x1, y1)
        self._check_local(x2, y2)

        dx = x2 - x1
        dy = y2 - y1
        steps = round((dx ** 2 + dy ** 2) ** 0.5)

        pixels = self.image.load()
        for i in range(steps):
            # int() truncates toward zero for lines running up or left
            x = x1 + int(i * dx / steps)
            y = y1 + int(i * dy / steps)
            pixels[x, y] = interpolate(pixels[x, y])

    def interpolate_global_xy(self, x1: int, y1: int, x2: int, y2: int, interpolate: Interpolate) -> None:
        local_x1, local_y1 = self.translate_global_to_local_xy(x1, y1)
        local_x2, local_y2 = self.translate_global_to_local_xy(x2, y2)
        self.interpolate_local_xy(local_x1, local_y1, local_x2, local_y2, interpolate)

    def interpolate_locations(self, a: GeoPoint, b: GeoPoint, interpolate: Interpolate) -> None:
        x1, y1 = self.location_to_global_xy(a)
        x2, y2 = self.location_to_global_xy(b)
        self.interpolate_global_xy(x1, y1, x2, y2, interpolate)

    def draw_line(self, a: GeoPoint, b: GeoPoint, color: Sequence[int]) -> None:
        """Draw a constant colour line between two locations."""
        pixel = tuple(color) if len(color) == 4 else tuple(color) + (255,)
        self.interpolate_locations(a, b, lambda _: pixel)

    def get_altitude(self, point: GeoPoint) -> float:
        """Decode the Terrain-RGB elevation (metres) under a location."""
        x, y = self.location_to_global_xy(point)
        local_x, local_y = self.translate_global_to_local_xy(x, y)
        r, g, b, _ = self.image.getpixel((local_x, local_y))
        return pixel_to_elevation(r, g, b)

    def interpolate_altitudes(self, a: GeoPoint, b: GeoPoint) -> List[float]:
        """Sample Terrain-RGB elevations along the line from ``a`` to ``b``."""
        altitudes: List[float] = []

        def sample(pixel: Pixel) -> Pixel:
            altitudes.append(pixel_to_elevation(pixel[0], pixel[1], pixel[2]))
            return pixel

        self.interpolate_locations(a, b, sample)
        return altitudes

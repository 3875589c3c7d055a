"""
Map sources and tile formats served by the Mapbox raster tiles API.
"""

from enum import Enum

from ..base.base_errors import ConfigurationError


class MapID(str, Enum):
    """Raster tileset identifiers."""

    STREETS = "mapbox.streets"
    LIGHT = "mapbox.light"
    DARK = "mapbox.dark"
    SATELLITE = "mapbox.satellite"
    STREETS_SATELLITE = "mapbox.streets-satellite"
    WHEATPASTE = "mapbox.wheatpaste"
    STREETS_BASIC = "mapbox.streets-basic"
    COMIC = "mapbox.comic"
    OUTDOORS = "mapbox.outdoors"
    RUN_BIKE_HIKE = "mapbox.run-bike-hike"
    PENCIL = "mapbox.pencil"
    PIRATES = "mapbox.pirates"
    EMERALD = "mapbox.emerald"
    HIGH_CONTRAST = "mapbox.high-contrast"
    TERRAIN_RGB = "mapbox.terrain-rgb"

    def __str__(self) -> str:
        return self.value


class MapFormat(str, Enum):
    """Tile image formats."""

    PNG = "png"        # true color PNG
    PNG32 = "png32"    # 32 color indexed PNG
    PNG64 = "png64"    # 64 color indexed PNG
    PNG128 = "png128"  # 128 color indexed PNG
    PNG256 = "png256"  # 256 color indexed PNG
    PNG_RAW = "pngraw" # raw PNG, terrain-rgb only
    JPG70 = "jpg70"    # 70% quality JPG
    JPG80 = "jpg80"    # 80% quality JPG
    JPG90 = "jpg90"    # 90% quality JPG

    def __str__(self) -> str:
        return self.value

    @property
    def is_png(self) -> bool:
        return self.value.startswith("png")

    @property
    def is_jpeg(self) -> bool:
        return self.value.startswith("jpg")

    @property
    def jpeg_quality(self) -> int:
        """Encoder quality for JPEG formats (75 for anything else)."""
        if self.is_jpeg:
            return int(self.value[3:])
        return 75


INDEXED_PNG_FORMATS = frozenset({
    MapFormat.PNG32,
    MapFormat.PNG64,
    MapFormat.PNG128,
    MapFormat.PNG256,
})


def validate_map_format(map_id: MapID, fmt: MapFormat) -> None:
    """
    Reject map source / format combinations the tiles API does not serve.

    Raises:
        ConfigurationError: For an unsupported combination
    """
    map_id = MapID(map_id)
    fmt = MapFormat(fmt)

    if fmt == MapFormat.PNG_RAW and map_id != MapID.TERRAIN_RGB:
        raise ConfigurationError(f"Format {fmt} is only supported by {MapID.TERRAIN_RGB}")

    if map_id == MapID.TERRAIN_RGB and fmt != MapFormat.PNG_RAW:
        raise ConfigurationError(f"{MapID.TERRAIN_RGB} only supports the {MapFormat.PNG_RAW} format")

    if map_id == MapID.SATELLITE and fmt in INDEXED_PNG_FORMATS:
        raise ConfigurationError(f"{MapID.SATELLITE} does not support indexed png output ({fmt})")

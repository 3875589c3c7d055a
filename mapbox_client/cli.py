"""
mapbox-tiles: fetch the raster tiles enclosing two corners, stitch them
into one image and save it.

Usage:
    mapbox-tiles -45.94,166.56 -34.21,183.40 out.png --zoom 6
    mapbox-tiles 46.5,7.9 46.6,8.1 terrain.png --zoom 12
        --map-id mapbox.terrain-rgb --format pngraw --flatten 4500
"""

import argparse
import sys
from typing import List, Optional, Tuple

from .config.config_module import (
    CACHE_DIR_KEY,
    ConfigError,
    LOG_FILE_KEY,
    LOG_LEVEL_KEY,
    TOKEN_KEY,
    config_summary,
    get_config,
    load_config,
    validate_config,
)
from .config.logger_module import initialize_logger, log_debug, log_error, log_info
from .base.base_errors import MapboxError
from .base.base_types import GeoPoint
from .mapbox import Mapbox
from .maps.maps_cache import FileTileCache
from .maps.maps_image import save_image
from .maps.maps_terrain import flatten_elevations
from .maps.maps_tiles import stitch_tiles
from .maps.maps_types import MapFormat, MapID


def parse_location(raw: str) -> GeoPoint:
    """Parse a "lat,lon" argument."""
    try:
        lat, lon = (float(part) for part in raw.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected 'lat,lon', got '{raw}'")
    if not -90.0 <= lat <= 90.0:
        raise argparse.ArgumentTypeError(f"latitude out of range: {lat}")
    return GeoPoint(lat, lon)


def parse_color(raw: str) -> Tuple[int, ...]:
    """Parse an "r,g,b" or "r,g,b,a" argument."""
    try:
        channels = tuple(int(part) for part in raw.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected 'r,g,b[,a]', got '{raw}'")
    if len(channels) not in (3, 4) or not all(0 <= c <= 255 for c in channels):
        raise argparse.ArgumentTypeError(f"expected 3 or 4 channels in 0-255, got '{raw}'")
    return channels


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="mapbox-tiles",
        description="Fetch and stitch the Mapbox raster tiles covering a bounding box",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s -45.94,166.56 -34.21,183.40 nz.png --zoom 6
  %(prog)s -45.94,166.56 -34.21,183.40 nz.jpg --zoom 6 --map-id mapbox.satellite --format jpg90
  %(prog)s 46.5,7.9 46.6,8.1 alps.png --zoom 12 --map-id mapbox.terrain-rgb --format pngraw --flatten 4500
        """
    )

    # Required arguments
    parser.add_argument('corner_a', type=parse_location, help='First corner as lat,lon')
    parser.add_argument('corner_b', type=parse_location, help='Opposite corner as lat,lon')
    parser.add_argument('output', help='Output image path (.png or .jpg)')
    parser.add_argument('--zoom', type=int, required=True, help='Zoom level')

    # Optional arguments
    parser.add_argument('--map-id', choices=[m.value for m in MapID], default=MapID.STREETS.value,
                        help='Map source (default: mapbox.streets)')

    parser.add_argument('--format', dest='fmt', choices=[f.value for f in MapFormat],
                        default=MapFormat.PNG.value,
                        help='Tile format (default: png)')

    parser.add_argument('--high-dpi', action='store_true',
                        help='Fetch 512px @2x tiles')

    parser.add_argument('--parallel', action='store_true',
                        help='Fetch tiles concurrently')

    parser.add_argument('--cache-dir', type=str,
                        help='Directory for the tile cache (default: MAPBOX_CACHE_DIR, no cache if unset)')

    parser.add_argument('--line', action='store_true',
                        help='Draw a line between the two corners')

    parser.add_argument('--line-color', type=parse_color, default=(255, 0, 0),
                        help='Line colour as r,g,b[,a] (default: 255,0,0)')

    parser.add_argument('--flatten', type=float, metavar='MAX_HEIGHT',
                        help='Render Terrain-RGB tiles as greyscale up to MAX_HEIGHT metres')

    parser.add_argument('--token', type=str,
                        help='Mapbox access token (default: MAPBOX_TOKEN)')

    parser.add_argument('--log-level',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level (default: MAPBOX_LOG_LEVEL or INFO)')

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for mapbox-tiles."""
    args = parse_arguments(argv)

    # Load configuration from environment
    load_config()

    initialize_logger(log_level=args.log_level or get_config(LOG_LEVEL_KEY, "INFO"),
                      log_file=get_config(LOG_FILE_KEY))
    log_debug(f"Settings: {config_summary()}")

    if not args.token:
        try:
            validate_config([TOKEN_KEY])
        except ConfigError as e:
            print(f"\n❌ Configuration Error: {e}")
            print(f"\nSet {TOKEN_KEY} in a .env file or the environment, or pass --token.")
            return 1

    cache_dir = args.cache_dir or get_config(CACHE_DIR_KEY)

    try:
        cache = FileTileCache(cache_dir) if cache_dir else None
        with Mapbox(token=args.token, cache=cache) as mapbox:
            log_info(f"Fetching {args.map_id} tiles at zoom {args.zoom}")
            grid = mapbox.maps.get_enclosing_tiles(
                MapID(args.map_id), args.corner_a, args.corner_b, args.zoom,
                fmt=MapFormat(args.fmt), high_dpi=args.high_dpi, parallel=args.parallel,
            )

        composite = stitch_tiles(grid)
        log_info(f"Stitched {len(grid)}x{len(grid[0])} tiles into "
                 f"{composite.width}x{composite.height} pixels")

        if args.flatten is not None:
            composite = flatten_elevations(composite, args.flatten)

        if args.line:
            composite.draw_line(args.corner_a, args.corner_b, args.line_color)

        save_image(composite.image, args.output)
    except (MapboxError, ValueError, OSError) as e:
        log_error(f"Failed to build map: {e}")
        print(f"\n❌ Failed: {e}")
        return 1

    print(f"\n✅ Saved {composite.width}x{composite.height} map to: {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

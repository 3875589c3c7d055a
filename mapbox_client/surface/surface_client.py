"""
Mapbox surface API client.

Samples vector terrain data (elevation contours by default) at points or
along a polyline.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from ..config.logger_module import log_debug
from ..base.base_client import BaseClient, build_params, parse_model
from ..base.base_types import ApiModel, GeoPoint, LatLng, format_coordinates


API_NAME = "surface"
API_VERSION = "v4"
MAP_ID = "mapbox.mapbox-terrain-v2"


class RequestOpts(BaseModel):
    """Options for a surface query; defaults sample contour elevations."""

    layer: str = "contour"
    fields: str = "ele,index"
    geojson: Optional[bool] = None
    points: Optional[str] = None
    encoded_polyline: Optional[str] = None
    zoom: Optional[int] = None
    interpolate: Optional[bool] = None

    def set_points(self, points: List[GeoPoint]) -> None:
        self.points = format_coordinates(points)

    def to_params(self) -> Dict[str, str]:
        return build_params({
            "layer": self.layer,
            "fields": self.fields,
            "geojson": self.geojson,
            "points": self.points,
            "encoded_polyline": self.encoded_polyline,
            "z": self.zoom,
            "interpolate": self.interpolate,
        })


class SurfaceResult(ApiModel):
    id: int = 0
    latlng: LatLng
    elevation: Optional[float] = Field(default=None, alias="ele")

    def point(self) -> GeoPoint:
        return self.latlng.to_point()


class SurfaceResponse(ApiModel):
    results: List[SurfaceResult] = Field(default_factory=list)
    attribution: str = ""


class Surface:
    """Wraps the surface API."""

    def __init__(self, base: BaseClient):
        self.base = base

    def query_points(self, points: List[GeoPoint], opts: Optional[RequestOpts] = None) -> SurfaceResponse:
        """Sample the surface at each of ``points``."""
        opts = (opts or RequestOpts()).model_copy()
        opts.set_points(points)
        return self.query(opts)

    def query(self, opts: Optional[RequestOpts] = None) -> SurfaceResponse:
        """
        Run a surface query with fully prepared options.

        Returns:
            SurfaceResponse with one result per sampled location
        """
        opts = opts or RequestOpts()
        path = f"{API_VERSION}/{API_NAME}/{MAP_ID}.json"

        data = self.base.query_json(path, opts.to_params())
        response = parse_model(SurfaceResponse, data)

        log_debug(f"Surface query returned {len(response.results)} results")
        return response

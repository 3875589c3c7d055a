"""
Mapbox map matching API client.

Snaps a noisy GPS trace to the road network.
See https://docs.mapbox.com/api/navigation/map-matching/
"""

from typing import Dict, List, Optional

from pydantic import BaseModel

from ..config.logger_module import log_debug
from ..base.base_client import BaseClient, build_params, parse_model
from ..base.base_errors import ConfigurationError
from ..base.base_types import GeoPoint, format_coordinates, join_values
from ..directions.directions_client import check_coordinate_count
from ..directions.directions_types import AnnotationType, GeometryType, OverviewType, RoutingProfile
from .map_matching_types import MatchingResponse


API_NAME = "matching"
API_VERSION = "v5"

MIN_COORDINATES = 2
MAX_COORDINATES = 100


class RequestOpts(BaseModel):
    """
    Options for a map matching request.

    ``timestamps`` (Unix seconds) and ``radiuses`` (metres) need one value
    per trace coordinate when given.
    """

    geometries: Optional[GeometryType] = None
    radiuses: Optional[List[float]] = None
    steps: Optional[bool] = None
    overview: Optional[OverviewType] = None
    timestamps: Optional[List[int]] = None
    annotations: Optional[List[AnnotationType]] = None

    def check_path_length(self, count: int) -> None:
        """
        Raises:
            ConfigurationError: If timestamps or radiuses do not match ``count``
        """
        for name in ("timestamps", "radiuses"):
            values = getattr(self, name)
            if values is not None and len(values) != count:
                raise ConfigurationError(
                    f"{name} needs one value per coordinate ({len(values)} given for {count})"
                )

    def to_params(self) -> Dict[str, str]:
        return build_params({
            "geometries": self.geometries,
            "radiuses": join_values(self.radiuses) if self.radiuses else None,
            "steps": self.steps,
            "overview": self.overview,
            "timestamps": join_values(self.timestamps) if self.timestamps else None,
            "annotations": self.annotations,
        })


class MapMatching:
    """Wraps the map matching API."""

    def __init__(self, base: BaseClient):
        self.base = base

    def get_matching(self,
                     path: List[GeoPoint],
                     profile: RoutingProfile = RoutingProfile.DRIVING,
                     opts: Optional[RequestOpts] = None) -> MatchingResponse:
        """
        Match a trace of 2 to 100 coordinates to the road network.

        Args:
            path: Recorded coordinates in travel order
            profile: Routing mode
            opts: Optional request options

        Returns:
            Parsed MatchingResponse

        Raises:
            ConfigurationError: For a bad coordinate count, or timestamps or
                radiuses not matching the path length
        """
        check_coordinate_count(path, MIN_COORDINATES, MAX_COORDINATES)
        opts = opts or RequestOpts()
        opts.check_path_length(len(path))

        data = self.base.query(API_NAME, API_VERSION, RoutingProfile(profile).value,
                               format_coordinates(path), opts.to_params())
        response = parse_model(MatchingResponse, data)

        log_debug(f"Map matching ({profile}) of {len(path)} points returned "
                  f"{len(response.matchings)} matchings, code {response.code}")
        return response

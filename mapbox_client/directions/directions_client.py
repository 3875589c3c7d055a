"""
Mapbox directions API client.
See https://docs.mapbox.com/api/navigation/directions/
"""

from typing import Dict, List, Optional, Sequence, Union

from pydantic import BaseModel

from ..config.logger_module import log_debug
from ..base.base_client import BaseClient, build_params, parse_model
from ..base.base_errors import ConfigurationError
from ..base.base_types import GeoPoint, format_coordinates, join_values
from .directions_types import (
    AnnotationType,
    DirectionsResponse,
    GeometryType,
    OverviewType,
    RoutingProfile,
)


API_NAME = "directions"
API_VERSION = "v5"

MIN_COORDINATES = 2
MAX_COORDINATES = 25

# Radius value letting a coordinate snap to any distance
RADIUS_UNLIMITED = "unlimited"


class RequestOpts(BaseModel):
    """
    Options for a directions request.

    ``radiuses``, ``bearings`` and ``annotations`` hold their encoded query
    values; build them with the ``set_*`` helpers.
    """

    alternatives: Optional[bool] = None
    geometries: Optional[GeometryType] = None
    overview: Optional[OverviewType] = None
    radiuses: Optional[str] = None
    steps: Optional[bool] = None
    continue_straight: Optional[bool] = None
    bearings: Optional[str] = None
    annotations: Optional[str] = None

    def set_radiuses(self, radiuses: Sequence[Union[float, str]]) -> None:
        """Maximum snapping distance per coordinate, in metres or "unlimited"."""
        self.radiuses = join_values(radiuses)

    def set_bearings(self, angles: Sequence[float], deviations: Sequence[float]) -> None:
        """
        Restrict the travel direction at each coordinate.

        Raises:
            ConfigurationError: If the two lists differ in length
        """
        if len(angles) != len(deviations):
            raise ConfigurationError("angle and deviation lists must have the same length")
        self.bearings = ";".join(
            join_values([float(angle), float(deviation)], ",")
            for angle, deviation in zip(angles, deviations)
        )

    def set_annotations(self, annotations: Sequence[AnnotationType]) -> None:
        self.annotations = ",".join(AnnotationType(a).value for a in annotations)

    def to_params(self) -> Dict[str, str]:
        return build_params(self.model_dump(mode="json", exclude_none=True))


def check_coordinate_count(points: Sequence[GeoPoint], minimum: int, maximum: int) -> None:
    if not minimum <= len(points) <= maximum:
        raise ConfigurationError(
            f"between {minimum} and {maximum} coordinates required, got {len(points)}"
        )


class Directions:
    """Wraps the directions API."""

    def __init__(self, base: BaseClient):
        self.base = base

    def get_directions(self,
                       points: List[GeoPoint],
                       profile: RoutingProfile = RoutingProfile.DRIVING,
                       opts: Optional[RequestOpts] = None) -> DirectionsResponse:
        """
        Find routes visiting ``points`` in order.

        Args:
            points: Between 2 and 25 waypoints
            profile: Routing mode
            opts: Optional request options

        Returns:
            Parsed DirectionsResponse

        Raises:
            ConfigurationError: For too few or too many points
        """
        check_coordinate_count(points, MIN_COORDINATES, MAX_COORDINATES)
        opts = opts or RequestOpts()

        data = self.base.query(API_NAME, API_VERSION, RoutingProfile(profile).value,
                               format_coordinates(points), opts.to_params())
        response = parse_model(DirectionsResponse, data)

        log_debug(f"Directions ({profile}) returned {len(response.routes)} routes, code {response.code}")
        return response

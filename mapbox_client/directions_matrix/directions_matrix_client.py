"""
Mapbox directions matrix API client.

Returns travel times (and optionally distances) between every source and
destination among a set of coordinates.
See https://docs.mapbox.com/api/navigation/matrix/
"""

from typing import Dict, List, Optional, Sequence, Union

from pydantic import BaseModel, Field

from ..config.logger_module import log_debug
from ..base.base_client import BaseClient, build_params, parse_model
from ..base.base_errors import ConfigurationError
from ..base.base_types import ApiModel, GeoPoint, format_coordinates, join_values
from ..directions.directions_client import check_coordinate_count
from ..directions.directions_types import AnnotationType, Codes, RoutingProfile, Waypoint


API_NAME = "directions-matrix"
API_VERSION = "v1"

MIN_COORDINATES = 2
MAX_COORDINATES = 25

ALL = "all"

Selection = Union[str, Sequence[int]]


def _selection(indices: Selection) -> str:
    if isinstance(indices, str):
        if indices != ALL:
            raise ConfigurationError(f"expected coordinate indices or '{ALL}', got '{indices}'")
        return ALL
    if not indices:
        raise ConfigurationError("at least one coordinate index required")
    return join_values([int(i) for i in indices])


class RequestOpts(BaseModel):
    """Options for a matrix request; sources and destinations default to all."""

    sources: Optional[str] = None
    destinations: Optional[str] = None
    annotations: Optional[str] = None

    def set_sources(self, indices: Selection) -> None:
        """Use the coordinates at ``indices`` (or "all") as sources."""
        self.sources = _selection(indices)

    def set_destinations(self, indices: Selection) -> None:
        self.destinations = _selection(indices)

    def set_annotations(self, annotations: Sequence[AnnotationType]) -> None:
        self.annotations = ",".join(AnnotationType(a).value for a in annotations)

    def to_params(self) -> Dict[str, str]:
        return build_params(self.model_dump(mode="json", exclude_none=True))


class DirectionsMatrixResponse(ApiModel):
    """
    Matrix of travel durations in seconds (and distances in metres when
    requested), indexed [source][destination]. Pairs without a route are None.
    """

    code: str = ""
    message: Optional[str] = None
    durations: List[List[Optional[float]]] = Field(default_factory=list)
    distances: List[List[Optional[float]]] = Field(default_factory=list)
    sources: List[Waypoint] = Field(default_factory=list)
    destinations: List[Waypoint] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.code == Codes.OK.value


class DirectionsMatrix:
    """Wraps the directions matrix API."""

    def __init__(self, base: BaseClient):
        self.base = base

    def get_matrix(self,
                   points: List[GeoPoint],
                   profile: RoutingProfile = RoutingProfile.DRIVING,
                   opts: Optional[RequestOpts] = None) -> DirectionsMatrixResponse:
        """
        Compute the travel time matrix between ``points``.

        Raises:
            ConfigurationError: For too few or too many points
        """
        check_coordinate_count(points, MIN_COORDINATES, MAX_COORDINATES)
        opts = opts or RequestOpts()

        data = self.base.query(API_NAME, API_VERSION, RoutingProfile(profile).value,
                               format_coordinates(points), opts.to_params())
        response = parse_model(DirectionsMatrixResponse, data)

        log_debug(f"Directions matrix ({profile}) for {len(points)} points, code {response.code}")
        return response

"""
Enums, the route geometry variant and response models of the directions API.

Map matching returns the same route shapes, so it reuses these types.
See https://docs.mapbox.com/api/navigation/directions/
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Tuple

from pydantic import Field, field_validator

from ..base.base_errors import GeometryTypeMismatchError
from ..base.base_types import ApiModel


class RoutingProfile(str, Enum):
    """Routing modes."""

    DRIVING_TRAFFIC = "mapbox/driving-traffic"
    DRIVING = "mapbox/driving"
    WALKING = "mapbox/walking"
    CYCLING = "mapbox/cycling"

    def __str__(self) -> str:
        return self.value


class GeometryType(str, Enum):
    GEOJSON = "geojson"
    POLYLINE = "polyline"
    POLYLINE6 = "polyline6"


class OverviewType(str, Enum):
    FULL = "full"
    SIMPLIFIED = "simplified"
    FALSE = "false"


class AnnotationType(str, Enum):
    DURATION = "duration"
    DISTANCE = "distance"
    SPEED = "speed"
    CONGESTION = "congestion"


class TransportationMode(str, Enum):
    DRIVING = "driving"
    WALKING = "walking"
    FERRY = "ferry"
    CYCLING = "cycling"
    UNACCESSIBLE = "unaccessible"


class StepModifier(str, Enum):
    """Direction change of a maneuver."""

    UTURN = "uturn"
    SHARP_RIGHT = "sharp right"
    RIGHT = "right"
    SLIGHT_RIGHT = "slight right"
    STRAIGHT = "straight"
    SHARP_LEFT = "sharp left"
    LEFT = "left"
    SLIGHT_LEFT = "slight left"


class Codes(str, Enum):
    """Response codes shared by the navigation APIs."""

    OK = "Ok"
    NO_ROUTE = "NoRoute"
    NO_SEGMENT = "NoSegment"
    NO_MATCH = "NoMatch"
    TOO_MANY_COORDINATES = "TooManyCoordinates"
    PROFILE_NOT_FOUND = "ProfileNotFound"
    INVALID_INPUT = "InvalidInput"


Coordinate = Tuple[float, float]


@dataclass(frozen=True)
class RouteGeometry:
    """
    Route geometry as returned by the API.

    The ``geometries`` request option decides the wire shape: an encoded
    polyline string, or a GeoJSON LineString object. Exactly one of
    ``polyline`` and ``coordinates`` is set; the accessors raise
    GeometryTypeMismatchError for the other variant.
    """

    kind: GeometryType
    polyline: Optional[str] = None
    coordinates: Optional[Tuple[Coordinate, ...]] = None

    @classmethod
    def from_polyline(cls, encoded: str, kind: GeometryType = GeometryType.POLYLINE) -> "RouteGeometry":
        return cls(kind=kind, polyline=encoded)

    @classmethod
    def from_coordinates(cls, coordinates) -> "RouteGeometry":
        points = tuple((float(lon), float(lat)) for lon, lat, *_ in coordinates)
        return cls(kind=GeometryType.GEOJSON, coordinates=points)

    @classmethod
    def parse(cls, value: Any) -> "RouteGeometry":
        """Build the variant matching a raw JSON geometry value."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.from_polyline(value)
        if isinstance(value, dict) and value.get("type") == "LineString":
            return cls.from_coordinates(value.get("coordinates") or [])
        raise ValueError(f"unsupported route geometry: {value!r}")

    @property
    def is_polyline(self) -> bool:
        return self.polyline is not None

    def as_polyline(self) -> str:
        """Return the encoded polyline string."""
        if self.polyline is None:
            raise GeometryTypeMismatchError(f"geometry is {self.kind.value}, not an encoded polyline")
        return self.polyline

    def as_coordinates(self) -> List[Coordinate]:
        """Return the LineString as [(lon, lat), ...]."""
        if self.coordinates is None:
            raise GeometryTypeMismatchError(f"geometry is {self.kind.value}, not GeoJSON")
        return list(self.coordinates)


def _parse_geometry(value: Any) -> Optional[RouteGeometry]:
    if value is None:
        return None
    return RouteGeometry.parse(value)


class Waypoint(ApiModel):
    """An input coordinate snapped to the road network."""

    name: str = ""
    location: List[float] = Field(default_factory=list)
    distance: Optional[float] = None


class Annotation(ApiModel):
    """Per-segment details along a leg."""

    distance: List[float] = Field(default_factory=list)
    duration: List[float] = Field(default_factory=list)
    speed: List[float] = Field(default_factory=list)
    congestion: List[str] = Field(default_factory=list)


class Lane(ApiModel):
    valid: bool = False
    indications: List[str] = Field(default_factory=list)


class Intersection(ApiModel):
    location: List[float] = Field(default_factory=list)
    bearings: List[float] = Field(default_factory=list)
    entry: List[bool] = Field(default_factory=list)
    in_index: Optional[int] = Field(default=None, alias="in")
    out_index: Optional[int] = Field(default=None, alias="out")
    lanes: List[Lane] = Field(default_factory=list)


class StepManeuver(ApiModel):
    location: List[float] = Field(default_factory=list)
    bearing_before: float = 0.0
    bearing_after: float = 0.0
    instruction: str = ""
    type: str = ""
    modifier: Optional[StepModifier] = None


class RouteStep(ApiModel):
    """One maneuver and the travel up to the next step."""

    distance: float = 0.0
    duration: float = 0.0
    geometry: Optional[RouteGeometry] = None
    name: str = ""
    ref: Optional[str] = None
    destinations: Optional[str] = None
    mode: str = ""
    maneuver: Optional[StepManeuver] = None
    intersections: List[Intersection] = Field(default_factory=list)

    @field_validator("geometry", mode="before")
    @classmethod
    def parse_geometry(cls, value: Any) -> Optional[RouteGeometry]:
        return _parse_geometry(value)


class RouteLeg(ApiModel):
    """The route between two waypoints."""

    distance: float = 0.0
    duration: float = 0.0
    summary: str = ""
    steps: List[RouteStep] = Field(default_factory=list)
    annotation: Optional[Annotation] = None


class Route(ApiModel):
    """A route through (potentially multiple) waypoints."""

    distance: float = 0.0
    duration: float = 0.0
    weight: Optional[float] = None
    weight_name: Optional[str] = None
    geometry: Optional[RouteGeometry] = None
    legs: List[RouteLeg] = Field(default_factory=list)

    @field_validator("geometry", mode="before")
    @classmethod
    def parse_geometry(cls, value: Any) -> Optional[RouteGeometry]:
        return _parse_geometry(value)


class DirectionsResponse(ApiModel):
    code: str = ""
    message: Optional[str] = None
    waypoints: List[Waypoint] = Field(default_factory=list)
    routes: List[Route] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.code == Codes.OK.value

"""
Mapbox directions API.

Main classes:
- Directions: Route lookup between waypoints
- RequestOpts: Request options
- RouteGeometry: Encoded polyline or GeoJSON route geometry

Errors:
- GeometryTypeMismatchError: Raised by RouteGeometry accessors
"""

from ..base.base_errors import GeometryTypeMismatchError
from .directions_client import RADIUS_UNLIMITED, Directions, RequestOpts
from .directions_types import (
    Annotation,
    AnnotationType,
    Codes,
    DirectionsResponse,
    GeometryType,
    Intersection,
    Lane,
    OverviewType,
    Route,
    RouteGeometry,
    RouteLeg,
    RouteStep,
    RoutingProfile,
    StepManeuver,
    StepModifier,
    TransportationMode,
    Waypoint,
)

__all__ = [
    # Main classes
    "Directions",
    "RequestOpts",
    "RouteGeometry",
    "DirectionsResponse",
    "Route",
    "RouteLeg",
    "RouteStep",
    "StepManeuver",
    "Intersection",
    "Lane",
    "Annotation",
    "Waypoint",

    # Enums
    "RoutingProfile",
    "GeometryType",
    "OverviewType",
    "AnnotationType",
    "StepModifier",
    "TransportationMode",
    "Codes",
    "RADIUS_UNLIMITED",

    # Errors
    "GeometryTypeMismatchError",
]

"""
Response models of the map matching API.
See https://docs.mapbox.com/api/navigation/map-matching/
"""

from typing import Any, List, Optional

from pydantic import Field, field_validator

from ..base.base_types import ApiModel
from ..directions.directions_types import Codes, RouteGeometry, RouteLeg


# Match legs have the shape of directions route legs
MatchingLeg = RouteLeg


class Matching(ApiModel):
    """A route the trace was snapped to."""

    confidence: float = 0.0
    distance: float = 0.0
    duration: float = 0.0
    weight: Optional[float] = None
    weight_name: Optional[str] = None
    geometry: Optional[RouteGeometry] = None
    legs: List[MatchingLeg] = Field(default_factory=list)

    @field_validator("geometry", mode="before")
    @classmethod
    def parse_geometry(cls, value: Any) -> Optional[RouteGeometry]:
        if value is None:
            return None
        return RouteGeometry.parse(value)


class Tracepoint(ApiModel):
    """An input coordinate and where it landed on the matched route."""

    name: str = ""
    location: List[float] = Field(default_factory=list)
    waypoint_index: Optional[int] = None
    matchings_index: Optional[int] = None
    alternatives_count: Optional[int] = None


class MatchingResponse(ApiModel):
    """
    Matched routes for a trace.

    ``tracepoints`` has one entry per input coordinate; coordinates dropped
    as outliers are None.
    """

    code: str = ""
    message: Optional[str] = None
    matchings: List[Matching] = Field(default_factory=list)
    tracepoints: List[Optional[Tracepoint]] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.code == Codes.OK.value

"""
Shared value types and response models for the Mapbox APIs.

GeoPoint and BoundingBox are plain immutable values built per call.
The feature models mirror the GeoJSON shapes returned by the geocoding
API and are parsed with pydantic.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class GeoPoint:
    """A geographic location in degrees."""

    latitude: float
    longitude: float

    def to_lon_lat(self) -> str:
        """Format as the "lon,lat" pair used in Mapbox request paths."""
        return f"{self.longitude:f},{self.latitude:f}"


# Name used throughout the Mapbox documentation
Location = GeoPoint


@dataclass(frozen=True)
class BoundingBox:
    """A geographic box defined by two corner points in any order."""

    a: GeoPoint
    b: GeoPoint

    @property
    def south(self) -> float:
        return min(self.a.latitude, self.b.latitude)

    @property
    def north(self) -> float:
        return max(self.a.latitude, self.b.latitude)

    @property
    def west(self) -> float:
        return min(self.a.longitude, self.b.longitude)

    @property
    def east(self) -> float:
        return max(self.a.longitude, self.b.longitude)

    def to_query(self) -> str:
        """Format as "minLon,minLat,maxLon,maxLat"."""
        return f"{self.west:f},{self.south:f},{self.east:f},{self.north:f}"


def format_coordinates(points: Sequence[GeoPoint]) -> str:
    """Join points into the "lon,lat;lon,lat" path segment."""
    return ";".join(p.to_lon_lat() for p in points)


def join_values(values: Sequence[Any], separator: str = ";") -> str:
    """Join query parameter list values, formatting floats like the API expects."""
    parts = []
    for value in values:
        if isinstance(value, float):
            parts.append(f"{value:f}")
        else:
            parts.append(str(value))
    return separator.join(parts)


class ApiModel(BaseModel):
    """Base for response models; unknown fields are ignored."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class LatLng(ApiModel):
    """A {"lat": ..., "lng": ...} object."""

    lat: float
    lng: float

    def to_point(self) -> GeoPoint:
        return GeoPoint(self.lat, self.lng)


class Geometry(ApiModel):
    """Point geometry of a geocoding feature."""

    type: str = "Point"
    coordinates: List[float] = Field(default_factory=list)


class Context(ApiModel):
    """A parent feature (region, country...) of a geocoding result."""

    id: str
    text: str = ""
    short_code: Optional[str] = None
    wikidata: Optional[str] = None


class Feature(ApiModel):
    """A single GeoJSON feature returned by the geocoding API."""

    id: str = ""
    type: str = "Feature"
    text: str = ""
    place_name: str = ""
    place_type: List[str] = Field(default_factory=list)
    relevance: float = 0.0
    properties: Dict[str, Any] = Field(default_factory=dict)
    bbox: Optional[List[float]] = None
    center: List[float] = Field(default_factory=list)
    geometry: Optional[Geometry] = None
    context: List[Context] = Field(default_factory=list)

    def center_point(self) -> Optional[GeoPoint]:
        """Return the feature centre as a GeoPoint ([lon, lat] on the wire)."""
        if len(self.center) < 2:
            return None
        return GeoPoint(latitude=self.center[1], longitude=self.center[0])


class FeatureCollection(ApiModel):
    """A GeoJSON feature collection."""

    type: str = "FeatureCollection"
    features: List[Feature] = Field(default_factory=list)
    attribution: str = ""

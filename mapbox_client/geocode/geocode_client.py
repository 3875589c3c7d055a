"""
Mapbox geocoding API client.

Forward geocoding turns a place name into features, reverse geocoding
turns a location into the place names around it.
See https://docs.mapbox.com/api/search/geocoding/
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from ..config.logger_module import log_debug
from ..base.base_client import BaseClient, build_params, parse_model
from ..base.base_types import BoundingBox, FeatureCollection, GeoPoint


API_NAME = "geocoding"
API_VERSION = "v5"
API_MODE = "mapbox.places"


class GeocodeType(str, Enum):
    """Feature types a geocoding query can be restricted to."""

    COUNTRY = "country"
    REGION = "region"
    POSTCODE = "postcode"
    DISTRICT = "district"
    PLACE = "place"
    LOCALITY = "locality"
    NEIGHBORHOOD = "neighborhood"
    ADDRESS = "address"
    POI = "poi"

    def __str__(self) -> str:
        return self.value


class ForwardRequestOpts(BaseModel):
    """Options for a forward geocoding lookup."""

    country: Optional[str] = None
    proximity: Optional[GeoPoint] = None
    types: List[GeocodeType] = Field(default_factory=list)
    autocomplete: Optional[bool] = None
    bbox: Optional[BoundingBox] = None
    limit: Optional[int] = None
    language: Optional[str] = None

    def to_params(self):
        return build_params({
            "country": self.country,
            "proximity": self.proximity.to_lon_lat() if self.proximity else None,
            "types": self.types,
            "autocomplete": self.autocomplete,
            "bbox": self.bbox.to_query() if self.bbox else None,
            "limit": self.limit,
            "language": self.language,
        })


class ReverseRequestOpts(BaseModel):
    """Options for a reverse geocoding lookup."""

    types: List[GeocodeType] = Field(default_factory=list)
    limit: Optional[int] = None
    language: Optional[str] = None

    def to_params(self):
        return build_params({
            "types": self.types,
            "limit": self.limit,
            "language": self.language,
        })


class ForwardResponse(FeatureCollection):
    """Features matching a place name; ``query`` holds the tokenised input."""

    query: List[str] = Field(default_factory=list)


class ReverseResponse(FeatureCollection):
    """Features around a location; ``query`` holds [lon, lat]."""

    query: List[float] = Field(default_factory=list)


class Geocode:
    """Wraps the geocoding API."""

    def __init__(self, base: BaseClient):
        self.base = base

    def forward(self, place: str, opts: Optional[ForwardRequestOpts] = None) -> ForwardResponse:
        """
        Find locations matching a place name.

        Args:
            place: Free-form search text
            opts: Optional request options

        Returns:
            ForwardResponse with features ordered by relevance
        """
        opts = opts or ForwardRequestOpts()
        query = place.replace(" ", "+")

        data = self.base.query(API_NAME, API_VERSION, API_MODE, f"{query}.json", opts.to_params())
        response = parse_model(ForwardResponse, data)

        log_debug(f"Forward geocode '{place}' returned {len(response.features)} features")
        return response

    def reverse(self, point: GeoPoint, opts: Optional[ReverseRequestOpts] = None) -> ReverseResponse:
        """Find place names around a location."""
        opts = opts or ReverseRequestOpts()

        data = self.base.query(API_NAME, API_VERSION, API_MODE, f"{point.to_lon_lat()}.json",
                               opts.to_params())
        response = parse_model(ReverseResponse, data)

        log_debug(f"Reverse geocode {point.to_lon_lat()} returned {len(response.features)} features")
        return response

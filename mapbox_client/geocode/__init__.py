"""
Mapbox geocoding API.

Main classes:
- Geocode: Forward and reverse lookups
- ForwardRequestOpts / ReverseRequestOpts: Request options
"""

from .geocode_client import (
    ForwardRequestOpts,
    ForwardResponse,
    Geocode,
    GeocodeType,
    ReverseRequestOpts,
    ReverseResponse,
)

__all__ = [
    # Main classes
    "Geocode",
    "GeocodeType",
    "ForwardRequestOpts",
    "ReverseRequestOpts",
    "ForwardResponse",
    "ReverseResponse",
]

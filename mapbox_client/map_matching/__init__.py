"""
Mapbox map matching API.

Main classes:
- MapMatching: Snap GPS traces to the road network
- RequestOpts: Request options
"""

from .map_matching_client import MAX_COORDINATES, MapMatching, RequestOpts
from .map_matching_types import Matching, MatchingLeg, MatchingResponse, Tracepoint

__all__ = [
    # Main classes
    "MapMatching",
    "RequestOpts",
    "MatchingResponse",
    "Matching",
    "MatchingLeg",
    "Tracepoint",
    "MAX_COORDINATES",
]

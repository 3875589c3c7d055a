"""
Mapbox surface API.

Main classes:
- Surface: Terrain sampling at points
- RequestOpts: Layer, fields and sampling options
"""

from .surface_client import RequestOpts, Surface, SurfaceResponse, SurfaceResult

__all__ = [
    # Main classes
    "Surface",
    "RequestOpts",
    "SurfaceResponse",
    "SurfaceResult",
]

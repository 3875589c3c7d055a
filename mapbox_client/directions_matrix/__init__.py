"""
Mapbox directions matrix API.

Main classes:
- DirectionsMatrix: Travel time matrix between coordinates
- RequestOpts: Source / destination selection
"""

from .directions_matrix_client import ALL, DirectionsMatrix, DirectionsMatrixResponse, RequestOpts

__all__ = [
    # Main classes
    "DirectionsMatrix",
    "DirectionsMatrixResponse",
    "RequestOpts",
    "ALL",
]

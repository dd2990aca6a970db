"""Geometry utilities for room detection.

This module provides polygon metrics for detected rooms and the unit
formatting used to label them.
"""

from .polygon import (
    point_in_polygon,
    polygon_area,
    polygon_centroid,
    room_outline,
    room_perimeter,
    signed_polygon_area,
)
from .units import format_area, format_length

__all__ = [
    "format_area",
    "format_length",
    "point_in_polygon",
    "polygon_area",
    "polygon_centroid",
    "room_outline",
    "room_perimeter",
    "signed_polygon_area",
]

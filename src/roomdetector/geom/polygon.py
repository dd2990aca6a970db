"""Polygon geometry utilities for room calculations.

This module provides the metrics computed for every candidate room
(shoelace area, vertex centroid), the ray-casting containment test,
and Shapely-based outline and perimeter helpers used for reporting.
"""

from __future__ import annotations

import logging
from typing import Sequence

from shapely.geometry import Polygon

from ..core.model import Point, Room

LOGGER = logging.getLogger(__name__)

# Global parameters for algorithm sensitivity
MIN_POLYGON_AREA = 1e-6  # Minimum area for valid outlines


def signed_polygon_area(points: Sequence[Point]) -> float:
    """Shoelace area with sign: positive for counter-clockwise vertex order.

    Args:
        points: Polygon vertices, first vertex not repeated at the end.

    Returns:
        Signed area, 0.0 for fewer than three vertices.
    """
    n = len(points)
    if n < 3:
        return 0.0

    total = 0.0
    for i in range(n):
        p = points[i]
        q = points[(i + 1) % n]
        total += p.x * q.z - q.x * p.z
    return total / 2.0


def polygon_area(points: Sequence[Point]) -> float:
    """Area of a polygon, independent of winding and starting vertex."""
    return abs(signed_polygon_area(points))


def polygon_centroid(points: Sequence[Point]) -> Point:
    """Arithmetic mean of the vertices.

    This is the vertex centroid, an approximation of the area centroid
    that is adequate for roughly regular room shapes.
    """
    if not points:
        return Point(0.0, 0.0)
    n = len(points)
    return Point(
        sum(p.x for p in points) / n,
        sum(p.z for p in points) / n,
    )


def point_in_polygon(point: Point, polygon: Sequence[Point]) -> bool:
    """Ray-casting parity test.

    Args:
        point: Point to classify.
        polygon: Polygon vertices.

    Returns:
        True if the point is inside; False for fewer than three vertices.
    """
    n = len(polygon)
    if n < 3:
        return False

    inside = False
    j = n - 1
    for i in range(n):
        xi, zi = polygon[i].x, polygon[i].z
        xj, zj = polygon[j].x, polygon[j].z
        # The first clause guarantees zj != zi before dividing
        if (zi > point.z) != (zj > point.z):
            x_cross = (xj - xi) * (point.z - zi) / (zj - zi) + xi
            if point.x < x_cross:
                inside = not inside
        j = i
    return inside


def room_outline(room: Room) -> Polygon | None:
    """Room boundary as a Shapely polygon.

    Args:
        room: Detected room.

    Returns:
        Shapely Polygon, or None if the outline is degenerate.
    """
    if room.vertex_count < 3:
        return None

    polygon = Polygon([(p.x, p.z) for p in room.points])
    if not polygon.is_valid:
        # Try to fix with buffer(0)
        polygon = polygon.buffer(0)

    if polygon.is_empty or polygon.area <= MIN_POLYGON_AREA:
        LOGGER.debug("Room %s has a degenerate outline", room.id)
        return None
    return polygon


def room_perimeter(room: Room) -> float:
    """Room perimeter, or 0.0 if the outline is degenerate."""
    polygon = room_outline(room)
    if polygon is None:
        return 0.0
    return polygon.length

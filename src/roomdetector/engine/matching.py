"""Mapping from a room boundary back to the walls that produced it.

A room edge either coincides with a whole wall, or it is a sub-segment of
a longer wall that borders more than one room.
"""

from __future__ import annotations

import math
from typing import Iterable, List, Optional

from ..config import MATCH_THRESHOLD, MIN_MATCH_WALL_LENGTH
from ..core.graph import is_room_wall
from ..core.model import Point, Room, Wall


def _close(a: Point, b: Point, tolerance: float) -> bool:
    return abs(a.x - b.x) < tolerance and abs(a.z - b.z) < tolerance


def wall_matches_edge(wall: Wall, p1: Point, p2: Point, tolerance: float = MATCH_THRESHOLD) -> bool:
    """Check whether ``wall`` coincides with edge ``p1 -> p2`` in either direction."""
    forward = _close(wall.start, p1, tolerance) and _close(wall.end, p2, tolerance)
    backward = _close(wall.start, p2, tolerance) and _close(wall.end, p1, tolerance)
    return forward or backward


def wall_contains_edge(wall: Wall, p1: Point, p2: Point, tolerance: float = MATCH_THRESHOLD) -> bool:
    """Check whether edge ``p1 -> p2`` lies along ``wall``.

    The edge must be parallel to the wall, both edge endpoints must lie
    within ``tolerance`` of the wall's line, and both must project inside
    the wall, with a margin of ``tolerance`` scaled by the wall length.
    """
    wall_dx = wall.end.x - wall.start.x
    wall_dz = wall.end.z - wall.start.z
    edge_dx = p2.x - p1.x
    edge_dz = p2.z - p1.z

    cross = wall_dx * edge_dz - wall_dz * edge_dx
    if abs(cross) > tolerance:
        return False

    wall_length = math.hypot(wall_dx, wall_dz)
    if wall_length < MIN_MATCH_WALL_LENGTH:
        return False

    norm_x = -wall_dz / wall_length
    norm_z = wall_dx / wall_length
    dist1 = abs(norm_x * (p1.x - wall.start.x) + norm_z * (p1.z - wall.start.z))
    dist2 = abs(norm_x * (p2.x - wall.start.x) + norm_z * (p2.z - wall.start.z))
    if dist1 > tolerance or dist2 > tolerance:
        return False

    length_sq = wall_length * wall_length
    t1 = ((p1.x - wall.start.x) * wall_dx + (p1.z - wall.start.z) * wall_dz) / length_sq
    t2 = ((p2.x - wall.start.x) * wall_dx + (p2.z - wall.start.z) * wall_dz) / length_sq
    margin = tolerance / wall_length
    return -margin <= t1 <= 1 + margin and -margin <= t2 <= 1 + margin


def find_walls_for_room(
    room: Optional[Room],
    walls: Optional[Iterable[Wall]],
    tolerance: float = MATCH_THRESHOLD,
) -> List[str]:
    """Find the ids of the walls forming a room's boundary.

    Args:
        room: Detected room; None yields an empty list.
        walls: All walls of the scene; non-room walls are ignored.
        tolerance: Matching tolerance, looser than the graph snap threshold
            so rooms still match their walls after small drags.

    Returns:
        Wall ids in room-edge order, each id at most once.
    """
    if room is None or not room.points or walls is None:
        return []

    candidates = [wall for wall in walls if is_room_wall(wall)]
    points = room.points
    wall_ids: List[str] = []

    for i, p1 in enumerate(points):
        p2 = points[(i + 1) % len(points)]
        for wall in candidates:
            if wall.id in wall_ids:
                continue
            if wall_matches_edge(wall, p1, p2, tolerance) or wall_contains_edge(
                wall, p1, p2, tolerance
            ):
                wall_ids.append(wall.id)

    return wall_ids

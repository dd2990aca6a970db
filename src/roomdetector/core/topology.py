"""Topology analysis over walls and rooms.

This module answers connectivity questions directly on the wall list
(not on the snapped node graph): which walls touch each other, including
T-junctions where one wall butts into the middle of another, and which
detected rooms share a wall.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Dict, Iterable, List, Sequence, Set

import networkx as nx

from ..config import CONNECT_THRESHOLD
from .graph import valid_walls
from .model import Point, Room, Wall

LOGGER = logging.getLogger(__name__)


def point_on_segment(p: Point, a: Point, b: Point, threshold: float) -> bool:
    """Check if ``p`` lies within ``threshold`` of segment ``ab``.

    The projection of ``p`` onto the segment is clamped to [0, 1], so the
    closest point may be an endpoint. A zero-length segment degenerates to
    a point-to-point distance.
    """
    dx = b.x - a.x
    dz = b.z - a.z
    length_sq = dx * dx + dz * dz
    if length_sq == 0:
        return p.distance_to(a) < threshold

    t = ((p.x - a.x) * dx + (p.z - a.z) * dz) / length_sq
    t = max(0.0, min(1.0, t))
    projection = Point(a.x + t * dx, a.z + t * dz)
    return p.distance_to(projection) < threshold


def walls_touch(wall: Wall, other: Wall, threshold: float = CONNECT_THRESHOLD) -> bool:
    """Check if two walls share an endpoint or meet in a T-junction."""
    return (
        wall.start.distance_to(other.start) < threshold
        or wall.start.distance_to(other.end) < threshold
        or wall.end.distance_to(other.start) < threshold
        or wall.end.distance_to(other.end) < threshold
        or point_on_segment(other.start, wall.start, wall.end, threshold)
        or point_on_segment(other.end, wall.start, wall.end, threshold)
        or point_on_segment(wall.start, other.start, other.end, threshold)
        or point_on_segment(wall.end, other.start, other.end, threshold)
    )


def find_connected_walls(
    starting_wall_ids: Iterable[str],
    walls: Iterable[Wall],
    threshold: float = CONNECT_THRESHOLD,
) -> List[str]:
    """Breadth-first search for every wall transitively touching a seed set.

    Args:
        starting_wall_ids: Seed wall ids (e.g. the walls of one room).
        walls: All walls of the scene; non-room walls are ignored.
        threshold: Contact distance for endpoints and T-junctions.

    Returns:
        Wall ids in discovery order, seeds first. Seeds that name no valid
        wall are returned but not expanded.
    """
    candidates = valid_walls(walls)
    by_id: Dict[str, Wall] = {}
    for wall in candidates:
        by_id.setdefault(wall.id, wall)

    found: List[str] = []
    visited: Set[str] = set()
    for wall_id in starting_wall_ids:
        if wall_id not in visited:
            visited.add(wall_id)
            found.append(wall_id)

    queue = deque(found)
    while queue:
        wall = by_id.get(queue.popleft())
        if wall is None:
            continue

        for other in candidates:
            if other.id in visited:
                continue
            if walls_touch(wall, other, threshold):
                visited.add(other.id)
                found.append(other.id)
                queue.append(other.id)

    return found


def build_wall_contact_graph(walls: Iterable[Wall], threshold: float = CONNECT_THRESHOLD) -> nx.Graph:
    """Build a graph with one node per room wall and an edge per contact.

    Args:
        walls: All walls; non-room walls are ignored.
        threshold: Contact distance for endpoints and T-junctions.

    Returns:
        NetworkX Graph keyed by wall id.
    """
    candidates = valid_walls(walls)
    G = nx.Graph()

    for wall in candidates:
        G.add_node(wall.id, length=wall.length, floor_level=wall.floor_level)

    for i, wall in enumerate(candidates):
        for other in candidates[i + 1 :]:
            if wall.id != other.id and walls_touch(wall, other, threshold):
                G.add_edge(wall.id, other.id)

    return G


def wall_components(walls: Iterable[Wall], threshold: float = CONNECT_THRESHOLD) -> List[Set[str]]:
    """Groups of mutually connected walls, largest group first."""
    G = build_wall_contact_graph(walls, threshold)
    return sorted(nx.connected_components(G), key=len, reverse=True)


def build_room_graph(rooms: Sequence[Room], walls: Sequence[Wall]) -> nx.Graph:
    """Build a graph representing room adjacency.

    Creates a NetworkX graph where nodes are rooms and an edge joins two
    rooms bounded by at least one common wall.

    Args:
        rooms: Detected rooms.
        walls: Walls the rooms were detected from.

    Returns:
        NetworkX Graph with room adjacency; edges carry ``wall_ids``.
    """
    from ..engine.matching import find_walls_for_room

    G = nx.Graph()
    room_walls: Dict[str, Set[str]] = {}

    for room in rooms:
        G.add_node(room.id, area=room.area, floor_level=room.floor_level)
        room_walls[room.id] = set(find_walls_for_room(room, walls))

    for i, room in enumerate(rooms):
        for other in rooms[i + 1 :]:
            shared = room_walls[room.id] & room_walls[other.id]
            if shared:
                G.add_edge(room.id, other.id, wall_ids=tuple(sorted(shared)))

    LOGGER.debug("Room graph: %d rooms, %d adjacencies", G.number_of_nodes(), G.number_of_edges())
    return G

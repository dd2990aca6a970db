"""Core API for room detection.

This module provides the main interface of the package: detecting rooms
from a wall list, filtering them by area, and the on-demand queries used
by selection features (connected walls, walls of a room).
"""

from __future__ import annotations

import logging
import time
from collections import defaultdict
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from ..config import CONNECT_THRESHOLD, MATCH_THRESHOLD, MIN_ROOM_WALLS
from ..core import topology
from ..core.graph import WallGraph, build_wall_graph, valid_walls
from ..core.model import Cycle, DetectionOptions, Room, Wall
from ..geom.polygon import polygon_area, polygon_centroid
from . import matching
from .cycles import find_cycles
from .validators import WallLike, ensure_walls, resolve_options

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoomSummary:
    """Aggregate figures for a set of rooms.

    Attributes:
        count: Number of rooms.
        total_area: Sum of room areas.
        largest: Room with the largest area, if any.
    """

    count: int
    total_area: float
    largest: Optional[Room]


def _cycle_to_room(graph: WallGraph, cycle: Cycle, room_id: str) -> Room:
    points = tuple(graph.position(node_id) for node_id in cycle)
    return Room(
        id=room_id,
        points=points,
        area=polygon_area(points),
        center=polygon_centroid(points),
    )


def filter_rooms(rooms: Iterable[Room], options: Optional[DetectionOptions] = None) -> List[Room]:
    """Keep rooms whose area lies within the options' band (inclusive).

    Slivers left by snapping fall below the band; the outline of a whole
    plot falls above it.
    """
    options = options or DetectionOptions()
    return [room for room in rooms if options.min_area <= room.area <= options.max_area]


def detect_rooms(
    walls: Optional[Iterable[WallLike]],
    options: Optional[DetectionOptions] = None,
    *,
    min_area: Optional[float] = None,
    max_area: Optional[float] = None,
) -> List[Room]:
    """Detect enclosed rooms from a list of walls.

    Args:
        walls: Walls or raw wall mappings. Only user-drawn and preset walls
            are considered.
        options: Area band; defaults to 0.5..500.
        min_area: Override for ``options.min_area``.
        max_area: Override for ``options.max_area``.

    Returns:
        Rooms with fresh ids, in discovery order. Empty when fewer than
        three valid walls are given.

    Raises:
        InvalidWallData: If a raw wall mapping is malformed.
        ValueError: If the area band is invalid.
    """
    options = resolve_options(options, min_area, max_area)
    candidates = valid_walls(ensure_walls(walls))
    if len(candidates) < MIN_ROOM_WALLS:
        LOGGER.debug("Only %d valid walls, no room possible", len(candidates))
        return []

    graph = build_wall_graph(candidates)
    cycles = find_cycles(graph)

    stamp = int(time.time() * 1000)
    rooms = [
        _cycle_to_room(graph, cycle, f"room-{stamp}-{index}")
        for index, cycle in enumerate(cycles)
    ]
    kept = filter_rooms(rooms, options)

    LOGGER.debug(
        "Detected %d rooms from %d walls (%d candidates outside %.2f..%.2f)",
        len(kept),
        len(candidates),
        len(rooms) - len(kept),
        options.min_area,
        options.max_area,
    )
    return kept


def detect_rooms_by_floor(
    walls: Optional[Iterable[WallLike]],
    options: Optional[DetectionOptions] = None,
) -> Dict[int, List[Room]]:
    """Detect rooms separately on every floor level.

    Args:
        walls: Walls of all floors.
        options: Area band applied on every floor.

    Returns:
        Mapping floor level -> rooms tagged with that level, in ascending
        floor order. Every floor that has walls is present.
    """
    floors: Dict[int, List[Wall]] = defaultdict(list)
    for wall in ensure_walls(walls):
        floors[wall.floor_level].append(wall)

    result: Dict[int, List[Room]] = {}
    for level in sorted(floors):
        rooms = detect_rooms(floors[level], options)
        result[level] = [replace(room, floor_level=level) for room in rooms]
    return result


def summarize_rooms(rooms: Sequence[Room]) -> RoomSummary:
    """Count rooms and total their area."""
    largest = max(rooms, key=lambda room: room.area, default=None)
    return RoomSummary(
        count=len(rooms),
        total_area=sum(room.area for room in rooms),
        largest=largest,
    )


def find_connected_walls(
    starting_wall_ids: Iterable[str],
    walls: Optional[Iterable[WallLike]],
    threshold: float = CONNECT_THRESHOLD,
) -> List[str]:
    """All wall ids transitively touching the starting walls."""
    return topology.find_connected_walls(starting_wall_ids, ensure_walls(walls), threshold)


def find_walls_for_room(
    room: Optional[Room],
    walls: Optional[Iterable[WallLike]],
    tolerance: float = MATCH_THRESHOLD,
) -> List[str]:
    """Ids of the walls bounding a room."""
    return matching.find_walls_for_room(room, ensure_walls(walls), tolerance)


def room_wall_colors(
    rooms: Iterable[Room],
    room_styles: Mapping[str, Mapping[str, Any]],
    walls: Optional[Iterable[WallLike]],
) -> Dict[str, str]:
    """Colour every wall bounding a styled room.

    Args:
        rooms: Detected rooms.
        room_styles: Mapping room id -> style; only ``wall_color`` is read.
        walls: Walls the rooms were detected from.

    Returns:
        Mapping wall id -> colour. A wall shared by two styled rooms takes
        the colour of the later room.
    """
    wall_list = ensure_walls(walls)
    colors: Dict[str, str] = {}
    for room in rooms:
        color = room_styles.get(room.id, {}).get("wall_color")
        if not color:
            continue
        for wall_id in matching.find_walls_for_room(room, wall_list):
            colors[wall_id] = color
    return colors

"""Core data models for room detection.

This module defines the value types shared by the detection pipeline:
points on the ground plane, walls drawn in the editor, snapped graph
nodes, and the rooms derived from them.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from ..config import (
    DEFAULT_MAX_AREA,
    DEFAULT_MIN_AREA,
    DEFAULT_WALL_HEIGHT,
    DEFAULT_WALL_THICKNESS,
)

# Ordered node ids of a closed walk, each node once
Cycle = Tuple[int, ...]


@dataclass(frozen=True)
class Point:
    """Represents a 2D point on the ground plane.

    Attributes:
        x: The x-coordinate of the point.
        z: The z-coordinate of the point.
    """

    x: float
    z: float

    def distance_to(self, other: Point) -> float:
        """Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.z - other.z)


@dataclass(frozen=True)
class Wall:
    """Represents a straight wall segment owned by the floor-plan editor.

    Attributes:
        id: Identifier; its prefix tells user-drawn or preset walls apart
            from boundary segments.
        start: Starting point of the wall.
        end: Ending point of the wall.
        thickness: Wall thickness.
        height: Wall height.
        floor_level: Storey the wall belongs to (0 = ground floor).
    """

    id: str
    start: Point
    end: Point
    thickness: float = DEFAULT_WALL_THICKNESS
    height: float = DEFAULT_WALL_HEIGHT
    floor_level: int = 0

    @property
    def length(self) -> float:
        return self.start.distance_to(self.end)


@dataclass
class Node:
    """A graph vertex produced by snap-merging nearby wall endpoints.

    Attributes:
        pos: Position of the first endpoint that created the node.
        neighbors: Ids of adjacent nodes, without duplicates.
    """

    pos: Point
    neighbors: List[int] = field(default_factory=list)


@dataclass(frozen=True)
class Room:
    """Represents an enclosed area derived from wall topology.

    Rooms carry no identity across detection runs: every run generates
    fresh ids, only the geometry is stable for a stable wall set.

    Attributes:
        id: Generated identifier.
        points: Ordered polygon vertices.
        area: Enclosed area.
        center: Vertex average of the polygon (not the area centroid).
        floor_level: Storey the room was detected on.
    """

    id: str
    points: Tuple[Point, ...]
    area: float
    center: Point
    floor_level: int = 0

    @property
    def vertex_count(self) -> int:
        return len(self.points)


@dataclass(frozen=True)
class DetectionOptions:
    """Area band used to keep candidate rooms.

    Attributes:
        min_area: Smallest accepted area (inclusive).
        max_area: Largest accepted area (inclusive).
    """

    min_area: float = DEFAULT_MIN_AREA
    max_area: float = DEFAULT_MAX_AREA

    def __post_init__(self) -> None:
        if self.min_area < 0 or self.max_area < 0:
            raise ValueError(
                f"Area bounds must be non-negative, got {self.min_area}..{self.max_area}"
            )
        if self.min_area > self.max_area:
            raise ValueError(
                f"min_area ({self.min_area}) is larger than max_area ({self.max_area})"
            )


class TraceState(Enum):
    """States of a single face trace."""

    TRACING = "tracing"
    CLOSED = "closed"
    DEAD_END = "dead_end"
    SELF_INTERSECT = "self_intersect"
    ITERATION_EXCEEDED = "iteration_exceeded"


@dataclass(frozen=True)
class TraceResult:
    """Outcome of a face trace: a closed cycle or the reason it stopped."""

    state: TraceState
    cycle: Optional[Cycle] = None

    @property
    def ok(self) -> bool:
        return self.state is TraceState.CLOSED

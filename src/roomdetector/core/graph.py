"""Wall graph construction.

This module converts a list of walls into an undirected graph whose
vertices are snap-merged wall endpoints. Nodes are stored in an arena
addressed by integer id; a uniform grid keyed by coordinate bucket
replaces a linear nearest-node scan.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from ..config import KEY_DECIMALS, SNAP_THRESHOLD, WALL_ID_PREFIXES
from .model import Node, Point, Wall

LOGGER = logging.getLogger(__name__)


def is_room_wall(wall: Wall) -> bool:
    """Check whether a wall was drawn by the user or generated by a preset."""
    return bool(wall.id) and wall.id.startswith(WALL_ID_PREFIXES)


def valid_walls(walls: Iterable[Wall]) -> List[Wall]:
    """Keep only walls that take part in room detection."""
    return [wall for wall in walls if is_room_wall(wall)]


def _key_coordinate(value: float, decimals: int) -> str:
    # Adding 0.0 turns -0.0 into 0.0
    text = f"{round(value, decimals) + 0.0:.{decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def node_key(point: Point, decimals: int = KEY_DECIMALS) -> str:
    """Stable "x,z" lookup key built from rounded coordinates.

    Trailing zeros are dropped, so (3, 4.5) gives "3,4.5".
    """
    return f"{_key_coordinate(point.x, decimals)},{_key_coordinate(point.z, decimals)}"


@dataclass
class WallGraph:
    """Undirected graph of snapped wall endpoints.

    Attributes:
        snap_threshold: Distance under which two endpoints share a node.
        nodes: Node arena, indexed by node id.
        keys: Rounded coordinate key of each node, indexed by node id.
    """

    snap_threshold: float = SNAP_THRESHOLD
    nodes: List[Node] = field(default_factory=list)
    keys: List[str] = field(default_factory=list)
    _grid: Dict[Tuple[int, int], List[int]] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        if self.snap_threshold <= 0:
            raise ValueError(f"Snap threshold must be positive, got {self.snap_threshold}")

    def _cell(self, point: Point) -> Tuple[int, int]:
        return (
            math.floor(point.x / self.snap_threshold),
            math.floor(point.z / self.snap_threshold),
        )

    def find_node(self, point: Point) -> Optional[int]:
        """Return the oldest node within the snap threshold of a point.

        Cells are as wide as the threshold, so any node close enough lies
        in the 3x3 block of cells around the point.
        """
        cx, cz = self._cell(point)
        best = None
        for dx in (-1, 0, 1):
            for dz in (-1, 0, 1):
                for node_id in self._grid.get((cx + dx, cz + dz), ()):
                    if best is not None and node_id >= best:
                        continue
                    if self.nodes[node_id].pos.distance_to(point) < self.snap_threshold:
                        best = node_id
        return best

    def find_or_create_node(self, point: Point) -> int:
        node_id = self.find_node(point)
        if node_id is not None:
            return node_id

        node_id = len(self.nodes)
        self.nodes.append(Node(pos=point))
        self.keys.append(node_key(point))
        self._grid.setdefault(self._cell(point), []).append(node_id)
        return node_id

    def add_edge(self, a: int, b: int) -> bool:
        """Connect two nodes in both directions.

        Returns:
            False when both ids are the same node (degenerate wall).
        """
        if a == b:
            return False
        if b not in self.nodes[a].neighbors:
            self.nodes[a].neighbors.append(b)
        if a not in self.nodes[b].neighbors:
            self.nodes[b].neighbors.append(a)
        return True

    def position(self, node_id: int) -> Point:
        return self.nodes[node_id].pos

    def degree(self, node_id: int) -> int:
        return len(self.nodes[node_id].neighbors)

    @property
    def edge_count(self) -> int:
        return sum(len(node.neighbors) for node in self.nodes) // 2


def build_wall_graph(walls: Iterable[Wall], snap_threshold: float = SNAP_THRESHOLD) -> WallGraph:
    """Build the snapped endpoint graph of a wall list.

    Args:
        walls: Walls to insert, in order. Callers filter out non-room
            walls beforehand (see ``valid_walls``).
        snap_threshold: Endpoint merge distance.

    Returns:
        WallGraph with one undirected edge per non-degenerate wall.
    """
    graph = WallGraph(snap_threshold=snap_threshold)
    degenerate = 0

    for wall in walls:
        start_id = graph.find_or_create_node(wall.start)
        end_id = graph.find_or_create_node(wall.end)
        if not graph.add_edge(start_id, end_id):
            degenerate += 1

    LOGGER.debug(
        "Wall graph: %d nodes, %d edges, %d degenerate walls skipped",
        len(graph.nodes),
        graph.edge_count,
        degenerate,
    )
    return graph

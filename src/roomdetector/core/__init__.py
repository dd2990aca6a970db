"""Core data models and wall topology."""

from .graph import WallGraph, build_wall_graph, is_room_wall, valid_walls
from .model import Node, Point, Room, Wall
from .topology import build_room_graph, find_connected_walls, wall_components

__all__ = [
    "Node",
    "Point",
    "Room",
    "Wall",
    "WallGraph",
    "build_room_graph",
    "build_wall_graph",
    "find_connected_walls",
    "is_room_wall",
    "valid_walls",
    "wall_components",
]

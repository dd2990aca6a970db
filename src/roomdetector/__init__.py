"""Room Detector - infer enclosed rooms from a floor plan's wall segments."""

__version__ = "0.1.0"

from .core.model import DetectionOptions, Point, Room, Wall
from .engine.api import (
    detect_rooms,
    detect_rooms_by_floor,
    filter_rooms,
    find_connected_walls,
    find_walls_for_room,
    summarize_rooms,
)
from .engine.validators import InvalidWallData
from .geom.polygon import point_in_polygon, polygon_area, polygon_centroid

__all__ = [
    "DetectionOptions",
    "InvalidWallData",
    "Point",
    "Room",
    "Wall",
    "detect_rooms",
    "detect_rooms_by_floor",
    "filter_rooms",
    "find_connected_walls",
    "find_walls_for_room",
    "point_in_polygon",
    "polygon_area",
    "polygon_centroid",
    "summarize_rooms",
]

"""Engine module for room detection.

This module provides face tracing over the wall graph and the public
detection and query API.
"""

from .api import detect_rooms, detect_rooms_by_floor, filter_rooms, summarize_rooms
from .cycles import find_cycles, trace_face

__all__ = [
    "detect_rooms",
    "detect_rooms_by_floor",
    "filter_rooms",
    "find_cycles",
    "summarize_rooms",
    "trace_face",
]

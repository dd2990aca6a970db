"""Boundary validation for wall input.

Walls reach the detector either as ``Wall`` objects or as raw mappings
taken from the editor state or a shared scene payload. Raw mappings are
checked here so that malformed records fail fast with a descriptive
error instead of propagating into the geometry core.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Iterable, List, Mapping, Optional, Union

from ..config import WALL_ID_PREFIXES
from ..core.model import DetectionOptions, Point, Wall

LOGGER = logging.getLogger(__name__)


class InvalidWallData(ValueError):
    """Raised when a wall record is missing coordinates or has bad values."""

    pass


WallLike = Union[Wall, Mapping[str, Any]]


def require_number(value: Any, wall_id: str, field_name: str) -> float:
    """Return ``value`` as a finite float.

    Raises:
        InvalidWallData: If the value is missing, boolean, non-numeric or
            not finite.
    """
    if value is None:
        raise InvalidWallData(f"Wall '{wall_id}' is missing '{field_name}'")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidWallData(
            f"Wall '{wall_id}' has non-numeric '{field_name}': {value!r}"
        )
    number = float(value)
    if not math.isfinite(number):
        raise InvalidWallData(f"Wall '{wall_id}' has non-finite '{field_name}': {value!r}")
    return number


def has_endpoints(data: Mapping[str, Any]) -> bool:
    """Check that a wall record carries both a ``start`` and an ``end``."""
    return data.get("start") is not None and data.get("end") is not None


def is_room_record(data: Mapping[str, Any]) -> bool:
    """Check a raw record's id for a room-wall prefix."""
    wall_id = data.get("id")
    return isinstance(wall_id, str) and wall_id.startswith(WALL_ID_PREFIXES)


def require_point(data: Mapping[str, Any], wall_id: str, field_name: str) -> Point:
    """Read a ``{"x", "z"}`` mapping stored under ``field_name``."""
    raw = data.get(field_name)
    if raw is None:
        raise InvalidWallData(f"Wall '{wall_id}' is missing '{field_name}'")
    if isinstance(raw, Point):
        return raw
    if not isinstance(raw, Mapping):
        raise InvalidWallData(
            f"Wall '{wall_id}' has malformed '{field_name}': expected an object with x and z"
        )
    return Point(
        require_number(raw.get("x"), wall_id, f"{field_name}.x"),
        require_number(raw.get("z"), wall_id, f"{field_name}.z"),
    )


def ensure_walls(walls: Optional[Iterable[WallLike]]) -> List[Wall]:
    """Convert a mixed list of walls and wall mappings into ``Wall`` objects.

    Raw mappings that are not room walls, or that lack an endpoint, take no
    part in detection and are dropped without being parsed.

    Args:
        walls: Walls or raw wall mappings; None is treated as empty.

    Returns:
        List of Wall objects in input order.

    Raises:
        InvalidWallData: If a room wall mapping has a malformed point or
            field.
    """
    if walls is None:
        return []

    from ..io.parser import parse_wall

    result = []
    dropped = 0
    for wall in walls:
        if isinstance(wall, Wall):
            result.append(wall)
        elif isinstance(wall, Mapping):
            if is_room_record(wall) and has_endpoints(wall):
                result.append(parse_wall(wall))
            else:
                dropped += 1
        else:
            raise InvalidWallData(f"Expected a wall object or mapping, got {type(wall).__name__}")

    if dropped:
        LOGGER.debug("Dropped %d wall records without a room id or endpoints", dropped)
    return result


def resolve_options(
    options: Optional[DetectionOptions] = None,
    min_area: Optional[float] = None,
    max_area: Optional[float] = None,
) -> DetectionOptions:
    """Merge keyword overrides into detection options.

    Raises:
        ValueError: If the resulting area band is invalid.
    """
    base = options or DetectionOptions()
    if min_area is None and max_area is None:
        return base
    return DetectionOptions(
        min_area=base.min_area if min_area is None else min_area,
        max_area=base.max_area if max_area is None else max_area,
    )

"""Parser for wall lists and shared scene payloads.

This module converts wall records, either a bare JSON list or the
``walls`` section of a shared scene payload, into ``Wall`` objects.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List, Mapping, Optional, Union

from typing_extensions import TypedDict

from ..config import DEFAULT_WALL_HEIGHT, DEFAULT_WALL_THICKNESS
from ..core.model import Wall
from ..engine.validators import InvalidWallData, has_endpoints, require_number, require_point

LOGGER = logging.getLogger(__name__)

SUPPORTED_SCENE_VERSIONS = (1,)


class PointPayload(TypedDict):
    x: float
    z: float


class WallPayload(TypedDict, total=False):
    id: str
    start: PointPayload
    end: PointPayload
    thickness: float
    height: float
    floorLevel: int


def _optional_number(data: Mapping[str, Any], wall_id: str, key: str, default: float) -> float:
    value = data.get(key)
    if value is None:
        return default
    return require_number(value, wall_id, key)


def parse_wall(data: Mapping[str, Any]) -> Wall:
    """Parse a single wall record.

    Args:
        data: Mapping with ``id``, ``start`` and ``end`` ({x, z}) and the
            optional ``thickness``, ``height`` and ``floorLevel`` fields.

    Returns:
        Wall object. A missing id becomes an empty string, which no
        detection step treats as a room wall.

    Raises:
        InvalidWallData: If coordinates are missing or not numeric, or the
            floor level is not a whole number.
    """
    wall_id = data.get("id") or ""
    if not isinstance(wall_id, str):
        raise InvalidWallData(f"Wall id must be a string, got {wall_id!r}")

    floor_level = data.get("floorLevel", data.get("floor_level", 0))
    if floor_level is None:
        floor_level = 0
    level = require_number(floor_level, wall_id, "floorLevel")
    if not level.is_integer():
        raise InvalidWallData(f"Wall '{wall_id}' has non-integer 'floorLevel': {floor_level!r}")

    return Wall(
        id=wall_id,
        start=require_point(data, wall_id, "start"),
        end=require_point(data, wall_id, "end"),
        thickness=_optional_number(data, wall_id, "thickness", DEFAULT_WALL_THICKNESS),
        height=_optional_number(data, wall_id, "height", DEFAULT_WALL_HEIGHT),
        floor_level=int(level),
    )


def parse_walls(payload: Union[List[Any], Mapping[str, Any], None]) -> List[Wall]:
    """Parse a wall list or a shared scene payload.

    Args:
        payload: Either a list of wall records or a scene mapping with a
            ``walls`` list (and optionally a ``version``).

    Returns:
        List of walls in payload order. Records without a ``start`` or an
        ``end`` are skipped.

    Raises:
        ValueError: If the payload shape or scene version is not supported.
        InvalidWallData: If a wall record is malformed.
    """
    if payload is None:
        return []

    if isinstance(payload, Mapping):
        version: Optional[int] = payload.get("version")
        if version is not None and version not in SUPPORTED_SCENE_VERSIONS:
            raise ValueError(f"Unsupported scene version: {version}")
        records = payload.get("walls") or []
    else:
        records = payload

    if not isinstance(records, list):
        raise ValueError(f"Walls must be a list, got {type(records).__name__}")

    walls = []
    for index, record in enumerate(records):
        if not isinstance(record, Mapping):
            raise InvalidWallData(f"Wall #{index} must be an object, got {type(record).__name__}")
        if not has_endpoints(record):
            LOGGER.debug("Skipping wall #%d (%s): no start or end", index, record.get("id"))
            continue
        walls.append(parse_wall(record))
    return walls


def load_walls(path: Union[str, Path]) -> List[Wall]:
    """Load walls from a JSON file.

    Args:
        path: Path to a JSON wall list or shared scene payload.

    Returns:
        List of walls.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        json.JSONDecodeError: If the file is not valid JSON.
        ValueError: If the JSON data is invalid or malformed.
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    with open(file_path, encoding="utf-8") as f:
        data = json.load(f)

    return parse_walls(data)


def wall_to_payload(wall: Wall) -> WallPayload:
    """Inverse of ``parse_wall``, in the shared scene wall format."""
    return {
        "id": wall.id,
        "start": {"x": wall.start.x, "z": wall.start.z},
        "end": {"x": wall.end.x, "z": wall.end.z},
        "thickness": wall.thickness,
        "height": wall.height,
        "floorLevel": wall.floor_level,
    }

"""Image generation for detected rooms.

This module renders a top-down PNG of a floor plan: room polygons filled
and labelled with their area, walls drawn on top.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Sequence

from ..core.graph import is_room_wall
from ..core.model import Room, Wall
from ..geom.units import format_area

LOGGER = logging.getLogger(__name__)

# Global parameters for rendering
FIGURE_SIZE = (10, 10)
DPI = 140
WALL_COLOR = "#000000"  # Room walls
OTHER_WALL_COLOR = "#9E9E9E"  # Boundary and other non-room segments
ROOM_ALPHA = 0.6
ROOM_COLORS = [
    "#AED9E0",
    "#FFD6A5",
    "#CAFFBF",
    "#FDFFB6",
    "#BDB2FF",
    "#FFC6FF",
    "#9BF6FF",
    "#FFADAD",
]


def generate_floor_image(
    walls: Iterable[Wall],
    rooms: Sequence[Room],
    output_path: Path,
    unit: str = "m",
) -> bool:
    """Generate a PNG image of walls and detected rooms.

    Args:
        walls: Walls to draw.
        rooms: Rooms to fill and label.
        output_path: Path where to save the PNG image.
        unit: "m" or "ft" for the area labels.

    Returns:
        True if the image was generated successfully, False otherwise.
    """
    try:
        import matplotlib

        matplotlib.use("Agg")
        import matplotlib.pyplot as plt

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        fig, ax = plt.subplots(figsize=FIGURE_SIZE)
        try:
            for i, room in enumerate(rooms):
                xs = [p.x for p in room.points]
                zs = [p.z for p in room.points]
                ax.fill(
                    xs,
                    zs,
                    color=ROOM_COLORS[i % len(ROOM_COLORS)],
                    alpha=ROOM_ALPHA,
                    edgecolor="none",
                )
                ax.text(
                    room.center.x,
                    room.center.z,
                    format_area(room.area, unit),
                    ha="center",
                    va="center",
                    fontsize=9,
                    fontweight="bold",
                    bbox=dict(boxstyle="round,pad=0.3", facecolor="white", alpha=0.8),
                )

            for wall in walls:
                room_wall = is_room_wall(wall)
                ax.plot(
                    [wall.start.x, wall.end.x],
                    [wall.start.z, wall.end.z],
                    color=WALL_COLOR if room_wall else OTHER_WALL_COLOR,
                    linewidth=2 if room_wall else 1,
                    solid_capstyle="round",
                )

            # Scene z grows towards the viewer; flip so the plan reads top-down
            ax.invert_yaxis()
            ax.set_aspect("equal", adjustable="datalim")
            ax.axis("off")
            fig.tight_layout()
            fig.savefig(output_path, dpi=DPI)
        finally:
            plt.close(fig)

        return True

    except Exception:
        LOGGER.exception("Error in image generation for %s", output_path)
        return False

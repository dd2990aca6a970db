"""Loading wall lists from JSON."""

from .parser import load_walls, parse_wall, parse_walls

__all__ = ["load_walls", "parse_wall", "parse_walls"]

"""Display formatting for lengths and areas in metric or imperial units."""

from __future__ import annotations

FEET_PER_METER = 3.28084
SQ_FEET_PER_SQ_METER = FEET_PER_METER**2

UNITS = ("m", "ft")


def _check_unit(unit: str) -> None:
    if unit not in UNITS:
        raise ValueError(f"Unknown unit '{unit}', expected one of {', '.join(UNITS)}")


def format_length(meters: float, unit: str = "m") -> str:
    """Format a length like "12.5 m" or "41 ft"."""
    _check_unit(unit)
    if unit == "ft":
        return f"{round(meters * FEET_PER_METER)} ft"
    return f"{meters:.1f} m"


def format_area(square_meters: float, unit: str = "m") -> str:
    """Format an area like "20.0 m²" or "215 ft²"."""
    _check_unit(unit)
    if unit == "ft":
        return f"{square_meters * SQ_FEET_PER_SQ_METER:.0f} ft²"
    return f"{square_meters:.1f} m²"

"""
core/orientation.py
-------------------
Closed set of compass / vertical directions attached to every connection.
"""

from __future__ import annotations

from enum import Enum

from core.errors import ValidationError


class Orientation(str, Enum):
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"
    UP = "up"
    DOWN = "down"

    @classmethod
    def parse(cls, value: "str | Orientation") -> "Orientation":
        """Accept an Orientation or its (case-insensitive) string value."""
        if isinstance(value, Orientation):
            return value
        normalized = str(value or "").strip().lower()
        try:
            return cls(normalized)
        except ValueError:
            allowed = ", ".join(o.value for o in cls)
            raise ValidationError(
                f"Orientation '{value}' is invalid; expected one of: {allowed}."
            ) from None

    def opposite(self) -> "Orientation":
        return _OPPOSITE[self]


_OPPOSITE = {
    Orientation.NORTH: Orientation.SOUTH,
    Orientation.SOUTH: Orientation.NORTH,
    Orientation.EAST: Orientation.WEST,
    Orientation.WEST: Orientation.EAST,
    Orientation.UP: Orientation.DOWN,
    Orientation.DOWN: Orientation.UP,
}

ORIENTATIONS = [o.value for o in Orientation]

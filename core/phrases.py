"""
core/phrases.py
---------------
Localized phrasing for turn-by-turn instructions.

Each language carries:
- distance_unit       : unit label appended to the rounded distance
- orientations        : label per Orientation
- step                : template without a landmark
- step_with_landmark  : template mentioning the landmark

Lookup order for a requested language: exact code -> base code
("pt-br" -> "pt") -> English.

Distances are rounded half-up to whole units and printed without
thousands separators (1234, not 1,234) in every language.
"""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Optional

from core.orientation import Orientation

PHRASEBOOK: Dict[str, Dict] = {
    "en": {
        "distance_unit": "m",
        "orientations": {
            Orientation.NORTH: "north",
            Orientation.SOUTH: "south",
            Orientation.EAST: "east",
            Orientation.WEST: "west",
            Orientation.UP: "up",
            Orientation.DOWN: "down",
        },
        "step": "Walk {distance} {unit} {orientation} to reach {destination}.",
        "step_with_landmark": (
            "Walk {distance} {unit} {orientation}, passing {landmark}, "
            "to reach {destination}."
        ),
    },
    "he": {
        "distance_unit": "מ'",
        "orientations": {
            Orientation.NORTH: "צפון",
            Orientation.SOUTH: "דרום",
            Orientation.EAST: "מזרח",
            Orientation.WEST: "מערב",
            Orientation.UP: "למעלה",
            Orientation.DOWN: "למטה",
        },
        "step": "צעדו {distance} {unit} לכיוון {orientation} כדי להגיע אל {destination}.",
        "step_with_landmark": (
            "צעדו {distance} {unit} לכיוון {orientation}, חלפו ליד {landmark}, "
            "כדי להגיע אל {destination}."
        ),
    },
    "es": {
        "distance_unit": "m",
        "orientations": {
            Orientation.NORTH: "norte",
            Orientation.SOUTH: "sur",
            Orientation.EAST: "este",
            Orientation.WEST: "oeste",
            Orientation.UP: "arriba",
            Orientation.DOWN: "abajo",
        },
        "step": "Camina {distance} {unit} hacia el {orientation} para llegar a {destination}.",
        "step_with_landmark": (
            "Camina {distance} {unit} hacia el {orientation}, pasando por {landmark}, "
            "para llegar a {destination}."
        ),
    },
    "fr": {
        "distance_unit": "m",
        "orientations": {
            Orientation.NORTH: "nord",
            Orientation.SOUTH: "sud",
            Orientation.EAST: "est",
            Orientation.WEST: "ouest",
            Orientation.UP: "haut",
            Orientation.DOWN: "bas",
        },
        "step": "Marchez {distance} {unit} vers le {orientation} pour atteindre {destination}.",
        "step_with_landmark": (
            "Marchez {distance} {unit} vers le {orientation}, en passant par {landmark}, "
            "pour atteindre {destination}."
        ),
    },
}


def phrases_for(language: str) -> Dict:
    code = (language or "").strip().lower()
    if code in PHRASEBOOK:
        return PHRASEBOOK[code]
    base = code.replace("_", "-").split("-", 1)[0]
    return PHRASEBOOK.get(base, PHRASEBOOK["en"])


def orientation_label(language: str, orientation: Orientation) -> str:
    return phrases_for(language)["orientations"][Orientation.parse(orientation)]


def round_distance(distance: float) -> int:
    """Round half away from zero to a whole unit (2.5 -> 3)."""
    return int(Decimal(str(distance)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_step(
    language: str,
    destination: str,
    distance: float,
    orientation: Orientation,
    landmark: Optional[str] = None,
) -> str:
    """Render one instruction sentence in the requested language."""
    phrases = phrases_for(language)
    template = phrases["step_with_landmark"] if landmark else phrases["step"]
    return template.format(
        distance=round_distance(distance),
        unit=phrases["distance_unit"],
        orientation=orientation_label(language, orientation),
        landmark=landmark or "",
        destination=destination,
    )

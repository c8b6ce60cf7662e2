"""
core/errors.py
--------------
Typed failures raised by the wayfinding core.

Every operation surfaces one of four categories so the presentation layer
can tell them apart without parsing messages:

- ValidationError       : malformed or missing input
- ConflictError         : uniqueness violation (slug, directed edge, language)
- NotFoundError         : referenced place / dashboard does not exist
- RouteUnavailableError : no path between two existing places
"""

from __future__ import annotations


class WayfindingError(Exception):
    """Base class for all core failures."""

    category = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def as_dict(self) -> dict:
        return {"error": self.category, "detail": self.message}


class ValidationError(WayfindingError):
    category = "validation"


class ConflictError(WayfindingError):
    category = "conflict"


class NotFoundError(WayfindingError):
    category = "not_found"


class RouteUnavailableError(WayfindingError):
    category = "route_unavailable"

"""
navigation/directions.py
------------------------
Directions Engine: hop path plus localized turn-by-turn instructions.

Behavior
--------
1. Resolve both endpoints (NotFoundError if either is missing).
2. Same place -> no steps, zero distance.
3. Rebuild the adjacency list from the full edge listing on every call.
4. Unweighted breadth-first search: minimizes hops, not summed distance.
5. No path -> RouteUnavailableError.
6. Walk predecessor edges back from the destination, then reverse.
7. Render one localized sentence per edge.
8. Total distance is the plain sum of the chosen edges.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from core.errors import RouteUnavailableError
from core.orientation import Orientation
from core.phrases import format_step, orientation_label
from navigation.connections import ConnectionGraphStore, Edge
from navigation.places import PlaceRegistry, PlaceSummary
from navigation.translations import TranslationResolver

logger = logging.getLogger(__name__)

Adjacency = Dict[int, List[Edge]]


@dataclass(frozen=True)
class DirectionStep:
    from_id: int
    to_id: int
    to_name: str
    distance: float
    orientation: Orientation
    orientation_label: str
    landmark: Optional[str]
    instruction: str

    def as_dict(self) -> Dict[str, Any]:
        return {
            "from_id": self.from_id,
            "to_id": self.to_id,
            "to_name": self.to_name,
            "distance": self.distance,
            "orientation": self.orientation.value,
            "orientation_label": self.orientation_label,
            "landmark": self.landmark,
            "instruction": self.instruction,
        }


@dataclass(frozen=True)
class DirectionsResult:
    language: str
    origin: PlaceSummary
    destination: PlaceSummary
    steps: List[DirectionStep] = field(default_factory=list)
    total_distance: float = 0.0

    def as_dict(self) -> Dict[str, Any]:
        return {
            "language": self.language,
            "from": self.origin.as_dict(),
            "to": self.destination.as_dict(),
            "steps": [s.as_dict() for s in self.steps],
            "total_distance": self.total_distance,
        }


# --------------------------------------------------------------------------- #
# Graph helpers (pure)
# --------------------------------------------------------------------------- #

def build_adjacency(edges: Iterable[Edge]) -> Adjacency:
    """Map each place id to its outgoing edges, keeping listing order."""
    graph: Adjacency = {}
    for edge in edges:
        graph.setdefault(edge.from_id, []).append(edge)
    return graph


def find_hop_path(graph: Adjacency, start: int, goal: int) -> Optional[List[Edge]]:
    """
    Breadth-first search from `start`; return the edge sequence to `goal`.

    Returns [] when start == goal and None when `goal` is unreachable.
    """
    if start == goal:
        return []

    queue = deque([start])
    visited = {start}
    previous: Dict[int, Edge] = {}

    while queue:
        current = queue.popleft()
        if current == goal:
            break
        for edge in graph.get(current, []):
            if edge.to_id in visited:
                continue
            visited.add(edge.to_id)
            previous[edge.to_id] = edge
            queue.append(edge.to_id)

    if goal not in previous:
        return None

    path: List[Edge] = []
    cursor = goal
    while cursor != start:
        edge = previous[cursor]
        path.append(edge)
        cursor = edge.from_id
    path.reverse()
    return path


# --------------------------------------------------------------------------- #
# Engine
# --------------------------------------------------------------------------- #

class DirectionsEngine:
    def __init__(
        self,
        places: PlaceRegistry,
        graph: ConnectionGraphStore,
        resolver: Optional[TranslationResolver] = None,
    ):
        self.places = places
        self.graph = graph
        self.resolver = resolver or places.resolver

    def compute_directions(self, from_id: int, to_id: int, language: str) -> DirectionsResult:
        origin = self.places.get_place(from_id, language)
        destination = self.places.get_place(to_id, language)

        if from_id == to_id:
            return DirectionsResult(language, origin, destination, [], 0.0)

        path = find_hop_path(build_adjacency(self.graph.list_edges()), from_id, to_id)
        if path is None:
            logger.info("[directions] no route %s -> %s", from_id, to_id)
            raise RouteUnavailableError(
                f"Route unavailable between places {from_id} and {to_id}."
            )

        names = self.resolver.resolve_many([edge.to_id for edge in path], language)
        steps = [
            DirectionStep(
                from_id=edge.from_id,
                to_id=edge.to_id,
                to_name=names[edge.to_id].name,
                distance=edge.distance,
                orientation=edge.orientation,
                orientation_label=orientation_label(language, edge.orientation),
                landmark=edge.landmark,
                instruction=format_step(
                    language,
                    destination=names[edge.to_id].name,
                    distance=edge.distance,
                    orientation=edge.orientation,
                    landmark=edge.landmark,
                ),
            )
            for edge in path
        ]
        total = sum(step.distance for step in steps)
        logger.debug("[directions] %s -> %s: %d steps, %.1f total", from_id, to_id, len(steps), total)
        return DirectionsResult(language, origin, destination, steps, total)

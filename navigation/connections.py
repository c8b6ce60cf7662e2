"""
navigation/connections.py
-------------------------
Connection Graph Store: directed, attributed edges between places.

- At most one edge per ordered (from, to) pair.
- A bidirectional creation also writes the reverse edge with the opposite
  orientation, skipping it silently when it already exists.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import sessionmaker

from core.errors import ConflictError, NotFoundError, ValidationError
from core.orientation import Orientation
from core.phrases import orientation_label
from database.models import Connection, Place
from database.queries import write_transaction
from navigation.places import require_number
from navigation.translations import TranslationResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Edge:
    from_id: int
    to_id: int
    distance: float
    orientation: Orientation
    landmark: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        return {
            "from_id": self.from_id,
            "to_id": self.to_id,
            "distance": self.distance,
            "orientation": self.orientation.value,
            "landmark": self.landmark,
        }


@dataclass(frozen=True)
class Neighbor:
    id: int
    name: str
    description: str
    distance: float
    orientation: Orientation
    orientation_label: str
    landmark: Optional[str]
    image_url: Optional[str]

    def as_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "distance": self.distance,
            "orientation": self.orientation.value,
            "orientation_label": self.orientation_label,
            "landmark": self.landmark,
            "image_url": self.image_url,
        }


def require_place_id(value: Any, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field} must be a valid numeric identifier.")
    return value


class ConnectionGraphStore:
    def __init__(self, SessionLocal: sessionmaker, resolver: Optional[TranslationResolver] = None):
        self.SessionLocal = SessionLocal
        self.resolver = resolver or TranslationResolver(SessionLocal)

    def create_connection(
        self,
        from_id: int,
        to_id: int,
        orientation: "str | Orientation",
        distance: float,
        landmark: Optional[str] = None,
        bidirectional: bool = True,
    ) -> None:
        """
        Create a directed edge (and its reverse when bidirectional).

        Raises
        ------
        ValidationError
            Same endpoints, unknown orientation, or non-positive distance.
        NotFoundError
            Either place does not exist.
        ConflictError
            The directed edge from -> to already exists.
        """
        from_id = require_place_id(from_id, "from_id")
        to_id = require_place_id(to_id, "to_id")
        if from_id == to_id:
            raise ValidationError("Connections must link two different places.")
        orientation = Orientation.parse(orientation)
        distance = require_number(distance, "Distance")
        if distance <= 0:
            raise ValidationError("Distance must be a positive number.")
        landmark = (landmark or "").strip() or None

        conflict = f"A connection from {from_id} to {to_id} already exists."
        with write_transaction(self.SessionLocal, conflict) as session:
            if session.get(Place, from_id) is None:
                raise NotFoundError(f"Origin place {from_id} could not be found.")
            if session.get(Place, to_id) is None:
                raise NotFoundError(f"Destination place {to_id} could not be found.")

            def exists(a: int, b: int) -> bool:
                return session.scalar(
                    select(Connection.id).where(
                        Connection.from_place_id == a, Connection.to_place_id == b
                    )
                ) is not None

            if exists(from_id, to_id):
                raise ConflictError(conflict)

            session.add(
                Connection(
                    from_place_id=from_id,
                    to_place_id=to_id,
                    distance=distance,
                    orientation=orientation.value,
                    landmark=landmark,
                )
            )
            reverse_added = False
            if bidirectional and not exists(to_id, from_id):
                session.add(
                    Connection(
                        from_place_id=to_id,
                        to_place_id=from_id,
                        distance=distance,
                        orientation=orientation.opposite().value,
                        landmark=landmark,
                    )
                )
                reverse_added = True

        logger.info(
            "[graph] connected %s -> %s (%s, %.1f)%s",
            from_id,
            to_id,
            orientation.value,
            distance,
            " with reverse edge" if reverse_added else "",
        )

    def list_edges(self) -> List[Edge]:
        """Full scan of the connection table in insertion order."""
        with self.SessionLocal() as session:
            rows = session.scalars(select(Connection).order_by(Connection.id)).all()
        return [
            Edge(
                from_id=row.from_place_id,
                to_id=row.to_place_id,
                distance=row.distance,
                orientation=Orientation(row.orientation),
                landmark=row.landmark,
            )
            for row in rows
        ]

    def list_neighbors(self, place_id: int, language: str) -> List[Neighbor]:
        """Outgoing edges of a place, localized, nearest first."""
        with self.SessionLocal() as session:
            if session.get(Place, place_id) is None:
                raise NotFoundError(f"Place {place_id} could not be found.")

            rows = session.execute(
                select(Connection, Place)
                .join(Place, Place.id == Connection.to_place_id)
                .where(Connection.from_place_id == place_id)
                .order_by(Connection.distance, Connection.id)
            ).all()
            targets = [place for _, place in rows]
            texts = self.resolver.resolve_in(session, targets, language)

            neighbors = []
            for connection, target in rows:
                orientation = Orientation(connection.orientation)
                text = texts[target.id]
                neighbors.append(
                    Neighbor(
                        id=target.id,
                        name=text.name,
                        description=text.description,
                        distance=connection.distance,
                        orientation=orientation,
                        orientation_label=orientation_label(language, orientation),
                        landmark=connection.landmark,
                        image_url=target.image_url,
                    )
                )
        return neighbors

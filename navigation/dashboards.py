"""
navigation/dashboards.py
------------------------
Dashboard Registry: named, slugged subsets of places for scoped views.

Dashboards only filter place listings; they never affect the graph.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, asdict, field
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import sessionmaker

from core.errors import NotFoundError, ValidationError
from database.models import Dashboard, DashboardPlace, Place
from database.queries import write_transaction
from navigation.connections import require_place_id
from navigation.places import require_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardSummary:
    id: int
    slug: str
    name: str
    description: str
    place_ids: List[int] = field(default_factory=list)

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def slugify(value: str) -> str:
    """'Family Care Tour!' -> 'family-care-tour'"""
    return re.sub(r"[^a-z0-9]+", "-", (value or "").lower().strip()).strip("-")


def dedupe_ids(place_ids: Iterable[Any]) -> List[int]:
    return list(dict.fromkeys(require_place_id(pid, "Place id") for pid in place_ids or []))


class DashboardRegistry:
    def __init__(self, SessionLocal: sessionmaker):
        self.SessionLocal = SessionLocal

    def create_dashboard(
        self,
        name: str,
        place_ids: Iterable[int],
        description: Optional[str] = None,
    ) -> DashboardSummary:
        """
        Create a dashboard atomically with its place associations.

        The slug is derived from the name; on collision `-1`, `-2`, ... is
        appended until unique. An unknown place id aborts the whole creation.
        """
        name = require_text(name, "Dashboard name")
        ids = dedupe_ids(place_ids)
        if not ids:
            raise ValidationError("Select at least one place for the dashboard.")
        description = (description or "").strip()
        base_slug = slugify(name) or "dashboard"

        with write_transaction(self.SessionLocal, "Dashboard could not be saved.") as session:
            known = set(session.scalars(select(Place.id).where(Place.id.in_(ids))))
            missing = [pid for pid in ids if pid not in known]
            if missing:
                raise NotFoundError(f"Place {missing[0]} could not be found.")

            slug, suffix = base_slug, 1
            while session.scalar(select(Dashboard.id).where(Dashboard.slug == slug)) is not None:
                slug = f"{base_slug}-{suffix}"
                suffix += 1

            dashboard = Dashboard(slug=slug, name=name, description=description)
            session.add(dashboard)
            session.flush()
            session.add_all(DashboardPlace(dashboard_id=dashboard.id, place_id=pid) for pid in ids)
            dashboard_id = dashboard.id

        logger.info("[dashboards] created '%s' with %d places", slug, len(ids))
        return DashboardSummary(dashboard_id, slug, name, description, ids)

    def list_dashboards(self) -> List[DashboardSummary]:
        """All dashboards ordered by name (case-insensitive)."""
        with self.SessionLocal() as session:
            dashboards = session.scalars(select(Dashboard)).all()
            members: Dict[int, List[int]] = {}
            for link in session.scalars(
                select(DashboardPlace).order_by(DashboardPlace.place_id)
            ):
                members.setdefault(link.dashboard_id, []).append(link.place_id)

        dashboards = sorted(dashboards, key=lambda d: (d.name.casefold(), d.id))
        return [
            DashboardSummary(d.id, d.slug, d.name, d.description, members.get(d.id, []))
            for d in dashboards
        ]

    def list_dashboards_containing(self, place_id: int) -> List[DashboardSummary]:
        return [d for d in self.list_dashboards() if place_id in d.place_ids]

"""
navigation/translations.py
--------------------------
Translation Resolver: a place's display name/description for a language.

Fallback chain
--------------
name        : row for the language -> row for "en" -> place slug
description : row for the language -> row for "en" -> ""
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Dict, Iterable, Mapping

from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker

from core.config import FALLBACK_LANGUAGE
from core.errors import NotFoundError
from database.models import Place, PlaceTranslation


def normalize_language(code: str) -> str:
    return (code or "").strip().lower()


@dataclass(frozen=True)
class ResolvedText:
    name: str
    description: str

    def as_dict(self) -> Dict[str, str]:
        return asdict(self)


def pick_text(
    slug: str,
    rows: Mapping[str, PlaceTranslation],
    language: str,
) -> ResolvedText:
    """Apply the fallback chain to one place's translation rows (keyed by code)."""
    row = rows.get(normalize_language(language)) or rows.get(FALLBACK_LANGUAGE)
    if row is None:
        return ResolvedText(name=slug, description="")
    return ResolvedText(name=row.name, description=row.description or "")


class TranslationResolver:
    """Read-only access to localized place text."""

    def __init__(self, SessionLocal: sessionmaker):
        self.SessionLocal = SessionLocal

    def resolve(self, place_id: int, language: str) -> ResolvedText:
        with self.SessionLocal() as session:
            place = session.get(Place, place_id)
            if place is None:
                raise NotFoundError(f"Place {place_id} could not be found.")
            return self.resolve_in(session, [place], language)[place.id]

    def resolve_many(self, place_ids: Iterable[int], language: str) -> Dict[int, ResolvedText]:
        ids = list(dict.fromkeys(place_ids))
        with self.SessionLocal() as session:
            places = session.scalars(select(Place).where(Place.id.in_(ids))).all()
            return self.resolve_in(session, places, language)

    @staticmethod
    def resolve_in(
        session: Session,
        places: Iterable[Place],
        language: str,
    ) -> Dict[int, ResolvedText]:
        """Resolve a batch of places inside an already open session."""
        places = list(places)
        if not places:
            return {}

        codes = {normalize_language(language), FALLBACK_LANGUAGE}
        stmt = select(PlaceTranslation).where(
            PlaceTranslation.place_id.in_([p.id for p in places]),
            PlaceTranslation.language_code.in_(codes),
        )
        rows: Dict[int, Dict[str, PlaceTranslation]] = {}
        for row in session.scalars(stmt):
            rows.setdefault(row.place_id, {})[row.language_code] = row

        return {p.id: pick_text(p.slug, rows.get(p.id, {}), language) for p in places}

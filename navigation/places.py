"""
navigation/places.py
--------------------
Place Registry: places, their translations and the supported languages.

Invariants
----------
- `slug` is globally unique.
- A new place always gets a translation in its creation language and,
  when that language is not English, an English row named after the slug.
- Adding a language back-fills a row for every place lacking one, so the
  name fallback chain holds immediately for all places.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker

from core.config import FALLBACK_LANGUAGE, Settings, get_settings
from core.errors import ConflictError, NotFoundError, ValidationError
from database.models import Dashboard, DashboardPlace, Language, Place, PlaceTranslation
from database.queries import write_transaction
from navigation.translations import ResolvedText, TranslationResolver, normalize_language

logger = logging.getLogger(__name__)


# --------------------------------------------------------------------------- #
# Summaries
# --------------------------------------------------------------------------- #

@dataclass(frozen=True)
class PlaceSummary:
    id: int
    slug: str
    name: str
    description: str
    floor: str
    zone: str
    type: str
    image_url: Optional[str]
    coordinates: Dict[str, float]
    latitude: Optional[float]
    longitude: Optional[float]

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def build(cls, place: Place, text: ResolvedText) -> "PlaceSummary":
        return cls(
            id=place.id,
            slug=place.slug,
            name=text.name,
            description=text.description,
            floor=place.floor,
            zone=place.zone,
            type=place.type,
            image_url=place.image_url,
            coordinates={"x": place.x, "y": place.y},
            latitude=place.latitude,
            longitude=place.longitude,
        )


@dataclass(frozen=True)
class LanguageSummary:
    code: str
    label: str
    is_default: bool

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


# --------------------------------------------------------------------------- #
# Input helpers
# --------------------------------------------------------------------------- #

def require_text(value: Optional[str], field: str) -> str:
    text = "" if value is None else str(value).strip()
    if not text:
        raise ValidationError(f"{field} is required.")
    return text


def require_number(value: Any, field: str) -> float:
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a valid number.")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a valid number.") from None
    if not math.isfinite(number):
        raise ValidationError(f"{field} must be a valid number.")
    return number


def upsert_translation(
    session: Session,
    place_id: int,
    language: str,
    name: str,
    description: str,
) -> PlaceTranslation:
    row = session.get(PlaceTranslation, (place_id, language))
    if row is None:
        row = PlaceTranslation(
            place_id=place_id,
            language_code=language,
            name=name,
            description=description,
        )
        session.add(row)
    else:
        row.name = name
        row.description = description
    session.flush()
    return row


# --------------------------------------------------------------------------- #
# Registry
# --------------------------------------------------------------------------- #

class PlaceRegistry:
    """CRUD over places, translations and languages."""

    def __init__(
        self,
        SessionLocal: sessionmaker,
        resolver: Optional[TranslationResolver] = None,
        settings: Optional[Settings] = None,
    ):
        self.SessionLocal = SessionLocal
        self.resolver = resolver or TranslationResolver(SessionLocal)
        self.settings = settings or get_settings()

    # ---- languages ------------------------------------------------------- #

    def list_languages(self) -> List[LanguageSummary]:
        """Default language first, then by label (case-insensitive)."""
        with self.SessionLocal() as session:
            rows = session.scalars(select(Language).order_by(Language.id)).all()
        rows = sorted(rows, key=lambda r: (not r.is_default, r.label.casefold()))
        return [LanguageSummary(r.code, r.label, bool(r.is_default)) for r in rows]

    def default_language(self) -> str:
        with self.SessionLocal() as session:
            code = session.scalar(
                select(Language.code)
                .where(Language.is_default.is_(True))
                .order_by(Language.id)
                .limit(1)
            )
        return code or self.settings.default_language

    def add_language(self, code: str, label: str) -> LanguageSummary:
        """
        Register a language and back-fill a translation for every place.

        Each back-filled row copies the English name/description when the
        place has one, otherwise uses the slug and an empty description.
        """
        code = normalize_language(require_text(code, "Language code"))
        label = require_text(label, "Language label")

        with write_transaction(self.SessionLocal, f"Language '{code}' already exists.") as session:
            if session.scalar(select(Language.id).where(Language.code == code)) is not None:
                raise ConflictError(f"Language '{code}' already exists.")
            session.add(Language(code=code, label=label, is_default=False))

            existing = set(
                session.scalars(
                    select(PlaceTranslation.place_id).where(PlaceTranslation.language_code == code)
                )
            )
            english = {
                row.place_id: row
                for row in session.scalars(
                    select(PlaceTranslation).where(
                        PlaceTranslation.language_code == FALLBACK_LANGUAGE
                    )
                )
            }
            added = 0
            for place in session.scalars(select(Place).order_by(Place.id)):
                if place.id in existing:
                    continue
                source = english.get(place.id)
                session.add(
                    PlaceTranslation(
                        place_id=place.id,
                        language_code=code,
                        name=source.name if source else place.slug,
                        description=source.description if source else "",
                    )
                )
                added += 1

        logger.info("[places] added language '%s' (%d translations back-filled)", code, added)
        return LanguageSummary(code=code, label=label, is_default=False)

    # ---- places ---------------------------------------------------------- #

    def create_place(
        self,
        slug: str,
        floor: str,
        zone: str,
        x: float,
        y: float,
        type: Optional[str] = None,
        image_url: Optional[str] = None,
        name: Optional[str] = None,
        description: Optional[str] = None,
        language: Optional[str] = None,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
    ) -> PlaceSummary:
        """
        Persist a place with its translations in one transaction.

        Raises
        ------
        ValidationError
            Empty slug / floor / zone or non-numeric coordinates.
        ConflictError
            The slug is already taken.
        """
        slug = require_text(slug, "Slug")
        floor = require_text(floor, "Floor")
        zone = require_text(zone, "Zone")
        x = require_number(x, "x")
        y = require_number(y, "y")
        place_type = (type or "").strip() or "general"
        image_url = (image_url or "").strip() or None
        language = normalize_language(language or "") or self.default_language()
        display_name = (name or "").strip() or slug
        description = (description or "").strip()

        if latitude is None:
            latitude = self.settings.base_latitude + y * self.settings.coordinate_scale
        else:
            latitude = require_number(latitude, "latitude")
        if longitude is None:
            longitude = self.settings.base_longitude + x * self.settings.coordinate_scale
        else:
            longitude = require_number(longitude, "longitude")

        conflict = f"A place with slug '{slug}' already exists."
        with write_transaction(self.SessionLocal, conflict) as session:
            if session.scalar(select(Place.id).where(Place.slug == slug)) is not None:
                raise ConflictError(conflict)

            place = Place(
                slug=slug,
                floor=floor,
                zone=zone,
                x=x,
                y=y,
                type=place_type,
                image_url=image_url,
                latitude=latitude,
                longitude=longitude,
            )
            session.add(place)
            session.flush()

            upsert_translation(session, place.id, language, display_name, description)
            if language != FALLBACK_LANGUAGE:
                upsert_translation(session, place.id, FALLBACK_LANGUAGE, slug, description)
            place_id = place.id

        logger.info("[places] created place %s ('%s') in '%s'", place_id, slug, language)
        return self.get_place(place_id, language)

    def update_translation(
        self,
        language: str,
        place_id: int,
        name: str,
        description: Optional[str] = "",
    ) -> None:
        """Insert or overwrite the (place, language) translation."""
        code = normalize_language(require_text(language, "Language"))
        name = require_text(name, "Name")
        description = (description or "").strip()

        with write_transaction(self.SessionLocal, "Translation could not be saved.") as session:
            if session.get(Place, place_id) is None:
                raise NotFoundError(f"Place {place_id} could not be found.")
            upsert_translation(session, place_id, code, name, description)

        logger.info("[places] saved '%s' translation for place %s", code, place_id)

    def get_place(self, place_id: int, language: str) -> PlaceSummary:
        with self.SessionLocal() as session:
            place = session.get(Place, place_id)
            if place is None:
                raise NotFoundError(f"Place {place_id} could not be found.")
            text = self.resolver.resolve_in(session, [place], language)[place.id]
            return PlaceSummary.build(place, text)

    def list_places(
        self,
        language: str,
        search: Optional[str] = None,
        dashboard_id: Optional[int] = None,
    ) -> List[PlaceSummary]:
        """
        Return places with their resolved text, ordered by name.

        `search` is a case-insensitive substring match on the resolved name;
        `dashboard_id` restricts the result to that dashboard's places.
        An unknown `dashboard_id` raises NotFoundError.
        """
        stmt = select(Place)
        if dashboard_id is not None:
            stmt = stmt.join(DashboardPlace, DashboardPlace.place_id == Place.id).where(
                DashboardPlace.dashboard_id == dashboard_id
            )

        with self.SessionLocal() as session:
            if dashboard_id is not None and session.get(Dashboard, dashboard_id) is None:
                raise NotFoundError(f"Dashboard {dashboard_id} could not be found.")
            places = session.scalars(stmt).all()
            texts = self.resolver.resolve_in(session, places, language)
            summaries = [PlaceSummary.build(p, texts[p.id]) for p in places]

        needle = (search or "").strip().casefold()
        if needle:
            summaries = [s for s in summaries if needle in s.name.casefold()]

        return sorted(summaries, key=lambda s: (s.name.casefold(), s.id))

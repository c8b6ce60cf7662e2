"""
database/seed.py
----------------
Demo data for a fresh store: a hospital campus with ten places, the
corridors between them, four languages and three curated dashboards.

- Languages, places, connections and translations are written only when
  the places table is empty, so every seeded language has a row per place.
- Default dashboards are ensured by slug on every run.

Usage
-----
$ python -m database.seed
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import sessionmaker

from core.config import Settings, configure_logging, get_settings
from database.models import (
    Connection,
    Dashboard,
    DashboardPlace,
    Language,
    Place,
    PlaceTranslation,
)

logger = logging.getLogger(__name__)

_IMG = "https://images.unsplash.com/photo-{}?auto=format&fit=crop&w=600&q=80"

# --------------------------------------------------------------------------- #
# Seed tables
# --------------------------------------------------------------------------- #

LANGUAGES = [
    ("he", "עברית", True),
    ("en", "English", False),
    ("es", "Español", False),
    ("fr", "Français", False),
]

# id, slug, floor, zone, x, y, type, image
PLACES = [
    (1, "barzilai-main-lobby", "Ground", "Main Pavilion", 0, 0, "entry", "1526256262350-7da7584cf5eb"),
    (2, "emergency-department", "Ground", "Emergency Wing", -30, 0, "critical-care", "1580281657521-54fd42ab7bef"),
    (3, "trauma-unit", "Ground", "Emergency Wing", -45, 0, "critical-care", "1580281657521-028b5b1e0dab"),
    (4, "diagnostic-imaging", "Ground", "Clinical Services", 0, -20, "diagnostic", "1580281658629-50c0d13b7ac8"),
    (5, "cardiology-institute", "Ground", "Clinical Tower", 20, 0, "clinic", "1582719478250-c89cae4dc85b"),
    (6, "surgery-tower", "First", "Clinical Tower", 35, 0, "surgery", "1580281555110-868c1d113e09"),
    (7, "intensive-care", "Second", "Critical Care", 35, 20, "critical-care", "1582719478250-39f26015ec20"),
    (8, "maternity-pavilion", "Second", "Family Care", 20, 20, "maternity", "1519494080410-f9aa76cb4283"),
    (9, "pediatric-center", "Second", "Family Care", 0, 20, "clinic", "1582719478250-e50d00c5c6d1"),
    (10, "outpatient-clinics", "Ground", "Ambulatory Services", -30, 20, "clinic", "1582719478181-2cf4eaf458cc"),
]

# from, to, distance, orientation, landmark
CONNECTIONS = [
    (1, 2, 30, "west", "Emergency drop-off canopy"),
    (2, 1, 30, "east", "Lobby entry promenade"),
    (2, 3, 15, "west", "Trauma access corridor"),
    (3, 2, 15, "east", "Resuscitation alcove"),
    (1, 4, 20, "south", "Imaging reception"),
    (4, 1, 20, "north", "Main lobby"),
    (1, 5, 20, "east", "Clinical tower concourse"),
    (5, 1, 20, "west", "Main lobby link"),
    (5, 6, 15, "east", "Surgical preparation bridge"),
    (6, 5, 15, "west", "Cardiology foyer"),
    (6, 7, 20, "north", "Sky garden corridor"),
    (7, 6, 20, "south", "Surgery recovery"),
    (5, 8, 20, "north", "Family care elevators"),
    (8, 5, 20, "south", "Cardiology institute"),
    (1, 9, 20, "north", "Healing courtyard"),
    (9, 1, 20, "south", "Lobby garden"),
    (2, 10, 20, "north", "Ambulatory walkway"),
    (10, 2, 20, "south", "Emergency entrance"),
    (10, 9, 30, "east", "Clinic promenade"),
    (9, 10, 30, "west", "Outpatient plaza"),
    (9, 8, 20, "east", "Family lounge corridor"),
    (8, 9, 20, "west", "Pediatric nurses station"),
]

TRANSLATIONS: Dict[str, Dict[str, tuple]] = {
    "he": {
        "barzilai-main-lobby": ("לובי מרכז ברזילי", "כניסה ראשית עם עמדת קבלה, מוקד מידע ומעבר מהיר לכל אגפי המרכז הרפואי."),
        "emergency-department": ("חדר מיון", "מוקד טיפול דחוף עם צוות רב-מקצועי עבור מקרים דחופים ונפגעים."),
        "trauma-unit": ("יחידת טראומה", "יחידה מתקדמת לטיפול בפצועים מורכבים עם חדרי ניתוח וציוד הצלה ייעודי."),
        "diagnostic-imaging": ("מרכז הדמיה", "MRI, CT, אולטרסאונד וצילום רנטגן עם צוות מומחים לקריאה מיידית."),
        "cardiology-institute": ("מכון הקרדיולוגיה", "בדיקות לב מתקדמות, צנתורים ומרפאות מעקב לחולי לב."),
        "surgery-tower": ("מגדל הניתוחים", "קומפלקס חדרי ניתוח היברידיים, התאוששות ותמיכה לאחר ניתוח."),
        "intensive-care": ("יחידת טיפול נמרץ", "טיפול רציף במטופלים במצב קריטי עם ניטור מתקדם סביב השעון."),
        "maternity-pavilion": ("אגף נשים ויולדות", "חדרי לידה, אשפוז יולדות וקליניקות לבריאות האישה."),
        "pediatric-center": ("מרכז הילדים", "מרפאות ילדים, מחלקת אשפוז וחדרי משחק מותאמים למשפחות."),
        "outpatient-clinics": ("מרפאות החוץ", "מרכז מרפאות רב-תחומי לתורים מתואמים ומעקב בקהילה."),
    },
    "en": {
        "barzilai-main-lobby": ("Barzilai Main Lobby", "Primary entrance with reception, information desk, and access to all hospital wings."),
        "emergency-department": ("Emergency Department", "Acute care hub staffed 24/7 for urgent and life-threatening cases."),
        "trauma-unit": ("Trauma Unit", "Advanced trauma suites with dedicated surgical support for critical injuries."),
        "diagnostic-imaging": ("Diagnostic Imaging Center", "MRI, CT, ultrasound, and radiography with rapid reporting for clinicians."),
        "cardiology-institute": ("Cardiology Institute", "Cath labs, echo suites, and cardiology clinics for comprehensive heart care."),
        "surgery-tower": ("Surgery Tower", "Hybrid operating rooms, pre-op preparation, and post-anesthesia recovery."),
        "intensive-care": ("Intensive Care Unit", "Continuous critical care with advanced monitoring and multidisciplinary teams."),
        "maternity-pavilion": ("Maternity Pavilion", "Labor and delivery suites, mother-baby rooms, and women’s health services."),
        "pediatric-center": ("Pediatric Center", "Children’s clinics, inpatient ward, and family-friendly play spaces."),
        "outpatient-clinics": ("Outpatient Clinics", "Coordinated specialty clinics for pre-scheduled visits and follow-up care."),
    },
    "es": {
        "barzilai-main-lobby": ("Vestíbulo Principal Barzilai", "Entrada principal con recepción, información y acceso a todas las alas del hospital."),
        "emergency-department": ("Servicio de Urgencias", "Centro de atención aguda disponible 24/7 para casos urgentes y críticos."),
        "trauma-unit": ("Unidad de Trauma", "Salas avanzadas para trauma con apoyo quirúrgico dedicado para lesiones graves."),
        "diagnostic-imaging": ("Centro de Imagenología", "MRI, TAC, ecografía y radiología con informes rápidos para el personal médico."),
        "cardiology-institute": ("Instituto de Cardiología", "Laboratorios de cateterismo, ecocardiogramas y clínicas especializadas del corazón."),
        "surgery-tower": ("Torre de Cirugía", "Quirófanos híbridos con áreas de preparación y recuperación postoperatoria."),
        "intensive-care": ("UCI", "Cuidados intensivos continuos con monitoreo avanzado y equipos multidisciplinarios."),
        "maternity-pavilion": ("Pabellón de Maternidad", "Salas de parto, hospitalización materna y servicios de salud de la mujer."),
        "pediatric-center": ("Centro Pediátrico", "Clínicas infantiles, hospitalización y espacios lúdicos adaptados a las familias."),
        "outpatient-clinics": ("Clínicas Ambulatorias", "Clínicas especializadas coordinadas para consultas programadas y seguimiento."),
    },
    "fr": {
        "barzilai-main-lobby": ("Hall Principal Barzilaï", "Entrée principale avec accueil, information et accès à toutes les ailes de l’hôpital."),
        "emergency-department": ("Service des Urgences", "Centre de soins intensifs disponible 24/7 pour les cas urgents et vitaux."),
        "trauma-unit": ("Unité de Traumatologie", "Salles de trauma avancées avec support chirurgical dédié pour blessures graves."),
        "diagnostic-imaging": ("Centre d’Imagerie", "IRM, scanner, échographie et radiologie avec comptes rendus rapides."),
        "cardiology-institute": ("Institut de Cardiologie", "Laboratoires de cathétérisme, échocardiographie et cliniques spécialisées du cœur."),
        "surgery-tower": ("Tour de Chirurgie", "Blocs opératoires hybrides avec préparation préopératoire et salle de réveil."),
        "intensive-care": ("Unité de Soins Intensifs", "Prise en charge continue avec surveillance avancée et équipes multidisciplinaires."),
        "maternity-pavilion": ("Pavillon de Maternité", "Salles d’accouchement, chambres mère-bébé et services de santé féminine."),
        "pediatric-center": ("Centre Pédiatrique", "Cliniques pour enfants, service d’hospitalisation et espaces ludiques familiaux."),
        "outpatient-clinics": ("Cliniques Externes", "Cliniques spécialisées coordonnées pour consultations programmées et suivi."),
    },
}

# slug, name, description, place ids
DASHBOARDS = [
    ("barzilai-campus", "קמפוס ברזילי", "כלל מוקדי בית החולים ברזילי בתצוגה אחת.", [p[0] for p in PLACES]),
    ("critical-care-path", "מסלול טיפול נמרץ", "מסלול מהכניסה הראשית אל אגפי המיון והטיפול הקריטי.", [1, 2, 3, 4, 6, 7]),
    ("family-care-tour", "מסלול משפחות", "מחלקות נשים, יולדות וילדים במסלול נוח למשפחות.", [1, 5, 8, 9, 10]),
]


# --------------------------------------------------------------------------- #
# Seeding
# --------------------------------------------------------------------------- #

def _ensure_languages(session) -> int:
    existing = set(session.scalars(select(Language.code)))
    added = 0
    for code, label, is_default in LANGUAGES:
        if code not in existing:
            session.add(Language(code=code, label=label, is_default=is_default))
            added += 1
    return added


def _seed_places(session, settings: Settings) -> bool:
    if session.scalar(select(func.count()).select_from(Place)):
        return False

    languages_added = _ensure_languages(session)
    session.flush()
    logger.debug("[db] added %d seed languages", languages_added)

    for pid, slug, floor, zone, x, y, place_type, image in PLACES:
        session.add(
            Place(
                id=pid,
                slug=slug,
                floor=floor,
                zone=zone,
                x=x,
                y=y,
                type=place_type,
                image_url=_IMG.format(image),
                latitude=settings.base_latitude + y * settings.coordinate_scale,
                longitude=settings.base_longitude + x * settings.coordinate_scale,
            )
        )
    session.flush()

    slugs = {p[1]: p[0] for p in PLACES}
    for code, rows in TRANSLATIONS.items():
        for slug, (name, description) in rows.items():
            session.add(
                PlaceTranslation(
                    place_id=slugs[slug], language_code=code, name=name, description=description
                )
            )

    for from_id, to_id, distance, orientation, landmark in CONNECTIONS:
        session.add(
            Connection(
                from_place_id=from_id,
                to_place_id=to_id,
                distance=distance,
                orientation=orientation,
                landmark=landmark,
            )
        )
    return True


def _ensure_dashboards(session) -> None:
    known_places = set(session.scalars(select(Place.id)))
    for slug, name, description, place_ids in DASHBOARDS:
        dashboard = session.scalar(select(Dashboard).where(Dashboard.slug == slug))
        if dashboard is None:
            dashboard = Dashboard(slug=slug, name=name, description=description)
            session.add(dashboard)
            session.flush()
        linked = set(
            session.scalars(
                select(DashboardPlace.place_id).where(DashboardPlace.dashboard_id == dashboard.id)
            )
        )
        for pid in place_ids:
            if pid in known_places and pid not in linked:
                session.add(DashboardPlace(dashboard_id=dashboard.id, place_id=pid))


def seed_database(SessionLocal: sessionmaker, settings: Optional[Settings] = None) -> bool:
    """
    Populate demo data in one transaction.

    Returns
    -------
    bool
        True when places were written (the store was empty).
    """
    settings = settings or get_settings()
    with SessionLocal.begin() as session:
        seeded = _seed_places(session, settings)
        session.flush()
        _ensure_dashboards(session)

    if seeded:
        logger.info("[db] seeded %d places, %d connections", len(PLACES), len(CONNECTIONS))
    return seeded


if __name__ == "__main__":
    from database.db_setup import get_engine, init_db
    from database.queries import get_session_factory

    configure_logging()
    engine = get_engine()
    init_db(engine)
    seed_database(get_session_factory(engine))
    print(f"[db] ready at {engine.url}")

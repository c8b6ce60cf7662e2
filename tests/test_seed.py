"""
Tests for the demo data loader.

Run with: pytest tests/test_seed.py -v
"""

from sqlalchemy import func, select

from database.models import Connection, Dashboard, DashboardPlace, Language, Place, PlaceTranslation
from database.seed import CONNECTIONS, PLACES, seed_database


def _count(SessionLocal, model):
    with SessionLocal() as session:
        return session.scalar(select(func.count()).select_from(model))


def test_seed_populates_empty_store(SessionLocal, settings):
    assert seed_database(SessionLocal, settings) is True

    assert _count(SessionLocal, Place) == len(PLACES) == 10
    assert _count(SessionLocal, Connection) == len(CONNECTIONS) == 22
    assert _count(SessionLocal, Language) == 4
    assert _count(SessionLocal, PlaceTranslation) == 40
    assert _count(SessionLocal, Dashboard) == 3


def test_seed_is_idempotent(SessionLocal, settings):
    seed_database(SessionLocal, settings)
    links = _count(SessionLocal, DashboardPlace)

    assert seed_database(SessionLocal, settings) is False
    assert _count(SessionLocal, Place) == 10
    assert _count(SessionLocal, DashboardPlace) == links


def test_every_seeded_edge_has_a_reverse(seeded_wf):
    edges = {(e.from_id, e.to_id): e for e in seeded_wf.graph.list_edges()}
    for (a, b), edge in edges.items():
        assert edges[(b, a)].orientation is edge.orientation.opposite()


def test_seeded_defaults(seeded_wf):
    assert seeded_wf.places.default_language() == "he"
    slugs = {d.slug for d in seeded_wf.dashboards.list_dashboards()}
    assert slugs == {"barzilai-campus", "critical-care-path", "family-care-tour"}
    assert seeded_wf.places.get_place(7, "es").name == "UCI"


def test_seed_leaves_existing_store_languages_alone(wf, SessionLocal, settings):
    place = wf.places.create_place(slug="lobby", floor="G", zone="Z", x=0, y=0, language="en")

    assert seed_database(SessionLocal, settings) is False

    codes = {lang.code for lang in wf.places.list_languages()}
    assert codes == {"he", "en"}
    with SessionLocal() as session:
        rows = set(
            session.scalars(
                select(PlaceTranslation.language_code).where(PlaceTranslation.place_id == place.id)
            )
        )
    assert rows == {"en"}

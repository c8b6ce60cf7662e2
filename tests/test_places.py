"""
Tests for the Place Registry and the Translation Resolver.

Run with: pytest tests/test_places.py -v
"""

import math

import pytest
from sqlalchemy import func, select

from core.errors import ConflictError, NotFoundError, ValidationError
from database.models import Place, PlaceTranslation


def _translation_rows(SessionLocal, place_id):
    with SessionLocal() as session:
        rows = session.scalars(
            select(PlaceTranslation).where(PlaceTranslation.place_id == place_id)
        ).all()
    return {row.language_code: (row.name, row.description) for row in rows}


class TestCreatePlace:
    def test_created_place_is_listed_with_its_text(self, wf, SessionLocal):
        place = wf.places.create_place(
            slug="lobby", floor="Ground", zone="Main", x=0, y=0,
            name="לובי", description="כניסה ראשית", language="he",
        )

        listed = {p.id: p for p in wf.places.list_places("he")}
        assert listed[place.id].name == "לובי"
        assert listed[place.id].description == "כניסה ראשית"
        assert listed[place.id].type == "general"

    def test_english_fallback_row_uses_slug(self, wf, SessionLocal):
        place = wf.places.create_place(
            slug="lobby", floor="Ground", zone="Main", x=0, y=0,
            name="לובי", description="כניסה", language="he",
        )

        rows = _translation_rows(SessionLocal, place.id)
        assert rows == {"he": ("לובי", "כניסה"), "en": ("lobby", "כניסה")}
        assert wf.places.get_place(place.id, "en").name == "lobby"

    def test_english_creation_writes_single_row(self, wf, SessionLocal):
        place = wf.places.create_place(
            slug="wing-b", floor="1", zone="B", x=5, y=5, name="Wing B", language="EN ",
        )
        assert _translation_rows(SessionLocal, place.id) == {"en": ("Wing B", "")}

    def test_defaults_to_default_language_and_slug_name(self, wf, SessionLocal):
        place = wf.places.create_place(slug="cafe", floor="Ground", zone="Food", x=1, y=2)

        assert place.name == "cafe"
        assert set(_translation_rows(SessionLocal, place.id)) == {"he", "en"}

    def test_geographic_coordinates_are_derived(self, wf):
        place = wf.places.create_place(slug="a", floor="G", zone="Z", x=10, y=20)

        assert place.coordinates == {"x": 10.0, "y": 20.0}
        assert place.latitude == pytest.approx(31.0 + 20 * 0.001)
        assert place.longitude == pytest.approx(34.0 + 10 * 0.001)

    def test_explicit_geographic_coordinates_win(self, wf):
        place = wf.places.create_place(
            slug="a", floor="G", zone="Z", x=10, y=20, latitude=1.5, longitude=2.5,
        )
        assert (place.latitude, place.longitude) == (1.5, 2.5)

    @pytest.mark.parametrize(
        "overrides",
        [
            {"slug": "  "},
            {"floor": ""},
            {"zone": None},
            {"x": "abc"},
            {"y": math.nan},
            {"x": math.inf},
        ],
    )
    def test_invalid_input_is_rejected(self, wf, SessionLocal, overrides):
        kwargs = {"slug": "a", "floor": "G", "zone": "Z", "x": 0, "y": 0}
        kwargs.update(overrides)

        with pytest.raises(ValidationError):
            wf.places.create_place(**kwargs)

        with SessionLocal() as session:
            assert session.scalar(select(func.count()).select_from(Place)) == 0

    def test_duplicate_slug_conflicts_without_partial_writes(self, wf, SessionLocal):
        wf.places.create_place(slug="lobby", floor="G", zone="Z", x=0, y=0)

        with pytest.raises(ConflictError):
            wf.places.create_place(slug=" lobby ", floor="1", zone="Y", x=3, y=3, name="Other")

        with SessionLocal() as session:
            assert session.scalar(select(func.count()).select_from(Place)) == 1
            assert session.scalar(select(func.count()).select_from(PlaceTranslation)) == 2


class TestTranslations:
    def test_update_translation_upserts(self, wf, SessionLocal):
        place = wf.places.create_place(slug="lobby", floor="G", zone="Z", x=0, y=0, language="en")

        wf.places.update_translation("fr", place.id, "Hall", "Entrée")
        wf.places.update_translation(" FR ", place.id, "  Grand Hall ", "")

        rows = _translation_rows(SessionLocal, place.id)
        assert rows["fr"] == ("Grand Hall", "")
        assert len(rows) == 2

    def test_empty_name_is_rejected(self, wf):
        place = wf.places.create_place(slug="lobby", floor="G", zone="Z", x=0, y=0)
        with pytest.raises(ValidationError):
            wf.places.update_translation("en", place.id, "   ", "desc")

    def test_unknown_place_is_rejected(self, wf):
        with pytest.raises(NotFoundError):
            wf.places.update_translation("en", 999, "Ghost", "")

    def test_fallback_chain(self, wf, SessionLocal):
        place = wf.places.create_place(
            slug="lobby", floor="G", zone="Z", x=0, y=0,
            name="Main Lobby", description="Entrance", language="en",
        )
        with SessionLocal.begin() as session:
            bare = Place(slug="bare-room", floor="G", zone="Z", x=1, y=1, type="general")
            session.add(bare)
            session.flush()
            bare_id = bare.id

        # missing language falls back to English
        assert wf.resolver.resolve(place.id, "es").name == "Main Lobby"
        assert wf.resolver.resolve(place.id, "es").description == "Entrance"
        # no rows at all falls back to slug / empty description
        text = wf.resolver.resolve(bare_id, "he")
        assert (text.name, text.description) == ("bare-room", "")

    def test_resolve_unknown_place(self, wf):
        with pytest.raises(NotFoundError):
            wf.resolver.resolve(42, "en")

    def test_get_place_unknown(self, wf):
        with pytest.raises(NotFoundError):
            wf.places.get_place(42, "en")


class TestListPlaces:
    @pytest.fixture
    def three_places(self, wf):
        ids = {}
        for slug, name in [("g", "gamma"), ("a", "Alpha"), ("b", "beta")]:
            ids[slug] = wf.places.create_place(
                slug=slug, floor="G", zone="Z", x=0, y=0, name=name, language="en"
            ).id
        return ids

    def test_ordered_by_name_case_insensitive(self, wf, three_places):
        assert [p.name for p in wf.places.list_places("en")] == ["Alpha", "beta", "gamma"]

    def test_search_is_case_insensitive_substring(self, wf, three_places):
        assert [p.name for p in wf.places.list_places("en", search="ET")] == ["beta"]
        assert [p.name for p in wf.places.list_places("en", search="a")] == ["Alpha", "beta", "gamma"]
        assert wf.places.list_places("en", search="zzz") == []

    def test_search_uses_resolved_name(self, wf, three_places):
        wf.places.update_translation("fr", three_places["a"], "Zèbre", "")
        names = [p.name for p in wf.places.list_places("fr", search="zè")]
        assert names == ["Zèbre"]

    def test_dashboard_filter(self, wf, three_places):
        dashboard = wf.dashboards.create_dashboard("Tour", [three_places["g"], three_places["b"]])

        names = [p.name for p in wf.places.list_places("en", dashboard_id=dashboard.id)]
        assert names == ["beta", "gamma"]

    def test_unknown_dashboard(self, wf, three_places):
        with pytest.raises(NotFoundError):
            wf.places.list_places("en", dashboard_id=404)


class TestLanguages:
    def test_list_languages_default_first(self, wf):
        wf.places.add_language("fr", "Français")
        codes = [lang.code for lang in wf.places.list_languages()]
        assert codes == ["he", "en", "fr"]
        assert wf.places.default_language() == "he"

    def test_add_language_backfills_every_place(self, wf, SessionLocal):
        a = wf.places.create_place(slug="lobby", floor="G", zone="Z", x=0, y=0, name="לובי", language="he")
        b = wf.places.create_place(slug="wing-b", floor="G", zone="Z", x=0, y=0, name="Wing B",
                                   description="East wing", language="en")
        wf.places.update_translation("en", a.id, "Main Lobby", "Front door")
        with SessionLocal.begin() as session:
            c = Place(slug="chapel", floor="G", zone="Z", x=0, y=0, type="general")
            session.add(c)
            session.flush()
            session.add(PlaceTranslation(place_id=c.id, language_code="he", name="קפלה", description=""))
            c_id = c.id

        wf.places.add_language(" DE ", "Deutsch")

        with SessionLocal() as session:
            rows = session.scalars(
                select(PlaceTranslation).where(PlaceTranslation.language_code == "de")
            ).all()
        by_place = {row.place_id: (row.name, row.description) for row in rows}
        assert by_place == {
            a.id: ("Main Lobby", "Front door"),
            b.id: ("Wing B", "East wing"),
            c_id: ("chapel", ""),
        }

    def test_backfill_keeps_existing_rows(self, wf, SessionLocal):
        place = wf.places.create_place(slug="lobby", floor="G", zone="Z", x=0, y=0, language="en")
        wf.places.update_translation("es", place.id, "Vestíbulo", "")

        wf.places.add_language("es", "Español")

        assert _translation_rows(SessionLocal, place.id)["es"] == ("Vestíbulo", "")

    def test_duplicate_language_conflicts(self, wf):
        with pytest.raises(ConflictError):
            wf.places.add_language("EN", "English again")

    @pytest.mark.parametrize("code,label", [("", "German"), ("de", "  ")])
    def test_language_requires_code_and_label(self, wf, code, label):
        with pytest.raises(ValidationError):
            wf.places.add_language(code, label)

"""
Tests for the Dashboard Registry.

Run with: pytest tests/test_dashboards.py -v
"""

import pytest
from sqlalchemy import func, select

from core.errors import NotFoundError, ValidationError
from database.models import Dashboard, DashboardPlace
from navigation.dashboards import dedupe_ids, slugify


@pytest.fixture
def place_ids(wf):
    return [
        wf.places.create_place(slug=f"room-{n}", floor="1", zone="Z", x=n, y=n, language="en").id
        for n in range(3)
    ]


class TestSlugify:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("Family Care Tour!", "family-care-tour"),
            ("  ICU -- Path  ", "icu-path"),
            ("Ward 7", "ward-7"),
            ("!!!", ""),
        ],
    )
    def test_slugify(self, value, expected):
        assert slugify(value) == expected

    def test_dedupe_keeps_first_seen_order(self):
        assert dedupe_ids([3, 1, 3, 2, 1]) == [3, 1, 2]


class TestCreateDashboard:
    def test_slug_collisions_get_numeric_suffixes(self, wf, place_ids):
        slugs = [wf.dashboards.create_dashboard("Tour", place_ids[:1]).slug for _ in range(3)]
        assert slugs == ["tour", "tour-1", "tour-2"]

    def test_symbol_only_name_gets_generic_slug(self, wf, place_ids):
        assert wf.dashboards.create_dashboard("***", place_ids).slug == "dashboard"

    def test_ids_are_deduplicated(self, wf, place_ids):
        dashboard = wf.dashboards.create_dashboard(
            " Critical ", [place_ids[2], place_ids[0], place_ids[2]], description=" ICU route "
        )
        assert dashboard.name == "Critical"
        assert dashboard.description == "ICU route"
        assert dashboard.place_ids == [place_ids[2], place_ids[0]]

    def test_unknown_place_aborts_everything(self, wf, place_ids, SessionLocal):
        with pytest.raises(NotFoundError):
            wf.dashboards.create_dashboard("Broken", [place_ids[0], 999])

        with SessionLocal() as session:
            assert session.scalar(select(func.count()).select_from(Dashboard)) == 0
            assert session.scalar(select(func.count()).select_from(DashboardPlace)) == 0

    @pytest.mark.parametrize("name,ids", [("  ", [1]), ("Tour", [])])
    def test_validation(self, wf, place_ids, name, ids):
        with pytest.raises(ValidationError):
            wf.dashboards.create_dashboard(name, ids)


class TestListDashboards:
    def test_ordered_by_name_with_sorted_members(self, wf, place_ids):
        wf.dashboards.create_dashboard("zeta", [place_ids[2], place_ids[0]])
        wf.dashboards.create_dashboard("Alpha", [place_ids[1]])

        listed = wf.dashboards.list_dashboards()
        assert [d.name for d in listed] == ["Alpha", "zeta"]
        assert listed[1].place_ids == sorted([place_ids[2], place_ids[0]])

    def test_dashboards_containing_place(self, wf, place_ids):
        wf.dashboards.create_dashboard("One", [place_ids[0], place_ids[1]])
        wf.dashboards.create_dashboard("Two", [place_ids[1]])

        assert [d.name for d in wf.dashboards.list_dashboards_containing(place_ids[1])] == ["One", "Two"]
        assert [d.name for d in wf.dashboards.list_dashboards_containing(place_ids[0])] == ["One"]
        assert wf.dashboards.list_dashboards_containing(place_ids[2]) == []

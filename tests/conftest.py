"""
Shared pytest fixtures for the Wayfinder tests.

- engine / SessionLocal : fresh in-memory SQLite store per test
- settings              : deterministic settings (no env dependence)
- wf                    : the wired components (empty store)
- seeded_wf             : components over the demo hospital data
- client                : FastAPI TestClient over an empty store
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from backend.main import create_app
from core.config import Settings
from database.db_setup import get_engine, init_db
from database.models import Language
from database.queries import get_session_factory
from database.seed import seed_database
from navigation.wayfinder import Wayfinder

ADMIN_PIN = "1357"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        db_url="sqlite://",
        admin_pin=ADMIN_PIN,
        default_language="he",
        seed_demo=False,
        log_level="WARNING",
        sql_echo=False,
        base_latitude=31.0,
        base_longitude=34.0,
        coordinate_scale=0.001,
    )


@pytest.fixture
def engine():
    engine = get_engine("sqlite://", echo=False)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def SessionLocal(engine):
    return get_session_factory(engine)


@pytest.fixture
def wf(SessionLocal, settings) -> Wayfinder:
    with SessionLocal.begin() as session:
        session.add_all(
            [
                Language(code="he", label="עברית", is_default=True),
                Language(code="en", label="English", is_default=False),
            ]
        )
    return Wayfinder.build(SessionLocal, settings)


@pytest.fixture
def seeded_wf(SessionLocal, settings) -> Wayfinder:
    seed_database(SessionLocal, settings)
    return Wayfinder.build(SessionLocal, settings)


@pytest.fixture
def client(engine, settings):
    app = create_app(engine=engine, settings=settings, seed=False)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_headers():
    return {"X-Admin-Pin": ADMIN_PIN}

# database/db_setup.py
from __future__ import annotations

from typing import Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

from core.config import get_settings

# ---------------------------------------------------------------------
# Base class for ORM models
# ---------------------------------------------------------------------
Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# ---------------------------------------------------------------------
# Engine factory
# ---------------------------------------------------------------------
def get_engine(db_url: Optional[str] = None, echo: Optional[bool] = None) -> Engine:
    """
    Return a SQLAlchemy Engine for the wayfinding store.

    SQLite connections get foreign key enforcement switched on; an
    in-memory URL shares one connection so every session sees the same data.

    Example:
        engine = get_engine("sqlite://")
    """
    settings = get_settings()
    url = db_url or settings.db_url
    kwargs = {"echo": settings.sql_echo if echo is None else echo, "future": True}

    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool

    engine = create_engine(url, **kwargs)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def init_db(engine: Engine) -> None:
    """Create all tables that do not exist yet."""
    # models must be imported so their tables are registered on Base
    from database import models  # noqa: F401

    Base.metadata.create_all(engine)

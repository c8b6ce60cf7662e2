# database/queries.py
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from core.errors import ConflictError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------
# Session factory
# ---------------------------------------------------------------------
def get_session_factory(engine: Engine) -> sessionmaker:
    """Return the session factory every component is constructed with."""
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


# ---------------------------------------------------------------------
# Transaction helpers
# ---------------------------------------------------------------------
@contextmanager
def write_transaction(SessionLocal: sessionmaker, conflict_message: str) -> Iterator[Session]:
    """
    Run a multi-row write as one transaction.

    Commits on success and rolls back on any exception. A uniqueness
    violation reported by the store surfaces as ConflictError.
    """
    try:
        with SessionLocal.begin() as session:
            yield session
    except IntegrityError as e:
        logger.info("[db] integrity error rolled back: %s", e.orig)
        raise ConflictError(conflict_message) from e


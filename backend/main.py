"""
Wayfinder Backend API
=====================

FastAPI service exposing the wayfinding core: places and their
translations, the connection graph, curated dashboards and directions.

Design Intent
-------------
• One SQLAlchemy engine per app; every component receives the same
  session factory (no module-level database handles).
• Core failures are typed (`core.errors`) and mapped to HTTP status codes
  in exactly one place (the exception handler below).
• Administrative mutations are gated by a shared PIN header; everything
  else is public.
• Schema creation and demo seeding run in the lifespan hook, so importing
  this module never touches the database.

Run with:
    uvicorn backend.main:app --reload
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine

from backend.routes.admin import router as admin_router
from backend.routes.navigation import router as navigation_router
from backend.routes.places import router as places_router
from core.config import Settings, configure_logging, get_settings
from core.errors import (
    ConflictError,
    NotFoundError,
    RouteUnavailableError,
    ValidationError,
    WayfindingError,
)
from core.health import system_health
from core.metadata import __project__, __version__, get_metadata
from database.db_setup import get_engine, init_db
from database.queries import get_session_factory
from database.seed import seed_database
from navigation.wayfinder import Wayfinder

logger = logging.getLogger(__name__)

# --------------------------------------------------------------------------- #
# Error mapping
# --------------------------------------------------------------------------- #

STATUS_BY_ERROR = {
    ValidationError: 400,
    NotFoundError: 404,
    ConflictError: 409,
    RouteUnavailableError: 422,
}


def status_for(error: WayfindingError) -> int:
    for error_type, status in STATUS_BY_ERROR.items():
        if isinstance(error, error_type):
            return status
    return 400


async def wayfinding_error_handler(request: Request, exc: WayfindingError) -> JSONResponse:
    status = status_for(exc)
    logger.info("[backend] %s %s -> %d (%s)", request.method, request.url.path, status, exc.category)
    return JSONResponse(status_code=status, content=exc.as_dict())


# --------------------------------------------------------------------------- #
# App factory
# --------------------------------------------------------------------------- #

def create_app(
    engine: Optional[Engine] = None,
    settings: Optional[Settings] = None,
    seed: Optional[bool] = None,
) -> FastAPI:
    """
    Build the FastAPI app around one engine.

    Parameters
    ----------
    engine : Engine, optional
        Defaults to the engine for `WAYFINDER_DB_URL`.
    settings : Settings, optional
        Defaults to settings read from the environment.
    seed : bool, optional
        Seed demo data on startup; defaults to `settings.seed_demo`.
    """
    settings = settings or get_settings()
    engine = engine or get_engine(settings.db_url)
    should_seed = settings.seed_demo if seed is None else seed
    SessionLocal = get_session_factory(engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings.log_level)
        init_db(engine)
        if should_seed:
            seed_database(SessionLocal, settings)
        logger.info("[backend] %s %s ready on %s", __project__, __version__, engine.url)
        yield

    app = FastAPI(
        title="Wayfinder Backend API",
        version=__version__,
        description=(
            "Indoor wayfinding backend.\n"
            "- Places with localized names and a fallback chain.\n"
            "- Directed connection graph with bidirectional creation.\n"
            "- Curated dashboards and step-by-step directions."
        ),
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.wayfinder = Wayfinder.build(SessionLocal, settings)

    app.add_exception_handler(WayfindingError, wayfinding_error_handler)
    app.include_router(places_router)
    app.include_router(navigation_router)
    app.include_router(admin_router)

    # ----------------------------------------------------------------------- #
    # Core Routes
    # ----------------------------------------------------------------------- #

    @app.get("/")
    def root():
        """Basic liveness probe."""
        return {
            "status": "ok",
            "message": f"{__project__} backend is live.",
            "version": app.version,
            "metadata": get_metadata(),
        }

    @app.get("/health")
    def health():
        """Database connectivity plus process metrics."""
        return system_health(app.state.engine)

    return app


app = create_app()

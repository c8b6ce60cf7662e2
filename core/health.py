"""
core/health.py
--------------
System health diagnostics for the Wayfinder backend.

Purpose
-------
- Used by the FastAPI `/health` endpoint.
- Validates database connectivity and reports graph size.
- Reports uptime, version and CPU/memory usage.
- Returns a JSON-safe dict ready for serialization.
"""

from __future__ import annotations

import logging
import platform
import time
from typing import Any, Dict

import psutil
from sqlalchemy import func, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.metadata import __version__
from database.models import Connection, Place

logger = logging.getLogger(__name__)

# Cache the process start time for uptime calculation
START_TIME = time.time()


def system_health(engine: Engine) -> Dict[str, Any]:
    """
    Return structured backend health diagnostics.

    Parameters
    ----------
    engine : Engine
        Engine backing the place / connection store.

    Returns
    -------
    dict
        JSON-safe health report.
    """
    status = "ok"
    message = "Backend operational."
    database_connected = False
    place_count = None
    connection_count = None

    # --- Database connectivity test ---
    try:
        with Session(engine) as session:
            place_count = session.scalar(select(func.count()).select_from(Place))
            connection_count = session.scalar(select(func.count()).select_from(Connection))
        database_connected = True
    except SQLAlchemyError as e:
        status = "degraded"
        message = f"Database check failed: {e.__class__.__name__}"
        logger.warning("[health] database check failed: %s", e)

    # --- System metrics ---
    try:
        cpu_load = psutil.cpu_percent(interval=0.2)
        memory_usage = round(psutil.Process().memory_info().rss / (1024 * 1024), 2)
    except psutil.Error:
        cpu_load = None
        memory_usage = None

    return {
        "status": status,
        "message": message,
        "version": __version__,
        "database_connected": database_connected,
        "database_backend": engine.dialect.name,
        "places": place_count,
        "connections": connection_count,
        "cpu_load": cpu_load,
        "memory_usage": memory_usage,
        "uptime_sec": round(time.time() - START_TIME, 2),
        "system": platform.system(),
        "release": platform.release(),
    }

"""
core/config.py
--------------
Central configuration hub for the Wayfinder backend.

- Reads database, admin and locale settings from environment variables.
- Exposes an immutable Settings object (cached per process).
- Configures the standard logging module once for the app.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
DEFAULT_DB_PATH = os.path.join(ROOT_DIR, "database", "wayfinder.db")

DEFAULT_ADMIN_PIN = "2468"
DEFAULT_LANGUAGE = "he"
FALLBACK_LANGUAGE = "en"

# Planar (x, y) metres are projected onto lat/lon around this base point.
BASE_LATITUDE = 31.66325
BASE_LONGITUDE = 34.55996
COORDINATE_SCALE = 0.00001


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return float(raw)


@dataclass(frozen=True)
class Settings:
    db_url: str
    admin_pin: str
    default_language: str
    seed_demo: bool
    log_level: str
    sql_echo: bool
    base_latitude: float
    base_longitude: float
    coordinate_scale: float

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            db_url=os.getenv("WAYFINDER_DB_URL", f"sqlite:///{DEFAULT_DB_PATH}"),
            admin_pin=(os.getenv("WAYFINDER_ADMIN_PIN") or DEFAULT_ADMIN_PIN).strip(),
            default_language=(
                os.getenv("WAYFINDER_DEFAULT_LANGUAGE") or DEFAULT_LANGUAGE
            ).strip().lower(),
            seed_demo=_env_flag("WAYFINDER_SEED_DEMO", True),
            log_level=os.getenv("WAYFINDER_LOG_LEVEL", "INFO").upper(),
            sql_echo=_env_flag("WAYFINDER_SQL_ECHO", False),
            base_latitude=_env_float("WAYFINDER_BASE_LATITUDE", BASE_LATITUDE),
            base_longitude=_env_float("WAYFINDER_BASE_LONGITUDE", BASE_LONGITUDE),
            coordinate_scale=_env_float("WAYFINDER_COORDINATE_SCALE", COORDINATE_SCALE),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return process-wide settings read from the environment."""
    return Settings.from_env()


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Install a root handler once; later calls only adjust the level."""
    level_name = (level or get_settings().log_level).upper()
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level_name, format=LOG_FORMAT)
    else:
        root.setLevel(level_name)

"""
backend/deps.py
---------------
FastAPI dependencies shared by all routers.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Header, HTTPException, Request

from core.admin import validate_admin_pin
from navigation.wayfinder import Wayfinder

logger = logging.getLogger(__name__)


def get_wayfinder(request: Request) -> Wayfinder:
    return request.app.state.wayfinder


def require_admin(
    request: Request,
    x_admin_pin: Optional[str] = Header(None, alias="X-Admin-Pin"),
) -> None:
    """Reject administrative calls without the shared PIN."""
    if not validate_admin_pin(x_admin_pin, request.app.state.settings.admin_pin):
        logger.warning("[backend] rejected admin call to %s", request.url.path)
        raise HTTPException(status_code=401, detail="Unauthorized.")

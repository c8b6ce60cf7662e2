"""
core/admin.py
-------------
Shared-secret gate for administrative mutations.
"""

from __future__ import annotations

import hmac
from typing import Optional

from core.config import get_settings


def validate_admin_pin(candidate: Optional[str], expected: Optional[str] = None) -> bool:
    """Return True when the supplied PIN matches the configured one."""
    if not candidate:
        return False
    expected = (expected if expected is not None else get_settings().admin_pin).strip()
    if not expected:
        return False
    return hmac.compare_digest(candidate.strip().encode(), expected.encode())

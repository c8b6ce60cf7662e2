"""
Navigation Router — Wayfinder
=============================

- GET /dashboards   → curated place subsets
- GET /directions   → hop path with localized step instructions
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, Query

from backend.deps import get_wayfinder
from navigation.wayfinder import Wayfinder

router = APIRouter(tags=["navigation"])


@router.get("/dashboards")
def list_dashboards(wf: Wayfinder = Depends(get_wayfinder)) -> Dict[str, Any]:
    return {"dashboards": [d.as_dict() for d in wf.dashboards.list_dashboards()]}


@router.get("/directions")
def directions(
    from_id: int = Query(..., description="Starting place id"),
    to_id: int = Query(..., description="Destination place id"),
    language: str = Query("en"),
    wf: Wayfinder = Depends(get_wayfinder),
) -> Dict[str, Any]:
    return wf.directions.compute_directions(from_id, to_id, language).as_dict()

"""
Admin Router — Wayfinder
========================

Administrative mutations, gated by the shared `X-Admin-Pin` header.

- POST /admin/auth          → check a PIN (body)
- POST /admin/places        → create a place
- POST /admin/connections   → create a connection (optionally bidirectional)
- POST /admin/dashboards    → create a dashboard
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from backend.deps import get_wayfinder, require_admin
from core.admin import validate_admin_pin
from navigation.wayfinder import Wayfinder

router = APIRouter(prefix="/admin", tags=["admin"])


class PinRequest(BaseModel):
    pin: Optional[str] = None


class CreatePlaceRequest(BaseModel):
    slug: str = ""
    floor: str = ""
    zone: str = ""
    x: float
    y: float
    type: Optional[str] = None
    image_url: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    language: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class CreateConnectionRequest(BaseModel):
    from_id: int
    to_id: int
    orientation: str
    distance: float
    landmark: Optional[str] = None
    bidirectional: bool = True
    language: str = "en"


class CreateDashboardRequest(BaseModel):
    name: str = ""
    description: Optional[str] = None
    place_ids: List[int] = []


@router.post("/auth")
def check_pin(body: PinRequest, request: Request) -> Dict[str, Any]:
    if not validate_admin_pin(body.pin, request.app.state.settings.admin_pin):
        raise HTTPException(status_code=401, detail="Invalid PIN.")
    return {"success": True}


@router.post("/places", dependencies=[Depends(require_admin)])
def create_place(
    body: CreatePlaceRequest,
    wf: Wayfinder = Depends(get_wayfinder),
) -> Dict[str, Any]:
    place = wf.places.create_place(**body.model_dump())
    language = body.language or wf.places.default_language()
    return {
        "place": place.as_dict(),
        "places": [p.as_dict() for p in wf.places.list_places(language)],
    }


@router.post("/connections", dependencies=[Depends(require_admin)])
def create_connection(
    body: CreateConnectionRequest,
    wf: Wayfinder = Depends(get_wayfinder),
) -> Dict[str, Any]:
    wf.graph.create_connection(
        body.from_id,
        body.to_id,
        body.orientation,
        body.distance,
        landmark=body.landmark,
        bidirectional=body.bidirectional,
    )
    return {
        "success": True,
        "neighbors": {
            "from": [n.as_dict() for n in wf.graph.list_neighbors(body.from_id, body.language)],
            "to": [n.as_dict() for n in wf.graph.list_neighbors(body.to_id, body.language)],
        },
    }


@router.post("/dashboards", dependencies=[Depends(require_admin)])
def create_dashboard(
    body: CreateDashboardRequest,
    wf: Wayfinder = Depends(get_wayfinder),
) -> Dict[str, Any]:
    dashboard = wf.dashboards.create_dashboard(
        body.name, body.place_ids, description=body.description
    )
    return {"dashboard": dashboard.as_dict()}

"""
Places Router — Wayfinder
=========================

Endpoints:
----------
- GET  /languages                   → supported languages, default first
- POST /languages                   → add a language (back-fills translations)
- GET  /places                      → localized listing (search / dashboard filter)
- GET  /places/{id}                 → one localized place
- POST /places/{id}/translation     → upsert a translation
- GET  /places/{id}/neighbors       → outgoing connections, nearest first
- GET  /places/{id}/dashboards      → dashboards containing the place
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from backend.deps import get_wayfinder
from navigation.wayfinder import Wayfinder

router = APIRouter(tags=["places"])


class LanguageRequest(BaseModel):
    code: str = ""
    label: str = ""


class TranslationRequest(BaseModel):
    language: str = ""
    name: str = ""
    description: Optional[str] = ""


# --------------------------------------------------------------------------- #
# Languages
# --------------------------------------------------------------------------- #

@router.get("/languages")
def list_languages(wf: Wayfinder = Depends(get_wayfinder)) -> Dict[str, Any]:
    return {"languages": [lang.as_dict() for lang in wf.places.list_languages()]}


@router.post("/languages")
def add_language(
    request: LanguageRequest,
    wf: Wayfinder = Depends(get_wayfinder),
) -> Dict[str, Any]:
    wf.places.add_language(request.code, request.label)
    return {"languages": [lang.as_dict() for lang in wf.places.list_languages()]}


# --------------------------------------------------------------------------- #
# Places
# --------------------------------------------------------------------------- #

@router.get("/places")
def list_places(
    language: str = Query("en", description="Language code for names and descriptions"),
    search: Optional[str] = Query(None, description="Case-insensitive name filter"),
    dashboard_id: Optional[int] = Query(None, description="Restrict to one dashboard"),
    wf: Wayfinder = Depends(get_wayfinder),
) -> Dict[str, Any]:
    places = wf.places.list_places(language, search=search, dashboard_id=dashboard_id)
    return {"places": [p.as_dict() for p in places]}


@router.get("/places/{place_id}")
def get_place(
    place_id: int,
    language: str = Query("en"),
    wf: Wayfinder = Depends(get_wayfinder),
) -> Dict[str, Any]:
    return {"place": wf.places.get_place(place_id, language).as_dict()}


@router.post("/places/{place_id}/translation")
def update_translation(
    place_id: int,
    request: TranslationRequest,
    wf: Wayfinder = Depends(get_wayfinder),
) -> Dict[str, Any]:
    wf.places.update_translation(request.language, place_id, request.name, request.description)
    return {"success": True}


@router.get("/places/{place_id}/neighbors")
def list_neighbors(
    place_id: int,
    language: str = Query("en"),
    wf: Wayfinder = Depends(get_wayfinder),
) -> Dict[str, Any]:
    return {"neighbors": [n.as_dict() for n in wf.graph.list_neighbors(place_id, language)]}


@router.get("/places/{place_id}/dashboards")
def list_place_dashboards(
    place_id: int,
    wf: Wayfinder = Depends(get_wayfinder),
) -> Dict[str, Any]:
    dashboards = wf.dashboards.list_dashboards_containing(place_id)
    return {"dashboards": [d.as_dict() for d in dashboards]}

"""
navigation/wayfinder.py
-----------------------
Wires the five components around one injected session factory.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import sessionmaker

from core.config import Settings
from navigation.connections import ConnectionGraphStore
from navigation.dashboards import DashboardRegistry
from navigation.directions import DirectionsEngine
from navigation.places import PlaceRegistry
from navigation.translations import TranslationResolver


@dataclass
class Wayfinder:
    resolver: TranslationResolver
    places: PlaceRegistry
    graph: ConnectionGraphStore
    dashboards: DashboardRegistry
    directions: DirectionsEngine

    @classmethod
    def build(cls, SessionLocal: sessionmaker, settings: Optional[Settings] = None) -> "Wayfinder":
        resolver = TranslationResolver(SessionLocal)
        places = PlaceRegistry(SessionLocal, resolver=resolver, settings=settings)
        graph = ConnectionGraphStore(SessionLocal, resolver=resolver)
        return cls(
            resolver=resolver,
            places=places,
            graph=graph,
            dashboards=DashboardRegistry(SessionLocal),
            directions=DirectionsEngine(places, graph, resolver),
        )

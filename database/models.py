# database/models.py
from sqlalchemy import (
    Boolean,
    Column,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

# Important: must match Base from db_setup.py
from .db_setup import Base


class Language(Base):
    """Supported UI locale. Insertion order breaks ties between defaults."""
    __tablename__ = "languages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(32), nullable=False, unique=True)
    label = Column(String(100), nullable=False)
    is_default = Column(Boolean, nullable=False, default=False)

    def __repr__(self):
        return f"<Language(code={self.code}, label={self.label}, is_default={self.is_default})>"


class Place(Base):
    """Navigable point of interest."""
    __tablename__ = "places"

    id = Column(Integer, primary_key=True, autoincrement=True)
    slug = Column(String(200), nullable=False, unique=True, index=True)
    floor = Column(String(100), nullable=False)
    zone = Column(String(200), nullable=False)
    x = Column(Float, nullable=False)
    y = Column(Float, nullable=False)
    type = Column(String(100), nullable=False, default="general")
    image_url = Column(Text, nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)

    translations = relationship(
        "PlaceTranslation",
        back_populates="place",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<Place(id={self.id}, slug={self.slug}, floor={self.floor})>"


class PlaceTranslation(Base):
    """Localized name/description, unique per (place, language)."""
    __tablename__ = "place_translations"

    place_id = Column(
        Integer, ForeignKey("places.id", ondelete="CASCADE"), primary_key=True
    )
    language_code = Column(String(32), primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=False, default="")

    place = relationship("Place", back_populates="translations")

    def __repr__(self):
        return f"<PlaceTranslation(place_id={self.place_id}, language={self.language_code}, name={self.name})>"


class Connection(Base):
    """Directed, weighted edge between two places."""
    __tablename__ = "connections"
    __table_args__ = (
        UniqueConstraint("from_place_id", "to_place_id", name="uq_connection_pair"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    from_place_id = Column(
        Integer, ForeignKey("places.id", ondelete="CASCADE"), nullable=False, index=True
    )
    to_place_id = Column(
        Integer, ForeignKey("places.id", ondelete="CASCADE"), nullable=False
    )
    distance = Column(Float, nullable=False)
    orientation = Column(String(16), nullable=False)
    landmark = Column(Text, nullable=True)

    def __repr__(self):
        return (
            f"<Connection(from={self.from_place_id}, to={self.to_place_id}, "
            f"distance={self.distance}, orientation={self.orientation})>"
        )


class Dashboard(Base):
    """Named, curated subset of places."""
    __tablename__ = "dashboards"

    id = Column(Integer, primary_key=True, autoincrement=True)
    slug = Column(String(200), nullable=False, unique=True, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=False, default="")

    places = relationship(
        "DashboardPlace",
        back_populates="dashboard",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<Dashboard(id={self.id}, slug={self.slug}, name={self.name})>"


class DashboardPlace(Base):
    __tablename__ = "dashboard_places"

    dashboard_id = Column(
        Integer, ForeignKey("dashboards.id", ondelete="CASCADE"), primary_key=True
    )
    place_id = Column(
        Integer, ForeignKey("places.id", ondelete="CASCADE"), primary_key=True, index=True
    )

    dashboard = relationship("Dashboard", back_populates="places")

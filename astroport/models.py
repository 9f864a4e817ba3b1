from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Float, Index, Integer, String
from .database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AirportCache(Base):
    __tablename__ = "airport_cache"
    id = Column(Integer, primary_key=True, index=True)
    airport_id = Column(String, unique=True, index=True, nullable=False)
    name = Column(String)
    state = Column(String)
    country = Column(String)
    latitude = Column(Float)
    longitude = Column(Float)
    elevation = Column(Float)
    cached_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    __table_args__ = (
        Index("idx_airport_cache_lat_lon", "latitude", "longitude"),
    )

    def __repr__(self) -> str:
        return f"<AirportCache {self.airport_id} {self.name}>"


class StationCache(Base):
    __tablename__ = "station_cache"
    id = Column(Integer, primary_key=True, index=True)
    station_id = Column(String, unique=True, index=True, nullable=False)
    site = Column(String)
    state = Column(String)
    country = Column(String)
    latitude = Column(Float)
    longitude = Column(Float)
    elevation = Column(Integer)
    cached_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    __table_args__ = (
        Index("idx_station_cache_lat_lon", "latitude", "longitude"),
    )

    def __repr__(self) -> str:
        return f"<StationCache {self.station_id} {self.site}>"

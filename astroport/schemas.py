from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AsteroidPath(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_planet: str = Field(alias="fromPlanet")
    to_planet: str = Field(alias="toPlanet")
    from_date: str = Field(alias="fromDate")
    to_date: str = Field(alias="toDate")


class Airport(BaseModel):
    id: str
    name: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    elevation: Optional[float] = None


class Station(BaseModel):
    id: str
    site: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    elevation: Optional[int] = None


class Health(BaseModel):
    status: str
    timestamp: datetime
    service: str
    version: str


def airport_from_row(row) -> Airport:
    return Airport(
        id=row.airport_id,
        name=row.name,
        state=row.state,
        country=row.country,
        latitude=row.latitude,
        longitude=row.longitude,
        elevation=row.elevation,
    )


def station_from_row(row) -> Station:
    return Station(
        id=row.station_id,
        site=row.site,
        state=row.state,
        country=row.country,
        latitude=row.latitude,
        longitude=row.longitude,
        elevation=row.elevation,
    )

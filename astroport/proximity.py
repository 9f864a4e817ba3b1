"""Bidirectional airport/station proximity lookups.

The anchor (an airport or a station) is resolved from the local cache tables
first and from the aviation weather API when it is missing. Its coordinates
seed an axis-aligned box of ``closest_by`` degrees on each side, which is then
matched against the opposite table. Degrees are not latitude-corrected, so the
box narrows in real distance away from the equator.

Any failure along the way yields an empty list.
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from . import aviation, repository, schemas
from .cache import airport_cache, station_cache

logger = logging.getLogger(__name__)


def bounding_box(lat: float, lon: float, radius: float) -> Tuple[float, float, float, float]:
    """Return ``(min_lat, max_lat, min_lon, max_lon)`` around a point."""
    return lat - radius, lat + radius, lon - radius, lon + radius


def _has_coordinates(anchor) -> bool:
    return anchor is not None and anchor.latitude is not None and anchor.longitude is not None


def _resolve_airport(db: Session, airport_id: str) -> Optional[schemas.Airport]:
    row = repository.airports.find_by_id(db, airport_id)
    if row is not None:
        logger.info(
            "Found airport %s in local database at lat=%s, lon=%s",
            airport_id, row.latitude, row.longitude,
        )
        return schemas.airport_from_row(row)
    logger.info("Airport %s not found in local database, trying external API", airport_id)
    return aviation.fetch_airport(airport_id)


def _resolve_station(db: Session, station_id: str) -> Optional[schemas.Station]:
    row = repository.stations.find_by_id(db, station_id)
    if row is not None:
        logger.info(
            "Found station %s in local database at lat=%s, lon=%s",
            station_id, row.latitude, row.longitude,
        )
        return schemas.station_from_row(row)
    logger.info("Station %s not found in local database, trying external API", station_id)
    return aviation.fetch_station(station_id)


def find_closest_stations(db: Session, airport_id: str, closest_by: float) -> List[schemas.Station]:
    logger.info("Fetching closest stations for airport: %s, closestBy: %s", airport_id, closest_by)
    try:
        airport = _resolve_airport(db, airport_id)
        if not _has_coordinates(airport):
            logger.warning("Airport %s not found or has invalid coordinates", airport_id)
            return []

        box = bounding_box(airport.latitude, airport.longitude, closest_by)
        logger.debug("Bounding box for %s: lat[%s,%s] lon[%s,%s]", airport_id, *box)
        rows = repository.stations.find_in_bounding_box(db, *box)
        stations = [schemas.station_from_row(r) for r in rows]
        logger.info("Found %d stations in bounding box", len(stations))
        return stations
    except Exception:
        logger.error("Error fetching stations for airport %s", airport_id, exc_info=True)
        return []


def find_closest_airports(db: Session, station_id: str, closest_by: float) -> List[schemas.Airport]:
    logger.info("Fetching closest airports for station: %s, closestBy: %s", station_id, closest_by)
    try:
        station = _resolve_station(db, station_id)
        if not _has_coordinates(station):
            logger.warning("Station %s not found or has invalid coordinates", station_id)
            return []

        box = bounding_box(station.latitude, station.longitude, closest_by)
        logger.debug("Bounding box for %s: lat[%s,%s] lon[%s,%s]", station_id, *box)
        rows = repository.airports.find_in_bounding_box(db, *box)
        airports = [schemas.airport_from_row(r) for r in rows]
        logger.info("Found %d airports in bounding box", len(airports))
        return airports
    except Exception:
        logger.error("Error fetching airports for station %s", station_id, exc_info=True)
        return []


def closest_stations(db: Session, airport_id: str, closest_by: float) -> List[schemas.Station]:
    """Weather stations within ``closest_by`` degrees of an airport, cached."""
    return station_cache.get_or_compute(
        f"{airport_id}-{closest_by}",
        lambda: find_closest_stations(db, airport_id, closest_by),
    )


def closest_airports(db: Session, station_id: str, closest_by: float) -> List[schemas.Airport]:
    """Airports within ``closest_by`` degrees of a weather station, cached."""
    return airport_cache.get_or_compute(
        f"{station_id}-{closest_by}",
        lambda: find_closest_airports(db, station_id, closest_by),
    )

"""Startup import of the OurAirports reference CSV.

Every accepted row becomes one airport and one station with the same
coordinates; the station copy stores elevation as an integer. Download the
dataset from https://davidmegginson.github.io/ourairports-data/airports.csv
"""

import csv
import logging
import math
import os
from typing import List, Optional, Sequence, Tuple

from sqlalchemy.orm import Session

from .config import AIRPORTS_CSV
from . import models, repository

logger = logging.getLogger(__name__)

MIN_FIELDS = 13

# Column positions in airports.csv
IDENT = 1
TYPE = 2
NAME = 3
LATITUDE = 4
LONGITUDE = 5
ELEVATION = 6
ISO_COUNTRY = 8
ISO_REGION = 9


def _parse_float(value: Optional[str]) -> Optional[float]:
    if value is None or not value.strip():
        return None
    try:
        parsed = float(value.strip())
    except ValueError:
        return None
    # "NaN" and "inf" parse but are not usable coordinates or elevations
    return parsed if math.isfinite(parsed) else None


def _state_from_region(iso_region: str) -> str:
    # "US-CO" -> "CO"
    if "-" in iso_region:
        return iso_region.split("-")[1]
    return ""


def parse_row(fields: Sequence[str]) -> Optional[Tuple[models.AirportCache, models.StationCache]]:
    """Build the airport and station rows for one CSV line, or None to skip it."""

    if len(fields) < MIN_FIELDS:
        return None
    fields = [f.strip() for f in fields]
    ident = fields[IDENT]
    kind = fields[TYPE]
    if len(ident) != 4 or not ("airport" in kind or "heliport" in kind):
        return None

    lat = _parse_float(fields[LATITUDE])
    lon = _parse_float(fields[LONGITUDE])
    if lat is None or lon is None:
        return None
    elev = _parse_float(fields[ELEVATION])
    state = _state_from_region(fields[ISO_REGION])
    country = fields[ISO_COUNTRY]

    airport = models.AirportCache(
        airport_id=ident,
        name=fields[NAME],
        state=state,
        country=country,
        latitude=lat,
        longitude=lon,
        elevation=elev,
    )
    station = models.StationCache(
        station_id=ident,
        site=fields[NAME],
        state=state,
        country=country,
        latitude=lat,
        longitude=lon,
        elevation=int(elev) if elev is not None else None,
    )
    return airport, station


def load_airports_database(db: Session, path: str = AIRPORTS_CSV) -> int:
    """Fill both cache tables from ``path`` and return the number of rows loaded.

    A missing file, an already populated database or any error while loading
    leaves the service running on the external API fallback alone.
    """

    logger.info("Loading airports database from %s", path)
    if not os.path.exists(path):
        logger.warning("%s not found, skipping database load", path)
        return 0

    try:
        if repository.airports.count(db) > 0:
            logger.info("Airport cache already populated, skipping database load")
            return 0

        airports: List[models.AirportCache] = []
        stations: List[models.StationCache] = []
        with open(path, newline="", encoding="utf-8") as fh:
            reader = csv.reader(fh)
            next(reader, None)
            for fields in reader:
                try:
                    parsed = parse_row(fields)
                except (ValueError, OverflowError):
                    logger.debug("Skipping malformed row %s", fields[:2])
                    continue
                if parsed is None:
                    continue
                airport, station = parsed
                airports.append(airport)
                stations.append(station)

        logger.info("Saving %d airports to database", len(airports))
        repository.airports.bulk_insert(db, airports)
        logger.info("Saving %d stations to database", len(stations))
        repository.stations.bulk_insert(db, stations)
    except Exception:
        db.rollback()
        logger.error("Error loading airports database", exc_info=True)
        return 0

    logger.info("Successfully loaded %d airports/stations from CSV", len(airports))
    return len(airports)

import logging
import math
from typing import Optional

import httpx

from .config import AVIATION_API_URL, AVIATION_TIMEOUT, USER_AGENT
from . import schemas

logger = logging.getLogger(__name__)

METAR_PATH = "/api/data/metar"


def _as_float(value) -> float:
    # Missing or unparseable numbers degrade to 0.0 instead of failing.
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return 0.0
    return parsed if math.isfinite(parsed) else 0.0


def _as_text(value, default: str = "") -> str:
    if value is None:
        return default
    return str(value)


def fetch_metar_record(ident: str) -> Optional[dict]:
    """Return the first METAR record for ``ident``, or None on any failure."""

    params = {"ids": ident, "format": "json"}
    logger.debug("Requesting METAR metadata for %s", ident)
    try:
        resp = httpx.get(
            f"{AVIATION_API_URL}{METAR_PATH}",
            params=params,
            headers={"User-Agent": USER_AGENT},
            timeout=AVIATION_TIMEOUT,
        )
        resp.raise_for_status()
        data = resp.json()
    except httpx.TimeoutException:
        logger.warning("Aviation weather lookup for %s timed out", ident)
        return None
    except (httpx.HTTPError, ValueError) as exc:
        logger.warning("Aviation weather lookup for %s failed: %s", ident, exc)
        return None

    if not isinstance(data, list) or not data:
        logger.warning("No aviation weather data found for %s", ident)
        return None
    first = data[0]
    if not isinstance(first, dict):
        logger.warning("Unexpected aviation weather record for %s", ident)
        return None
    return first


def _record_name(record: dict) -> str:
    return _as_text(record.get("name"), _as_text(record.get("site")))


def fetch_airport(ident: str) -> Optional[schemas.Airport]:
    record = fetch_metar_record(ident)
    if record is None:
        return None
    airport = schemas.Airport(
        id=_as_text(record.get("icaoId"), ident),
        name=_record_name(record),
        state=_as_text(record.get("state")),
        country=_as_text(record.get("country")),
        latitude=_as_float(record.get("lat")),
        longitude=_as_float(record.get("lon")),
        elevation=_as_float(record.get("elev")),
    )
    logger.debug("Found airport from external API: %s", airport)
    return airport


def fetch_station(ident: str) -> Optional[schemas.Station]:
    record = fetch_metar_record(ident)
    if record is None:
        return None
    station = schemas.Station(
        id=_as_text(record.get("icaoId"), ident),
        site=_record_name(record),
        state=_as_text(record.get("state")),
        country=_as_text(record.get("country")),
        latitude=_as_float(record.get("lat")),
        longitude=_as_float(record.get("lon")),
        elevation=int(_as_float(record.get("elev"))),
    )
    logger.debug("Found station from external API: %s", station)
    return station

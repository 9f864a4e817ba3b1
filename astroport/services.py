import logging
from datetime import date
from typing import Iterable, List

import httpx
from pydantic import BaseModel, ConfigDict

from .cache import asteroid_cache
from .config import NASA_API_KEY, NASA_API_URL, NASA_TIMEOUT, USER_AGENT
from . import schemas

logger = logging.getLogger(__name__)


class CloseApproach(BaseModel):
    model_config = ConfigDict(extra="ignore")

    close_approach_date: str
    orbiting_body: str


class NasaAsteroid(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    name: str | None = None
    close_approach_data: List[CloseApproach] = []


def fetch_close_approaches(asteroid_id: str) -> List[CloseApproach]:
    """Fetch the close-approach history of a single asteroid from NASA."""

    resp = httpx.get(
        f"{NASA_API_URL}/neo/{asteroid_id}",
        params={"api_key": NASA_API_KEY},
        headers={"User-Agent": USER_AGENT},
        timeout=NASA_TIMEOUT,
    )
    resp.raise_for_status()
    asteroid = NasaAsteroid.model_validate(resp.json())
    return asteroid.close_approach_data


def extract_transitions(
    observations: Iterable[CloseApproach], from_date: date, to_date: date
) -> List[schemas.AsteroidPath]:
    """Turn close approaches into the sequence of orbiting-body changes.

    Only approaches dated within ``[from_date, to_date]`` count. They are
    ordered by their ``YYYY-MM-DD`` string, and a path is emitted each time the
    orbiting body differs from the previous approach's body.
    """

    in_range = [
        o for o in observations
        if from_date <= date.fromisoformat(o.close_approach_date) <= to_date
    ]
    in_range.sort(key=lambda o: o.close_approach_date)

    paths: List[schemas.AsteroidPath] = []
    if len(in_range) < 2:
        return paths

    current_body = in_range[0].orbiting_body
    current_from = in_range[0].close_approach_date
    for approach in in_range[1:]:
        if approach.orbiting_body == current_body:
            continue
        paths.append(
            schemas.AsteroidPath(
                from_planet=current_body,
                to_planet=approach.orbiting_body,
                from_date=current_from,
                to_date=approach.close_approach_date,
            )
        )
        current_body = approach.orbiting_body
        current_from = approach.close_approach_date
    return paths


def find_asteroid_paths(asteroid_id: str, from_date: date, to_date: date) -> List[schemas.AsteroidPath]:
    logger.info("Fetching asteroid paths for ID: %s, from: %s, to: %s", asteroid_id, from_date, to_date)
    try:
        approaches = fetch_close_approaches(asteroid_id)
        return extract_transitions(approaches, from_date, to_date)
    except Exception:
        logger.error("Error fetching asteroid data for %s", asteroid_id, exc_info=True)
        return []


def get_asteroid_paths(asteroid_id: str, from_date: date, to_date: date) -> List[schemas.AsteroidPath]:
    """Orbiting-body transitions for an asteroid, cached per id and date range."""
    return asteroid_cache.get_or_compute(
        f"{asteroid_id}-{from_date}-{to_date}",
        lambda: find_asteroid_paths(asteroid_id, from_date, to_date),
    )

import logging
import time
from datetime import date, datetime
from typing import List

from fastapi import APIRouter, FastAPI, Depends, Request, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session
from prometheus_client import (
    Counter,
    Histogram,
    generate_latest,
    CONTENT_TYPE_LATEST,
)
from . import __version__, models, schemas
from .config import API_PREFIX, LOG_LEVEL, SERVICE_NAME
from .database import SessionLocal, engine, get_db
from .loader import load_airports_database
from .proximity import closest_airports, closest_stations
from .services import get_asteroid_paths

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

models.Base.metadata.create_all(bind=engine)

app = FastAPI(title=SERVICE_NAME, version=__version__)
app.add_middleware(CORSMiddleware, allow_origins=["*"])
router = APIRouter(prefix=API_PREFIX)

# Prometheus metrics
REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "http_status"],
)
REQUEST_LATENCY = Histogram(
    "http_request_latency_seconds",
    "HTTP request latency",
    ["method", "endpoint"],
)


@app.on_event("startup")
def startup_event():
    db = SessionLocal()
    try:
        loaded = load_airports_database(db)
        logger.info("Serving with %d airports/stations loaded at startup", loaded)
    finally:
        db.close()


@app.middleware("http")
async def metrics_middleware(request: Request, call_next):
    method = request.method
    endpoint = request.url.path
    start_time = time.monotonic()
    response = await call_next(request)
    duration = time.monotonic() - start_time
    REQUEST_COUNT.labels(method=method, endpoint=endpoint, http_status=response.status_code).inc()
    REQUEST_LATENCY.labels(method=method, endpoint=endpoint).observe(duration)
    return response


def parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid date")


def years_before(day: date, years: int) -> date:
    try:
        return day.replace(year=day.year - years)
    except ValueError:
        # Feb 29 in a non-leap target year
        return day.replace(year=day.year - years, day=28)


@router.get("/health", response_model=schemas.Health)
def health():
    return schemas.Health(
        status="UP",
        timestamp=datetime.now(),
        service=SERVICE_NAME,
        version=__version__,
    )


# Handlers are plain functions so FastAPI runs them in its threadpool; blocking
# store queries and outbound calls then never hold up other requests.
@router.get("/asteroids/{asteroid_id}/paths", response_model=List[schemas.AsteroidPath])
def asteroid_paths(
    asteroid_id: str,
    fromDate: str | None = None,
    toDate: str | None = None,
):
    today = date.today()
    start = parse_date(fromDate) if fromDate else years_before(today, 100)
    end = parse_date(toDate) if toDate else today
    return get_asteroid_paths(asteroid_id, start, end)


@router.get("/airports/{airport_id}/stations", response_model=List[schemas.Station])
def airport_stations(
    airport_id: str,
    closestBy: float = 0.0,
    db: Session = Depends(get_db),
):
    return closest_stations(db, airport_id, closestBy)


@router.get("/stations/{station_id}/airports", response_model=List[schemas.Airport])
def station_airports(
    station_id: str,
    closestBy: float = 0.0,
    db: Session = Depends(get_db),
):
    return closest_airports(db, station_id, closestBy)


app.include_router(router)


@app.get("/metrics")
async def metrics():
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)

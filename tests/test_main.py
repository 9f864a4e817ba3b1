from datetime import date

import pytest

from astroport import main as main_mod
from astroport import aviation, models, schemas, services
from astroport.config import API_PREFIX
from astroport.database import SessionLocal


def seed_denver():
    db = SessionLocal()
    try:
        db.add(models.AirportCache(
            airport_id="KDEN", name="Denver International", state="CO", country="US",
            latitude=39.8617, longitude=-104.6732, elevation=1656.6,
        ))
        db.add(models.StationCache(
            station_id="KAPA", site="Centennial Airport", state="CO", country="US",
            latitude=39.5701, longitude=-104.849, elevation=1791,
        ))
        db.add(models.StationCache(
            station_id="KDEN", site="Denver International", state="CO", country="US",
            latitude=39.8617, longitude=-104.6732, elevation=1656,
        ))
        db.add(models.AirportCache(
            airport_id="KAPA", name="Centennial Airport", state="CO", country="US",
            latitude=39.5701, longitude=-104.849, elevation=1791.0,
        ))
        db.commit()
    finally:
        db.close()


@pytest.mark.asyncio
async def test_health(client):
    resp = await client.get(f"{API_PREFIX}/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "UP"
    assert body["service"] == "Astroport Aggregation Service"
    assert body["version"] == "1.0.0"
    assert body["timestamp"]


@pytest.mark.asyncio
async def test_asteroid_paths_with_all_parameters(client, monkeypatch):
    seen = {}

    def fake_paths(asteroid_id, from_date, to_date):
        seen.update(asteroid_id=asteroid_id, from_date=from_date, to_date=to_date)
        return [schemas.AsteroidPath(
            from_planet="Earth", to_planet="Mars", from_date="2020-01-01", to_date="2020-06-01",
        )]

    monkeypatch.setattr(main_mod, "get_asteroid_paths", fake_paths)
    resp = await client.get(
        f"{API_PREFIX}/asteroids/3542519/paths",
        params={"fromDate": "2020-01-01", "toDate": "2020-12-31"},
    )
    assert resp.status_code == 200
    assert resp.json() == [
        {"fromPlanet": "Earth", "toPlanet": "Mars", "fromDate": "2020-01-01", "toDate": "2020-06-01"}
    ]
    assert seen == {
        "asteroid_id": "3542519",
        "from_date": date(2020, 1, 1),
        "to_date": date(2020, 12, 31),
    }


@pytest.mark.asyncio
async def test_asteroid_paths_default_dates(client, monkeypatch):
    seen = {}

    def fake_paths(asteroid_id, from_date, to_date):
        seen.update(from_date=from_date, to_date=to_date)
        return []

    monkeypatch.setattr(main_mod, "get_asteroid_paths", fake_paths)
    resp = await client.get(f"{API_PREFIX}/asteroids/3542519/paths")
    assert resp.status_code == 200
    assert resp.json() == []

    today = date.today()
    assert seen["to_date"] == today
    assert seen["from_date"] == main_mod.years_before(today, 100)
    assert seen["from_date"].year == today.year - 100


@pytest.mark.asyncio
async def test_asteroid_paths_invalid_date(client):
    resp = await client.get(f"{API_PREFIX}/asteroids/3542519/paths", params={"fromDate": "bad"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Invalid date"


@pytest.mark.asyncio
async def test_asteroid_paths_upstream_failure_is_empty(client, monkeypatch):
    def boom(*a, **k):
        raise RuntimeError("nasa down")

    monkeypatch.setattr(services, "fetch_close_approaches", boom)
    resp = await client.get(f"{API_PREFIX}/asteroids/3542519/paths")
    assert resp.status_code == 200
    assert resp.json() == []


def test_years_before_leap_day():
    assert main_mod.years_before(date(2024, 2, 29), 100) == date(1924, 2, 29)
    assert main_mod.years_before(date(2024, 2, 29), 1) == date(2023, 2, 28)


@pytest.mark.asyncio
async def test_closest_stations(client):
    seed_denver()
    resp = await client.get(f"{API_PREFIX}/airports/KDEN/stations", params={"closestBy": 0.5})
    assert resp.status_code == 200
    body = sorted(resp.json(), key=lambda s: s["id"])
    assert body[0] == {
        "id": "KAPA",
        "site": "Centennial Airport",
        "state": "CO",
        "country": "US",
        "latitude": 39.5701,
        "longitude": -104.849,
        "elevation": 1791,
    }
    assert [s["id"] for s in body] == ["KAPA", "KDEN"]


@pytest.mark.asyncio
async def test_closest_stations_default_radius(client):
    seed_denver()
    resp = await client.get(f"{API_PREFIX}/airports/KDEN/stations")
    assert resp.status_code == 200
    assert [s["id"] for s in resp.json()] == ["KDEN"]


@pytest.mark.asyncio
async def test_closest_airports(client):
    seed_denver()
    resp = await client.get(f"{API_PREFIX}/stations/KAPA/airports", params={"closestBy": 0.5})
    assert resp.status_code == 200
    body = {a["id"]: a for a in resp.json()}
    assert set(body) == {"KAPA", "KDEN"}
    assert body["KDEN"] == {
        "id": "KDEN",
        "name": "Denver International",
        "state": "CO",
        "country": "US",
        "latitude": 39.8617,
        "longitude": -104.6732,
        "elevation": 1656.6,
    }


@pytest.mark.asyncio
async def test_unknown_anchor_is_empty(client, monkeypatch):
    monkeypatch.setattr(aviation, "fetch_metar_record", lambda ident: None)
    resp = await client.get(f"{API_PREFIX}/stations/INVALID/airports", params={"closestBy": 0.5})
    assert resp.status_code == 200
    assert resp.json() == []


@pytest.mark.asyncio
async def test_closest_by_must_be_numeric(client):
    resp = await client.get(f"{API_PREFIX}/airports/KDEN/stations", params={"closestBy": "near"})
    assert resp.status_code == 422


def test_startup_event_loads_dataset(monkeypatch):
    loaded = {}

    def fake_load(db):
        loaded["db"] = db
        return 0

    monkeypatch.setattr(main_mod, "load_airports_database", fake_load)
    main_mod.startup_event()
    assert "db" in loaded

import os
os.environ['TEST_DB_URL'] = 'sqlite:///test.db'
import pytest
from httpx import ASGITransport, AsyncClient
from astroport.main import app
from astroport import models
from astroport.cache import airport_cache, asteroid_cache, station_cache
from astroport.database import SessionLocal, engine


import pytest_asyncio


@pytest.fixture(autouse=True)
def fresh_state():
    models.Base.metadata.drop_all(bind=engine)
    models.Base.metadata.create_all(bind=engine)
    # caches are module level and would leak results between tests
    for cache in (asteroid_cache, airport_cache, station_cache):
        cache.clear()
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest_asyncio.fixture
async def client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

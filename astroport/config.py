import os

from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./astroport.db")

NASA_API_URL = os.getenv("NASA_API_URL", "https://api.nasa.gov/neo/rest/v1")
NASA_API_KEY = os.getenv("NASA_API_KEY", "DEMO_KEY")
NASA_TIMEOUT = float(os.getenv("NASA_TIMEOUT", "10"))

AVIATION_API_URL = os.getenv("AVIATION_API_URL", "https://aviationweather.gov")
AVIATION_TIMEOUT = float(os.getenv("AVIATION_TIMEOUT", "10"))

USER_AGENT = os.getenv("USER_AGENT", "Astroport/1.0")

AIRPORTS_CSV = os.getenv("AIRPORTS_CSV", "data/airports.csv")

API_PREFIX = os.getenv("API_PREFIX", "/api/astroport/v1.0")

CACHE_TTL_SECONDS = float(os.getenv("CACHE_TTL_SECONDS", str(24 * 60 * 60)))
CACHE_MAX_ENTRIES = int(os.getenv("CACHE_MAX_ENTRIES", "1000"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

SERVICE_NAME = "Astroport Aggregation Service"

"""API test infrastructure: async httpx client against the ASGI app with an in-memory cache."""

from __future__ import annotations

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from evaapi.config import settings
from evaapi.services import cache as cache_module
from evaapi.services.cache import MemoryCache


# ---------------------------------------------------------------------------
# Cache and settings isolation
# ---------------------------------------------------------------------------

@pytest.fixture
def memory_cache(monkeypatch) -> MemoryCache:
    cache = MemoryCache(default_ttl=60)
    monkeypatch.setattr(cache_module, "_cache", cache)
    return cache


@pytest.fixture(autouse=True)
def _no_eia_key(monkeypatch):
    monkeypatch.setattr(settings, "eia_api_key", "")


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def app(memory_cache):
    from evaapi.main import create_app

    application = create_app()

    # Reset rate limiters between tests
    from evaapi.core.rate_limit import generation_limiter, weather_limiter
    weather_limiter.reset()
    generation_limiter.reset()

    yield application


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# ---------------------------------------------------------------------------
# Payload helpers
# ---------------------------------------------------------------------------

@pytest.fixture
def open_meteo_payload():
    """Factory for Open-Meteo archive responses with constant daily readings."""

    def _make(days: list[str], temp: float = 25.0, humidity: float = 40.0,
              wind: float = 3.0, solar: float = 6000.0) -> dict:
        n = len(days)
        return {
            "latitude": 33.45,
            "longitude": -112.07,
            "daily": {
                "time": days,
                "temperature_2m_mean": [temp] * n,
                "relative_humidity_2m_mean": [humidity] * n,
                "wind_speed_10m_mean": [wind] * n,
                "shortwave_radiation_sum": [solar] * n,
            },
        }

    return _make


@pytest.fixture
def region_payload() -> dict:
    return {
        "name": "Maricopa",
        "state": "AZ",
        "population": 2_000_000,
        "fips": "04013",
        "state_population": 8_000_000,
    }

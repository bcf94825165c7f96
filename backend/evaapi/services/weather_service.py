"""Open-Meteo archive client producing monthly climate series."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Optional, Sequence

import httpx

from evaapi.config import settings
from evaapi.services.cache import CacheBackend, coordinate_key, get_cache
from evaengine.climate.aggregation import (
    OPEN_METEO_DAILY_VARIABLES,
    aggregate_daily_to_monthly,
    daily_from_open_meteo,
)
from evaengine.models import ClimateSample
from evaengine.months import MonthKey

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, str], None]


@dataclass(frozen=True)
class Location:
    name: str
    lat: float
    lon: float


def historical_date_range(today: date, years: int) -> tuple[date, date]:
    """(start, end) spanning *years* years up to the first of the current month."""
    end = date(today.year, today.month, 1)
    return date(end.year - years, end.month, 1), end


async def fetch_daily_weather(
    lat: float,
    lon: float,
    start: date,
    end: date,
    *,
    client: Optional[httpx.AsyncClient] = None,
    cache: Optional[CacheBackend] = None,
) -> dict[str, Any]:
    """Fetch the raw Open-Meteo daily archive payload for one location."""
    if cache is None:
        cache = get_cache()
    key = coordinate_key(
        "weather", lat, lon, settings.coordinate_precision,
        f"{start.isoformat()}:{end.isoformat()}",
    )
    cached = await cache.get(key)
    if cached is not None:
        logger.debug("Weather cache hit for %s", key, extra={"cache_hit": True})
        return cached

    params = {
        "latitude": f"{lat:.4f}",
        "longitude": f"{lon:.4f}",
        "start_date": start.isoformat(),
        "end_date": end.isoformat(),
        "daily": ",".join(OPEN_METEO_DAILY_VARIABLES),
        "timezone": "auto",
    }

    if client is None:
        async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as own_client:
            response = await own_client.get(settings.open_meteo_archive_url, params=params)
    else:
        response = await client.get(settings.open_meteo_archive_url, params=params)
    response.raise_for_status()

    payload = response.json()
    await cache.set(key, payload)
    return payload


async def fetch_monthly_climate(
    lat: float,
    lon: float,
    start: date,
    end: date,
    *,
    client: Optional[httpx.AsyncClient] = None,
    cache: Optional[CacheBackend] = None,
) -> dict[MonthKey, ClimateSample]:
    """Monthly climate averages for one location over [start, end]."""
    payload = await fetch_daily_weather(lat, lon, start, end, client=client, cache=cache)
    return aggregate_daily_to_monthly(daily_from_open_meteo(payload))


async def fetch_batch_climate(
    locations: Sequence[Location],
    start: date,
    end: date,
    *,
    on_progress: Optional[ProgressCallback] = None,
    client: Optional[httpx.AsyncClient] = None,
    cache: Optional[CacheBackend] = None,
    max_concurrent: Optional[int] = None,
) -> dict[str, dict[MonthKey, ClimateSample]]:
    """Monthly climate for many locations with bounded concurrency.

    Locations whose fetch fails are logged and left out of the result.
    """
    semaphore = asyncio.Semaphore(max_concurrent or settings.max_concurrent_fetches)
    results: dict[str, dict[MonthKey, ClimateSample]] = {}
    done = 0

    async def _one(location: Location) -> None:
        nonlocal done
        async with semaphore:
            try:
                results[location.name] = await fetch_monthly_climate(
                    location.lat, location.lon, start, end, client=client, cache=cache
                )
            except (httpx.HTTPError, ValueError) as exc:
                logger.warning("Weather fetch failed for %s: %s", location.name, exc)
        done += 1
        if on_progress is not None:
            on_progress(done, len(locations), location.name)

    await asyncio.gather(*(_one(loc) for loc in locations))
    return results

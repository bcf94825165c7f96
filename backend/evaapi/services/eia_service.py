"""EIA v2 generation client with estimated-profile fallback."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from evaapi.config import settings
from evaapi.services.cache import CacheBackend, get_cache, region_range_key
from evaengine.errors import GenerationPayloadError
from evaengine.models import SupplyVector
from evaengine.months import MonthKey
from evaengine.supply.generation import (
    estimate_state_generation,
    supply_from_generation_records,
)

logger = logging.getLogger(__name__)

GENERATION_ENDPOINT = "/electricity/electric-power-operational-data/data/"
PAGE_LENGTH = 5000


async def fetch_eia_records(
    state: str,
    start: str,
    end: str,
    *,
    client: Optional[httpx.AsyncClient] = None,
    cache: Optional[CacheBackend] = None,
) -> list[dict[str, Any]]:
    """Fetch raw monthly generation records for *state* (``YYYY-MM`` bounds)."""
    if cache is None:
        cache = get_cache()
    key = region_range_key("eia", state, start, end)
    cached = await cache.get(key)
    if cached is not None:
        return cached

    params = {
        "api_key": settings.eia_api_key,
        "frequency": "monthly",
        "data[0]": "generation",
        "facets[location][]": state.upper(),
        "start": start,
        "end": end,
        "sort[0][column]": "period",
        "sort[0][direction]": "asc",
        "offset": 0,
        "length": PAGE_LENGTH,
    }
    url = f"{settings.eia_base_url}{GENERATION_ENDPOINT}"

    if client is None:
        async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as own_client:
            response = await own_client.get(url, params=params)
    else:
        response = await client.get(url, params=params)
    response.raise_for_status()

    body = response.json()
    records = (body.get("response") or {}).get("data")
    if not isinstance(records, list):
        raise GenerationPayloadError("Invalid EIA API response format")

    await cache.set(key, records)
    return records


async def fetch_state_generation(
    state: str,
    start: str,
    end: str,
    *,
    client: Optional[httpx.AsyncClient] = None,
    cache: Optional[CacheBackend] = None,
) -> tuple[dict[MonthKey, SupplyVector], str]:
    """Monthly state generation and its source (``"eia"`` or ``"estimate"``).

    Without an API key, or when the EIA request fails, the built-in state
    energy profiles are used instead.
    """
    if not settings.eia_api_key:
        return estimate_state_generation(state, start, end), "estimate"

    try:
        records = await fetch_eia_records(state, start, end, client=client, cache=cache)
        series = supply_from_generation_records(records)
    except (httpx.HTTPError, GenerationPayloadError) as exc:
        logger.warning(
            "EIA API failed for %s, using estimates: %s", state, exc,
            extra={"upstream": "eia"},
        )
        return estimate_state_generation(state, start, end), "estimate"

    if not series:
        logger.warning("EIA returned no generation for %s, using estimates", state)
        return estimate_state_generation(state, start, end), "estimate"
    return series, "eia"

"""Pluggable memoization for upstream data fetches.

Only raw upstream payloads are cached, keyed by rounded coordinates or by
region and date range.  Engine computations are never cached.
"""

from __future__ import annotations

import json
import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Optional

from evaapi.config import settings

logger = logging.getLogger(__name__)


def coordinate_key(prefix: str, lat: float, lon: float, precision: int = 2, suffix: str = "") -> str:
    """Cache key from coordinates rounded to *precision* decimals."""
    key = f"{prefix}:{lat:.{precision}f},{lon:.{precision}f}"
    if suffix:
        key += f":{suffix}"
    return key


def region_range_key(prefix: str, region: str, start: str, end: str) -> str:
    return f"{prefix}:{region.upper()}:{start}:{end}"


class CacheBackend(ABC):
    """Async key/value cache holding JSON-serialisable values."""

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or ``None`` on a miss."""

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        """Store *value* for *ttl* seconds (``None`` = backend default)."""

    async def close(self) -> None:
        return None


class MemoryCache(CacheBackend):
    """Process-local cache with per-entry expiry."""

    def __init__(self, default_ttl: int = 3600) -> None:
        self.default_ttl = default_ttl
        self._entries: dict[str, tuple[float, Any]] = {}

    async def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if expires_at < time.monotonic():
            del self._entries[key]
            return None
        return value

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        ttl = self.default_ttl if ttl is None else ttl
        self._entries[key] = (time.monotonic() + ttl, value)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


class RedisCache(CacheBackend):
    """Redis-backed cache storing values as JSON strings."""

    def __init__(self, url: str, default_ttl: int = 3600) -> None:
        import redis.asyncio as aioredis

        self.default_ttl = default_ttl
        self._client = aioredis.from_url(url, decode_responses=True)

    async def get(self, key: str) -> Optional[Any]:
        raw = await self._client.get(key)
        if raw is None:
            return None
        return json.loads(raw)

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        ttl = self.default_ttl if ttl is None else ttl
        await self._client.set(key, json.dumps(value), ex=ttl)

    async def ping(self) -> bool:
        return bool(await self._client.ping())

    async def close(self) -> None:
        await self._client.aclose()


_cache: Optional[CacheBackend] = None


def build_cache(backend: str, redis_url: str, ttl: int) -> CacheBackend:
    if backend == "redis":
        return RedisCache(redis_url, default_ttl=ttl)
    if backend != "memory":
        raise ValueError(f"Unknown cache_backend '{backend}'. Choose from: ['memory', 'redis']")
    return MemoryCache(default_ttl=ttl)


def get_cache() -> CacheBackend:
    """Process-wide cache selected by ``settings.cache_backend``."""
    global _cache
    if _cache is None:
        _cache = build_cache(
            settings.cache_backend, settings.redis_url, settings.cache_ttl_seconds
        )
        logger.info("Using %s upstream cache", settings.cache_backend)
    return _cache


async def close_cache() -> None:
    global _cache
    if _cache is not None:
        await _cache.close()
        _cache = None

"""Tests for structured logging and the inbound rate limiter."""

import json
import logging

import pytest
from fastapi import HTTPException
from starlette.requests import Request

from evaapi.core.logging import JSONFormatter, request_id_var
from evaapi.core.rate_limit import RateLimiter


def _request(ip: str = "10.0.0.1", forwarded: str | None = None) -> Request:
    headers = [(b"x-forwarded-for", forwarded.encode())] if forwarded else []
    return Request({"type": "http", "headers": headers, "client": (ip, 1234)})


class TestJSONFormatter:
    def test_extra_fields_and_request_id(self):
        record = logging.LogRecord("evaapi.test", logging.WARNING, __file__, 1, "fetch %s failed", ("TX",), None)
        record.upstream = "eia"
        record.region = "Travis"
        token = request_id_var.set("req-42")
        try:
            entry = json.loads(JSONFormatter().format(record))
        finally:
            request_id_var.reset(token)

        assert entry["message"] == "fetch TX failed"
        assert entry["level"] == "WARNING"
        assert entry["request_id"] == "req-42"
        assert entry["upstream"] == "eia"
        assert entry["region"] == "Travis"
        assert "cache_hit" not in entry


class TestRateLimiter:
    def test_blocks_after_limit(self):
        limiter = RateLimiter(max_requests=2, window_seconds=60)
        limiter.check(_request())
        limiter.check(_request())
        with pytest.raises(HTTPException) as exc_info:
            limiter.check(_request())
        assert exc_info.value.status_code == 429

    def test_clients_are_independent(self):
        limiter = RateLimiter(max_requests=1, window_seconds=60)
        limiter.check(_request("10.0.0.1"))
        limiter.check(_request("10.0.0.2"))

    def test_forwarded_for_header(self):
        limiter = RateLimiter(max_requests=1, window_seconds=60)
        limiter.check(_request("10.0.0.1", forwarded="203.0.113.9, 10.0.0.1"))
        with pytest.raises(HTTPException):
            limiter.check(_request("10.0.0.7", forwarded="203.0.113.9"))

    def test_reset(self):
        limiter = RateLimiter(max_requests=1, window_seconds=60)
        limiter.check(_request())
        limiter.reset()
        limiter.check(_request())

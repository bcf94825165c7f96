import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator

import httpx
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from evaapi.config import settings
from evaapi.api.v1 import climate, evaporation, locations, prices, regions
from evaapi.core.logging import RequestLoggingMiddleware, setup_logging
from evaapi.services.cache import RedisCache, close_cache, get_cache
from evaengine.errors import EvaMapError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    yield
    await close_cache()


async def domain_error_handler(request: Request, exc: EvaMapError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": str(exc), "error": type(exc).__name__},
    )


async def upstream_error_handler(request: Request, exc: httpx.HTTPError) -> JSONResponse:
    logger.warning("Upstream request failed: %s", exc, extra={"path": str(request.url.path)})
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": f"Upstream data source failed: {exc}"},
    )


def create_app() -> FastAPI:
    setup_logging(json_format=settings.json_logs)

    application = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.cors_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.add_middleware(RequestLoggingMiddleware)

    application.add_exception_handler(EvaMapError, domain_error_handler)
    application.add_exception_handler(httpx.HTTPError, upstream_error_handler)

    application.include_router(
        evaporation.router, prefix="/api/v1/evaporation", tags=["evaporation"]
    )
    application.include_router(climate.router, prefix="/api/v1/climate", tags=["climate"])
    application.include_router(regions.router, prefix="/api/v1/regions", tags=["regions"])
    application.include_router(prices.router, prefix="/api/v1/prices", tags=["prices"])
    application.include_router(
        locations.router, prefix="/api/v1/locations", tags=["locations"]
    )

    @application.get("/health")
    async def health_check() -> dict:
        result: dict = {"status": "ok", "services": {}}

        cache = get_cache()
        if isinstance(cache, RedisCache):
            try:
                await cache.ping()
                result["services"]["redis"] = "ok"
            except Exception as e:
                result["services"]["redis"] = f"error: {e}"
                result["status"] = "degraded"
        else:
            result["services"]["cache"] = "memory"

        result["services"]["eia"] = "api" if settings.eia_api_key else "estimates"
        return result

    return application


app = create_app()

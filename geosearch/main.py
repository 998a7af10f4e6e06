"""geosearch — FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from geosearch import context
from geosearch.config import settings
from geosearch.infrastructure.api.routes_health import router as health_router
from geosearch.infrastructure.api.routes_search import router as search_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    geocoder = context.get_geocoder()
    default = geocoder.registry.default_street()
    logger.info(
        "Geocoder ready (default lookup: %s, cache: %s)",
        settings.lookup or getattr(default, "value", default),
        "on" if geocoder.cache else "off",
    )
    yield
    await context.aclose()


def create_app() -> FastAPI:
    app = FastAPI(
        title="geosearch",
        description="Address, IP and coordinate lookups across pluggable geocoding providers",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.include_router(health_router, prefix="/api")
    app.include_router(search_router, prefix="/api")

    return app


app = create_app()

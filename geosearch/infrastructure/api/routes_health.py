"""Health check endpoint."""

from fastapi import APIRouter, Depends

from geosearch.application.use_cases.search_location import Geocoder
from geosearch.infrastructure.api.dependencies import get_geocoder

router = APIRouter(tags=["health"])


def _names(identities) -> list[str]:
    return [getattr(i, "value", i) for i in identities]


@router.get("/health")
async def health_check(geocoder: Geocoder = Depends(get_geocoder)):
    """Report configured providers and cache status."""
    registry = geocoder.registry
    cache = geocoder.cache
    return {
        "status": "ok",
        "service": "geosearch",
        "providers": {
            "street": _names(registry.street_identities),
            "ip": _names(registry.ip_identities),
            "active": sorted(registry.instances()),
        },
        "cache": {
            "enabled": cache is not None,
            "store": type(cache.store).__name__ if cache else None,
            "prefix": cache.prefix if cache else None,
        },
    }

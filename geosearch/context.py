"""Process-wide geocoder: built once from Settings, shared by every caller.

    from geosearch import context

    results = await context.search("1600 Amphitheatre Pkwy")
    point = await context.coordinates("8.8.8.8")
"""

from __future__ import annotations

import logging
import threading

from geosearch.adapters.cache.factory import build_cache_store
from geosearch.adapters.geocoder.catalog import PROVIDER_TYPES
from geosearch.application.ports.cache_store import CacheStore
from geosearch.application.provider_registry import ProviderRegistry
from geosearch.application.result_cache import ResultCache
from geosearch.application.use_cases.search_location import Geocoder, Options
from geosearch.config import Settings
from geosearch.config import settings as default_settings
from geosearch.domain.entities.geocode_result import GeocodeResult
from geosearch.domain.value_objects.geo_point import GeoPoint

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_geocoder: Geocoder | None = None


def build_geocoder(
    settings: Settings | None = None,
    cache_store: CacheStore | None = None,
) -> Geocoder:
    """Wire the registry, the optional result cache and the configured lookup."""
    settings = settings or default_settings
    registry = ProviderRegistry(PROVIDER_TYPES, settings=settings)

    store = cache_store if cache_store is not None else build_cache_store(settings.cache_url)
    cache = None
    if store is not None:
        cache = ResultCache(store, prefix=settings.cache_prefix, timeout=settings.cache_timeout)
        logger.info("Result cache enabled (%s)", type(store).__name__)

    return Geocoder(registry, cache=cache, lookup=settings.lookup)


def get_geocoder() -> Geocoder:
    global _geocoder
    if _geocoder is None:
        with _lock:
            if _geocoder is None:
                _geocoder = build_geocoder()
    return _geocoder


def set_geocoder(geocoder: Geocoder | None) -> None:
    """Replace the shared geocoder (None drops it so the next call rebuilds)."""
    global _geocoder
    with _lock:
        _geocoder = geocoder


async def aclose() -> None:
    """Release the shared geocoder's cache backend and drop it."""
    global _geocoder
    with _lock:
        geocoder, _geocoder = _geocoder, None
    if geocoder is not None and geocoder.cache is not None:
        await geocoder.cache.store.close()


async def search(query, options: Options = None) -> list[GeocodeResult]:
    return await get_geocoder().search(query, options)


async def coordinates(query, options: Options = None) -> GeoPoint | None:
    return await get_geocoder().coordinates(query, options)


async def address(query, options: Options = None) -> str | None:
    return await get_geocoder().address(query, options)

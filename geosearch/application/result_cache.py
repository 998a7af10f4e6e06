"""ResultCache — fetch-or-populate over a CacheStore, with a key prefix.

Reads and writes are best-effort: a failing or slow store is logged and the
search carries on against the provider directly.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Awaitable, Callable

from geosearch.application.ports.cache_store import CacheStore
from geosearch.domain.errors import CacheStoreError
from geosearch.domain.policies.query_classification import is_coordinate_pair
from geosearch.domain.value_objects.geo_point import GeoPoint
from geosearch.domain.value_objects.search_options import SearchOptions

logger = logging.getLogger(__name__)

DEFAULT_STORE_TIMEOUT = 2.0

# Failures a store may raise that must never abort a search. OSError covers
# unreachable backends whose drivers do not wrap socket errors.
STORE_FAILURES = (CacheStoreError, OSError)


def normalize_query(query) -> str | list[float]:
    """Canonical form of a query for key building."""
    if isinstance(query, GeoPoint):
        return [query.latitude, query.longitude]
    if is_coordinate_pair(query):
        return [float(v) for v in query]
    return " ".join(str(query).split()).lower()


class ResultCache:
    def __init__(self, store: CacheStore, prefix: str = "", timeout: float = DEFAULT_STORE_TIMEOUT):
        self._store = store
        self._prefix = prefix
        self._timeout = timeout

    @property
    def store(self) -> CacheStore:
        return self._store

    @property
    def prefix(self) -> str:
        return self._prefix

    def cache_key(self, query, options: SearchOptions | None = None) -> str:
        """``prefix:{json}`` built from the normalised query, bounds and region."""
        payload: dict = {"q": normalize_query(query)}
        if options is not None:
            if options.bounds:
                payload["bounds"] = [list(corner) for corner in options.bounds]
            if options.region:
                payload["region"] = options.region
        body = json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
        return f"{self._prefix}:{body}"

    async def fetch_or_compute(self, key: str, compute: Callable[[], Awaitable[str]]) -> str:
        """Return the stored value for ``key`` or compute, store and return it.

        Errors raised by ``compute`` propagate unchanged.
        """
        cached = await self._read(key)
        if cached is not None:
            logger.debug("Cache hit for '%s'", key)
            return cached

        logger.debug("Cache miss for '%s'", key)
        value = await compute()
        await self._write(key, value)
        return value

    async def invalidate(self, key: str) -> None:
        try:
            await asyncio.wait_for(self._store.delete(key), timeout=self._timeout)
        except (*STORE_FAILURES, asyncio.TimeoutError) as e:
            logger.warning("Cache delete failed for '%s': %r", key, e)

    async def _read(self, key: str) -> str | None:
        try:
            return await asyncio.wait_for(self._store.read(key), timeout=self._timeout)
        except asyncio.TimeoutError:
            logger.warning(
                "Cache read timed out after %.1fs for '%s', querying provider directly",
                self._timeout, key,
            )
        except STORE_FAILURES as e:
            logger.warning("Cache read failed for '%s', querying provider directly: %s", key, e)
        return None

    async def _write(self, key: str, value: str) -> None:
        try:
            await asyncio.wait_for(self._store.write(key, value), timeout=self._timeout)
        except asyncio.TimeoutError:
            logger.warning("Cache write timed out after %.1fs for '%s'", self._timeout, key)
        except STORE_FAILURES as e:
            logger.warning("Cache write failed for '%s': %s", key, e)

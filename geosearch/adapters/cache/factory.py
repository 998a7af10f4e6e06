"""Build the configured CacheStore from a URL."""

from __future__ import annotations

from geosearch.adapters.cache.memory_store import InMemoryCacheStore
from geosearch.adapters.cache.sql_store import SqlCacheStore
from geosearch.application.ports.cache_store import CacheStore

MEMORY_URL = "memory://"


def build_cache_store(url: str | None) -> CacheStore | None:
    """``None``/empty → no cache, ``memory://`` → in-process, else a SQLAlchemy async URL."""
    if not url or not url.strip():
        return None
    if url.strip() == MEMORY_URL:
        return InMemoryCacheStore()
    return SqlCacheStore.from_url(url.strip())

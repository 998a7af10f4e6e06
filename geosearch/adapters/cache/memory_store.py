"""In-process cache store — implements CacheStore."""

from __future__ import annotations

from geosearch.application.ports.cache_store import CacheStore


class InMemoryCacheStore(CacheStore):
    """Dict-backed store. Lives as long as the process, never evicts."""

    def __init__(self):
        self._entries: dict[str, str] = {}

    async def read(self, key: str) -> str | None:
        return self._entries.get(key)

    async def write(self, key: str, value: str) -> None:
        self._entries[key] = value

    async def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def __len__(self) -> int:
        return len(self._entries)

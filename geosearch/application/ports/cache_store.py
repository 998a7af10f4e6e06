"""Port interface for the key/value store behind the result cache."""

from abc import ABC, abstractmethod


class CacheStore(ABC):
    """Keys and values are opaque strings. Backend failures raise CacheStoreError.

    Eviction, if any, is the store's business.
    """

    @abstractmethod
    async def read(self, key: str) -> str | None:
        ...

    @abstractmethod
    async def write(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove ``key``. No-op if it is not stored."""
        ...

    async def close(self) -> None:
        """Release backend resources. Stores without any keep the default."""
        return None

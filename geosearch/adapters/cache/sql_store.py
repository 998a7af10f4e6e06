"""SQL cache store — implements CacheStore on an async SQLAlchemy engine."""

from __future__ import annotations

import asyncio
import logging

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from geosearch.adapters.persistence.database import (
    Base,
    create_engine,
    create_session_factory,
)
from geosearch.adapters.persistence.models import CacheEntryModel
from geosearch.application.ports.cache_store import CacheStore
from geosearch.domain.errors import CacheStoreError

logger = logging.getLogger(__name__)


class SqlCacheStore(CacheStore):
    """Stores entries in the ``geocode_cache`` table.

    With ``auto_create`` the table is created on first use; otherwise it is
    expected to exist (see the Alembic migration).
    """

    def __init__(
        self,
        engine: AsyncEngine,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
        auto_create: bool = False,
    ):
        self._engine = engine
        self._sessions = session_factory or create_session_factory(engine)
        self._schema_ready = not auto_create
        self._schema_lock = asyncio.Lock()

    @classmethod
    def from_url(cls, url: str, auto_create: bool = True) -> "SqlCacheStore":
        return cls(create_engine(url), auto_create=auto_create)

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    async def create_schema(self) -> None:
        if self._schema_ready:
            return
        async with self._schema_lock:
            if self._schema_ready:
                return
            try:
                async with self._engine.begin() as conn:
                    await conn.run_sync(Base.metadata.create_all)
            except (SQLAlchemyError, OSError) as e:
                raise CacheStoreError(f"Could not create cache table: {e}") from e
            self._schema_ready = True
            logger.info("Cache table '%s' ready", CacheEntryModel.__tablename__)

    async def read(self, key: str) -> str | None:
        try:
            await self.create_schema()
            async with self._sessions() as session:
                entry = await session.get(CacheEntryModel, key)
                return entry.value if entry else None
        except (SQLAlchemyError, OSError) as e:
            raise CacheStoreError(f"Cache read failed: {e}") from e

    async def write(self, key: str, value: str) -> None:
        try:
            await self.create_schema()
            async with self._sessions() as session:
                async with session.begin():
                    await session.merge(CacheEntryModel(key=key, value=value))
        except (SQLAlchemyError, OSError) as e:
            raise CacheStoreError(f"Cache write failed: {e}") from e

    async def delete(self, key: str) -> None:
        try:
            await self.create_schema()
            async with self._sessions() as session:
                async with session.begin():
                    await session.execute(delete(CacheEntryModel).where(CacheEntryModel.key == key))
        except (SQLAlchemyError, OSError) as e:
            raise CacheStoreError(f"Cache delete failed: {e}") from e

    async def close(self) -> None:
        await self._engine.dispose()

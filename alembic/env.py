"""Alembic environment configuration for the SQL cache store."""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from geosearch.adapters.cache.factory import MEMORY_URL
from geosearch.adapters.persistence.database import Base
from geosearch.adapters.persistence.models import CacheEntryModel  # noqa: F401 — ensure models are registered
from geosearch.config import settings

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

# Async drivers mapped to their sync counterparts (alembic runs synchronously)
SYNC_DRIVERS = {
    "+aiosqlite": "",
    "+asyncpg": "+psycopg2",
}


def sync_url() -> str:
    """Cache URL from settings (.env is the source of truth), with a sync driver."""
    url = settings.cache_url
    if not url or url.strip() == MEMORY_URL:
        url = config.get_main_option("sqlalchemy.url")
    for async_driver, sync_driver in SYNC_DRIVERS.items():
        url = url.replace(async_driver, sync_driver)
    return url


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode (generate SQL without connecting)."""
    context.configure(
        url=sync_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection):
    context.configure(connection=connection, target_metadata=target_metadata)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations online using a sync engine."""
    configuration = config.get_section(config.config_ini_section, {})
    configuration["sqlalchemy.url"] = sync_url()

    connectable = engine_from_config(
        configuration,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        do_run_migrations(connection)

    connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()

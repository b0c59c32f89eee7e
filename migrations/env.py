"""Alembic environment.

The database URL comes from idlink Settings (DATABASE__URL) unless
sqlalchemy.url is set in alembic.ini. Online migrations run through the
same asyncpg driver the application uses.
"""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)


def get_target_metadata():
    """Import table metadata lazily so offline runs need no settings."""
    from idlink.persistence.tables import metadata

    return metadata


def get_database_url() -> str:
    """Resolve the database URL."""
    alembic_url = config.get_main_option("sqlalchemy.url")
    if alembic_url:
        return alembic_url

    from idlink.config import Settings

    return Settings().database_url


def run_migrations_offline() -> None:
    """Emit migration SQL without connecting."""
    context.configure(
        url=get_database_url(),
        target_metadata=get_target_metadata(),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(connection=connection, target_metadata=get_target_metadata())

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    """Run migrations against a live database."""
    configuration = config.get_section(config.config_ini_section) or {}
    configuration["sqlalchemy.url"] = get_database_url()

    connectable = async_engine_from_config(
        configuration,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


def run_migrations_online() -> None:
    asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()

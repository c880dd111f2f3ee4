"""
Alembic Migration Environment
===============================

What:  Runs the submission-table migrations through the async engine.
How:   The URL and TLS options come from school_survey settings, never from
       alembic.ini. Only `Base.metadata` is targeted; the school directory
       table (`rectores`) is owned by another loader, so autogenerate is told
       to leave it alone.
Who:   `alembic upgrade head` during deployment.
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.ext.asyncio import async_engine_from_config
from alembic import context

from school_survey.config import settings
from school_survey.database import Base, _connect_args, reference_metadata

# Registers the three submission tables on Base.metadata
import school_survey.models.submission  # noqa: F401

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

config.set_main_option("sqlalchemy.url", settings.database_url)


def include_object(obj, name, type_, reflected, compare_to):
    """Keeps autogenerate from proposing a drop of the school directory."""
    if type_ == "table" and reflected and name in reference_metadata.tables:
        return False
    return True


def run_migrations_offline() -> None:
    """Emit the submission-table DDL to stdout without connecting."""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        include_object=include_object,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection):
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        include_object=include_object,
    )

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    """Same TLS rules as the server engine; one connection, no pool."""
    connectable = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
        connect_args=_connect_args(settings),
    )

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_async_migrations())

"""
School Survey Backend — Database Engine & Session Management
==============================================================

What:  Async SQLAlchemy engine construction, session factory, and the
       FastAPI dependency that hands a session to each request.
How:   The engine (and its connection pool) is built once per process by the
       application lifespan and stored on `app.state`. Route handlers never
       import an engine; they receive a session through `get_db_session`,
       which reads the factory from `request.app.state`.
Who:   Used by routes via Depends(), by the schema initializer, and by tests.

Connection Pooling:
    pool_size / max_overflow come from settings (PostgreSQL only).
    pool_pre_ping validates connections before use.
    pool_recycle=3600 recycles connections every hour.
    SQLite (tests) uses the driver's default pool.

TLS:
    In production the asyncpg connection requires TLS but does not verify the
    server certificate (managed PostgreSQL hosts with self-signed chains).
"""

import logging
import ssl
from typing import AsyncGenerator, Optional

from sqlalchemy import Column, MetaData, Table, Text, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from starlette.requests import Request

from school_survey.config import Settings
from school_survey.exceptions import DatabaseError

logger = logging.getLogger(__name__)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for the submission tables.

    Only tables this service owns are registered here; the schema
    initializer creates exactly `Base.metadata`.
    """
    pass


# ── Reference Tables ──────────────────────────────────────────────────────
# The school directory is loaded by another process. It lives on its own
# MetaData so create_all() never touches it.
reference_metadata = MetaData()

SCHOOL_NAME_COLUMN = "nombre_de_la_institucion_educativa_en_la_actualmente_desempena_"

schools_table = Table(
    "rectores",
    reference_metadata,
    Column(SCHOOL_NAME_COLUMN, Text),
)


# ── Engine Construction ───────────────────────────────────────────────────
def _connect_args(settings: Settings) -> dict:
    """Driver-level connection options derived from the environment."""
    if settings.database_url.startswith("postgresql+asyncpg") and settings.is_production:
        context = ssl.create_default_context()
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
        return {"ssl": context}
    return {}


def create_engine(settings: Settings) -> AsyncEngine:
    """
    Build the process-wide async engine.

    Raises:
        DatabaseError: DATABASE_URL is empty or not a usable SQLAlchemy URL.
    """
    if not settings.database_url:
        raise DatabaseError(message="DATABASE_URL is not set")

    kwargs = {
        "pool_pre_ping": settings.db_pool_pre_ping,
        "echo": settings.log_level == "DEBUG",
        "connect_args": _connect_args(settings),
    }
    if not settings.database_url.startswith("sqlite"):
        kwargs.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_recycle=3600,
        )

    try:
        engine = create_async_engine(settings.database_url, **kwargs)
    except Exception as e:
        raise DatabaseError(
            message=f"Could not create database engine: {e}",
            context={"error_type": type(e).__name__},
        ) from e

    logger.info(
        "Database engine created (driver=%s, tls=%s)",
        engine.url.drivername,
        "ssl" in kwargs["connect_args"],
    )
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False keeps returned rows readable after commit
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Reads the session factory the lifespan placed on app.state
        2. Yields a session to the route handler
        3. Commits on success, rolls back on any error
        4. Always closes the session (returns the connection to the pool)

    Raises:
        DatabaseError: The application started without a usable engine.
    """
    factory: Optional[async_sessionmaker[AsyncSession]] = getattr(
        request.app.state, "session_factory", None
    )
    if factory is None:
        raise DatabaseError(message="Database is not configured")

    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def verify_connection(engine: AsyncEngine) -> None:
    """
    Round-trip one `SELECT 1`.

    Raises:
        DatabaseError: The store is unreachable.
    """
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        raise DatabaseError(
            message=f"Error connecting to database: {e}",
            public_message="Database connection failed",
            context={"error_type": type(e).__name__},
        ) from e


async def dispose_engine(engine: Optional[AsyncEngine]) -> None:
    """Closes every pooled connection. Safe to call with None."""
    if engine is not None:
        await engine.dispose()

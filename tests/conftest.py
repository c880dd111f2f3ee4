"""
School Survey — Test Configuration (conftest.py)
==================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Endpoint tests run the real app over httpx's ASGITransport against a
       throwaway SQLite file (aiosqlite). ASGITransport does not run the
       lifespan, so fixtures place the engine and session factory on
       app.state themselves, exactly where the lifespan would.

Fixture Hierarchy (all function-scoped):
    ├── test_settings:     Settings pointing at tmp_path (db file + static dir)
    ├── db_engine:         Engine with submission tables + `rectores` created
    ├── app / test_client: FastAPI app wired to db_engine, httpx AsyncClient
    ├── make_client:       Client factory for apps with overridden settings
    ├── count_rows:        Row count of a submission table
    ├── seed_schools:      Inserts school names into `rectores`
    ├── mock_db_session:   AsyncMock session for service-level failure tests
    └── complete_form:     GuardianForm with every statement answered
"""

import os

# Override settings for testing BEFORE any app imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test_school_survey.db"
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import Iterable
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, select

from school_survey.client.form import GuardianForm
from school_survey.config import Settings
from school_survey.database import (
    SCHOOL_NAME_COLUMN,
    Base,
    create_engine,
    create_session_factory,
    reference_metadata,
    schools_table,
)
from school_survey.main import create_app
from school_survey.questionnaire import GRADE_LEVELS, GUARDIAN_SECTIONS, FrequencyRating
from school_survey.services.schema_service import schema_service


# ══════════════════════════════════════════════════════════════════════════
# Settings & Database
# ══════════════════════════════════════════════════════════════════════════

def make_settings(tmp_path, **overrides) -> Settings:
    values = {
        "database_url": f"sqlite+aiosqlite:///{tmp_path / 'survey.db'}",
        "environment": "test",
        "static_dir": str(tmp_path / "build"),
        "log_level": "WARNING",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def test_settings(tmp_path):
    return make_settings(tmp_path)


@pytest_asyncio.fixture
async def db_engine(test_settings):
    """
    Engine on a fresh SQLite file with every table the app reads or writes.

    The `rectores` directory is created here only; in deployments another
    loader owns it.
    """
    engine = create_engine(test_settings)
    await schema_service.create_tables(engine)
    async with engine.begin() as conn:
        await conn.run_sync(reference_metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def seed_schools(db_engine):
    """Returns an async callable that inserts raw school names."""

    async def _seed(names: Iterable[str]) -> None:
        async with db_engine.begin() as conn:
            await conn.execute(
                schools_table.insert(),
                [{SCHOOL_NAME_COLUMN: name} for name in names],
            )

    return _seed


@pytest.fixture
def count_rows(db_engine):
    """Returns an async callable counting the rows of a submission table."""

    async def _count(table_name: str) -> int:
        table = Base.metadata.tables[table_name]
        async with db_engine.connect() as conn:
            result = await conn.execute(select(func.count()).select_from(table))
            return result.scalar_one()

    return _count


# ══════════════════════════════════════════════════════════════════════════
# Application
# ══════════════════════════════════════════════════════════════════════════

def wire_app(settings: Settings, engine=None):
    app = create_app(settings)
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine) if engine else None
    return app


@pytest.fixture
def app(test_settings, db_engine):
    return wire_app(test_settings, db_engine)


@pytest.fixture
def make_client(tmp_path, db_engine):
    """
    Returns a factory for clients on an app built with overridden settings.

    Usage:
        async with make_client(environment="production") as client: ...
        async with make_client(with_db=False) as client: ...
    """

    def _make(with_db: bool = True, **overrides) -> AsyncClient:
        app = wire_app(make_settings(tmp_path, **overrides), db_engine if with_db else None)
        return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")

    return _make


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient routed straight into the app.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# ══════════════════════════════════════════════════════════════════════════
# Mocks & Sample Data
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.flush.side_effect = RuntimeError("connection lost")
        await service.submit_guardian(mock_db_session, payload)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def guardian_payload():
    """A valid POST /api/submit-form body."""
    return {
        "schoolName": "  IE San Jose  ",
        "studentGrades": ["3°", "7°"],
        "frequencyRatings5": {"q1": "Siempre", "q2": "A veces"},
        "frequencyRatings6": {"q1": "Casi nunca"},
        "frequencyRatings7": {"q1": "Nunca"},
    }


@pytest.fixture
def complete_form():
    form = GuardianForm(school_name="IE San Jose")
    form.toggle_grade(GRADE_LEVELS[4])
    for section in GUARDIAN_SECTIONS:
        for question in section.questions:
            form.set_rating(section, question, FrequencyRating.ALMOST_ALWAYS)
    return form

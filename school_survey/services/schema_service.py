"""
School Survey Backend — Schema Service
========================================

What:  Creates the three submission tables if they do not exist.
How:   Runs Base.metadata.create_all(checkfirst=True) on an async engine via
       connection.run_sync(), one table at a time so each is logged.
Who:   Called by the init_db script; tests call it against SQLite.

Idempotency:
    checkfirst=True issues CREATE TABLE only for missing tables, so repeated
    runs neither fail nor duplicate anything. The reference table `rectores`
    lives on a separate MetaData and is never created here.
"""

import logging
from typing import List

from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import AsyncEngine

from school_survey.database import Base
from school_survey.models import submission  # noqa: F401  (registers tables)

logger = logging.getLogger(__name__)


class SchemaService:
    """Idempotent DDL for the tables this service owns."""

    @property
    def table_names(self) -> List[str]:
        return [table.name for table in Base.metadata.sorted_tables]

    async def create_tables(self, engine: AsyncEngine) -> List[str]:
        """
        Ensure every submission table exists.

        Returns:
            Names of the tables that were missing and have been created.
        """
        async with engine.begin() as conn:
            existing = set(await conn.run_sync(lambda c: inspect(c).get_table_names()))
            created = []
            for table in Base.metadata.sorted_tables:
                await conn.run_sync(table.create, checkfirst=True)
                if table.name in existing:
                    logger.info("%s table already exists", table.name)
                else:
                    created.append(table.name)
                    logger.info("%s table created successfully", table.name)
        return created

    async def existing_tables(self, engine: AsyncEngine) -> List[str]:
        """Names of the owned tables currently present in the store."""
        async with engine.connect() as conn:
            present = set(await conn.run_sync(lambda c: inspect(c).get_table_names()))
        return [name for name in self.table_names if name in present]


schema_service = SchemaService()

"""
School Survey — One-Shot Schema Initializer
=============================================

What:  Creates the acudientes, docentes and estudiantes submission tables.
When:  Once per deployment, before the API starts taking submissions.
How:   python -m school_survey.scripts.init_db

Exit codes:
    0  every table exists (created now or already present)
    1  configuration or database failure (details are logged)
"""

import asyncio
import logging
import sys
from typing import Optional

from school_survey.config import Settings, settings as default_settings
from school_survey.database import create_engine, dispose_engine
from school_survey.logging_setup import setup_logging
from school_survey.services.schema_service import schema_service

logger = logging.getLogger("school_survey.init_db")


async def run_migrations(settings: Settings) -> int:
    """Create missing tables. Returns the process exit code."""
    logger.info("Starting database migrations...")
    engine = None
    try:
        settings.validate_required_for_production()
        engine = create_engine(settings)
        created = await schema_service.create_tables(engine)
    except Exception as e:
        logger.error("Error running migrations: %s", str(e), exc_info=True)
        return 1
    finally:
        await dispose_engine(engine)

    logger.info(
        "All migrations completed successfully (%d created, %d already present)",
        len(created),
        len(schema_service.table_names) - len(created),
    )
    return 0


def main(settings: Optional[Settings] = None) -> int:
    settings = settings or default_settings
    setup_logging(settings.log_level)
    return asyncio.run(run_migrations(settings))


if __name__ == "__main__":
    sys.exit(main())

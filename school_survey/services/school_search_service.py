"""
School Survey Backend — School Search Service
===============================================

What:  Case-insensitive substring lookup over the reference school directory.
How:   SELECT DISTINCT TRIM(name) ... WHERE LOWER(TRIM(name)) LIKE %term%
       ORDER BY 1. LIKE wildcards in the term are escaped, so "50%" matches
       the literal text.
Who:   Called by GET /api/search-schools (autocomplete).

Result size:
    No pagination and no cap; a very short term can return the whole
    directory. The client only queries from 2 characters on.
"""

import logging
from typing import List

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from school_survey.database import SCHOOL_NAME_COLUMN, schools_table
from school_survey.exceptions import DatabaseError

logger = logging.getLogger(__name__)

SEARCH_FAILED_MESSAGE = "Failed to search schools"


class SchoolSearchService:
    """Read-only queries against the `rectores` directory table."""

    async def search(self, db: AsyncSession, term: str) -> List[str]:
        """
        Return distinct trimmed school names containing `term`, ascending.

        An empty term matches every non-null name.

        Raises:
            DatabaseError: The query failed.
        """
        trimmed = func.trim(schools_table.c[SCHOOL_NAME_COLUMN])
        school_name = trimmed.label("school_name")
        query = (
            select(school_name)
            .where(func.lower(trimmed).contains(term.lower(), autoescape=True))
            .distinct()
            .order_by(school_name)
        )

        try:
            result = await db.execute(query)
            names = list(result.scalars().all())
        except Exception as e:
            logger.error("School search failed for %r: %s", term, str(e), exc_info=True)
            # Same text in every environment; the driver error stays in the log
            raise DatabaseError(
                message=SEARCH_FAILED_MESSAGE,
                public_message=SEARCH_FAILED_MESSAGE,
                context={"error_type": type(e).__name__, "detail": str(e)},
            ) from e

        logger.debug("School search %r matched %d names", term, len(names))
        return names


school_search_service = SchoolSearchService()

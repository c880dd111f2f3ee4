"""
School Survey Backend — School Search Route
=============================================

What:  GET /api/search-schools?q=<text> for the school-name autocomplete.
How:   Delegates to SchoolSearchService and returns a bare JSON array.

The server imposes no minimum length on `q`; the client does (2 characters).
"""

from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from school_survey.database import get_db_session
from school_survey.schemas.submission import ErrorResponse
from school_survey.services.school_search_service import school_search_service

router = APIRouter(prefix="/api", tags=["Schools"])


@router.get(
    "/search-schools",
    response_model=List[str],
    responses={500: {"description": "Search failed", "model": ErrorResponse}},
    summary="Search school names",
    description=(
        "Case-insensitive substring match over the school directory. "
        "Returns distinct names in ascending order, possibly empty."
    ),
)
async def search_schools(
    q: str = Query(default="", description="Text contained in the school name"),
    db: AsyncSession = Depends(get_db_session),
) -> List[str]:
    return await school_search_service.search(db, q)

"""
School Survey Backend — Submission Route Handlers
===================================================

What:  POST /api/submit-form (guardians) plus the teacher and student
       variants under /api/submit-form/{role}.
How:   FastAPI validates the body against the request schema (presence
       checks); the handler delegates the insert to SubmissionService and
       wraps the stored row in the success envelope.

Error responses (global exception handlers in main.py):
    HTTP 400: missing or empty required field
    HTTP 500: store failure
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from school_survey.database import get_db_session
from school_survey.schemas.submission import (
    ErrorResponse,
    GuardianSubmissionRequest,
    StudentSubmissionRequest,
    SubmissionResponse,
    TeacherSubmissionRequest,
)
from school_survey.services.submission_service import submission_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Submissions"])

_ERROR_RESPONSES = {
    400: {"description": "Missing or empty required field", "model": ErrorResponse},
    500: {"description": "Could not store the submission", "model": ErrorResponse},
}


@router.post(
    "/submit-form",
    response_model=SubmissionResponse,
    response_model_exclude_none=True,
    responses=_ERROR_RESPONSES,
    summary="Submit a guardian questionnaire",
)
async def submit_guardian_form(
    payload: GuardianSubmissionRequest,
    db: AsyncSession = Depends(get_db_session),
) -> SubmissionResponse:
    """
    Store one guardian questionnaire and return the inserted row.

    Only container presence is checked here; whether every statement was
    answered is validated by the form client.
    """
    logger.info(
        "Received guardian form: school=%r, grades=%d",
        payload.school_name,
        len(payload.student_grades),
    )
    row = await submission_service.submit_guardian(db, payload)
    return SubmissionResponse(success=True, data=row)


@router.post(
    "/submit-form/teachers",
    response_model=SubmissionResponse,
    response_model_exclude_none=True,
    responses=_ERROR_RESPONSES,
    summary="Submit a teacher questionnaire",
)
async def submit_teacher_form(
    payload: TeacherSubmissionRequest,
    db: AsyncSession = Depends(get_db_session),
) -> SubmissionResponse:
    logger.info("Received teacher form: school=%r", payload.school_name)
    row = await submission_service.submit_teacher(db, payload)
    return SubmissionResponse(success=True, data=row)


@router.post(
    "/submit-form/students",
    response_model=SubmissionResponse,
    response_model_exclude_none=True,
    responses=_ERROR_RESPONSES,
    summary="Submit a student questionnaire",
)
async def submit_student_form(
    payload: StudentSubmissionRequest,
    db: AsyncSession = Depends(get_db_session),
) -> SubmissionResponse:
    logger.info("Received student form: school=%r", payload.school_name)
    row = await submission_service.submit_student(db, payload)
    return SubmissionResponse(success=True, data=row)

"""
School Survey Backend — Submission Service
============================================

What:  Persists one questionnaire per call into the table of its role.
How:   Maps a validated request schema onto its ORM model, inserts it, and
       returns the stored row (including the store-assigned id and
       created_at).
Who:   Called by the submission route handlers.

Write Semantics:
    Each call is a single-row insert committed before returning, so the
    returned row is durable. There is no update or delete path.

Error Handling:
    Any store failure is wrapped in DatabaseError. The driver's text is kept
    in `message` (shown outside production) and the public message is the
    generic "Failed to save form data".
"""

import logging
from typing import Any, Dict, Union

from sqlalchemy.ext.asyncio import AsyncSession

from school_survey.exceptions import DatabaseError
from school_survey.models.submission import (
    GuardianSubmission,
    StudentSubmission,
    TeacherSubmission,
)
from school_survey.schemas.submission import (
    GuardianSubmissionRequest,
    StudentSubmissionRequest,
    TeacherSubmissionRequest,
)

logger = logging.getLogger(__name__)

SAVE_FAILED_MESSAGE = "Failed to save form data"

SubmissionRecord = Union[GuardianSubmission, TeacherSubmission, StudentSubmission]


class SubmissionService:
    """
    Stateless insert logic for the three respondent roles.

    The session is passed in per call; the service holds no connection.
    """

    async def submit_guardian(
        self, db: AsyncSession, payload: GuardianSubmissionRequest
    ) -> Dict[str, Any]:
        """
        Store a guardian questionnaire.

        The three answer maps land in comunicacion, practicas_pedagogicas and
        convivencia respectively.
        """
        record = GuardianSubmission(
            school_name=payload.school_name,
            student_grades=list(payload.student_grades),
            communication=dict(payload.frequency_ratings5),
            pedagogical_practices=dict(payload.frequency_ratings6),
            coexistence=dict(payload.frequency_ratings7),
        )
        return await self._insert(db, record)

    async def submit_teacher(
        self, db: AsyncSession, payload: TeacherSubmissionRequest
    ) -> Dict[str, Any]:
        record = TeacherSubmission(
            school_name=payload.school_name,
            years_teaching=payload.years_teaching,
            assigned_grades=list(payload.assigned_grades),
            school_shift=payload.school_shift,
            feedback_from=list(payload.feedback_from),
            frequency_ratings6=dict(payload.frequency_ratings6),
            frequency_ratings7=dict(payload.frequency_ratings7),
            frequency_ratings8=dict(payload.frequency_ratings8),
        )
        return await self._insert(db, record)

    async def submit_student(
        self, db: AsyncSession, payload: StudentSubmissionRequest
    ) -> Dict[str, Any]:
        record = StudentSubmission(
            school_name=payload.school_name,
            years_studying=payload.years_studying,
            current_grade=payload.current_grade,
            school_shift=payload.school_shift,
            frequency_ratings5=dict(payload.frequency_ratings5),
            frequency_ratings6=dict(payload.frequency_ratings6),
            frequency_ratings7=dict(payload.frequency_ratings7),
        )
        return await self._insert(db, record)

    async def _insert(self, db: AsyncSession, record: SubmissionRecord) -> Dict[str, Any]:
        """
        Insert, load server defaults, commit.

        Raises:
            DatabaseError: The insert or commit failed; nothing is stored.
        """
        table = record.__tablename__
        try:
            db.add(record)
            await db.flush()
            # created_at is assigned by the store
            await db.refresh(record)
            await db.commit()
        except Exception as e:
            await db.rollback()
            logger.error("Insert into %s failed: %s", table, str(e), exc_info=True)
            raise DatabaseError(
                message=str(e),
                public_message=SAVE_FAILED_MESSAGE,
                context={"table": table, "error_type": type(e).__name__},
            ) from e

        logger.info("Stored submission %s in %s", record.id, table)
        return record.to_row()


submission_service = SubmissionService()

"""
School Survey — Submission Service Unit Tests
===============================================

What:  SubmissionService against a mocked AsyncSession (no database).

What we test:
    ✅ Request fields land on the right ORM attributes
    ✅ Insert is flushed, refreshed and committed
    ✅ Store failure rolls back and raises DatabaseError with the public text
"""

import pytest

from school_survey.exceptions import DatabaseError
from school_survey.models.submission import GuardianSubmission, StudentSubmission
from school_survey.schemas.submission import (
    GuardianSubmissionRequest,
    StudentSubmissionRequest,
)
from school_survey.services.submission_service import SAVE_FAILED_MESSAGE, SubmissionService


class TestSubmitGuardian:

    def setup_method(self):
        self.service = SubmissionService()

    @pytest.mark.asyncio
    async def test_maps_payload_onto_model(self, mock_db_session, guardian_payload):
        payload = GuardianSubmissionRequest.model_validate(guardian_payload)

        row = await self.service.submit_guardian(mock_db_session, payload)

        (record,), _ = mock_db_session.add.call_args
        assert isinstance(record, GuardianSubmission)
        assert record.school_name == "  IE San Jose  "
        assert record.communication == {"q1": "Siempre", "q2": "A veces"}
        assert record.coexistence == {"q1": "Nunca"}
        mock_db_session.flush.assert_awaited_once()
        mock_db_session.refresh.assert_awaited_once_with(record)
        mock_db_session.commit.assert_awaited_once()
        assert row["institucion_educativa"] == "  IE San Jose  "
        assert row["practicas_pedagogicas"] == {"q1": "Casi nunca"}

    @pytest.mark.asyncio
    async def test_store_failure_rolls_back(self, mock_db_session, guardian_payload):
        payload = GuardianSubmissionRequest.model_validate(guardian_payload)
        mock_db_session.flush.side_effect = RuntimeError("connection reset by peer")

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.submit_guardian(mock_db_session, payload)

        assert exc_info.value.message == "connection reset by peer"
        assert exc_info.value.public_message == SAVE_FAILED_MESSAGE
        assert exc_info.value.context["table"] == "acudientes_form_submissions"
        mock_db_session.rollback.assert_awaited_once()
        mock_db_session.commit.assert_not_awaited()


class TestSubmitStudent:

    def setup_method(self):
        self.service = SubmissionService()

    @pytest.mark.asyncio
    async def test_maps_payload_onto_model(self, mock_db_session):
        payload = StudentSubmissionRequest(
            school_name="IE La Esperanza",
            years_studying="2",
            current_grade="5°",
            school_shift="Mañana",
            frequency_ratings5={},
            frequency_ratings6={"q1": "Siempre"},
            frequency_ratings7={},
        )

        await self.service.submit_student(mock_db_session, payload)

        (record,), _ = mock_db_session.add.call_args
        assert isinstance(record, StudentSubmission)
        assert record.current_grade == "5°"
        assert record.frequency_ratings6 == {"q1": "Siempre"}

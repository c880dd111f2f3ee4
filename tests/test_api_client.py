"""
School Survey — HTTP Client Tests
===================================

What:  SurveyApiClient against httpx.MockTransport handlers (no server).

What we test:
    ✅ Incomplete forms never reach the network
    ✅ Successful submit returns the row and resets the form
    ✅ Rejections and transport failures raise SubmissionError, form intact
    ✅ Search floor, query encoding and failure → []
"""

import json

import httpx
import pytest

from school_survey.client.api import SurveyApiClient
from school_survey.client.form import MISSING_GRADES_MESSAGE, GuardianForm
from school_survey.exceptions import SubmissionError, ValidationError


class RecordingHandler:
    """MockTransport handler that records requests and replays one response."""

    def __init__(self, status_code=200, body=None, error=None):
        self.status_code = status_code
        self.body = body
        self.error = error
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, json=self.body)


def make_api(handler, **kwargs) -> SurveyApiClient:
    return SurveyApiClient(
        base_url="http://survey.test",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


class TestSubmitGuardianForm:

    @pytest.mark.asyncio
    async def test_incomplete_form_is_not_sent(self):
        handler = RecordingHandler(body={"success": True, "data": {}})
        form = GuardianForm(school_name="IE San Jose")

        async with make_api(handler) as api:
            with pytest.raises(ValidationError) as exc_info:
                await api.submit_guardian_form(form)

        assert exc_info.value.message == MISSING_GRADES_MESSAGE
        assert handler.requests == []

    @pytest.mark.asyncio
    async def test_success_returns_row_and_resets(self, complete_form):
        payload = complete_form.to_payload()
        row = {"id": 7, "institucion_educativa": "IE San Jose"}
        handler = RecordingHandler(body={"success": True, "data": row})

        async with make_api(handler) as api:
            result = await api.submit_guardian_form(complete_form)

        assert result == row
        assert complete_form == GuardianForm()
        (request,) = handler.requests
        assert request.method == "POST"
        assert request.url.path == "/api/submit-form"
        assert json.loads(request.content) == payload

    @pytest.mark.asyncio
    async def test_server_rejection_keeps_form(self, complete_form):
        handler = RecordingHandler(
            status_code=500, body={"success": False, "error": "Failed to save form data"}
        )

        async with make_api(handler) as api:
            with pytest.raises(SubmissionError) as exc_info:
                await api.submit_guardian_form(complete_form)

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Failed to save form data"
        assert complete_form.is_complete

    @pytest.mark.asyncio
    async def test_success_false_with_200_is_rejection(self, complete_form):
        handler = RecordingHandler(body={"success": False, "error": "nope"})

        async with make_api(handler) as api:
            with pytest.raises(SubmissionError):
                await api.submit_guardian_form(complete_form)

    @pytest.mark.asyncio
    async def test_transport_failure(self, complete_form):
        handler = RecordingHandler(error=httpx.ConnectError("connection refused"))

        async with make_api(handler) as api:
            with pytest.raises(SubmissionError) as exc_info:
                await api.submit_guardian_form(complete_form)

        assert exc_info.value.status_code is None
        assert complete_form.is_complete


class TestSearchSchools:

    @pytest.mark.asyncio
    async def test_short_term_skips_request(self):
        handler = RecordingHandler(body=["IE San Jose"])

        async with make_api(handler) as api:
            assert await api.search_schools("s") == []

        assert handler.requests == []

    @pytest.mark.asyncio
    async def test_returns_names(self):
        handler = RecordingHandler(body=["Colegio Santa Maria", "IE San Jose"])

        async with make_api(handler) as api:
            names = await api.search_schools("san j")

        assert names == ["Colegio Santa Maria", "IE San Jose"]
        (request,) = handler.requests
        assert request.url.path == "/api/search-schools"
        assert request.url.params["q"] == "san j"

    @pytest.mark.asyncio
    async def test_server_error_yields_empty_list(self):
        handler = RecordingHandler(
            status_code=500, body={"success": False, "error": "Failed to search schools"}
        )

        async with make_api(handler) as api:
            assert await api.search_schools("san") == []

    @pytest.mark.asyncio
    async def test_transport_error_yields_empty_list(self):
        handler = RecordingHandler(error=httpx.ReadTimeout("timed out"))

        async with make_api(handler) as api:
            assert await api.search_schools("san") == []

    @pytest.mark.asyncio
    async def test_custom_minimum(self):
        handler = RecordingHandler(body=[])

        async with make_api(handler, min_chars=4) as api:
            await api.search_schools("san")

        assert handler.requests == []


class TestHealth:

    @pytest.mark.asyncio
    async def test_returns_body_even_when_unhealthy(self):
        body = {"status": "unhealthy", "database": "disconnected"}
        handler = RecordingHandler(status_code=503, body=body)

        async with make_api(handler) as api:
            assert await api.health() == body

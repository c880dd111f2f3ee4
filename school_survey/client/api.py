"""
School Survey Client — HTTP API Client
========================================

What:  Async client for the survey API: form submission, school search and
       health.
How:   Wraps an httpx.AsyncClient. Forms are validated locally before any
       request goes out; search terms shorter than the minimum never leave
       the client.
Who:   Used by SchoolAutocomplete and by scripts that submit questionnaires.

Usage:
    async with SurveyApiClient("http://localhost:3005") as api:
        names = await api.search_schools("san jo")
        row = await api.submit_guardian_form(form)
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from school_survey.client.form import GuardianForm
from school_survey.config import settings
from school_survey.exceptions import SubmissionError, ValidationError

logger = logging.getLogger(__name__)


class SurveyApiClient:
    """
    Thin async client over the survey REST API.

    Args:
        base_url:     API origin, e.g. http://localhost:3005
        timeout:      Per-request timeout in seconds
        min_chars:    Shortest search term sent to the server
        transport:    Optional httpx transport (tests use httpx.MockTransport)
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        min_chars: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.min_chars = min_chars if min_chars is not None else settings.search_min_chars
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout or settings.client_timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "SurveyApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ── Submission ────────────────────────────────────────────────────────

    async def submit_guardian_form(self, form: GuardianForm) -> Dict[str, Any]:
        """
        Validate locally, submit, and reset the form on success.

        Returns:
            The stored row from the server's `data` field.

        Raises:
            ValidationError: The form is incomplete; nothing was sent.
            SubmissionError: Transport failure, non-2xx status, or
                             `success: false` from the server. The form is
                             left untouched so the respondent can retry.
        """
        problem = form.validate()
        if problem:
            raise ValidationError(message=problem)

        try:
            response = await self._client.post("/api/submit-form", json=form.to_payload())
        except httpx.HTTPError as e:
            logger.error("Error submitting form: %s", str(e))
            raise SubmissionError(message=str(e)) from e

        body = self._json_or_empty(response)
        if response.is_error or not body.get("success"):
            message = body.get("error") or "Failed to submit form"
            logger.error("Form rejected (%d): %s", response.status_code, message)
            raise SubmissionError(message=message, status_code=response.status_code)

        form.reset()
        return body.get("data") or {}

    # ── Search ────────────────────────────────────────────────────────────

    async def search_schools(self, term: str) -> List[str]:
        """
        School names containing `term`.

        Returns [] without a request when the term is shorter than
        `min_chars`, and [] (logged) when the request fails.
        """
        if len(term) < self.min_chars:
            return []
        try:
            response = await self._client.get("/api/search-schools", params={"q": term})
            response.raise_for_status()
            names = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Error fetching school suggestions for %r: %s", term, str(e))
            return []
        if not isinstance(names, list):
            return []
        return [str(name) for name in names]

    # ── Health ────────────────────────────────────────────────────────────

    async def health(self) -> Dict[str, Any]:
        """The /health body, whatever its status code."""
        response = await self._client.get("/health")
        return self._json_or_empty(response)

    @staticmethod
    def _json_or_empty(response: httpx.Response) -> Dict[str, Any]:
        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}

"""
School Survey Client — Debounced School Autocomplete
======================================================

What:  Turns keystrokes in the school-name field into debounced lookups.
How:   Each keystroke cancels the pending lookup task and schedules a new one
       that sleeps for the debounce delay before querying. Results are only
       published if the field still holds the value they were fetched for.

Behavior:
    - Every keystroke clears the visible suggestions.
    - Values shorter than the minimum never schedule a lookup.
    - Selecting a suggestion fills the form and clears the list.
"""

import asyncio
import contextlib
import logging
from typing import List, Optional

from school_survey.client.api import SurveyApiClient
from school_survey.client.form import GuardianForm
from school_survey.config import settings

logger = logging.getLogger(__name__)


class SchoolAutocomplete:
    """Keystroke-driven suggestion state for one GuardianForm."""

    def __init__(
        self,
        api: SurveyApiClient,
        form: GuardianForm,
        debounce_ms: Optional[int] = None,
        min_chars: Optional[int] = None,
    ):
        self.api = api
        self.form = form
        delay = debounce_ms if debounce_ms is not None else settings.autocomplete_debounce_ms
        self.debounce_seconds = delay / 1000
        self.min_chars = min_chars if min_chars is not None else settings.search_min_chars
        self.suggestions: List[str] = []
        self._pending: Optional[asyncio.Task] = None

    @property
    def show_suggestions(self) -> bool:
        return bool(self.suggestions) and len(self.form.school_name) >= self.min_chars

    def on_input(self, value: str) -> None:
        """Handle one keystroke. Must be called from a running event loop."""
        self.form.school_name = value
        self.suggestions = []
        self._cancel_pending()

        if len(value) < self.min_chars:
            return
        self._pending = asyncio.get_running_loop().create_task(self._lookup(value))

    def select(self, suggestion: str) -> None:
        self._cancel_pending()
        self.form.school_name = suggestion
        self.suggestions = []

    async def settle(self) -> None:
        """Wait for the pending lookup, if any, to finish."""
        if self._pending is None:
            return
        with contextlib.suppress(asyncio.CancelledError):
            await self._pending

    async def aclose(self) -> None:
        self._cancel_pending()
        await self.settle()

    async def _lookup(self, value: str) -> None:
        await asyncio.sleep(self.debounce_seconds)
        names = await self.api.search_schools(value)
        if self.form.school_name != value:
            logger.debug("Discarding stale suggestions for %r", value)
            return
        self.suggestions = names

    def _cancel_pending(self) -> None:
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()

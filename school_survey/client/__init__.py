"""
School Survey Client
=====================

Python side of the questionnaire: answer state (GuardianForm), HTML
rendering, the HTTP API client and the debounced school autocomplete.
"""

from school_survey.client.api import SurveyApiClient
from school_survey.client.autocomplete import SchoolAutocomplete
from school_survey.client.form import GuardianForm
from school_survey.client.render import render_questionnaire

__all__ = [
    "GuardianForm",
    "SchoolAutocomplete",
    "SurveyApiClient",
    "render_questionnaire",
]

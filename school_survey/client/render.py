"""
School Survey Client — Questionnaire Renderer
===============================================

What:  Renders the guardian questionnaire as a standalone HTML page.
How:   Jinja2 template in client/templates, fed with the catalog and the
       current GuardianForm state. After a submit attempt, unanswered
       statements are flagged.
Who:   The catch-all route serves this page when no built client shell is
       deployed; the page posts to /api/submit-form itself.
"""

from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from school_survey.client.form import (
    INCOMPLETE_RATINGS_MESSAGE,
    MISSING_GRADES_MESSAGE,
    MISSING_SCHOOL_MESSAGE,
    GuardianForm,
)
from school_survey.questionnaire import FREQUENCY_OPTIONS, GRADE_LEVELS

TEMPLATE_DIR = Path(__file__).parent / "templates"

_env = Environment(
    loader=FileSystemLoader(TEMPLATE_DIR),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


def render_questionnaire(
    form: Optional[GuardianForm] = None,
    attempted_submit: bool = False,
    error: Optional[str] = None,
    search_min_chars: int = 2,
    debounce_ms: int = 300,
) -> str:
    """
    Render the questionnaire page.

    Args:
        form:              Answer state to pre-fill (empty form when None)
        attempted_submit:  Flag unanswered statements in red
        error:             Message shown above the form (e.g. validate() output)
        search_min_chars:  Characters typed before autocomplete queries run
        debounce_ms:       Delay between the last keystroke and the lookup
    """
    form = form or GuardianForm()
    sections = [
        {
            "number": section.number,
            "title": section.title,
            "payload_key": section.payload_key,
            "rows": [
                {
                    "index": index,
                    "question": question,
                    "answer": answers.get(question),
                    "missing": attempted_submit and question not in answers,
                }
                for index, question in enumerate(section.questions)
            ],
        }
        for section, answers in form.sections()
    ]
    template = _env.get_template("questionnaire.html")
    return template.render(
        form=form,
        sections=sections,
        grades=GRADE_LEVELS,
        options=FREQUENCY_OPTIONS,
        error=error,
        search_min_chars=search_min_chars,
        debounce_ms=debounce_ms,
        messages={
            "missingSchool": MISSING_SCHOOL_MESSAGE,
            "missingGrades": MISSING_GRADES_MESSAGE,
            "incompleteRatings": INCOMPLETE_RATINGS_MESSAGE,
        },
    )

"""
School Survey Client — Guardian Form State
============================================

What:  Local answer state for the guardian questionnaire, its client-side
       completeness checks, and the JSON payload it submits.
How:   A fixed-shape record with one named field per rated section. Sections
       are matched against the catalog, never looked up by a key built from
       the section number.

Completeness (checked before any request is sent):
    1. school name is non-blank
    2. at least one grade is selected
    3. every statement of every section has a rating
The server re-checks only 1 and 2 (plus presence of the three maps).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from school_survey.exceptions import ValidationError
from school_survey.questionnaire import (
    COEXISTENCE,
    COMMUNICATION,
    FrequencyRating,
    GRADE_LEVELS,
    GUARDIAN_SECTIONS,
    PEDAGOGICAL_PRACTICES,
    QuestionnaireSection,
)

MISSING_SCHOOL_MESSAGE = "Por favor, ingrese el nombre de la Institución Educativa."
MISSING_GRADES_MESSAGE = (
    "Por favor, seleccione al menos un grado en el que se encuentra cursando "
    "el o los estudiantes que usted representa."
)
INCOMPLETE_RATINGS_MESSAGE = (
    "Por favor, responda todas las preguntas de frecuencia antes de enviar el formulario."
)


@dataclass
class GuardianForm:
    """
    Answer state for one guardian questionnaire.

    Attributes:
        school_name:            Free text, usually picked from autocomplete
        student_grades:         Selected grade labels, in selection order
        communication:          Section 3 answers (statement → rating)
        pedagogical_practices:  Section 4 answers
        coexistence:            Section 5 answers
    """

    school_name: str = ""
    student_grades: List[str] = field(default_factory=list)
    communication: Dict[str, str] = field(default_factory=dict)
    pedagogical_practices: Dict[str, str] = field(default_factory=dict)
    coexistence: Dict[str, str] = field(default_factory=dict)

    # ── Section access ────────────────────────────────────────────────────

    def sections(self) -> Tuple[Tuple[QuestionnaireSection, Dict[str, str]], ...]:
        """Each catalog section paired with the answers recorded for it."""
        return (
            (COMMUNICATION, self.communication),
            (PEDAGOGICAL_PRACTICES, self.pedagogical_practices),
            (COEXISTENCE, self.coexistence),
        )

    def answers(self, section: QuestionnaireSection) -> Dict[str, str]:
        for known, answers in self.sections():
            if known == section:
                return answers
        raise ValidationError(
            message=f"Unknown questionnaire section: {section.title}",
            field="section",
        )

    # ── Mutations ─────────────────────────────────────────────────────────

    def toggle_grade(self, grade: str, checked: bool = True) -> None:
        """Add (checked) or remove (unchecked) a grade label."""
        if grade not in GRADE_LEVELS:
            raise ValidationError(message=f"Unknown grade: {grade}", field="studentGrades")
        if checked and grade not in self.student_grades:
            self.student_grades.append(grade)
        elif not checked and grade in self.student_grades:
            self.student_grades.remove(grade)

    def set_rating(
        self,
        section: QuestionnaireSection,
        question: str,
        rating: Union[FrequencyRating, str],
    ) -> None:
        """Record the rating for one statement, replacing any earlier answer."""
        if question not in section.questions:
            raise ValidationError(
                message=f"Question does not belong to section {section.title}",
                field=section.payload_key,
            )
        try:
            value = FrequencyRating(rating).value
        except ValueError:
            raise ValidationError(
                message=f"Invalid rating: {rating}",
                field=section.payload_key,
            ) from None
        self.answers(section)[question] = value

    def reset(self) -> None:
        self.school_name = ""
        self.student_grades = []
        self.communication = {}
        self.pedagogical_practices = {}
        self.coexistence = {}

    # ── Completeness ──────────────────────────────────────────────────────

    def is_answered(self, section: QuestionnaireSection, question: str) -> bool:
        return question in self.answers(section)

    def unanswered(self, section: QuestionnaireSection) -> List[str]:
        answers = self.answers(section)
        return [q for q in section.questions if q not in answers]

    @property
    def is_complete(self) -> bool:
        return self.validate() is None

    def validate(self) -> Optional[str]:
        """
        Return the first blocking message, or None when the form can be sent.

        Order matches what the respondent sees top to bottom: school name,
        grades, then the rated sections.
        """
        if not self.school_name.strip():
            return MISSING_SCHOOL_MESSAGE
        if not self.student_grades:
            return MISSING_GRADES_MESSAGE
        if any(self.unanswered(section) for section in GUARDIAN_SECTIONS):
            return INCOMPLETE_RATINGS_MESSAGE
        return None

    # ── Serialization ─────────────────────────────────────────────────────

    def to_payload(self) -> Dict[str, Any]:
        """The JSON body accepted by POST /api/submit-form."""
        return {
            "schoolName": self.school_name,
            "studentGrades": list(self.student_grades),
            "frequencyRatings5": dict(self.communication),
            "frequencyRatings6": dict(self.pedagogical_practices),
            "frequencyRatings7": dict(self.coexistence),
        }

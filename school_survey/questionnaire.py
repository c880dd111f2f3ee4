"""
School Survey — Questionnaire Catalog
=======================================

What:  The fixed content of the guardian questionnaire: the frequency scale,
       the grade labels and the three rated sections with their statements.
Who:   Used by the form client for answer state, completeness checks and
       rendering.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class FrequencyRating(str, Enum):
    """Five-point ordinal scale, most to least frequent."""

    ALWAYS = "Siempre"
    ALMOST_ALWAYS = "Casi siempre"
    SOMETIMES = "A veces"
    ALMOST_NEVER = "Casi nunca"
    NEVER = "Nunca"


FREQUENCY_OPTIONS: Tuple[str, ...] = tuple(rating.value for rating in FrequencyRating)

GRADE_LEVELS: Tuple[str, ...] = (
    "Primera infancia",
    "Preescolar",
    "1°",
    "2°",
    "3°",
    "4°",
    "5°",
    "6°",
    "7°",
    "8°",
    "9°",
    "10°",
    "11°",
    "12°",
)


@dataclass(frozen=True)
class QuestionnaireSection:
    """
    One rated block of the questionnaire.

    Attributes:
        number:       Question number shown to respondents
        title:        Section heading
        payload_key:  Key of the answer map in the submission payload
        questions:    Statements, in display order
    """

    number: int
    title: str
    payload_key: str
    questions: Tuple[str, ...]


COMMUNICATION = QuestionnaireSection(
    number=3,
    title="COMUNICACIÓN",
    payload_key="frequencyRatings5",
    questions=(
        "Los profesores tienen la disposición para hablar conmigo sobre los aprendizajes de los estudiantes en momentos adicionales a la entrega de notas.",
        "Los profesores promueven actividades para que apoye en su proceso de aprendizaje a los estudiantes que tengo a cargo.",
        "En el colegio se promueve mi participación en la toma de decisiones sobre las metas institucionales.",
        "En el colegio se hace reconocimiento público de las prácticas pedagógicas exitosas e innovadoras de los profesores.",
        "La comunicación que tengo con los directivos docentes del colegio es respetuosa y clara.",
        "En el colegio me siento escuchado/a y comprendida/o por los profesores, los directivos, los estudiantes y otros acudientes.",
    ),
)

PEDAGOGICAL_PRACTICES = QuestionnaireSection(
    number=4,
    title="PRÁCTICAS PEDAGÓGICAS",
    payload_key="frequencyRatings6",
    questions=(
        "A los estudiantes los llevan a lugares diferentes al salón para hacer sus clases (por ejemplo, la biblioteca, el laboratorio, el parque, el museo, el río, etc.).",
        "Los profesores demuestran que confían en los estudiantes y que creen en sus capacidades y habilidades.",
        "Los profesores tienen en cuenta los intereses y necesidades de los estudiantes para escoger los temas que se van a tratar en clase.",
        "Los profesores del colegio hacen las clases garantizando el derecho a la educación de los estudiantes que viven condiciones o situaciones especiales (por ejemplo, alguna discapacidad, que sean desplazados o que entraron tarde al curso).",
        "Cuando los profesores evalúan a los estudiantes tienen en cuenta su dimensión afectiva y emocional, además de la cognitiva y la comportamental.",
        "El colegio organiza o participa en actividades como torneos, campeonatos, olimpiadas o ferias con otros colegios o instituciones.",
    ),
)

COEXISTENCE = QuestionnaireSection(
    number=5,
    title="CONVIVENCIA",
    payload_key="frequencyRatings7",
    questions=(
        "Los estudiantes tratan con respeto a los profesores, directivos y administrativos del colegio.",
        "En el colegio recibo apoyo para resolver los conflictos que se dan y generar aprendizajes a partir de estos.",
        "En el colegio los estudiantes son respetuosos y solidarios entre ellos, comprendiendo y aceptando las creencias religiosas, el género, la orientación sexual, el grupo étnico y las capacidades o talentos de los demás.",
        "Los profesores establecen acuerdos de convivencia con los estudiantes al comenzar el año escolar.",
        "Mis opiniones, propuestas y sugerencias se tienen en cuenta cuando se construyen acuerdos de convivencia en el colegio.",
        "En el colegio los estudiantes son tratados con respeto sin importar sus creencias religiosas, género, orientación sexual, grupo étnico y capacidades o talentos.",
    ),
)

GUARDIAN_SECTIONS: Tuple[QuestionnaireSection, ...] = (
    COMMUNICATION,
    PEDAGOGICAL_PRACTICES,
    COEXISTENCE,
)

"""
School Survey Backend — Submission SQLAlchemy Models
======================================================

What:  ORM models for the three submission tables, one per respondent role.
How:   Python attributes are English; the mapped column names are the ones
       the deployed schema and downstream reports use.
Who:   Written by SubmissionService; created by the schema initializer.

Portable types:
    Answer maps are JSONB on PostgreSQL and JSON elsewhere.
    Label lists are TEXT[] on PostgreSQL and JSON elsewhere (tests run on SQLite).

Lifecycle:
    Rows are inserted once and never updated or deleted. Identity is the
    SERIAL id plus the store-assigned created_at.
"""

from datetime import datetime
from typing import Any, Dict, List

from sqlalchemy import JSON, DateTime, Integer, String, Text, inspect, text
from sqlalchemy.dialects.postgresql import ARRAY, JSONB
from sqlalchemy.orm import Mapped, mapped_column

from school_survey.database import Base

RatingsType = JSON().with_variant(JSONB(), "postgresql")
LabelListType = JSON().with_variant(ARRAY(Text()), "postgresql")


class SubmissionRowMixin:
    """Shared identity columns and row serialization."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def to_row(self) -> Dict[str, Any]:
        """The stored row keyed by column name, as returned to API callers."""
        mapper = inspect(self).mapper
        return {
            prop.columns[0].name: getattr(self, prop.key)
            for prop in mapper.column_attrs
        }


class GuardianSubmission(SubmissionRowMixin, Base):
    """One guardian (acudiente) questionnaire."""

    __tablename__ = "acudientes_form_submissions"

    school_name: Mapped[str] = mapped_column("institucion_educativa", Text, nullable=False)
    student_grades: Mapped[List[str]] = mapped_column(
        "grados_estudiantes", LabelListType, nullable=False
    )
    communication: Mapped[Dict[str, str]] = mapped_column(
        "comunicacion", RatingsType, nullable=False
    )
    pedagogical_practices: Mapped[Dict[str, str]] = mapped_column(
        "practicas_pedagogicas", RatingsType, nullable=False
    )
    coexistence: Mapped[Dict[str, str]] = mapped_column(
        "convivencia", RatingsType, nullable=False
    )

    def __repr__(self) -> str:
        return f"<GuardianSubmission(id={self.id}, school='{self.school_name}')>"


class TeacherSubmission(SubmissionRowMixin, Base):
    """One teacher (docente) questionnaire."""

    __tablename__ = "docentes_form_submissions"

    school_name: Mapped[str] = mapped_column(
        "institucion_educativa", String(255), nullable=False
    )
    years_teaching: Mapped[str] = mapped_column("anos_como_docente", String(50), nullable=False)
    assigned_grades: Mapped[List[str]] = mapped_column(
        "grados_asignados", LabelListType, nullable=False
    )
    school_shift: Mapped[str] = mapped_column("jornada", String(50), nullable=False)
    feedback_from: Mapped[List[str]] = mapped_column(
        "retroalimentacion_de", LabelListType, nullable=False
    )
    frequency_ratings6: Mapped[Dict[str, str]] = mapped_column(
        "frequency_ratings6", RatingsType, nullable=False
    )
    frequency_ratings7: Mapped[Dict[str, str]] = mapped_column(
        "frequency_ratings7", RatingsType, nullable=False
    )
    frequency_ratings8: Mapped[Dict[str, str]] = mapped_column(
        "frequency_ratings8", RatingsType, nullable=False
    )

    def __repr__(self) -> str:
        return f"<TeacherSubmission(id={self.id}, school='{self.school_name}')>"


class StudentSubmission(SubmissionRowMixin, Base):
    """One student (estudiante) questionnaire."""

    __tablename__ = "estudiantes_form_submissions"

    school_name: Mapped[str] = mapped_column("institucion_educativa", Text, nullable=False)
    years_studying: Mapped[str] = mapped_column("anos_estudiando", Text, nullable=False)
    current_grade: Mapped[str] = mapped_column("grado_actual", Text, nullable=False)
    school_shift: Mapped[str] = mapped_column("jornada", Text, nullable=False)
    frequency_ratings5: Mapped[Dict[str, str]] = mapped_column(
        "frequency_ratings5", RatingsType, nullable=False
    )
    frequency_ratings6: Mapped[Dict[str, str]] = mapped_column(
        "frequency_ratings6", RatingsType, nullable=False
    )
    frequency_ratings7: Mapped[Dict[str, str]] = mapped_column(
        "frequency_ratings7", RatingsType, nullable=False
    )

    def __repr__(self) -> str:
        return f"<StudentSubmission(id={self.id}, school='{self.school_name}')>"

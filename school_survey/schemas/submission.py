"""
School Survey Backend — Pydantic Request/Response Schemas
===========================================================

What:  The API contract between the questionnaire client and the backend.
How:   Request bodies use the client's camelCase keys (aliases); Python code
       works with snake_case names. Presence checks live in field validators,
       so a failing body surfaces as a RequestValidationError that main.py
       folds into the `{"success": false, "error": ...}` envelope.

Presence rules:
    - Text fields must be non-empty after trimming.
    - Label arrays must contain at least one entry.
    - Answer maps must be present; per-question completeness is a client
      concern and is not enforced here.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator

AnswerMap = Dict[str, str]


def _require_text(value: str, name: str) -> str:
    # Whitespace-only counts as missing; the value itself is stored as sent
    if not value.strip():
        raise ValueError(f"Missing required field: {name}")
    return value


def _require_labels(value: List[str], name: str) -> List[str]:
    if not value:
        raise ValueError(f"{name} must be a non-empty array")
    return value


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class GuardianSubmissionRequest(BaseModel):
    """
    Body of POST /api/submit-form.

    Example:
        {
            "schoolName": "IE San José",
            "studentGrades": ["3°", "7°"],
            "frequencyRatings5": {"<statement>": "Siempre", ...},
            "frequencyRatings6": {...},
            "frequencyRatings7": {...}
        }
    """

    school_name: str = Field(alias="schoolName")
    student_grades: List[str] = Field(alias="studentGrades")
    frequency_ratings5: AnswerMap = Field(alias="frequencyRatings5")
    frequency_ratings6: AnswerMap = Field(alias="frequencyRatings6")
    frequency_ratings7: AnswerMap = Field(alias="frequencyRatings7")

    model_config = {"populate_by_name": True}

    @field_validator("school_name")
    @classmethod
    def validate_school_name(cls, v: str) -> str:
        return _require_text(v, "schoolName")

    @field_validator("student_grades")
    @classmethod
    def validate_student_grades(cls, v: List[str]) -> List[str]:
        return _require_labels(v, "Student grades")


class TeacherSubmissionRequest(BaseModel):
    """Body of POST /api/submit-form/teachers."""

    school_name: str = Field(alias="schoolName")
    years_teaching: str = Field(alias="yearsTeaching")
    assigned_grades: List[str] = Field(alias="assignedGrades")
    school_shift: str = Field(alias="schoolShift")
    feedback_from: List[str] = Field(alias="feedbackFrom")
    frequency_ratings6: AnswerMap = Field(alias="frequencyRatings6")
    frequency_ratings7: AnswerMap = Field(alias="frequencyRatings7")
    frequency_ratings8: AnswerMap = Field(alias="frequencyRatings8")

    model_config = {"populate_by_name": True}

    @field_validator("school_name", "years_teaching", "school_shift")
    @classmethod
    def validate_text(cls, v: str, info: ValidationInfo) -> str:
        field = cls.model_fields[info.field_name].alias
        return _require_text(v, field)

    @field_validator("assigned_grades", "feedback_from")
    @classmethod
    def validate_labels(cls, v: List[str], info: ValidationInfo) -> List[str]:
        field = cls.model_fields[info.field_name].alias
        return _require_labels(v, field)


class StudentSubmissionRequest(BaseModel):
    """Body of POST /api/submit-form/students."""

    school_name: str = Field(alias="schoolName")
    years_studying: str = Field(alias="yearsStudying")
    current_grade: str = Field(alias="currentGrade")
    school_shift: str = Field(alias="schoolShift")
    frequency_ratings5: AnswerMap = Field(alias="frequencyRatings5")
    frequency_ratings6: AnswerMap = Field(alias="frequencyRatings6")
    frequency_ratings7: AnswerMap = Field(alias="frequencyRatings7")

    model_config = {"populate_by_name": True}

    @field_validator("school_name", "years_studying", "current_grade", "school_shift")
    @classmethod
    def validate_text(cls, v: str, info: ValidationInfo) -> str:
        field = cls.model_fields[info.field_name].alias
        return _require_text(v, field)


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class SubmissionResponse(BaseModel):
    """
    Envelope returned by every submission endpoint.

    On success `data` holds the inserted row keyed by column name
    (id, created_at, institucion_educativa, ...). On failure `error` holds
    the message and `data` is omitted.
    """

    success: bool = Field(description="Whether the row was stored")
    data: Optional[Dict[str, Any]] = Field(default=None, description="Inserted row")
    error: Optional[str] = Field(default=None, description="Failure description")


class ErrorResponse(BaseModel):
    """Failure envelope shared by every endpoint."""

    success: bool = Field(default=False)
    error: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    """
    What:  Health check response with a live database probe.
    Who:   Returned by GET /health for load balancers and deploy checks.
    """

    status: str = Field(description="healthy or unhealthy")
    database: str = Field(description="connected or disconnected")
    version: Optional[str] = Field(default=None, description="Application version")
    uptime_seconds: Optional[float] = Field(default=None, description="Seconds since start")
    error: Optional[str] = Field(default=None, description="Probe failure description")
    checked_at: datetime = Field(description="When the probe ran (UTC)")

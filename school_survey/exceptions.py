"""
School Survey Backend — Custom Exception Hierarchy
====================================================

What:  Application-specific exceptions for the error scenarios of the service
       and its Python client.
How:   Each exception carries a detailed message, a public message that is
       safe to show in production, and an optional context dict. Global
       exception handlers (registered in main.py) turn them into the
       `{"success": false, "error": ...}` envelope.

Exception Hierarchy:
    SurveyError (base)
    ├── ValidationError      → 400 Bad Request (client can fix)
    ├── NotFoundError        → 404 Not Found
    ├── DatabaseError        → 500 Internal Server Error
    └── SubmissionError      → raised client-side when the API rejects a form
"""

from typing import Any, Dict, Optional


class SurveyError(Exception):
    """
    Base exception for all survey application errors.

    Attributes:
        message:         Detailed description (returned outside production)
        public_message:  Generic description returned in production
        context:         Debug info (logged, never returned)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        public_message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.public_message = public_message or message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(SurveyError):
    """
    Raised when submitted data fails a presence check.

    HTTP: 400 Bad Request. Production responses carry the generic
    "Invalid form data" instead of the field-level message.
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, public_message="Invalid form data", context=ctx)
        self.field = field


class NotFoundError(SurveyError):
    """Raised when a requested resource (static file, API path) does not exist."""

    status_code = 404

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        super().__init__(message=message, context=ctx)


class DatabaseError(SurveyError):
    """
    Raised when a store operation fails.

    HTTP: 500. `message` carries the driver's error text for development;
    production responses only ever see `public_message`.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "A database error occurred",
        public_message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, public_message=public_message, context=context)


class SubmissionError(SurveyError):
    """
    Raised by the Python client when the API does not accept a submission.

    Carries the HTTP status (None for transport failures) and the server's
    error text, if any.
    """

    def __init__(
        self,
        message: str = "Failed to submit form",
        status_code: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.status_code = status_code

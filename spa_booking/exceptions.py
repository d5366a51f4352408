"""
Spa Booking API - Custom Exception Hierarchy
=============================================

What:  Application-specific exceptions for the three ways a request can fail.
Why:   Services raise them; global handlers in main.py turn them into
       structured JSON responses with the right status code.
How:   Each exception carries a user-facing message and an optional context
       dict that is logged but never returned to the client.

Exception Hierarchy:
    SpaBookingError (base)
    ├── ValidationError   → 400 Bad Request (client can fix)
    ├── NotFoundError     → 404 Not Found
    └── StoreError        → 500 Internal Server Error

No retries anywhere: every store call is attempted once per request, so a
StoreError always means the whole request failed and nothing was written.
"""

from typing import Any, Dict, List, Optional


class SpaBookingError(Exception):
    """
    Base exception for all Spa Booking application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only where noted)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(SpaBookingError):
    """
    Raised when a request body or path value fails validation.

    What:    A required field is absent/empty or a value is outside its range.
    When:    Always before any store call is attempted.
    HTTP:    400 Bad Request

    Never logged as a server fault (WARNING at most).

    Example response:
        {
            "error": "validation_error",
            "message": "All booking fields are required. Missing: phone, datetime",
            "details": {"missing_fields": ["phone", "datetime"]}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        missing_fields: Optional[List[str]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        if missing_fields:
            ctx["missing_fields"] = list(missing_fields)
        super().__init__(message=message, context=ctx)
        self.field = field
        self.missing_fields = list(missing_fields or [])


class NotFoundError(SpaBookingError):
    """
    Raised when a delete or update matched no row.

    HTTP:    404 Not Found

    The default message names the resource and the id, e.g.
    "Booking with ID 42 not found."
    """

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[Any] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = f"The requested {resource.lower()} was not found."
            if resource_id is not None:
                message = f"{resource} with ID {resource_id} not found."
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = str(resource_id)
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class StoreError(SpaBookingError):
    """
    Raised when the persistence layer fails during query execution.

    What:    Connectivity loss, constraint violation, malformed statement.
    HTTP:    500 Internal Server Error

    The message is what the client sees; services keep it generic and put
    the driver error into `context`, which is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)

"""
Inkwell Backend — Custom Exception Hierarchy
==============================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Custom exceptions enable targeted error handling with appropriate HTTP
       status codes and client-safe messages.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return `{"error": ...}` JSON bodies with the matching status code.
Who:   Raised by services and the persistence gateway; caught by global handlers.

Exception Hierarchy:
    InkwellError (base)
    ├── ValidationError   → 400 Bad Request (client can fix)
    ├── NotFoundError     → 404 Not Found
    ├── ConflictError     → 409 Conflict
    └── DatabaseError     → 500 Internal Server Error
"""

from typing import Any, Dict, Optional, Union


class InkwellError(Exception):
    """
    Base exception for all Inkwell application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)

    @property
    def payload(self) -> Union[str, Dict[str, str]]:
        """What goes in the `error` field of the response body."""
        return self.message


class ValidationError(InkwellError):
    """
    Raised when client input fails validation.

    When:    Missing or blank fields, bad email syntax, non-integer user id,
             or article fields breaking the structural rules.
    HTTP:    400 Bad Request

    A validation error either carries a single message, or a mapping of
    field name to message when several fields failed together:
        {"error": "Name cannot be empty"}
        {"error": {"title": "Title must be at most 255 characters"}}
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        errors: Optional[Dict[str, str]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field
        self.errors = errors

    @property
    def payload(self) -> Union[str, Dict[str, str]]:
        if self.errors:
            return self.errors
        return self.message


class NotFoundError(InkwellError):
    """
    Raised when a requested resource does not exist.

    When:    GET/PUT/DELETE on an id with no row, or an article pointing at
             a user that does not exist.
    HTTP:    404 Not Found

    SQLAlchemy returns None for missing records; services convert that
    into this exception so the handler can answer with 404.
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = str(resource_id)
        super().__init__(message=f"{resource} not found", context=ctx)
        self.resource = resource


class ConflictError(InkwellError):
    """
    Raised when a write would break a uniqueness rule.

    When:    Creating or updating a user with an email another user owns.
             Also raised by the gateway when the store rejects a write
             with an integrity violation.
    HTTP:    409 Conflict
    """

    status_code = 409

    def __init__(
        self,
        message: str = "Resource already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(InkwellError):
    """
    Raised when database operations fail unexpectedly.

    What:    A query or statement failed (connection lost, deadlock, ...).
    HTTP:    500 Internal Server Error

    The message returned to the client is always the generic
    "Internal Server Error"; the context is only written to the error log.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)

"""
ProjectHub Backend — Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for the different error scenarios.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the right status code.
Who:   Raised by repositories, route dependencies and the auth service.

Exception Hierarchy:
    ProjectHubError (base)
    ├── ValidationError       → 400 Bad Request (client can fix)
    ├── AuthenticationError   → 401 Unauthorized
    ├── NotFoundError         → 404 Not Found
    └── DatabaseError         → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class ProjectHubError(Exception):
    """
    Base exception for all ProjectHub application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(ProjectHubError):
    """
    Raised when client input fails validation.

    When:    Non-numeric path id, missing body field, unknown sort field or
             order direction, malformed filter value, foreign key to a
             missing row.
    HTTP:    400 Bad Request
    Details: only `field` is returned; the rest of context is logged.

    Example response:
        {
            "error": "validation_error",
            "message": "Invalid sort parameter. Must be one of ProjectID, ProjectName, CreationDate.",
            "details": {"field": "sort"}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(ProjectHubError):
    """
    Raised when a requested resource does not exist.

    Repositories return None for missing rows; routes convert that into
    this exception so the global handler can answer 404.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class AuthenticationError(ProjectHubError):
    """
    Raised when the identity provider rejects a login or no session exists.

    HTTP:    401 Unauthorized
    """

    def __init__(
        self,
        message: str = "Authentication failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(ProjectHubError):
    """
    Raised when a write against the store fails.

    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. The original
    driver error is kept in `context` and logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)

"""
FlowRouter Backend - Custom Exception Hierarchy
===============================================

What:  Application-specific exceptions raised by handlers and repositories.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) turn them into
       JSON error responses with the matching HTTP status code.

Exception Hierarchy:
    FlowRouterError (base)
    ├── ValidationError  → 400 Bad Request
    ├── NotFoundError    → 404 Not Found
    └── DatabaseError    → 500 Internal Server Error

Unmatched routes are NOT errors: the router answers them with its
"not implemented" fallback response instead of raising.
"""

from typing import Any, Dict, Optional


class FlowRouterError(Exception):
    """
    Base exception for all FlowRouter application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, only partially returned)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(FlowRouterError):
    """
    Raised when a request body cannot be turned into the expected model.

    When:    Malformed JSON, missing or mistyped fields.
    HTTP:    400 Bad Request
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


class NotFoundError(FlowRouterError):
    """
    Raised when a requested resource does not exist.

    When:    GET/PATCH/DELETE /api/v10/book/{id} with an unknown id.
    HTTP:    404 Not Found
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


class DatabaseError(FlowRouterError):
    """
    Raised when database operations fail unexpectedly.

    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. SQL details
    stay in the server log.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)

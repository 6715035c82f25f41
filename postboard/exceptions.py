"""
PostBoard Backend — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for each error scenario.
How:   Each exception carries a user-facing message and an optional context
       dict. Global handlers (registered in main.py) turn them into the
       standard response envelope with the matching HTTP status code.
Who:   Raised by services and dependencies; caught by global handlers.

Exception Hierarchy:
    PostBoardError (base)
    ├── ValidationError          → 422 Unprocessable Entity (field-level errors)
    ├── AuthenticationError      → 401 Unauthorized
    ├── PermissionDeniedError    → 403 Forbidden (reserved for ownership checks)
    ├── NotFoundError            → 404 Not Found
    ├── DatabaseError            → 500 Internal Server Error
    └── RateLimitExceededError   → 429 Too Many Requests
"""

from typing import Any, Dict, List, Optional


class PostBoardError(Exception):
    """
    Base exception for all PostBoard application errors.

    Attributes:
        message:      User-facing error description (safe to return in API response)
        context:      Additional debug info (logged but NOT returned to client)
        status_code:  HTTP status the global handler responds with
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PostBoardError):
    """
    Raised when client input fails validation.

    Carries a map of field name → list of human-readable messages. Every
    violation found for a request is reported at once.

    Example response:
        {
            "data": null,
            "message": "Validation failed",
            "statusCode": 422,
            "errors": {"email": ["The email has already been taken."]}
        }
    """

    status_code = 422

    def __init__(
        self,
        errors: Optional[Dict[str, List[str]]] = None,
        message: str = "Validation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.errors: Dict[str, List[str]] = errors or {}

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        """Shortcut for a single failing field."""
        return cls(errors={field: [message]})


class AuthenticationError(PostBoardError):
    """
    Raised when a request is not authenticated.

    Covers a missing, malformed, revoked or expired bearer token and failed
    login attempts. The message never says which check failed.
    """

    status_code = 401

    def __init__(
        self,
        message: str = "Unauthenticated.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class PermissionDeniedError(PostBoardError):
    """
    Raised when an authenticated user may not act on a resource.

    No route raises this yet: any authenticated user may update or delete
    any post.
    """

    status_code = 403

    def __init__(
        self,
        message: str = "This action is unauthorized.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(PostBoardError):
    """
    Raised when a requested resource does not exist.

    SQLAlchemy returns None for missing rows; services convert that into
    NotFoundError. Soft-deleted rows count as missing.
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = str(resource_id)
        super().__init__(message=message, context=ctx)


class DatabaseError(PostBoardError):
    """
    Raised when database operations fail unexpectedly.

    The client always gets a generic message; the context (statement,
    constraint, original exception type) is logged server-side only.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class RateLimitExceededError(PostBoardError):
    """
    Raised when a client exceeds the per-IP request rate limit.

    Response includes a Retry-After header with the seconds until the
    oldest request in the window expires.
    """

    status_code = 429

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Too many requests. Please wait {retry_after} seconds before retrying."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after

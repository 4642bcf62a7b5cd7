"""
Notes API — Custom Exception Hierarchy
========================================

What:  Application-specific exceptions for each error scenario.
How:   Each exception carries a user-facing message and an optional context
       dict. Global exception handlers (registered in main.py) catch these
       and return JSON error responses with the matching HTTP status code.
Who:   Raised by services and the auth stage; caught by global handlers.

Exception Hierarchy:
    NotesAPIError (base)
    ├── ValidationError                 → 400 Bad Request {"errors": [...]}
    ├── DuplicateUsernameError          → 400 Bad Request
    ├── UnauthorizedError               → 401 Unauthorized
    │   ├── MissingTokenError
    │   ├── InvalidCredentialsError
    │   └── TokenError
    │       ├── TokenMalformedError
    │       ├── TokenSignatureInvalidError
    │       └── TokenExpiredError
    ├── NotFoundError                   → 404 Not Found
    └── DatabaseError                   → 500 Internal Server Error
"""

from typing import Any, Dict, List, Optional


class NotesAPIError(Exception):
    """
    Base exception for all Notes API errors.

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


class ValidationError(NotesAPIError):
    """
    Raised when client input fails validation.

    When:    Missing or empty required fields.
    HTTP:    400 Bad Request

    Example response:
        {"errors": ["title must not be empty", "contents must not be empty"]}
    """

    def __init__(
        self,
        message: str = "Validation failed",
        errors: Optional[List[str]] = None,
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field
        self.errors = errors or [message]


class DuplicateUsernameError(NotesAPIError):
    """Raised by registration when the username is already taken. HTTP 400."""

    def __init__(self, username: str, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["username"] = username
        super().__init__(message=f"Username '{username}' is already taken", context=ctx)
        self.username = username


class UnauthorizedError(NotesAPIError):
    """
    Raised when the caller is not authenticated.

    What:    Missing/invalid/expired bearer token, or bad login credentials.
    HTTP:    401 Unauthorized

    Every subclass produces the same response body shape; `reason` is kept
    for server-side diagnostics only.
    """

    reason = "unauthorized"

    def __init__(
        self,
        message: str = "Authentication required",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx.setdefault("reason", self.reason)
        super().__init__(message=message, context=ctx)


class MissingTokenError(UnauthorizedError):
    """No usable `Authorization: Bearer <token>` header on the request."""

    reason = "missing_token"

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="Authentication required", context=context)


class InvalidCredentialsError(UnauthorizedError):
    """Login failed: unknown username or wrong password."""

    reason = "invalid_credentials"

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="Invalid username or password", context=context)


class TokenError(UnauthorizedError):
    """Base class for bearer token verification failures."""

    reason = "invalid_token"

    def __init__(
        self,
        message: str = "Invalid or expired token",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class TokenMalformedError(TokenError):
    """The token string cannot be parsed or decoded."""

    reason = "malformed"


class TokenSignatureInvalidError(TokenError):
    """The token's signature does not match its contents."""

    reason = "signature_invalid"


class TokenExpiredError(TokenError):
    """The token's signature is valid but its expiry has passed."""

    reason = "expired"


class NotFoundError(NotesAPIError):
    """
    Raised when a requested resource does not exist.

    When:    GET/PUT/DELETE /api/notes/{id} with an id that is not stored.
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
            message = f"{resource.capitalize()} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(NotesAPIError):
    """
    Raised when database operations fail unexpectedly.

    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. SQL text and
    driver errors stay in the server log.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)

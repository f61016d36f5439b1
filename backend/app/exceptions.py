"""
Notekeeper Backend — Custom Exception Hierarchy
=================================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Custom exceptions enable targeted error handling with appropriate HTTP
       status codes and user-friendly messages.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services and auth dependencies; caught by global handlers.

Exception Hierarchy:
    NotekeeperError (base)
    ├── ValidationError              → 400 Bad Request
    │   └── DuplicateUsernameError   → 400 Bad Request
    ├── InvalidIdError               → 400 Bad Request (malformed identifier)
    ├── NotFoundError                → 404 Not Found
    ├── AuthenticationError          → 401 Unauthorized
    │   ├── UnauthorizedError        (no token supplied)
    │   ├── InvalidTokenError        (bad signature / claims)
    │   └── InvalidCredentialsError  (login failed)
    └── DatabaseError                → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class NotekeeperError(Exception):
    """
    Base exception for all Notekeeper application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, only returned for validation errors)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NotekeeperError):
    """
    Raised when client input fails validation.

    When:    Missing note content, content too short, short password or username.
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


class DuplicateUsernameError(ValidationError):
    """Raised when signing up with a username that is already taken."""

    def __init__(self, username: Optional[str] = None):
        ctx = {"username": username} if username else None
        super().__init__(
            message="User validation failed: username: expected `username` to be unique",
            field="username",
            context=ctx,
        )


class InvalidIdError(NotekeeperError):
    """
    Raised when a path identifier is not a well-formed id.

    Kept apart from NotFoundError: a malformed id is a client mistake (400),
    a well-formed id with no record is a missing resource (404).
    """

    def __init__(self, raw_id: str = "", context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["id"] = raw_id
        super().__init__(message="malformatted id", context=ctx)
        self.raw_id = raw_id


class NotFoundError(NotekeeperError):
    """
    Raised when a requested resource does not exist.

    When:    GET/PUT /api/notes/{id} with a well-formed id that has no record.
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


class AuthenticationError(NotekeeperError):
    """
    Base for every 401 response.

    Subclasses set `code`, the machine-readable `error` value in the body.
    """

    code = "unauthorized"

    def __init__(self, message: str = "authentication required", context: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, context=context)


class UnauthorizedError(AuthenticationError):
    """No bearer token was sent, or the token's user no longer exists."""

    code = "unauthorized"

    def __init__(self, message: str = "token missing", context: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, context=context)


class InvalidTokenError(AuthenticationError):
    """Token signature check failed or its claims are unusable."""

    code = "invalid_token"

    def __init__(self, message: str = "token invalid", context: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, context=context)


class InvalidCredentialsError(AuthenticationError):
    """
    Login failed.

    The same message is used for an unknown username and a wrong password so
    the response does not reveal which usernames exist.
    """

    code = "invalid_credentials"

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="invalid username or password", context=context)


class DatabaseError(NotekeeperError):
    """
    Raised when database operations fail unexpectedly.

    The message returned to the client is always generic; the underlying
    error type is kept in context and logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)

"""
Error taxonomy for the budgeting bounded context.

Every failure raised by the application is one of the AppError
subclasses below. Each subclass fixes the error kind and its canonical
HTTP status; callers pick the subclass, never the base class.
These are mapped to HTTP responses at the interface layer.
No framework imports allowed.
"""

from enum import Enum
from typing import Any, Optional


class ErrorType(str, Enum):
    """Error kinds exposed in the ``error.type`` field of API responses."""

    VALIDATION = "VALIDATION_ERROR"
    AUTHENTICATION = "AUTHENTICATION_ERROR"
    AUTHORIZATION = "AUTHORIZATION_ERROR"
    NOT_FOUND = "NOT_FOUND_ERROR"
    DATABASE = "DATABASE_ERROR"
    SERVER = "SERVER_ERROR"
    EXTERNAL_SERVICE = "EXTERNAL_SERVICE_ERROR"


class AppError(Exception):
    """Base error carrying kind, message, status code and optional details.

    Attributes:
        message: Human readable message, safe to show to API clients.
        error_type: The ErrorType of this failure.
        status_code: HTTP status used when rendering the error.
        is_operational: True for expected failures (bad input, missing
            records), False for programming errors.
        details: Optional structured details (e.g. field messages).
    """

    error_type: ErrorType = ErrorType.SERVER
    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Any = None,
        is_operational: bool = True,
    ) -> None:
        self.message = message or self.default_message
        self.details = details
        self.is_operational = is_operational
        super().__init__(self.message)

    @property
    def type(self) -> ErrorType:
        """Alias used by the fallback classifier's type-tag lookup."""
        return self.error_type


class ValidationFailedError(AppError):
    """Raised when input fails schema, format or business-rule validation."""

    error_type = ErrorType.VALIDATION
    status_code = 400
    default_message = "Validation failed"


class AuthenticationError(AppError):
    """Raised when a request lacks valid credentials."""

    error_type = ErrorType.AUTHENTICATION
    status_code = 401
    default_message = "Authentication required"


class AuthorizationError(AppError):
    """Raised when an authenticated caller may not perform an action."""

    error_type = ErrorType.AUTHORIZATION
    status_code = 403
    default_message = "Not authorized"


class NotFoundError(AppError):
    """Raised when a requested group, profile or record does not exist."""

    error_type = ErrorType.NOT_FOUND
    status_code = 404
    default_message = "Resource not found"


class DatabaseError(AppError):
    """Raised when the persistence layer fails."""

    error_type = ErrorType.DATABASE
    status_code = 500
    default_message = "Database operation failed"


class ServerError(AppError):
    """Raised for unexpected internal failures."""

    error_type = ErrorType.SERVER
    status_code = 500
    default_message = "Internal server error"


class ExternalServiceError(AppError):
    """Raised when an upstream service call fails."""

    error_type = ErrorType.EXTERNAL_SERVICE
    status_code = 502
    default_message = "External service error"

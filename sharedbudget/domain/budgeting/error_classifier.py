"""
Fallback classification of arbitrary exceptions into the error taxonomy.

Used where an error reaches a presentation boundary without going
through the API error envelope (the fallback error view, and logging of
unexpected failures). An explicit type tag always wins; the keyword
heuristics only apply to errors raised by code outside this system.
"""

import hashlib
import traceback
from typing import Any, Optional

from sharedbudget.domain.budgeting.errors import ErrorType

FRIENDLY_MESSAGES = {
    ErrorType.VALIDATION: "The information provided is invalid or incomplete.",
    ErrorType.AUTHENTICATION: "You need to be logged in to access this resource.",
    ErrorType.AUTHORIZATION: "You don't have permission to access this resource.",
    ErrorType.NOT_FOUND: "The requested resource could not be found.",
    ErrorType.DATABASE: "We're having trouble connecting to our database.",
    ErrorType.EXTERNAL_SERVICE: "We're having trouble connecting to an external service.",
    ErrorType.SERVER: (
        "We encountered an unexpected error. Please try again or contact support."
    ),
}

STACK_PREVIEW_LINES = 3


def _type_tag(error: BaseException) -> Optional[ErrorType]:
    tag = getattr(error, "type", None)
    if isinstance(tag, ErrorType):
        return tag
    if isinstance(tag, str):
        try:
            return ErrorType(tag)
        except ValueError:
            return None
    return None


def classify_error(error: BaseException) -> ErrorType:
    """Return the ErrorType of an exception.

    Args:
        error: Any exception.

    Returns:
        The carried type tag when present, otherwise a best-effort
        guess from the message and class name, defaulting to SERVER.
    """
    tagged = _type_tag(error)
    if tagged is not None:
        return tagged

    message = str(error).lower()
    name = type(error).__name__.lower()

    if "not found" in message or "notfound" in name:
        return ErrorType.NOT_FOUND
    if "validation" in message or "validation" in name:
        return ErrorType.VALIDATION
    if "unauthorized" in message or "unauthenticated" in message or "auth" in name:
        return ErrorType.AUTHENTICATION
    if "permission" in message or "forbidden" in message:
        return ErrorType.AUTHORIZATION
    if "database" in message or "mongo" in message or "connection" in message:
        return ErrorType.DATABASE
    return ErrorType.SERVER


def user_friendly_message(error_type: ErrorType) -> str:
    """Return the end-user message shown for an error kind."""
    return FRIENDLY_MESSAGES.get(error_type, FRIENDLY_MESSAGES[ErrorType.SERVER])


def error_digest(error: BaseException) -> str:
    """Return a short, stable fingerprint for an error, for support reports."""
    raw = f"{type(error).__name__}:{error}".encode("utf-8")
    return hashlib.sha256(raw).hexdigest()[:12]


def describe_error(error: BaseException, environment: str = "production") -> dict[str, Any]:
    """Build the payload rendered by the fallback error view.

    Internal details (raw message, class name, top of the traceback,
    digest) are only included in development.
    """
    error_type = classify_error(error)
    payload: dict[str, Any] = {
        "type": error_type.value,
        "message": user_friendly_message(error_type),
        "retryable": True,
    }
    if environment == "development":
        stack = traceback.format_exception(type(error), error, error.__traceback__)
        payload["debug"] = {
            "message": str(error),
            "name": type(error).__name__,
            "stack": "".join(stack).splitlines()[:STACK_PREVIEW_LINES],
            "digest": error_digest(error),
        }
    return payload

"""
Centralized error handling for FastAPI.

Every API route is built with ErrorBoundaryRoute, which catches anything
the handler raises and renders it through handle_api_error. Framework
HTTP errors raised outside routes (unknown path, wrong method) are
rendered in the same envelope by the handlers registered in
register_error_handlers, which also installs the fallback view for
anything that fails outside a route.

Envelope: {"success": false, "error": {"type", "message", "details"?}}
No stack traces or internal details are exposed in production.
"""

import logging
from typing import Any, Callable, Coroutine

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute
from starlette.exceptions import HTTPException as StarletteHTTPException

from sharedbudget.domain.budgeting.error_classifier import classify_error, describe_error
from sharedbudget.domain.budgeting.errors import AppError, ErrorType
from sharedbudget.shared.security.headers import security_headers

logger = logging.getLogger(__name__)

HTTP_400 = 400
HTTP_500 = 500

GENERIC_SERVER_MESSAGE = "Internal server error"
INVALID_PAYLOAD_MESSAGE = "Invalid request payload"

_STATUS_TO_TYPE = {
    400: ErrorType.VALIDATION,
    401: ErrorType.AUTHENTICATION,
    403: ErrorType.AUTHORIZATION,
    404: ErrorType.NOT_FOUND,
    502: ErrorType.EXTERNAL_SERVICE,
}


def error_response(
    status_code: int,
    error_type: ErrorType | str,
    message: str,
    details: Any = None,
    environment: str = "production",
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build a consistent JSON error response.

    ``details`` is only included outside production, and only if present.
    """
    error: dict[str, Any] = {
        "type": error_type.value if isinstance(error_type, ErrorType) else error_type,
        "message": message,
    }
    if environment != "production" and details:
        error["details"] = details
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": error},
        headers=headers,
    )


def _request_validation_messages(exc: RequestValidationError) -> list[str]:
    messages = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        messages.append(f"{location}: {err['msg']}" if location else err["msg"])
    return messages


def handle_api_error(exc: Exception, environment: str = "production") -> JSONResponse:
    """Translate any exception into the API error envelope.

    Args:
        exc: The exception raised by a request handler.
        environment: "development" or "production".

    Returns:
        A JSON response carrying the error's status code.
    """
    if isinstance(exc, AppError):
        if exc.is_operational:
            logger.warning("%s: %s", exc.error_type.value, exc.message)
        else:
            logger.error("Non-operational %s", exc.error_type.value, exc_info=exc)
        return error_response(
            exc.status_code, exc.error_type, exc.message, exc.details, environment
        )

    if isinstance(exc, RequestValidationError):
        messages = _request_validation_messages(exc)
        logger.warning("Request validation failed: %s", "; ".join(messages))
        return error_response(
            HTTP_400, ErrorType.VALIDATION, INVALID_PAYLOAD_MESSAGE, messages, environment
        )

    if environment == "production":
        logger.error(
            "Unexpected error occurred (%s)", classify_error(exc).value
        )
        message = GENERIC_SERVER_MESSAGE
    else:
        logger.exception(
            "Unexpected error (%s): %s", classify_error(exc).value, type(exc).__name__
        )
        message = str(exc) or GENERIC_SERVER_MESSAGE
    return error_response(HTTP_500, ErrorType.SERVER, message, None, environment)


def _environment(request: Request) -> str:
    settings = getattr(request.app.state, "settings", None)
    return getattr(settings, "environment", "production")


class ErrorBoundaryRoute(APIRoute):
    """Route class that wraps every endpoint in the error boundary.

    Nothing raised by a handler, its dependencies or request parsing
    escapes as an unhandled exception; it is always rendered through
    handle_api_error.
    """

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        route_handler = super().get_route_handler()

        async def error_boundary(request: Request) -> Response:
            try:
                return await route_handler(request)
            except StarletteHTTPException:
                raise
            except Exception as exc:
                return handle_api_error(exc, _environment(request))

        return error_boundary


def register_error_handlers(app: FastAPI) -> None:
    """Register envelope-producing handlers for framework HTTP errors.

    Args:
        app: The FastAPI application instance.
    """

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Render 404/405 and other framework errors in the API envelope."""
        error_type = _STATUS_TO_TYPE.get(exc.status_code)
        if error_type is None:
            error_type = (
                ErrorType.SERVER if exc.status_code >= HTTP_500 else ErrorType.VALIDATION
            )
        return error_response(
            exc.status_code,
            error_type,
            str(exc.detail),
            environment=_environment(request),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        """Fallback view for failures outside any route, e.g. in middleware.

        Starlette renders this outside the user middleware stack, so the
        security headers are attached here.
        """
        environment = _environment(request)
        logger.error(
            "Unhandled error outside routes (%s): %s",
            classify_error(exc).value,
            type(exc).__name__,
        )
        return JSONResponse(
            status_code=HTTP_500,
            content={"success": False, "error": describe_error(exc, environment)},
            headers=security_headers(environment),
        )

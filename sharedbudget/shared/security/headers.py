"""
Secure HTTP headers middleware.

Adds security-related headers to every response, whatever the path:
- X-Content-Type-Options
- X-Frame-Options
- Referrer-Policy
- X-XSS-Protection
- X-DNS-Prefetch-Control
- Strict-Transport-Security and Content-Security-Policy (production only)

No business logic. Pure cross-cutting concern.
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

SECURE_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "origin-when-cross-origin",
    "X-XSS-Protection": "1; mode=block",
    "X-DNS-Prefetch-Control": "on",
}

PRODUCTION_HEADERS = {
    "Strict-Transport-Security": "max-age=63072000; includeSubDomains; preload",
    "Content-Security-Policy": "default-src 'self'",
}


def security_headers(environment: str) -> dict[str, str]:
    """Return the headers sent in the given environment."""
    headers = dict(SECURE_HEADERS)
    if environment == "production":
        headers.update(PRODUCTION_HEADERS)
    return headers


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware that adds secure HTTP headers to every response.

    Prevents common web vulnerabilities by setting restrictive
    default headers on all outgoing responses. HSTS and CSP are only
    sent in production, where the app is served over HTTPS.
    """

    def __init__(self, app: ASGIApp, environment: str = "production") -> None:
        super().__init__(app)
        self._headers = security_headers(environment)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Process request and add security headers to response."""
        response = await call_next(request)
        for header_name, header_value in self._headers.items():
            response.headers[header_name] = header_value
        return response

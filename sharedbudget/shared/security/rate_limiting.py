"""
Rate limiting for API traffic.

Per-client fixed-window counters built on the ``limits`` library, the
engine underneath slowapi: a FixedWindowRateLimiter over in-process
MemoryStorage. The limit is configured in limits notation
(e.g. "100/minute"). Counters are not shared between processes or
instances; each worker enforces its own budget.

MemoryStorage drops counters whose window has expired on its own
expiry timer, so memory stays bounded by the number of recently active
clients.
"""

import logging
from dataclasses import dataclass

from limits import parse
from limits.storage import MemoryStorage
from limits.strategies import FixedWindowRateLimiter
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from sharedbudget.shared.errors.handlers import error_response

logger = logging.getLogger(__name__)

DEFAULT_RATE_LIMIT = "100/minute"
UNKNOWN_CLIENT = "unknown"
API_PATH_PREFIX = "/api/"

HTTP_429 = 429
RATE_LIMIT_ERROR_TYPE = "RATE_LIMIT_EXCEEDED"
RATE_LIMIT_MESSAGE = "Too many requests, please try again later."


@dataclass(frozen=True)
class RateLimitDecision:
    """Outcome of counting one request against a client's window."""

    allowed: bool
    limit: int
    remaining: int
    reset_time: float


class RateLimiter:
    """Fixed-window request counter keyed by client identifier.

    Usage:
        limiter = RateLimiter("100/minute")
        decision = limiter.hit("203.0.113.7")
    """

    def __init__(self, limit: str = DEFAULT_RATE_LIMIT) -> None:
        self._item = parse(limit)
        self.limit = self._item.amount
        self.window_seconds = self._item.get_expiry()
        self._storage = MemoryStorage()
        self._strategy = FixedWindowRateLimiter(self._storage)

    def hit(self, client_id: str) -> RateLimitDecision:
        """Count one request for a client.

        The first request of a client, or the first after its window
        expired, opens a fresh window. The request is counted even when
        it is rejected.
        """
        allowed = self._strategy.hit(self._item, client_id)
        stats = self._strategy.get_window_stats(self._item, client_id)
        return RateLimitDecision(
            allowed=allowed,
            limit=self.limit,
            remaining=stats.remaining,
            reset_time=stats.reset_time,
        )

    def remaining(self, client_id: str) -> int:
        """Requests a client may still make in its current window."""
        return self._strategy.get_window_stats(self._item, client_id).remaining

    def reset(self) -> None:
        """Drop all counters."""
        self._storage.reset()


def client_identifier(request: Request) -> str:
    """Return the connecting address, or a shared sentinel if unknown."""
    if request.client and request.client.host:
        return request.client.host
    return UNKNOWN_CLIENT


def rate_limit_headers(decision: RateLimitDecision) -> dict[str, str]:
    """Build the X-RateLimit-* headers for a decision."""
    return {
        "X-RateLimit-Limit": str(decision.limit),
        "X-RateLimit-Remaining": str(decision.remaining),
        "X-RateLimit-Reset": str(int(decision.reset_time)),
    }


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Middleware enforcing the per-client limit on API paths.

    Requests over the limit get a 429 envelope with Retry-After and never
    reach the route handler. Every response on a limited path carries the
    X-RateLimit-* headers.
    """

    def __init__(
        self,
        app: ASGIApp,
        limiter: RateLimiter,
        path_prefix: str = API_PATH_PREFIX,
    ) -> None:
        super().__init__(app)
        self._limiter = limiter
        self._path_prefix = path_prefix

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Count the request and either reject it or forward it."""
        if not request.url.path.startswith(self._path_prefix):
            return await call_next(request)

        client_id = client_identifier(request)
        decision = self._limiter.hit(client_id)
        headers = rate_limit_headers(decision)

        if not decision.allowed:
            logger.warning("Rate limit exceeded for client %s", client_id)
            headers["Retry-After"] = str(int(self._limiter.window_seconds))
            return error_response(
                HTTP_429, RATE_LIMIT_ERROR_TYPE, RATE_LIMIT_MESSAGE, headers=headers
            )

        response = await call_next(request)
        response.headers.update(headers)
        return response

"""
Application entry point.

Creates the FastAPI application and wires together:
- Routers (one per bounded context)
- Error handlers (centralized error-to-envelope mapping)
- Security middleware (headers, rate limiting)
- Logging configuration
- Process-scoped resources (MongoDB connection, rate limiter)

No business logic belongs here.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from sharedbudget.core.config import Settings, get_settings
from sharedbudget.infrastructure.budgeting.mongo_connection import MongoConnection
from sharedbudget.interfaces.budgeting.router import router as budgeting_router
from sharedbudget.interfaces.health import router as health_router
from sharedbudget.shared.errors.handlers import register_error_handlers
from sharedbudget.shared.logging import configure_logging
from sharedbudget.shared.security.headers import SecurityHeadersMiddleware
from sharedbudget.shared.security.rate_limiting import (
    RateLimiter,
    RateLimitMiddleware,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: close the database client on shutdown."""
    connection: MongoConnection = app.state.mongo_connection

    logger.info("%s started (%s)", app.title, app.state.settings.environment)

    yield

    # Shutdown
    connection.close()


def create_app(
    settings: Optional[Settings] = None,
    rate_limiter: Optional[RateLimiter] = None,
    mongo_connection: Optional[MongoConnection] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Registers routers, error handlers, and security middleware.
    This is the composition root of the application.

    Args:
        settings: Settings to use; loaded from the environment if omitted.
        rate_limiter: Limiter for /api paths; built from settings if omitted.
        mongo_connection: Connection cache; built from settings if omitted.
            Nothing connects until the first repository call.

    Returns:
        A fully configured FastAPI application instance.
    """
    settings = settings or get_settings()
    configure_logging(level=settings.log_level)

    if rate_limiter is None:
        rate_limiter = RateLimiter(settings.rate_limit)
    if mongo_connection is None:
        mongo_connection = MongoConnection(
            settings.mongodb_uri,
            db_name=settings.mongodb_db,
            max_pool_size=settings.mongodb_max_pool_size,
            server_selection_timeout_ms=settings.mongodb_server_selection_timeout_ms,
            socket_timeout_ms=settings.mongodb_socket_timeout_ms,
        )

    app = FastAPI(
        title=settings.project_name,
        version=settings.version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.rate_limiter = rate_limiter
    app.state.mongo_connection = mongo_connection

    # --- Rate Limiting ---
    app.add_middleware(RateLimitMiddleware, limiter=rate_limiter)

    # --- Security Middleware (outermost) ---
    app.add_middleware(SecurityHeadersMiddleware, environment=settings.environment)

    # --- Error Handlers ---
    register_error_handlers(app)

    # --- Routers ---
    app.include_router(health_router, prefix="/api")
    app.include_router(budgeting_router, prefix="/api")

    return app


app = create_app()

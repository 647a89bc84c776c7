"""
Health check router.

Provides a simple health endpoint for liveness/readiness probes.
No business logic. Returns application status and version; the
database is not touched.
"""

from fastapi import APIRouter, Request

from sharedbudget.interfaces.budgeting.schemas import HealthResponse
from sharedbudget.shared.errors.handlers import ErrorBoundaryRoute

router = APIRouter(tags=["health"], route_class=ErrorBoundaryRoute)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns application health status and version.",
)
def health_check(request: Request) -> HealthResponse:
    """Return current application health status."""
    return HealthResponse(status="ok", version=request.app.state.settings.version)

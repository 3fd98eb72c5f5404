"""
Operational endpoints.

Liveness and build information for monitoring. No business logic.
All routes share the ``actuator`` rate limiter policy.
"""

from fastapi import APIRouter, Depends

from twiggle.core.config import settings
from twiggle.interfaces.schemas import HealthResponse, InfoResponse
from twiggle.shared.security.rate_limiting import ACTUATOR, RateLimit

router = APIRouter(
    prefix="/actuator",
    tags=["actuator"],
    dependencies=[Depends(RateLimit(ACTUATOR.name))],
)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns application health status and version.",
)
def health() -> HealthResponse:
    """Return current application health status."""
    return HealthResponse(status="UP", version=settings.version)


@router.get(
    "/info",
    response_model=InfoResponse,
    summary="Application info",
)
def info() -> InfoResponse:
    return InfoResponse(
        name=settings.project_name,
        version=settings.version,
        description=settings.description,
    )

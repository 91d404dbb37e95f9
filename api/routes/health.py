"""
Health Check Route

Simple health check endpoint for liveness probes.
"""

from fastapi import APIRouter

from api.models.responses import HealthResponse


router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Health check endpoint.

    Does not touch the distribution, so it answers even before one is configured.
    """
    return HealthResponse()


@router.get("/", response_model=HealthResponse)
async def index() -> HealthResponse:
    """Same as /health."""
    return HealthResponse()

# =============================================================================
# gateway/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# =============================================================================

from fastapi import APIRouter
from pydantic import BaseModel

from gateway.dependencies import SettingsDep, UptimeDep
from gateway.log import utc_timestamp

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    uptime: float
    environment: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    timestamp: str


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check(settings: SettingsDep, uptime: UptimeDep):
    """
    Health check endpoint.

    Returns basic health status for load balancers and monitoring.
    """
    return HealthResponse(
        status="healthy",
        timestamp=utc_timestamp(),
        uptime=uptime,
        environment=settings.ENVIRONMENT,
    )


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check():
    """
    Readiness check endpoint.

    The gateway has no backing services, so once it answers it is ready.
    """
    return ReadinessResponse(
        status="ready",
        timestamp=utc_timestamp(),
    )

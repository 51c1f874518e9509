"""
Health check API endpoints.

Routes: GET /health

Dependencies: docchat.application.services.health_service
System role: Health check HTTP API
"""

from fastapi import APIRouter, Depends

from docchat.api.deps import get_health_service
from docchat.application.services.health_service import HealthService
from docchat.models.health import HealthResponse

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check(
    health_service: HealthService = Depends(get_health_service),
) -> HealthResponse:
    """Vector store connection status and fallback availability."""
    return await health_service.check()

"""
Health check route for FireSync.

Public endpoint for load balancers, monitoring and deployment checks. Also
reports whether the recommendation provider is configured, without calling it.
"""

from fastapi import APIRouter

from firesync.config import settings
from firesync.schemas.health import HealthResponse
from firesync.utils.logging import get_logger

logger = get_logger(__name__)

# Create router with no prefix (mounted at root level in main.py)
router = APIRouter(tags=["system"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check endpoint",
    description="Returns a simple status indicator and whether Gemini is configured.",
    status_code=200,
)
async def health_check() -> HealthResponse:
    """
    Example response:
        {
            "status": "ok",
            "service": "firesync",
            "providerConfigured": true
        }
    """
    logger.debug("Health check endpoint called")

    return HealthResponse(
        status="ok",
        provider_configured=bool(settings.GOOGLE_API_KEY),
    )

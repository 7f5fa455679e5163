from datetime import datetime, timezone

from fastapi import APIRouter

from app.config import settings
from app.schemas.common import ApiHealthResponse, HealthResponse

router = APIRouter()


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(
        status="ok",
        timestamp=_now(),
        version=settings.app_version,
        environment=settings.environment,
    )


@router.get("/api/v1/health", response_model=ApiHealthResponse, response_model_by_alias=True)
async def api_health_check():
    """Versioned API health check."""
    return ApiHealthResponse(status="ok", api_version="v1", timestamp=_now())

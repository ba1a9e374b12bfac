"""Health endpoint."""

from fastapi import APIRouter, Depends

from src.api.models import HealthResponse
from src.config.settings import Settings, get_settings

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(settings: Settings = Depends(get_settings)) -> HealthResponse:  # noqa: B008
    """Health check."""
    return HealthResponse(status="healthy", version=settings.app_version)

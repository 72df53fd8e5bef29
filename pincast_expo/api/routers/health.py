from fastapi import APIRouter, Depends

from pincast_expo import __version__
from pincast_expo.infra.config.settings import Settings, get_settings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(settings: Settings = Depends(get_settings)) -> dict:
    """Liveness check."""
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": __version__,
    }

"""API v1 routers"""

from fastapi import APIRouter

from .analytics import router as analytics_router
from .apps import router as apps_router
from .catalog import router as catalog_router
from .health import router as health_router
from .listings import router as listings_router
from .submissions import router as submissions_router
from .tokens import router as tokens_router

v1_router = APIRouter(prefix="/v1")

v1_router.include_router(catalog_router)
v1_router.include_router(listings_router)
v1_router.include_router(apps_router)
v1_router.include_router(submissions_router)
v1_router.include_router(tokens_router)
v1_router.include_router(analytics_router)
v1_router.include_router(health_router)

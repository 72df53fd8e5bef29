"""
Catalog discovery router.

- GET /catalog: published listings near a point, by popularity or by newest build
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from pincast_expo.api.dependencies import get_query_catalog_use_case
from pincast_expo.api.schemas.base import ErrorResponse
from pincast_expo.api.schemas.catalog import CatalogItemResponse
from pincast_expo.application.use_cases.query_catalog import QueryCatalogUseCase

router = APIRouter(tags=["catalog"])


@router.get(
    "/catalog",
    responses={
        200: {"model": List[CatalogItemResponse]},
        400: {"model": ErrorResponse},
    },
)
async def get_catalog(
    sort: Optional[str] = Query(None, description="distance (default), popularity or newest"),
    lat: Optional[str] = Query(None, description="Origin latitude, required for distance sort"),
    lng: Optional[str] = Query(None, description="Origin longitude, required for distance sort"),
    radius: Optional[str] = Query(None, description="Search radius in meters"),
    use_case: QueryCatalogUseCase = Depends(get_query_catalog_use_case),
) -> JSONResponse:
    """
    Discover published listings.

    ``sessions7d`` comes from a rolling aggregate that is recomputed every
    ``ANALYTICS_REFRESH_INTERVAL_SECONDS`` (15 minutes by default), so it can
    lag behind ingestion by up to that interval. ``distanceMeters`` is only
    present for distance sort.
    """
    items = await use_case.execute(
        {"sort": sort, "lat": lat, "lng": lng, "radius": radius}
    )
    return JSONResponse(content=[item.to_dict() for item in items])

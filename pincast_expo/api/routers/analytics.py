"""
Analytics router.

- POST /ingest: game clients report events with an app token
- POST /analytics/refresh: staff-triggered recomputation of 7-day counts
"""

import time

from fastapi import APIRouter, Depends

from pincast_expo.api.dependencies import (
    get_analytics_aggregator,
    get_ingest_event_use_case,
    require_app_token,
    require_staff,
)
from pincast_expo.api.schemas.analytics import (
    IngestEventRequest,
    IngestEventResponse,
    RefreshAnalyticsResponse,
)
from pincast_expo.api.schemas.base import ErrorResponse
from pincast_expo.application.services.access_gate import Identity
from pincast_expo.application.services.analytics_aggregator import AnalyticsAggregator
from pincast_expo.application.use_cases.ingest_event import IngestEventUseCase
from pincast_expo.domain.clock import utcnow
from pincast_expo.infra.auth.app_tokens import AppTokenClaims
from pincast_expo.infra.config.logging_config import get_logger

router = APIRouter(tags=["analytics"])
logger = get_logger("api.analytics")


@router.post(
    "/ingest",
    response_model=IngestEventResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)
async def ingest_event(
    request: IngestEventRequest,
    claims: AppTokenClaims = Depends(require_app_token),
    use_case: IngestEventUseCase = Depends(get_ingest_event_use_case),
) -> IngestEventResponse:
    timestamp = await use_case.execute(
        listing_id=claims.listing_id,
        user_id=claims.user_id,
        event=request.event,
        payload=request.payload,
    )
    return IngestEventResponse(success=True, timestamp=timestamp)


@router.post("/analytics/refresh", response_model=RefreshAnalyticsResponse)
async def refresh_analytics(
    staff: Identity = Depends(require_staff),
    aggregator: AnalyticsAggregator = Depends(get_analytics_aggregator),
) -> RefreshAnalyticsResponse:
    started = time.perf_counter()
    counts = await aggregator.refresh()
    duration_ms = int((time.perf_counter() - started) * 1000)

    logger.info(
        "analytics.refresh", user_id=str(staff.user_id), listings=len(counts)
    )
    return RefreshAnalyticsResponse(
        success=True,
        message="Analytics aggregate refreshed successfully",
        listings=len(counts),
        duration_ms=duration_ms,
        timestamp=utcnow(),
    )

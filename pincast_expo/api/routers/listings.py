"""
Staff review router.

This module provides endpoints for the listing lifecycle:
- GET /listings/review-queue: pending and hidden listings
- GET /listings/{listing_id}: listing detail with versions and audit trail
- PATCH /listings/{listing_id}/state: guarded state transition
- POST /listings/{listing_id}/rollback: republish at a previous version
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends

from pincast_expo.api.dependencies import (
    get_change_listing_state_use_case,
    get_listing_queries,
    get_rollback_use_case,
    get_unit_of_work,
    require_staff,
)
from pincast_expo.api.schemas.base import ErrorResponse, VersionSchema
from pincast_expo.api.schemas.listings import (
    AuditEntry,
    ChangeStateRequest,
    ChangeStateResponse,
    ListingDetailResponse,
    ListingResponse,
    ReviewQueueItem,
    RollbackRequest,
    RollbackResponse,
)
from pincast_expo.application.services.access_gate import Identity
from pincast_expo.application.unit_of_work import UnitOfWork
from pincast_expo.application.use_cases.change_listing_state import (
    ChangeListingStateUseCase,
)
from pincast_expo.application.use_cases.rollback_listing_version import (
    RollbackListingVersionUseCase,
)
from pincast_expo.data.queries.listing_queries import ListingQueries
from pincast_expo.domain.entities.analytics_event import AUDIT_EVENTS
from pincast_expo.domain.exceptions import NotFoundError

router = APIRouter(
    prefix="/listings",
    tags=["listings"],
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)

AUDIT_TRAIL_LIMIT = 50


@router.get("/review-queue", response_model=List[ReviewQueueItem])
async def get_review_queue(
    staff: Identity = Depends(require_staff),
    queries: ListingQueries = Depends(get_listing_queries),
) -> List[ReviewQueueItem]:
    items = await queries.get_review_queue()
    return [ReviewQueueItem.model_validate(item) for item in items]


@router.get("/{listing_id}", response_model=ListingDetailResponse)
async def get_listing_detail(
    listing_id: UUID,
    staff: Identity = Depends(require_staff),
    queries: ListingQueries = Depends(get_listing_queries),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> ListingDetailResponse:
    detail = await queries.get_listing_detail(listing_id)
    if detail is None:
        raise NotFoundError("App not found")

    events = await uow.event_repo.list_for_listing(
        listing_id, events=AUDIT_EVENTS, limit=AUDIT_TRAIL_LIMIT
    )
    detail["auditTrail"] = [
        AuditEntry(
            event=event.event,
            actor_id=str(event.actor_id),
            timestamp=event.timestamp,
            metadata=event.metadata,
        )
        for event in events
    ]
    return ListingDetailResponse.model_validate(detail)


@router.patch(
    "/{listing_id}/state",
    response_model=ChangeStateResponse,
    responses={400: {"model": ErrorResponse}},
)
async def change_listing_state(
    listing_id: UUID,
    request: ChangeStateRequest,
    staff: Identity = Depends(require_staff),
    use_case: ChangeListingStateUseCase = Depends(get_change_listing_state_use_case),
) -> ChangeStateResponse:
    """
    Move a listing along the review lifecycle.

    Allowed: pending -> published | rejected, published -> hidden,
    hidden -> published, rejected -> pending. Anything else is rejected with
    ``INVALID_TRANSITION`` and the listing is left unchanged.
    """
    result = await use_case.execute(
        listing_id=listing_id,
        to_state=request.state,
        actor=staff.user,
        reason=request.reason,
    )
    if result.is_err():
        raise result.error.to_exception()

    outcome = result.value
    return ChangeStateResponse(
        success=True,
        listing=ListingResponse.model_validate(outcome.listing.to_dict()),
        message=outcome.message,
    )


@router.post("/{listing_id}/rollback", response_model=RollbackResponse)
async def rollback_listing(
    listing_id: UUID,
    request: RollbackRequest,
    staff: Identity = Depends(require_staff),
    use_case: RollbackListingVersionUseCase = Depends(get_rollback_use_case),
) -> RollbackResponse:
    """Republish a listing at one of its earlier versions, whatever its state."""
    outcome = await use_case.execute(
        listing_id=listing_id,
        version_id=request.version_id,
        actor=staff.user,
        reason=request.reason,
    )
    return RollbackResponse(
        success=True,
        listing=ListingResponse.model_validate(outcome.listing.to_dict()),
        version=VersionSchema.model_validate(outcome.version.to_dict()),
        message=outcome.message,
        deploy_url=outcome.deploy_url,
    )

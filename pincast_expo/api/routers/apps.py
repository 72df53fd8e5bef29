"""
Public app page router.
"""

from fastapi import APIRouter, Depends

from pincast_expo.api.dependencies import get_listing_queries
from pincast_expo.api.schemas.base import ErrorResponse
from pincast_expo.api.schemas.listings import PublicListingResponse
from pincast_expo.data.queries.listing_queries import ListingQueries
from pincast_expo.domain.exceptions import NotFoundError

router = APIRouter(prefix="/apps", tags=["apps"])


@router.get(
    "/{slug}",
    response_model=PublicListingResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_public_listing(
    slug: str,
    queries: ListingQueries = Depends(get_listing_queries),
) -> PublicListingResponse:
    listing = await queries.get_public_listing(slug)
    if listing is None:
        raise NotFoundError("App not found")
    return PublicListingResponse.model_validate(listing)

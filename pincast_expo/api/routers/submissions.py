"""
Developer submission router, called from CI and the CLI deploy command.
"""

from fastapi import APIRouter, Depends, status

from pincast_expo.api.dependencies import (
    get_submit_listing_use_case,
    require_developer_scope,
)
from pincast_expo.api.schemas.base import ErrorResponse
from pincast_expo.api.schemas.submissions import (
    SubmitListingRequest,
    SubmitListingResponse,
)
from pincast_expo.application.services.access_gate import Identity
from pincast_expo.application.use_cases.submit_listing import (
    SubmitListingUseCase,
    listing_dashboard_url,
)
from pincast_expo.domain.value_objects.geo_point import GeoPoint
from pincast_expo.infra.config.settings import Settings, get_settings

router = APIRouter(prefix="/submissions", tags=["submissions"])


@router.post(
    "",
    response_model=SubmitListingResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def submit_listing(
    request: SubmitListingRequest,
    developer: Identity = Depends(require_developer_scope),
    use_case: SubmitListingUseCase = Depends(get_submit_listing_use_case),
    settings: Settings = Depends(get_settings),
) -> SubmitListingResponse:
    """
    Create a listing in ``pending`` state, or add a build to one of the
    caller's own listings. Without ``sdkVersion`` the patch number of the
    latest version is incremented.
    """
    longitude, latitude = request.geo.center
    result = await use_case.execute(
        developer=developer.user,
        title=request.title,
        slug=request.slug,
        center=GeoPoint(longitude=longitude, latitude=latitude),
        radius_meters=request.geo.radius_meters,
        build_url=str(request.build_url),
        hero_url=str(request.hero_url) if request.hero_url else None,
        sdk_version=request.sdk_version,
    )
    return SubmitListingResponse(
        app_id=result.listing.id,
        version_id=result.version.id,
        semver=result.version.semver,
        dashboard=listing_dashboard_url(settings.dashboard_base_url, result.listing.id),
        status=result.listing.state.value,
    )

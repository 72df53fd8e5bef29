"""
App token router: exchanges an identity token for an app-scoped token.
"""

from fastapi import APIRouter, Depends

from pincast_expo.api.dependencies import get_issue_app_token_use_case
from pincast_expo.api.schemas.base import ErrorResponse
from pincast_expo.api.schemas.tokens import AppTokenRequest, AppTokenResponse
from pincast_expo.application.use_cases.issue_app_token import IssueAppTokenUseCase

router = APIRouter(prefix="/tokens", tags=["tokens"])


@router.post(
    "/app",
    response_model=AppTokenResponse,
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def issue_app_token(
    request: AppTokenRequest,
    use_case: IssueAppTokenUseCase = Depends(get_issue_app_token_use_case),
) -> AppTokenResponse:
    issued = await use_case.execute(id_token=request.id_token, listing_id=request.app_id)
    return AppTokenResponse(token=issued.token, expires_in=issued.expires_in)

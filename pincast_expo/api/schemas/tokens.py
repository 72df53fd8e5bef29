from uuid import UUID

from pydantic import Field

from .base import CamelModel


class AppTokenRequest(CamelModel):
    id_token: str = Field(..., min_length=1)
    app_id: UUID


class AppTokenResponse(CamelModel):
    token: str
    expires_in: int

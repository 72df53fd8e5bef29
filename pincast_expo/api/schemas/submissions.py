"""
Developer submission schemas (CI / CLI deploys).
"""

from typing import List, Optional
from uuid import UUID

from pydantic import Field, HttpUrl

from .base import CamelModel


class SubmissionGeo(CamelModel):
    center: List[float] = Field(
        ..., min_length=2, max_length=2, description="[longitude, latitude]"
    )
    radius_meters: float = Field(..., ge=10, le=10_000)


class SubmitListingRequest(CamelModel):
    title: str = Field(..., min_length=1, max_length=100)
    slug: str = Field(..., min_length=1, max_length=50, pattern=r"^[a-z0-9-]+$")
    geo: SubmissionGeo
    hero_url: Optional[HttpUrl] = None
    build_url: HttpUrl
    sdk_version: Optional[str] = Field(None, description="Explicit semver for this build")


class SubmitListingResponse(CamelModel):
    app_id: UUID
    version_id: UUID
    semver: str
    dashboard: str
    status: str

"""
Base schemas and common components used across all API schemas.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from pincast_expo.domain.clock import utcnow


class CamelModel(BaseModel):
    """Schema whose JSON keys are camelCase; snake_case names also accepted."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------- BASE RESPONSE MODELS ----------
class SuccessResponse(CamelModel):
    success: bool = True
    message: Optional[str] = Field(None, description="Optional response message")


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str = Field(..., description="Error type or code")
    detail: str = Field(..., description="Human-readable error description")
    timestamp: datetime = Field(default_factory=utcnow)


# ---------- SHARED PIECES ----------
class GeoSchema(CamelModel):
    center: List[float] = Field(
        ..., min_length=2, max_length=2, description="[longitude, latitude]"
    )
    radius_meters: float = Field(..., gt=0)


class OwnerSchema(CamelModel):
    id: str
    email: Optional[str] = None
    display_name: Optional[str] = None


class VersionSchema(CamelModel):
    id: str
    semver: str
    changelog: Optional[str] = None
    quality_score: Optional[int] = None
    repo_url: Optional[str] = None
    deploy_url: Optional[str] = None
    created_at: datetime

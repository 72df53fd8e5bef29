"""
Listing lifecycle and listing page schemas.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import Field

from pincast_expo.domain.value_objects.listing_state import ListingState

from .base import CamelModel, GeoSchema, OwnerSchema, SuccessResponse, VersionSchema


# ---------- REQUESTS ----------
class ChangeStateRequest(CamelModel):
    state: ListingState
    reason: Optional[str] = Field(None, max_length=1000)


class RollbackRequest(CamelModel):
    version_id: UUID
    reason: Optional[str] = Field(None, max_length=1000)


# ---------- RESPONSES ----------
class ListingResponse(CamelModel):
    id: str
    owner_id: str
    title: str
    slug: str
    state: ListingState
    hero_url: Optional[str] = None
    category: Optional[str] = None
    price_cents: int = 0
    is_paid: bool = False
    created_at: datetime
    geo: GeoSchema


class ChangeStateResponse(SuccessResponse):
    listing: ListingResponse


class RollbackResponse(SuccessResponse):
    listing: ListingResponse
    version: VersionSchema
    deploy_url: str = ""


class ReviewQueueItem(CamelModel):
    id: str
    title: str
    slug: str
    state: ListingState
    hero_url: Optional[str] = None
    created_at: datetime
    owner: Optional[OwnerSchema] = None
    latest_version: Optional[VersionSchema] = None


class AuditEntry(CamelModel):
    event: str
    actor_id: str
    timestamp: datetime
    metadata: dict = Field(default_factory=dict)


class ListingDetailResponse(CamelModel):
    id: str
    title: str
    slug: str
    state: ListingState
    hero_url: Optional[str] = None
    category: Optional[str] = None
    price_cents: int = 0
    is_paid: bool = False
    created_at: datetime
    geo: GeoSchema
    owner: Optional[OwnerSchema] = None
    versions: List[VersionSchema] = Field(default_factory=list)
    audit_trail: List[AuditEntry] = Field(default_factory=list)


class PublicListingResponse(CamelModel):
    id: str
    title: str
    slug: str
    hero_url: Optional[str] = None
    category: Optional[str] = None
    price_cents: int = 0
    is_paid: bool = False
    developer_name: str
    build_url: Optional[str] = None
    semver: Optional[str] = None
    geo: GeoSchema
    created_at: datetime

"""
Read-only queries for listing pages (CQRS-lite).

These feed staff review screens and the public app page directly from the
tables; they never go through the domain entities.
"""

from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from pincast_expo.data.models.listing_model import ListingModel
from pincast_expo.data.models.user_model import UserModel
from pincast_expo.data.models.version_model import VersionModel
from pincast_expo.data.repositories.base import storage_errors
from pincast_expo.domain.clock import ensure_utc
from pincast_expo.domain.value_objects.listing_state import ListingState
from pincast_expo.infra.config.logging_config import get_logger

UNKNOWN_DEVELOPER = "Unknown Developer"


class ListingQueries:
    def __init__(self, session: AsyncSession):
        self.session = session
        self._log = get_logger("queries.listing")

    @storage_errors("queries.review_queue")
    async def get_review_queue(self) -> List[Dict[str, Any]]:
        """Listings awaiting staff attention, oldest first."""
        queue_states = [state.value for state in ListingState if state.is_in_review_queue()]
        result = await self.session.execute(
            select(ListingModel, UserModel)
            .outerjoin(UserModel, UserModel.id == ListingModel.owner_id)
            .options(selectinload(ListingModel.versions))
            .where(ListingModel.state.in_(queue_states))
            .order_by(ListingModel.created_at, ListingModel.id)
        )

        items = []
        for listing, owner in result.all():
            latest = _latest_version(listing.versions)
            items.append(
                {
                    **_listing_summary(listing),
                    "owner": _owner(owner),
                    "latestVersion": _version(latest) if latest else None,
                }
            )
        self._log.info("listing.review_queue", count=len(items))
        return items

    @storage_errors("queries.listing_detail")
    async def get_listing_detail(self, listing_id: UUID) -> Optional[Dict[str, Any]]:
        """Full staff view: owner and every version, newest first."""
        result = await self.session.execute(
            select(ListingModel, UserModel)
            .outerjoin(UserModel, UserModel.id == ListingModel.owner_id)
            .options(selectinload(ListingModel.versions))
            .where(ListingModel.id == listing_id)
        )
        row = result.first()
        if row is None:
            self._log.info("listing.detail.not_found", listing_id=str(listing_id))
            return None

        listing, owner = row
        versions = sorted(
            listing.versions,
            key=lambda v: (ensure_utc(v.created_at), str(v.id)),
            reverse=True,
        )
        data = {
            **_listing_summary(listing),
            "category": listing.category,
            "priceCents": listing.price_cents,
            "isPaid": listing.is_paid,
            "geo": _geo(listing),
            "owner": _owner(owner),
            "versions": [_version(v) for v in versions],
        }
        self._log.info(
            "listing.detail.found", listing_id=str(listing_id), versions=len(versions)
        )
        return data

    @storage_errors("queries.public_listing")
    async def get_public_listing(self, slug: str) -> Optional[Dict[str, Any]]:
        """Public app page; only published listings are visible."""
        result = await self.session.execute(
            select(ListingModel, UserModel)
            .outerjoin(UserModel, UserModel.id == ListingModel.owner_id)
            .options(selectinload(ListingModel.versions))
            .where(
                ListingModel.slug == slug,
                ListingModel.state == ListingState.PUBLISHED.value,
            )
        )
        row = result.first()
        if row is None:
            self._log.info("listing.public.not_found", slug=slug)
            return None

        listing, owner = row
        latest = _latest_version(listing.versions)
        developer_name = None
        if owner is not None:
            developer_name = owner.display_name or owner.email

        return {
            "id": str(listing.id),
            "title": listing.title,
            "slug": listing.slug,
            "heroUrl": listing.hero_url,
            "category": listing.category,
            "priceCents": listing.price_cents,
            "isPaid": listing.is_paid,
            "developerName": developer_name or UNKNOWN_DEVELOPER,
            "buildUrl": latest.deploy_url if latest else None,
            "semver": latest.semver if latest else None,
            "geo": _geo(listing),
            "createdAt": ensure_utc(listing.created_at),
        }


def _latest_version(versions) -> Optional[VersionModel]:
    if not versions:
        return None
    return max(versions, key=lambda v: (ensure_utc(v.created_at), str(v.id)))


def _listing_summary(listing: ListingModel) -> Dict[str, Any]:
    return {
        "id": str(listing.id),
        "title": listing.title,
        "slug": listing.slug,
        "state": listing.state,
        "heroUrl": listing.hero_url,
        "createdAt": ensure_utc(listing.created_at),
    }


def _geo(listing: ListingModel) -> Dict[str, Any]:
    return {
        "center": [listing.longitude, listing.latitude],
        "radiusMeters": listing.radius_meters,
    }


def _owner(owner: Optional[UserModel]) -> Optional[Dict[str, Any]]:
    if owner is None:
        return None
    return {
        "id": str(owner.id),
        "email": owner.email,
        "displayName": owner.display_name,
    }


def _version(version: VersionModel) -> Dict[str, Any]:
    return {
        "id": str(version.id),
        "semver": version.semver,
        "changelog": version.changelog,
        "qualityScore": version.quality_score,
        "repoUrl": version.repo_url,
        "deployUrl": version.deploy_url,
        "createdAt": ensure_utc(version.created_at),
    }

"""
Listing repository for data access operations.
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from pincast_expo.application.ports import ListingFilter, ListingRepositoryPort
from pincast_expo.data.models.listing_model import ListingModel
from pincast_expo.data.repositories.base import storage_errors
from pincast_expo.domain.clock import ensure_utc, utcnow
from pincast_expo.domain.entities.listing import Listing
from pincast_expo.domain.value_objects.geo_point import GeoPoint
from pincast_expo.domain.value_objects.listing_state import ListingState
from pincast_expo.infra.config.logging_config import get_logger


class ListingRepository(ListingRepositoryPort):
    def __init__(self, session: AsyncSession):
        self.session = session
        self._log = get_logger("repo.listing")

    @storage_errors("listing.create")
    async def create(self, listing: Listing) -> Listing:
        """Create a new listing."""
        listing_model = ListingModel(
            id=listing.id,
            owner_id=listing.owner_id,
            title=listing.title,
            slug=listing.slug,
            state=listing.state.value,
            longitude=listing.center.longitude,
            latitude=listing.center.latitude,
            radius_meters=listing.radius_meters,
            hero_url=listing.hero_url,
            category=listing.category,
            price_cents=listing.price_cents,
            is_paid=listing.is_paid,
            created_at=listing.created_at,
        )

        self.session.add(listing_model)
        await self.session.flush()
        self._log.info(
            "listing.create", listing_id=str(listing.id), owner_id=str(listing.owner_id)
        )
        return listing

    @storage_errors("listing.get")
    async def get_by_id(self, listing_id: UUID) -> Optional[Listing]:
        """Get listing by ID."""
        result = await self.session.execute(
            select(ListingModel)
            .where(ListingModel.id == listing_id)
            .execution_options(populate_existing=True)
        )
        listing_model = result.scalar_one_or_none()

        if not listing_model:
            self._log.info("listing.get.not_found", listing_id=str(listing_id))
            return None

        return self._to_entity(listing_model)

    @storage_errors("listing.get_by_slug")
    async def get_by_slug(self, slug: str) -> Optional[Listing]:
        result = await self.session.execute(
            select(ListingModel).where(ListingModel.slug == slug)
        )
        listing_model = result.scalar_one_or_none()
        return self._to_entity(listing_model) if listing_model else None

    @storage_errors("listing.scan")
    async def find_published(
        self, listing_filter: Optional[ListingFilter] = None
    ) -> List[Listing]:
        """Scan listings matching the filter; published only by default."""
        listing_filter = listing_filter or ListingFilter()
        states = [state.value for state in listing_filter.states]

        stmt = select(ListingModel).where(ListingModel.state.in_(states))
        if listing_filter.owner_id is not None:
            stmt = stmt.where(ListingModel.owner_id == listing_filter.owner_id)

        result = await self.session.execute(stmt)
        items = [self._to_entity(model) for model in result.scalars().all()]
        self._log.info("listing.scan", states=states, count=len(items))
        return items

    @storage_errors("listing.update_state")
    async def update_state(
        self,
        listing_id: UUID,
        state: ListingState,
        expected_state: Optional[ListingState] = None,
    ) -> Optional[Listing]:
        stmt = update(ListingModel).where(ListingModel.id == listing_id)
        if expected_state is not None:
            stmt = stmt.where(ListingModel.state == expected_state.value)
        stmt = stmt.values(state=state.value, updated_at=utcnow())

        result = await self.session.execute(stmt)
        if result.rowcount == 0:
            self._log.info(
                "listing.update_state.no_match",
                listing_id=str(listing_id),
                expected_state=expected_state.value if expected_state else None,
            )
            return None

        self._log.info(
            "listing.update_state", listing_id=str(listing_id), state=state.value
        )
        return await self.get_by_id(listing_id)

    def _to_entity(self, model: ListingModel) -> Listing:
        """Convert SQLAlchemy model to domain entity."""
        return Listing(
            id=model.id,
            owner_id=model.owner_id,
            title=model.title,
            slug=model.slug,
            state=ListingState(model.state),
            center=GeoPoint(longitude=model.longitude, latitude=model.latitude),
            radius_meters=model.radius_meters,
            hero_url=model.hero_url,
            category=model.category,
            price_cents=model.price_cents or 0,
            is_paid=bool(model.is_paid),
            created_at=ensure_utc(model.created_at),
        )

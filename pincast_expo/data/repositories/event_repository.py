"""
Event repository for the append-only analytics log.
"""

from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from pincast_expo.application.ports import EventRepositoryPort
from pincast_expo.data.models.analytics_model import AnalyticsEventModel
from pincast_expo.data.repositories.base import storage_errors
from pincast_expo.domain.clock import ensure_utc
from pincast_expo.domain.entities.analytics_event import AnalyticsEvent
from pincast_expo.infra.config.logging_config import get_logger


class EventRepository(EventRepositoryPort):
    def __init__(self, session: AsyncSession):
        self.session = session
        self._log = get_logger("repo.event")

    @storage_errors("event.append")
    async def append_event(self, event: AnalyticsEvent) -> None:
        """Store an analytics event."""
        event_model = AnalyticsEventModel(
            listing_id=event.listing_id,
            actor_id=event.actor_id,
            event=event.event,
            event_metadata=dict(event.metadata),
            timestamp=ensure_utc(event.timestamp),
        )
        self.session.add(event_model)
        await self.session.flush()
        self._log.info(
            "event.append", listing_id=str(event.listing_id), event_name=event.event
        )

    @storage_errors("event.count")
    async def count_events_since(
        self,
        event_name: str,
        since: datetime,
        until: datetime,
        listing_ids: Optional[Iterable[UUID]] = None,
    ) -> Dict[UUID, int]:
        stmt = (
            select(AnalyticsEventModel.listing_id, func.count(AnalyticsEventModel.id))
            .where(
                AnalyticsEventModel.event == event_name,
                AnalyticsEventModel.timestamp >= ensure_utc(since),
                AnalyticsEventModel.timestamp <= ensure_utc(until),
            )
            .group_by(AnalyticsEventModel.listing_id)
        )
        if listing_ids is not None:
            ids = list(listing_ids)
            if not ids:
                return {}
            stmt = stmt.where(AnalyticsEventModel.listing_id.in_(ids))

        result = await self.session.execute(stmt)
        counts = {listing_id: count for listing_id, count in result.all()}
        self._log.info("event.count", event_name=event_name, listings=len(counts))
        return counts

    @storage_errors("event.list")
    async def list_for_listing(
        self,
        listing_id: UUID,
        events: Optional[Sequence[str]] = None,
        limit: int = 100,
    ) -> List[AnalyticsEvent]:
        """Get the most recent events for a listing, newest first.

        When ``events`` is given only those event names are returned, so the
        limit applies after filtering.
        """
        stmt = select(AnalyticsEventModel).where(
            AnalyticsEventModel.listing_id == listing_id
        )
        if events is not None:
            stmt = stmt.where(AnalyticsEventModel.event.in_(list(events)))
        result = await self.session.execute(
            stmt.order_by(
                AnalyticsEventModel.timestamp.desc(), AnalyticsEventModel.id.desc()
            ).limit(limit)
        )
        return [self._to_entity(model) for model in result.scalars().all()]

    def _to_entity(self, model: AnalyticsEventModel) -> AnalyticsEvent:
        return AnalyticsEvent(
            listing_id=model.listing_id,
            actor_id=model.actor_id,
            event=model.event,
            timestamp=ensure_utc(model.timestamp),
            metadata=model.event_metadata or {},
        )

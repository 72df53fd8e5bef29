"""
Use Case: Ingest Analytics Event

Records a game-reported event (``session_start`` and friends) for the
listing named by the caller's app token.
"""

from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID

from pincast_expo.application.services.analytics_aggregator import AnalyticsAggregator
from pincast_expo.domain.clock import utcnow
from pincast_expo.domain.entities.analytics_event import AnalyticsEvent
from pincast_expo.domain.exceptions import InvalidArgumentError


class IngestEventUseCase:
    def __init__(self, aggregator: AnalyticsAggregator):
        self.aggregator = aggregator

    async def execute(
        self,
        listing_id: UUID,
        user_id: UUID,
        event: str,
        payload: Optional[Dict[str, Any]] = None,
    ) -> datetime:
        timestamp = utcnow()
        try:
            analytics_event = AnalyticsEvent(
                listing_id=listing_id,
                actor_id=user_id,
                event=event,
                timestamp=timestamp,
                metadata=payload or {},
            )
        except ValueError as e:
            raise InvalidArgumentError(str(e)) from e

        # StorageError propagates: ingestion is the primary write here.
        await self.aggregator.record(analytics_event)
        return timestamp

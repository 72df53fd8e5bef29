"""
Analytics aggregator: append-only event recording and rolling 7-day
popularity counts.

Session counts may be served from ``SessionCountCache``, a read-through
aggregate that is recomputed once its TTL has elapsed. Counts can therefore
lag behind ingestion by up to the configured refresh interval.
"""

import asyncio
from datetime import datetime, timedelta
from typing import Awaitable, Callable, Dict, Iterable, Optional
from uuid import UUID

from pincast_expo.application.unit_of_work import UnitOfWork
from pincast_expo.domain.clock import utcnow
from pincast_expo.domain.entities.analytics_event import SESSION_START, AnalyticsEvent
from pincast_expo.infra.config.logging_config import get_logger

POPULARITY_WINDOW = timedelta(days=7)

CountLoader = Callable[[], Awaitable[Dict[UUID, int]]]


class SessionCountCache:
    """
    Process-wide rolling aggregate of 7-day session counts per listing.

    Holds ``value`` (listing id -> count), ``fetched_at`` and ``ttl``.
    A TTL of zero disables caching: every read recomputes.
    """

    def __init__(self, ttl: timedelta, clock: Callable[[], datetime] = utcnow):
        self.value: Dict[UUID, int] = {}
        self.fetched_at: Optional[datetime] = None
        self.ttl = ttl
        self._clock = clock
        self._lock = asyncio.Lock()
        self._log = get_logger("analytics.cache")

    def is_stale(self, now: Optional[datetime] = None) -> bool:
        if self.fetched_at is None or self.ttl <= timedelta(0):
            return True
        now = now or self._clock()
        return now - self.fetched_at >= self.ttl

    async def refresh_if_stale(self, loader: CountLoader) -> Dict[UUID, int]:
        if not self.is_stale():
            return self.value
        async with self._lock:
            # Another request may have refreshed while we waited.
            if not self.is_stale():
                return self.value
            return await self._load(loader)

    async def refresh(self, loader: CountLoader) -> Dict[UUID, int]:
        async with self._lock:
            return await self._load(loader)

    def invalidate(self) -> None:
        self.fetched_at = None

    async def _load(self, loader: CountLoader) -> Dict[UUID, int]:
        started = self._clock()
        self.value = await loader()
        self.fetched_at = self._clock()
        self._log.info(
            "analytics.cache.refreshed",
            listings=len(self.value),
            duration_ms=int((self.fetched_at - started).total_seconds() * 1000),
        )
        return self.value


class AnalyticsAggregator:
    """Records analytics events and derives 7-day session counts."""

    def __init__(
        self,
        uow: UnitOfWork,
        cache: Optional[SessionCountCache] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.uow = uow
        self.cache = cache
        self._clock = clock
        self._log = get_logger("analytics.aggregator")

    async def record(self, event: AnalyticsEvent) -> None:
        """Append and commit an event. Raises StorageError if the write fails."""
        async with self.uow:
            await self.uow.event_repo.append_event(event)
            await self.uow.commit()
        self._log.info(
            "analytics.recorded",
            listing_id=str(event.listing_id),
            event_name=event.event,
        )

    async def record_quietly(self, event: AnalyticsEvent) -> bool:
        """Record an event without failing the caller's primary operation."""
        try:
            await self.record(event)
            return True
        except Exception as e:
            # CancelledError is a BaseException and still propagates
            self._log.error(
                "audit.write_failed",
                listing_id=str(event.listing_id),
                event_name=event.event,
                error=str(e),
                error_type=type(e).__name__,
            )
            return False

    async def sessions_7d(self, listing_id: UUID) -> int:
        counts = await self.sessions_7d_for([listing_id])
        return counts.get(listing_id, 0)

    async def sessions_7d_for(self, listing_ids: Iterable[UUID]) -> Dict[UUID, int]:
        ids = list(listing_ids)
        if self.cache is not None:
            counts = await self.cache.refresh_if_stale(self._count_all)
        else:
            counts = await self._count(ids)
        return {listing_id: counts.get(listing_id, 0) for listing_id in ids}

    async def refresh(self) -> Dict[UUID, int]:
        """Force a recomputation of the rolling aggregate."""
        if self.cache is None:
            return await self._count_all()
        return await self.cache.refresh(self._count_all)

    async def _count_all(self) -> Dict[UUID, int]:
        return await self._count(None)

    async def _count(self, listing_ids: Optional[Iterable[UUID]]) -> Dict[UUID, int]:
        now = self._clock()
        return await self.uow.event_repo.count_events_since(
            SESSION_START,
            since=now - POPULARITY_WINDOW,
            until=now,
            listing_ids=listing_ids,
        )

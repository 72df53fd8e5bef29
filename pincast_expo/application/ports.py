"""
Application ports - abstract interfaces for external dependencies.

These interfaces define the narrow contracts the use cases need from
persistence and identity providers. Use cases depend only on these ports,
never on a specific query builder.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence
from uuid import UUID

from pincast_expo.domain.entities.analytics_event import AnalyticsEvent
from pincast_expo.domain.entities.listing import Listing
from pincast_expo.domain.entities.user import User
from pincast_expo.domain.entities.version import Version
from pincast_expo.domain.value_objects.listing_state import ListingState


@dataclass(frozen=True)
class ListingFilter:
    """Filter for listing scans. ``states`` defaults to published only."""

    states: tuple = (ListingState.PUBLISHED,)
    owner_id: Optional[UUID] = None


@dataclass(frozen=True)
class TokenClaims:
    """Verified identity token contents."""

    subject_id: str
    scopes: List[str] = field(default_factory=list)

    def has_scope(self, scope: str) -> bool:
        return scope in self.scopes


class ListingRepositoryPort(ABC):
    """Abstract repository interface for Listing operations."""

    @abstractmethod
    async def create(self, listing: Listing) -> Listing:
        """Create a new listing."""
        pass

    @abstractmethod
    async def get_by_id(self, listing_id: UUID) -> Optional[Listing]:
        """Get listing by ID."""
        pass

    @abstractmethod
    async def get_by_slug(self, slug: str) -> Optional[Listing]:
        """Get listing by slug."""
        pass

    @abstractmethod
    async def find_published(
        self, listing_filter: Optional[ListingFilter] = None
    ) -> List[Listing]:
        """Scan listings matching the filter (published by default)."""
        pass

    @abstractmethod
    async def update_state(
        self,
        listing_id: UUID,
        state: ListingState,
        expected_state: Optional[ListingState] = None,
    ) -> Optional[Listing]:
        """
        Set the listing state in a single UPDATE.

        With ``expected_state`` the update only applies while the row still
        holds that state; ``None`` is returned when no row matched.
        """
        pass


class VersionRepositoryPort(ABC):
    """Abstract repository interface for Version operations."""

    @abstractmethod
    async def create(self, version: Version) -> Version:
        """Create a new version."""
        pass

    @abstractmethod
    async def list_for_listing(self, listing_id: UUID) -> List[Version]:
        """Get all versions for a listing, newest first."""
        pass

    @abstractmethod
    async def latest_created_at(
        self, listing_ids: Iterable[UUID]
    ) -> Dict[UUID, datetime]:
        """Map listing id to the creation time of its latest version."""
        pass


class EventRepositoryPort(ABC):
    """Abstract repository interface for the append-only event store."""

    @abstractmethod
    async def append_event(self, event: AnalyticsEvent) -> None:
        """Append an analytics event."""
        pass

    @abstractmethod
    async def count_events_since(
        self,
        event_name: str,
        since: datetime,
        until: datetime,
        listing_ids: Optional[Iterable[UUID]] = None,
    ) -> Dict[UUID, int]:
        """Count events per listing with ``since <= timestamp <= until``."""
        pass

    @abstractmethod
    async def list_for_listing(
        self,
        listing_id: UUID,
        events: Optional[Sequence[str]] = None,
        limit: int = 100,
    ) -> List[AnalyticsEvent]:
        """Get the most recent events for a listing, newest first, optionally
        restricted to the given event names."""
        pass


class UserRepositoryPort(ABC):
    """Abstract repository interface for User lookups."""

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by internal ID."""
        pass

    @abstractmethod
    async def get_by_subject(self, subject_id: str) -> Optional[User]:
        """Resolve a verified token subject to a user."""
        pass

    @abstractmethod
    async def get_many(self, user_ids: Iterable[UUID]) -> Dict[UUID, User]:
        """Batch lookup by internal ID."""
        pass


class IdentityVerifierPort(ABC):
    """Abstract interface for bearer token verification."""

    @abstractmethod
    async def verify(self, token: str) -> TokenClaims:
        """Verify a token; raises UnauthenticatedError when invalid or expired."""
        pass

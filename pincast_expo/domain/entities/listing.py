"""
Listing domain entity with core business rules.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import UUID

from pincast_expo.domain.clock import utcnow
from pincast_expo.domain.value_objects.geo_point import GeoPoint
from pincast_expo.domain.value_objects.listing_state import ListingState


@dataclass
class Listing:
    id: UUID
    owner_id: UUID
    title: str
    slug: str
    state: ListingState
    center: GeoPoint
    radius_meters: float
    hero_url: Optional[str] = None
    category: Optional[str] = None
    price_cents: int = 0
    is_paid: bool = False
    created_at: datetime = field(default_factory=utcnow)

    def __post_init__(self):
        if self.radius_meters <= 0:
            raise ValueError("Listing radius must be greater than 0")
        if self.price_cents < 0:
            raise ValueError("Listing price cannot be negative")

    def is_discoverable(self) -> bool:
        """Business rule: only published listings appear in the catalog."""
        return self.state.is_discoverable()

    def is_owned_by(self, user_id: UUID) -> bool:
        return self.owner_id == user_id

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "ownerId": str(self.owner_id),
            "title": self.title,
            "slug": self.slug,
            "heroUrl": self.hero_url,
            "category": self.category,
            "priceCents": self.price_cents,
            "isPaid": self.is_paid,
            "state": self.state.value,
            "createdAt": self.created_at.isoformat(),
            "geo": {
                "center": list(self.center.as_tuple()),
                "radiusMeters": self.radius_meters,
            },
        }

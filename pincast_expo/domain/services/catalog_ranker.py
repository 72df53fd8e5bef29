"""
Catalog ranking for geofenced discovery.

Pure ordering logic over already-loaded listings. Every ordering is total:
ties are broken by listing id so repeated calls over the same data return
the same sequence.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterable, List, Mapping, Optional, Tuple
from uuid import UUID

from pincast_expo.domain.entities.listing import Listing
from pincast_expo.domain.services.catalog_query import CatalogQuery
from pincast_expo.domain.services.geo import (
    distance_meters,
    is_within_radius,
    round_meters,
)
from pincast_expo.domain.value_objects.catalog_sort import CatalogSort


@dataclass(frozen=True)
class CatalogItem:
    id: UUID
    title: str
    slug: str
    hero_url: Optional[str]
    sessions_7d: int
    distance_meters: Optional[int] = None

    def to_dict(self) -> Dict[str, object]:
        item: Dict[str, object] = {
            "id": str(self.id),
            "title": self.title,
            "slug": self.slug,
            "heroUrl": self.hero_url,
            "sessions7d": self.sessions_7d,
        }
        if self.distance_meters is not None:
            item["distanceMeters"] = self.distance_meters
        return item


class CatalogRanker:
    """
    Orders published listings for a catalog query.

    - distance: listings whose center lies within the radius of the origin,
      nearest first
    - popularity: most ``session_start`` events in the trailing 7 days first
    - newest: most recent latest-version timestamp first, unversioned last
    """

    def rank(
        self,
        listings: Iterable[Listing],
        query: CatalogQuery,
        sessions_7d: Mapping[UUID, int],
        latest_version_at: Optional[Mapping[UUID, datetime]] = None,
    ) -> List[CatalogItem]:
        published = [listing for listing in listings if listing.is_discoverable()]

        if query.sort is CatalogSort.DISTANCE:
            return self._by_distance(published, query, sessions_7d)
        if query.sort is CatalogSort.POPULARITY:
            return self._by_popularity(published, sessions_7d)
        return self._by_newest(published, sessions_7d, latest_version_at or {})

    def _by_distance(
        self,
        listings: List[Listing],
        query: CatalogQuery,
        sessions_7d: Mapping[UUID, int],
    ) -> List[CatalogItem]:
        if query.origin is None:
            raise ValueError("Distance sort requires an origin")

        measured: List[Tuple[float, Listing]] = []
        for listing in listings:
            if not is_within_radius(query.origin, listing.center, query.radius_meters):
                continue
            meters = distance_meters(query.origin, listing.center)
            # The reported, rounded distance must not exceed the radius either
            if round_meters(meters) > query.radius_meters:
                continue
            measured.append((meters, listing))

        measured.sort(key=lambda pair: (pair[0], str(pair[1].id)))
        return [
            _to_item(listing, sessions_7d, distance=round_meters(meters))
            for meters, listing in measured
        ]

    def _by_popularity(
        self, listings: List[Listing], sessions_7d: Mapping[UUID, int]
    ) -> List[CatalogItem]:
        ordered = sorted(
            listings,
            key=lambda listing: (-sessions_7d.get(listing.id, 0), str(listing.id)),
        )
        return [_to_item(listing, sessions_7d) for listing in ordered]

    def _by_newest(
        self,
        listings: List[Listing],
        sessions_7d: Mapping[UUID, int],
        latest_version_at: Mapping[UUID, datetime],
    ) -> List[CatalogItem]:
        def newest_key(listing: Listing):
            released = latest_version_at.get(listing.id)
            if released is None:
                return (1, 0.0, str(listing.id))
            return (0, -released.timestamp(), str(listing.id))

        ordered = sorted(listings, key=newest_key)
        return [_to_item(listing, sessions_7d) for listing in ordered]


def _to_item(
    listing: Listing, sessions_7d: Mapping[UUID, int], distance: Optional[int] = None
) -> CatalogItem:
    return CatalogItem(
        id=listing.id,
        title=listing.title,
        slug=listing.slug,
        hero_url=listing.hero_url,
        sessions_7d=int(sessions_7d.get(listing.id, 0)),
        distance_meters=distance,
    )

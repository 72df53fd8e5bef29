"""
Use Case: Query Catalog

Read-only discovery query:
1. Parse and validate the raw query parameters
2. Load published listings
3. Merge in 7-day session counts (and latest-version times for ``newest``)
4. Rank with the catalog ranker
"""

from typing import List, Mapping, Optional

from pincast_expo.application.services.analytics_aggregator import AnalyticsAggregator
from pincast_expo.application.unit_of_work import UnitOfWork
from pincast_expo.domain.exceptions import InvalidArgumentError
from pincast_expo.domain.services.catalog_query import (
    DEFAULT_RADIUS_METERS,
    MAX_RADIUS_METERS,
    CatalogQuery,
)
from pincast_expo.domain.services.catalog_ranker import CatalogItem, CatalogRanker
from pincast_expo.domain.value_objects.catalog_sort import CatalogSort
from pincast_expo.infra.config.logging_config import get_logger


class QueryCatalogUseCase:
    def __init__(
        self,
        uow: UnitOfWork,
        aggregator: AnalyticsAggregator,
        ranker: Optional[CatalogRanker] = None,
        default_radius: float = DEFAULT_RADIUS_METERS,
        max_radius: float = MAX_RADIUS_METERS,
    ):
        self.uow = uow
        self.aggregator = aggregator
        self.ranker = ranker or CatalogRanker()
        self.default_radius = default_radius
        self.max_radius = max_radius
        self._log = get_logger("usecase.query_catalog")

    def parse(self, raw: Mapping[str, Optional[str]]) -> CatalogQuery:
        parsed = CatalogQuery.parse(
            raw, default_radius=self.default_radius, max_radius=self.max_radius
        )
        if parsed.is_err():
            errors = parsed.error
            self._log.info(
                "catalog.invalid_query",
                errors=[f"{e.field}: {e.message}" for e in errors],
            )
            raise InvalidArgumentError(errors[0].message)
        return parsed.value

    async def execute(self, raw: Mapping[str, Optional[str]]) -> List[CatalogItem]:
        query = self.parse(raw)
        self._log.info(
            "usecase.start",
            action="query_catalog",
            sort=query.sort.value,
            radius=query.radius_meters,
        )

        listings = await self.uow.listing_repo.find_published()
        ids = [listing.id for listing in listings]
        sessions = await self.aggregator.sessions_7d_for(ids)

        latest_version_at = None
        if query.sort is CatalogSort.NEWEST:
            latest_version_at = await self.uow.version_repo.latest_created_at(ids)

        items = self.ranker.rank(listings, query, sessions, latest_version_at)
        self._log.info("usecase.success", count=len(items))
        return items

"""
Use Case: Roll Back Listing Version

Staff escape hatch that republishes a listing on one of its earlier
versions. The state is forced to ``published`` without consulting the
transition table, and exactly one ``app_version_rollback`` event is recorded.
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from pincast_expo.application.services.analytics_aggregator import AnalyticsAggregator
from pincast_expo.application.unit_of_work import UnitOfWork
from pincast_expo.domain.entities.analytics_event import (
    APP_VERSION_ROLLBACK,
    AnalyticsEvent,
)
from pincast_expo.domain.entities.listing import Listing
from pincast_expo.domain.entities.user import User
from pincast_expo.domain.entities.version import Version
from pincast_expo.domain.exceptions import NotFoundError
from pincast_expo.domain.services.lifecycle import (
    ROLLBACK_TARGET_STATE,
    ListingStateMachine,
)
from pincast_expo.infra.config.logging_config import bind_context, get_logger


@dataclass(frozen=True)
class RollbackOutcome:
    listing: Listing
    version: Version
    message: str
    deploy_url: str
    audit_recorded: bool


class RollbackListingVersionUseCase:
    def __init__(self, uow: UnitOfWork, aggregator: AnalyticsAggregator):
        self.uow = uow
        self.aggregator = aggregator
        self._log = get_logger("usecase.rollback_listing_version")

    async def execute(
        self,
        listing_id: UUID,
        version_id: UUID,
        actor: User,
        reason: Optional[str] = None,
    ) -> RollbackOutcome:
        bind_context(listing_id=str(listing_id), user_id=str(actor.id))
        self._log.info("usecase.start", action="rollback", version_id=str(version_id))

        async with self.uow:
            listing = await self.uow.listing_repo.get_by_id(listing_id)
            if listing is None:
                raise NotFoundError("App not found")

            versions = await self.uow.version_repo.list_for_listing(listing_id)
            if not versions:
                raise NotFoundError("No versions found for this app")

            target = next((v for v in versions if v.id == version_id), None)
            if target is None:
                raise NotFoundError("Target version not found")

            updated = await self.uow.listing_repo.update_state(
                listing_id, ROLLBACK_TARGET_STATE
            )
            if updated is None:
                raise NotFoundError("App not found")
            await self.uow.commit()

        audit_recorded = await self.aggregator.record_quietly(
            AnalyticsEvent(
                listing_id=listing_id,
                actor_id=actor.id,
                event=APP_VERSION_ROLLBACK,
                metadata={
                    "versionId": str(target.id),
                    "semver": target.semver,
                    "reason": reason or f"Rollback by staff {actor.audit_label}",
                },
            )
        )

        message = ListingStateMachine.rollback_message(target.semver)
        self._log.info("usecase.success", semver=target.semver)
        return RollbackOutcome(
            listing=updated,
            version=target,
            message=message,
            deploy_url=target.deploy_url or "",
            audit_recorded=audit_recorded,
        )

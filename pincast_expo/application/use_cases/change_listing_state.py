"""
Use Case: Change Listing State

Staff review transition:
1. Load the listing (NotFound if absent)
2. Check the transition against the allowed table (pure, before any write)
3. Persist the new state with a single compare-and-set update and commit
4. Append an ``app_state_change`` audit event; a failed audit write is
   logged and does not undo the committed state change
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from pincast_expo.application.services.analytics_aggregator import AnalyticsAggregator
from pincast_expo.application.unit_of_work import UnitOfWork
from pincast_expo.domain.entities.analytics_event import (
    APP_STATE_CHANGE,
    AnalyticsEvent,
)
from pincast_expo.domain.entities.listing import Listing
from pincast_expo.domain.entities.user import User
from pincast_expo.domain.exceptions import NotFoundError
from pincast_expo.domain.result import Err, Ok, Result
from pincast_expo.domain.services.lifecycle import ListingStateMachine, TransitionError
from pincast_expo.domain.value_objects.listing_state import ListingState
from pincast_expo.infra.config.logging_config import bind_context, get_logger


@dataclass(frozen=True)
class StateChangeOutcome:
    listing: Listing
    from_state: ListingState
    to_state: ListingState
    message: str
    audit_recorded: bool


class ChangeListingStateUseCase:
    def __init__(self, uow: UnitOfWork, aggregator: AnalyticsAggregator):
        self.uow = uow
        self.aggregator = aggregator
        self.state_machine = ListingStateMachine()
        self._log = get_logger("usecase.change_listing_state")

    async def execute(
        self,
        listing_id: UUID,
        to_state: ListingState,
        actor: User,
        reason: Optional[str] = None,
    ) -> Result[StateChangeOutcome, TransitionError]:
        bind_context(listing_id=str(listing_id), user_id=str(actor.id))
        self._log.info("usecase.start", action="change_state", to_state=to_state.value)

        async with self.uow:
            listing = await self.uow.listing_repo.get_by_id(listing_id)
            if listing is None:
                raise NotFoundError("App not found")

            from_state = listing.state
            checked = self.state_machine.check(from_state, to_state)
            if checked.is_err():
                self._log.info(
                    "usecase.transition_rejected",
                    from_state=from_state.value,
                    to_state=to_state.value,
                )
                return checked

            updated = await self.uow.listing_repo.update_state(
                listing_id, to_state, expected_state=from_state
            )
            if updated is None:
                # Row changed between read and write; report what is there now.
                current = await self.uow.listing_repo.get_by_id(listing_id)
                observed = current.state if current else from_state
                self._log.warning(
                    "usecase.concurrent_transition",
                    expected_state=from_state.value,
                    observed_state=observed.value,
                )
                return Err(TransitionError(from_state=observed, to_state=to_state))

            await self.uow.commit()

        audit_recorded = await self.aggregator.record_quietly(
            AnalyticsEvent(
                listing_id=listing_id,
                actor_id=actor.id,
                event=APP_STATE_CHANGE,
                metadata={
                    "fromState": from_state.value,
                    "toState": to_state.value,
                    "reason": reason or f"Changed by staff {actor.audit_label}",
                },
            )
        )

        message = self.state_machine.change_message(from_state, to_state)
        self._log.info("usecase.success", message=message, audit_recorded=audit_recorded)
        return Ok(
            StateChangeOutcome(
                listing=updated,
                from_state=from_state,
                to_state=to_state,
                message=message,
                audit_recorded=audit_recorded,
            )
        )

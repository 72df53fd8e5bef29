"""
Domain service for the listing review state machine.

The guard is pure: it never touches storage and reports an expected rejection
as an ``Err`` value instead of raising.
"""

from dataclasses import dataclass

from pincast_expo.domain.exceptions import InvalidTransitionError
from pincast_expo.domain.result import Err, Ok, Result
from pincast_expo.domain.value_objects.listing_state import ListingState

ROLLBACK_TARGET_STATE = ListingState.PUBLISHED


@dataclass(frozen=True)
class TransitionError:
    """A rejected state change, carrying both ends of the attempted move."""

    from_state: ListingState
    to_state: ListingState

    @property
    def message(self) -> str:
        return (
            f"Invalid state transition from '{self.from_state.value}' "
            f"to '{self.to_state.value}'"
        )

    def to_exception(self) -> InvalidTransitionError:
        return InvalidTransitionError(self.from_state.value, self.to_state.value)


class ListingStateMachine:
    """Validates review transitions against the allowed-transition table."""

    @staticmethod
    def check(
        current: ListingState, target: ListingState
    ) -> Result[ListingState, TransitionError]:
        if current.can_transition_to(target):
            return Ok(target)
        return Err(TransitionError(from_state=current, to_state=target))

    @staticmethod
    def change_message(from_state: ListingState, to_state: ListingState) -> str:
        return f"App state changed from '{from_state.value}' to '{to_state.value}'"

    @staticmethod
    def rollback_message(semver: str) -> str:
        return f"Rolled back to version {semver}"

"""
Listing lifecycle state value object - review workflow states.
"""

from enum import Enum


class ListingState(str, Enum):
    """
    Lifecycle state of a listing in the review workflow.

    New listings start in DRAFT or PENDING. No state is terminal: rejected
    listings can be resubmitted and hidden listings can be republished.
    """

    DRAFT = "draft"  # Created by the owner, not yet submitted
    PENDING = "pending"  # Waiting for staff review
    PUBLISHED = "published"  # Visible in the catalog
    REJECTED = "rejected"  # Declined by staff
    HIDDEN = "hidden"  # Pulled from the catalog by staff

    def allowed_targets(self) -> frozenset:
        """Business rule: states reachable from this one through review."""
        return ALLOWED_TRANSITIONS.get(self, frozenset())

    def can_transition_to(self, new_state: "ListingState") -> bool:
        """
        Business rule: Define valid review transitions.

        Self-transitions are never allowed, so re-applying a transition
        that already happened is rejected.

        Args:
            new_state: The state to transition to

        Returns:
            bool: Whether the transition is valid
        """
        return new_state in self.allowed_targets()

    def is_discoverable(self) -> bool:
        """Business rule: only published listings show up in the catalog."""
        return self is ListingState.PUBLISHED

    def is_in_review_queue(self) -> bool:
        """Business rule: staff review pending and hidden listings."""
        return self in (ListingState.PENDING, ListingState.HIDDEN)


ALLOWED_TRANSITIONS = {
    ListingState.PENDING: frozenset({ListingState.PUBLISHED, ListingState.REJECTED}),
    ListingState.PUBLISHED: frozenset({ListingState.HIDDEN}),
    ListingState.HIDDEN: frozenset({ListingState.PUBLISHED}),
    ListingState.REJECTED: frozenset({ListingState.PENDING}),
}

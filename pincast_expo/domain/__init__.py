"""
Domain layer - Core business entities and logic.

This package contains the pure business logic and domain models,
independent of any external concerns like databases or APIs.
"""

from .entities import AnalyticsEvent, Listing, User, Version
from .services import CatalogRanker, ListingStateMachine
from .value_objects import CatalogSort, GeoPoint, ListingState, UserRole

__all__ = [
    "AnalyticsEvent",
    "CatalogRanker",
    "CatalogSort",
    "GeoPoint",
    "Listing",
    "ListingState",
    "ListingStateMachine",
    "User",
    "UserRole",
    "Version",
]

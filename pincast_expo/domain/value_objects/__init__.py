"""
Domain value objects - immutable objects that represent concepts.
"""

from .catalog_sort import CatalogSort
from .geo_point import GeoPoint
from .listing_state import ALLOWED_TRANSITIONS, ListingState
from .semver import SemVer
from .user_role import UserRole

__all__ = [
    "ALLOWED_TRANSITIONS",
    "CatalogSort",
    "GeoPoint",
    "ListingState",
    "SemVer",
    "UserRole",
]

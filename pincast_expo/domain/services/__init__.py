"""Domain services exports."""

from .catalog_query import CatalogQuery, FieldError
from .catalog_ranker import CatalogItem, CatalogRanker
from .geo import distance_meters, is_within_radius
from .lifecycle import ListingStateMachine, TransitionError

__all__ = [
    "CatalogItem",
    "CatalogQuery",
    "CatalogRanker",
    "FieldError",
    "ListingStateMachine",
    "TransitionError",
    "distance_meters",
    "is_within_radius",
]

"""
Catalog sort modes.
"""

from enum import Enum


class CatalogSort(str, Enum):
    DISTANCE = "distance"
    POPULARITY = "popularity"
    NEWEST = "newest"

    @classmethod
    def choices(cls) -> list[str]:
        return [member.value for member in cls]

    def requires_origin(self) -> bool:
        return self is CatalogSort.DISTANCE

"""
Catalog discovery response schemas.
"""

from typing import Optional

from pydantic import Field

from .base import CamelModel


class CatalogItemResponse(CamelModel):
    id: str
    title: str
    slug: str
    hero_url: Optional[str] = None
    sessions_7d: int = Field(..., alias="sessions7d", ge=0)
    distance_meters: Optional[int] = Field(
        None, description="Present only for distance sort"
    )

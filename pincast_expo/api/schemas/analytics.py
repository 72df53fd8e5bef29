"""
Analytics ingestion and refresh schemas.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import Field

from .base import CamelModel, SuccessResponse


class IngestEventRequest(CamelModel):
    event: str = Field(..., min_length=1, max_length=255)
    payload: Optional[Dict[str, Any]] = None


class IngestEventResponse(SuccessResponse):
    timestamp: datetime


class RefreshAnalyticsResponse(SuccessResponse):
    listings: int = Field(..., ge=0, description="Listings with at least one session")
    duration_ms: int
    timestamp: datetime

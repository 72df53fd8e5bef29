"""
Analytics event entity - an append-only, timestamped fact.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict
from uuid import UUID

from pincast_expo.domain.clock import utcnow

SESSION_START = "session_start"
APP_STATE_CHANGE = "app_state_change"
APP_VERSION_ROLLBACK = "app_version_rollback"
AUDIT_EVENTS = (APP_STATE_CHANGE, APP_VERSION_ROLLBACK)


@dataclass(frozen=True)
class AnalyticsEvent:
    listing_id: UUID
    actor_id: UUID
    event: str
    timestamp: datetime = field(default_factory=utcnow)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not self.event or len(self.event) > 255:
            raise ValueError("Event name must be between 1 and 255 characters")

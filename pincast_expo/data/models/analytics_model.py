"""
SQLAlchemy model for the append-only analytics event log.

Audit events (state changes, rollbacks) share this table with gameplay
events; ``metadata`` is a reserved attribute name on declarative classes,
so the column is mapped as ``event_metadata``.
"""

import uuid

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Index, String, Uuid

from pincast_expo.data.models.base import Base
from pincast_expo.domain.clock import utcnow


class AnalyticsEventModel(Base):
    __tablename__ = "analytics_events"
    __table_args__ = (
        Index("ix_analytics_events_event_timestamp", "event", "timestamp"),
        Index("ix_analytics_events_listing_timestamp", "listing_id", "timestamp"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    listing_id = Column(Uuid, ForeignKey("listings.id"), nullable=False)
    actor_id = Column(Uuid, nullable=False, index=True)
    event = Column(String(255), nullable=False)
    event_metadata = Column("metadata", JSON, nullable=False, default=dict)
    timestamp = Column(DateTime(timezone=True), default=utcnow, nullable=False)

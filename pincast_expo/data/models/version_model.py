"""
SQLAlchemy model for listing Versions (one row per deployment).
"""

import uuid

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import relationship

from pincast_expo.data.models.base import Base
from pincast_expo.domain.clock import utcnow


class VersionModel(Base):
    __tablename__ = "versions"
    __table_args__ = (Index("ix_versions_listing_created", "listing_id", "created_at"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    listing_id = Column(Uuid, ForeignKey("listings.id"), nullable=False, index=True)
    semver = Column(String(50), nullable=False)
    changelog = Column(Text, nullable=True)
    quality_score = Column(Integer, nullable=True)
    repo_url = Column(String(2048), nullable=True)
    deploy_url = Column(String(2048), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    # Relationships
    listing = relationship("ListingModel", back_populates="versions")

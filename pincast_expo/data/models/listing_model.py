"""
SQLAlchemy model for Listing entity.
"""

import uuid

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Uuid,
)
from sqlalchemy.orm import relationship

from pincast_expo.data.models.base import Base
from pincast_expo.domain.clock import utcnow


class ListingModel(Base):
    __tablename__ = "listings"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    owner_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    state = Column(String(20), nullable=False, default="draft", index=True)
    longitude = Column(Float, nullable=False)
    latitude = Column(Float, nullable=False)
    radius_meters = Column(Float, nullable=False)
    hero_url = Column(String(2048), nullable=True)
    category = Column(String(100), nullable=True)
    price_cents = Column(Integer, nullable=False, default=0)
    is_paid = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow)

    # Relationships
    versions = relationship(
        "VersionModel", back_populates="listing", cascade="all, delete-orphan"
    )

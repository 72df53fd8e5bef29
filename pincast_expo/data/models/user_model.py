"""
SQLAlchemy model for User accounts.
"""

import uuid

from sqlalchemy import Column, DateTime, String, Uuid

from pincast_expo.data.models.base import Base
from pincast_expo.domain.clock import utcnow


class UserModel(Base):
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    identity_subject = Column(String(255), nullable=False, unique=True, index=True)
    role = Column(String(20), nullable=False, default="player")
    email = Column(String(320), nullable=True)
    display_name = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

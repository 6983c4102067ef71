"""
Participant model
"""

from sqlalchemy import Column, String, Boolean, ForeignKey
from sqlalchemy.orm import relationship

from app.core.db import Base
from app.models.types import IsoTimestamp, new_id
from app.utils.dates import utcnow

class Participant(Base):
    __tablename__ = "participants"

    id = Column(String, primary_key=True, default=new_id)
    event_id = Column(String, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    team_id = Column(String, ForeignKey("teams.id", ondelete="SET NULL"), nullable=True, index=True)
    name = Column(String, nullable=False)
    participant_token = Column(String, nullable=False, unique=True, index=True)
    joined_at = Column(IsoTimestamp, nullable=False, default=utcnow)
    last_active_at = Column(IsoTimestamp, nullable=False, default=utcnow)
    is_active = Column(Boolean, nullable=False, default=True)
    can_switch_team = Column(Boolean, nullable=False, default=True)

    # Relationships
    event = relationship("Event", back_populates="participants")
    team = relationship("Team", back_populates="participants")
    responses = relationship("Response", back_populates="participant", cascade="all, delete-orphan")

"""
Team model
"""

from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship

from app.core.db import Base
from app.models.types import IsoTimestamp, new_id
from app.utils.dates import utcnow

DEFAULT_MAX_MEMBERS = 6

class Team(Base):
    __tablename__ = "teams"

    id = Column(String, primary_key=True, default=new_id)
    event_id = Column(String, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    table_number = Column(Integer)
    max_members = Column(Integer, nullable=False, default=DEFAULT_MAX_MEMBERS)
    created_at = Column(IsoTimestamp, nullable=False, default=utcnow)

    # Relationships
    event = relationship("Event", back_populates="teams")
    # Members are detached (team_id set to null) when the team is deleted
    participants = relationship("Participant", back_populates="team", order_by="Participant.name")

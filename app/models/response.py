"""
Response model - one submitted answer
"""

from sqlalchemy import Column, Integer, String, Text, Boolean, ForeignKey
from sqlalchemy.orm import relationship

from app.core.db import Base
from app.models.types import IsoTimestamp, new_id
from app.utils.dates import utcnow

class Response(Base):
    __tablename__ = "responses"

    id = Column(String, primary_key=True, default=new_id)
    participant_id = Column(String, ForeignKey("participants.id", ondelete="CASCADE"), nullable=False, index=True)
    question_id = Column(String, ForeignKey("questions.id", ondelete="CASCADE"), nullable=False, index=True)
    answer = Column(Text, nullable=False)
    is_correct = Column(Boolean, nullable=False, default=False)
    points = Column(Integer, nullable=False, default=0)
    response_time = Column(Integer)  # milliseconds
    time_remaining = Column(Integer)  # seconds
    submitted_at = Column(IsoTimestamp, nullable=False, default=utcnow)

    # Relationships
    participant = relationship("Participant", back_populates="responses")
    question = relationship("Question", back_populates="responses")

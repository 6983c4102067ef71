"""
Question model
"""

from sqlalchemy import Column, Integer, String, Text, Boolean, ForeignKey
from sqlalchemy.orm import relationship

from app.core.db import Base
from app.models.types import IsoTimestamp, new_id
from app.utils.dates import utcnow

QUESTION_TYPES = ("multiple_choice", "true_false", "fill_blank", "image")

class Question(Base):
    __tablename__ = "questions"

    id = Column(String, primary_key=True, default=new_id)
    event_id = Column(String, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String, nullable=False, default="multiple_choice")
    question = Column(Text, nullable=False)
    options = Column(Text, default="[]")  # JSON-encoded list
    correct_answer = Column(Text, nullable=False)
    explanation = Column(Text)
    points = Column(Integer, nullable=False, default=100)
    time_limit = Column(Integer, nullable=False, default=30)
    difficulty = Column(String, nullable=False, default="medium")
    category = Column(String)
    background_image_url = Column(String)
    ai_generated = Column(Boolean, nullable=False, default=False)
    order_index = Column(Integer, nullable=False, default=0)
    question_type = Column(String, nullable=False, default="game")  # game, training, tie-breaker
    created_at = Column(IsoTimestamp, nullable=False, default=utcnow)

    # Relationships
    event = relationship("Event", back_populates="questions")
    responses = relationship("Response", back_populates="question", cascade="all, delete-orphan")
    image = relationship("EventImage", back_populates="question", uselist=False,
                         cascade="all, delete-orphan")

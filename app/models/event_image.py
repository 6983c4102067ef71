"""
Event image model - cached Unsplash selection bound to one question
"""

from sqlalchemy import Column, Integer, String, Text, Boolean, ForeignKey
from sqlalchemy.orm import relationship

from app.core.db import Base
from app.models.types import IsoTimestamp, new_id
from app.utils.dates import utcnow

class EventImage(Base):
    __tablename__ = "event_images"

    id = Column(String, primary_key=True, default=new_id)
    question_id = Column(String, ForeignKey("questions.id", ondelete="CASCADE"), nullable=False, unique=True)
    unsplash_image_id = Column(String, nullable=False)
    image_url = Column(String, nullable=False)
    thumbnail_url = Column(String, nullable=False)
    description = Column(Text)
    attribution_text = Column(String, nullable=False)
    attribution_url = Column(String, nullable=False)
    download_tracking_url = Column(String, nullable=False)
    width = Column(Integer, nullable=False, default=0)
    height = Column(Integer, nullable=False, default=0)
    color = Column(String)
    size_variant = Column(String, nullable=False, default="regular")
    usage_context = Column(String)
    download_tracked = Column(Boolean, nullable=False, default=False)
    created_at = Column(IsoTimestamp, nullable=False, default=utcnow)
    last_used_at = Column(IsoTimestamp)
    expires_at = Column(IsoTimestamp)
    selected_by_user_id = Column(String, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    search_context = Column(String)

    # Relationships
    question = relationship("Question", back_populates="image")
    selected_by = relationship("User")

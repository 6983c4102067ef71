"""
Event model
"""

from sqlalchemy import Column, Integer, String, Text, Boolean, ForeignKey
from sqlalchemy.orm import relationship

from app.core.db import Base
from app.models.types import EpochMillis, new_id
from app.utils.dates import utcnow

EVENT_STATUSES = ("draft", "active", "completed", "cancelled")

class Event(Base):
    __tablename__ = "events"

    id = Column(String, primary_key=True, default=new_id)
    title = Column(String, nullable=False)
    description = Column(Text)
    host_id = Column(String, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)
    event_type = Column(String, nullable=False, default="general")
    max_participants = Column(Integer, nullable=False, default=50)
    difficulty = Column(String, nullable=False, default="mixed")
    status = Column(String, nullable=False, default="draft")
    qr_code = Column(String, index=True)

    # Schedule
    event_date = Column(EpochMillis)
    event_time = Column(String)
    location = Column(String)
    sponsoring_organization = Column(String)

    # Branding
    logo_url = Column(String)
    background_image_url = Column(String)
    event_copy = Column(Text)
    welcome_message = Column(Text)
    thank_you_message = Column(Text)
    primary_color = Column(String, default="#7C2D12")
    secondary_color = Column(String, default="#FEF3C7")
    font_family = Column(String, default="Inter")

    # Contact and business details
    contact_email = Column(String)
    contact_phone = Column(String)
    website_url = Column(String)
    social_links = Column(Text)
    prize_information = Column(Text)
    event_rules = Column(Text)
    special_instructions = Column(Text)
    accessibility_info = Column(Text)
    dietary_accommodations = Column(Text)
    dress_code = Column(String)
    age_restrictions = Column(String)
    technical_requirements = Column(Text)
    registration_deadline = Column(EpochMillis)
    cancellation_policy = Column(Text)
    refund_policy = Column(Text)
    sponsor_information = Column(Text)

    settings = Column(Text, default="{}")
    allow_participants = Column(Boolean, nullable=False, default=False)
    created_at = Column(EpochMillis, nullable=False, default=utcnow)
    started_at = Column(EpochMillis)
    completed_at = Column(EpochMillis)

    # Relationships
    host = relationship("User", back_populates="events")
    questions = relationship("Question", back_populates="event", cascade="all, delete-orphan",
                             order_by="Question.order_index")
    teams = relationship("Team", back_populates="event", cascade="all, delete-orphan")
    participants = relationship("Participant", back_populates="event", cascade="all, delete-orphan")
    fun_facts = relationship("FunFact", back_populates="event", cascade="all, delete-orphan",
                             order_by="FunFact.order_index")

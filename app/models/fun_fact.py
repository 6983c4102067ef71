"""
Fun fact model
"""

from sqlalchemy import Column, Integer, String, Text, Boolean, ForeignKey
from sqlalchemy.orm import relationship

from app.core.db import Base
from app.models.types import IsoTimestamp, new_id
from app.utils.dates import utcnow

class FunFact(Base):
    __tablename__ = "fun_facts"

    id = Column(String, primary_key=True, default=new_id)
    event_id = Column(String, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    order_index = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(IsoTimestamp, nullable=False, default=utcnow)

    # Relationships
    event = relationship("Event", back_populates="fun_facts")

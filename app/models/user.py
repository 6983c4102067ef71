"""
User model
"""

from sqlalchemy import Column, String, ForeignKey
from sqlalchemy.orm import relationship

from app.core.db import Base
from app.models.types import IsoTimestamp, new_id
from app.utils.dates import utcnow

class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, default=new_id)
    username = Column(String, nullable=False, unique=True, index=True)
    email = Column(String, nullable=False, unique=True, index=True)
    password = Column(String, nullable=False)  # bcrypt hash
    full_name = Column(String, nullable=False)
    role_id = Column(String, ForeignKey("roles.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(IsoTimestamp, nullable=False, default=utcnow)

    # Relationships
    role = relationship("Role", back_populates="users")
    # Hosts with events cannot be deleted; the database refuses it
    events = relationship("Event", back_populates="host", passive_deletes="all")

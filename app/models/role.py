"""
Role model
"""

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from app.core.db import Base
from app.models.types import IsoTimestamp, new_id
from app.utils.dates import utcnow

ADMIN_ROLE = "Admin"
USER_ROLE = "User"

class Role(Base):
    __tablename__ = "roles"

    id = Column(String, primary_key=True, default=new_id)
    name = Column(String(50), nullable=False, unique=True, index=True)
    description = Column(String(255))
    created_at = Column(IsoTimestamp, nullable=False, default=utcnow)

    # Relationships
    users = relationship("User", back_populates="role")

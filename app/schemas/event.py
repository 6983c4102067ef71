"""
Event-related Pydantic schemas
"""

from datetime import datetime
from typing import Optional

from app.schemas.common import CamelModel

class EventCreate(CamelModel):
    """Schema for creating an event"""
    title: Optional[str] = None
    description: Optional[str] = None
    event_type: Optional[str] = None
    max_participants: int = 50
    difficulty: Optional[str] = None
    status: Optional[str] = None
    qr_code: Optional[str] = None
    event_date: Optional[datetime] = None
    event_time: Optional[str] = None
    location: Optional[str] = None
    sponsoring_organization: Optional[str] = None
    settings: Optional[str] = None

class EventUpdate(CamelModel):
    """Partial event update; omitted fields are left unchanged"""
    title: Optional[str] = None
    description: Optional[str] = None
    event_type: Optional[str] = None
    max_participants: Optional[int] = None
    difficulty: Optional[str] = None
    event_date: Optional[datetime] = None
    event_time: Optional[str] = None
    location: Optional[str] = None
    sponsoring_organization: Optional[str] = None
    logo_url: Optional[str] = None
    background_image_url: Optional[str] = None
    event_copy: Optional[str] = None
    welcome_message: Optional[str] = None
    thank_you_message: Optional[str] = None
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    font_family: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    website_url: Optional[str] = None
    social_links: Optional[str] = None
    prize_information: Optional[str] = None
    event_rules: Optional[str] = None
    special_instructions: Optional[str] = None
    accessibility_info: Optional[str] = None
    dietary_accommodations: Optional[str] = None
    dress_code: Optional[str] = None
    age_restrictions: Optional[str] = None
    technical_requirements: Optional[str] = None
    registration_deadline: Optional[datetime] = None
    cancellation_policy: Optional[str] = None
    refund_policy: Optional[str] = None
    sponsor_information: Optional[str] = None
    settings: Optional[str] = None
    allow_participants: Optional[bool] = None

class EventStatusUpdate(CamelModel):
    status: Optional[str] = None

class GenerateCopyRequest(CamelModel):
    type: Optional[str] = None

class TeamCreate(CamelModel):
    name: Optional[str] = None
    table_number: Optional[int] = None

class FunFactCreate(CamelModel):
    title: Optional[str] = None
    content: Optional[str] = None
    order_index: Optional[int] = None
    is_active: bool = True

class FunFactUpdate(CamelModel):
    title: Optional[str] = None
    content: Optional[str] = None
    order_index: Optional[int] = None
    is_active: Optional[bool] = None

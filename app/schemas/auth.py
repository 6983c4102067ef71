"""
Authentication schemas
"""

from typing import Optional

from app.schemas.common import CamelModel

class LoginRequest(CamelModel):
    """Login credentials"""
    username: Optional[str] = None
    password: Optional[str] = None

class ProfileUpdate(CamelModel):
    """Profile fields the signed-in user may change"""
    full_name: Optional[str] = None
    email: Optional[str] = None
    username: Optional[str] = None

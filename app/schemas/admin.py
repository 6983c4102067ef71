"""
Admin panel schemas (users and roles)
"""

from typing import Optional

from app.schemas.common import CamelModel

class CreateUserRequest(CamelModel):
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    full_name: Optional[str] = None
    role_id: Optional[str] = None

class UpdateUserRequest(CamelModel):
    username: Optional[str] = None
    email: Optional[str] = None
    full_name: Optional[str] = None
    role_id: Optional[str] = None

class ChangeRoleRequest(CamelModel):
    role_id: Optional[str] = None

class CreateRoleRequest(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None

class UpdateRoleRequest(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None

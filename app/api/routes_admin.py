"""
Admin API routes - the admin middleware guards this whole prefix
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.core.exceptions import InvalidOperationError
from app.schemas.admin import (
    ChangeRoleRequest,
    CreateRoleRequest,
    CreateUserRequest,
    UpdateRoleRequest,
    UpdateUserRequest,
)
from app.services.admin_service import AdminService
from app.services.projections import admin_role_dict, admin_user_dict
from app.utils.responses import bad_request_error, error_response, not_found_error

logger = logging.getLogger(__name__)

router = APIRouter()

def _internal_error():
    return error_response("Internal server error", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

# -------- Users --------

@router.get("/users")
async def list_users(db: Session = Depends(get_db)):
    return [admin_user_dict(u) for u in AdminService.get_all_users(db)]

@router.get("/users/{user_id}")
async def get_user(user_id: str, db: Session = Depends(get_db)):
    user = AdminService.get_user_by_id(db, user_id)
    if user is None:
        not_found_error("User")
    return admin_user_dict(user)

@router.post("/users", status_code=status.HTTP_201_CREATED)
async def create_user(body: CreateUserRequest, db: Session = Depends(get_db)):
    if not all(value and value.strip() for value in (body.username, body.email, body.password, body.full_name)):
        bad_request_error("Username, email, password, and full name are required")

    try:
        user = AdminService.create_user(
            db,
            username=body.username,
            email=body.email,
            password=body.password,
            full_name=body.full_name,
            role_id=body.role_id
        )
    except (SQLAlchemyError, InvalidOperationError) as e:
        logger.error(f"Error creating user {body.username}: {e}")
        return _internal_error()

    return admin_user_dict(AdminService.get_user_by_id(db, user.id))

@router.put("/users/{user_id}")
async def update_user(user_id: str, body: UpdateUserRequest, db: Session = Depends(get_db)):
    try:
        user = AdminService.update_user(
            db,
            user_id,
            username=body.username,
            email=body.email,
            full_name=body.full_name,
            role_id=body.role_id
        )
    except SQLAlchemyError as e:
        logger.error(f"Error updating user {user_id}: {e}")
        return _internal_error()

    if user is None:
        not_found_error("User")
    return admin_user_dict(user)

@router.delete("/users/{user_id}")
async def delete_user(user_id: str, db: Session = Depends(get_db)):
    try:
        deleted = AdminService.delete_user(db, user_id)
    except SQLAlchemyError as e:
        logger.error(f"Error deleting user {user_id}: {e}")
        return _internal_error()

    if not deleted:
        not_found_error("User")
    return {"message": "User deleted successfully"}

@router.put("/users/{user_id}/role")
async def change_user_role(user_id: str, body: ChangeRoleRequest, db: Session = Depends(get_db)):
    user = AdminService.change_user_role(db, user_id, body.role_id)
    if user is None:
        not_found_error("User or role")
    return admin_user_dict(user)

@router.put("/users/{user_id}/promote")
async def promote_user(user_id: str, db: Session = Depends(get_db)):
    user = AdminService.promote_to_admin(db, user_id)
    if user is None:
        not_found_error("User")
    return {**admin_user_dict(user), "message": "User promoted to admin successfully"}

# -------- Roles --------

@router.get("/roles")
async def list_roles(db: Session = Depends(get_db)):
    return [admin_role_dict(role, count) for role, count in AdminService.get_all_roles(db)]

@router.get("/roles/{role_id}")
async def get_role(role_id: str, db: Session = Depends(get_db)):
    role = AdminService.get_role_by_id(db, role_id)
    if role is None:
        not_found_error("Role")
    return admin_role_dict(role, AdminService.count_role_users(db, role.id))

@router.post("/roles", status_code=status.HTTP_201_CREATED)
async def create_role(body: CreateRoleRequest, db: Session = Depends(get_db)):
    if not body.name or not body.name.strip():
        bad_request_error("Role name is required")

    try:
        role = AdminService.create_role(db, body.name, body.description)
    except SQLAlchemyError as e:
        logger.error(f"Error creating role {body.name}: {e}")
        return _internal_error()

    return admin_role_dict(role, 0)

@router.put("/roles/{role_id}")
async def update_role(role_id: str, body: UpdateRoleRequest, db: Session = Depends(get_db)):
    try:
        role = AdminService.update_role(db, role_id, body.name, body.description)
    except SQLAlchemyError as e:
        logger.error(f"Error updating role {role_id}: {e}")
        return _internal_error()

    if role is None:
        not_found_error("Role")
    return admin_role_dict(role, AdminService.count_role_users(db, role.id))

@router.delete("/roles/{role_id}")
async def delete_role(role_id: str, db: Session = Depends(get_db)):
    try:
        deleted = AdminService.delete_role(db, role_id)
    except Exception as e:
        logger.error(f"Error deleting role {role_id}: {e}")
        return error_response(str(e), status_code=status.HTTP_400_BAD_REQUEST)

    if not deleted:
        not_found_error("Role")
    return {"message": "Role deleted successfully"}

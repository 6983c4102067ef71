"""
Authentication and host dashboard routes
"""

import logging

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.db import get_db
from app.models import User
from app.schemas.auth import LoginRequest, ProfileUpdate
from app.services.event_service import EventService
from app.services.projections import session_user_dict
from app.services.session_service import SessionStore
from app.utils.responses import bad_request_error, unauthorized_error
from app.utils.security import (
    get_current_user_id,
    get_session_store,
    get_session_token,
    verify_password,
)

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/auth/login")
async def login(
    credentials: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
    sessions: SessionStore = Depends(get_session_store)
):
    """Exchange credentials for a session cookie"""
    if not credentials.username or not credentials.password:
        bad_request_error("Username and password are required")

    user = db.query(User).filter(User.username == credentials.username).first()
    if user is None or not verify_password(credentials.password, user.password):
        logger.warning(f"Failed login for '{credentials.username}'")
        unauthorized_error("Invalid credentials")

    session_id = sessions.create(user.id)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=session_id,
        max_age=int(sessions.ttl.total_seconds()),
        httponly=True,
        samesite="strict",
        secure=settings.COOKIE_SECURE
    )

    logger.info(f"User {user.username} logged in")
    return {
        "user": session_user_dict(user),
        "sessionId": session_id,
        "message": "Login successful"
    }

@router.post("/auth/logout")
async def logout(
    request: Request,
    response: Response,
    sessions: SessionStore = Depends(get_session_store)
):
    sessions.delete(get_session_token(request))
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return {"message": "Logged out successfully"}

@router.get("/auth/me")
async def current_user(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        unauthorized_error("User not found")
    return {"user": session_user_dict(user)}

@router.put("/auth/profile")
async def update_profile(
    profile: ProfileUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        unauthorized_error("User not found")

    if profile.full_name:
        user.full_name = profile.full_name
    if profile.email:
        user.email = profile.email
    if profile.username:
        user.username = profile.username

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        bad_request_error("Username or email is already in use")
    db.refresh(user)

    logger.info(f"Profile updated for user {user_id}")
    return session_user_dict(user)

# -------- Dashboard --------

@router.get("/dashboard/stats")
async def dashboard_stats(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    return EventService.dashboard_stats(db, user_id)

@router.get("/dashboard/insights")
async def dashboard_insights(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    return EventService.dashboard_insights(db, user_id)

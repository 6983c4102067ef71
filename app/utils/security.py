"""
Security utilities: password hashing, session dependencies and rate limiting
"""

import time
from collections import defaultdict
from typing import Optional

import bcrypt
from fastapi import Depends, HTTPException, Request, status

from app.core.config import settings
from app.services.session_service import SessionStore

# Simple in-memory rate limiter
rate_limiter = defaultdict(list)

def hash_password(password: str) -> str:
    """Salted bcrypt hash of a plaintext password"""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")

def verify_password(password: str, password_hash: Optional[str]) -> bool:
    """Check a plaintext password against a stored bcrypt hash"""
    if not password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False

def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store

def get_session_token(request: Request) -> Optional[str]:
    return request.cookies.get(settings.SESSION_COOKIE_NAME)

def get_optional_user_id(
    request: Request,
    sessions: SessionStore = Depends(get_session_store)
) -> Optional[str]:
    """User id of a valid session, or None"""
    is_valid, user_id = sessions.validate(get_session_token(request))
    return user_id if is_valid else None

def get_current_user_id(user_id: Optional[str] = Depends(get_optional_user_id)) -> str:
    """Require a signed-in user"""
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized"
        )
    return user_id

def rate_limit_check(client_ip: str, limit: int = None) -> bool:
    """Simple rate limiting by IP address"""
    if limit is None:
        limit = settings.RATE_LIMIT_PER_MINUTE

    current_time = time.time()
    minute_ago = current_time - 60

    # Clean old requests
    rate_limiter[client_ip] = [
        req_time for req_time in rate_limiter[client_ip]
        if req_time > minute_ago
    ]

    if len(rate_limiter[client_ip]) >= limit:
        return False

    rate_limiter[client_ip].append(current_time)
    return True

def get_client_ip(request) -> str:
    """Extract client IP from request"""
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip

    return request.client.host if request.client else "unknown"

def require_event_host(event, user_id: Optional[str]):
    """404 for a missing event, 403 when the caller is not its host"""
    if event is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Event not found"
        )
    if event.host_id != user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have access to this event"
        )
    return event

def is_seed_event(event_id: str) -> bool:
    """Demo events readable without signing in"""
    return event_id.startswith("seed-event-")

"""
Admin gate for the administrative path prefixes
"""

import logging

from fastapi import Request, status
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.config import settings
from app.core.db import SessionLocal
from app.models import User
from app.models.role import ADMIN_ROLE
from app.utils.responses import error_response

logger = logging.getLogger(__name__)


def is_admin_path(path: str) -> bool:
    lowered = path.lower()
    return any(lowered.startswith(prefix.lower()) for prefix in settings.ADMIN_PATH_PREFIXES)


class AdminAuthorizationMiddleware(BaseHTTPMiddleware):
    """Requires a session whose user holds the Admin role"""

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if not is_admin_path(path):
            return await call_next(request)

        token = request.cookies.get(settings.SESSION_COOKIE_NAME)
        is_valid, user_id = request.app.state.session_store.validate(token)
        if not is_valid:
            logger.warning(f"Admin access denied for {path}: no valid session")
            return error_response("Authentication required", status_code=status.HTTP_401_UNAUTHORIZED)

        factory = getattr(request.app.state, "session_factory", SessionLocal)
        db = factory()
        try:
            user = db.query(User).filter(User.id == user_id).first()
            role_name = user.role.name if user is not None and user.role is not None else None
        finally:
            db.close()

        if role_name != ADMIN_ROLE:
            logger.warning(f"Admin access denied for {path}: user {user_id} has role {role_name}")
            return error_response("Admin access required", status_code=status.HTTP_403_FORBIDDEN)

        logger.info(f"Admin access granted for {path} to user {user_id}")
        return await call_next(request)

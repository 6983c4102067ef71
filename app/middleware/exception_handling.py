"""
Translate unhandled exceptions into JSON error bodies
"""

import logging
import traceback
import uuid

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.config import settings
from app.core.exceptions import InvalidOperationError
from app.schemas.common import ErrorResponse
from app.utils.dates import to_iso, utcnow

logger = logging.getLogger(__name__)


def describe_exception(exc: Exception, development: bool = False):
    """Map an exception to (status code, error title, client message)"""
    if isinstance(exc, InvalidOperationError):
        return status.HTTP_400_BAD_REQUEST, "Invalid operation", str(exc)
    if isinstance(exc, ValueError):
        return status.HTTP_400_BAD_REQUEST, "Invalid argument", str(exc)
    if isinstance(exc, PermissionError):
        return status.HTTP_401_UNAUTHORIZED, "Unauthorized", "Access denied"
    if isinstance(exc, LookupError):
        return status.HTTP_404_NOT_FOUND, "Not found", "The requested resource was not found"
    if isinstance(exc, TimeoutError):
        return status.HTTP_408_REQUEST_TIMEOUT, "Request timeout", "The request timed out"

    message = str(exc) if development else "An unexpected error occurred"
    return status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", message


class ExceptionHandlingMiddleware(BaseHTTPMiddleware):
    """Catches whatever the route handlers let through"""

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            request_id = getattr(request.state, "request_id", None) or uuid.uuid4().hex[:8]
            logger.error(
                f"Unhandled exception on {request.method} {request.url.path} [{request_id}]: {exc}",
                exc_info=True
            )

            development = settings.is_development
            status_code, error, message = describe_exception(exc, development)
            body = ErrorResponse(
                requestId=request_id,
                timestamp=to_iso(utcnow()),
                path=request.url.path,
                method=request.method,
                error=error,
                message=message,
                details="".join(traceback.format_exception(type(exc), exc, exc.__traceback__)) if development else None
            )
            return JSONResponse(
                content=jsonable_encoder(body, exclude_none=True),
                status_code=status_code
            )

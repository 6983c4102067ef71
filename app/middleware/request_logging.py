"""
Request/response logging with a per-request id
"""

import logging
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

SKIP_PATHS = ("/favicon.ico", "/health", "/api/health", "/docs")
REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if path.lower().startswith(SKIP_PATHS):
            return await call_next(request)

        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
        request.state.request_id = request_id

        logger.info(
            f"[{request_id}] --> {request.method} {path}"
            f"{'?' + request.url.query if request.url.query else ''} "
            f"content-type={request.headers.get('content-type', '-')} "
            f"user-agent={request.headers.get('user-agent', '-')}"
        )

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        response.headers[REQUEST_ID_HEADER] = request_id

        if response.status_code >= 500:
            level = logging.ERROR
        elif response.status_code >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO
        logger.log(level, f"[{request_id}] <-- {request.method} {path} {response.status_code} in {elapsed_ms:.1f}ms")

        return response

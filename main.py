"""
TriviaSpark - FastAPI Backend
Main application entry point
"""

import logging
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from app.core.config import settings
from app.core.db import Base, SessionLocal
from app.api import (
    routes_admin,
    routes_auth,
    routes_event_images,
    routes_events,
    routes_legacy,
    routes_participants,
    routes_public,
    routes_questions,
    routes_unsplash,
)
from app.middleware.admin_auth import AdminAuthorizationMiddleware
from app.middleware.exception_handling import ExceptionHandlingMiddleware
from app.middleware.request_logging import RequestLoggingMiddleware
from app.services.admin_service import AdminService
from app.services.openai_service import OpenAIService
from app.services.session_service import SessionStore
from app.services.unsplash_service import UnsplashService
from app.utils.responses import http_exception_handler, validation_exception_handler

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    session_factory = app.state.session_factory
    Base.metadata.create_all(bind=session_factory.kw["bind"])
    logger.info("Database tables created")

    db = session_factory()
    try:
        AdminService.ensure_default_roles(db)
    finally:
        db.close()

    yield
    logger.info("Application shutdown")

def create_app(
    session_factory=SessionLocal,
    session_store: SessionStore = None,
    openai_service: OpenAIService = None,
    unsplash_service: UnsplashService = None
) -> FastAPI:
    """Build the application; collaborators can be swapped for tests"""
    app = FastAPI(
        title="TriviaSpark API",
        description="Trivia event hosting: events, questions, teams, participants and scoring",
        version=settings.VERSION,
        lifespan=lifespan
    )

    app.state.session_factory = session_factory
    app.state.session_store = session_store or SessionStore(ttl=timedelta(hours=settings.SESSION_TTL_HOURS))
    app.state.openai_service = openai_service or OpenAIService()
    app.state.unsplash_service = unsplash_service or UnsplashService()

    # Added innermost first: admin gate, then exception translation, then logging
    app.add_middleware(AdminAuthorizationMiddleware)
    app.add_middleware(ExceptionHandlingMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Include routers
    app.include_router(routes_public.router, prefix="/api", tags=["public"])
    app.include_router(routes_auth.router, prefix="/api", tags=["auth"])
    app.include_router(routes_events.router, prefix="/api", tags=["events"])
    app.include_router(routes_questions.router, prefix="/api", tags=["questions"])
    app.include_router(routes_participants.router, prefix="/api", tags=["participants"])
    app.include_router(routes_admin.router, prefix="/api/admin", tags=["admin"])
    app.include_router(routes_legacy.v2_router, prefix="/api/v2", tags=["legacy"])
    app.include_router(routes_legacy.efcore_router, prefix="/api/efcore", tags=["legacy"])
    app.include_router(routes_event_images.router, prefix="/api/EventImages", tags=["event-images"])
    app.include_router(routes_unsplash.router, prefix="/api/Unsplash", tags=["unsplash"])

    return app

app = create_app()

# Note: Run this ASGI app directly with Uvicorn or Hypercorn. For Gunicorn,
# use `uvicorn.workers.UvicornWorker` instead of wrapping the app.

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="127.0.0.1",
        port=5000,
        reload=settings.is_development
    )

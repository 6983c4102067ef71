"""
Public API routes - no authentication required
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import func, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.db import get_db
from app.models import Event, User
from app.utils.dates import to_epoch_ms, utcnow

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/health")
async def health_check(db: Session = Depends(get_db)):
    """Health check including a database round trip"""
    try:
        connected = db.execute(text("SELECT 1")).scalar() == 1
        user_count = db.query(func.count(User.id)).scalar()
        event_count = db.query(func.count(Event.id)).scalar()
    except SQLAlchemyError as e:
        logger.error(f"Health check failed: {e}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "unhealthy",
                "error": str(e),
                "timestamp": to_epoch_ms(utcnow()),
                "version": settings.VERSION
            }
        )

    return {
        "status": "healthy",
        "database": {
            "connected": connected,
            "userCount": user_count,
            "eventCount": event_count
        },
        "timestamp": to_epoch_ms(utcnow()),
        "version": settings.VERSION
    }

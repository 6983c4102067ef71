"""
Compatibility read endpoints for event resources.

``/api/v2`` reads with hand-written SQL and ``/api/efcore`` with ORM queries;
both must return identical JSON for the same rows.
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.services.repositories import FunFactRepo, ParticipantRepo, QuestionRepo, TeamRepo
from app.utils.responses import error_response

logger = logging.getLogger(__name__)

v2_router = APIRouter()
efcore_router = APIRouter()

def _read(resource: str, reader, db: Session, event_id: str):
    try:
        return reader(db, event_id)
    except SQLAlchemyError as e:
        logger.error(f"Failed to read {resource} for event {event_id}: {e}")
        return error_response(
            f"Failed to retrieve {resource}",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=str(e)
        )

# -------- Raw SQL --------

@v2_router.get("/events/{event_id}/teams")
async def v2_teams(event_id: str, db: Session = Depends(get_db)):
    return _read("teams", TeamRepo.list_raw, db, event_id)

@v2_router.get("/events/{event_id}/questions")
async def v2_questions(event_id: str, db: Session = Depends(get_db)):
    return _read("questions", QuestionRepo.list_raw, db, event_id)

@v2_router.get("/events/{event_id}/participants")
async def v2_participants(event_id: str, db: Session = Depends(get_db)):
    return _read("participants", ParticipantRepo.list_raw, db, event_id)

@v2_router.get("/events/{event_id}/fun-facts")
async def v2_fun_facts(event_id: str, db: Session = Depends(get_db)):
    return _read("fun facts", FunFactRepo.list_raw, db, event_id)

# -------- ORM --------

@efcore_router.get("/events/{event_id}/teams")
async def efcore_teams(event_id: str, db: Session = Depends(get_db)):
    return _read("teams", TeamRepo.list_orm, db, event_id)

@efcore_router.get("/events/{event_id}/questions")
async def efcore_questions(event_id: str, db: Session = Depends(get_db)):
    return _read("questions", QuestionRepo.list_orm, db, event_id)

@efcore_router.get("/events/{event_id}/participants")
async def efcore_participants(event_id: str, db: Session = Depends(get_db)):
    return _read("participants", ParticipantRepo.list_orm, db, event_id)

@efcore_router.get("/events/{event_id}/fun-facts")
async def efcore_fun_facts(event_id: str, db: Session = Depends(get_db)):
    return _read("fun facts", FunFactRepo.list_orm, db, event_id)

"""
Question authoring, AI generation and answer submission routes
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import Response
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.schemas.question import (
    BulkInsertQuestionsRequest,
    GenerateQuestionsRequest,
    QuestionUpdate,
    ReorderQuestionsRequest,
    SubmitResponseRequest,
)
from app.services import projections
from app.services.event_service import EventService
from app.services.openai_service import OpenAIService
from app.services.participant_service import ParticipantService
from app.services.question_service import QuestionService
from app.services.response_service import ResponseService
from app.utils.responses import bad_request_error, not_found_error, unauthorized_error
from app.utils.security import (
    get_current_user_id,
    get_optional_user_id,
    is_seed_event,
    require_event_host,
)

logger = logging.getLogger(__name__)

router = APIRouter()

MAX_GENERATED_QUESTIONS = 20

def get_openai_service(request: Request) -> OpenAIService:
    return request.app.state.openai_service

def _owned_question(db: Session, question_id: str, user_id: str):
    question = QuestionService.get_question(db, question_id)
    if question is None:
        not_found_error("Question")
    require_event_host(EventService.get_event(db, question.event_id), user_id)
    return question

@router.get("/events/{event_id}/questions")
async def list_questions(
    event_id: str,
    db: Session = Depends(get_db),
    user_id: Optional[str] = Depends(get_optional_user_id)
):
    """Questions in play order with options decoded"""
    event = EventService.get_event(db, event_id)
    if is_seed_event(event_id):
        if event is None:
            not_found_error("Event")
    else:
        if user_id is None:
            unauthorized_error()
        require_event_host(event, user_id)

    return [projections.question_dict(q, parse=True) for q in QuestionService.list_for_event(db, event_id)]

@router.put("/events/{event_id}/questions/reorder")
async def reorder_questions(
    event_id: str,
    body: ReorderQuestionsRequest,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    require_event_host(EventService.get_event(db, event_id), user_id)

    if not QuestionService.reorder(db, event_id, body.question_order):
        bad_request_error("Failed to update question order")

    questions = QuestionService.list_for_event(db, event_id)
    return {
        "message": "Question order updated successfully",
        "questions": [projections.question_dict(q, parse=True) for q in questions]
    }

@router.put("/questions/{question_id}")
async def update_question(
    question_id: str,
    question_update: QuestionUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    question = _owned_question(db, question_id, user_id)
    return projections.question_dict(QuestionService.update_question(db, question, question_update))

@router.delete("/questions/{question_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_question(
    question_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    QuestionService.delete_question(db, _owned_question(db, question_id, user_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.post("/questions/generate")
async def generate_questions(
    body: GenerateQuestionsRequest,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    openai_service: OpenAIService = Depends(get_openai_service)
):
    """Draft questions with OpenAI; nothing is saved until the host bulk-inserts them"""
    if not body.event_id or not body.topic or not body.topic.strip():
        bad_request_error("Event ID and topic are required")
    if body.count < 1 or body.count > MAX_GENERATED_QUESTIONS:
        bad_request_error(f"Count must be between 1 and {MAX_GENERATED_QUESTIONS}")

    event = require_event_host(EventService.get_event(db, body.event_id), user_id)

    generated = await openai_service.generate_questions(
        topic=body.topic,
        difficulty=body.difficulty or event.difficulty or "mixed",
        count=body.count,
        event_context=event.description or ""
    )
    logger.info(f"Generated {len(generated)} draft questions for event {event.id}")

    questions = [
        {
            **item,
            "type": body.type,
            "category": body.category or item["category"] or body.topic,
            "aiGenerated": True,
        }
        for item in generated
    ]
    return {"questions": questions, "count": len(questions)}

@router.post("/questions/bulk", status_code=status.HTTP_201_CREATED)
async def bulk_insert_questions(
    body: BulkInsertQuestionsRequest,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    if not body.event_id or not body.questions:
        bad_request_error("Event ID and questions are required")
    require_event_host(EventService.get_event(db, body.event_id), user_id)

    created = QuestionService.bulk_insert(db, body.event_id, body.questions)
    return {
        "questions": [projections.question_dict(q, parse=True) for q in created],
        "count": len(created)
    }

@router.post("/responses", status_code=status.HTTP_201_CREATED)
async def submit_response(
    body: SubmitResponseRequest,
    db: Session = Depends(get_db)
):
    """Record a participant's answer and score it"""
    if not body.participant_id or not body.question_id or not body.answer or not body.answer.strip():
        bad_request_error("Missing required fields")

    question = QuestionService.get_question(db, body.question_id)
    if question is None:
        not_found_error("Question")
    if ParticipantService.get_participant(db, body.participant_id) is None:
        not_found_error("Participant")

    response = ResponseService.submit_response(
        db,
        question,
        participant_id=body.participant_id,
        answer=body.answer,
        response_time=body.response_time,
        time_remaining=body.time_remaining
    )
    return projections.response_dict(response)

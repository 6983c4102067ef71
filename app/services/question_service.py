"""
Question authoring: updates, ordering and bulk inserts
"""

import json
import logging
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models import Question
from app.schemas.question import BulkQuestion, QuestionUpdate
from app.utils.dates import utcnow

logger = logging.getLogger(__name__)

BULK_POINTS = 20
BULK_TIME_LIMIT = 30


class QuestionService:
    """Service for event questions"""

    @staticmethod
    def list_for_event(db: Session, event_id: str) -> List[Question]:
        return (
            db.query(Question)
            .filter(Question.event_id == event_id)
            .order_by(Question.order_index, Question.id)
            .all()
        )

    @staticmethod
    def get_question(db: Session, question_id: str) -> Optional[Question]:
        return db.query(Question).filter(Question.id == question_id).first()

    @staticmethod
    def update_question(db: Session, question: Question, data: QuestionUpdate) -> Question:
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        if "options" in changes:
            changes["options"] = json.dumps(changes["options"])

        for field, value in changes.items():
            setattr(question, field, value)

        db.commit()
        db.refresh(question)

        logger.info(f"Question {question.id} updated")
        return question

    @staticmethod
    def delete_question(db: Session, question: Question) -> None:
        db.delete(question)
        db.commit()
        logger.info(f"Question {question.id} deleted")

    @staticmethod
    def reorder(db: Session, event_id: str, question_order: List[str]) -> bool:
        """Set order_index to each id's 1-based position; all ids must belong to the event"""
        if not question_order:
            return False

        questions = {
            q.id: q for q in db.query(Question).filter(
                Question.event_id == event_id,
                Question.id.in_(question_order)
            )
        }
        if len(questions) != len(set(question_order)):
            logger.warning(f"Reorder for event {event_id} referenced unknown questions")
            return False

        for position, question_id in enumerate(question_order):
            questions[question_id].order_index = position + 1
        db.commit()

        logger.info(f"Reordered {len(questions)} questions for event {event_id}")
        return True

    @staticmethod
    def next_order_index(db: Session, event_id: str) -> int:
        current = db.query(func.max(Question.order_index)).filter(Question.event_id == event_id).scalar()
        return (current or 0) + 1

    @staticmethod
    def bulk_insert(db: Session, event_id: str, items: List[BulkQuestion]) -> List[Question]:
        order_index = QuestionService.next_order_index(db, event_id)
        created = []
        now = utcnow()

        for item in items:
            question = Question(
                event_id=event_id,
                type=item.type,
                question=item.question,
                options=json.dumps(item.options) if item.options is not None else "[]",
                correct_answer=item.correct_answer,
                explanation=item.explanation,
                points=BULK_POINTS,
                time_limit=BULK_TIME_LIMIT,
                difficulty=item.difficulty or "medium",
                category=item.category,
                order_index=order_index,
                ai_generated=bool(item.ai_generated),
                created_at=now
            )
            order_index += 1
            db.add(question)
            created.append(question)

        db.commit()
        for question in created:
            db.refresh(question)

        logger.info(f"Inserted {len(created)} questions into event {event_id}")
        return created

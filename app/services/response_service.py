"""
Answer submission and scoring
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from app.models import Question, Response
from app.services.participant_service import ParticipantService
from app.utils.dates import utcnow

logger = logging.getLogger(__name__)

# (minimum seconds remaining, points awarded), checked in order
SPEED_BONUS_TIERS = ((20, 20), (15, 15), (10, 10), (5, 5))
MIN_CORRECT_POINTS = 1
MAX_POINTS_PER_RESPONSE = SPEED_BONUS_TIERS[0][1]


def is_correct_answer(correct_answer: Optional[str], answer: Optional[str]) -> bool:
    """Trimmed, case-insensitive comparison"""
    return (correct_answer or "").strip().casefold() == (answer or "").strip().casefold()


def calculate_points(is_correct: bool, time_remaining: Optional[int]) -> int:
    """Correct answers earn more the faster they arrive; a timed-out answer earns nothing"""
    remaining = time_remaining or 0
    if not is_correct or remaining <= 0:
        return 0
    for threshold, points in SPEED_BONUS_TIERS:
        if remaining >= threshold:
            return points
    return MIN_CORRECT_POINTS


class ResponseService:

    @staticmethod
    def submit_response(
        db: Session,
        question: Question,
        participant_id: str,
        answer: str,
        response_time: Optional[int] = None,
        time_remaining: Optional[int] = None
    ) -> Response:
        correct = is_correct_answer(question.correct_answer, answer)
        response = Response(
            participant_id=participant_id,
            question_id=question.id,
            answer=answer,
            is_correct=correct,
            points=calculate_points(correct, time_remaining),
            response_time=response_time,
            time_remaining=time_remaining,
            submitted_at=utcnow()
        )
        db.add(response)
        ParticipantService.touch(db, participant_id)
        db.commit()
        db.refresh(response)

        logger.info(f"Response {response.id} from {participant_id} to {question.id}: "
                    f"correct={correct} points={response.points}")
        return response

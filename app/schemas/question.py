"""
Question and response schemas
"""

from typing import List, Optional

from app.schemas.common import CamelModel

class QuestionUpdate(CamelModel):
    """Partial question update"""
    question: Optional[str] = None
    type: Optional[str] = None
    options: Optional[List[str]] = None
    correct_answer: Optional[str] = None
    difficulty: Optional[str] = None
    category: Optional[str] = None
    explanation: Optional[str] = None
    time_limit: Optional[int] = None
    order_index: Optional[int] = None
    ai_generated: Optional[bool] = None

class ReorderQuestionsRequest(CamelModel):
    question_order: List[str] = []

class BulkQuestion(CamelModel):
    type: str = "multiple_choice"
    question: str
    options: Optional[List[str]] = None
    correct_answer: str
    explanation: Optional[str] = None
    difficulty: Optional[str] = None
    category: Optional[str] = None
    ai_generated: Optional[bool] = None

class BulkInsertQuestionsRequest(CamelModel):
    event_id: Optional[str] = None
    questions: List[BulkQuestion] = []

class GenerateQuestionsRequest(CamelModel):
    event_id: Optional[str] = None
    topic: Optional[str] = None
    type: str = "multiple_choice"
    count: int = 5
    difficulty: Optional[str] = None
    category: Optional[str] = None

class SubmitResponseRequest(CamelModel):
    participant_id: Optional[str] = None
    question_id: Optional[str] = None
    answer: Optional[str] = None
    response_time: Optional[int] = None
    time_remaining: Optional[int] = None

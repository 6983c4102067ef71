"""
Fun facts shown between questions
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from app.models import FunFact
from app.schemas.event import FunFactCreate, FunFactUpdate
from app.utils.dates import utcnow

logger = logging.getLogger(__name__)


class FunFactService:

    @staticmethod
    def list_for_event(db: Session, event_id: str) -> List[FunFact]:
        return (
            db.query(FunFact)
            .filter(FunFact.event_id == event_id)
            .order_by(FunFact.order_index, FunFact.id)
            .all()
        )

    @staticmethod
    def get_fun_fact(db: Session, fact_id: str) -> Optional[FunFact]:
        return db.query(FunFact).filter(FunFact.id == fact_id).first()

    @staticmethod
    def create_fun_fact(db: Session, event_id: str, data: FunFactCreate) -> FunFact:
        if not data.title or not data.content:
            raise ValueError("Title and content are required")

        fact = FunFact(
            event_id=event_id,
            title=data.title,
            content=data.content,
            order_index=data.order_index or 0,
            is_active=data.is_active,
            created_at=utcnow()
        )
        db.add(fact)
        db.commit()
        db.refresh(fact)

        logger.info(f"Fun fact {fact.id} added to event {event_id}")
        return fact

    @staticmethod
    def update_fun_fact(db: Session, fact: FunFact, data: FunFactUpdate) -> FunFact:
        for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(fact, field, value)
        db.commit()
        db.refresh(fact)
        return fact

    @staticmethod
    def delete_fun_fact(db: Session, fact: FunFact) -> None:
        db.delete(fact)
        db.commit()
        logger.info(f"Fun fact {fact.id} deleted")

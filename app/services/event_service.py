"""
Event lifecycle: creation, listing, updates, start/status transitions
"""

import logging
import uuid
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models import Event, Participant
from app.models.event import EVENT_STATUSES
from app.schemas.event import EventCreate, EventUpdate
from app.utils.dates import utcnow

logger = logging.getLogger(__name__)

HOME_LIMIT_DEFAULT = 8
HOME_LIMIT_MAX = 24
# Events that started a little while ago still show on the home page
HOME_GRACE_PERIOD = timedelta(hours=3)
# Columns that cannot be cleared by sending null in an update
REQUIRED_FIELDS = {"title", "event_type", "max_participants", "difficulty", "allow_participants", "settings"}


class EventService:
    """Service for hosted trivia events"""

    @staticmethod
    def get_event(db: Session, event_id: str) -> Optional[Event]:
        return db.query(Event).filter(Event.id == event_id).first()

    @staticmethod
    def get_event_by_qr_code(db: Session, qr_code: str) -> Optional[Event]:
        return db.query(Event).filter(Event.qr_code == qr_code).first()

    @staticmethod
    def list_for_host(db: Session, host_id: str) -> List[Event]:
        return (
            db.query(Event)
            .filter(Event.host_id == host_id)
            .order_by(Event.created_at.desc())
            .all()
        )

    @staticmethod
    def list_active(db: Session, host_id: str) -> List[Event]:
        return (
            db.query(Event)
            .filter(Event.host_id == host_id, Event.status == "active")
            .order_by(func.coalesce(Event.started_at, Event.created_at).desc())
            .all()
        )

    @staticmethod
    def list_upcoming(db: Session, host_id: str, now: Optional[datetime] = None) -> List[Event]:
        now = now or utcnow()
        return (
            db.query(Event)
            .filter(
                Event.host_id == host_id,
                Event.status.notin_(["completed", "cancelled"]),
                (Event.event_date.is_(None)) | (Event.event_date >= now)
            )
            .order_by(Event.event_date.is_(None), Event.event_date)
            .all()
        )

    @staticmethod
    def list_public_upcoming(db: Session, limit: Optional[int] = None, now: Optional[datetime] = None) -> List[Event]:
        """Draft and active events for the anonymous home page"""
        limit = max(1, min(limit or HOME_LIMIT_DEFAULT, HOME_LIMIT_MAX))
        now = now or utcnow()
        return (
            db.query(Event)
            .filter(
                Event.status.in_(["active", "draft"]),
                (Event.event_date.is_(None)) | (Event.event_date >= now - HOME_GRACE_PERIOD)
            )
            .order_by(Event.event_date.is_(None), Event.event_date, Event.created_at.desc())
            .limit(limit)
            .all()
        )

    @staticmethod
    def create_event(db: Session, host_id: str, data: EventCreate) -> Event:
        if not data.title or not data.title.strip():
            raise ValueError("Event title is required")
        if data.status and data.status not in EVENT_STATUSES:
            raise ValueError(f"Invalid status '{data.status}'. Expected one of: {', '.join(EVENT_STATUSES)}")

        event = Event(
            title=data.title,
            description=data.description,
            host_id=host_id,
            event_type=data.event_type or "general",
            max_participants=data.max_participants,
            difficulty=data.difficulty or "medium",
            status=data.status or "draft",
            qr_code=data.qr_code or uuid.uuid4().hex[:8],
            event_date=data.event_date,
            event_time=data.event_time,
            location=data.location,
            sponsoring_organization=data.sponsoring_organization,
            settings=data.settings or "{}",
            created_at=utcnow()
        )
        db.add(event)
        db.commit()
        db.refresh(event)

        logger.info(f"Event {event.id} created by host {host_id}")
        return event

    @staticmethod
    def update_event(db: Session, event: Event, data: EventUpdate) -> Event:
        """Apply every field present in the update body"""
        changes = {
            field: value
            for field, value in data.model_dump(exclude_unset=True).items()
            if value is not None or field not in REQUIRED_FIELDS
        }
        if "title" in changes and not (changes["title"] or "").strip():
            raise ValueError("Event title cannot be empty")

        for field, value in changes.items():
            setattr(event, field, value)

        db.commit()
        db.refresh(event)

        logger.info(f"Event {event.id} updated ({', '.join(sorted(changes)) or 'no changes'})")
        return event

    @staticmethod
    def delete_event(db: Session, event: Event) -> None:
        """Delete the event; teams, participants, questions and fun facts go with it"""
        event_id = event.id
        db.delete(event)
        db.commit()

        logger.info(f"Event {event_id} deleted")

    @staticmethod
    def start_event(db: Session, event: Event) -> Event:
        """Mark the event active and freeze team membership"""
        event.status = "active"
        event.started_at = utcnow()
        db.query(Participant).filter(Participant.event_id == event.id).update(
            {Participant.can_switch_team: False}, synchronize_session="fetch"
        )
        db.commit()
        db.refresh(event)

        logger.info(f"Event {event.id} started; team switching locked")
        return event

    @staticmethod
    def update_status(db: Session, event: Event, status: str) -> Event:
        if status not in EVENT_STATUSES:
            raise ValueError(f"Invalid status '{status}'. Expected one of: {', '.join(EVENT_STATUSES)}")

        event.status = status
        if status == "completed":
            event.completed_at = utcnow()
        db.commit()
        db.refresh(event)

        logger.info(f"Event {event.id} status changed to {status}")
        return event

    @staticmethod
    def generate_copy(event: Event, copy_type: Optional[str]) -> str:
        templates = {
            "promotional": f"Join us for {event.title}! A fun {event.event_type} trivia night.",
            "welcome": f"Welcome to {event.title}!",
            "thankyou": f"Thanks for playing {event.title}!",
            "rules": "Answer quickly for more points!",
        }
        return templates.get((copy_type or "").lower(), event.description or "A great trivia event")

    @staticmethod
    def dashboard_stats(db: Session, host_id: str) -> Dict[str, int]:
        total_events = db.query(func.count(Event.id)).filter(Event.host_id == host_id).scalar() or 0
        active_events = db.query(func.count(Event.id)).filter(
            Event.host_id == host_id, Event.status == "active"
        ).scalar() or 0
        total_participants = (
            db.query(func.count(Participant.id))
            .join(Event, Participant.event_id == Event.id)
            .filter(Event.host_id == host_id)
            .scalar()
        ) or 0
        return {
            "totalEvents": total_events,
            "activeEvents": active_events,
            "totalParticipants": total_participants,
        }

    @staticmethod
    def dashboard_insights(db: Session, host_id: str) -> Dict[str, object]:
        type_rows = (
            db.query(Event.event_type, func.count(Event.id))
            .filter(Event.host_id == host_id)
            .group_by(Event.event_type)
            .order_by(func.count(Event.id).desc(), Event.event_type)
            .all()
        )
        per_event = (
            db.query(func.count(Participant.id))
            .join(Event, Participant.event_id == Event.id)
            .filter(Event.host_id == host_id)
            .group_by(Participant.event_id)
            .all()
        )
        event_count = sum(count for _, count in type_rows)
        participant_total = sum(row[0] for row in per_event)
        return {
            "popularEventTypes": [event_type for event_type, _ in type_rows],
            "averageParticipants": round(participant_total / event_count, 1) if event_count else 0,
        }

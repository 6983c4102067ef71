"""
Participant joining, team switching and housekeeping
"""

import logging
import uuid
from datetime import datetime, timedelta
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from app.models import Event, Participant, Team
from app.services.team_service import TeamService
from app.utils.dates import utcnow

logger = logging.getLogger(__name__)

DEFAULT_INACTIVE_MINUTES = 30


class TeamNotFoundError(LookupError):
    pass


class JoinRejectedError(ValueError):
    pass


class ParticipantService:
    """Service for anonymous event participants"""

    @staticmethod
    def list_for_event(db: Session, event_id: str) -> List[Participant]:
        return (
            db.query(Participant)
            .outerjoin(Team, Participant.team_id == Team.id)
            .filter(Participant.event_id == event_id)
            .order_by(Team.name, Participant.name)
            .all()
        )

    @staticmethod
    def get_participant(db: Session, participant_id: str) -> Optional[Participant]:
        return db.query(Participant).filter(Participant.id == participant_id).first()

    @staticmethod
    def get_by_token(db: Session, token: Optional[str]) -> Optional[Participant]:
        if not token:
            return None
        return db.query(Participant).filter(Participant.participant_token == token).first()

    @staticmethod
    def join_event(
        db: Session,
        event: Event,
        name: str,
        team_action: Optional[str] = None,
        team_identifier: Optional[str] = None
    ) -> Tuple[Participant, Optional[Team]]:
        """Register a participant, optionally joining or creating a team.

        Raises ``JoinRejectedError`` for requests the event cannot accept and
        ``TeamNotFoundError`` when the named team does not exist.
        """
        if not name or not name.strip():
            raise JoinRejectedError("Name is required")
        if event.status == "cancelled":
            raise JoinRejectedError("Event has been cancelled")

        team = None
        identifier = (team_identifier or "").strip()

        if team_action == "join" and identifier:
            team = TeamService.find_by_identifier(TeamService.list_for_event(db, event.id), identifier)
            if team is None:
                raise TeamNotFoundError("Team not found")
            if TeamService.is_full(team):
                raise JoinRejectedError("Team is full")

        elif team_action == "create" and identifier:
            existing = TeamService.find_by_identifier(TeamService.list_for_event(db, event.id), identifier)
            if existing is not None:
                raise JoinRejectedError("Team name or table number already exists")

            if identifier.isdigit():
                table_number = int(identifier)
                team = TeamService.create_team(db, event.id, f"Table {table_number}", table_number, commit=False)
            else:
                team = TeamService.create_team(db, event.id, identifier, commit=False)

        now = utcnow()
        participant = Participant(
            event_id=event.id,
            team_id=team.id if team else None,
            name=name.strip(),
            participant_token=uuid.uuid4().hex,
            joined_at=now,
            last_active_at=now,
            is_active=True,
            can_switch_team=event.status != "active"
        )
        db.add(participant)
        db.commit()
        db.refresh(participant)

        logger.info(f"Participant {participant.id} joined event {event.id}"
                    + (f" on team {team.name}" if team else ""))
        return participant, team

    @staticmethod
    def switch_team(db: Session, participant: Participant, team_id: Optional[str]) -> Participant:
        """Move a participant to another team of the same event, or to none"""
        if not participant.can_switch_team:
            raise JoinRejectedError("Team switching is locked")

        if team_id:
            team = TeamService.get_team(db, team_id)
            if team is None or team.event_id != participant.event_id:
                raise TeamNotFoundError("Team not found")
            if team.id != participant.team_id and TeamService.is_full(team):
                raise JoinRejectedError("Team is full")

        participant.team_id = team_id or None
        participant.last_active_at = utcnow()
        db.commit()
        db.refresh(participant)

        logger.info(f"Participant {participant.id} switched to team {team_id}")
        return participant

    @staticmethod
    def touch(db: Session, participant_id: str) -> None:
        participant = ParticipantService.get_participant(db, participant_id)
        if participant is not None:
            participant.last_active_at = utcnow()

    @staticmethod
    def remove_inactive(
        db: Session,
        event_id: str,
        threshold_minutes: int = DEFAULT_INACTIVE_MINUTES,
        now: Optional[datetime] = None
    ) -> Tuple[int, int]:
        """Delete inactive or idle participants; returns (removed, remaining)"""
        now = now or utcnow()
        cutoff = now - timedelta(minutes=threshold_minutes)

        participants = ParticipantService.list_for_event(db, event_id)
        stale = [p for p in participants if not p.is_active or p.last_active_at < cutoff]
        for participant in stale:
            db.delete(participant)
        db.commit()

        logger.info(f"Removed {len(stale)} inactive participants from event {event_id}")
        return len(stale), len(participants) - len(stale)

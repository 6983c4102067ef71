"""
Team management within an event
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session, selectinload

from app.models import Team
from app.models.team import DEFAULT_MAX_MEMBERS
from app.utils.dates import utcnow

logger = logging.getLogger(__name__)


class TeamService:
    """Service for event teams"""

    @staticmethod
    def list_for_event(db: Session, event_id: str) -> List[Team]:
        """Teams ordered by table number (unnumbered last), then name"""
        return (
            db.query(Team)
            .options(selectinload(Team.participants))
            .filter(Team.event_id == event_id)
            .order_by(Team.table_number.is_(None), Team.table_number, Team.name)
            .all()
        )

    @staticmethod
    def get_team(db: Session, team_id: str) -> Optional[Team]:
        return db.query(Team).filter(Team.id == team_id).first()

    @staticmethod
    def find_by_identifier(teams: List[Team], identifier: str) -> Optional[Team]:
        """Match a team by exact name or by table number"""
        for team in teams:
            if team.name == identifier:
                return team
            if team.table_number is not None and str(team.table_number) == identifier:
                return team
        return None

    @staticmethod
    def is_full(team: Team) -> bool:
        capacity = team.max_members or DEFAULT_MAX_MEMBERS
        return len(team.participants) >= capacity

    @staticmethod
    def create_team(
        db: Session,
        event_id: str,
        name: str,
        table_number: Optional[int] = None,
        commit: bool = True
    ) -> Team:
        if not name or not name.strip():
            raise ValueError("Team name is required")

        team = Team(
            event_id=event_id,
            name=name,
            table_number=table_number,
            max_members=DEFAULT_MAX_MEMBERS,
            created_at=utcnow()
        )
        db.add(team)
        if commit:
            db.commit()
            db.refresh(team)
        else:
            db.flush()

        logger.info(f"Team '{name}' created for event {event_id}")
        return team

"""
Participant join and team switching schemas
"""

from typing import Optional

from app.schemas.common import CamelModel

class JoinEventRequest(CamelModel):
    """Anonymous join; team_action is "join", "create" or omitted"""
    name: Optional[str] = None
    team_action: Optional[str] = None
    team_identifier: Optional[str] = None

class SwitchTeamRequest(CamelModel):
    team_id: Optional[str] = None

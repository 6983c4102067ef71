"""
Database models package
"""

from .role import Role
from .user import User
from .event import Event
from .question import Question
from .team import Team
from .participant import Participant
from .response import Response
from .fun_fact import FunFact
from .event_image import EventImage

__all__ = [
    "Role",
    "User",
    "Event",
    "Question",
    "Team",
    "Participant",
    "Response",
    "FunFact",
    "EventImage",
]

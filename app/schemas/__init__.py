"""
Pydantic schemas package
"""

from .common import *
from .auth import *
from .admin import *
from .event import *
from .question import *
from .participant import *
from .image import *

__all__ = [
    "CamelModel",
    "ErrorResponse",
    "LoginRequest",
    "ProfileUpdate",
    "CreateUserRequest",
    "UpdateUserRequest",
    "ChangeRoleRequest",
    "CreateRoleRequest",
    "UpdateRoleRequest",
    "EventCreate",
    "EventUpdate",
    "EventStatusUpdate",
    "GenerateCopyRequest",
    "TeamCreate",
    "FunFactCreate",
    "FunFactUpdate",
    "QuestionUpdate",
    "ReorderQuestionsRequest",
    "BulkQuestion",
    "BulkInsertQuestionsRequest",
    "GenerateQuestionsRequest",
    "SubmitResponseRequest",
    "JoinEventRequest",
    "SwitchTeamRequest",
    "ImageSelection",
    "SaveEventImageRequest",
    "ReplaceEventImageRequest",
    "TrackDownloadRequest",
]

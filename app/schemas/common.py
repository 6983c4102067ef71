"""
Common Pydantic schemas
"""

from typing import Any, Optional
from pydantic import BaseModel
from pydantic.alias_generators import to_camel

class CamelModel(BaseModel):
    """Request body accepting camelCase keys as sent by the web client"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True

class ErrorResponse(BaseModel):
    """Body produced by the exception handling middleware"""
    requestId: str
    timestamp: str
    path: str
    method: str
    error: str
    message: str
    details: Optional[Any] = None

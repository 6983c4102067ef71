"""
Event image and Unsplash schemas
"""

from typing import Optional
from pydantic import BaseModel

from app.schemas.common import CamelModel

class ImageSelection(BaseModel):
    """An Unsplash photo reduced to what a question needs"""
    id: str
    description: str
    url: str
    thumbnailUrl: str
    attributionText: str
    attributionUrl: str
    photographerName: str
    photographerUrl: str
    downloadTrackingUrl: str
    width: int
    height: int
    color: str

class SaveEventImageRequest(CamelModel):
    question_id: Optional[str] = None
    unsplash_image_id: Optional[str] = None
    size_variant: str = "regular"
    usage_context: Optional[str] = None
    selected_by_user_id: Optional[str] = None
    search_context: Optional[str] = None

class ReplaceEventImageRequest(CamelModel):
    new_unsplash_image_id: Optional[str] = None
    size_variant: str = "regular"
    selected_by_user_id: Optional[str] = None

class TrackDownloadRequest(CamelModel):
    download_url: Optional[str] = None

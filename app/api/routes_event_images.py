"""
Event image routes: pick, store and track Unsplash photos per question
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlalchemy.orm import Session

from app.api.routes_unsplash import get_unsplash_service
from app.core.db import get_db
from app.schemas.image import ReplaceEventImageRequest, SaveEventImageRequest
from app.services.event_image_service import EventImageService
from app.services.projections import event_image_dict
from app.services.unsplash_service import VALID_CATEGORIES, UnsplashService, is_valid_category
from app.utils.responses import bad_request_error, error_response

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/search")
async def search_images_for_question(
    question_id: Optional[str] = Query(None, alias="questionId"),
    query: Optional[str] = Query(None),
    size: str = Query("regular"),
    context: Optional[str] = Query(None),
    user_id: Optional[str] = Query(None, alias="userId"),
    db: Session = Depends(get_db),
    unsplash: UnsplashService = Depends(get_unsplash_service)
):
    """Search results together with the question's current image"""
    if not question_id or not question_id.strip():
        bad_request_error("Question ID is required")
    if not query or not query.strip():
        bad_request_error("Search query is required")

    logger.info(f"Image search for question {question_id} (context={context}, user={user_id})")
    return await EventImageService.search(db, unsplash, question_id, query, size)

@router.get("/search/category")
async def search_images_by_category(
    question_id: Optional[str] = Query(None, alias="questionId"),
    category: Optional[str] = Query(None),
    size: str = Query("regular"),
    db: Session = Depends(get_db),
    unsplash: UnsplashService = Depends(get_unsplash_service)
):
    if not question_id or not question_id.strip():
        bad_request_error("Question ID is required")
    if not category or not category.strip():
        bad_request_error("Category is required")
    if not is_valid_category(category):
        return error_response(
            "Invalid category",
            status_code=status.HTTP_400_BAD_REQUEST,
            validCategories=VALID_CATEGORIES
        )

    return await EventImageService.search_by_category(db, unsplash, question_id, category, size)

@router.post("", status_code=status.HTTP_201_CREATED)
async def save_image_for_question(
    body: SaveEventImageRequest,
    db: Session = Depends(get_db),
    unsplash: UnsplashService = Depends(get_unsplash_service)
):
    if not body.question_id or not body.question_id.strip():
        bad_request_error("Question ID is required")
    if not body.unsplash_image_id or not body.unsplash_image_id.strip():
        bad_request_error("Unsplash Image ID is required")

    image = await EventImageService.save(db, unsplash, body)
    if image is None:
        bad_request_error("Failed to save image. Question or image may not exist.")
    return event_image_dict(image)

@router.get("/question/{question_id}")
async def get_image_for_question(question_id: str, db: Session = Depends(get_db)):
    image = EventImageService.get_image(db, question_id)
    if image is None:
        return error_response("No image found for this question", status_code=status.HTTP_404_NOT_FOUND)
    return event_image_dict(image)

@router.get("/event/{event_id}")
async def get_images_for_event(event_id: str, db: Session = Depends(get_db)):
    return [event_image_dict(image) for image in EventImageService.images_for_event(db, event_id)]

@router.put("/question/{question_id}/replace")
async def replace_question_image(
    question_id: str,
    body: ReplaceEventImageRequest,
    db: Session = Depends(get_db),
    unsplash: UnsplashService = Depends(get_unsplash_service)
):
    if not body.new_unsplash_image_id or not body.new_unsplash_image_id.strip():
        bad_request_error("New Unsplash Image ID is required")

    image = await EventImageService.replace(
        db,
        unsplash,
        question_id,
        body.new_unsplash_image_id,
        body.size_variant,
        body.selected_by_user_id
    )
    if image is None:
        bad_request_error("Failed to replace image. Question or new image may not exist.")
    return event_image_dict(image)

@router.delete("/question/{question_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_image_for_question(question_id: str, db: Session = Depends(get_db)):
    if not EventImageService.remove(db, question_id):
        return error_response("No image found for this question", status_code=status.HTTP_404_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.post("/question/{question_id}/track-usage")
async def track_image_usage(
    question_id: str,
    db: Session = Depends(get_db),
    unsplash: UnsplashService = Depends(get_unsplash_service)
):
    if not await EventImageService.track_usage(db, unsplash, question_id):
        return error_response(
            "No image found for this question or tracking failed",
            status_code=status.HTTP_404_NOT_FOUND
        )
    return {"message": "Image usage tracked successfully"}

@router.post("/admin/cleanup-expired")
async def cleanup_expired_images(db: Session = Depends(get_db)):
    cleaned = EventImageService.cleanup_expired(db)
    return {
        "cleanedCount": cleaned,
        "message": f"Successfully cleaned up {cleaned} expired image cache entries"
    }

"""
Unsplash proxy routes used by the question image picker
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status

from app.schemas.image import TrackDownloadRequest
from app.services.unsplash_service import (
    CATEGORY_INFO,
    VALID_CATEGORIES,
    UnsplashService,
    is_valid_category,
    is_tracking_url,
    is_valid_image_id,
    to_image_selection,
)
from app.utils.responses import bad_request_error, error_response, not_found_error

logger = logging.getLogger(__name__)

router = APIRouter()

def get_unsplash_service(request: Request) -> UnsplashService:
    return request.app.state.unsplash_service

def _checked_image_id(image_id: str) -> str:
    if not is_valid_image_id(image_id):
        bad_request_error("Invalid image ID format")
    return image_id

@router.get("/search")
async def search_images(
    query: Optional[str] = Query(None),
    page: int = Query(1),
    per_page: int = Query(10, alias="perPage"),
    order_by: str = Query("relevant", alias="orderBy"),
    color: Optional[str] = Query(None),
    orientation: Optional[str] = Query(None),
    unsplash: UnsplashService = Depends(get_unsplash_service)
):
    if not query or not query.strip():
        bad_request_error("Search query is required")

    result = await unsplash.search_images(query, page, per_page, order_by, color, orientation)
    if result is None:
        return error_response(
            "Failed to search images. Please try again later.",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )
    return result

@router.get("/images/{image_id}")
async def get_image(
    image_id: str,
    unsplash: UnsplashService = Depends(get_unsplash_service)
):
    image = await unsplash.get_image(_checked_image_id(image_id))
    if image is None:
        not_found_error("Image")
    return image

@router.get("/images/{image_id}/selection")
async def get_image_selection(
    image_id: str,
    size: str = Query("regular"),
    unsplash: UnsplashService = Depends(get_unsplash_service)
):
    """The photo reduced to what a question stores, for the chosen size"""
    image = await unsplash.get_image(_checked_image_id(image_id))
    if image is None:
        not_found_error("Image")
    return to_image_selection(image, size)

@router.get("/categories")
async def list_categories():
    return [
        {"name": name, "displayName": display_name, "description": description}
        for name, display_name, description in CATEGORY_INFO
    ]

@router.get("/categories/{category}")
async def search_by_category(
    category: str,
    page: int = Query(1),
    per_page: int = Query(10, alias="perPage"),
    unsplash: UnsplashService = Depends(get_unsplash_service)
):
    if not is_valid_category(category):
        return error_response(
            "Invalid category",
            status_code=status.HTTP_400_BAD_REQUEST,
            validCategories=VALID_CATEGORIES
        )

    result = await unsplash.search_by_category(category, page, per_page)
    if result is None:
        return error_response(
            "Failed to search images by category. Please try again later.",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )
    return result

@router.get("/featured")
async def featured_images(
    page: int = Query(1),
    per_page: int = Query(10, alias="perPage"),
    unsplash: UnsplashService = Depends(get_unsplash_service)
):
    return await unsplash.get_featured_images(page, per_page)

@router.post("/track-download")
async def track_download(
    body: TrackDownloadRequest,
    unsplash: UnsplashService = Depends(get_unsplash_service)
):
    if not body.download_url or not body.download_url.strip():
        bad_request_error("Download URL is required")
    if not is_tracking_url(body.download_url):
        bad_request_error("Download URL must be an Unsplash API URL")

    if not await unsplash.track_download(body.download_url):
        return error_response("Failed to track download", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
    return {"success": True, "message": "Download tracked successfully"}

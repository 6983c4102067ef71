"""
Question images: Unsplash selections cached per question
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.core.config import settings
from app.models import EventImage, Question
from app.schemas.image import SaveEventImageRequest
from app.services.projections import event_image_dict
from app.services.unsplash_service import UnsplashService, to_image_selection
from app.utils.dates import utcnow

logger = logging.getLogger(__name__)

SEARCH_PAGE_SIZE = 20


class EventImageService:
    """Service for images attached to event questions"""

    @staticmethod
    def _find(db: Session, question_id: str) -> Optional[EventImage]:
        return db.query(EventImage).filter(EventImage.question_id == question_id).first()

    @staticmethod
    def _search_result(
        db: Session,
        question_id: str,
        search_query: str,
        results: Optional[Dict[str, Any]],
        size_variant: str
    ) -> Dict[str, Any]:
        current = EventImageService.get_image(db, question_id)
        photos = (results or {}).get("results") or []
        return {
            "searchResults": results,
            "currentImage": event_image_dict(current) if current else None,
            "imageSelections": [to_image_selection(p, size_variant).model_dump() for p in photos],
            "searchQuery": search_query,
            "questionId": question_id,
        }

    @staticmethod
    async def search(
        db: Session,
        unsplash: UnsplashService,
        question_id: str,
        query: str,
        size_variant: str = "regular"
    ) -> Dict[str, Any]:
        """Search Unsplash and report the question's current image alongside"""
        logger.info(f"Searching images for question {question_id} with query '{query}'")
        results = await unsplash.search_images(query, page=1, per_page=SEARCH_PAGE_SIZE)
        return EventImageService._search_result(db, question_id, query, results, size_variant)

    @staticmethod
    async def search_by_category(
        db: Session,
        unsplash: UnsplashService,
        question_id: str,
        category: str,
        size_variant: str = "regular"
    ) -> Dict[str, Any]:
        logger.info(f"Searching images in category {category} for question {question_id}")
        results = await unsplash.search_by_category(category, page=1, per_page=SEARCH_PAGE_SIZE)
        return EventImageService._search_result(db, question_id, category, results, size_variant)

    @staticmethod
    async def save(db: Session, unsplash: UnsplashService, data: SaveEventImageRequest) -> Optional[EventImage]:
        """Fetch the photo and store it for the question, replacing any previous image.

        Returns None when the question or the Unsplash photo does not exist.
        """
        if db.query(Question.id).filter(Question.id == data.question_id).first() is None:
            logger.warning(f"Question {data.question_id} not found")
            return None

        photo = await unsplash.get_image(data.unsplash_image_id)
        if photo is None:
            logger.warning(f"Unsplash image {data.unsplash_image_id} not found")
            return None

        existing = EventImageService._find(db, data.question_id)
        if existing is not None:
            db.delete(existing)
            db.flush()

        size_variant = data.size_variant or "regular"
        selection = to_image_selection(photo, size_variant)
        now = utcnow()
        image = EventImage(
            question_id=data.question_id,
            unsplash_image_id=data.unsplash_image_id,
            image_url=selection.url,
            thumbnail_url=selection.thumbnailUrl,
            description=selection.description,
            attribution_text=selection.attributionText,
            attribution_url=selection.attributionUrl,
            download_tracking_url=selection.downloadTrackingUrl,
            width=selection.width,
            height=selection.height,
            color=selection.color,
            size_variant=size_variant,
            usage_context=data.usage_context,
            selected_by_user_id=data.selected_by_user_id,
            search_context=data.search_context,
            download_tracked=False,
            created_at=now,
            last_used_at=now,
            expires_at=now + timedelta(days=settings.IMAGE_CACHE_DAYS)
        )
        db.add(image)
        db.commit()
        db.refresh(image)

        logger.info(f"Saved image {data.unsplash_image_id} for question {data.question_id} as {image.id}")
        return image

    @staticmethod
    async def replace(
        db: Session,
        unsplash: UnsplashService,
        question_id: str,
        new_unsplash_image_id: str,
        size_variant: str = "regular",
        selected_by_user_id: Optional[str] = None
    ) -> Optional[EventImage]:
        logger.info(f"Replacing image for question {question_id} with {new_unsplash_image_id}")
        return await EventImageService.save(db, unsplash, SaveEventImageRequest(
            question_id=question_id,
            unsplash_image_id=new_unsplash_image_id,
            size_variant=size_variant or "regular",
            selected_by_user_id=selected_by_user_id,
            usage_context="replacement",
            search_context="manual_replacement"
        ))

    @staticmethod
    def get_image(db: Session, question_id: str) -> Optional[EventImage]:
        """Current image for a question; reading it counts as a use"""
        image = EventImageService._find(db, question_id)
        if image is not None:
            image.last_used_at = utcnow()
            db.commit()
            db.refresh(image)
        return image

    @staticmethod
    def images_for_event(db: Session, event_id: str) -> List[EventImage]:
        return (
            db.query(EventImage)
            .join(Question, EventImage.question_id == Question.id)
            .filter(Question.event_id == event_id)
            .order_by(Question.order_index)
            .all()
        )

    @staticmethod
    def remove(db: Session, question_id: str) -> bool:
        image = EventImageService._find(db, question_id)
        if image is None:
            return False

        db.delete(image)
        db.commit()

        logger.info(f"Removed image {image.id} for question {question_id}")
        return True

    @staticmethod
    async def track_usage(db: Session, unsplash: UnsplashService, question_id: str) -> bool:
        """Report the download to Unsplash once per stored image"""
        image = EventImageService._find(db, question_id)
        if image is None:
            logger.warning(f"No image found for question {question_id} to track usage")
            return False
        if image.download_tracked:
            return True

        tracked = await unsplash.track_download(image.download_tracking_url)
        if tracked:
            image.download_tracked = True
            image.last_used_at = utcnow()
            db.commit()
            logger.info(f"Tracked image usage for question {question_id}")
        else:
            logger.warning(f"Failed to track image usage for question {question_id}")
        return tracked

    @staticmethod
    def cleanup_expired(db: Session, now: Optional[datetime] = None) -> int:
        now = now or utcnow()
        expired = (
            db.query(EventImage)
            .filter(EventImage.expires_at.isnot(None), EventImage.expires_at < now)
            .all()
        )
        for image in expired:
            db.delete(image)
        if expired:
            db.commit()
            logger.info(f"Cleaned up {len(expired)} expired image cache entries")
        return len(expired)

"""
Tests for Unsplash image selection and per-question image storage
"""

import asyncio
from datetime import timedelta

import pytest

from app.core.config import settings
from app.models import EventImage, Question
from app.schemas.image import SaveEventImageRequest
from app.services.event_image_service import EventImageService
from app.services.unsplash_service import (
    UTM_PARAMS,
    is_tracking_url,
    is_valid_category,
    is_valid_image_id,
    to_image_selection,
)
from app.utils.dates import utcnow


@pytest.fixture
def question(db_session, event):
    question = Question(event_id=event.id, question="Which region?", correct_answer="Bordeaux", order_index=1)
    db_session.add(question)
    db_session.commit()
    return question


def save_image(db_session, unsplash_service, question_id, image_id="abc123", **kwargs):
    request = SaveEventImageRequest(question_id=question_id, unsplash_image_id=image_id, **kwargs)
    return asyncio.run(EventImageService.save(db_session, unsplash_service, request))


class TestImageSelection:
    """Reducing Unsplash payloads to stored selections"""

    def test_full_payload(self, unsplash_photos):
        selection = to_image_selection(unsplash_photos["abc123"], "small")
        assert selection.url == "https://images.unsplash.com/abc123?small"
        assert selection.thumbnailUrl == "https://images.unsplash.com/abc123?thumb"
        assert selection.description == "Rows of vines at sunset"
        assert selection.attributionText == "Photo by Ana Vine on Unsplash"
        assert selection.attributionUrl == f"https://unsplash.com/photos/abc123?{UTM_PARAMS}"
        assert selection.photographerUrl == f"https://unsplash.com/@anavine?{UTM_PARAMS}"
        assert selection.downloadTrackingUrl == "https://api.unsplash.com/photos/abc123/download"
        assert (selection.width, selection.height, selection.color) == (4000, 3000, "#a6592d")

    def test_sparse_payload_fallbacks(self, unsplash_photos):
        selection = to_image_selection(unsplash_photos["xyz789"], "regular")
        assert selection.description == "Untitled"
        assert selection.attributionText == "Photo by Unsplash"
        assert selection.attributionUrl == f"https://unsplash.com?{UTM_PARAMS}"
        assert selection.photographerName == "Unknown"
        assert selection.photographerUrl == ""
        assert selection.thumbnailUrl == ""
        assert selection.color == "#000000"

    def test_unknown_size_uses_regular(self, unsplash_photos):
        selection = to_image_selection(unsplash_photos["abc123"], "gigantic")
        assert selection.url == "https://images.unsplash.com/abc123?regular"

    def test_alt_description_is_used(self, unsplash_photos):
        photo = dict(unsplash_photos["abc123"], description=None)
        assert to_image_selection(photo).description == "vineyard"

    def test_id_and_category_validation(self):
        assert is_valid_image_id("abc-123_X")
        assert not is_valid_image_id("")
        assert not is_valid_image_id("../etc/passwd")
        assert not is_valid_image_id("a" * 51)
        assert is_valid_category("Wine")
        assert not is_valid_category("cars")

    @pytest.mark.parametrize("url,allowed", [
        ("https://api.unsplash.com/photos/abc123/download", True),
        ("http://api.unsplash.com/photos/abc123/download", False),
        ("https://collector.example.com/photos/abc123/download", False),
        ("https://api.unsplash.com.example.com/download", False),
        ("/photos/abc123/download", False),
        ("", False),
    ])
    def test_tracking_url(self, url, allowed):
        assert is_tracking_url(url) is allowed


class TestEventImageService:

    def test_save_image(self, db_session, unsplash_service, question, host):
        image = save_image(db_session, unsplash_service, question.id, size_variant="small",
                           selected_by_user_id=host.id, usage_context="question_background")
        assert image.unsplash_image_id == "abc123"
        assert image.image_url == "https://images.unsplash.com/abc123?small"
        assert image.size_variant == "small"
        assert image.download_tracked is False
        assert image.expires_at - image.created_at == timedelta(days=settings.IMAGE_CACHE_DAYS)

    def test_save_replaces_previous_image(self, db_session, unsplash_service, question):
        save_image(db_session, unsplash_service, question.id, "abc123")
        save_image(db_session, unsplash_service, question.id, "xyz789")
        images = db_session.query(EventImage).all()
        assert [i.unsplash_image_id for i in images] == ["xyz789"]

    def test_save_unknown_question_or_photo(self, db_session, unsplash_service, question):
        assert save_image(db_session, unsplash_service, "missing") is None
        assert save_image(db_session, unsplash_service, question.id, "nosuchphoto") is None
        assert db_session.query(EventImage).count() == 0

    def test_replace_marks_context(self, db_session, unsplash_service, question):
        save_image(db_session, unsplash_service, question.id)
        image = asyncio.run(EventImageService.replace(db_session, unsplash_service, question.id, "xyz789"))
        assert image.unsplash_image_id == "xyz789"
        assert image.usage_context == "replacement"
        assert image.search_context == "manual_replacement"

    def test_track_usage_once(self, db_session, unsplash_service, unsplash_requests, question):
        save_image(db_session, unsplash_service, question.id)
        unsplash_requests.clear()

        assert asyncio.run(EventImageService.track_usage(db_session, unsplash_service, question.id))
        assert asyncio.run(EventImageService.track_usage(db_session, unsplash_service, question.id))
        assert [r.url.path for r in unsplash_requests] == ["/photos/abc123/download"]
        assert EventImageService.get_image(db_session, question.id).download_tracked is True

    def test_track_usage_without_image(self, db_session, unsplash_service, question):
        assert not asyncio.run(EventImageService.track_usage(db_session, unsplash_service, question.id))

    def test_cleanup_expired(self, db_session, unsplash_service, question, event):
        other = Question(event_id=event.id, question="Other?", correct_answer="x", order_index=2)
        db_session.add(other)
        db_session.commit()
        save_image(db_session, unsplash_service, question.id)
        save_image(db_session, unsplash_service, other.id)

        later = utcnow() + timedelta(days=settings.IMAGE_CACHE_DAYS + 1)
        assert EventImageService.cleanup_expired(db_session) == 0
        assert EventImageService.cleanup_expired(db_session, now=later) == 2
        assert db_session.query(EventImage).count() == 0

    def test_images_for_event_in_question_order(self, db_session, unsplash_service, question, event):
        first = Question(event_id=event.id, question="First?", correct_answer="x", order_index=0)
        db_session.add(first)
        db_session.commit()
        save_image(db_session, unsplash_service, question.id, "abc123")
        save_image(db_session, unsplash_service, first.id, "xyz789")

        images = EventImageService.images_for_event(db_session, event.id)
        assert [i.question_id for i in images] == [first.id, question.id]


class TestUnsplashRoutes:

    def test_search(self, client, unsplash_requests):
        response = client.get("/api/Unsplash/search?query=wine&perPage=50&orientation=landscape")
        assert response.status_code == 200
        assert response.json()["total"] == 2

        params = unsplash_requests[-1].url.params
        assert params["per_page"] == "30"
        assert params["content_filter"] == "high"
        assert params["orientation"] == "landscape"

    def test_search_requires_query(self, client):
        response = client.get("/api/Unsplash/search")
        assert response.status_code == 400
        assert response.json() == {"error": "Search query is required"}

    def test_get_image(self, client):
        assert client.get("/api/Unsplash/images/abc123").json()["id"] == "abc123"
        assert client.get("/api/Unsplash/images/nosuchphoto").status_code == 404
        assert client.get("/api/Unsplash/images/bad!id").status_code == 400

    def test_image_selection(self, client):
        body = client.get("/api/Unsplash/images/abc123/selection?size=thumb").json()
        assert body["url"] == "https://images.unsplash.com/abc123?thumb"

    def test_categories(self, client, unsplash_requests):
        categories = client.get("/api/Unsplash/categories").json()
        assert len(categories) == 10
        assert categories[0] == {
            "name": "wine",
            "displayName": "Wine & Beverages",
            "description": "Wine, vineyards, beverages, and related imagery",
        }

        assert client.get("/api/Unsplash/categories/wine").status_code == 200
        assert unsplash_requests[-1].url.params["query"].startswith("wine OR vineyard")

        response = client.get("/api/Unsplash/categories/cars")
        assert response.status_code == 400
        assert "wine" in response.json()["validCategories"]

    def test_featured(self, client):
        assert [p["id"] for p in client.get("/api/Unsplash/featured").json()] == ["abc123"]

    def test_track_download(self, client):
        response = client.post("/api/Unsplash/track-download",
                               json={"downloadUrl": "https://api.unsplash.com/photos/abc123/download"})
        assert response.json() == {"success": True, "message": "Download tracked successfully"}
        assert client.post("/api/Unsplash/track-download", json={}).status_code == 400

    def test_track_download_rejects_foreign_host(self, client, unsplash_requests):
        response = client.post("/api/Unsplash/track-download",
                               json={"downloadUrl": "https://collector.example.com/steal"})
        assert response.status_code == 400
        assert response.json() == {"error": "Download URL must be an Unsplash API URL"}
        assert unsplash_requests == []

    def test_service_does_not_send_key_elsewhere(self, unsplash_service, unsplash_requests):
        assert not asyncio.run(unsplash_service.track_download("https://collector.example.com/steal"))
        assert unsplash_requests == []


class TestEventImageRoutes:

    def test_search_for_question(self, client, question):
        response = client.get(f"/api/EventImages/search?questionId={question.id}&query=vineyard&size=small")
        assert response.status_code == 200
        body = response.json()
        assert body["questionId"] == question.id
        assert body["searchQuery"] == "vineyard"
        assert body["currentImage"] is None
        assert [s["id"] for s in body["imageSelections"]] == ["abc123", "xyz789"]
        assert body["imageSelections"][0]["url"].endswith("?small")

    def test_search_validation(self, client, question):
        assert client.get("/api/EventImages/search?query=x").status_code == 400
        assert client.get(f"/api/EventImages/search?questionId={question.id}").status_code == 400
        response = client.get(f"/api/EventImages/search/category?questionId={question.id}&category=cars")
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid category"

    def test_save_get_replace_remove(self, client, question, event):
        response = client.post("/api/EventImages", json={
            "questionId": question.id,
            "unsplashImageId": "abc123",
            "sizeVariant": "regular"
        })
        assert response.status_code == 201
        assert response.json()["attributionText"] == "Photo by Ana Vine on Unsplash"

        assert client.get(f"/api/EventImages/question/{question.id}").json()["unsplashImageId"] == "abc123"
        assert len(client.get(f"/api/EventImages/event/{event.id}").json()) == 1

        response = client.put(f"/api/EventImages/question/{question.id}/replace",
                              json={"newUnsplashImageId": "xyz789"})
        assert response.json()["unsplashImageId"] == "xyz789"
        assert response.json()["usageContext"] == "replacement"

        assert client.post(f"/api/EventImages/question/{question.id}/track-usage").json() == {
            "message": "Image usage tracked successfully"
        }

        assert client.delete(f"/api/EventImages/question/{question.id}").status_code == 204
        assert client.get(f"/api/EventImages/question/{question.id}").status_code == 404

    def test_save_unknown_photo(self, client, question):
        response = client.post("/api/EventImages", json={"questionId": question.id, "unsplashImageId": "nosuchphoto"})
        assert response.status_code == 400
        assert response.json() == {"error": "Failed to save image. Question or image may not exist."}

    def test_admin_cleanup(self, client, db_session, unsplash_service, question, admin, login):
        image = save_image(db_session, unsplash_service, question.id)
        image.expires_at = utcnow() - timedelta(days=1)
        db_session.commit()

        login("admin")
        response = client.post("/api/EventImages/admin/cleanup-expired")
        assert response.json() == {
            "cleanedCount": 1,
            "message": "Successfully cleaned up 1 expired image cache entries",
        }

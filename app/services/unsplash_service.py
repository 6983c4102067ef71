"""
Unsplash API client: photo search, lookup and download tracking
"""

import logging
import re
from typing import Any, Dict, List, Optional

import httpx

from app.core.config import settings
from app.schemas.image import ImageSelection

logger = logging.getLogger(__name__)

UTM_PARAMS = "utm_source=TriviaSpark&utm_medium=referral"
SIZE_VARIANTS = ("thumb", "small", "regular", "full", "raw")
MAX_PER_PAGE = 30

CATEGORY_MAPPINGS = {
    "wine": "wine OR vineyard OR grapes OR cellar OR sommelier",
    "food": "food OR cooking OR restaurant OR chef OR cuisine",
    "history": "history OR historical OR ancient OR museum OR monument",
    "science": "science OR laboratory OR research OR technology OR discovery",
    "sports": "sports OR athletic OR stadium OR competition OR team",
    "nature": "nature OR landscape OR wildlife OR forest OR mountain",
    "travel": "travel OR destination OR landmark OR tourism OR culture",
    "business": "business OR office OR corporate OR meeting OR professional",
    "education": "education OR school OR university OR learning OR books",
    "arts": "art OR painting OR sculpture OR gallery OR creative",
}
VALID_CATEGORIES = list(CATEGORY_MAPPINGS)

# (name, display name, description) for the category picker
CATEGORY_INFO = [
    ("wine", "Wine & Beverages", "Wine, vineyards, beverages, and related imagery"),
    ("food", "Food & Cuisine", "Food, cooking, restaurants, and culinary arts"),
    ("history", "History & Culture", "Historical sites, artifacts, museums, and cultural heritage"),
    ("science", "Science & Technology", "Scientific research, technology, laboratories, and discoveries"),
    ("sports", "Sports & Recreation", "Athletic activities, sports venues, and recreational activities"),
    ("nature", "Nature & Landscapes", "Natural landscapes, wildlife, forests, and outdoor scenes"),
    ("travel", "Travel & Destinations", "Tourist destinations, landmarks, and travel-related imagery"),
    ("business", "Business & Professional", "Business environments, corporate settings, and professional activities"),
    ("education", "Education & Learning", "Educational institutions, learning materials, and academic settings"),
    ("arts", "Arts & Creative", "Artistic works, galleries, creative processes, and cultural arts"),
]

_IMAGE_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,50}$")


def is_valid_image_id(image_id: Optional[str]) -> bool:
    return bool(image_id) and _IMAGE_ID_PATTERN.match(image_id) is not None


def is_valid_category(category: Optional[str]) -> bool:
    return (category or "").lower() in CATEGORY_MAPPINGS


def is_tracking_url(url: Optional[str]) -> bool:
    """Only absolute https URLs on the Unsplash API host receive the access key"""
    try:
        parsed = httpx.URL(url or "")
    except httpx.InvalidURL:
        return False
    return parsed.scheme == "https" and parsed.host == httpx.URL(settings.UNSPLASH_BASE_URL).host


def _clamp_per_page(per_page: int) -> int:
    return max(1, min(per_page, MAX_PER_PAGE))


def to_image_selection(image: Dict[str, Any], size_variant: str = "regular") -> ImageSelection:
    """Reduce an Unsplash photo payload to the fields a question stores.

    Attribution text and links follow the Unsplash API guidelines: the
    photographer is credited by name and every link back carries the
    referral UTM parameters.
    """
    urls = image.get("urls") or {}
    user = image.get("user") or {}
    links = image.get("links") or {}
    user_links = user.get("links") or {}

    variant = (size_variant or "regular").lower()
    if variant not in SIZE_VARIANTS:
        variant = "regular"

    name = user.get("name")
    attribution_text = f"Photo by {name} on Unsplash" if name and name.strip() else "Photo by Unsplash"
    attribution_url = (
        f"{links['html']}?{UTM_PARAMS}" if links.get("html") else f"https://unsplash.com?{UTM_PARAMS}"
    )
    photographer_url = f"{user_links['html']}?{UTM_PARAMS}" if user_links.get("html") else ""

    return ImageSelection(
        id=image["id"],
        description=image.get("description") or image.get("alt_description") or "Untitled",
        url=urls.get(variant) or "",
        thumbnailUrl=urls.get("thumb") or "",
        attributionText=attribution_text,
        attributionUrl=attribution_url,
        photographerName=name or "Unknown",
        photographerUrl=photographer_url,
        downloadTrackingUrl=links.get("download_location") or "",
        width=image.get("width") or 0,
        height=image.get("height") or 0,
        color=image.get("color") or "#000000",
    )


class UnsplashService:
    """Thin async wrapper over the Unsplash REST API.

    Failures are logged and reported as ``None`` or an empty result so callers
    can degrade to "no images" instead of failing the request.
    """

    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        self._client = client

    @property
    def headers(self) -> Dict[str, str]:
        headers = {"Accept-Version": "v1"}
        if settings.UNSPLASH_ACCESS_KEY:
            headers["Authorization"] = f"Client-ID {settings.UNSPLASH_ACCESS_KEY}"
        return headers

    async def _get(self, url: str, params: Optional[Dict[str, Any]] = None) -> httpx.Response:
        if self._client is not None:
            response = await self._client.get(url, params=params, headers=self.headers)
        else:
            async with httpx.AsyncClient(
                base_url=settings.UNSPLASH_BASE_URL,
                timeout=settings.UNSPLASH_TIMEOUT_SECONDS
            ) as client:
                response = await client.get(url, params=params, headers=self.headers)
        response.raise_for_status()
        return response

    async def search_images(
        self,
        query: str,
        page: int = 1,
        per_page: int = 10,
        order_by: str = "relevant",
        color: Optional[str] = None,
        orientation: Optional[str] = None
    ) -> Optional[Dict[str, Any]]:
        """Search photos; returns the raw ``{total, total_pages, results}`` payload"""
        params = {
            "query": query,
            "page": max(1, page),
            "per_page": _clamp_per_page(per_page),
            "order_by": order_by,
            "content_filter": "high",
        }
        if color:
            params["color"] = color
        if orientation:
            params["orientation"] = orientation

        logger.info(f"Searching Unsplash for '{query}' (page {params['page']}, {params['per_page']} per page)")
        try:
            response = await self._get("/search/photos", params=params)
            return response.json()
        except httpx.HTTPError as e:
            logger.error(f"Unsplash search for '{query}' failed: {e}")
            return None

    async def get_image(self, image_id: str) -> Optional[Dict[str, Any]]:
        try:
            response = await self._get(f"/photos/{image_id}")
            return response.json()
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                logger.warning(f"Unsplash image {image_id} not found")
            else:
                logger.error(f"Unsplash lookup of {image_id} failed: {e}")
            return None
        except httpx.HTTPError as e:
            logger.error(f"Unsplash lookup of {image_id} failed: {e}")
            return None

    async def get_featured_images(self, page: int = 1, per_page: int = 10) -> List[Dict[str, Any]]:
        params = {"page": max(1, page), "per_page": _clamp_per_page(per_page), "order_by": "popular"}
        try:
            response = await self._get("/photos", params=params)
            return response.json()
        except httpx.HTTPError as e:
            logger.error(f"Unsplash featured images request failed: {e}")
            return []

    async def search_by_category(self, category: str, page: int = 1, per_page: int = 10) -> Optional[Dict[str, Any]]:
        query = CATEGORY_MAPPINGS.get((category or "").lower(), category)
        return await self.search_images(query, page=page, per_page=per_page)

    async def track_download(self, download_url: str) -> bool:
        """Notify Unsplash that a photo was used (required by the API terms)"""
        if not is_tracking_url(download_url):
            logger.warning(f"Refusing to track download for non-Unsplash URL: {download_url}")
            return False
        try:
            await self._get(download_url)
        except httpx.HTTPError as e:
            logger.error(f"Unsplash download tracking failed: {e}")
            return False
        logger.info("Unsplash download tracked")
        return True

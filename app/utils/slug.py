"""
URL slug helpers for event titles
"""

import re
import uuid
from typing import Iterable

MAX_SLUG_LENGTH = 60

_SEPARATORS = re.compile(r"[\s\-_]+")
_INVALID_CHARS = re.compile(r"[^a-z0-9\-]")
_REPEATED_HYPHENS = re.compile(r"-{2,}")
_VALID_SLUG = re.compile(r"^[a-z0-9\-]+$")


def generate_slug(title: str, max_length: int = MAX_SLUG_LENGTH) -> str:
    """Turn a title into a lower-case, hyphen-separated slug"""
    if not title or not title.strip():
        return "untitled-event"

    slug = title.lower().strip()
    slug = _SEPARATORS.sub("-", slug)
    slug = _INVALID_CHARS.sub("", slug)
    slug = _REPEATED_HYPHENS.sub("-", slug)
    slug = slug.strip("-")

    if not slug:
        return "event"

    if len(slug) > max_length:
        slug = slug[:max_length]
        # Prefer a word boundary when one is close to the cut
        last_hyphen = slug.rfind("-")
        if last_hyphen > max_length * 0.75:
            slug = slug[:last_hyphen]
        slug = slug.rstrip("-")

    return slug


def make_unique_slug(base_slug: str, existing_slugs: Iterable[str], max_attempts: int = 100) -> str:
    """Append -2, -3, ... until the slug is not taken (case-insensitive)"""
    taken = {s.lower() for s in existing_slugs}

    if base_slug.lower() not in taken:
        return base_slug

    for counter in range(2, max_attempts + 2):
        candidate = f"{base_slug}-{counter}"
        if candidate.lower() not in taken:
            return candidate

    return f"{base_slug}-{uuid.uuid4().hex[:8]}"


def is_valid_slug(slug: str) -> bool:
    if not slug or len(slug) > MAX_SLUG_LENGTH:
        return False
    if not _VALID_SLUG.match(slug):
        return False
    if slug.startswith("-") or slug.endswith("-"):
        return False
    return "--" not in slug

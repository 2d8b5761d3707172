"""Editorial topics and their localized listing paths."""

from __future__ import annotations

from typing import Optional

TOPICS: tuple[tuple[str, str], ...] = (
    ("ia", "ia"),
    ("tech", "tech"),
    ("marketing/seo", "marketing-seo"),
    ("business", "business"),
)

TOPIC_KEYS: tuple[str, ...] = tuple(key for key, _ in TOPICS)


def topic_slug_from_key(key: str) -> str:
    """Return the URL slug of a topic key ("ia" for unknown keys)."""
    for topic_key, slug in TOPICS:
        if topic_key == key:
            return slug
    return "ia"


def topic_key_from_slug(slug: str) -> Optional[str]:
    normalized = slug.strip().lower()
    for key, topic_slug in TOPICS:
        if topic_slug == normalized:
            return key
    return None


def normalize_topic_key(value: Optional[str]) -> Optional[str]:
    """Map a free-form category value onto a known topic key."""
    if not value:
        return None
    normalized = value.strip().lower()
    return normalized if normalized in TOPIC_KEYS else None


def build_topic_path(lang: str, key: str) -> str:
    return f"/{lang}/{topic_slug_from_key(key)}"

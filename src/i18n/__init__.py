# Localization: languages, page slugs, topics, copy
from .languages import (
    DEFAULT_LANG,
    HREFLANG,
    LANGUAGES,
    LANGUAGE_LABELS,
    OG_LOCALE,
    PAGE_SLUGS,
    POST_ROUTE_SEGMENT,
    STATIC_PAGES,
    build_alternate_paths,
    build_path,
    build_post_path,
    coerce_language,
    get_language_from_path,
    is_language,
    is_routable_post_slug,
    normalize_post_slug,
)
from .messages import get_messages, page_meta, topic_title
from .topics import (
    TOPIC_KEYS,
    TOPICS,
    build_topic_path,
    normalize_topic_key,
    topic_key_from_slug,
    topic_slug_from_key,
)

__all__ = [
    "DEFAULT_LANG",
    "HREFLANG",
    "LANGUAGES",
    "LANGUAGE_LABELS",
    "OG_LOCALE",
    "PAGE_SLUGS",
    "POST_ROUTE_SEGMENT",
    "STATIC_PAGES",
    "TOPICS",
    "TOPIC_KEYS",
    "build_alternate_paths",
    "build_path",
    "build_post_path",
    "build_topic_path",
    "coerce_language",
    "get_language_from_path",
    "get_messages",
    "is_language",
    "is_routable_post_slug",
    "normalize_post_slug",
    "normalize_topic_key",
    "page_meta",
    "topic_key_from_slug",
    "topic_slug_from_key",
    "topic_title",
]

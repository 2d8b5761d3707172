"""Language, slug and per-language slug map of publish payloads."""

from __future__ import annotations

import re
from typing import Any, Optional

from src.i18n import DEFAULT_LANG, LANGUAGES
from src.posts.normalizer import language_suffixes
from src.posts.values import pick_string

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_slug(value: str) -> str:
    """Trim, strip slashes, hyphenate whitespace and lower-case a slug."""
    return _WHITESPACE_RE.sub("-", value.strip().strip("/")).lower()


def is_safe_slug(slug: str) -> bool:
    """False for empty slugs and slugs with '.' or '..' path segments."""
    segments = slug.replace("\\", "/").split("/")
    return bool(slug) and not any(segment in ("", ".", "..") for segment in segments)


def resolve_post_identity(payload: dict[str, Any]) -> tuple[str, str]:
    """Return (lang, slug) of a payload; unknown languages fall back to pt."""
    slug = pick_string(payload, ["slug"]) or ""
    lang = pick_string(payload, ["lang"]) or DEFAULT_LANG
    if lang not in LANGUAGES:
        lang = DEFAULT_LANG
    return lang, normalize_slug(slug)


def resolve_slug_for_lang(payload: dict[str, Any], lang: str) -> Optional[str]:
    slug_map = payload.get("slugs")
    if isinstance(slug_map, dict):
        mapped = slug_map.get(lang)
        if isinstance(mapped, str) and mapped.strip():
            return normalize_slug(mapped)

    direct = pick_string(payload, [f"slug{suffix}" for suffix in language_suffixes(lang)])
    if direct:
        return normalize_slug(direct)
    return None


def build_publish_slug_map(payload: dict[str, Any], lang: str, slug: str) -> dict[str, str]:
    """{lang: slug} plus the slugs the payload declares for other languages."""
    slug_map = {lang: slug}
    for code in LANGUAGES:
        if code == lang:
            continue
        resolved = resolve_slug_for_lang(payload, code)
        if resolved:
            slug_map[code] = resolved
    return slug_map


def collect_slugs(record: dict[str, Any]) -> list[str]:
    """Normalized values of a record's `slugs` map."""
    slug_map = record.get("slugs")
    if not isinstance(slug_map, dict):
        return []
    return [
        normalize_slug(value)
        for value in slug_map.values()
        if isinstance(value, str) and normalize_slug(value)
    ]

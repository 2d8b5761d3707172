"""Normalize heterogeneous CMS payloads into canonical BlogPost objects.

The external no-code backend returns posts under different envelopes and
with Portuguese, English, snake_case and camelCase field names. Every field
is resolved from an ordered list of candidate keys; the first non-empty
value wins. Malformed items are skipped, never raised on.

Usage:
    posts = normalize_posts(webhook_response, lang="en")
"""

from __future__ import annotations

from typing import Any, Optional

from src.common.logging import setup_logging
from src.i18n import LANGUAGES, coerce_language, is_language

from .images import normalize_image_list, normalize_image_thumbnail_url, normalize_image_url
from .meta_tags import parse_meta_tags
from .models import BlogPost
from .values import (
    boolean_value,
    format_read_time,
    pick_string,
    pick_string_array,
    string_value,
)

logger = setup_logging(module_name="posts.normalizer")

# === Candidate keys, in priority order ===

TITLE_KEYS = ("title", "titulo", "name", "headline")
ID_KEYS = ("id", "slug", "uuid")
EXCERPT_KEYS = ("excerpt", "summary", "descricao", "description", "resumo")
DESCRIPTION_KEYS = ("description", "descricao", "summary", "resumo")
CONTENT_HTML_KEYS = (
    "contentHtml",
    "html",
    "bodyHtml",
    "content_html",
    "conteudo_html",
    "conteudoHtml",
)
CONTENT_KEYS = ("content", "body", "texto", "text", "conteudo")
CATEGORY_KEYS = ("category", "categoria", "tag")
IMAGE_KEYS = (
    "image",
    "coverImage",
    "imageUrl",
    "thumbnail",
    "cover",
    "imagem",
    "imagemUrl",
    "imagem_url",
    "imagem_capa",
    "capa",
    "cover_image_url",
    "cover_image",
    "coverImageUrl",
)
IMAGE_ALT_KEYS = (
    "imageAlt",
    "image_alt",
    "cover_image_alt",
    "coverImageAlt",
    "imagem_alt",
    "alt",
)
IMAGES_KEYS = ("images", "imagens", "gallery", "galeria", "media")
DATE_KEYS = (
    "date",
    "publishedAt",
    "published_at",
    "publicado_em",
    "createdAt",
    "created_at",
    "criado_em",
    "updatedAt",
    "updated_at",
    "atualizado_em",
)
UPDATED_AT_KEYS = ("updatedAt", "updated_at", "atualizado_em", "modifiedAt", "modified_at")
AUTHOR_KEYS = ("author", "authorName", "autor")
READ_TIME_KEYS = (
    "readTime",
    "readingTime",
    "tempo_leitura_minutos",
    "tempoLeituraMinutos",
    "read_time_minutes",
    "reading_time_minutes",
    "readingTimeMinutes",
)
META_TITLE_KEYS = ("metaTitle", "meta_title", "seoTitle", "titleSeo", "titleSEO")
META_DESCRIPTION_KEYS = (
    "metaDescription",
    "meta_description",
    "seoDescription",
    "descriptionMeta",
)
TAG_KEYS = ("tags", "keywords", "palavras_chave", "palavrasChave", "palavras-chave")
META_TAG_KEYS = ("metaTags", "meta_tags", "meta")
LANG_KEYS = ("lang", "language", "idioma")

# Nested per-language overrides, e.g. {"translations": {"en": {"title": ...}}}
TRANSLATION_KEYS = ("translations", "traducoes", "i18n", "locales")


# === Envelope ===

def extract_post_array(payload: Any) -> list[Any]:
    """Find the list of post records inside a webhook/API response."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        if isinstance(payload.get("posts"), list):
            return payload["posts"]
        data = payload.get("data")
        if isinstance(data, list):
            return data
        if isinstance(data, dict) and isinstance(data.get("posts"), list):
            return data["posts"]
    return []


# === Localization resolution ===

def language_suffixes(lang: str) -> tuple[str, ...]:
    """Key suffixes marking a language-specific field (title_en, titleEn...)."""
    return (f"_{lang}", f"-{lang}", lang.capitalize(), lang.upper())


def _has_value(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, dict)):
        return bool(value)
    return True


def build_slug_map(record: dict[str, Any]) -> dict[str, str]:
    """Collect per-language slugs from a `slugs` map and slug_<lang> keys."""
    slugs: dict[str, str] = {}
    raw_map = record.get("slugs")
    if isinstance(raw_map, dict):
        for lang, value in raw_map.items():
            slug = string_value(value)
            if is_language(lang) and slug:
                slugs[lang] = slug
    for lang in LANGUAGES:
        if lang in slugs:
            continue
        slug = pick_string(record, [f"slug{suffix}" for suffix in language_suffixes(lang)])
        if slug:
            slugs[lang] = slug
    return slugs


def resolve_localized_record(record: dict[str, Any], lang: str) -> dict[str, Any]:
    """Overlay the language-specific values of a record onto its base keys.

    Suffixed keys (``title_en``) are applied first, then a nested translation
    map (``translations.en.title``), so the nested map wins on conflicts.
    """
    resolved = dict(record)
    suffixes = language_suffixes(lang)
    for key, value in record.items():
        if not _has_value(value):
            continue
        for suffix in suffixes:
            if len(key) > len(suffix) and key.endswith(suffix):
                resolved[key[: -len(suffix)]] = value
                break

    for container_key in TRANSLATION_KEYS:
        container = record.get(container_key)
        if not isinstance(container, dict):
            continue
        overrides = container.get(lang)
        if not isinstance(overrides, dict):
            continue
        for key, value in overrides.items():
            if _has_value(value):
                resolved[key] = value

    return resolved


def filter_posts_by_lang(records: list[Any], lang: str) -> list[dict[str, Any]]:
    """Keep records tagged with lang, or not tagged with any language."""
    kept = []
    for record in records:
        if not isinstance(record, dict):
            continue
        record_lang = record.get("lang")
        normalized = record_lang.strip().lower() if isinstance(record_lang, str) else ""
        if not normalized or normalized == lang:
            kept.append(record)
    return kept


# === Normalization ===

def normalize_post(
    record: dict[str, Any],
    index: int,
    lang: Optional[str] = None,
) -> Optional[BlogPost]:
    """Normalize a single record; None when it has no usable title."""
    slugs = build_slug_map(record)
    source = resolve_localized_record(record, lang) if lang else record

    title = pick_string(source, TITLE_KEYS)
    if not title:
        return None

    post_id = pick_string(record, ID_KEYS) or f"post-{index}"
    post_lang = lang or (coerce_language(pick_string(record, LANG_KEYS), "") or None)

    description = pick_string(source, DESCRIPTION_KEYS)
    slug = (slugs.get(post_lang) if post_lang else None) or pick_string(source, ["slug"])

    image = normalize_image_url(pick_string(source, IMAGE_KEYS))
    images = normalize_image_list(pick_string_array(source, IMAGES_KEYS))
    cover_image = image or (images[0] if images else None)
    cover_thumb = normalize_image_thumbnail_url(cover_image) or cover_image

    meta_tags_raw = next(
        (source[key] for key in META_TAG_KEYS if source.get(key) is not None),
        None,
    )

    return BlogPost(
        id=post_id,
        title=title,
        excerpt=pick_string(source, EXCERPT_KEYS),
        description=description,
        content=pick_string(source, CONTENT_KEYS),
        content_html=pick_string(source, CONTENT_HTML_KEYS),
        category=pick_string(source, CATEGORY_KEYS),
        image=cover_image,
        image_alt=pick_string(source, IMAGE_ALT_KEYS),
        image_thumb=cover_thumb,
        images=images,
        tags=pick_string_array(source, TAG_KEYS),
        date=pick_string(source, DATE_KEYS),
        updated_at=pick_string(source, UPDATED_AT_KEYS),
        author=pick_string(source, AUTHOR_KEYS),
        read_time=format_read_time(pick_string(source, READ_TIME_KEYS)),
        slug=slug,
        slugs=slugs or None,
        lang=post_lang,
        featured=boolean_value(source.get("featured")),
        meta_title=pick_string(source, META_TITLE_KEYS),
        meta_description=pick_string(source, META_DESCRIPTION_KEYS) or description,
        meta_tags=parse_meta_tags(meta_tags_raw),
    )


def normalize_posts(payload: Any, lang: Optional[str] = None) -> list[BlogPost]:
    """Normalize a webhook/API payload into a list of BlogPost.

    Args:
        payload: Raw response (list, {posts}, {data}, {data: {posts}}).
        lang: When given, language-specific fields and slugs are resolved
              for this language.

    Returns:
        Posts in payload order; records without a title are dropped.
    """
    records = extract_post_array(payload)
    posts: list[BlogPost] = []
    for index, item in enumerate(records):
        if not isinstance(item, dict):
            continue
        post = normalize_post(item, index, lang)
        if post is not None:
            posts.append(post)

    skipped = len(records) - len(posts)
    if skipped:
        logger.debug("Skipped %d of %d records without a usable title", skipped, len(records))
    return posts

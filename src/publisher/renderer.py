"""
Post Page Renderer for published posts.
Turns a raw publish payload into a standalone, crawlable HTML page.
"""

from __future__ import annotations

from datetime import timezone
from pathlib import Path
from typing import Any, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from src.i18n import POST_ROUTE_SEGMENT
from src.posts.content import resolve_content_parts
from src.posts.values import pick_string, string_value
from src.ssg.sitemap import parse_date

from .identity import resolve_post_identity
from .models import PostPageMeta, RenderedPost

META_TITLE_KEYS = ("meta_title", "metaTitle", "seo_title", "seoTitle")
TITLE_KEYS = ("titulo", "title", "headline")
META_DESCRIPTION_KEYS = ("meta_description", "metaDescription")
SUMMARY_KEYS = ("resumo", "excerpt", "summary", "description")
COVER_IMAGE_KEYS = ("cover_image_url", "image", "imageUrl")
COVER_ALT_KEYS = ("cover_image_alt", "imageAlt", "image_alt")
PUBLISHED_KEYS = ("publicado_em", "publishedAt", "date")
CREATED_KEYS = ("criado_em", "createdAt")
UPDATED_KEYS = ("atualizado_em", "updatedAt")


def format_iso_date(value: Optional[str]) -> Optional[str]:
    """ISO-8601 UTC timestamp with milliseconds, or None if unparseable."""
    parsed = parse_date(value)
    if parsed is None:
        return None
    try:
        iso = parsed.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    except (OverflowError, ValueError):
        return None
    return iso.replace("+00:00", "Z")


def resolve_keywords(payload: dict[str, Any]) -> str:
    raw = payload.get("palavras_chave")
    if isinstance(raw, list):
        keywords = [kw for kw in (string_value(item) for item in raw) if kw]
        if keywords:
            return ", ".join(keywords)
    return pick_string(payload, ["keywords"]) or ""


def resolve_page_meta(payload: dict[str, Any]) -> PostPageMeta:
    title = pick_string(payload, META_TITLE_KEYS) or pick_string(payload, TITLE_KEYS) or "Post"
    description = (
        pick_string(payload, META_DESCRIPTION_KEYS)
        or pick_string(payload, SUMMARY_KEYS)
        or ""
    )
    content = resolve_content_parts(payload)
    return PostPageMeta(
        title=title,
        description=description,
        image=pick_string(payload, COVER_IMAGE_KEYS) or "",
        image_alt=pick_string(payload, COVER_ALT_KEYS) or title,
        published_at=pick_string(payload, PUBLISHED_KEYS) or pick_string(payload, CREATED_KEYS),
        updated_at=pick_string(payload, UPDATED_KEYS),
        content_raw=content.raw,
        content_html=content.html,
        keywords=resolve_keywords(payload),
    )


class PostPageRenderer:
    """
    Renders standalone post pages with Jinja2.

    Usage:
        renderer = PostPageRenderer(origin="https://seommerce.shop")
        rendered = renderer.render(payload)
    """

    def __init__(self, origin: str, templates_dir: Optional[Path] = None):
        if templates_dir is None:
            templates_dir = Path(__file__).parent / "templates"

        self.origin = origin.rstrip("/")
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, payload: dict[str, Any]) -> RenderedPost:
        lang, slug = resolve_post_identity(payload)
        meta = resolve_page_meta(payload)
        canonical_url = f"{self.origin}/{lang}/{POST_ROUTE_SEGMENT[lang]}/{slug}"

        template = self.env.get_template("post.html")
        html = template.render(
            lang=lang,
            meta=meta,
            canonical_url=canonical_url,
            published_iso=format_iso_date(meta.published_at),
            updated_iso=format_iso_date(meta.updated_at or meta.published_at),
        )
        return RenderedPost(lang=lang, slug=slug, meta=meta, html=html, canonical_url=canonical_url)


def render_post_page(payload: dict[str, Any], origin: str) -> RenderedPost:
    """Render the standalone page of a publish payload."""
    return PostPageRenderer(origin=origin).render(payload)

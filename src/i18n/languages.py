"""Supported languages, localized page slugs and route paths."""

from __future__ import annotations

import re
from typing import Optional
from urllib.parse import quote, unquote

_MALFORMED_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")

LANGUAGES: tuple[str, ...] = ("pt", "en", "es")
DEFAULT_LANG = "pt"

LANGUAGE_LABELS = {
    "pt": "Português",
    "en": "English",
    "es": "Español",
}

HREFLANG = {
    "pt": "pt-BR",
    "en": "en",
    "es": "es",
}

OG_LOCALE = {
    "pt": "pt_BR",
    "en": "en_US",
    "es": "es_ES",
}

PAGE_SLUGS: dict[str, dict[str, str]] = {
    "home": {"pt": "", "en": "", "es": ""},
    "articles": {"pt": "artigos", "en": "articles", "es": "articulos"},
    "latest": {"pt": "ultimos-artigos", "en": "latest", "es": "ultimos-articulos"},
    "tools": {"pt": "ferramentas", "en": "tools", "es": "herramientas"},
    "auth": {"pt": "acesso", "en": "access", "es": "acceso"},
    "admin": {"pt": "admin", "en": "admin", "es": "admin"},
    "about": {"pt": "sobre", "en": "about", "es": "acerca"},
    "contact": {"pt": "contato", "en": "contact", "es": "contacto"},
    "privacy": {"pt": "privacidade", "en": "privacy", "es": "privacidad"},
}

# Pages pre-rendered and listed in the sitemap. auth/admin stay client-only.
STATIC_PAGES: tuple[str, ...] = (
    "home",
    "articles",
    "latest",
    "tools",
    "about",
    "contact",
    "privacy",
)

POST_ROUTE_SEGMENT = {lang: "post" for lang in LANGUAGES}


def is_language(value: object) -> bool:
    return isinstance(value, str) and value in LANGUAGES


def coerce_language(value: object, default: str = DEFAULT_LANG) -> str:
    """Return value as a supported language code, or default."""
    if isinstance(value, str):
        candidate = value.strip().lower()
        if candidate in LANGUAGES:
            return candidate
    return default


def build_path(lang: str, page: str) -> str:
    """Build the localized path of a static page.

    >>> build_path("en", "latest")
    '/en/latest'
    >>> build_path("pt", "home")
    '/pt'
    """
    slug = PAGE_SLUGS[page][lang]
    if not slug:
        return f"/{lang}"
    return f"/{lang}/{slug}"


def build_alternate_paths(page: str) -> dict[str, str]:
    return {lang: build_path(lang, page) for lang in LANGUAGES}


def normalize_post_slug(slug: str) -> str:
    """Percent-encode a post slug exactly once.

    Already-encoded slugs are decoded first so they are not encoded twice.
    """
    trimmed = slug.strip().strip("/")
    if not trimmed:
        return ""
    decoded = trimmed
    if not _MALFORMED_ESCAPE_RE.search(trimmed):
        try:
            decoded = unquote(trimmed, errors="strict")
        except UnicodeDecodeError:
            decoded = trimmed
    return quote(decoded, safe="-_.!~*'()")


def is_routable_post_slug(slug: Optional[str]) -> bool:
    """False for slugs that would leave the post directory ('', '.', '..')."""
    return bool(slug) and normalize_post_slug(slug) not in ("", ".", "..")


def build_post_path(lang: str, slug: str) -> str:
    return f"/{lang}/{POST_ROUTE_SEGMENT[lang]}/{normalize_post_slug(slug)}"


def get_language_from_path(pathname: str) -> Optional[str]:
    segments = [segment for segment in pathname.split("/") if segment]
    if segments and segments[0] in LANGUAGES:
        return segments[0]
    return None

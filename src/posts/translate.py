"""Machine translation of Portuguese posts via a LibreTranslate endpoint.

Posts are authored in Portuguese. English and Spanish listings fall back to
machine translation when the CMS has no localized copy. Translation is best
effort: a failing post is returned untranslated.
"""

from __future__ import annotations

import re
import time
from typing import Optional

import requests

from src.common.config import TranslateSettings, settings
from src.common.logging import setup_logging

from .models import BlogPost

logger = setup_logging(module_name="posts.translate")

_HTML_TAG_RE = re.compile(r"<[^>]+>")

# (field, format) pairs translated on each post; "auto" picks html/text
TRANSLATED_FIELDS: tuple[tuple[str, str], ...] = (
    ("title", "text"),
    ("excerpt", "text"),
    ("description", "text"),
    ("content", "auto"),
    ("content_html", "html"),
    ("category", "text"),
    ("meta_title", "text"),
    ("meta_description", "text"),
)


def has_html(value: Optional[str]) -> bool:
    return bool(value and _HTML_TAG_RE.search(value))


class TranslationError(RuntimeError):
    """The translation endpoint returned no usable text."""


class Translator:
    """LibreTranslate client with an in-memory TTL cache."""

    def __init__(
        self,
        config: TranslateSettings | None = None,
        session: requests.Session | None = None,
    ):
        self.config = config or settings.translate
        self._session = session or requests.Session()
        self._cache: dict[tuple[str, str, str, str], tuple[float, str]] = {}

    def translate(self, text: str, target: str, fmt: str = "text") -> str:
        """Translate text from the source language into target.

        Raises:
            TranslationError: The endpoint answered without translatedText.
            requests.RequestException: Network or HTTP failure.
        """
        source = self.config.source_lang
        if not text or target == source:
            return text

        key = (source, target, fmt, text)
        now = time.monotonic()
        self._evict_expired(now)
        cached = self._cache.get(key)
        if cached:
            return cached[1]

        resp = self._session.post(
            self.config.url,
            json={
                "q": text,
                "source": source,
                "target": target,
                "api_key": self.config.api_key or None,
                "format": fmt,
            },
            timeout=self.config.timeout_seconds,
        )
        resp.raise_for_status()
        data = resp.json()
        if not isinstance(data, dict):
            raise TranslationError(f"Unexpected response body: {type(data).__name__}")
        if data.get("error"):
            raise TranslationError(str(data["error"]))
        translated = data.get("translatedText")
        if not isinstance(translated, str) or not translated:
            raise TranslationError("No response found")

        self._cache[key] = (now, translated)
        return translated

    def _evict_expired(self, now: float) -> None:
        ttl = self.config.cache_ttl_seconds
        expired = [key for key, (stored_at, _) in self._cache.items() if now - stored_at >= ttl]
        for key in expired:
            del self._cache[key]

    def translate_post(self, post: BlogPost, lang: str) -> BlogPost:
        updates = {}
        for field_name, fmt in TRANSLATED_FIELDS:
            value = getattr(post, field_name)
            if not value:
                continue
            if fmt == "auto":
                fmt = "html" if has_html(value) else "text"
            updates[field_name] = self.translate(value, lang, fmt)
        return post.model_copy(update=updates)

    def translate_posts(self, posts: list[BlogPost], lang: str) -> list[BlogPost]:
        """Translate every post into lang; failures keep the original post."""
        if lang == self.config.source_lang:
            return posts

        translated = []
        for post in posts:
            try:
                translated.append(self.translate_post(post, lang))
            except (requests.RequestException, TranslationError, ValueError) as exc:
                logger.warning("Translation failed for post %s (%s): %s", post.id, lang, exc)
                translated.append(post)
        return translated


def translate_posts(
    posts: list[BlogPost],
    lang: str,
    translator: Translator | None = None,
) -> list[BlogPost]:
    """Convenience wrapper around Translator.translate_posts."""
    translator = translator or Translator()
    return translator.translate_posts(posts, lang)

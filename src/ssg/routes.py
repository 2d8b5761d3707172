"""Localized route tables for static generation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from src.i18n import (
    LANGUAGES,
    STATIC_PAGES,
    TOPIC_KEYS,
    build_path,
    build_post_path,
    build_topic_path,
    is_routable_post_slug,
)
from src.posts.models import BlogPost

PostsByLang = dict[str, list[BlogPost]]


@dataclass
class Route:
    """A pre-rendered URL and what it shows."""
    path: str
    lang: str
    page: Optional[str] = None  # static page key
    topic: Optional[str] = None  # topic key
    post: Optional[BlogPost] = None

    @property
    def kind(self) -> str:
        if self.post is not None:
            return "post"
        if self.topic is not None:
            return "topic"
        return "page"


def build_static_routes() -> list[str]:
    """Every static page path, grouped by language."""
    return [build_path(lang, page) for lang in LANGUAGES for page in STATIC_PAGES]


def static_routes() -> list[Route]:
    return [
        Route(path=build_path(lang, page), lang=lang, page=page)
        for lang in LANGUAGES
        for page in STATIC_PAGES
    ]


def build_topic_routes() -> list[Route]:
    return [
        Route(path=build_topic_path(lang, key), lang=lang, topic=key)
        for lang in LANGUAGES
        for key in TOPIC_KEYS
    ]


def build_post_routes(posts_by_lang: PostsByLang) -> list[Route]:
    """One route per post and language; later duplicates of a path are dropped."""
    routes: list[Route] = []
    seen: set[str] = set()
    for lang in LANGUAGES:
        for post in posts_by_lang.get(lang, []):
            slug = post.slug_for(lang)
            if not is_routable_post_slug(slug):
                continue
            path = build_post_path(lang, slug)
            if path in seen:
                continue
            seen.add(path)
            routes.append(Route(path=path, lang=lang, post=post))
    return routes


def build_all_routes(posts_by_lang: PostsByLang) -> list[Route]:
    return static_routes() + build_topic_routes() + build_post_routes(posts_by_lang)

"""
Page Renderer for pre-rendered routes.
Builds the SEO head and a crawlable body for each route with Jinja2.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from src.i18n import (
    DEFAULT_LANG,
    HREFLANG,
    LANGUAGES,
    OG_LOCALE,
    build_alternate_paths,
    build_post_path,
    get_messages,
    is_routable_post_slug,
    normalize_topic_key,
    page_meta,
    topic_title,
)
from src.posts.content import post_body_html
from src.posts.models import BlogPost

from .routes import PostsByLang, Route
from .sitemap import parse_date

LISTING_LIMIT = 12

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _post_sort_key(post: BlogPost) -> datetime:
    return parse_date(post.date) or _EPOCH


class PageRenderer:
    """
    Renders the head and body of a route.

    Usage:
        renderer = PageRenderer(origin="https://seommerce.shop")
        head, html_attrs = renderer.render_head(route, posts_by_lang)
        body = renderer.render_body(route, posts_by_lang)
    """

    def __init__(
        self,
        origin: str = "",
        site_name: str = "seommerce.shop",
        og_default_image: str = "",
        templates_dir: Optional[Path] = None,
    ):
        if templates_dir is None:
            templates_dir = Path(__file__).parent / "templates"

        self.origin = origin.rstrip("/")
        self.site_name = site_name
        self.og_default_image = og_default_image
        self.templates_dir = templates_dir
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def absolute_url(self, path: str) -> str:
        if not path or path.startswith(("http://", "https://")):
            return path
        return f"{self.origin}{path}" if self.origin else path

    # --- Listings ---

    def listing_for(self, route: Route, posts_by_lang: PostsByLang) -> Optional[list[BlogPost]]:
        """Posts listed on a route, or None for routes without a listing."""
        posts = posts_by_lang.get(route.lang, [])
        if route.topic is not None:
            return [p for p in posts if normalize_topic_key(p.category) == route.topic]
        if route.page == "home":
            featured = [p for p in posts if p.featured]
            others = [p for p in posts if not p.featured]
            return (featured + others)[:LISTING_LIMIT]
        if route.page == "articles":
            return list(posts)
        if route.page == "latest":
            return sorted(posts, key=_post_sort_key, reverse=True)[:LISTING_LIMIT]
        return None

    # --- Head ---

    def _alternates(self, route: Route) -> list[dict[str, str]]:
        if route.post is not None:
            paths = {}
            for lang in LANGUAGES:
                if route.post.slugs and route.post.slugs.get(lang):
                    paths[lang] = build_post_path(lang, route.post.slugs[lang])
            paths.setdefault(route.lang, route.path)
        elif route.page is not None:
            paths = build_alternate_paths(route.page)
        else:
            paths = {lang: route.path.replace(f"/{route.lang}", f"/{lang}", 1) for lang in LANGUAGES}

        alternates = [
            {"hreflang": HREFLANG[lang], "href": self.absolute_url(path)}
            for lang, path in paths.items()
        ]
        default_path = paths.get(DEFAULT_LANG, route.path)
        alternates.append({"hreflang": "x-default", "href": self.absolute_url(default_path)})
        return alternates

    def _post_json_ld(self, post: BlogPost, canonical_url: str, route: Route) -> dict[str, Any]:
        data: dict[str, Any] = {
            "@context": "https://schema.org",
            "@type": "BlogPosting",
            "headline": post.title,
            "inLanguage": HREFLANG[route.lang],
            "mainEntityOfPage": canonical_url,
        }
        if post.description or post.excerpt:
            data["description"] = post.description or post.excerpt
        if post.image:
            data["image"] = self.absolute_url(post.image)
        if post.date:
            data["datePublished"] = post.date
        if post.lastmod:
            data["dateModified"] = post.lastmod
        if post.author:
            data["author"] = {"@type": "Person", "name": post.author}
        if post.tags:
            data["keywords"] = ", ".join(post.tags)
        return data

    def head_context(self, route: Route) -> dict[str, Any]:
        canonical_url = self.absolute_url(route.path)
        meta_tags = []
        json_ld = None
        og_type = "website"

        if route.post is not None:
            post = route.post
            title = post.meta_title or post.title
            description = post.meta_description or post.excerpt or post.description or ""
            meta_tags = [tag.to_dict() for tag in post.meta_tags or []]
            json_ld = self._post_json_ld(post, canonical_url, route)
            og_type = "article"
            image = self.absolute_url(post.image) if post.image else ""
        elif route.topic is not None:
            home = page_meta(route.lang, "home")
            title = f"{topic_title(route.lang, route.topic)} | {self.site_name}"
            description = home["description"]
            image = ""
        else:
            meta = page_meta(route.lang, route.page or "home")
            title, description = meta["title"], meta["description"]
            image = ""

        default_image = self.absolute_url(self.og_default_image) if self.origin else ""
        has_og_image = any(tag.get("property") == "og:image" for tag in meta_tags)
        has_twitter_image = any(tag.get("name") == "twitter:image" for tag in meta_tags)

        return {
            "title": title,
            "description": description,
            "site_name": self.site_name,
            "og_type": og_type,
            "og_locale": OG_LOCALE[route.lang],
            "canonical_url": canonical_url,
            "og_image": None if has_og_image else (image or default_image),
            "twitter_image": None if has_twitter_image else (image or default_image),
            "meta_tags": meta_tags,
            "alternates": self._alternates(route),
            "json_ld": json_ld,
        }

    def render_head(self, route: Route) -> tuple[str, str]:
        """Render the head tags and the <html> attributes of a route."""
        template = self.env.get_template("head.html")
        head = template.render(**self.head_context(route))
        html_attrs = f'lang="{HREFLANG[route.lang]}"'
        return head, html_attrs

    # --- Body ---

    def body_context(self, route: Route, posts_by_lang: PostsByLang) -> dict[str, Any]:
        messages = get_messages(route.lang)
        listing = self.listing_for(route, posts_by_lang)
        items = None
        if listing is not None:
            items = [
                {
                    "title": post.title,
                    "excerpt": post.excerpt,
                    "href": build_post_path(route.lang, post.slug_for(route.lang)),
                }
                for post in listing
                if is_routable_post_slug(post.slug_for(route.lang))
            ]

        if route.topic is not None:
            heading = topic_title(route.lang, route.topic)
        else:
            heading = page_meta(route.lang, route.page or "home")["title"]

        post_html = ""
        if route.post is not None:
            post_html = post_body_html(route.post.content_html, route.post.content)

        return {
            "kind": route.kind,
            "hreflang": HREFLANG[route.lang],
            "heading": heading,
            "listing": items,
            "labels": messages["labels"],
            "post": route.post,
            "post_html": post_html,
        }

    def render_body(self, route: Route, posts_by_lang: PostsByLang) -> str:
        template = self.env.get_template("body.html")
        return template.render(**self.body_context(route, posts_by_lang))

    def load_shell(self) -> str:
        """Default HTML shell with the head/body/data placeholders."""
        return (self.templates_dir / "shell.html").read_text(encoding="utf-8")

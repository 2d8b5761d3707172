"""Publishing pipeline: CMS payloads to the generated post tree.

Orchestrates the complete flow:
payload → slug map → media localization → post page render →
{lang}/post/{slug}/index.html → index upsert → sitemap.xml

Usage:
    pipeline = PublishPipeline(root_dir=Path("/app/html-storage/posts"))
    result = pipeline.publish(payload)
"""

from __future__ import annotations

import re
import shutil
from pathlib import Path
from typing import Any, Optional

from src.common.config import settings
from src.common.errors import PostNotFoundError, PublishError
from src.common.logging import setup_logging
from src.i18n import LANGUAGES, POST_ROUTE_SEGMENT
from src.posts.values import pick_string
from src.ssg.sitemap import build_directory_sitemap
from src.ssg.status import GeneratedStatus, generated_status

from .identity import (
    build_publish_slug_map,
    collect_slugs,
    is_safe_slug,
    normalize_slug,
    resolve_post_identity,
)
from .media import MediaLocalizer
from .models import DeletedPost, DeleteResult, PostPageMeta, PublishedPost, PublishResult
from .renderer import PostPageRenderer
from .store import PostIndexStore, Record

logger = setup_logging(module_name="publisher.pipeline")

_LIST_DELIMITER_RE = re.compile(r"[,;]+")

# Entries of the generated root that delete_all removes and recreates
MANAGED_ENTRIES = ("posts.json", "sitemap.xml", *LANGUAGES, "media")


def normalize_array(value: Any) -> Optional[list[str]]:
    if not value:
        return None
    if isinstance(value, list):
        values = [item.strip() for item in value if isinstance(item, str) and item.strip()]
        return values or None
    if isinstance(value, str):
        values = [item.strip() for item in _LIST_DELIMITER_RE.split(value) if item.strip()]
        return values or None
    return None


def build_index_entry(payload: Record, lang: str, slug: str, meta: PostPageMeta) -> Record:
    """Index record of a published post: the payload plus resolved fields."""
    tags = (
        normalize_array(payload.get("tags") or payload.get("tag"))
        or normalize_array(payload.get("etiquetas") or payload.get("palavras_chave"))
        or normalize_array(payload.get("keywords"))
    )
    images = normalize_array(payload.get("images") or payload.get("imagens")) or normalize_array(
        payload.get("galeria")
    )
    keywords = normalize_array(meta.keywords)

    entry: Record = {
        **payload,
        "id": pick_string(payload, ["id", "uuid"]) or f"post-{lang}-{slug}",
        "lang": lang,
        "slug": slug,
        "title": meta.title,
        "excerpt": meta.description,
        "description": meta.description,
        "content": meta.content_raw,
        "contentHtml": meta.content_html,
        "image": meta.image,
        "imageAlt": meta.image_alt,
    }
    optional = {
        "images": images,
        "tags": tags,
        "keywords": keywords,
        "publishedAt": meta.published_at,
        "updatedAt": meta.updated_at,
    }
    for key, value in optional.items():
        if value is not None:
            entry[key] = value
        else:
            entry.pop(key, None)
    return entry


def find_delete_targets(payload: Record, posts: list[Record]) -> list[Record]:
    """Index records matching the id, slug or slug map of a delete request."""
    slug_raw = pick_string(payload, ["slug", "postSlug"]) or ""
    slug = normalize_slug(slug_raw) if slug_raw else ""
    post_id = pick_string(payload, ["id", "uuid"]) or ""
    slugs = collect_slugs(payload)

    targets = []
    for post in posts:
        if not isinstance(post, dict):
            continue
        entry_id = pick_string(post, ["id", "uuid"]) or ""
        entry_slug = normalize_slug(pick_string(post, ["slug"]) or "")
        entry_slugs = collect_slugs(post)

        if post_id and entry_id == post_id:
            targets.append(post)
        elif slug and (entry_slug == slug or slug in entry_slugs):
            targets.append(post)
        elif slugs and (entry_slug in slugs or any(s in slugs for s in entry_slugs)):
            targets.append(post)
    return targets


def split_payload(body: Any) -> list[Record]:
    """A list body, a {posts: [...]} body or a single post."""
    if isinstance(body, list):
        return body
    if isinstance(body, dict) and isinstance(body.get("posts"), list):
        return body["posts"]
    return [body]


class PublishPipeline:
    """Publishes, deletes and indexes posts in the generated directory.

    Steps of a publish:
    1. Resolve language, slug and the per-language slug map
    2. Download remote images into media/ (MediaLocalizer)
    3. Render the standalone post page (PostPageRenderer)
    4. Upsert the post in its language index (PostIndexStore)
    5. Rebuild sitemap.xml from the generated pages
    """

    def __init__(
        self,
        root_dir: Path | None = None,
        origin: Optional[str] = None,
        media: MediaLocalizer | None = None,
        renderer: PostPageRenderer | None = None,
    ):
        self.root_dir = root_dir or settings.generated_path
        self.origin = (origin or settings.publish_origin).rstrip("/")
        self.store = PostIndexStore(self.root_dir)
        self.media = media or MediaLocalizer(self.root_dir)
        self.renderer = renderer or PostPageRenderer(origin=self.origin)

    def post_link(self, lang: str, slug: str) -> str:
        return f"{self.origin}/{lang}/{POST_ROUTE_SEGMENT[lang]}/{slug}"

    def publish_post(self, payload: Record) -> Path:
        """Write the page of one post and upsert its index entry."""
        payload = self.media.localize_post(payload)
        rendered = self.renderer.render(payload)
        if not rendered.slug:
            raise PublishError("Missing slug")

        post_dir = self.store.post_dir(rendered.lang, rendered.slug)
        post_dir.mkdir(parents=True, exist_ok=True)
        page_path = post_dir / "index.html"
        page_path.write_text(rendered.html, encoding="utf-8")

        posts = self.store.load_by_lang()[rendered.lang]
        entry = build_index_entry(payload, rendered.lang, rendered.slug, rendered.meta)
        for i, existing in enumerate(posts):
            if existing.get("slug") == rendered.slug and existing.get("lang") == rendered.lang:
                posts[i] = {**existing, **entry}
                break
        else:
            posts.insert(0, entry)
        self.store.save(rendered.lang, posts)
        return page_path

    def publish(self, body: Any) -> PublishResult:
        """Publish one or more posts.

        Args:
            body: A post payload, a list of them or {"posts": [...]}.

        Returns:
            PublishResult with the links of each post per language

        Raises:
            PublishError: When a payload has no slug
        """
        payloads = split_payload(body)
        result = PublishResult(count=len(payloads))

        for item in payloads:
            if not isinstance(item, dict):
                raise PublishError("Missing slug")
            lang, slug = resolve_post_identity(item)
            if not slug:
                raise PublishError("Missing slug")
            if not is_safe_slug(slug):
                raise PublishError(f"Invalid slug: {slug}")
            result.logs.append(f"publish:start slug={slug} lang={lang}")

            slug_map = build_publish_slug_map(item, lang, slug)
            self.publish_post({**item, "lang": lang, "slug": slug, "slugs": slug_map})
            result.logs.append(f"publish:done lang={lang} slug={slug}")

            links = {code: self.post_link(code, slug_map[code]) for code in LANGUAGES if code in slug_map}
            result.posts.append(PublishedPost(slug=slug, links=links))
            result.logs.append(
                "publish:links " + " ".join(f"{code}={slug_map.get(code, '')}" for code in LANGUAGES)
            )
            logger.info("Published %s/%s", lang, slug)

        self.rebuild_sitemap()
        result.logs.append("sitemap:rebuilt")
        return result

    def delete_post_assets(self, entry: Record) -> list[Path]:
        lang = pick_string(entry, ["lang"]) or "pt"
        slug = pick_string(entry, ["slug"]) or ""
        if not is_safe_slug(slug):
            return []
        paths = [self.store.post_dir(lang, slug), self.root_dir / "media" / lang / slug]
        for path in paths:
            shutil.rmtree(path, ignore_errors=True)
        return paths

    def delete(self, payload: Record) -> DeleteResult:
        """Delete the posts matching a request by id, slug or slug map.

        Raises:
            PublishError: When the request is not a JSON object
            PostNotFoundError: When no indexed post matches
        """
        if payload is None:
            payload = {}
        if not isinstance(payload, dict):
            raise PublishError("Delete request must be a JSON object")
        posts_by_lang = self.store.load_by_lang()
        all_posts = [post for lang in LANGUAGES for post in posts_by_lang[lang]]
        targets = find_delete_targets(payload, all_posts)
        if not targets:
            raise PostNotFoundError("Post not found")

        result = DeleteResult()
        for entry in targets:
            lang = pick_string(entry, ["lang"]) or "pt"
            slug = pick_string(entry, ["slug"]) or ""
            result.logs.append(f"delete:start lang={lang} slug={slug}")
            for path in self.delete_post_assets(entry):
                result.logs.append(f"delete:file {path}")
            result.deleted.append(DeletedPost(lang=lang, slug=slug))
            result.logs.append(f"delete:done lang={lang} slug={slug}")

        target_ids = {id(entry) for entry in targets}
        for lang in LANGUAGES:
            remaining = [post for post in posts_by_lang[lang] if id(post) not in target_ids]
            self.store.save(lang, remaining)

        self.rebuild_sitemap()
        result.logs.append("sitemap:rebuilt")
        logger.info("Deleted %d posts", result.deleted_count)
        return result

    def delete_all(self) -> DeleteResult:
        """Remove every generated post, index and media file."""
        result = DeleteResult()
        self.root_dir.mkdir(parents=True, exist_ok=True)

        for name in MANAGED_ENTRIES:
            target = self.root_dir / name
            _remove(target)
            result.logs.append(f"delete-all:removed {target}")

        for entry in sorted(self.root_dir.iterdir()):
            if entry.name in MANAGED_ENTRIES:
                continue
            _remove(entry)
            result.logs.append(f"delete-all:legacy {entry}")

        for lang in LANGUAGES:
            self.store.save(lang, [])
        self.rebuild_sitemap()
        result.logs.append("sitemap:rebuilt")
        logger.warning("Deleted all generated posts under %s", self.root_dir)
        return result

    def rebuild_sitemap(self) -> Path:
        self.root_dir.mkdir(parents=True, exist_ok=True)
        return build_directory_sitemap(self.root_dir, self.origin)

    def status(self) -> GeneratedStatus:
        return generated_status(self.root_dir, self.origin)


def _remove(path: Path) -> None:
    if path.is_dir():
        shutil.rmtree(path, ignore_errors=True)
    elif path.exists():
        path.unlink()

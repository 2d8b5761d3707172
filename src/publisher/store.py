"""Per-language JSON indexes of published posts.

Layout under the generated root:
    {lang}/posts.json           {"posts": [...]} per language
    posts.json                  legacy index, records tagged with `lang`
    {lang}/post/{slug}/index.html
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

from bs4 import BeautifulSoup

from src.common.logging import setup_logging
from src.i18n import LANGUAGES
from src.posts.normalizer import filter_posts_by_lang
from src.ssg.loader import read_index_file

logger = setup_logging(module_name="publisher.store")

Record = dict[str, Any]


def _meta_content(soup: BeautifulSoup, attr: str, key: str) -> Optional[str]:
    tag = soup.find("meta", attrs={attr: key})
    if tag is None:
        return None
    content = (tag.get("content") or "").strip()
    return content or None


def read_html_post(file_path: Path, lang: str, slug: str) -> Optional[Record]:
    """Index record scraped from a published page; None without a <title>."""
    try:
        html = file_path.read_text(encoding="utf-8")
    except OSError:
        return None

    soup = BeautifulSoup(html, "lxml")
    title = soup.title.get_text(strip=True) if soup.title else ""
    if not title:
        return None

    description = _meta_content(soup, "name", "description")
    record: Record = {
        "id": f"post-{lang}-{slug}",
        "lang": lang,
        "slug": slug,
        "title": title,
        "excerpt": description,
        "description": description,
        "image": _meta_content(soup, "property", "og:image"),
        "publishedAt": _meta_content(soup, "property", "article:published_time"),
        "updatedAt": _meta_content(soup, "property", "article:modified_time"),
    }
    return {key: value for key, value in record.items() if value is not None}


def merge_post_lists(primary: list[Record], fallback: list[Record]) -> list[Record]:
    """primary, then fallback records whose slug is not already present."""
    seen = {post["slug"] for post in primary if isinstance(post.get("slug"), str)}
    merged = list(primary)
    for post in fallback:
        slug = post.get("slug") if isinstance(post.get("slug"), str) else None
        if slug and slug in seen:
            continue
        merged.append(post)
        if slug:
            seen.add(slug)
    return merged


class PostIndexStore:
    """
    Reads and writes the post indexes of a generated directory.

    Usage:
        store = PostIndexStore(Path("/app/html-storage/posts"))
        posts = store.load_for_lang("en")
    """

    def __init__(self, root_dir: Path):
        self.root_dir = root_dir

    def lang_index_path(self, lang: str) -> Path:
        return self.root_dir / lang / "posts.json"

    @property
    def legacy_index_path(self) -> Path:
        return self.root_dir / "posts.json"

    def post_dir(self, lang: str, slug: str) -> Path:
        return self.root_dir / lang / "post" / slug

    def load_by_lang(self) -> dict[str, list[Record]]:
        """Raw index records per language, per-language files first."""
        posts_by_lang: dict[str, list[Record]] = {lang: [] for lang in LANGUAGES}
        found = False
        for lang in LANGUAGES:
            records = read_index_file(self.lang_index_path(lang))
            if records is not None:
                posts_by_lang[lang] = records
                found = True
        if found:
            return posts_by_lang

        legacy = read_index_file(self.legacy_index_path)
        if not legacy:
            return posts_by_lang
        for lang in LANGUAGES:
            posts_by_lang[lang] = [
                post for post in legacy
                if isinstance(post, dict) and post.get("lang") == lang
            ]
        return posts_by_lang

    def save(self, lang: str, posts: list[Record]) -> Path:
        path = self.lang_index_path(lang)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump({"posts": posts}, f, indent=2, ensure_ascii=False)
        return path

    def load_html_posts(self, lang: str) -> list[Record]:
        posts_dir = self.root_dir / lang / "post"
        if not posts_dir.is_dir():
            return []
        records = []
        for entry in sorted(posts_dir.iterdir()):
            if not entry.is_dir():
                continue
            record = read_html_post(entry / "index.html", lang, entry.name)
            if record:
                records.append(record)
        return records

    def load_for_lang(self, lang: str) -> list[Record]:
        """Index records of one language merged with pages found on disk."""
        html_posts = self.load_html_posts(lang)
        lang_index = read_index_file(self.lang_index_path(lang))
        if lang_index is not None:
            return merge_post_lists(filter_posts_by_lang(lang_index, lang), html_posts)

        legacy = read_index_file(self.legacy_index_path)
        if legacy is None:
            return html_posts
        return merge_post_lists(filter_posts_by_lang(legacy, lang), html_posts)

    def load_all(self) -> list[Record]:
        """Every indexed record; per-language indexes win over the legacy one."""
        per_lang = [read_index_file(self.lang_index_path(lang)) for lang in LANGUAGES]
        if any(records is not None for records in per_lang):
            return [post for records in per_lang for post in records or []]
        return read_index_file(self.legacy_index_path) or []

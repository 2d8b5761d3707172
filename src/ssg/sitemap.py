"""XML sitemap construction.

Two sources feed a sitemap:
- the normalized post lists (static pages, topics and posts per language)
- a directory of generated HTML files (published post pages)
"""

from __future__ import annotations

import re
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Optional, Union

from src.common.logging import setup_logging
from src.i18n import (
    LANGUAGES,
    STATIC_PAGES,
    TOPIC_KEYS,
    build_path,
    build_post_path,
    build_topic_path,
    is_routable_post_slug,
)

from .routes import PostsByLang

logger = setup_logging(module_name="ssg.sitemap")

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>'

_LOC_RE = re.compile(r"<loc>([^<]+)</loc>")

_DATE_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y/%m/%d",
    "%a, %d %b %Y %H:%M:%S %Z",
)


def parse_date(value: Union[str, date, datetime, None]) -> Optional[datetime]:
    """Parse a CMS date into an aware datetime; None when unparseable.

    Naive values are treated as UTC.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    else:
        text = value.strip()
        if not text:
            return None
        parsed = None
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            for fmt in _DATE_FORMATS:
                try:
                    parsed = datetime.strptime(text, fmt)
                    break
                except ValueError:
                    continue
        if parsed is None:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_sitemap_date(value: Union[str, date, datetime, None]) -> Optional[str]:
    """Format a date as YYYY-MM-DD in UTC; None when unparseable."""
    parsed = parse_date(value)
    if parsed is None:
        return None
    try:
        return parsed.astimezone(timezone.utc).strftime("%Y-%m-%d")
    except (OverflowError, ValueError):
        return None


def escape_xml(value: str) -> str:
    return (
        value.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&apos;")
    )


class SitemapBuilder:
    """Collects URLs, keeping the latest lastmod seen for each one.

    Usage:
        builder = SitemapBuilder("https://seommerce.shop")
        builder.add("/pt", "2024-05-01T10:00:00Z")
        xml = builder.to_xml()
    """

    def __init__(self, origin: str = ""):
        self.origin = origin.rstrip("/")
        self._entries: dict[str, Optional[str]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> dict[str, Optional[str]]:
        return dict(self._entries)

    def add(self, path: str, lastmod: Union[str, date, datetime, None] = None) -> None:
        """Add a path; an existing URL only takes a newer lastmod."""
        if not path:
            return
        loc = f"{self.origin}{path}"
        formatted = format_sitemap_date(lastmod)
        if loc not in self._entries:
            self._entries[loc] = formatted
            return
        existing = self._entries[loc]
        if formatted and (existing is None or formatted > existing):
            self._entries[loc] = formatted

    def to_xml(self) -> str:
        urls = []
        for loc, lastmod in self._entries.items():
            lastmod_tag = f"<lastmod>{lastmod}</lastmod>" if lastmod else ""
            urls.append(f"<url><loc>{escape_xml(loc)}</loc>{lastmod_tag}</url>")
        return "".join(
            [XML_HEADER, f'<urlset xmlns="{SITEMAP_NS}">', *urls, "</urlset>"]
        )

    def write(self, path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_xml(), encoding="utf-8")
        logger.info("Sitemap written: %s (%d urls)", path, len(self))
        return path


def build_sitemap(origin: str, posts_by_lang: PostsByLang) -> SitemapBuilder:
    """Sitemap of static pages, topic pages and posts in every language."""
    builder = SitemapBuilder(origin)

    for page in STATIC_PAGES:
        for lang in LANGUAGES:
            builder.add(build_path(lang, page))

    for lang in LANGUAGES:
        for key in TOPIC_KEYS:
            builder.add(build_topic_path(lang, key))
        for post in posts_by_lang.get(lang, []):
            slug = post.slug_for(lang)
            if not is_routable_post_slug(slug):
                continue
            builder.add(build_post_path(lang, slug), post.lastmod)

    return builder


# === Generated directory ===

def collect_html_files(root_dir: Path) -> list[Path]:
    if not root_dir.is_dir():
        return []
    return sorted(p for p in root_dir.rglob("*.html") if p.is_file())


def route_path_for_file(root_dir: Path, file_path: Path) -> str:
    """Map a generated file to its route (pt/post/x/index.html -> /pt/post/x)."""
    relative = file_path.relative_to(root_dir).as_posix()
    if relative.lower().endswith("index.html"):
        relative = relative[: -len("index.html")]
    elif relative.lower().endswith(".html"):
        relative = relative[: -len(".html")]
    normalized = f"/{relative}".rstrip("/")
    return normalized or "/"


def build_directory_sitemap(root_dir: Path, origin: str) -> Path:
    """Write sitemap.xml for every HTML file under root_dir, dated by mtime."""
    builder = SitemapBuilder(origin)
    for file_path in collect_html_files(root_dir):
        mtime = datetime.fromtimestamp(file_path.stat().st_mtime, tz=timezone.utc)
        builder.add(route_path_for_file(root_dir, file_path), mtime)
    return builder.write(root_dir / "sitemap.xml")


def parse_sitemap_urls(xml: str) -> list[str]:
    return [match.strip() for match in _LOC_RE.findall(xml)]

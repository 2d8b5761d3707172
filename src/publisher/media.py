"""Download remote post images into the generated media tree.

Images are stored under media/{lang}/{slug}/image-{sha1[:12]}{ext} and the
payload is rewritten to the public /media/... path. Any failure keeps the
original URL.
"""

from __future__ import annotations

import hashlib
import re
from html import unescape
from pathlib import Path, PurePosixPath
from typing import Any, Optional
from urllib.parse import urlparse

import requests

from src.common.config import settings
from src.common.logging import setup_logging
from src.posts.content import resolve_content_parts
from src.posts.values import pick_string, string_array_value

from .identity import resolve_post_identity

logger = setup_logging(module_name="publisher.media")

IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".webp", ".avif", ".gif", ".svg"}

CONTENT_TYPE_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
    "image/avif": ".avif",
    "image/gif": ".gif",
    "image/svg+xml": ".svg",
}

COVER_KEYS = ("cover_image_url", "image", "imageUrl")
THUMB_KEYS = (
    "imageThumb",
    "image_thumb",
    "thumbnailUrl",
    "thumbnail_url",
    "thumb",
    "thumbUrl",
    "thumb_url",
    "imageThumbUrl",
    "image_thumb_url",
)
GALLERY_KEYS = ("images", "imagens", "galeria")

_IMG_SRC_RE = re.compile(r"""<img\b[^>]*?\bsrc=["']([^"']+)["'][^>]*>""", re.IGNORECASE)
_SRCSET_RE = re.compile(r"""\bsrcset=["']([^"']+)["']""", re.IGNORECASE)
_REMOTE_RE = re.compile(r"^https?://", re.IGNORECASE)

MEDIA_PREFIX = "image"


def is_remote_url(value: str) -> bool:
    return bool(_REMOTE_RE.match(value))


def extension_from_url(url: str) -> Optional[str]:
    suffix = PurePosixPath(urlparse(url).path).suffix.lower()
    return suffix if suffix in IMAGE_EXTENSIONS else None


def extension_from_content_type(content_type: Optional[str]) -> Optional[str]:
    if not content_type:
        return None
    return CONTENT_TYPE_EXTENSIONS.get(content_type.split(";")[0].strip().lower())


def parse_srcset_urls(value: str) -> list[str]:
    return [part.strip().split()[0] for part in value.split(",") if part.strip()]


def collect_html_image_urls(html: str) -> dict[str, set[str]]:
    """Map each remote image URL (entity-decoded) to its raw spellings."""
    matches: dict[str, set[str]] = {}

    def add(raw: str) -> None:
        decoded = unescape(raw)
        if is_remote_url(decoded):
            matches.setdefault(decoded, set()).add(raw)

    for match in _IMG_SRC_RE.finditer(html):
        add(match.group(1))
    for match in _SRCSET_RE.finditer(html):
        for url in parse_srcset_urls(match.group(1)):
            add(url)
    return matches


class MediaLocalizer:
    """
    Localizes the images of a publish payload.

    Usage:
        localizer = MediaLocalizer(root_dir=Path("/app/html-storage/posts"))
        payload = localizer.localize_post(payload)
    """

    def __init__(
        self,
        root_dir: Path,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ):
        self.root_dir = root_dir
        self.session = session or requests.Session()
        self.timeout = timeout or settings.ssg.media_timeout_seconds

    def media_dir(self, lang: str, slug: str) -> Path:
        return self.root_dir / "media" / lang / slug

    @staticmethod
    def public_path(lang: str, slug: str, file_name: str) -> str:
        return f"/media/{lang}/{slug}/{file_name}"

    def localize_url(
        self,
        url: Optional[str],
        lang: str,
        slug: str,
        cache: dict[str, str],
    ) -> Optional[str]:
        """Local public path of a remote image, or the URL unchanged."""
        if not url:
            return None
        decoded = unescape(url)
        if not is_remote_url(decoded):
            return url
        if decoded in cache:
            return cache[decoded]

        media_dir = self.media_dir(lang, slug)
        digest = hashlib.sha1(decoded.encode("utf-8")).hexdigest()[:12]
        url_ext = extension_from_url(decoded)
        if url_ext:
            existing = f"{MEDIA_PREFIX}-{digest}{url_ext}"
            if (media_dir / existing).exists():
                cache[decoded] = self.public_path(lang, slug, existing)
                return cache[decoded]

        try:
            resp = self.session.get(decoded, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("Image download failed for %s: %s", decoded, exc)
            return url
        if not resp.ok:
            logger.warning("Image download %s returned %d", decoded, resp.status_code)
            return url

        content_type = resp.headers.get("content-type")
        if content_type and not content_type.lower().startswith("image/"):
            logger.warning("Skipping non-image content %s (%s)", decoded, content_type)
            return url

        ext = extension_from_content_type(content_type) or url_ext or ".jpg"
        file_name = f"{MEDIA_PREFIX}-{digest}{ext}"
        media_dir.mkdir(parents=True, exist_ok=True)
        file_path = media_dir / file_name
        if not file_path.exists():
            file_path.write_bytes(resp.content)

        cache[decoded] = self.public_path(lang, slug, file_name)
        return cache[decoded]

    def localize_html(self, html: str, lang: str, slug: str, cache: dict[str, str]) -> str:
        """Rewrite <img src> and srcset URLs of html to local media paths."""
        updated = html
        for decoded, raws in collect_html_image_urls(html).items():
            localized = self.localize_url(decoded, lang, slug, cache)
            if not localized or localized == decoded:
                continue
            for raw in raws:
                updated = updated.replace(raw, localized)
        return updated

    def localize_post(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Localize cover, thumbnail, gallery and inline images of a payload in place."""
        lang, slug = resolve_post_identity(payload)
        if not slug:
            return payload
        cache: dict[str, str] = {}

        cover = pick_string(payload, COVER_KEYS)
        if cover and (localized := self.localize_url(cover, lang, slug, cache)):
            for key in COVER_KEYS:
                payload[key] = localized

        thumb = pick_string(payload, THUMB_KEYS)
        if thumb and (localized := self.localize_url(thumb, lang, slug, cache)):
            for key in THUMB_KEYS:
                payload[key] = localized

        gallery = gallery_images(payload)
        if gallery:
            localized_images = [
                localized
                for image in gallery
                if (localized := self.localize_url(image, lang, slug, cache))
            ]
            if localized_images:
                for key in GALLERY_KEYS:
                    payload[key] = localized_images

        content_html = resolve_content_parts(payload).html
        if content_html:
            localized_html = self.localize_html(content_html, lang, slug, cache)
            payload["contentHtml"] = localized_html
            payload["conteudo_html"] = localized_html

        return payload


def gallery_images(payload: dict[str, Any]) -> Optional[list[str]]:
    """Gallery URLs from images/imagens, else galeria."""
    primary = payload.get("images")
    if primary is None:
        primary = payload.get("imagens")
    return string_array_value(primary) or string_array_value(payload.get("galeria"))

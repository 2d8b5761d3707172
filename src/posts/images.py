"""Image URL normalization.

Editors paste Google Drive share links for cover images; those are rewritten
to directly embeddable googleusercontent / thumbnail URLs.
"""

from __future__ import annotations

import re
from typing import Optional

_DRIVE_PATTERNS = (
    re.compile(r"^https?://lh3\.googleusercontent\.com/(?:u/\d+/)?d/([^/?#]+)", re.I),
    re.compile(r"^https?://drive\.google\.com/file/d/([^/]+)/?", re.I),
    re.compile(r"^https?://drive\.google\.com/open\?id=([^&]+)", re.I),
    re.compile(r"^https?://drive\.google\.com/uc\?[^#]*id=([^&]+)", re.I),
    re.compile(r"^https?://drive\.google\.com/thumbnail\?[^#]*id=([^&]+)", re.I),
)

DEFAULT_THUMBNAIL_SIZE = "w1200"


def extract_drive_id(url: str) -> Optional[str]:
    """Return the Google Drive file id embedded in a share URL, if any."""
    for pattern in _DRIVE_PATTERNS:
        match = pattern.match(url)
        if match:
            return match.group(1)
    return None


def build_drive_image(file_id: str) -> str:
    return f"https://lh3.googleusercontent.com/d/{file_id}"


def build_drive_thumbnail(file_id: str, size: str = DEFAULT_THUMBNAIL_SIZE) -> str:
    return f"https://drive.google.com/thumbnail?id={file_id}&sz={size}"


def normalize_image_url(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    trimmed = value.strip()
    if not trimmed:
        return None
    drive_id = extract_drive_id(trimmed)
    if drive_id:
        return build_drive_image(drive_id)
    return trimmed


def normalize_image_thumbnail_url(
    value: Optional[str],
    size: str = DEFAULT_THUMBNAIL_SIZE,
) -> Optional[str]:
    if not value:
        return None
    trimmed = value.strip()
    if not trimmed:
        return None
    drive_id = extract_drive_id(trimmed)
    if drive_id:
        return build_drive_thumbnail(drive_id, size)
    return trimmed


def normalize_image_list(values: Optional[list[str]]) -> Optional[list[str]]:
    if not values:
        return None
    normalized = [url for url in (normalize_image_url(v) for v in values) if url]
    if not normalized:
        return None
    return list(dict.fromkeys(normalized))

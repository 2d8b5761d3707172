"""Data models for the publisher module."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Optional


@dataclass
class PostPageMeta:
    """Resolved metadata of a published post page."""
    title: str
    description: str = ""
    image: str = ""
    image_alt: str = ""
    published_at: Optional[str] = None
    updated_at: Optional[str] = None
    content_raw: str = ""
    content_html: str = ""
    keywords: str = ""  # comma separated


@dataclass
class RenderedPost:
    """A post page rendered from a publish payload."""
    lang: str
    slug: str
    meta: PostPageMeta
    html: str
    canonical_url: str = ""


@dataclass
class PublishedPost:
    """Slug and per-language public links of a published post."""
    slug: str
    links: dict[str, str] = field(default_factory=dict)


@dataclass
class PublishResult:
    """Result of a publish request."""
    ok: bool = True
    count: int = 0
    posts: list[PublishedPost] = field(default_factory=list)
    logs: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class DeletedPost:
    lang: str
    slug: str


@dataclass
class DeleteResult:
    """Result of a delete request."""
    ok: bool = True
    deleted: list[DeletedPost] = field(default_factory=list)
    logs: list[str] = field(default_factory=list)

    @property
    def deleted_count(self) -> int:
        return len(self.deleted)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["deletedCount"] = self.deleted_count
        return data

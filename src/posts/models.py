"""Canonical post shape shared by normalization, SSG and publishing.

Serialized with the camelCase keys the front end reads from posts.json.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field, model_validator


class MetaTag(BaseModel):
    """A single <meta> tag carried by a post."""
    name: Optional[str] = None
    property: Optional[str] = None
    content: str = Field(min_length=1)

    def to_dict(self) -> dict[str, str]:
        return self.model_dump(exclude_none=True)


class BlogPost(BaseModel):
    """A normalized blog post."""
    id: str
    title: str
    excerpt: Optional[str] = None
    description: Optional[str] = None
    content: Optional[str] = None
    content_html: Optional[str] = Field(default=None, alias="contentHtml")
    category: Optional[str] = None
    image: Optional[str] = None
    image_alt: Optional[str] = Field(default=None, alias="imageAlt")
    image_thumb: Optional[str] = Field(default=None, alias="imageThumb")
    images: Optional[list[str]] = None
    tags: Optional[list[str]] = None
    date: Optional[str] = None
    updated_at: Optional[str] = Field(default=None, alias="updatedAt")
    author: Optional[str] = None
    read_time: Optional[str] = Field(default=None, alias="readTime")
    slug: Optional[str] = None
    slugs: Optional[dict[str, str]] = None
    lang: Optional[str] = None
    featured: Optional[bool] = None
    meta_title: Optional[str] = Field(default=None, alias="metaTitle")
    meta_description: Optional[str] = Field(default=None, alias="metaDescription")
    meta_tags: Optional[list[MetaTag]] = Field(default=None, alias="metaTags")

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def _require_title(self) -> BlogPost:
        if not self.title.strip():
            raise ValueError("title must not be empty")
        return self

    def slug_for(self, lang: str) -> str:
        """Slug used in the post URL for a language."""
        if self.slugs and self.slugs.get(lang):
            return self.slugs[lang]
        return self.slug or self.id

    @property
    def lastmod(self) -> Optional[str]:
        return self.updated_at or self.date

    def to_dict(self) -> dict[str, Any]:
        """Serialize with camelCase keys, omitting unset fields."""
        return self.model_dump(by_alias=True, exclude_none=True)

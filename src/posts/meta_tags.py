"""Parsing of post-level <meta> tags.

The CMS stores extra meta tags as raw HTML, as a JSON string, as a list of
{name|property, content} objects or as a plain {name: content} mapping.
"""

from __future__ import annotations

import json
from typing import Any, Optional

from bs4 import BeautifulSoup

from .models import MetaTag
from .values import string_value


def parse_meta_tags_from_html(value: str) -> Optional[list[MetaTag]]:
    """Extract <meta> tags that carry content and a name or property."""
    if "<meta" not in value.lower():
        return None
    soup = BeautifulSoup(value, "lxml")
    tags: list[MetaTag] = []
    for element in soup.find_all("meta"):
        content = string_value(element.get("content"))
        name = string_value(element.get("name"))
        prop = string_value(element.get("property"))
        if content and (name or prop):
            tags.append(MetaTag(name=name, property=prop, content=content))
    return tags or None


def _tags_from_list(items: list[Any]) -> list[MetaTag]:
    tags: list[MetaTag] = []
    for item in items:
        if isinstance(item, str):
            tags.extend(parse_meta_tags_from_html(item) or [])
            continue
        if not isinstance(item, dict):
            continue
        content = string_value(item.get("content"))
        if not content:
            continue
        tags.append(
            MetaTag(
                name=string_value(item.get("name")),
                property=string_value(item.get("property")),
                content=content,
            )
        )
    return tags


def parse_meta_tags(value: Any) -> Optional[list[MetaTag]]:
    """Parse meta tags from any of the shapes the CMS produces."""
    if not value:
        return None
    if isinstance(value, str):
        trimmed = value.strip()
        if not trimmed:
            return None
        if trimmed.startswith(("{", "[")):
            try:
                return parse_meta_tags(json.loads(trimmed))
            except json.JSONDecodeError:
                pass
        return parse_meta_tags_from_html(trimmed)
    if isinstance(value, list):
        return _tags_from_list(value) or None
    if isinstance(value, dict):
        tags = [
            MetaTag(name=key, content=content)
            for key, content in ((k, string_value(v)) for k, v in value.items())
            if content
        ]
        return tags or None
    return None

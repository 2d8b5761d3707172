"""Resolve a post body into display HTML and plain text.

Bodies arrive as HTML, as Markdown, or as a JSON object of numbered
paragraphs (paragrafo_1, paragrafo_2, ..., paragrafo_final) produced by the
content-generation flow.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from html import escape
from typing import Any, Optional

import markdown as md

from .values import pick_string

_HTML_TAG_RE = re.compile(r"<[^>]+>")
_NUMBERED_PARAGRAPH_RE = re.compile(r"^paragrafo_(\d+)$")

HTML_CONTENT_KEYS = ("contentHtml", "conteudo_html")
TEXT_CONTENT_KEYS = ("conteudo", "content", "body", "texto")


@dataclass
class ContentParts:
    """Raw body text and the HTML rendered from it."""
    raw: str = ""
    html: str = ""


def contains_html(value: Optional[str]) -> bool:
    return bool(value and _HTML_TAG_RE.search(value))


def render_markdown(text: str) -> str:
    return md.markdown(text, extensions=["tables", "fenced_code"])


def parse_structured_content(value: str) -> Optional[ContentParts]:
    """Parse a JSON object of numbered paragraphs; None if it is not one."""
    trimmed = value.strip()
    if not (trimmed.startswith("{") and trimmed.endswith("}")):
        return None
    try:
        parsed: Any = json.loads(trimmed)
    except json.JSONDecodeError:
        return None
    if not isinstance(parsed, dict):
        return None

    numbered = sorted(
        (int(match.group(1)), key)
        for key in parsed
        if (match := _NUMBERED_PARAGRAPH_RE.match(key))
    )
    paragraphs = [parsed[key].strip() for _, key in numbered if _is_text(parsed[key])]

    tech = parsed.get("paragrafos_explicacao_tecnologica")
    if isinstance(tech, list):
        paragraphs.extend(item.strip() for item in tech if _is_text(item))

    final = parsed.get("paragrafo_final")
    if _is_text(final):
        paragraphs.append(final.strip())

    if not paragraphs:
        return None
    return ContentParts(
        raw="\n\n".join(paragraphs),
        html="\n".join(f"<p>{escape(text)}</p>" for text in paragraphs),
    )


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _as_html(text: str) -> ContentParts:
    if contains_html(text):
        return ContentParts(raw=text, html=text)
    return ContentParts(raw=text, html=render_markdown(text))


def resolve_content_parts(record: dict[str, Any]) -> ContentParts:
    """Resolve the body of a raw CMS record.

    HTML fields win over text fields. Text that is neither structured JSON
    nor HTML is treated as Markdown.
    """
    html_input = pick_string(record, HTML_CONTENT_KEYS)
    if html_input:
        return _as_html(html_input)

    content_input = pick_string(record, TEXT_CONTENT_KEYS)
    if not content_input:
        return ContentParts()
    structured = parse_structured_content(content_input)
    if structured:
        return structured
    return _as_html(content_input)


def post_body_html(content_html: Optional[str], content: Optional[str]) -> str:
    """Display HTML for a normalized post."""
    if content_html:
        return content_html if contains_html(content_html) else render_markdown(content_html)
    if content:
        structured = parse_structured_content(content)
        if structured:
            return structured.html
        return _as_html(content).html
    return ""

"""Best-effort coercion of loosely typed CMS field values.

The no-code backend sends the same field as a string, a number, a JSON
string, a comma separated list or a list of objects depending on the flow
that produced it. These helpers collapse all of them to trimmed strings.
"""

from __future__ import annotations

import json
import re
from typing import Any, Iterable, Optional

# Keys checked, in order, when a list item is an object (e.g. gallery entries)
ITEM_URL_KEYS = ("url", "src", "image", "imageUrl", "href", "link")

_LIST_DELIMITER_RE = re.compile(r"[,;]+")
_NUMERIC_RE = re.compile(r"^\d+([.,]\d+)?$")


def string_value(value: Any) -> Optional[str]:
    """Return a trimmed non-empty string, or None.

    Numbers are stringified; every other type yields None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        normalized = _format_number(value)
    elif isinstance(value, str):
        normalized = value
    else:
        return None
    trimmed = normalized.strip()
    return trimmed or None


def _format_number(value: int | float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _dedupe(values: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(values))


def _normalize_item(item: Any) -> Optional[str]:
    primitive = string_value(item)
    if primitive:
        return primitive
    if isinstance(item, dict):
        for key in ITEM_URL_KEYS:
            candidate = string_value(item.get(key))
            if candidate:
                return candidate
    return None


def string_array_value(value: Any) -> Optional[list[str]]:
    """Coerce a list-ish value into a de-duplicated list of strings.

    Accepts lists (of strings or objects with a URL-like key), JSON encoded
    lists and comma/semicolon separated strings.
    """
    if not value:
        return None
    if isinstance(value, list):
        values = [item for item in (_normalize_item(v) for v in value) if item]
        return _dedupe(values) if values else None
    if isinstance(value, str):
        trimmed = value.strip()
        if not trimmed:
            return None
        if (trimmed.startswith("[") and trimmed.endswith("]")) or (
            trimmed.startswith("{") and trimmed.endswith("}")
        ):
            try:
                return string_array_value(json.loads(trimmed))
            except json.JSONDecodeError:
                pass
        values = [
            item
            for item in (string_value(part) for part in _LIST_DELIMITER_RE.split(trimmed))
            if item
        ]
        return _dedupe(values) if values else None
    return None


def boolean_value(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)) and value in (0, 1):
        return value == 1
    if value == "true":
        return True
    if value == "false":
        return False
    return None


def pick_string(record: dict[str, Any], keys: Iterable[str]) -> Optional[str]:
    """Return the first non-empty string value among keys."""
    for key in keys:
        value = string_value(record.get(key))
        if value:
            return value
    return None


def pick_string_array(record: dict[str, Any], keys: Iterable[str]) -> Optional[list[str]]:
    for key in keys:
        value = string_array_value(record.get(key))
        if value:
            return value
    return None


def format_read_time(value: Optional[str]) -> Optional[str]:
    """Append " min" to bare numeric reading times ("5" -> "5 min")."""
    if not value:
        return None
    trimmed = value.strip()
    if not trimmed:
        return None
    if _NUMERIC_RE.match(trimmed):
        return f"{trimmed} min"
    return trimmed

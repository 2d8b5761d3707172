"""Localized page copy used in pre-rendered heads and bodies.

Copy lives in messages.yaml next to this module.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import yaml

from .languages import DEFAULT_LANG, LANGUAGES

MESSAGES_PATH = Path(__file__).parent / "messages.yaml"


@lru_cache(maxsize=1)
def load_messages(path: Path = MESSAGES_PATH) -> dict[str, dict]:
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    missing = [lang for lang in LANGUAGES if lang not in data]
    if missing:
        raise ValueError(f"messages.yaml is missing languages: {', '.join(missing)}")
    return data


def get_messages(lang: str) -> dict:
    messages = load_messages()
    return messages.get(lang) or messages[DEFAULT_LANG]


def page_meta(lang: str, page: str) -> dict[str, str]:
    """Title and description for a static page, falling back to home."""
    meta = get_messages(lang)["meta"]
    return meta.get(page) or meta["home"]


def topic_title(lang: str, key: str) -> str:
    return get_messages(lang)["topics"].get(key, key)

"""Load the posts to pre-render, per language.

Sources, in order:
1. {generated_dir}/{lang}/posts.json for each language
2. the legacy {generated_dir}/posts.json, split by each record's `lang`
3. {origin}/api/posts?lang=... on the running site, when nothing was found
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import requests

from src.common.config import settings
from src.common.logging import setup_logging
from src.i18n import LANGUAGES
from src.posts.normalizer import normalize_posts

from .routes import PostsByLang

logger = setup_logging(module_name="ssg.loader")


def empty_posts_by_lang() -> PostsByLang:
    return {lang: [] for lang in LANGUAGES}


def read_index_file(index_path: Path) -> Optional[list[Any]]:
    """Read the `posts` list of an index file.

    Returns None when the file is missing or unreadable, and an empty list
    when it parses but holds no `posts` list.
    """
    try:
        with open(index_path, encoding="utf-8") as f:
            parsed = json.load(f)
    except FileNotFoundError:
        return None
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Unreadable index %s: %s", index_path, exc)
        return None
    if isinstance(parsed, dict) and isinstance(parsed.get("posts"), list):
        return parsed["posts"]
    return []


def load_local_posts(generated_dir: Path) -> PostsByLang:
    posts_by_lang = empty_posts_by_lang()

    loaded_any = False
    for lang in LANGUAGES:
        records = read_index_file(generated_dir / lang / "posts.json")
        if records is None:
            continue
        loaded_any = True
        posts_by_lang[lang] = normalize_posts(records, lang)

    if loaded_any:
        return posts_by_lang

    legacy = read_index_file(generated_dir / "posts.json")
    if legacy:
        for lang in LANGUAGES:
            records = [
                item for item in legacy
                if isinstance(item, dict) and item.get("lang") == lang
            ]
            posts_by_lang[lang] = normalize_posts(records, lang)
    return posts_by_lang


def fetch_remote_posts(
    origin: str,
    session: requests.Session | None = None,
    timeout: float | None = None,
) -> PostsByLang:
    """Fetch posts from the running site's API; failures leave a language empty."""
    session = session or requests.Session()
    timeout = timeout or settings.ssg.remote_fetch_timeout_seconds
    posts_by_lang = empty_posts_by_lang()
    for lang in LANGUAGES:
        url = f"{origin}/api/posts"
        try:
            resp = session.get(url, params={"lang": lang}, timeout=timeout)
            if not resp.ok:
                logger.warning("Remote posts %s?lang=%s returned %d", url, lang, resp.status_code)
                continue
            posts_by_lang[lang] = normalize_posts(resp.json(), lang)
        except (requests.RequestException, ValueError) as exc:
            logger.warning("Remote posts fetch failed for %s: %s", lang, exc)
    return posts_by_lang


def load_posts_by_lang(
    generated_dir: Path,
    origin: str = "",
    session: requests.Session | None = None,
) -> PostsByLang:
    posts_by_lang = load_local_posts(generated_dir)
    if any(posts_by_lang[lang] for lang in LANGUAGES):
        return posts_by_lang
    if origin:
        logger.info("No local posts under %s, fetching from %s", generated_dir, origin)
        return fetch_remote_posts(origin, session=session)
    return posts_by_lang

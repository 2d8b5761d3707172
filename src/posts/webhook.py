"""Client for the CMS webhook (n8n) that stores and serves posts.

Usage:
    client = WebhookClient()
    posts = client.fetch_posts("en")
"""

from __future__ import annotations

import json
from typing import Any, Optional

import requests

from src.common.config import WebhookSettings, settings
from src.common.errors import WebhookError
from src.common.logging import setup_logging

from .models import BlogPost
from .normalizer import normalize_posts
from .translate import Translator

logger = setup_logging(module_name="posts.webhook")


def _error_message(data: Any) -> str:
    if isinstance(data, str) and data:
        return data
    if isinstance(data, dict) and "message" in data:
        return str(data["message"])
    return "Request failed"


class WebhookClient:
    """POSTs JSON actions to the CMS webhook."""

    def __init__(
        self,
        config: WebhookSettings | None = None,
        session: requests.Session | None = None,
        translator: Translator | None = None,
    ):
        self.config = config or settings.webhook
        self._session = session or requests.Session()
        self._translator = translator

    def send(self, payload: dict[str, Any]) -> Any:
        """Send an action payload and return the decoded response body.

        The body is decoded as JSON when possible and returned as text
        otherwise.

        Raises:
            WebhookError: The webhook answered with a non-2xx status.
        """
        resp = self._session.post(
            self.config.url,
            json=payload,
            headers={"Accept": "application/json"},
            timeout=self.config.timeout_seconds,
        )
        text = resp.text
        data: Any = None
        if text:
            try:
                data = json.loads(text)
            except json.JSONDecodeError:
                data = text

        if not resp.ok:
            message = _error_message(data)
            logger.warning(
                "Webhook action %s failed (%d): %s",
                payload.get("action"),
                resp.status_code,
                message,
            )
            raise WebhookError(message, status_code=resp.status_code)
        return data

    def get_posts(self, lang: str) -> Any:
        return self.send({"action": "get_posts", "lang": lang})

    def edit_post(self, lang: str, post: BlogPost, categoria: Optional[str] = None) -> Any:
        """Send an edited post back to the CMS."""
        payload: dict[str, Any] = post.to_dict()
        payload.pop("slugs", None)
        payload.update({"action": "edit_post", "lang": lang})
        if categoria or post.category:
            payload["categoria"] = categoria or post.category
        return self.send(payload)

    def delete_post(self, lang: str, post_id: str, slug: Optional[str] = None) -> Any:
        payload: dict[str, Any] = {"action": "delete_post", "lang": lang, "id": post_id}
        if slug:
            payload["slug"] = slug
        return self.send(payload)

    def fetch_posts(self, lang: str) -> list[BlogPost]:
        """Fetch, normalize and (when needed) machine-translate posts."""
        posts = normalize_posts(self.get_posts(lang), lang)
        translator = self._translator or Translator()
        return translator.translate_posts(posts, lang)

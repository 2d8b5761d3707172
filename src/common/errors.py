"""Error types raised across the content engine."""

from __future__ import annotations


class WebhookError(RuntimeError):
    """The CMS webhook answered with a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class PublishError(ValueError):
    """A publish payload cannot be turned into a post page."""


class PostNotFoundError(LookupError):
    """No index entry matched a delete request."""

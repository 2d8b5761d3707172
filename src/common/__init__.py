# Common utilities and shared modules
"""
Shared components used by every package:
- Project configuration
- Logging configuration
- Error types
"""

from .config import settings, PROJECT_ROOT, DIST_DIR
from .errors import PostNotFoundError, PublishError, WebhookError
from .logging import setup_logging

__all__ = [
    "settings",
    "PROJECT_ROOT",
    "DIST_DIR",
    "PostNotFoundError",
    "PublishError",
    "WebhookError",
    "setup_logging",
]

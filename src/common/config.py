"""Project configuration and paths.

Loads settings from config/settings.yaml and environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

# === Paths ===
PROJECT_ROOT = Path(__file__).parent.parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"
DIST_DIR = PROJECT_ROOT / "dist" / "spa"

DEFAULT_GENERATED_DIR = "/app/html-storage/posts"
DEFAULT_PUBLISH_ORIGIN = "http://localhost:3000"

# Load .env from project root
load_dotenv(PROJECT_ROOT / ".env")


def _env(name: str) -> str:
    return (os.getenv(name) or "").strip()


def resolve_origin_from_env(default: str = "") -> str:
    """Resolve the public site origin from the deployment environment.

    Checks SSG_ORIGIN, SITE_ORIGIN, COOLIFY_URL and COOLIFY_FQDN in that
    order. Trailing slashes are stripped.
    """
    for name in ("SSG_ORIGIN", "SITE_ORIGIN", "COOLIFY_URL"):
        if value := _env(name):
            return value.rstrip("/")
    if fqdn := _env("COOLIFY_FQDN"):
        return f"https://{fqdn.rstrip('/')}"
    return default.rstrip("/")


class SiteSettings(BaseModel):
    """Public site identity."""
    name: str = "seommerce.shop"
    origin: str = ""
    og_default_image: str = "/og-default.png"


class WebhookSettings(BaseModel):
    """External CMS webhook settings."""
    url: str = "https://myn8n.seommerce.shop/webhook/seommerce_blog"
    timeout_seconds: float = 30.0


class TranslateSettings(BaseModel):
    """LibreTranslate-compatible translation endpoint."""
    url: str = "https://libretranslate.com/translate"
    api_key: str = ""
    source_lang: str = "pt"
    cache_ttl_seconds: int = 60 * 60 * 12
    timeout_seconds: float = 20.0


class SSGSettings(BaseModel):
    """Static site generation settings."""
    dist_dir: str = str(DIST_DIR)
    generated_dir: str = DEFAULT_GENERATED_DIR
    remote_fetch_timeout_seconds: float = 15.0
    media_timeout_seconds: float = 20.0


class Settings(BaseModel):
    """Top-level application settings."""
    site: SiteSettings = Field(default_factory=SiteSettings)
    webhook: WebhookSettings = Field(default_factory=WebhookSettings)
    translate: TranslateSettings = Field(default_factory=TranslateSettings)
    ssg: SSGSettings = Field(default_factory=SSGSettings)

    @classmethod
    def load(cls, settings_path: Path | None = None) -> Settings:
        """Load settings from config/settings.yaml, falling back to defaults.

        Environment variables override values from the file.
        """
        settings_path = settings_path or CONFIG_DIR / "settings.yaml"
        data: dict = {}
        if settings_path.exists():
            with open(settings_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        instance = cls(**data)
        instance.apply_env()
        return instance

    def apply_env(self) -> None:
        """Apply environment overrides on top of file settings."""
        self.site.origin = resolve_origin_from_env(self.site.origin)
        if value := _env("GENERATED_DIR"):
            self.ssg.generated_dir = value
        if value := _env("WEBHOOK_URL"):
            self.webhook.url = value
        if value := _env("TRANSLATE_URL"):
            self.translate.url = value
        if value := _env("TRANSLATE_KEY"):
            self.translate.api_key = value

    @property
    def publish_origin(self) -> str:
        """Origin used in published post pages and the generated sitemap."""
        return self.site.origin or DEFAULT_PUBLISH_ORIGIN

    @property
    def generated_path(self) -> Path:
        return Path(self.ssg.generated_dir)

    @property
    def dist_path(self) -> Path:
        return Path(self.ssg.dist_dir)


# Singleton settings instance
settings = Settings.load()

"""Consistency report between generated HTML pages and sitemap.xml."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from src.common.logging import setup_logging

from .sitemap import collect_html_files, parse_sitemap_urls, route_path_for_file

logger = setup_logging(module_name="ssg.status")


class GeneratedPage(BaseModel):
    """A generated HTML file and its public URL."""
    path: str
    url: str
    updated_at: str = Field(alias="updatedAt")

    model_config = {"populate_by_name": True}


class GeneratedStatus(BaseModel):
    """Generated pages, sitemap entries and the differences between them."""
    generated_pages: list[GeneratedPage] = Field(default_factory=list, alias="generatedPages")
    sitemap_entries: list[str] = Field(default_factory=list, alias="sitemapEntries")
    missing_in_sitemap: list[str] = Field(default_factory=list, alias="missingInSitemap")
    missing_in_generated: list[str] = Field(default_factory=list, alias="missingInGenerated")

    model_config = {"populate_by_name": True}

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


def generated_status(root_dir: Path, origin: str) -> GeneratedStatus:
    """Compare the generated tree under root_dir with its sitemap.xml."""
    origin = origin.rstrip("/")
    pages = []
    for file_path in collect_html_files(root_dir):
        route = route_path_for_file(root_dir, file_path)
        mtime = datetime.fromtimestamp(file_path.stat().st_mtime, tz=timezone.utc)
        pages.append(
            GeneratedPage(
                path=route,
                url=f"{origin}{route}",
                updated_at=mtime.isoformat().replace("+00:00", "Z"),
            )
        )

    sitemap_entries: list[str] = []
    sitemap_path = root_dir / "sitemap.xml"
    if sitemap_path.exists():
        sitemap_entries = parse_sitemap_urls(sitemap_path.read_text(encoding="utf-8"))

    sitemap_paths = list(dict.fromkeys(_strip_origin(url, origin) for url in sitemap_entries))
    generated_paths = list(dict.fromkeys(page.path for page in pages))

    in_sitemap = set(sitemap_paths)
    in_generated = set(generated_paths)
    status = GeneratedStatus(
        generated_pages=pages,
        sitemap_entries=sitemap_entries,
        missing_in_sitemap=[p for p in generated_paths if p not in in_sitemap],
        missing_in_generated=[p for p in sitemap_paths if p not in in_generated],
    )
    if status.missing_in_sitemap or status.missing_in_generated:
        logger.warning(
            "Sitemap drift: %d pages missing in sitemap, %d sitemap urls without a page",
            len(status.missing_in_sitemap),
            len(status.missing_in_generated),
        )
    return status


def _strip_origin(url: str, origin: str) -> str:
    if origin and url.startswith(origin):
        url = url[len(origin):]
    return url.rstrip("/") or "/"

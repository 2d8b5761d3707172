"""Static site generation: posts to pre-rendered localized routes.

Orchestrates the complete flow:
generated posts (or remote API) → normalize → posts.json → render routes →
index.html per route → sitemap.xml + robots.txt

Usage:
    generator = StaticSiteGenerator(dist_dir=Path("dist/spa"))
    report = generator.run()
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from src.common.config import Settings, settings as default_settings
from src.common.logging import setup_logging
from src.i18n import DEFAULT_LANG, LANGUAGES, build_path
from src.posts.models import BlogPost

from .loader import load_posts_by_lang
from .renderer import PageRenderer
from .routes import PostsByLang, Route, build_all_routes
from .sitemap import build_sitemap

logger = setup_logging(module_name="ssg.generator")

# Heavy fields left out of the posts embedded in every page
PRUNED_FIELDS = {"content", "content_html", "meta_tags", "images"}

_HTML_TAG_RE = re.compile(r"<html[^>]*>")

HEAD_PLACEHOLDER = "<!--app-head-->"
BODY_PLACEHOLDER = "<!--app-html-->"
DATA_PLACEHOLDER = "<!--app-data-->"


@dataclass
class BuildReport:
    """Result of a static build."""
    dist_dir: str
    routes: list[str] = field(default_factory=list)
    files: list[str] = field(default_factory=list)
    post_counts: dict[str, int] = field(default_factory=dict)
    sitemap_path: str = ""

    @property
    def route_count(self) -> int:
        return len(self.routes)


def serialize_json(value: Any) -> str:
    """JSON safe to embed inside a <script> element."""
    return json.dumps(value, ensure_ascii=False).replace("<", "\\u003c")


def prune_post(post: BlogPost) -> BlogPost:
    return post.model_copy(update={name: None for name in PRUNED_FIELDS})


def prune_posts(posts_by_lang: PostsByLang) -> PostsByLang:
    return {lang: [prune_post(p) for p in posts_by_lang.get(lang, [])] for lang in LANGUAGES}


def posts_to_dicts(posts_by_lang: PostsByLang) -> dict[str, list[dict[str, Any]]]:
    return {lang: [p.to_dict() for p in posts_by_lang.get(lang, [])] for lang in LANGUAGES}


def write_posts_json(dist_dir: Path, posts_by_lang: PostsByLang) -> list[Path]:
    """Write dist/posts.json (all languages) and dist/{lang}/posts.json."""
    dist_dir.mkdir(parents=True, exist_ok=True)
    serialized = posts_to_dicts(posts_by_lang)

    written = [dist_dir / "posts.json"]
    written[0].write_text(json.dumps(serialized, ensure_ascii=False, indent=2), encoding="utf-8")

    for lang in LANGUAGES:
        lang_path = dist_dir / lang / "posts.json"
        lang_path.parent.mkdir(parents=True, exist_ok=True)
        lang_path.write_text(
            json.dumps({"posts": serialized[lang]}, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
        written.append(lang_path)
    return written


def inject_head(template: str, head: str, html_attrs: str) -> str:
    html_tag = f"<html {html_attrs}>" if html_attrs else "<html>"
    replaced = _HTML_TAG_RE.sub(lambda _: html_tag, template, count=1)
    return replaced.replace(HEAD_PLACEHOLDER, head, 1)


def inject_body(template: str, app_html: str, data_script: str) -> str:
    return template.replace(BODY_PLACEHOLDER, app_html, 1).replace(DATA_PLACEHOLDER, data_script, 1)


def output_path_for(dist_dir: Path, route_path: str) -> Path:
    trimmed = route_path.lstrip("/")
    return dist_dir / trimmed / "index.html" if trimmed else dist_dir / "index.html"


class StaticSiteGenerator:
    """Pre-renders every localized route of the site.

    Steps:
    1. Load posts per language (generated dir, legacy index, remote API)
    2. Write full posts JSON for the client
    3. Render static, topic and post routes into the HTML shell
    4. Render the default-language home as the root index
    5. Write sitemap.xml and robots.txt
    """

    def __init__(
        self,
        dist_dir: Path | None = None,
        generated_dir: Path | None = None,
        origin: Optional[str] = None,
        template_path: Path | None = None,
        settings: Settings | None = None,
        renderer: PageRenderer | None = None,
    ):
        self.settings = settings or default_settings
        self.dist_dir = dist_dir or self.settings.dist_path
        self.generated_dir = generated_dir or self.settings.generated_path
        self.origin = (self.settings.site.origin if origin is None else origin).rstrip("/")
        self.template_path = template_path or self.dist_dir / "index.html"
        self.renderer = renderer or PageRenderer(
            origin=self.origin,
            site_name=self.settings.site.name,
            og_default_image=self.settings.site.og_default_image,
        )

    def load_template(self) -> str:
        """The built SPA index.html, or the bundled shell when absent."""
        if self.template_path.exists():
            return self.template_path.read_text(encoding="utf-8")
        logger.warning("Template %s not found, using bundled shell", self.template_path)
        return self.renderer.load_shell()

    def render_route(
        self,
        template: str,
        route: Route,
        posts_by_lang: PostsByLang,
        data_script: str,
    ) -> str:
        head, html_attrs = self.renderer.render_head(route)
        app_html = self.renderer.render_body(route, posts_by_lang)
        with_head = inject_head(template, head, html_attrs)
        return inject_body(with_head, app_html, data_script)

    def write_route(self, html: str, output_path: Path) -> Path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(html, encoding="utf-8")
        return output_path

    def write_robots(self) -> Path:
        lines = ["User-agent: *", "Allow: /"]
        if self.origin:
            lines.append(f"Sitemap: {self.origin}/sitemap.xml")
        path = self.dist_dir / "robots.txt"
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    def run(self, posts_by_lang: PostsByLang | None = None) -> BuildReport:
        """Execute the full static build.

        Args:
            posts_by_lang: Pre-loaded posts; loaded from the generated dir
                           (or remote API) when omitted.

        Returns:
            BuildReport listing rendered routes and written files
        """
        # The template must be read before index.html is overwritten below
        template = self.load_template()

        if posts_by_lang is None:
            logger.info("Step 1: Loading posts from %s...", self.generated_dir)
            posts_by_lang = load_posts_by_lang(self.generated_dir, self.origin)
        full_posts = {lang: posts_by_lang.get(lang, []) for lang in LANGUAGES}

        report = BuildReport(
            dist_dir=str(self.dist_dir),
            post_counts={lang: len(full_posts[lang]) for lang in LANGUAGES},
        )

        logger.info("Step 2: Writing posts JSON...")
        report.files.extend(str(p) for p in write_posts_json(self.dist_dir, full_posts))

        initial_posts = posts_to_dicts(prune_posts(full_posts))
        data_script = f"<script>window.__INITIAL_POSTS__={serialize_json(initial_posts)};</script>"

        routes = build_all_routes(full_posts)
        logger.info("Step 3: Rendering %d routes...", len(routes))
        for route in routes:
            html = self.render_route(template, route, full_posts, data_script)
            path = self.write_route(html, output_path_for(self.dist_dir, route.path))
            report.routes.append(route.path)
            report.files.append(str(path))

        logger.info("Step 4: Rendering root index...")
        root_route = Route(path=build_path(DEFAULT_LANG, "home"), lang=DEFAULT_LANG, page="home")
        html = self.render_route(template, root_route, full_posts, data_script)
        report.files.append(str(self.write_route(html, self.dist_dir / "index.html")))

        logger.info("Step 5: Writing sitemap and robots.txt...")
        sitemap_path = build_sitemap(self.origin, full_posts).write(self.dist_dir / "sitemap.xml")
        report.sitemap_path = str(sitemap_path)
        report.files.extend([str(sitemap_path), str(self.write_robots())])

        logger.info(
            "SSG complete: %d routes, posts pt=%d en=%d es=%d",
            report.route_count,
            report.post_counts["pt"],
            report.post_counts["en"],
            report.post_counts["es"],
        )
        return report

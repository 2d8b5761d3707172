# Static site generation: routes, rendering, sitemap
from .generator import BuildReport, StaticSiteGenerator, prune_post, serialize_json, write_posts_json
from .loader import load_posts_by_lang
from .renderer import PageRenderer
from .routes import Route, build_all_routes, build_post_routes, build_static_routes, build_topic_routes
from .sitemap import (
    SitemapBuilder,
    build_directory_sitemap,
    build_sitemap,
    format_sitemap_date,
    parse_sitemap_urls,
)
from .status import GeneratedStatus, generated_status

__all__ = [
    "BuildReport",
    "GeneratedStatus",
    "PageRenderer",
    "Route",
    "SitemapBuilder",
    "StaticSiteGenerator",
    "build_all_routes",
    "build_directory_sitemap",
    "build_post_routes",
    "build_sitemap",
    "build_static_routes",
    "build_topic_routes",
    "format_sitemap_date",
    "generated_status",
    "load_posts_by_lang",
    "parse_sitemap_urls",
    "prune_post",
    "serialize_json",
    "write_posts_json",
]

"""CLI entry point for static site generation.

Usage:
    python -m src.ssg.main
    python -m src.ssg.main --dist dist/spa --generated-dir data/generated --origin https://seommerce.shop
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from src.common.config import settings
from src.common.logging import setup_logging

from .generator import StaticSiteGenerator

logger = setup_logging(module_name="ssg.main")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Pre-render localized routes and the sitemap")
    parser.add_argument(
        "--dist",
        type=Path,
        default=settings.dist_path,
        help=f"Build output directory (default: {settings.dist_path})",
    )
    parser.add_argument(
        "--generated-dir",
        type=Path,
        default=settings.generated_path,
        help="Directory holding published posts.json indexes",
    )
    parser.add_argument(
        "--origin",
        default=settings.site.origin,
        help="Public site origin used in canonical URLs and the sitemap",
    )
    parser.add_argument(
        "--template",
        type=Path,
        help="HTML shell with <!--app-head-->/<!--app-html-->/<!--app-data--> (default: <dist>/index.html)",
    )

    args = parser.parse_args(argv)

    generator = StaticSiteGenerator(
        dist_dir=args.dist,
        generated_dir=args.generated_dir,
        origin=args.origin,
        template_path=args.template,
    )
    try:
        report = generator.run()
    except OSError as exc:
        logger.error("SSG failed: %s", exc)
        return 1

    print(f"\nRendered {report.route_count} routes into {report.dist_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

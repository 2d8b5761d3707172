"""CLI entry point for the published post store.

Usage:
    python -m src.publisher.main publish post.json
    python -m src.publisher.main delete request.json
    python -m src.publisher.main delete-all
    python -m src.publisher.main rebuild-sitemap
    python -m src.publisher.main status
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from src.common.config import settings
from src.common.errors import PostNotFoundError, PublishError
from src.common.logging import setup_logging

from .pipeline import PublishPipeline

logger = setup_logging(module_name="publisher.main")


def _read_json(path: Path) -> Any:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def _print(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Publish and delete generated blog posts")
    parser.add_argument(
        "--root",
        type=Path,
        default=settings.generated_path,
        help=f"Generated posts directory (default: {settings.generated_path})",
    )
    parser.add_argument(
        "--origin",
        default=settings.publish_origin,
        help="Public site origin used in canonical URLs and the sitemap",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    publish = sub.add_parser("publish", help="Publish posts from a JSON payload file")
    publish.add_argument("file", type=Path)
    delete = sub.add_parser("delete", help="Delete posts matching a JSON request file")
    delete.add_argument("file", type=Path)
    sub.add_parser("delete-all", help="Remove every generated post")
    sub.add_parser("rebuild-sitemap", help="Rebuild sitemap.xml from generated pages")
    sub.add_parser("status", help="Compare generated pages with sitemap.xml")

    args = parser.parse_args(argv)
    pipeline = PublishPipeline(root_dir=args.root, origin=args.origin)

    try:
        if args.command == "publish":
            _print(pipeline.publish(_read_json(args.file)).to_dict())
        elif args.command == "delete":
            _print(pipeline.delete(_read_json(args.file)).to_dict())
        elif args.command == "delete-all":
            _print(pipeline.delete_all().to_dict())
        elif args.command == "rebuild-sitemap":
            pipeline.rebuild_sitemap()
            _print({"ok": True})
        else:
            _print(pipeline.status().to_dict())
    except PostNotFoundError as exc:
        _print({"error": str(exc)})
        return 2
    except (PublishError, OSError, json.JSONDecodeError) as exc:
        logger.error("%s failed: %s", args.command, exc)
        _print({"error": str(exc)})
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

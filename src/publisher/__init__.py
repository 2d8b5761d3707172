# Published post store: page rendering, media, indexes, publish/delete
from .identity import build_publish_slug_map, is_safe_slug, normalize_slug, resolve_post_identity
from .media import MediaLocalizer
from .models import DeleteResult, PostPageMeta, PublishResult, PublishedPost, RenderedPost
from .pipeline import PublishPipeline
from .renderer import PostPageRenderer, render_post_page
from .store import PostIndexStore, merge_post_lists

__all__ = [
    "DeleteResult",
    "MediaLocalizer",
    "PostIndexStore",
    "PostPageMeta",
    "PostPageRenderer",
    "PublishPipeline",
    "PublishResult",
    "PublishedPost",
    "RenderedPost",
    "build_publish_slug_map",
    "merge_post_lists",
    "is_safe_slug",
    "normalize_slug",
    "render_post_page",
    "resolve_post_identity",
]

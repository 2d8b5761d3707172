# Posts: canonical post model, payload normalization, localization
from .images import (
    extract_drive_id,
    normalize_image_list,
    normalize_image_thumbnail_url,
    normalize_image_url,
)
from .meta_tags import parse_meta_tags
from .models import BlogPost, MetaTag
from .normalizer import (
    extract_post_array,
    filter_posts_by_lang,
    normalize_post,
    normalize_posts,
    resolve_localized_record,
)
from .translate import Translator, translate_posts
from .webhook import WebhookClient

__all__ = [
    "BlogPost",
    "MetaTag",
    "Translator",
    "WebhookClient",
    "extract_drive_id",
    "extract_post_array",
    "filter_posts_by_lang",
    "normalize_image_list",
    "normalize_image_thumbnail_url",
    "normalize_image_url",
    "normalize_post",
    "normalize_posts",
    "parse_meta_tags",
    "resolve_localized_record",
    "translate_posts",
]

"""Tests for post normalization and localization resolution."""

import pytest

from src.posts.models import BlogPost
from src.posts.normalizer import (
    build_slug_map,
    extract_post_array,
    filter_posts_by_lang,
    normalize_post,
    normalize_posts,
    resolve_localized_record,
)


class TestExtractPostArray:
    @pytest.mark.parametrize(
        "payload",
        [
            [{"title": "a"}],
            {"posts": [{"title": "a"}]},
            {"data": [{"title": "a"}]},
            {"data": {"posts": [{"title": "a"}]}},
        ],
    )
    def test_envelopes(self, payload):
        assert extract_post_array(payload) == [{"title": "a"}]

    @pytest.mark.parametrize("payload", [None, "text", {"posts": "x"}, {"data": {"items": []}}])
    def test_unknown_shapes(self, payload):
        assert extract_post_array(payload) == []


class TestLocalization:
    def test_suffixed_keys_override_base(self):
        record = {"title": "Olá", "title_en": "Hello", "excerptEN": "Intro"}
        resolved = resolve_localized_record(record, "en")
        assert resolved["title"] == "Hello"
        assert resolved["excerpt"] == "Intro"

    def test_nested_translations_win(self):
        record = {
            "title": "Olá",
            "title-es": "Hola (sufijo)",
            "translations": {"es": {"title": "Hola"}},
        }
        assert resolve_localized_record(record, "es")["title"] == "Hola"

    def test_empty_overrides_are_ignored(self):
        record = {"title": "Olá", "title_en": "  ", "i18n": {"en": {"title": ""}}}
        assert resolve_localized_record(record, "en")["title"] == "Olá"

    def test_other_languages_untouched(self):
        record = {"title": "Olá", "title_es": "Hola"}
        assert resolve_localized_record(record, "en")["title"] == "Olá"

    def test_slug_map(self):
        record = {"slugs": {"en": "hello", "fr": "bonjour"}, "slug_es": "hola", "slugEn": "ignored"}
        assert build_slug_map(record) == {"en": "hello", "es": "hola"}


class TestFilterPostsByLang:
    def test_keeps_matching_and_untagged(self):
        records = [{"lang": "EN "}, {"lang": "pt"}, {}, "junk"]
        assert filter_posts_by_lang(records, "en") == [{"lang": "EN "}, {}]


class TestNormalizePost:
    def test_default_language_fields(self, sample_record):
        post = normalize_post(sample_record, 0, "pt")

        assert post.id == "abc-123"
        assert post.title == "Como a IA muda o varejo"
        assert post.excerpt == "Um panorama da IA no varejo."
        assert post.meta_description == "Um panorama da IA no varejo."
        assert post.category == "IA"
        assert post.image == "https://lh3.googleusercontent.com/d/FILE123"
        assert post.image_thumb == "https://drive.google.com/thumbnail?id=FILE123&sz=w1200"
        assert post.tags == ["ia", "varejo", "tecnologia"]
        assert post.read_time == "7 min"
        assert post.featured is True
        assert post.author == "Equipe Curioso"
        assert post.date == "2024-05-10T12:00:00Z"
        assert post.slug == "como-a-ia-muda-o-varejo"
        assert post.lang == "pt"

    def test_english_resolution(self, sample_record):
        post = normalize_post(sample_record, 0, "en")
        assert post.title == "How AI is changing retail"
        assert post.slug == "how-ai-is-changing-retail"
        assert post.id == "abc-123"
        assert post.lang == "en"

    def test_spanish_resolution(self, sample_record):
        post = normalize_post(sample_record, 0, "es")
        assert post.title == "Cómo la IA cambia el comercio"
        assert post.excerpt == "Un panorama de la IA en el comercio."
        assert post.slug == "como-la-ia-cambia-el-comercio"
        assert post.slugs == {
            "en": "how-ai-is-changing-retail",
            "es": "como-la-ia-cambia-el-comercio",
        }

    def test_missing_title_is_skipped(self):
        assert normalize_post({"slug": "x", "title": "   "}, 0) is None

    def test_id_fallbacks(self):
        assert normalize_post({"title": "A", "slug": "a"}, 3).id == "a"
        assert normalize_post({"title": "A"}, 3).id == "post-3"
        assert normalize_post({"title": "A", "id": 17}, 0).id == "17"

    def test_language_from_record_without_request_lang(self):
        assert normalize_post({"title": "A", "lang": " EN"}, 0).lang == "en"
        assert normalize_post({"title": "A", "lang": "fr"}, 0).lang is None

    def test_gallery_provides_cover(self):
        post = normalize_post({"title": "A", "imagens": ["https://x/1.jpg", "https://x/2.jpg"]}, 0)
        assert post.image == "https://x/1.jpg"
        assert post.image_thumb == "https://x/1.jpg"
        assert post.images == ["https://x/1.jpg", "https://x/2.jpg"]

    def test_meta_tags_and_titles(self):
        post = normalize_post(
            {
                "title": "A",
                "seoTitle": "A | SEO",
                "metaDescription": "Desc",
                "meta": '<meta name="robots" content="noindex">',
            },
            0,
        )
        assert post.meta_title == "A | SEO"
        assert post.meta_description == "Desc"
        assert [tag.to_dict() for tag in post.meta_tags] == [{"name": "robots", "content": "noindex"}]


class TestNormalizePosts:
    def test_skips_untitled_and_keeps_order(self, sample_payload):
        posts = normalize_posts(sample_payload, "pt")
        assert [p.id for p in posts] == ["abc-123", "42"]
        assert all(isinstance(p, BlogPost) for p in posts)

    def test_non_dict_items_are_ignored(self):
        assert [p.title for p in normalize_posts(["x", None, {"titulo": "Y"}])] == ["Y"]

    def test_garbage_payload(self):
        assert normalize_posts("not json") == []

    def test_serialized_shape_is_camel_case(self, sample_record):
        data = normalize_posts([sample_record], "pt")[0].to_dict()
        assert data["readTime"] == "7 min"
        assert data["imageThumb"].startswith("https://drive.google.com/thumbnail")
        assert data["metaDescription"] == "Um panorama da IA no varejo."
        assert "contentHtml" not in data
        assert "meta_tags" not in data

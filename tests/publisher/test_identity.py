"""Tests for publish payload identity resolution."""

import pytest

from src.publisher.identity import (
    build_publish_slug_map,
    collect_slugs,
    is_safe_slug,
    normalize_slug,
    resolve_post_identity,
    resolve_slug_for_lang,
)


class TestNormalizeSlug:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("  Guia de SEO  ", "guia-de-seo"),
            ("/meu-post/", "meu-post"),
            ("A\tB\n C", "a-b-c"),
            ("", ""),
        ],
    )
    def test_normalize(self, value, expected):
        assert normalize_slug(value) == expected

    @pytest.mark.parametrize(
        "slug,expected",
        [
            ("guia", True),
            ("2024/guia", True),
            ("", False),
            ("..", False),
            (".", False),
            ("a/../../x", False),
            ("a\\..\\x", False),
        ],
    )
    def test_is_safe_slug(self, slug, expected):
        assert is_safe_slug(slug) is expected


class TestResolvePostIdentity:
    def test_language_and_slug(self):
        assert resolve_post_identity({"lang": "en", "slug": "My Post"}) == ("en", "my-post")

    def test_unknown_language_falls_back(self):
        assert resolve_post_identity({"lang": "fr", "slug": "x"}) == ("pt", "x")
        assert resolve_post_identity({}) == ("pt", "")


class TestSlugMap:
    def test_from_map_and_suffixed_keys(self, publish_payload):
        slug_map = build_publish_slug_map(publish_payload, "pt", "guia-de-seo-local")
        assert slug_map == {
            "pt": "guia-de-seo-local",
            "en": "local-seo-guide",
            "es": "guia-de-seo-local",
        }

    def test_map_wins_over_suffixed_key(self):
        payload = {"slugs": {"es": "Desde Mapa"}, "slugEs": "desde-clave"}
        assert resolve_slug_for_lang(payload, "es") == "desde-mapa"

    def test_uppercase_suffix(self):
        assert resolve_slug_for_lang({"slugEN": "Upper"}, "en") == "upper"

    def test_missing(self):
        assert resolve_slug_for_lang({"slugs": {"en": "  "}}, "en") is None
        assert build_publish_slug_map({}, "es", "hola") == {"es": "hola"}

    def test_collect_slugs(self):
        assert collect_slugs({"slugs": {"pt": " A b ", "en": 3, "es": ""}}) == ["a-b"]
        assert collect_slugs({"slugs": "x"}) == []

"""Tests for post meta tag parsing."""

from src.posts.meta_tags import parse_meta_tags, parse_meta_tags_from_html
from src.posts.models import MetaTag


class TestParseMetaTagsFromHtml:
    def test_extracts_named_and_property_tags(self):
        html = (
            '<meta name="robots" content="index,follow">'
            '<meta property="og:type" content="article">'
            '<meta content="orphan">'
            '<meta name="empty" content="">'
        )
        tags = parse_meta_tags_from_html(html)
        assert tags == [
            MetaTag(name="robots", content="index,follow"),
            MetaTag(property="og:type", content="article"),
        ]

    def test_no_meta_tags(self):
        assert parse_meta_tags_from_html("<p>texto</p>") is None


class TestParseMetaTags:
    def test_json_string(self):
        tags = parse_meta_tags('[{"name": "author", "content": "Equipe"}]')
        assert [t.to_dict() for t in tags] == [{"name": "author", "content": "Equipe"}]

    def test_list_of_objects_and_html(self):
        tags = parse_meta_tags(
            [
                {"property": "og:locale", "content": "pt_BR"},
                {"name": "no-content"},
                '<meta name="robots" content="noindex">',
            ]
        )
        assert [t.to_dict() for t in tags] == [
            {"property": "og:locale", "content": "pt_BR"},
            {"name": "robots", "content": "noindex"},
        ]

    def test_mapping(self):
        tags = parse_meta_tags({"robots": "index", "empty": "  "})
        assert [t.to_dict() for t in tags] == [{"name": "robots", "content": "index"}]

    def test_unsupported_values(self):
        assert parse_meta_tags(None) is None
        assert parse_meta_tags(12) is None
        assert parse_meta_tags([{"name": "x"}]) is None
        assert parse_meta_tags("plain text") is None

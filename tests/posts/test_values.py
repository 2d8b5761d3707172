"""Tests for loose CMS value coercion."""

import pytest

from src.posts.values import (
    boolean_value,
    format_read_time,
    pick_string,
    pick_string_array,
    string_array_value,
    string_value,
)


class TestStringValue:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("  hello ", "hello"),
            ("   ", None),
            (7, "7"),
            (7.0, "7"),
            (2.5, "2.5"),
            (True, None),
            (None, None),
            ({"a": 1}, None),
        ],
    )
    def test_coercion(self, value, expected):
        assert string_value(value) == expected


class TestStringArrayValue:
    def test_delimited_string(self):
        assert string_array_value("ia, varejo; tecnologia") == ["ia", "varejo", "tecnologia"]

    def test_json_encoded_list(self):
        assert string_array_value('["a", "b", "a"]') == ["a", "b"]

    def test_list_of_objects(self):
        value = [{"url": "https://x/1.jpg"}, {"src": "https://x/2.jpg"}, "https://x/3.jpg", {}]
        assert string_array_value(value) == ["https://x/1.jpg", "https://x/2.jpg", "https://x/3.jpg"]

    def test_numbers_in_list(self):
        assert string_array_value([1, 2.0, " "]) == ["1", "2"]

    def test_empty_values(self):
        assert string_array_value([]) is None
        assert string_array_value("") is None
        assert string_array_value([None, ""]) is None
        assert string_array_value(12) is None


class TestBooleanValue:
    @pytest.mark.parametrize(
        "value,expected",
        [(True, True), (False, False), (1, True), (0, False), ("true", True), ("false", False), ("yes", None), (2, None)],
    )
    def test_coercion(self, value, expected):
        assert boolean_value(value) is expected


class TestPick:
    def test_first_non_empty_wins(self):
        record = {"title": "  ", "titulo": "Olá", "name": "ignored"}
        assert pick_string(record, ["title", "titulo", "name"]) == "Olá"

    def test_missing_keys(self):
        assert pick_string({}, ["title"]) is None

    def test_pick_string_array(self):
        record = {"tags": [], "keywords": "a,b"}
        assert pick_string_array(record, ["tags", "keywords"]) == ["a", "b"]


class TestFormatReadTime:
    def test_bare_number_gets_unit(self):
        assert format_read_time("5") == "5 min"
        assert format_read_time("4,5") == "4,5 min"

    def test_text_is_kept(self):
        assert format_read_time("10 minutos") == "10 minutos"

    def test_empty(self):
        assert format_read_time(None) is None
        assert format_read_time("  ") is None
